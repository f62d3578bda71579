"""
sysprobe.report.report

Snapshot of every fact a prober can gather, with dictionary, YAML, and
human-readable text renderings.

The text rendering uses a Jinja2 template and prints one fact per line in the
form ``OS Name: Linux``.
"""

from dataclasses import dataclass
from typing import Optional

import yaml

from jinja2 import Environment

from sysprobe.probe.base import Prober
from sysprobe.probe.factory import get_prober
from sysprobe.probe.types import (
    ArchName,
    CompilerInfo,
    LibcInfo,
    OSVersionInfo,
    OsName,
)

REPORT_TEMPLATE = """\
OS Name: {{ os }}
OS Version: {{ os_version.version }} ({{ os_version.name }})
Architecture: {{ architecture }}
{% for compiler in compilers %}
Compiler: {{ compiler.name }} {{ compiler.major }}.{{ compiler.minor }}
{% else %}
Compiler: none found
{% endfor %}
{% if libc %}
Libc: {{ libc.name }} {{ libc.major }}.{{ libc.minor }}
{% else %}
Libc: none found
{% endif %}
"""

_environment = Environment(autoescape=False, trim_blocks=True, lstrip_blocks=True)


@dataclass(frozen=True)
class SystemReport:
    """
    All host facts gathered in one pass.

    Attributes:
        os (OsName): Operating system family.
        os_version (OSVersionInfo): Operating system version.
        architecture (ArchName): CPU architecture.
        libc (Optional[LibcInfo]): C runtime, None when the system has none.
        compilers (tuple[CompilerInfo, ...]): Installed compilers.
    """

    os: OsName
    os_version: OSVersionInfo
    architecture: ArchName
    libc: Optional[LibcInfo]
    compilers: tuple[CompilerInfo, ...]

    def to_dict(self) -> dict[str, object]:
        """Return a dictionary of plain values suitable for JSON or YAML."""
        return {
            "os": str(self.os),
            "os_version": self.os_version.to_dict(),
            "architecture": str(self.architecture),
            "libc": self.libc.to_dict() if self.libc else None,
            "compilers": [compiler.to_dict() for compiler in self.compilers],
        }

    def to_yaml(self) -> str:
        """Return the report as a YAML document."""
        return yaml.safe_dump(self.to_dict(), sort_keys=False)

    def __str__(self) -> str:
        """Return a human-readable printable string."""
        template = _environment.from_string(REPORT_TEMPLATE)
        return template.render(
            os=self.os,
            os_version=self.os_version,
            architecture=self.architecture,
            compilers=self.compilers,
            libc=self.libc,
        ).rstrip("\n")


def collect_report(prober: Optional[Prober] = None) -> SystemReport:
    """
    Run every query once and gather the results.

    Args:
        prober (Optional[Prober]): Prober to query; the running platform's by default.

    Returns:
        SystemReport: The gathered facts.

    Raises:
        SysProbeError: The first error raised by any query, unchanged.
    """
    prober = prober or get_prober()
    return SystemReport(
        os=prober.os(),
        os_version=prober.os_version(),
        architecture=prober.architecture(),
        libc=prober.libc(),
        compilers=tuple(prober.compilers()),
    )
