"""
sysprobe

Query the host for its operating system, version, CPU architecture, C
runtime library and installed C compilers.

The module-level functions delegate to the prober for the running platform::

    import sysprobe

    print(sysprobe.get_os_version().name)
    print(sysprobe.collect_report())
"""

__package_name__ = "sysprobe"
__version__ = "0.1.0"
__package_home__ = "https://github.com/sysprobe/sysprobe"

# pylint: disable=wrong-import-position
from typing import Optional

from sysprobe.exceptions.exceptions import (
    ConfigurationError,
    EnvironmentMissingError,
    ExternalToolUnavailableError,
    ParseError,
    SysProbeError,
)
from sysprobe.probe.base import Prober
from sysprobe.probe.factory import get_prober
from sysprobe.probe.types import (
    ArchName,
    CompilerCandidate,
    CompilerInfo,
    CompilerName,
    LibcInfo,
    LibcName,
    OSVersionInfo,
    OsName,
)
from sysprobe.report.report import SystemReport, collect_report
from sysprobe.utilities.os.platform import get_platform_info


def get_os() -> OsName:
    """Return the running operating system, UNKNOWN if unsupported."""
    return get_platform_info().os_name


def get_os_version() -> OSVersionInfo:
    """Return the running operating system's version."""
    return get_prober().os_version()


def get_architecture() -> ArchName:
    """Return the CPU architecture."""
    return get_prober().architecture()


def get_libc() -> Optional[LibcInfo]:
    """Return the C runtime library, None when the system has none."""
    return get_prober().libc()


def get_compilers() -> list[CompilerInfo]:
    """Return the installed C compilers."""
    return get_prober().compilers()


__all__ = [
    "ArchName",
    "CompilerCandidate",
    "CompilerInfo",
    "CompilerName",
    "ConfigurationError",
    "EnvironmentMissingError",
    "ExternalToolUnavailableError",
    "LibcInfo",
    "LibcName",
    "OSVersionInfo",
    "OsName",
    "ParseError",
    "Prober",
    "SysProbeError",
    "SystemReport",
    "collect_report",
    "get_architecture",
    "get_compilers",
    "get_libc",
    "get_os",
    "get_os_version",
    "get_prober",
]
