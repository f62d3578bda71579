"""
sysprobe.probe.darwin

Prober for macOS hosts, backed by ``sw_vers``, ``uname -m`` and ``clang``.

macOS ships its C library inside libSystem and exposes no version command
for it, so ``libc()`` reports the bundled clang version as the BSD libc
version. The two are not the same thing.
"""

from sysprobe.config import config
from sysprobe.parser.version import (
    classify_architecture,
    parse_version_pair,
    parse_version_triple,
)
from sysprobe.probe.base import Prober
from sysprobe.probe.types import (
    ArchName,
    CompilerCandidate,
    CompilerName,
    LibcInfo,
    LibcName,
    OSVersionInfo,
    OsName,
)


class MacProber(Prober):
    """Probe a macOS host."""

    OS_NAME = OsName.MAC
    DEFAULT_COMPILERS = (CompilerCandidate("clang", CompilerName.CLANG),)

    def os_version(self) -> OSVersionInfo:
        version = self.run("os_version", "sw_vers", "-productVersion").stdout.strip()
        major, minor, micro = parse_version_triple(version, step="os_version")

        result = self.try_run("os_version", "sw_vers", "-productName")
        name = result.stdout.strip() if result is not None else ""
        if not name:
            self.logger.log_debug(
                f"Product name unavailable, using '{config.unknown_name}'"
            )
            name = config.unknown_name
        return OSVersionInfo(version, major, minor, micro, name)

    def architecture(self) -> ArchName:
        result = self.try_run("architecture", "uname", "-m")
        if result is None:
            return ArchName.UNKNOWN
        return classify_architecture(result.stdout)

    def libc(self) -> LibcInfo:
        result = self.run("libc", "clang", "--version")
        major, minor = parse_version_pair(result.output, step="libc")
        return LibcInfo(LibcName.BSD_LIBC, major, minor)
