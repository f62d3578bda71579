"""
sysprobe.probe.linux

Prober for Linux hosts. Every fact comes from a command-line utility:

- kernel version: ``uname -r``
- distribution name: ``lsb_release -d`` (optional)
- architecture: ``uname -m``
- C library: ``getconf GNU_LIBC_VERSION`` (glibc only; musl is not detected)
- compilers: ``gcc --version``, ``clang --version``
"""

from sysprobe.config import config
from sysprobe.exceptions.exceptions import ExternalToolUnavailableError
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


class LinuxProber(Prober):
    """Probe a Linux host through uname, lsb_release and getconf."""

    OS_NAME = OsName.LINUX
    DEFAULT_COMPILERS = (
        CompilerCandidate("gcc", CompilerName.GCC),
        CompilerCandidate("clang", CompilerName.CLANG),
    )

    def os_version(self) -> OSVersionInfo:
        version = self.run("os_version", "uname", "-r").stdout.strip()
        major, minor, micro = parse_version_triple(version, step="os_version")
        return OSVersionInfo(version, major, minor, micro, self._distribution_name())

    def _distribution_name(self) -> str:
        # lsb_release -d prints "Description:\t<name>"
        result = self.try_run("os_version", "lsb_release", "-d")
        if result is None or ":" not in result.stdout:
            self.logger.log_debug(
                f"Distribution name unavailable, using '{config.unknown_name}'"
            )
            return config.unknown_name
        return result.stdout.split(":", 1)[1].strip()

    def architecture(self) -> ArchName:
        result = self.try_run("architecture", "uname", "-m")
        if result is None:
            return ArchName.UNKNOWN
        return classify_architecture(result.stdout)

    def libc(self) -> LibcInfo:
        try:
            result = self.run("libc", "getconf", "GNU_LIBC_VERSION")
        except ExternalToolUnavailableError as exc:
            raise ExternalToolUnavailableError(
                message="Unable to fetch glibc version",
                step="libc",
                context=dict(exc.context),
            ) from exc
        major, minor = parse_version_pair(result.stdout, step="libc")
        return LibcInfo(LibcName.GLIBC, major, minor)
