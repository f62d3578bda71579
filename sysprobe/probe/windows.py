"""
sysprobe.probe.windows

Prober for Windows hosts.

OS version:
    Read from ``HKLM\\SOFTWARE\\Microsoft\\Windows NT\\CurrentVersion``. If any
    registry step fails, fall back to ``kernel32.dll!GetVersion``. Unless the
    calling executable is manifested for it, GetVersion does not report
    anything newer than 6.2, so the registry is preferred.

C library:
    ``msvcrt.dll`` under ``%SYSTEMROOT%\\System32``, versioned through
    PowerShell's ``(Get-Item ...).VersionInfo``.

Compilers:
    ``gcc.exe`` and ``clang.exe`` from the search path plus every MSVC
    ``cl.exe`` registered under the Visual Studio SxS key. That key only lists
    installations prior to Visual Studio 2017.
"""

import ntpath
import re

from typing import Optional

from sysprobe.config import config
from sysprobe.exceptions.exceptions import (
    EnvironmentMissingError,
    ExternalToolUnavailableError,
    ParseError,
)
from sysprobe.parser.version import parse_version_pair
from sysprobe.probe.base import Prober
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

CURRENT_VERSION_KEY = r"SOFTWARE\Microsoft\Windows NT\CurrentVersion"
VISUAL_STUDIO_SXS_KEY = r"SOFTWARE\Wow6432Node\Microsoft\VisualStudio\SxS\VS7"

# Cannot differentiate between some client and server releases, hence the '/'.
VERSION_NAMES = {
    5: {
        0: "Windows 2000",
        1: "Windows XP",
        2: "Windows XP / Windows Server 2003",
    },
    6: {
        0: "Windows Vista / Windows Server 2008",
        1: "Windows 7 / Windows Server 2008 R2",
        2: "Windows 8 / Windows Server 2012",
        3: "Windows 8.1 / Windows Server 2012 R2",
    },
    10: {
        0: "Windows 10 / Windows Server",
    },
}


def windows_version_name(major: int, minor: int, unknown: str = "Unknown") -> str:
    """
    Look up the marketing name for a Windows ``major.minor`` version.

    Examples:
        >>> windows_version_name(6, 1)
        'Windows 7 / Windows Server 2008 R2'
        >>> windows_version_name(99, 99)
        'Unknown'
    """
    return VERSION_NAMES.get(major, {}).get(minor, unknown)


def decode_get_version(packed: int) -> tuple[int, int, int]:
    """
    Split the packed GetVersion result.

    Low byte is the major version, the next byte the minor version, and the
    high word the build number.
    """
    major = packed & 0xFF
    minor = (packed >> 8) & 0xFF
    micro = (packed >> 16) & 0xFFFF
    return major, minor, micro


class WindowsProber(Prober):
    """Probe a Windows host through the registry, kernel32 and PowerShell."""

    OS_NAME = OsName.WINDOWS
    DEFAULT_COMPILERS = (
        CompilerCandidate("gcc.exe", CompilerName.MINGW),
        CompilerCandidate("clang.exe", CompilerName.CLANG),
    )

    def os_version(self) -> OSVersionInfo:
        try:
            major, minor, micro = self._version_from_registry()
        except (ExternalToolUnavailableError, ParseError) as registry_error:
            self.logger.log_debug(
                f"Registry version lookup failed, falling back to GetVersion: {registry_error}"
            )
            try:
                major, minor, micro = decode_get_version(
                    self.access.kernel.get_version()
                )
            except ExternalToolUnavailableError as dll_error:
                raise ExternalToolUnavailableError(
                    message=(
                        f"From DLL error: {dll_error.message}. "
                        f"From Registry error: {registry_error.message}"
                    ),
                    step="os_version",
                    context={
                        "registry_error": str(registry_error),
                        "dll_error": str(dll_error),
                    },
                ) from dll_error

        return OSVersionInfo(
            f"{major}.{minor}.{micro}",
            major,
            minor,
            micro,
            windows_version_name(major, minor, config.unknown_name),
        )

    def _version_from_registry(self) -> tuple[int, int, int]:
        registry = self.access.registry
        major = registry.get_integer(CURRENT_VERSION_KEY, "CurrentMajorVersionNumber")
        minor = registry.get_integer(CURRENT_VERSION_KEY, "CurrentMinorVersionNumber")
        build = registry.get_string(CURRENT_VERSION_KEY, "CurrentBuild").strip()
        if not re.fullmatch(r"\d+", build, re.ASCII):
            raise ParseError(
                message="Cannot convert 'CurrentBuild' text to integer",
                step="os_version",
                text=build,
            )
        return major, minor, int(build)

    def architecture(self) -> ArchName:
        if self.access.pointer_size == 8:
            return ArchName.AMD64
        if self.access.pointer_size == 4:
            return ArchName.I386
        return ArchName.UNKNOWN

    def libc(self) -> Optional[LibcInfo]:
        # GetFileVersionInfo needs VerQueryValue struct walking; PowerShell
        # reads the same resource on Windows 7 and later.
        system_root = self.access.environ.get("SYSTEMROOT", "")
        if not system_root:
            raise EnvironmentMissingError(
                message="Unable to find system root; %SYSTEMROOT% undefined",
                step="libc",
                variable="SYSTEMROOT",
            )

        msvcrt = ntpath.join(system_root, "System32", "msvcrt.dll")
        if not self.access.path_exists(msvcrt):
            self.logger.log_debug(f"No C runtime at '{msvcrt}'")
            return None

        result = self.run(
            "libc", "powershell", "-command", f"(Get-Item {msvcrt}).VersionInfo"
        )
        major, minor = parse_version_pair(result.stdout, step="libc")
        return LibcInfo(LibcName.MSVCRT, major, minor)

    def compiler_candidates(self) -> list[CompilerCandidate]:
        return super().compiler_candidates() + self._msvc_candidates()

    def _msvc_candidates(self) -> list[CompilerCandidate]:
        registry = self.access.registry
        try:
            names = registry.value_names(VISUAL_STUDIO_SXS_KEY)
        except ExternalToolUnavailableError as exc:
            self.logger.log_debug(f"No Visual Studio installations registered: {exc}")
            return []

        candidates = []
        for name in names:
            try:
                float(name)
            except ValueError:
                continue
            try:
                install_dir = registry.get_string(VISUAL_STUDIO_SXS_KEY, name)
            except ExternalToolUnavailableError as exc:
                self.logger.log_debug(f"Skipping Visual Studio {name}: {exc}")
                continue
            cl = ntpath.join(install_dir, "VC", "bin", "cl.exe")
            if self.access.path_exists(cl):
                # cl.exe prints its banner and exits without arguments.
                candidates.append(CompilerCandidate(cl, CompilerName.MSVC, ()))
        return candidates

    def probe_compiler(self, candidate: CompilerCandidate) -> Optional[CompilerInfo]:
        info = super().probe_compiler(candidate)
        if info is None or info.name is not CompilerName.MINGW:
            return info

        # gcc.exe is MinGW unless it targets cygwin.
        target = self.try_run("compilers", candidate.command, "-dumpmachine")
        if target is not None and "cygwin" in target.stdout.lower():
            return CompilerInfo(CompilerName.CYGWIN, info.major, info.minor)
        return info
