"""
types.py

Enumerations and immutable records returned by the probers.

Every record is a frozen dataclass constructed fresh on each query; none of
them carry identity beyond their values. Enumerations render as their
human-readable label through ``str()``.
"""

from dataclasses import dataclass, fields
from enum import Enum


class _LabelledEnum(Enum):
    """Enum whose ``str()`` is its human-readable value."""

    def __str__(self) -> str:
        return self.value


class OsName(_LabelledEnum):
    """Operating system family a prober reports."""

    LINUX = "Linux"
    WINDOWS = "Windows"
    MAC = "Mac"
    UNKNOWN = "Unknown"


class ArchName(_LabelledEnum):
    """CPU architecture family."""

    I386 = "i386"
    AMD64 = "amd64"
    ARM = "arm"
    UNKNOWN = "Unknown"


class LibcName(_LabelledEnum):
    """C runtime library family."""

    GLIBC = "glibc"
    MSVCRT = "msvcrt"
    BSD_LIBC = "BSD libc"
    UNKNOWN = "Unknown"


class CompilerName(_LabelledEnum):
    """C compiler toolchain family."""

    GCC = "GCC"
    CLANG = "Clang"
    MSVC = "MSVC"
    MINGW = "MinGW"
    CYGWIN = "Cygwin"

    @classmethod
    def from_label(cls, label: str) -> "CompilerName":
        """
        Look up a compiler name case-insensitively by member name or label.

        Raises:
            ValueError: If ``label`` names no known toolchain.
        """
        wanted = label.strip().lower()
        for member in cls:
            if wanted in (member.name.lower(), member.value.lower()):
                return member
        raise ValueError(f"Unknown compiler name '{label}'")


def _plain(value):
    if isinstance(value, Enum):
        return str(value)
    return value


@dataclass(frozen=True)
class OSVersionInfo:
    """
    Operating system version.

    Attributes:
        version (str): Raw version string as reported by the system.
        major (int): Major version number.
        minor (int): Minor version number.
        micro (int): Micro (patch or build) version number.
        name (str): Free-form name, e.g. distribution or marketing name.
    """

    version: str
    major: int
    minor: int
    micro: int
    name: str

    def to_dict(self) -> dict[str, object]:
        """Return a dictionary representation of the record."""
        return {f.name: _plain(getattr(self, f.name)) for f in fields(self)}


@dataclass(frozen=True)
class LibcInfo:
    """C runtime library name and version."""

    name: LibcName
    major: int
    minor: int

    def to_dict(self) -> dict[str, object]:
        """Return a dictionary representation of the record."""
        return {f.name: _plain(getattr(self, f.name)) for f in fields(self)}


@dataclass(frozen=True)
class CompilerInfo:
    """Installed C compiler toolchain name and version."""

    name: CompilerName
    major: int
    minor: int

    def to_dict(self) -> dict[str, object]:
        """Return a dictionary representation of the record."""
        return {f.name: _plain(getattr(self, f.name)) for f in fields(self)}


@dataclass(frozen=True)
class CompilerCandidate:
    """
    A compiler executable tested for presence during discovery.

    Attributes:
        command (str): Executable name or absolute path.
        name (CompilerName): Toolchain reported when the executable is found.
        args (tuple[str, ...]): Arguments that make the executable print its version.
    """

    command: str
    name: CompilerName
    args: tuple[str, ...] = ("--version",)
