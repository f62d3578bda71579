"""
Platform Information Utilities

This module provides tools to identify the interpreter's target platform
without spawning any process. The prober factory uses it to pick the single
prober implementation for the running platform.

Classes:
- PlatformInfo:
    Encapsulates the target platform string, pointer width, and OS convenience flags.
    Provides:
      - `os_name` property mapping the platform to an OsName
      - `to_dict()` method for dictionary access
      - `__str__()` for readable printing

Functions:
- get_platform_info() -> PlatformInfo:
    Returns a PlatformInfo object for the running interpreter.

- get_user_id() -> str:
    Returns the name of the currently active system user.
"""

from dataclasses import dataclass, fields
import getpass
import struct
import sys

from sysprobe.probe.types import OsName


@dataclass(frozen=True)
class PlatformInfo:
    """
    Encapsulates the target platform of the running interpreter in an immutable object.

    Provides both a human-readable string and dictionary access,
    including computed properties for common OS checks.
    """

    system: str
    pointer_size: int

    @property
    def is_mac(self) -> bool:
        """True if the target is macOS (darwin)."""
        return self.system == "darwin"

    @property
    def is_linux(self) -> bool:
        """True if the target is Linux."""
        return self.system.startswith("linux")

    @property
    def is_windows(self) -> bool:
        """True if the target is Windows (win32, including 64-bit builds)."""
        return self.system == "win32"

    @property
    def os_name(self) -> OsName:
        """OsName for the target, UNKNOWN for unsupported platforms."""
        if self.is_linux:
            return OsName.LINUX
        if self.is_windows:
            return OsName.WINDOWS
        if self.is_mac:
            return OsName.MAC
        return OsName.UNKNOWN

    def to_dict(self) -> dict[str, object]:
        """
        Return a dictionary representation including fields and computed properties.
        """
        result = {f.name: getattr(self, f.name) for f in fields(self)}
        result["is_mac"] = self.is_mac
        result["is_linux"] = self.is_linux
        result["is_windows"] = self.is_windows
        return result

    def __str__(self) -> str:
        """Return a human-readable printable string."""
        return (
            f"System       : {self.system}\n"
            f"Pointer size : {self.pointer_size}\n"
            f"Is Mac       : {self.is_mac}\n"
            f"Is Linux     : {self.is_linux}\n"
            f"Is Windows   : {self.is_windows}"
        )


def get_platform_info() -> PlatformInfo:
    """
    Retrieve target platform information as a PlatformInfo object.

    Returns:
        PlatformInfo: Contains the ``sys.platform`` string, native pointer width
                      in bytes, and OS flags.
    """
    return PlatformInfo(system=sys.platform, pointer_size=struct.calcsize("P"))


def get_user_id() -> str:
    """:return: String identifying the currently active system user as ``name``"""
    return getpass.getuser()
