"""
sysprobe.access.system

Capabilities through which probers reach the host: running commands, reading
the Windows registry, calling the kernel library, reading environment
variables and checking for files.

Probers receive one ``SystemAccess`` bundle in their constructor. Tests build
the bundle from fakes instead of patching process-wide state.

Every capability raises ExternalToolUnavailableError when its source cannot
be used; none of them retry.
"""

import ctypes
import os
import subprocess

from dataclasses import dataclass, field
from typing import Callable, Mapping, Optional

from sysprobe.config import config
from sysprobe.exceptions.exceptions import ExternalToolUnavailableError
from sysprobe.logging.logger import get_logger
from sysprobe.utilities.os.filesystem import file_exists_and_nonzero
from sysprobe.utilities.os.platform import get_platform_info


@dataclass(frozen=True)
class CommandResult:
    """
    Captured result of one finished command.

    Attributes:
        command (tuple[str, ...]): Program and arguments as executed.
        exit_code (int): Process exit status.
        stdout (str): Captured standard output.
        stderr (str): Captured standard error.
    """

    command: tuple[str, ...]
    exit_code: int
    stdout: str = ""
    stderr: str = ""

    @property
    def ok(self) -> bool:
        """True if the command exited with status 0."""
        return self.exit_code == 0

    @property
    def output(self) -> str:
        """Standard output followed by standard error."""
        return self.stdout + self.stderr

    @property
    def command_line(self) -> str:
        """Command as a single printable string."""
        return " ".join(self.command)


class CommandRunner:
    """Run external programs synchronously and capture their text output."""

    def __init__(self, logger=None):
        self.logger = logger or get_logger(
            config.log_dir, verbose=config.verbose, log_name=__name__
        )

    def run(self, *command: str) -> CommandResult:
        """
        Run ``command`` and wait for it to finish.

        A non-zero exit status is reported in the result, not raised.

        Raises:
            ExternalToolUnavailableError: If the program cannot be launched.
        """
        self.logger.log_debug(f"Running: {' '.join(command)}")
        try:
            completed = subprocess.run(
                list(command),
                capture_output=True,
                text=True,
                errors="replace",
                check=False,
            )
        except OSError as exc:
            raise ExternalToolUnavailableError(
                message=f"Unable to launch '{command[0]}': {exc}",
                command=" ".join(command),
            ) from exc

        self.logger.log_debug(
            f"'{' '.join(command)}' exited with status {completed.returncode}"
        )
        return CommandResult(
            command=tuple(command),
            exit_code=completed.returncode,
            stdout=completed.stdout or "",
            stderr=completed.stderr or "",
        )


class RegistryReader:
    """
    Read values under ``HKEY_LOCAL_MACHINE``.

    ``winreg`` only exists on Windows; it is imported on first use so the
    class can be constructed anywhere.
    """

    def _open(self, key_path: str):
        try:
            import winreg  # pylint: disable=import-outside-toplevel
        except ImportError as exc:
            raise ExternalToolUnavailableError(
                message="The Windows registry is not available on this platform",
                command=f"HKLM\\{key_path}",
            ) from exc
        try:
            return winreg, winreg.OpenKey(
                winreg.HKEY_LOCAL_MACHINE, key_path, 0, winreg.KEY_QUERY_VALUE
            )
        except OSError as exc:
            raise ExternalToolUnavailableError(
                message=f"Cannot open registry key '{key_path}': {exc}",
                command=f"HKLM\\{key_path}",
            ) from exc

    def _query(self, key_path: str, name: str):
        winreg, key = self._open(key_path)
        with key:
            try:
                value, _ = winreg.QueryValueEx(key, name)
            except OSError as exc:
                raise ExternalToolUnavailableError(
                    message=f"Cannot get entry '{name}' at '{key_path}': {exc}",
                    command=f"HKLM\\{key_path}\\{name}",
                ) from exc
        return value

    def get_integer(self, key_path: str, name: str) -> int:
        """Return a DWORD/QWORD value."""
        value = self._query(key_path, name)
        if not isinstance(value, int):
            raise ExternalToolUnavailableError(
                message=f"Entry '{name}' at '{key_path}' is not an integer",
                command=f"HKLM\\{key_path}\\{name}",
            )
        return value

    def get_string(self, key_path: str, name: str) -> str:
        """Return a REG_SZ value."""
        return str(self._query(key_path, name))

    def value_names(self, key_path: str) -> list[str]:
        """Return the names of all values stored directly under ``key_path``."""
        winreg, key = self._open(key_path)
        names = []
        with key:
            index = 0
            while True:
                try:
                    name, _, _ = winreg.EnumValue(key, index)
                except OSError:
                    break
                names.append(name)
                index += 1
        return names


class KernelLibrary:
    """Call exports of the Windows kernel library."""

    def get_version(self) -> int:
        """
        Return the packed 32-bit result of ``kernel32.dll!GetVersion``.

        Raises:
            ExternalToolUnavailableError: If the library or export cannot be used.
        """
        try:
            kernel32 = ctypes.WinDLL("kernel32")
            get_version = kernel32.GetVersion
            get_version.restype = ctypes.c_uint32
            return int(get_version())
        except (AttributeError, OSError) as exc:
            raise ExternalToolUnavailableError(
                message=f"'GetVersion' via kernel32.dll failed: {exc}",
                command="kernel32.dll!GetVersion",
            ) from exc


@dataclass
class SystemAccess:
    """
    Bundle of host capabilities handed to a prober.

    Attributes:
        commands (CommandRunner): Runs external programs.
        registry (RegistryReader): Reads HKLM registry values.
        kernel (KernelLibrary): Calls kernel32 exports.
        environ (Mapping[str, str]): Environment variables.
        path_exists (Callable[[str], bool]): File existence check.
        pointer_size (int): Native pointer width in bytes.
    """

    commands: CommandRunner = field(default_factory=CommandRunner)
    registry: RegistryReader = field(default_factory=RegistryReader)
    kernel: KernelLibrary = field(default_factory=KernelLibrary)
    environ: Mapping[str, str] = field(default_factory=lambda: os.environ)
    path_exists: Callable[[str], bool] = file_exists_and_nonzero
    pointer_size: Optional[int] = None

    def __post_init__(self):
        if self.pointer_size is None:
            self.pointer_size = get_platform_info().pointer_size
