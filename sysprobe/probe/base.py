"""
sysprobe.probe.base

The Prober interface shared by every platform implementation, plus the
command and compiler-discovery helpers they have in common.

Each query is stateless: it reaches the host through the injected
SystemAccess, parses the raw text, and returns a fresh record. Nothing is
cached between calls.
"""

from abc import ABC, abstractmethod
from typing import Optional

from sysprobe.access.system import CommandResult, SystemAccess
from sysprobe.config import config
from sysprobe.exceptions.exceptions import ExternalToolUnavailableError
from sysprobe.logging.logger import get_logger
from sysprobe.parser.version import parse_compiler_version
from sysprobe.probe.types import (
    ArchName,
    CompilerCandidate,
    CompilerInfo,
    LibcInfo,
    OSVersionInfo,
    OsName,
)


class Prober(ABC):
    """
    Query surface for one platform.

    Subclasses set ``OS_NAME`` and ``DEFAULT_COMPILERS`` and implement the
    abstract queries. Errors are raised as SysProbeError subclasses.
    """

    OS_NAME: OsName = OsName.UNKNOWN
    DEFAULT_COMPILERS: tuple[CompilerCandidate, ...] = ()

    def __init__(self, access: Optional[SystemAccess] = None, logger=None):
        self.logger = logger or get_logger(
            config.log_dir, verbose=config.verbose, log_name=__name__
        )
        self.access = access or SystemAccess()

    def os(self) -> OsName:
        """Return the operating system this prober was built for."""
        return self.OS_NAME

    @abstractmethod
    def os_version(self) -> OSVersionInfo:
        """Return the operating system version."""

    @abstractmethod
    def architecture(self) -> ArchName:
        """Return the CPU architecture; UNKNOWN rather than raising."""

    @abstractmethod
    def libc(self) -> Optional[LibcInfo]:
        """Return the C runtime library, or None when the system has none."""

    def compilers(self) -> list[CompilerInfo]:
        """
        Return the installed compilers from the candidate list, in order.

        Candidates that cannot be run are skipped. A candidate that runs but
        prints an unparseable version fails the whole call with ParseError.
        """
        found = []
        for candidate in self.compiler_candidates():
            info = self.probe_compiler(candidate)
            if info is not None:
                found.append(info)
        return found

    def compiler_candidates(self) -> list[CompilerCandidate]:
        """Configured candidates for this platform, or the defaults."""
        return config.candidates_for(self.OS_NAME, list(self.DEFAULT_COMPILERS))

    def run(self, step: str, *command: str) -> CommandResult:
        """
        Run ``command`` and require a zero exit status.

        Raises:
            ExternalToolUnavailableError: If the program cannot be launched or
                exits non-zero.
        """
        try:
            result = self.access.commands.run(*command)
        except ExternalToolUnavailableError as exc:
            exc.step = step
            raise
        if not result.ok:
            raise ExternalToolUnavailableError(
                message=f"'{result.command_line}' failed",
                step=step,
                command=result.command_line,
                exit_code=result.exit_code,
                stderr=result.stderr.strip(),
            )
        return result

    def try_run(self, step: str, *command: str) -> Optional[CommandResult]:
        """Like ``run`` but return None instead of raising."""
        try:
            return self.run(step, *command)
        except ExternalToolUnavailableError as exc:
            self.logger.log_debug(f"Optional command unavailable: {exc}")
            return None

    def probe_compiler(self, candidate: CompilerCandidate) -> Optional[CompilerInfo]:
        """
        Run one candidate and parse its version.

        Returns:
            Optional[CompilerInfo]: None when the candidate is absent, fails,
                or reports a major version of zero.

        Raises:
            ParseError: If the candidate ran but its output holds no version.
        """
        result = self.try_run("compilers", candidate.command, *candidate.args)
        if result is None:
            return None

        major, minor = parse_compiler_version(result.output, step="compilers")
        if major <= 0:
            self.logger.log_debug(
                f"Ignoring '{candidate.command}': major version {major}"
            )
            return None

        self.logger.log_debug(
            f"Found {candidate.name} {major}.{minor} at '{candidate.command}'"
        )
        return CompilerInfo(candidate.name, major, minor)
