"""
Custom exceptions for sysprobe.
"""

from datetime import datetime
from typing import Optional, Dict, Any


class SysProbeError(Exception):
    """
    Base exception for sysprobe errors.

    Attributes:
        message: The error message
        step: Optional query name where the error occurred (e.g. "os_version")
        timestamp: When the error occurred
        context: Additional context information
    """

    def __init__(
        self,
        message: str,
        step: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        """
        Initialize the exception.

        Args:
            message: The error message
            step: The query name where the error occurred
            context: Additional context information (e.g. command, raw output)
        """
        super().__init__(message)
        self.message = message
        self.step = step
        self.context = context or {}

        self.timestamp = datetime.now()

    def __str__(self) -> str:
        """Return a formatted error message."""
        base_msg = f"[{self.step}] {self.message}"
        if self.context:
            context_str = ", ".join(f"{k}={v}" for k, v in self.context.items())
            return f"{base_msg} (Context: {context_str})"
        return base_msg

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to dictionary for logging/serialization."""
        return {
            "error_type": self.__class__.__name__,
            "message": self.message,
            "step": self.step,
            "timestamp": self.timestamp.isoformat(),
            "context": self.context,
        }


class ExternalToolUnavailableError(SysProbeError):
    """
    Raised when an information source cannot be used.

    Examples:
        - Executable not found on the search path
        - Executable exited with a non-zero status
        - Registry key or value missing
        - DLL export cannot be loaded or called
    """

    def __init__(
        self,
        message: str,
        command: Optional[str] = None,
        exit_code: Optional[int] = None,
        stderr: Optional[str] = None,
        **kwargs,
    ):
        """
        Initialize tool unavailable error.

        Args:
            message: The error message
            command: The command (or registry path / DLL export) that failed
            exit_code: Exit code from the failed command
            stderr: Standard error from the command
            **kwargs: Additional context passed to parent
        """
        context = kwargs.get("context", {})
        if command:
            context["command"] = command
        if exit_code is not None:
            context["exit_code"] = exit_code
        if stderr:
            context["stderr"] = stderr
        kwargs["context"] = context
        super().__init__(message, **kwargs)


class ParseError(SysProbeError):
    """
    Raised when output was obtained but does not match the expected pattern.

    Examples:
        - `uname -r` printing something other than major.minor.micro
        - A compiler banner without a version triple
        - A registry build number that is not an integer
    """

    def __init__(
        self,
        message: str,
        text: Optional[str] = None,
        pattern: Optional[str] = None,
        **kwargs,
    ):
        """
        Initialize parse error.

        Args:
            message: The error message
            text: The text that failed to parse
            pattern: The regular expression it was matched against
            **kwargs: Additional context passed to parent
        """
        context = kwargs.get("context", {})
        if text is not None:
            context["text"] = text
        if pattern:
            context["pattern"] = pattern
        kwargs["context"] = context
        super().__init__(message, **kwargs)


class EnvironmentMissingError(SysProbeError):
    """
    Raised when a required environment variable is unset or empty.
    """

    def __init__(self, message: str, variable: Optional[str] = None, **kwargs):
        context = kwargs.get("context", {})
        if variable:
            context["variable"] = variable
        kwargs["context"] = context
        super().__init__(message, **kwargs)


class ConfigurationError(SysProbeError):
    """
    Raised when there are configuration-related errors.

    Examples:
        - Invalid YAML syntax
        - Unknown platform or compiler names
        - Missing required configuration keys
    """

    def __init__(
        self,
        message: str,
        config_file: Optional[str] = None,
        invalid_key: Optional[str] = None,
        **kwargs,
    ):
        """
        Initialize configuration error.

        Args:
            message: The error message
            config_file: Path to the configuration file
            invalid_key: The configuration key that caused the error
            **kwargs: Additional context passed to parent
        """
        context = kwargs.get("context", {})
        if config_file:
            context["config_file"] = config_file
        if invalid_key:
            context["invalid_key"] = invalid_key
        kwargs["context"] = context
        super().__init__(message, **kwargs)
