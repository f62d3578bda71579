"""
logger.py - Logging utilities for sysprobe with emoji support and Unix-style stream separation.

This module provides the logging used by every prober:

- Separate console output by stream:
    - DEBUG and INFO messages: `stdout`
    - WARNING, ERROR, and CRITICAL messages: `stderr`
- Provide optional emoji prefixes for log levels to improve readability
- Include millisecond-precision timestamps in all messages
- Optionally log to files when a log directory is configured:
    - `{log_name}-stdout.log`: DEBUG and INFO messages
    - `{log_name}-stderr.log`: WARNING, ERROR, and CRITICAL messages
- Keep console output clean by suppressing tracebacks unless verbose mode is enabled

Probers log each external command at DEBUG, so command traces only reach the
console in verbose mode.
"""

import logging
import sys

from logging import StreamHandler, FileHandler
from pathlib import Path
from datetime import datetime
from typing import Optional, Union


from sysprobe import __package_name__
from sysprobe.utilities.os.platform import get_user_id
from sysprobe.exceptions.exceptions import ConfigurationError


class EmojiFormatter(logging.Formatter):
    """Formatter that prepends emoji and uses millisecond timestamps."""

    EMOJI_MAP = {
        logging.ERROR: "❌",
        logging.WARNING: "⚠️",
        logging.INFO: "ℹ️",
        logging.DEBUG: "🔍",
    }

    def __init__(self, include_exc_info=True):
        super().__init__()
        self.include_exc_info = include_exc_info

    def formatTime(self, record, datefmt=None):
        ct = self.converter(record.created)
        return (
            f"{ct.tm_year:04d}-{ct.tm_mon:02d}-{ct.tm_mday:02d} "
            f"{ct.tm_hour:02d}:{ct.tm_min:02d}:{ct.tm_sec:02d},{int(record.msecs):03d}"
        )

    def format(self, record):
        emoji = getattr(record, "emoji", None)
        if emoji is None:
            emoji = self.EMOJI_MAP.get(record.levelno, "")
        level = record.levelname.upper()
        msg = record.getMessage()

        formatted = f"{self.formatTime(record)} - {level} - {emoji} {msg}"
        if self.include_exc_info and record.exc_info:
            formatted += "\n" + self.formatException(record.exc_info)

        return formatted


class SysProbeLogger:
    """Logger with emoji support, console streams and optional per-instance files."""

    def __init__(
        self, log_name: str, log_dir: Optional[Path] = None, verbose: bool = False
    ):
        self.log_name = log_name
        self.logger = logging.getLogger(f"{__package_name__}-{log_name}")

        if self.logger.hasHandlers():
            for handler in self.logger.handlers:
                handler.close()
            self.logger.handlers.clear()

        self.logger.setLevel(logging.DEBUG)
        self.logger.propagate = False  # prevent duplication to root

        console_formatter = EmojiFormatter(include_exc_info=verbose)

        sh_out = StreamHandler(sys.stdout)
        sh_out.setLevel(logging.DEBUG if verbose else logging.INFO)
        sh_out.addFilter(lambda r: r.levelno <= logging.INFO)
        sh_out.setFormatter(console_formatter)

        sh_err = StreamHandler(sys.stderr)
        sh_err.setLevel(logging.WARNING)
        sh_err.setFormatter(console_formatter)

        self.logger.addHandler(sh_out)
        self.logger.addHandler(sh_err)

        if log_dir is None:
            return

        log_path = log_dir / f"{log_name}-stdout.log"
        error_path = log_dir / f"{log_name}-stderr.log"

        file_formatter = EmojiFormatter(include_exc_info=True)

        try:
            fh = FileHandler(log_path, mode="a", encoding="utf-8")
            fh.setLevel(logging.DEBUG)
            fh.addFilter(lambda r: r.levelno <= logging.INFO)
            fh.setFormatter(file_formatter)

            eh = FileHandler(error_path, mode="a", encoding="utf-8")
            eh.setLevel(logging.WARNING)
            eh.setFormatter(file_formatter)

        except OSError as e:
            raise ConfigurationError(
                message="Failed to initialize per-instance file logging.",
                step="logging",
                context={"log_dir": str(log_dir), "error": str(e)},
            ) from e

        self.logger.addHandler(fh)
        self.logger.addHandler(eh)

    def log_debug(self, msg, emoji=None):
        """
        Log a debug message.

        Args:
            msg: The message to log.
            emoji: Optional custom emoji to override the default 🔍.
        """
        self.logger.debug(msg, extra={"emoji": emoji} if emoji else {})

    def log_info(self, msg, emoji=None):
        """
        Log an info message.

        Args:
            msg: The message to log.
            emoji: Optional custom emoji to override the default ℹ️.
        """
        self.logger.info(msg, extra={"emoji": emoji} if emoji else {})

    def log_warning(self, msg, emoji=None):
        """
        Log a warning message.

        Args:
            msg: The message to log.
            emoji: Optional custom emoji to override the default ⚠️.
        """
        self.logger.warning(msg, extra={"emoji": emoji} if emoji else {})

    def log_error(self, msg, emoji=None, exc_info=False):
        """
        Log an error message.

        Args:
            msg: The message to log.
            emoji: Optional custom emoji to override the default ❌.
            exc_info: If True, include exception traceback in file logs
                      (not console to make logs clean).
        """
        self.logger.error(
            msg, extra={"emoji": emoji} if emoji else {}, exc_info=exc_info
        )


def get_logger(
    log_dir: Optional[Union[str, Path]] = None,
    verbose: Optional[bool] = False,
    log_name: Optional[str] = None,
) -> SysProbeLogger:
    """
    Create a configured SysProbeLogger instance.

    A unique `log_name` is generated if none is provided so that separate
    logger instances do not share handlers.

    Args:
        log_dir (str,Path): Optional directory where log files will be stored.
            When given it must exist; when None only console handlers are attached.
        verbose Optional[bool] : If True, DEBUG messages and full tracebacks reach
            the console; otherwise console output remains clean.
        log_name (Optional[str]): Optional name for the logger and its log files.
            If not provided, a unique name is generated using the current user ID
            and timestamp (format: YYYYMMDD-HHMMSS-fff).

    Returns:
        SysProbeLogger: A configured logger instance.
    """
    if not log_name:
        prefix = get_user_id()
        suffix = datetime.now().strftime("%Y%m%d-%H%M%S-%f")[:-3]
        log_name = f"{prefix}-{suffix}"

    p = None
    if log_dir is not None:
        p = Path(log_dir)
        if not p.is_dir():
            raise ConfigurationError(
                message="log_dir must be an existing directory",
                step="logging",
                invalid_key="log_dir",
                context={"log_dir": str(p)},
            )

    return SysProbeLogger(log_name, p, bool(verbose))
