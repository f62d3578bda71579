"""
filesystem.py - Filesystem utility helpers.

Thin wrappers around ``pathlib`` used by the probers and the configuration
loader. They accept both string paths and ``pathlib.Path`` objects and keep no
global state.

Error handling:
- Resolution errors are surfaced as ``ValueError`` with additional context.
- Existence checks never raise; an unreadable path counts as absent.
"""

from typing import Union
from pathlib import Path


def file_exists_and_nonzero(path: Union[str, Path]) -> bool:
    """
    Check if a file exists and has a non-zero size.

    Args:
        path (Union[str, Path]): Path to the file.

    Returns:
        bool: True if the file exists and is non-empty, False otherwise.
    """
    p = Path(path)
    try:
        return p.is_file() and p.stat().st_size > 0
    except OSError:
        return False


def get_absolute_path(path: Union[str, Path]) -> Path:
    """
    Convert a relative or absolute path to an absolute Path object.

    This will NOT care if the path exists or not, this is merely to construct
    the actual absolute path.

    Args:
        path: A string or Path representing the file/directory path.

    Returns:
        A Path object representing the absolute path.

    Raises:
        ValueError: If the path cannot be resolved.
    """
    try:
        p = Path(path).expanduser()
        abs_path = p.resolve(strict=False)
        return abs_path
    except (OSError, RuntimeError) as exc:
        raise ValueError(
            f"Failed to resolve absolute path for '{path}': {exc}"
        ) from exc
