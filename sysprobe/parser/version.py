"""
sysprobe.parser.version

Regular-expression parsers for the free-form version strings printed by
platform utilities and compilers, and the machine-string architecture
classifier.

All parsers raise ParseError when the text does not match; none of them
substitute defaults.
"""

import re

from sysprobe.exceptions.exceptions import ParseError
from sysprobe.probe.types import ArchName

# Leading major.minor.micro, any single non-digit between the groups.
VERSION_TRIPLE = re.compile(r"^(\d+)\D(\d+)\D(\d+)")

# First major.minor pair anywhere in the text.
VERSION_PAIR = re.compile(r"(\d+)\D(\d+)")

# First major.minor.patch anywhere in the text; patch is matched but discarded.
COMPILER_VERSION = re.compile(r"(\d+)\D(\d+)\D\d+")


def parse_version_triple(text: str, step: str = None) -> tuple[int, int, int]:
    """
    Parse the leading ``major.minor.micro`` of a version string.

    Args:
        text (str): Version string, e.g. ``"5.10.0-generic"`` or ``"10.15.7"``.
        step (str): Query name recorded on the error.

    Returns:
        tuple[int, int, int]: The major, minor and micro numbers.

    Raises:
        ParseError: If the text does not start with three numeric groups.
    """
    match = VERSION_TRIPLE.match(text.strip())
    if match is None:
        raise ParseError(
            message=f"Unable to parse version string '{text.strip()}'",
            step=step,
            text=text,
            pattern=VERSION_TRIPLE.pattern,
        )
    major, minor, micro = (int(group) for group in match.groups())
    return major, minor, micro


def parse_version_pair(text: str, step: str = None) -> tuple[int, int]:
    """
    Parse the first ``major.minor`` pair found anywhere in ``text``.

    Raises:
        ParseError: If no pair of numeric groups is present.
    """
    match = VERSION_PAIR.search(text)
    if match is None:
        raise ParseError(
            message=f"Unable to parse version pair from '{text.strip()}'",
            step=step,
            text=text,
            pattern=VERSION_PAIR.pattern,
        )
    return int(match.group(1)), int(match.group(2))


def parse_compiler_version(text: str, step: str = None) -> tuple[int, int]:
    """
    Parse major and minor from compiler ``--version`` output.

    The output must contain a ``major.minor.patch`` triple; only the first two
    numbers are returned.

    Raises:
        ParseError: If no triple is present.
    """
    match = COMPILER_VERSION.search(text)
    if match is None:
        raise ParseError(
            message="Unable to parse compiler version string",
            step=step,
            text=text.strip(),
            pattern=COMPILER_VERSION.pattern,
        )
    return int(match.group(1)), int(match.group(2))


def classify_architecture(machine: str) -> ArchName:
    """
    Map a machine string (``uname -m`` style) to an ArchName.

    ARM prefixes are checked before the ``64`` suffix so that ``aarch64`` and
    ``arm64`` are not reported as AMD64.

    Examples:
        >>> classify_architecture("x86_64")
        <ArchName.AMD64: 'amd64'>
        >>> classify_architecture("i686")
        <ArchName.I386: 'i386'>
    """
    machine = machine.strip().lower()
    if machine.startswith(("arm", "aarch")):
        return ArchName.ARM
    if machine.endswith("64"):
        return ArchName.AMD64
    if re.match(r"^i\d86$", machine) or machine == "x86":
        return ArchName.I386
    return ArchName.UNKNOWN
