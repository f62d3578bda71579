"""
Tests version string parsing and architecture classification
"""

import pytest

from sysprobe.exceptions.exceptions import ParseError
from sysprobe.parser.version import (
    classify_architecture,
    parse_compiler_version,
    parse_version_pair,
    parse_version_triple,
)
from sysprobe.probe.types import ArchName


def test_parse_version_triple_any_separator():
    """
    Tests that any single non-digit separator yields the same three integers
    """
    for separator in [".", "-", "_", "+", " ", "a", ":"]:
        text = f"4{separator}19{separator}128"
        assert parse_version_triple(text) == (4, 19, 128)


def test_parse_version_triple_mixed_separators_and_suffix():
    """
    Tests kernel-style strings with a trailing suffix
    """
    assert parse_version_triple("5.10.0-generic") == (5, 10, 0)
    assert parse_version_triple("6.1-25+rpi") == (6, 1, 25)
    assert parse_version_triple("  10.15.7\n") == (10, 15, 7)


def test_parse_version_triple_rejects_malformed():
    """
    Tests that strings without a leading triple raise ParseError
    """
    for text in ["", "10.15", "v10.15.7", "10..15.7", "generic"]:
        with pytest.raises(ParseError) as exc_info:
            parse_version_triple(text, step="os_version")
        assert exc_info.value.step == "os_version"
        assert exc_info.value.context["pattern"]


def test_parse_version_pair():
    """
    Tests the first major.minor pair is found anywhere in the text
    """
    assert parse_version_pair("glibc 2.31\n") == (2, 31)
    assert parse_version_pair("ProductVersion\n7.0.19041.546") == (7, 0)

    with pytest.raises(ParseError):
        parse_version_pair("glibc unknown")


def test_parse_compiler_version():
    """
    Tests major and minor are kept from a major.minor.patch triple
    """
    gcc = "gcc (Ubuntu 9.4.0-1ubuntu1~20.04.2) 9.4.0\nCopyright (C) 2019"
    assert parse_compiler_version(gcc) == (9, 4)

    clang = "Apple clang version 14.0.3 (clang-1403.0.22.14.1)\nTarget: arm64"
    assert parse_compiler_version(clang) == (14, 0)

    msvc = "Microsoft (R) C/C++ Optimizing Compiler Version 19.00.24215.1 for x86"
    assert parse_compiler_version(msvc) == (19, 0)

    with pytest.raises(ParseError):
        parse_compiler_version("gcc version 9.4")


def test_classify_architecture():
    """
    Tests machine strings map to the expected architecture
    """
    assert classify_architecture("x86_64\n") == ArchName.AMD64
    assert classify_architecture("amd64") == ArchName.AMD64
    assert classify_architecture("i386") == ArchName.I386
    assert classify_architecture("i686") == ArchName.I386
    assert classify_architecture("armv7l") == ArchName.ARM
    assert classify_architecture("arm64") == ArchName.ARM
    assert classify_architecture("aarch64") == ArchName.ARM
    assert classify_architecture("riscv") == ArchName.UNKNOWN
    assert classify_architecture("") == ArchName.UNKNOWN
