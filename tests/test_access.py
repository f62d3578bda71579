"""
Tests the host access capabilities, mostly with subprocess mocked out
"""

import subprocess
import sys

from unittest.mock import patch, MagicMock

import pytest

from sysprobe.access.system import (
    CommandResult,
    CommandRunner,
    KernelLibrary,
    RegistryReader,
    SystemAccess,
)
from sysprobe.config import config
from sysprobe.exceptions.exceptions import ExternalToolUnavailableError
from sysprobe.probe.linux import LinuxProber
from sysprobe.probe.types import CompilerCandidate, CompilerInfo, CompilerName, OsName


def test_command_result_properties():
    """
    Tests output concatenation and status helpers
    """
    result = CommandResult(("cl.exe",), exit_code=0, stdout="out\n", stderr="err\n")

    assert result.ok
    assert result.output == "out\nerr\n"
    assert result.command_line == "cl.exe"
    assert not CommandResult(("gcc",), exit_code=1).ok


def test_command_runner_captures_output():
    """
    Tests the runner captures text output and does not raise on non-zero exit
    """
    completed = subprocess.CompletedProcess(
        args=["uname", "-r"], returncode=3, stdout="5.10.0\n", stderr="warning\n"
    )
    with patch("sysprobe.access.system.subprocess.run", return_value=completed) as run:
        result = CommandRunner().run("uname", "-r")

    run.assert_called_once_with(
        ["uname", "-r"],
        capture_output=True,
        text=True,
        errors="replace",
        check=False,
    )
    assert result == CommandResult(("uname", "-r"), 3, "5.10.0\n", "warning\n")


def test_command_runner_missing_executable():
    """
    Tests a program that cannot be launched raises ExternalToolUnavailableError
    """
    with patch(
        "sysprobe.access.system.subprocess.run",
        side_effect=FileNotFoundError("No such file or directory: 'lsb_release'"),
    ):
        with pytest.raises(ExternalToolUnavailableError) as exc_info:
            CommandRunner().run("lsb_release", "-d")

    assert exc_info.value.context["command"] == "lsb_release -d"


@pytest.mark.skipif(sys.platform == "win32", reason="registry exists on Windows")
def test_registry_unavailable_off_windows():
    """
    Tests registry reads fail cleanly where winreg does not exist
    """
    with pytest.raises(ExternalToolUnavailableError):
        RegistryReader().get_integer("SOFTWARE", "Value")
    with pytest.raises(ExternalToolUnavailableError):
        RegistryReader().value_names("SOFTWARE")


@pytest.mark.skipif(sys.platform == "win32", reason="kernel32 exists on Windows")
def test_kernel_unavailable_off_windows():
    """
    Tests GetVersion fails cleanly where kernel32 does not exist
    """
    with pytest.raises(ExternalToolUnavailableError) as exc_info:
        KernelLibrary().get_version()
    assert exc_info.value.context["command"] == "kernel32.dll!GetVersion"


def test_system_access_defaults():
    """
    Tests the default bundle reads the real pointer width and environment
    """
    access = SystemAccess()

    assert access.pointer_size in (4, 8)
    assert isinstance(access.commands, CommandRunner)
    assert access.path_exists(__file__)


def test_system_access_accepts_fakes():
    """
    Tests every capability can be substituted
    """
    runner = MagicMock()
    access = SystemAccess(commands=runner, environ={"A": "1"}, pointer_size=4)

    assert access.commands is runner
    assert access.environ == {"A": "1"}
    assert access.pointer_size == 4


UNDECODABLE_BANNER = (
    "import sys; sys.stdout.buffer.write(b'fakecc \\377\\376 9.4.0\\n')"
)


def test_command_runner_replaces_undecodable_bytes():
    """
    Tests invalid bytes in real process output are replaced, not raised
    """
    result = CommandRunner().run(sys.executable, "-c", UNDECODABLE_BANNER)

    assert result.ok
    assert result.stdout.startswith("fakecc ")
    assert result.stdout.rstrip().endswith(" 9.4.0")


def test_compilers_parse_banner_with_undecodable_bytes():
    """
    Tests a compiler banner with invalid bytes is still parsed
    """
    config.compiler_candidates = {
        OsName.LINUX: [
            CompilerCandidate(
                sys.executable, CompilerName.GCC, ("-c", UNDECODABLE_BANNER)
            )
        ]
    }
    prober = LinuxProber(access=SystemAccess(commands=CommandRunner()))

    assert prober.compilers() == [CompilerInfo(CompilerName.GCC, 9, 4)]
