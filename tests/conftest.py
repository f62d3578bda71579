"""
Shared fakes and fixtures for the prober tests.

Nothing here touches the real host: commands, registry values and kernel
calls are served from in-memory tables.
"""

import pytest

from sysprobe.access.system import CommandResult, SystemAccess
from sysprobe.config import config
from sysprobe.exceptions.exceptions import ExternalToolUnavailableError


class FakeCommandRunner:
    """Serve canned output keyed by the full command tuple."""

    def __init__(self, outputs=None):
        self.outputs = outputs or {}
        self.calls = []

    def run(self, *command):
        self.calls.append(tuple(command))
        entry = self.outputs.get(tuple(command))
        if entry is None:
            raise ExternalToolUnavailableError(
                message=f"Unable to launch '{command[0]}': not found",
                command=" ".join(command),
            )
        if isinstance(entry, CommandResult):
            return entry
        return CommandResult(command=tuple(command), exit_code=0, stdout=entry)


class FakeRegistry:
    """HKLM values keyed by (key path, value name)."""

    def __init__(self, values=None):
        self.values = values or {}

    def _get(self, key_path, name):
        if (key_path, name) not in self.values:
            raise ExternalToolUnavailableError(
                message=f"Cannot get entry '{name}' at '{key_path}'",
                command=f"HKLM\\{key_path}\\{name}",
            )
        return self.values[(key_path, name)]

    def get_integer(self, key_path, name):
        return self._get(key_path, name)

    def get_string(self, key_path, name):
        return self._get(key_path, name)

    def value_names(self, key_path):
        names = [name for path, name in self.values if path == key_path]
        if not names:
            raise ExternalToolUnavailableError(
                message=f"Cannot open registry key '{key_path}'",
                command=f"HKLM\\{key_path}",
            )
        return names


class FakeKernel:
    """Return a fixed GetVersion value, or fail when it is None."""

    def __init__(self, packed=None):
        self.packed = packed

    def get_version(self):
        if self.packed is None:
            raise ExternalToolUnavailableError(
                message="'GetVersion' via kernel32.dll failed",
                command="kernel32.dll!GetVersion",
            )
        return self.packed


def make_access(
    outputs=None,
    registry=None,
    kernel=None,
    environ=None,
    files=(),
    pointer_size=8,
):
    """Build a SystemAccess from fakes."""
    existing = set(files)
    return SystemAccess(
        commands=FakeCommandRunner(outputs),
        registry=FakeRegistry(registry),
        kernel=FakeKernel(kernel),
        environ=environ or {},
        path_exists=lambda path: path in existing,
        pointer_size=pointer_size,
    )


@pytest.fixture(autouse=True)
def reset_config():
    """Keep the package-wide configuration pristine between tests."""
    config.reset()
    yield
    config.reset()
