"""
config.py

Singleton-style probe configuration using only a dataclass.
Provides a single package-wide instance that can be imported and used
across all modules to access the log directory, verbose flag, and compiler
candidate overrides, plus a YAML loader that populates it.
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Optional, Union

import yaml

from sysprobe.exceptions.exceptions import ConfigurationError
from sysprobe.probe.types import CompilerCandidate, CompilerName, OsName
from sysprobe.utilities.os.filesystem import get_absolute_path

# YAML platform keys accepted under "compilers".
PLATFORM_KEYS = {
    "linux": OsName.LINUX,
    "windows": OsName.WINDOWS,
    "mac": OsName.MAC,
    "darwin": OsName.MAC,
}


@dataclass
class ProbeConfig:
    """
    Stores logging options and compiler candidate overrides.

    Attributes:
        log_dir (Optional[Path]): Directory for log files, console only when None.
        verbose (bool): Enable debug logging to the console.
        compiler_candidates (dict[OsName, list[CompilerCandidate]]): Per-platform
            replacement for a prober's default candidate list. A platform
            absent from the mapping uses the prober defaults.
        unknown_name (str): Name reported when optional OS name metadata is missing.
    """

    log_dir: Optional[Path] = None
    verbose: bool = False
    compiler_candidates: dict[OsName, list[CompilerCandidate]] = field(
        default_factory=dict
    )
    unknown_name: str = "Unknown"

    def candidates_for(
        self, os_name: OsName, defaults: list[CompilerCandidate]
    ) -> list[CompilerCandidate]:
        """Return the configured candidates for ``os_name``, or ``defaults``."""
        return list(self.compiler_candidates.get(os_name, defaults))

    def reset(self) -> None:
        """Restore every field to its default value."""
        self.log_dir = None
        self.verbose = False
        self.compiler_candidates = {}
        self.unknown_name = "Unknown"


def _parse_candidates(
    raw: Any, config_file: str
) -> dict[OsName, list[CompilerCandidate]]:
    if not isinstance(raw, dict):
        raise ConfigurationError(
            message="'compilers' must map platform names to candidate lists",
            step="configuration",
            config_file=config_file,
            invalid_key="compilers",
        )

    result = {}
    for platform_key, entries in raw.items():
        os_name = PLATFORM_KEYS.get(str(platform_key).lower())
        if os_name is None:
            raise ConfigurationError(
                message=f"Unknown platform '{platform_key}'",
                step="configuration",
                config_file=config_file,
                invalid_key=f"compilers.{platform_key}",
                context={"valid_platforms": sorted(PLATFORM_KEYS)},
            )
        if not isinstance(entries, list):
            raise ConfigurationError(
                message=f"Candidates for '{platform_key}' must be a list",
                step="configuration",
                config_file=config_file,
                invalid_key=f"compilers.{platform_key}",
            )

        candidates = []
        for index, entry in enumerate(entries):
            key = f"compilers.{platform_key}[{index}]"
            if not isinstance(entry, dict) or not entry.get("command"):
                raise ConfigurationError(
                    message="Each compiler candidate needs a 'command'",
                    step="configuration",
                    config_file=config_file,
                    invalid_key=key,
                )
            try:
                name = CompilerName.from_label(str(entry.get("name", "")))
            except ValueError as exc:
                raise ConfigurationError(
                    message=str(exc),
                    step="configuration",
                    config_file=config_file,
                    invalid_key=f"{key}.name",
                ) from exc
            args = entry.get("args", ["--version"])
            if not isinstance(args, list):
                raise ConfigurationError(
                    message="Compiler 'args' must be a list",
                    step="configuration",
                    config_file=config_file,
                    invalid_key=f"{key}.args",
                )
            candidates.append(
                CompilerCandidate(
                    command=str(entry["command"]),
                    name=name,
                    args=tuple(str(arg) for arg in args),
                )
            )
        result[os_name] = candidates
    return result


def load_config(
    config_file: Union[str, Path], target: Optional[ProbeConfig] = None
) -> ProbeConfig:
    """
    Read a YAML configuration file and apply it to ``target``.

    Args:
        config_file (Union[str, Path]): Path to the YAML file.
        target (Optional[ProbeConfig]): Instance to update; defaults to the
            package-wide ``config``.

    Returns:
        ProbeConfig: The updated instance.

    Raises:
        ConfigurationError: If the file cannot be read, is not valid YAML, or
            holds invalid values.
    """
    target = config if target is None else target
    path = get_absolute_path(config_file)

    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8"))
    except OSError as exc:
        raise ConfigurationError(
            message="Failed to read configuration file",
            step="configuration",
            config_file=str(path),
            context={"os_error": str(exc)},
        ) from exc
    except yaml.YAMLError as exc:
        raise ConfigurationError(
            message="Configuration file is not valid YAML",
            step="configuration",
            config_file=str(path),
            context={"yaml_error": str(exc)},
        ) from exc

    if data is None:
        return target
    if not isinstance(data, dict):
        raise ConfigurationError(
            message="Configuration file must contain a mapping",
            step="configuration",
            config_file=str(path),
        )

    if "log_dir" in data:
        log_dir = data["log_dir"]
        target.log_dir = get_absolute_path(log_dir) if log_dir else None
    if "verbose" in data:
        target.verbose = bool(data["verbose"])
    if "unknown_name" in data:
        target.unknown_name = str(data["unknown_name"])
    if "compilers" in data:
        target.compiler_candidates = _parse_candidates(data["compilers"], str(path))

    return target


# Create a SINGLE package-wide instance.
# Probers and loggers read it at query time; load_config() updates it in place.
config = ProbeConfig()
