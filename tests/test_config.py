"""
Tests loading the YAML configuration
"""

import pytest

from sysprobe.config import ProbeConfig, config, load_config
from sysprobe.exceptions.exceptions import ConfigurationError
from sysprobe.probe.types import CompilerCandidate, CompilerName, OsName


def write(tmp_path, text):
    path = tmp_path / "sysprobe.yaml"
    path.write_text(text, encoding="utf-8")
    return path


def test_load_config_updates_package_instance(tmp_path):
    """
    Tests every supported key is applied to the package-wide config
    """
    path = write(
        tmp_path,
        f"""
verbose: true
log_dir: {tmp_path}
unknown_name: n/a
compilers:
  linux:
    - command: gcc-12
      name: gcc
    - command: /opt/llvm/bin/clang
      name: Clang
  darwin:
    - command: clang
      name: clang
      args: ["-v"]
""",
    )
    result = load_config(path)

    assert result is config
    assert config.verbose is True
    assert config.log_dir == tmp_path.resolve()
    assert config.unknown_name == "n/a"
    assert config.compiler_candidates[OsName.LINUX] == [
        CompilerCandidate("gcc-12", CompilerName.GCC),
        CompilerCandidate("/opt/llvm/bin/clang", CompilerName.CLANG),
    ]
    assert config.compiler_candidates[OsName.MAC] == [
        CompilerCandidate("clang", CompilerName.CLANG, ("-v",))
    ]


def test_load_config_into_separate_instance(tmp_path):
    """
    Tests an explicit target leaves the package-wide config untouched
    """
    target = ProbeConfig()
    load_config(write(tmp_path, "verbose: true\n"), target=target)

    assert target.verbose is True
    assert config.verbose is False


def test_empty_file_changes_nothing(tmp_path):
    """
    Tests an empty YAML document is accepted
    """
    load_config(write(tmp_path, ""))
    assert config == ProbeConfig()


def test_candidates_for_defaults():
    """
    Tests platforms without overrides use the given defaults
    """
    defaults = [CompilerCandidate("gcc", CompilerName.GCC)]
    assert config.candidates_for(OsName.LINUX, defaults) == defaults


@pytest.mark.parametrize(
    "text, invalid_key",
    [
        ("compilers: [gcc]\n", "compilers"),
        ("compilers:\n  solaris: []\n", "compilers.solaris"),
        ("compilers:\n  linux: gcc\n", "compilers.linux"),
        ("compilers:\n  linux:\n    - name: gcc\n", "compilers.linux[0]"),
        (
            "compilers:\n  linux:\n    - command: tcc\n      name: tcc\n",
            "compilers.linux[0].name",
        ),
        (
            "compilers:\n  linux:\n    - command: gcc\n      name: gcc\n      args: -v\n",
            "compilers.linux[0].args",
        ),
    ],
)
def test_invalid_compiler_entries(tmp_path, text, invalid_key):
    """
    Tests invalid compiler sections raise ConfigurationError naming the key
    """
    with pytest.raises(ConfigurationError) as exc_info:
        load_config(write(tmp_path, text))
    assert exc_info.value.context["invalid_key"] == invalid_key


def test_invalid_yaml(tmp_path):
    """
    Tests malformed YAML raises ConfigurationError
    """
    with pytest.raises(ConfigurationError) as exc_info:
        load_config(write(tmp_path, "compilers: [unclosed\n"))
    assert "yaml_error" in exc_info.value.context


def test_non_mapping_document(tmp_path):
    """
    Tests a YAML list at the top level is rejected
    """
    with pytest.raises(ConfigurationError):
        load_config(write(tmp_path, "- verbose\n"))


def test_missing_file(tmp_path):
    """
    Tests a missing configuration file raises ConfigurationError
    """
    with pytest.raises(ConfigurationError) as exc_info:
        load_config(tmp_path / "absent.yaml")
    assert "os_error" in exc_info.value.context
