# Copyright 2026 witgen Contributors
# SPDX-License-Identifier: Apache-2.0

"""Tests for the witgen configuration file."""

from pathlib import Path

import pytest

from witgen.generator.declarations import CollisionPolicy
from witgen.workspace.config import (
    CONFIG_FILE_NAME,
    GeneratorConfig,
    WorkspaceConfigError,
    load_config_for,
    load_generator_config,
    render_default_config,
)

# ###############
# Test Helpers
# ###############


def _write_config(tmp_path: Path, content: str) -> Path:
    path = tmp_path / CONFIG_FILE_NAME
    path.write_text(content, encoding="utf-8")
    return path


# ###############
# Defaults
# ###############


def test_defaults() -> None:
    """A default config matches the documented values."""
    config = GeneratorConfig()
    assert config.api_directory == "api"
    assert config.source_file == "src/lib.rs"
    assert config.component_package == "hyperware:process"
    assert config.default_world == "async-app-template-dot-os-v0"
    assert config.world_include == "process-v1"
    assert config.collision_policy is CollisionPolicy.OVERWRITE


def test_missing_file_yields_defaults(tmp_path: Path) -> None:
    """load_config_for returns defaults when no config file exists."""
    assert load_config_for(tmp_path) == GeneratorConfig()


def test_empty_file_yields_defaults(tmp_path: Path) -> None:
    """An empty file is valid and keeps every default."""
    assert load_generator_config(_write_config(tmp_path, "")) == GeneratorConfig()


# ###############
# Valid Files
# ###############


def test_all_keys(tmp_path: Path) -> None:
    """Every supported key is read into the matching attribute."""
    path = _write_config(
        tmp_path,
        "api-directory: wit\n"
        "source-file: src/main.rs\n"
        'component-package: "acme:service"\n'
        "default-world: my-world\n"
        "world-include: base-v2\n"
        "collision-policy: reject\n",
    )
    config = load_generator_config(path)
    assert config == GeneratorConfig(
        api_directory="wit",
        source_file="src/main.rs",
        component_package="acme:service",
        default_world="my-world",
        world_include="base-v2",
        collision_policy=CollisionPolicy.REJECT,
    )


def test_partial_file_keeps_other_defaults(tmp_path: Path) -> None:
    """Keys absent from the file keep their default values."""
    config = load_generator_config(_write_config(tmp_path, "api-directory: out\n"))
    assert config.api_directory == "out"
    assert config.source_file == "src/lib.rs"


def test_load_config_for_reads_root_file(tmp_path: Path) -> None:
    """load_config_for picks up the config file in the given root."""
    _write_config(tmp_path, "default-world: from-file\n")
    assert load_config_for(tmp_path).default_world == "from-file"


def test_rendered_default_config_round_trips(tmp_path: Path) -> None:
    """The text written by init parses back to the defaults."""
    path = _write_config(tmp_path, render_default_config())
    assert load_generator_config(path) == GeneratorConfig()


# ###############
# Invalid Files
# ###############


def test_missing_file_raises(tmp_path: Path) -> None:
    """Loading an explicit path that does not exist raises."""
    with pytest.raises(WorkspaceConfigError, match="Config file not found"):
        load_generator_config(tmp_path / CONFIG_FILE_NAME)


def test_invalid_yaml_raises(tmp_path: Path) -> None:
    """Malformed YAML raises WorkspaceConfigError."""
    with pytest.raises(WorkspaceConfigError, match="Invalid YAML"):
        load_generator_config(_write_config(tmp_path, "api-directory: [unclosed\n"))


def test_non_mapping_raises(tmp_path: Path) -> None:
    """A top-level list is rejected."""
    with pytest.raises(WorkspaceConfigError, match="must be a YAML mapping"):
        load_generator_config(_write_config(tmp_path, "- api\n"))


def test_unknown_key_raises(tmp_path: Path) -> None:
    """Unknown keys are reported by name."""
    with pytest.raises(WorkspaceConfigError, match="unknown field\\(s\\): output"):
        load_generator_config(_write_config(tmp_path, "output: api\n"))


@pytest.mark.parametrize("value", ["3", "''", "[a, b]", "true"])
def test_non_string_value_raises(tmp_path: Path, value: str) -> None:
    """String keys reject numbers, empty strings, lists and booleans."""
    with pytest.raises(WorkspaceConfigError, match="'api-directory' must be a non-empty string"):
        load_generator_config(_write_config(tmp_path, f"api-directory: {value}\n"))


def test_invalid_collision_policy_raises(tmp_path: Path) -> None:
    """collision-policy only accepts the known policy names."""
    with pytest.raises(WorkspaceConfigError, match="must be one of: overwrite, reject"):
        load_generator_config(_write_config(tmp_path, "collision-policy: merge\n"))
