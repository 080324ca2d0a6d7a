# Copyright 2026 witgen Contributors
# SPDX-License-Identifier: Apache-2.0

"""Data model and YAML parser for the optional witgen configuration file."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

import yaml

from witgen.errors import WitgenError
from witgen.generator.declarations import CollisionPolicy
from witgen.generator.world import DEFAULT_WORLD_INCLUDE, DEFAULT_WORLD_NAME

# ###############
# Public Interface
# ###############

CONFIG_FILE_NAME = ".witgen.yaml"

DEFAULT_API_DIRECTORY = "api"
DEFAULT_SOURCE_FILE = "src/lib.rs"
DEFAULT_COMPONENT_PACKAGE = "hyperware:process"


class WorkspaceConfigError(WitgenError):
    """Raised when a configuration file is invalid or cannot be loaded."""


@dataclass
class GeneratorConfig:
    """The settings of one witgen run.

    Attributes:
        api_directory: Output directory for ``.wit`` files, relative to the root.
        source_file: Source module of each project, relative to the project.
        component_package: Value of ``package.metadata.component.package``
            that marks a Cargo project as a process.
        default_world: World name used when no manifest exists yet.
        world_include: Package included at the end of every world.
        collision_policy: Treatment of declarations sharing a WIT name.
    """

    api_directory: str = DEFAULT_API_DIRECTORY
    source_file: str = DEFAULT_SOURCE_FILE
    component_package: str = DEFAULT_COMPONENT_PACKAGE
    default_world: str = DEFAULT_WORLD_NAME
    world_include: str = DEFAULT_WORLD_INCLUDE
    collision_policy: CollisionPolicy = CollisionPolicy.OVERWRITE


def load_generator_config(path: Path) -> GeneratorConfig:
    """Load and parse a witgen configuration file.

    Args:
        path: Path to the ``.witgen.yaml`` file.

    Returns:
        A GeneratorConfig; keys absent from the file keep their defaults.

    Raises:
        WorkspaceConfigError: If the file cannot be read or the configuration is invalid.
    """
    try:
        text = path.read_text(encoding="utf-8")
    except FileNotFoundError:
        raise WorkspaceConfigError(f"Config file not found: {path}") from None
    except OSError as exc:
        raise WorkspaceConfigError(f"Cannot read config file: {exc}") from exc

    return _parse_generator_config(text, source_label=str(path))


def load_config_for(root: Path) -> GeneratorConfig:
    """Return the configuration of *root*: its ``.witgen.yaml`` if present, else defaults."""
    config_file = root / CONFIG_FILE_NAME
    if not config_file.exists():
        return GeneratorConfig()
    return load_generator_config(config_file)


def render_default_config() -> str:
    """Return the text of a configuration file spelling out every default."""
    defaults = GeneratorConfig()
    return (
        "# witgen configuration\n"
        f"api-directory: {defaults.api_directory}\n"
        f"source-file: {defaults.source_file}\n"
        f'component-package: "{defaults.component_package}"\n'
        f"default-world: {defaults.default_world}\n"
        f"world-include: {defaults.world_include}\n"
        f"collision-policy: {defaults.collision_policy.value}\n"
    )


# ################
# Implementation
# ################

_STRING_KEYS: dict[str, str] = {
    "api-directory": "api_directory",
    "source-file": "source_file",
    "component-package": "component_package",
    "default-world": "default_world",
    "world-include": "world_include",
}

_KNOWN_KEYS = frozenset(_STRING_KEYS) | {"collision-policy"}


def _parse_generator_config(text: str, source_label: str = "<string>") -> GeneratorConfig:
    """Parse configuration YAML text into a GeneratorConfig.

    Args:
        text: Raw YAML content.
        source_label: Human-readable label used in error messages (e.g. the file path).

    Returns:
        A GeneratorConfig instance.

    Raises:
        WorkspaceConfigError: If the YAML is invalid or a field has the wrong type.
    """
    try:
        data = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise WorkspaceConfigError(f"Invalid YAML in {source_label}: {exc}") from exc

    if data is None:
        return GeneratorConfig()
    if not isinstance(data, dict):
        raise WorkspaceConfigError(f"{source_label}: config must be a YAML mapping")

    unknown = sorted(str(key) for key in data if key not in _KNOWN_KEYS)
    if unknown:
        raise WorkspaceConfigError(f"{source_label}: unknown field(s): {', '.join(unknown)}")

    config = GeneratorConfig()
    for key, attribute in _STRING_KEYS.items():
        if key in data:
            setattr(config, attribute, _require_non_empty_string(data, key, source_label))

    if "collision-policy" in data:
        raw_policy = _require_non_empty_string(data, "collision-policy", source_label)
        try:
            config.collision_policy = CollisionPolicy(raw_policy)
        except ValueError:
            choices = ", ".join(policy.value for policy in CollisionPolicy)
            raise WorkspaceConfigError(
                f"{source_label}: 'collision-policy' must be one of: {choices}"
            ) from None
    return config


def _require_non_empty_string(mapping: dict[str, object], key: str, source_label: str) -> str:
    """Extract a string field from a mapping, raising WorkspaceConfigError if it is not one."""
    value = mapping[key]
    if not isinstance(value, str) or not value:
        raise WorkspaceConfigError(f"{source_label}: '{key}' must be a non-empty string")
    return value
