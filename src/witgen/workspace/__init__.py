# Copyright 2026 witgen Contributors
# SPDX-License-Identifier: Apache-2.0

"""Configuration and project discovery for witgen."""

from witgen.workspace.config import (
    CONFIG_FILE_NAME,
    GeneratorConfig,
    WorkspaceConfigError,
    load_config_for,
    load_generator_config,
    render_default_config,
)
from witgen.workspace.discovery import CARGO_MANIFEST, component_package, find_projects

__all__ = [
    "CARGO_MANIFEST",
    "CONFIG_FILE_NAME",
    "GeneratorConfig",
    "WorkspaceConfigError",
    "component_package",
    "find_projects",
    "load_config_for",
    "load_generator_config",
    "render_default_config",
]
