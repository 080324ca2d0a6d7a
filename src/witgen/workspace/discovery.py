# Copyright 2026 witgen Contributors
# SPDX-License-Identifier: Apache-2.0

"""Discovery of process projects below a workspace root."""

from __future__ import annotations

import tomllib
from pathlib import Path

from witgen.workspace.config import DEFAULT_COMPONENT_PACKAGE

# ###############
# Public Interface
# ###############

CARGO_MANIFEST = "Cargo.toml"


def component_package(manifest: dict[str, object]) -> str | None:
    """Return ``package.metadata.component.package`` of a parsed Cargo manifest, if set."""
    node: object = manifest
    for key in ("package", "metadata", "component", "package"):
        if not isinstance(node, dict) or key not in node:
            return None
        node = node[key]
    return node if isinstance(node, str) else None


def find_projects(root: Path, package: str = DEFAULT_COMPONENT_PACKAGE) -> list[Path]:
    """Return the immediate subdirectories of *root* that are process projects.

    A subdirectory qualifies when its ``Cargo.toml`` declares
    ``[package.metadata.component] package = "<package>"``. Manifests that
    cannot be read or parsed are skipped. Results are sorted by name.
    """
    projects: list[Path] = []
    if not root.is_dir():
        return projects
    for path in sorted(root.iterdir()):
        if not path.is_dir():
            continue
        manifest_path = path / CARGO_MANIFEST
        if not manifest_path.is_file():
            continue
        try:
            manifest = tomllib.loads(manifest_path.read_text(encoding="utf-8"))
        except (OSError, UnicodeDecodeError, tomllib.TOMLDecodeError):
            continue
        if component_package(manifest) == package:
            projects.append(path)
    return projects
