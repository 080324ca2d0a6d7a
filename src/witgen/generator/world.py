# Copyright 2026 witgen Contributors
# SPDX-License-Identifier: Apache-2.0

"""Aggregation of generated interfaces into WIT world manifests.

A world manifest is any ``.wit`` file in the output directory with a line
starting with ``world <name>``. After all interfaces of a run have been
generated, every manifest is rewritten to export exactly the interfaces of
that run; its previous body is discarded. When no manifest exists yet, a
default one is created.
"""

from __future__ import annotations

from pathlib import Path

from witgen.generator.output import write_text_atomic
from witgen.model.wit import WorldManifest

# ###############
# Public Interface
# ###############

DEFAULT_WORLD_NAME = "async-app-template-dot-os-v0"
DEFAULT_WORLD_INCLUDE = "process-v1"
WIT_SUFFIX = ".wit"


def export_statement(interface_name: str) -> str:
    """Return the manifest line exporting *interface_name*."""
    return f"    export {interface_name};"


def extract_world_name(text: str) -> str | None:
    """Return the world name declared in *text*, or None if there is no world line.

    Only the first line starting with ``world `` is considered. The name is the
    token after ``world``, with a trailing ``{`` removed (``world app{``
    declares ``app``). If that token is empty the file has no usable name.
    """
    for line in text.splitlines():
        stripped = line.strip()
        if not stripped.startswith("world "):
            continue
        name = stripped.split()[1].rstrip("{")
        return name or None
    return None


def find_world_manifests(api_dir: Path) -> list[tuple[Path, str]]:
    """Return ``(path, world name)`` for every manifest directly inside *api_dir*.

    Files that cannot be read are ignored, as are ``.wit`` files without a
    world line (the generated interfaces).
    """
    manifests: list[tuple[Path, str]] = []
    if not api_dir.is_dir():
        return manifests
    for path in sorted(api_dir.iterdir()):
        if not path.is_file() or path.suffix != WIT_SUFFIX:
            continue
        try:
            text = path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError):
            continue
        if "world " not in text:
            continue
        name = extract_world_name(text)
        if name is not None:
            manifests.append((path, name))
    return manifests


def render_world(manifest: WorldManifest) -> str:
    """Render a manifest: the export lines followed by the include line."""
    lines = [f"world {manifest.name} {{"]
    lines.extend(manifest.exports)
    lines.append(f"    include {manifest.include};")
    lines.append("}")
    return "\n".join(lines) + "\n"


def aggregate(
    api_dir: Path,
    exports: list[str],
    *,
    default_world: str = DEFAULT_WORLD_NAME,
    include: str = DEFAULT_WORLD_INCLUDE,
) -> list[Path]:
    """Rewrite the world manifests in *api_dir* to list *exports*.

    Every existing manifest receives the same export list. If there is no
    manifest and *exports* is not empty, ``<default_world>.wit`` is created.

    Args:
        api_dir: Output directory holding the generated ``.wit`` files.
        exports: Export statements, one per processed interface, in order.
        default_world: Name of the world to synthesize when none exists.
        include: Interface package included at the end of every world.

    Returns:
        The paths of the manifests written, in write order.

    Raises:
        OutputWriteError: If a manifest cannot be written.
    """
    written: list[Path] = []
    for path, name in find_world_manifests(api_dir):
        write_text_atomic(path, render_world(WorldManifest(name=name, exports=exports, include=include)))
        written.append(path)

    if not written and exports:
        path = api_dir / f"{default_world}{WIT_SUFFIX}"
        write_text_atomic(path, render_world(WorldManifest(name=default_world, exports=exports, include=include)))
        written.append(path)
    return written

