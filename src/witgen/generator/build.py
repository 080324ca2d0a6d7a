# Copyright 2026 witgen Contributors
# SPDX-License-Identifier: Apache-2.0

"""Two-phase generation workflow over all process projects of a workspace.

Phase one walks the discovered projects in order. For each project the
source module is parsed, every ``#[hyperprocess]`` impl block is translated
into a WIT interface, the interface is written to the output directory and
its export statement is collected. Phase two rewrites the world manifests
with the collected exports.

Errors fall in two groups. Naming violations, unreadable or unparsable
sources and write failures abort the run by raising. A missing
``wit_world`` annotation, a missing source file, or an impl block without
exported methods only skip the affected interface and are reported as
:class:`GenerationWarning` entries.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

from witgen.errors import WitgenError
from witgen.generator.annotations import MissingAnnotationError, extract_wit_world, find_process_impls
from witgen.generator.declarations import CollisionPolicy
from witgen.generator.interface import build_interface, impl_type_name, render_interface
from witgen.generator.output import ensure_directory, write_text_atomic
from witgen.generator.world import WIT_SUFFIX, aggregate, export_statement
from witgen.model.syntax import SourceFile
from witgen.model.wit import WitInterface
from witgen.source.lexer import LexerError
from witgen.source.parser import ParseError, parse
from witgen.workspace.config import GeneratorConfig
from witgen.workspace.discovery import find_projects

# ###############
# Public Interface
# ###############


class SourceError(WitgenError):
    """Raised when a source module cannot be read or parsed."""


@dataclass(frozen=True)
class GenerationWarning:
    """A non-fatal problem that caused an interface to be skipped.

    Attributes:
        message: Human-readable description of the problem.
    """

    message: str


@dataclass(frozen=True)
class GeneratedInterface:
    """One interface produced from a ``#[hyperprocess]`` impl block.

    Attributes:
        interface: The translated interface.
        world: The ``wit_world`` named by the process annotation.
        text: The rendered WIT text.
        path: Where the text was written, or None if nothing was written.
    """

    interface: WitInterface
    world: str
    text: str
    path: Path | None = None

    @property
    def export(self) -> str:
        """The world export statement for this interface."""
        return export_statement(self.interface.name)


@dataclass
class ProjectResult:
    """Outcome of processing one project."""

    project: Path
    interfaces: list[GeneratedInterface] = field(default_factory=list)
    warnings: list[GenerationWarning] = field(default_factory=list)


@dataclass
class GenerationResult:
    """Outcome of a whole run.

    Attributes:
        projects: Per-project results in processing order.
        manifests: World manifest files written in phase two.
    """

    projects: list[ProjectResult] = field(default_factory=list)
    manifests: list[Path] = field(default_factory=list)

    @property
    def exports(self) -> list[str]:
        """Export statements of every generated interface, in processing order."""
        return [generated.export for project in self.projects for generated in project.interfaces]

    @property
    def warnings(self) -> list[GenerationWarning]:
        return [warning for project in self.projects for warning in project.warnings]


def read_source(path: Path) -> SourceFile:
    """Read and parse one Rust source module.

    Raises:
        SourceError: If the file cannot be read, tokenized or parsed.
    """
    try:
        text = path.read_text(encoding="utf-8-sig")
    except (OSError, UnicodeDecodeError) as exc:
        raise SourceError(f"Cannot read source file '{path}': {exc}") from exc
    try:
        return parse(text)
    except (LexerError, ParseError) as exc:
        raise SourceError(f"Parse error in '{path}': {exc}") from exc


def translate_source(
    source: SourceFile,
    collision_policy: CollisionPolicy = CollisionPolicy.OVERWRITE,
) -> tuple[list[GeneratedInterface], list[GenerationWarning]]:
    """Translate every ``#[hyperprocess]`` impl block of *source* without writing anything.

    Raises:
        NamingError: If an exported name violates the naming policy.
        DeclarationCollisionError: On a declaration collision under ``REJECT``.
    """
    generated: list[GeneratedInterface] = []
    warnings: list[GenerationWarning] = []
    for impl_item in find_process_impls(source):
        try:
            world = extract_wit_world(impl_item.attributes)
        except MissingAnnotationError as exc:
            warnings.append(GenerationWarning(f"Skipping process impl block: {exc}"))
            continue

        type_name = impl_type_name(impl_item)
        if type_name is None:
            warnings.append(GenerationWarning("Skipping process impl block: its type is not a plain path"))
            continue

        interface = build_interface(impl_item, type_name, source, collision_policy=collision_policy)
        if interface is None:
            warnings.append(GenerationWarning(f"No exported methods in '{type_name}', no interface generated"))
            continue
        generated.append(GeneratedInterface(interface=interface, world=world, text=render_interface(interface)))
    return generated, warnings


def process_project(project: Path, api_dir: Path, config: GeneratorConfig) -> ProjectResult:
    """Generate and write the interfaces of one project.

    Raises:
        SourceError: If the project's source module cannot be read or parsed.
        NamingError: If an exported name violates the naming policy.
        OutputWriteError: If an interface file cannot be written.
    """
    result = ProjectResult(project=project)
    source_path = project / config.source_file
    if not source_path.is_file():
        result.warnings.append(GenerationWarning(f"No {config.source_file} found for project '{project}'"))
        return result

    source = read_source(source_path)
    generated, warnings = translate_source(source, config.collision_policy)
    result.warnings.extend(warnings)
    for item in generated:
        path = api_dir / f"{item.interface.name}{WIT_SUFFIX}"
        write_text_atomic(path, item.text)
        result.interfaces.append(
            GeneratedInterface(interface=item.interface, world=item.world, text=item.text, path=path)
        )
    return result


def generate_workspace(root: Path, config: GeneratorConfig | None = None) -> GenerationResult:
    """Run both generation phases for the projects below *root*.

    Args:
        root: Directory whose immediate subdirectories are scanned for projects.
        config: Run settings; defaults apply when omitted.

    Returns:
        The per-project results and the manifests written. When no project
        is found nothing is written and existing manifests are left alone.

    Raises:
        WitgenError: On any fatal error (see module docstring).
    """
    config = config or GeneratorConfig()
    api_dir = root / config.api_directory
    ensure_directory(api_dir)

    result = GenerationResult()
    projects = find_projects(root, config.component_package)
    if not projects:
        return result

    for project in projects:
        result.projects.append(process_project(project, api_dir, config))

    result.manifests = aggregate(
        api_dir,
        result.exports,
        default_world=config.default_world,
        include=config.world_include,
    )
    return result
