# Copyright 2026 witgen Contributors
# SPDX-License-Identifier: Apache-2.0

"""Translation of annotated Rust items into WIT interfaces and worlds.

The workspace-level workflow lives in :mod:`witgen.generator.build`.
"""

from witgen.generator.annotations import MissingAnnotationError, extract_wit_world, find_process_impls
from witgen.generator.declarations import CollisionPolicy, DeclarationCollisionError, collect_declarations
from witgen.generator.interface import (
    build_interface,
    generate_interface,
    interface_name_for,
    render_interface,
    resolve_type_closure,
)
from witgen.generator.naming import NamingError, strip_state_suffix, to_kebab_case, validate_name
from witgen.generator.output import OutputWriteError, write_text_atomic
from witgen.generator.type_mapper import PRIMITIVE_TYPES, map_type
from witgen.generator.world import aggregate, export_statement, extract_world_name, render_world

__all__ = [
    "CollisionPolicy",
    "DeclarationCollisionError",
    "MissingAnnotationError",
    "NamingError",
    "OutputWriteError",
    "PRIMITIVE_TYPES",
    "aggregate",
    "build_interface",
    "collect_declarations",
    "export_statement",
    "extract_wit_world",
    "extract_world_name",
    "find_process_impls",
    "generate_interface",
    "interface_name_for",
    "map_type",
    "render_interface",
    "render_world",
    "resolve_type_closure",
    "strip_state_suffix",
    "to_kebab_case",
    "validate_name",
    "write_text_atomic",
]
