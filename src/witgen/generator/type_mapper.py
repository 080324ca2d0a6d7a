# Copyright 2026 witgen Contributors
# SPDX-License-Identifier: Apache-2.0

"""Translation of Rust type expressions into WIT type expressions."""

from __future__ import annotations

from witgen.generator.naming import to_kebab_case, validate_name
from witgen.model.syntax import PathType, ReferenceType, TupleType, TypeExpr

# ###############
# Public Interface
# ###############

# Rust primitive type name -> WIT spelling.
PRIMITIVE_TYPES: dict[str, str] = {
    "i32": "s32",
    "u32": "u32",
    "i64": "s64",
    "u64": "u64",
    "f32": "f32",
    "f64": "f64",
    "String": "string",
    "bool": "bool",
}

UNIT_TYPE = "unit"
UNKNOWN_TYPE = "unknown"


def map_type(type_expr: TypeExpr, used_types: set[str]) -> str:
    """Return the WIT spelling of *type_expr*.

    Custom types are referenced by their kebab-case name and recorded in
    *used_types* so callers can later emit their declarations. Shapes with no
    WIT equivalent map to ``unknown`` instead of failing.

    Args:
        type_expr: The source type expression.
        used_types: Output set receiving the normalized names of every custom
            type referenced, at any nesting depth.

    Returns:
        The WIT type text, e.g. ``list<option<string>>``.

    Raises:
        NamingError: If a custom type name violates the naming policy.
    """
    if isinstance(type_expr, ReferenceType):
        return map_type(type_expr.elem, used_types)
    if isinstance(type_expr, TupleType):
        if not type_expr.elems:
            return UNIT_TYPE
        elems = [map_type(elem, used_types) for elem in type_expr.elems]
        return f"tuple<{', '.join(elems)}>"
    if isinstance(type_expr, PathType) and type_expr.segments:
        return _map_path(type_expr, used_types)
    return UNKNOWN_TYPE


# ################
# Implementation
# ################

_CONTAINERS: dict[str, str] = {
    "Vec": "list",
    "Option": "option",
}


def _map_path(path: PathType, used_types: set[str]) -> str:
    name = path.name
    if name in PRIMITIVE_TYPES:
        return PRIMITIVE_TYPES[name]
    if name in _CONTAINERS:
        if not path.args:
            return f"{_CONTAINERS[name]}<any>"
        return f"{_CONTAINERS[name]}<{map_type(path.args[0], used_types)}>"

    validate_name(name, "Type")
    kebab = to_kebab_case(name)
    used_types.add(kebab)
    return kebab

