# Copyright 2026 witgen Contributors
# SPDX-License-Identifier: Apache-2.0

"""Collection of record and variant declarations from a parsed source file.

Every top-level struct with named fields becomes a WIT ``record`` and every
top-level enum becomes a WIT ``variant``. Declarations are rendered eagerly
and indexed by their kebab-case name; the interface generator later picks the
subset an interface actually needs.
"""

from __future__ import annotations

from enum import Enum

from witgen.errors import WitgenError
from witgen.generator.naming import to_kebab_case, validate_name
from witgen.generator.type_mapper import map_type
from witgen.model.syntax import EnumItem, FieldStyle, SourceFile, StructItem, VariantDef

# ###############
# Public Interface
# ###############


class CollisionPolicy(Enum):
    """What to do when two declarations normalize to the same WIT name."""

    OVERWRITE = "overwrite"
    REJECT = "reject"


class DeclarationCollisionError(WitgenError):
    """Raised under :attr:`CollisionPolicy.REJECT` when two declarations share a WIT name."""

    def __init__(self, wit_name: str, first: str, second: str) -> None:
        super().__init__(f"Types '{first}' and '{second}' both map to WIT name '{wit_name}'")
        self.wit_name = wit_name
        self.first = first
        self.second = second


def collect_declarations(
    source: SourceFile,
    collision_policy: CollisionPolicy = CollisionPolicy.OVERWRITE,
) -> dict[str, str]:
    """Render every top-level struct and enum of *source* as WIT.

    Structs without named fields (tuple, unit or empty structs) are left out.
    Enums are always rendered, even without cases. With the default
    ``OVERWRITE`` policy a later declaration replaces an earlier one that
    normalizes to the same name.

    Args:
        source: The parsed source module.
        collision_policy: How to treat two declarations with the same WIT name.

    Returns:
        A mapping from kebab-case type name to the rendered declaration block.

    Raises:
        NamingError: If a type, field or case name violates the naming policy.
        DeclarationCollisionError: On a name collision under ``REJECT``.
    """
    declarations: dict[str, str] = {}
    raw_names: dict[str, str] = {}
    for item in source.items:
        if isinstance(item, StructItem):
            rendered = _render_record(item)
        elif isinstance(item, EnumItem):
            rendered = _render_variant(item)
        else:
            continue
        if rendered is None:
            continue
        name, text = rendered
        if name in raw_names and collision_policy is CollisionPolicy.REJECT:
            raise DeclarationCollisionError(name, raw_names[name], item.name)
        raw_names[name] = item.name
        declarations[name] = text
    return declarations


# ################
# Implementation
# ################

_INDENT = "    "
_MEMBER_INDENT = "        "


def _render_record(item: StructItem) -> tuple[str, str] | None:
    """Return ``(name, text)`` for a struct, or None if it has no named fields."""
    validate_name(item.name, "Struct")
    name = to_kebab_case(item.name)
    if item.style is not FieldStyle.NAMED:
        return None

    fields: list[str] = []
    for field_def in item.fields:
        if field_def.name is None:
            continue
        validate_name(field_def.name, "Field")
        # Each field gets its own set; cross-declaration references are
        # discovered later by the interface closure.
        used_types: set[str] = set()
        field_type = map_type(field_def.type, used_types)
        fields.append(f"{_MEMBER_INDENT}{to_kebab_case(field_def.name)}: {field_type}")

    if not fields:
        return None
    return name, _render_block("record", name, fields)


def _render_variant(item: EnumItem) -> tuple[str, str]:
    validate_name(item.name, "Enum")
    name = to_kebab_case(item.name)
    cases = [_render_case(variant) for variant in item.variants]
    return name, _render_block("variant", name, cases)


def _render_case(variant: VariantDef) -> str:
    validate_name(variant.name, "Enum variant")
    case_name = to_kebab_case(variant.name)
    if variant.style is FieldStyle.TUPLE and len(variant.fields) == 1:
        used_types: set[str] = set()
        payload = map_type(variant.fields[0].type, used_types)
        return f"{_MEMBER_INDENT}{case_name}({payload})"
    # Unit cases, and cases with several or named fields, render bare.
    return f"{_MEMBER_INDENT}{case_name}"


def _render_block(keyword: str, name: str, members: list[str]) -> str:
    return f"{_INDENT}{keyword} {name} {{\n" + ",\n".join(members) + f"\n{_INDENT}}}"
