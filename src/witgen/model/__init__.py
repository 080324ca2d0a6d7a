# Copyright 2026 witgen Contributors
# SPDX-License-Identifier: Apache-2.0

"""Syntax tree and WIT models for witgen."""

from witgen.model.syntax import (
    Attribute,
    EnumItem,
    FieldDef,
    FieldStyle,
    ImplItem,
    Item,
    MethodDef,
    OpaqueType,
    Param,
    PathType,
    ReceiverParam,
    ReferenceType,
    SourceFile,
    StructItem,
    TupleType,
    TypedParam,
    TypeExpr,
    VariantDef,
)
from witgen.model.wit import (
    ExportedFunction,
    ExportMarker,
    WitInterface,
    WitParam,
    WorldManifest,
)

__all__ = [
    # Syntax tree
    "PathType",
    "ReferenceType",
    "TupleType",
    "OpaqueType",
    "TypeExpr",
    "Attribute",
    "FieldDef",
    "FieldStyle",
    "VariantDef",
    "StructItem",
    "EnumItem",
    "ReceiverParam",
    "TypedParam",
    "Param",
    "MethodDef",
    "ImplItem",
    "Item",
    "SourceFile",
    # WIT
    "ExportMarker",
    "WitParam",
    "ExportedFunction",
    "WitInterface",
    "WorldManifest",
]
