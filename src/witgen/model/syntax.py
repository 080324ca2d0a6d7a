# Copyright 2026 witgen Contributors
# SPDX-License-Identifier: Apache-2.0

"""Syntax tree for the Rust source subset consumed by the WIT generator."""

from __future__ import annotations

from enum import Enum
from typing import Annotated, Literal

from pydantic import BaseModel
from pydantic import Field as _Field

# ###############
# Public Interface
# ###############


class PathType(BaseModel):
    """A (possibly qualified) type path such as ``std::vec::Vec<T>``.

    Only the angle-bracketed type arguments of the last segment are kept;
    lifetimes and const arguments are dropped by the parser.
    """

    kind: Literal["path"] = "path"
    segments: list[str] = _Field(default_factory=list)
    args: list[TypeExpr] = _Field(default_factory=list)

    @property
    def name(self) -> str:
        """Return the last path segment, or an empty string for an empty path."""
        return self.segments[-1] if self.segments else ""


class ReferenceType(BaseModel):
    """A borrowed reference ``&T`` or ``&mut T``."""

    kind: Literal["reference"] = "reference"
    elem: TypeExpr
    mutable: bool = False


class TupleType(BaseModel):
    """A tuple type; the empty tuple is the unit type."""

    kind: Literal["tuple"] = "tuple"
    elems: list[TypeExpr] = _Field(default_factory=list)


class OpaqueType(BaseModel):
    """Any type shape without a WIT counterpart (arrays, slices, pointers, ...)."""

    kind: Literal["opaque"] = "opaque"
    description: str


# A source type expression, discriminated by `kind`.
TypeExpr = Annotated[
    PathType | ReferenceType | TupleType | OpaqueType,
    _Field(discriminator="kind"),
]


class Attribute(BaseModel):
    """An outer attribute such as ``#[remote]`` or ``#[hyperprocess(wit_world = "x")]``.

    Attributes:
        path: The attribute path joined with ``::``.
        arguments: Top-level ``key = "literal"`` pairs from the argument list.
    """

    path: str
    arguments: dict[str, str] = _Field(default_factory=dict)

    def is_ident(self, name: str) -> bool:
        """Return True if the attribute path is exactly the single identifier *name*."""
        return self.path == name


class FieldDef(BaseModel):
    """A struct or variant field. Tuple-style fields have no name."""

    name: str | None = None
    type: TypeExpr
    attributes: list[Attribute] = _Field(default_factory=list)


class FieldStyle(Enum):
    """How the fields of a struct or enum variant are written."""

    NAMED = "named"
    TUPLE = "tuple"
    UNIT = "unit"


class VariantDef(BaseModel):
    """One case of an enum."""

    name: str
    style: FieldStyle = FieldStyle.UNIT
    fields: list[FieldDef] = _Field(default_factory=list)
    attributes: list[Attribute] = _Field(default_factory=list)


class StructItem(BaseModel):
    """A top-level ``struct`` declaration."""

    kind: Literal["struct"] = "struct"
    name: str
    style: FieldStyle = FieldStyle.NAMED
    fields: list[FieldDef] = _Field(default_factory=list)
    attributes: list[Attribute] = _Field(default_factory=list)


class EnumItem(BaseModel):
    """A top-level ``enum`` declaration."""

    kind: Literal["enum"] = "enum"
    name: str
    variants: list[VariantDef] = _Field(default_factory=list)
    attributes: list[Attribute] = _Field(default_factory=list)


class ReceiverParam(BaseModel):
    """The implicit receiver of a method: ``self``, ``&self``, ``&mut self``."""

    kind: Literal["receiver"] = "receiver"
    reference: bool = False
    mutable: bool = False


class TypedParam(BaseModel):
    """A ``pattern: Type`` parameter.

    ``binding`` is the bound identifier, or None when the pattern is not a
    plain identifier (tuple or struct destructuring, ``_``).
    """

    kind: Literal["typed"] = "typed"
    binding: str | None = None
    type: TypeExpr


Param = Annotated[ReceiverParam | TypedParam, _Field(discriminator="kind")]


class MethodDef(BaseModel):
    """A function inside an ``impl`` block. ``output`` is None when no return type is written."""

    name: str
    attributes: list[Attribute] = _Field(default_factory=list)
    params: list[Param] = _Field(default_factory=list)
    output: TypeExpr | None = None

    def has_attribute(self, name: str) -> bool:
        """Return True if the method carries the single-identifier attribute *name*."""
        return any(attr.is_ident(name) for attr in self.attributes)


class ImplItem(BaseModel):
    """An ``impl [Trait for] Type { ... }`` block."""

    kind: Literal["impl"] = "impl"
    self_type: TypeExpr
    trait_path: str | None = None
    methods: list[MethodDef] = _Field(default_factory=list)
    attributes: list[Attribute] = _Field(default_factory=list)

    def find_attribute(self, name: str) -> Attribute | None:
        """Return the first attribute whose path is *name*, or None."""
        for attr in self.attributes:
            if attr.is_ident(name):
                return attr
        return None


Item = Annotated[StructItem | EnumItem | ImplItem, _Field(discriminator="kind")]


class SourceFile(BaseModel):
    """The items of one parsed source module, in source order."""

    items: list[Item] = _Field(default_factory=list)

    @property
    def structs(self) -> list[StructItem]:
        return [item for item in self.items if isinstance(item, StructItem)]

    @property
    def enums(self) -> list[EnumItem]:
        return [item for item in self.items if isinstance(item, EnumItem)]

    @property
    def impls(self) -> list[ImplItem]:
        return [item for item in self.items if isinstance(item, ImplItem)]


# Resolve forward references in recursive models.
PathType.model_rebuild()
ReferenceType.model_rebuild()
TupleType.model_rebuild()
FieldDef.model_rebuild()
VariantDef.model_rebuild()
StructItem.model_rebuild()
EnumItem.model_rebuild()
TypedParam.model_rebuild()
MethodDef.model_rebuild()
ImplItem.model_rebuild()
SourceFile.model_rebuild()
