# Copyright 2026 witgen Contributors
# SPDX-License-Identifier: Apache-2.0

"""WIT-side entities produced by the generator."""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel
from pydantic import Field as _Field

# ###############
# Public Interface
# ###############


class ExportMarker(Enum):
    """Method attributes that put a method on the interface surface.

    Declaration order is the order marker comments are rendered in.
    """

    REMOTE = "remote"
    LOCAL = "local"
    HTTP = "http"


class WitParam(BaseModel):
    """A normalized parameter name with its WIT type text."""

    name: str
    type: str


class ExportedFunction(BaseModel):
    """A method selected for export, already translated to WIT names and types.

    Attributes:
        name: Kebab-case function name.
        params: Mapped parameters, receiver excluded.
        return_type: WIT type of the successful result (``unit`` when absent).
        markers: Export markers attached to the source method.
    """

    name: str
    params: list[WitParam] = _Field(default_factory=list)
    return_type: str = "unit"
    markers: list[ExportMarker] = _Field(default_factory=list)


class WitInterface(BaseModel):
    """A generated interface: functions plus the closure of declarations they use.

    Attributes:
        name: Kebab-case interface name.
        functions: Exported functions in source order.
        declarations: Rendered record/variant blocks in closure order.
        declaration_names: Normalized names matching ``declarations``.
    """

    name: str
    functions: list[ExportedFunction] = _Field(default_factory=list)
    declarations: list[str] = _Field(default_factory=list)
    declaration_names: list[str] = _Field(default_factory=list)


class WorldManifest(BaseModel):
    """A top-level world listing every exported interface."""

    name: str
    exports: list[str] = _Field(default_factory=list)
    include: str = "process-v1"
