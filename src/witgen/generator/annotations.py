# Copyright 2026 witgen Contributors
# SPDX-License-Identifier: Apache-2.0

"""Lookup of the ``#[hyperprocess(...)]`` annotation that marks a process impl block."""

from __future__ import annotations

from witgen.errors import WitgenError
from witgen.model.syntax import Attribute, ImplItem, SourceFile

# ###############
# Public Interface
# ###############

PROCESS_ATTRIBUTE = "hyperprocess"
WORLD_ARGUMENT = "wit_world"


class MissingAnnotationError(WitgenError):
    """Raised when the process attribute lacks a usable ``wit_world`` argument."""


def find_process_impls(source: SourceFile) -> list[ImplItem]:
    """Return the top-level impl blocks carrying ``#[hyperprocess]``, in source order."""
    return [impl for impl in source.impls if impl.find_attribute(PROCESS_ATTRIBUTE) is not None]


def extract_wit_world(attributes: list[Attribute]) -> str:
    """Return the ``wit_world`` string of the first ``#[hyperprocess]`` attribute.

    Raises:
        MissingAnnotationError: If there is no such attribute, or its
            ``wit_world`` argument is absent or not a string literal.
    """
    for attr in attributes:
        if attr.is_ident(PROCESS_ATTRIBUTE) and WORLD_ARGUMENT in attr.arguments:
            return attr.arguments[WORLD_ARGUMENT]
    raise MissingAnnotationError(f"{WORLD_ARGUMENT} not found in {PROCESS_ATTRIBUTE} attribute")
