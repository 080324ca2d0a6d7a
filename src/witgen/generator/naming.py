# Copyright 2026 witgen Contributors
# SPDX-License-Identifier: Apache-2.0

"""Identifier normalization and naming-policy checks for WIT output."""

from witgen.errors import WitgenError

# ###############
# Public Interface
# ###############


class NamingError(WitgenError):
    """Raised when a source identifier cannot be used as a WIT name.

    Attributes:
        name: The offending raw identifier.
        kind: Category label of the identifier (``"Type"``, ``"Field"``, ...).
        reason: What is wrong with it.
    """

    def __init__(self, name: str, kind: str, reason: str) -> None:
        super().__init__(f"{kind} name '{name}' {reason}, which is not allowed")
        self.name = name
        self.kind = kind
        self.reason = reason


def validate_name(name: str, kind: str) -> None:
    """Reject identifiers containing a decimal digit or the word ``stream``.

    Args:
        name: Raw source identifier.
        kind: Category label used in the error message.

    Raises:
        NamingError: If the name violates the naming policy.
    """
    if any(ch in _DIGITS for ch in name):
        raise NamingError(name, kind, "contains numbers")
    if "stream" in name.lower():
        raise NamingError(name, kind, "contains 'stream'")


def to_kebab_case(name: str) -> str:
    """Convert a snake_case or CamelCase identifier to kebab-case.

    Names containing an underscore only have their underscores replaced.
    Otherwise a hyphen is inserted before an uppercase letter that follows a
    lowercase one or precedes one, so acronyms stay together
    (``HTMLPage`` becomes ``html-page``).
    """
    if "_" in name:
        return name.replace("_", "-")

    result: list[str] = []
    for index, ch in enumerate(name):
        if ch.isupper():
            if index > 0 and (
                name[index - 1].islower() or (index < len(name) - 1 and name[index + 1].islower())
            ):
                result.append("-")
            result.append(ch.lower())
        else:
            result.append(ch)
    return "".join(result)


def strip_state_suffix(name: str) -> str:
    """Remove a trailing ``State`` from a type name (``OrderState`` -> ``Order``)."""
    if name.endswith(_STATE_SUFFIX):
        return name[: -len(_STATE_SUFFIX)]
    return name


# ################
# Implementation
# ################

_DIGITS = frozenset("0123456789")
_STATE_SUFFIX = "State"
