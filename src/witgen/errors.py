# Copyright 2026 witgen Contributors
# SPDX-License-Identifier: Apache-2.0

"""Common base class for errors reported by witgen."""


class WitgenError(Exception):
    """Base class for every error the generator reports to the user."""
