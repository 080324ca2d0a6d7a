# Copyright 2026 witgen Contributors
# SPDX-License-Identifier: Apache-2.0

"""Whole-file replacement of generated WIT files."""

from __future__ import annotations

import os
import stat
import tempfile
from pathlib import Path

from witgen.errors import WitgenError

# ###############
# Public Interface
# ###############


class OutputWriteError(WitgenError):
    """Raised when a generated file or the output directory cannot be written."""


def ensure_directory(directory: Path) -> None:
    """Create *directory* and its parents if they do not exist.

    Raises:
        OutputWriteError: If the directory cannot be created.
    """
    try:
        directory.mkdir(parents=True, exist_ok=True)
    except OSError as exc:
        raise OutputWriteError(f"Cannot create output directory '{directory}': {exc}") from exc


def write_text_atomic(path: Path, text: str) -> None:
    """Replace the contents of *path* with *text*.

    The text is written to a temporary file next to *path* and renamed over
    it, so readers see either the old file or the complete new one. The
    permissions of an existing file are kept; a new file gets the default
    mode for the current umask.

    Raises:
        OutputWriteError: If the file cannot be written.
    """
    tmp_name: str | None = None
    try:
        mode = _target_mode(path)
        with tempfile.NamedTemporaryFile(
            mode="w",
            encoding="utf-8",
            dir=path.parent,
            prefix=f".{path.name}.",
            suffix=".tmp",
            delete=False,
        ) as tmp:
            tmp_name = tmp.name
            tmp.write(text)
        # NamedTemporaryFile always creates the file with mode 0600.
        os.chmod(tmp_name, mode)
        os.replace(tmp_name, path)
    except OSError as exc:
        if tmp_name is not None and os.path.exists(tmp_name):
            os.unlink(tmp_name)
        raise OutputWriteError(f"Failed to write '{path}': {exc}") from exc


# ################
# Implementation
# ################

_DEFAULT_FILE_MODE = 0o666


def _target_mode(path: Path) -> int:
    """Return the permission bits *path* should have after it is rewritten."""
    try:
        return stat.S_IMODE(path.stat().st_mode)
    except FileNotFoundError:
        pass
    # os.umask can only be read by setting it.
    umask = os.umask(0)
    os.umask(umask)
    return _DEFAULT_FILE_MODE & ~umask
