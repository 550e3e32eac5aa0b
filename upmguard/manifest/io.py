"""Byte-exact document read and whole-document overwrite."""

from __future__ import annotations

import os
import tempfile
from pathlib import Path

ENCODING = "utf-8"


def read_document(path: Path) -> str:
    """Read *path* without newline translation.

    A leading byte-order mark is dropped; everything else is kept as-is.
    """
    return path.read_bytes().decode("utf-8-sig")


def write_document(path: Path, text: str) -> None:
    """Overwrite *path* with *text* (UTF-8, no BOM) in one step.

    The content goes to a temp file in the same directory which then replaces
    the target, so a failed write never leaves a half-written document.
    """
    fd, tmp_name = tempfile.mkstemp(dir=path.parent, prefix=f".{path.name}.", suffix=".tmp")
    try:
        with os.fdopen(fd, "wb") as fh:
            fh.write(text.encode(ENCODING))
        os.replace(tmp_name, path)
    except BaseException:
        try:
            os.unlink(tmp_name)
        except FileNotFoundError:
            pass
        raise
