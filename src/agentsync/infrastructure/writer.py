"""Filesystem I/O for sources and the destination tree.

INVARIANT: The destination tree is owned by agentsync. It is removed and
recreated once per run, before any rule is written, so rules for deleted
sources never linger.

Sources are read as bytes and decoded with ``surrogateescape`` so the
published body is byte-for-byte the source content: no newline
translation, no re-encoding of invalid UTF-8.
"""

from __future__ import annotations

import logging
import shutil
from pathlib import Path

logger = logging.getLogger(__name__)

_ENCODING = "utf-8"
_ERRORS = "surrogateescape"


def reset_destination(path: Path) -> None:
    """Delete *path* entirely and create it again, empty."""
    if path.is_symlink() or path.is_file():
        path.unlink()
    elif path.exists():
        shutil.rmtree(path)
    path.mkdir(parents=True, exist_ok=True)
    logger.debug("Reset destination %s", path)


def read_source(path: Path) -> str:
    """Read a source file without altering any byte."""
    return path.read_bytes().decode(_ENCODING, errors=_ERRORS)


def write_rule(path: Path, text: str) -> None:
    """Write a rendered rule, replacing any existing file.

    Creates parent directories if they don't exist.
    """
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_bytes(text.encode(_ENCODING, errors=_ERRORS))
