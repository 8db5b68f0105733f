"""Utility functions for jsonmatch."""

from __future__ import annotations

import json
import sys
from pathlib import Path


def quote(text: str) -> str:
    """Quote a string for display, keeping printable non-ASCII characters."""
    return json.dumps(text, ensure_ascii=False)


def read_document(path: str | Path) -> bytes:
    """Read a raw document from disk, '-' meaning standard input."""
    if str(path) == "-":
        return sys.stdin.buffer.read()
    return Path(path).read_bytes()
