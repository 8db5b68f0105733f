"""Decoding raw JSON text into Value trees."""

from __future__ import annotations

import json
import logging
from typing import Any

from .exceptions import DecodeError
from .values import NumberLiteral, Value, from_python, nesting_depth

logger = logging.getLogger(__name__)

# Deepest container nesting the recursive comparison walk accepts
MAX_DEPTH = 200


def _reject_constant(name: str):
    raise ValueError(f"Non-standard constant not allowed: {name}")


def loads(document: bytes | str) -> Any:
    """
    Decode a JSON document into plain Python objects.

    Numbers come back as NumberLiteral strings holding the source
    literal. Trailing data, invalid UTF-8 and the NaN/Infinity
    extensions are rejected.

    Raises:
        DecodeError: if the document is not valid JSON
    """
    try:
        return json.loads(
            document,
            parse_float=NumberLiteral,
            parse_int=NumberLiteral,
            parse_constant=_reject_constant,
        )
    except json.JSONDecodeError as e:
        raise DecodeError(
            f"Invalid JSON at line {e.lineno}, column {e.colno}: {e.msg}",
            line=e.lineno,
            column=e.colno,
            reason=e.msg
        )
    except RecursionError:
        raise DecodeError("Invalid JSON: nesting too deep", reason="nesting too deep")
    except (ValueError, TypeError) as e:
        # UnicodeDecodeError is a ValueError subclass
        raise DecodeError(f"Invalid JSON: {e}", reason=str(e))


def parse(document: bytes | str) -> Value:
    """
    Decode a JSON document into a Value tree.

    Args:
        document: Raw JSON as bytes or text

    Returns:
        The decoded Value

    Raises:
        DecodeError: if the document is not valid JSON
    """
    return to_value(loads(document))


def to_value(obj: Any) -> Value:
    """
    Convert a decoded document to a Value tree, enforcing MAX_DEPTH.

    Raises:
        DecodeError: if containers nest deeper than MAX_DEPTH
    """
    depth = nesting_depth(obj)
    if depth > MAX_DEPTH:
        raise DecodeError(
            f"Invalid JSON: nesting depth {depth} exceeds {MAX_DEPTH}",
            reason="nesting too deep"
        )
    return from_python(obj)


def try_parse(document: bytes | str) -> Value | None:
    """Decode a document, returning None when it is malformed."""
    try:
        return parse(document)
    except DecodeError as e:
        logger.debug("Document failed to decode: %s", e.message)
        return None
