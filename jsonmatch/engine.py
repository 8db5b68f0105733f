"""Main comparison engine for jsonmatch."""

from __future__ import annotations

import logging
from typing import Optional

from .differ import render_diff
from .models import DiffOptions, Difference
from .parser import to_value, try_parse

logger = logging.getLogger(__name__)

INVALID_MESSAGES = {
    Difference.BOTH_INVALID: "both arguments are invalid json",
    Difference.FIRST_INVALID: "first argument is invalid json",
    Difference.SECOND_INVALID: "second argument is invalid json",
}


class JsonMatchEngine:
    """
    Compares two JSON documents:

    1. Decoding: both documents are decoded, keeping number literals
    2. Diffing: the trees are walked together, classifying every node
       and rendering the differences

    The engine holds only its options; every call builds its own
    comparison state, so one engine can be shared between callers.
    """

    def __init__(self, options: Optional[DiffOptions] = None):
        """
        Initialize the engine.

        Args:
            options: Comparison options (uses defaults if not provided)
        """
        self.options = options or DiffOptions()

    def compare(self, first: bytes | str, second: bytes | str) -> tuple[Difference, str]:
        """
        Compare two raw JSON documents.

        FULL_MATCH means the documents are equal under the options.
        SUPERSET_MATCH means the first document holds everything the
        second does, plus more. NO_MATCH means they contradict. The
        *_INVALID results mean a document could not be decoded.

        The returned text resembles pretty-printed JSON but is meant for
        people, not parsers.

        Args:
            first: The document expected to be the superset (e.g. actual)
            second: The document it must contain (e.g. expected)

        Returns:
            (difference, message); the message is empty for a full match
        """
        a = try_parse(first)
        b = try_parse(second)

        if a is None and b is None:
            difference = Difference.BOTH_INVALID
        elif a is None:
            difference = Difference.FIRST_INVALID
        elif b is None:
            difference = Difference.SECOND_INVALID
        else:
            return self.compare_values(a, b)

        logger.debug("Skipping structural comparison: %s", difference.name)
        return difference, INVALID_MESSAGES[difference]

    def compare_values(self, first, second) -> tuple[Difference, str]:
        """
        Compare two already decoded documents.

        Accepts Value trees or plain Python objects (dicts, lists, ...).

        Raises:
            DecodeError: if either document nests deeper than MAX_DEPTH
        """
        a = to_value(first)
        b = to_value(second)

        difference, message = render_diff(a, b, self.options)
        logger.debug("Comparison finished: %s", difference.name)
        return difference, message


def compare(
    first: bytes | str,
    second: bytes | str,
    options: Optional[DiffOptions] = None
) -> tuple[Difference, str]:
    """
    Convenience function to compare two JSON documents.

    Args:
        first: The document expected to be the superset
        second: The document it must contain
        options: Optional comparison options

    Returns:
        (difference, message)
    """
    engine = JsonMatchEngine(options)
    return engine.compare(first, second)
