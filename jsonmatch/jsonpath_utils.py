"""JSONPath utilities for locating documents inside case files."""

from __future__ import annotations

from typing import Any

from jsonpath_ng import parse as jsonpath_parse
from jsonpath_ng.exceptions import JsonPathLexerError, JsonPathParserError

from .exceptions import ConfigError


class JSONPathMatcher:
    """Utility class for JSONPath matching."""

    # Cache for compiled JSONPath expressions
    _cache: dict = {}

    @classmethod
    def compile(cls, path: str):
        """Compile and cache a JSONPath expression."""
        if path not in cls._cache:
            try:
                cls._cache[path] = jsonpath_parse(path)
            except (JsonPathLexerError, JsonPathParserError) as e:
                raise ConfigError(f"Invalid JSONPath expression '{path}': {e}", {"path": path})
        return cls._cache[path]

    @classmethod
    def find_values(cls, data: Any, path: str) -> list[Any]:
        """Find all values matching a JSONPath expression."""
        expr = cls.compile(path)
        return [m.value for m in expr.find(data)]

    @classmethod
    def find_one(cls, data: Any, path: str) -> Any:
        """
        Find the single value at a JSONPath.

        Raises:
            KeyError: if the path matches nothing
            ValueError: if the path matches more than one value
        """
        values = cls.find_values(data, path)
        if not values:
            raise KeyError(f"No value at {path}")
        if len(values) > 1:
            raise ValueError(f"{path} matched {len(values)} values, expected one")
        return values[0]
