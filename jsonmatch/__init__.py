"""
jsonmatch - Structural JSON Comparison

Compares two JSON documents and classifies them as a full match, a
superset match (the first holds everything the second does, plus more),
a mismatch, or invalid input, together with an annotated rendering of
the differences for test failure output.

    >>> from jsonmatch import compare, DiffOptions
    >>> compare(b'{"a": 1, "b": 2}', b'{"a": 1}')[0]
    <Difference.SUPERSET_MATCH: 1>
"""

from .engine import JsonMatchEngine, compare
from .exceptions import ConfigError, DecodeError, JsonMatchError
from .models import (
    DiffOptions,
    Difference,
    Tag,
    TagRole,
)
from .parser import parse
from .presets import console_options, html_options
from .suite import (
    CaseResult,
    SuiteConfig,
    SuiteReport,
    SuiteRunner,
    run_suite,
)
from .values import (
    Bool,
    Mapping,
    Null,
    Number,
    Sequence,
    Text,
    Value,
)

__version__ = "1.0.0"
__all__ = [
    # Engine
    "JsonMatchEngine",
    "compare",
    # Options
    "DiffOptions",
    "Difference",
    "Tag",
    "TagRole",
    "console_options",
    "html_options",
    # Values
    "parse",
    "Value",
    "Null",
    "Bool",
    "Number",
    "Text",
    "Sequence",
    "Mapping",
    # Suite
    "SuiteRunner",
    "SuiteConfig",
    "SuiteReport",
    "CaseResult",
    "run_suite",
    # Errors
    "JsonMatchError",
    "DecodeError",
    "ConfigError",
]
