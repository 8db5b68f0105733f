"""Value model for decoded JSON documents.

Every decoded document is a tree of immutable nodes:

    null      -> Null()
    true      -> Bool(True)
    3.14150   -> Number("3.14150")
    "text"    -> Text("text")
    [1, 2]    -> Sequence((Number("1"), Number("2")))
    {"a": 1}  -> Mapping({"a": Number("1")})

Numbers keep their literal text so that ``3.1415`` and ``3.14150`` stay
distinguishable.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any


class Value:
    """Base class for all document nodes."""

    __slots__ = ()

    kind: str = "null"

    def is_empty_container(self) -> bool:
        return False


@dataclass(frozen=True, slots=True)
class Null(Value):
    kind = "null"


@dataclass(frozen=True, slots=True)
class Bool(Value):
    value: bool

    kind = "boolean"


@dataclass(frozen=True, slots=True)
class Number(Value):
    """A number kept as its source literal, never converted to float."""
    literal: str

    kind = "number"


@dataclass(frozen=True, slots=True)
class Text(Value):
    value: str

    kind = "string"


@dataclass(frozen=True, slots=True)
class Sequence(Value):
    items: tuple[Value, ...]

    kind = "array"

    def __len__(self) -> int:
        return len(self.items)

    def is_empty_container(self) -> bool:
        return not self.items


@dataclass(frozen=True, slots=True)
class Mapping(Value):
    """
    An unordered mapping of string keys to values.

    Key order carries no meaning; renderers sort keys for stable output.
    """
    entries: dict[str, Value]

    kind = "object"

    def __init__(self, entries: dict[str, Value]):
        object.__setattr__(self, 'entries', dict(entries))

    def __hash__(self):
        return hash(frozenset(self.entries.items()))

    def __len__(self) -> int:
        return len(self.entries)

    def sorted_keys(self) -> list[str]:
        return sorted(self.entries)

    def is_empty_container(self) -> bool:
        return not self.entries


class NumberLiteral(str):
    """Marker type for number literals produced by the decoder hooks."""
    __slots__ = ()


def from_python(obj: Any) -> Value:
    """
    Convert a decoded Python object to a Value tree.

    Mapping:
        None           -> Null
        bool           -> Bool
        NumberLiteral  -> Number (literal kept verbatim)
        int/float      -> Number (via repr, for objects built in code)
        str            -> Text
        list/tuple     -> Sequence
        dict           -> Mapping
    """
    if obj is None:
        return Null()
    if isinstance(obj, Value):
        return obj
    if isinstance(obj, bool):  # Must check before int (bool is subclass of int)
        return Bool(obj)
    if isinstance(obj, NumberLiteral):
        return Number(str(obj))
    if isinstance(obj, (int, float)):
        return Number(repr(obj))
    if isinstance(obj, str):
        return Text(obj)
    if isinstance(obj, (list, tuple)):
        return Sequence(tuple(from_python(item) for item in obj))
    if isinstance(obj, dict):
        return Mapping({str(k): from_python(v) for k, v in obj.items()})

    raise TypeError(f"Cannot convert {type(obj).__name__} to a JSON value")


def nesting_depth(obj: Any) -> int:
    """
    Return how deeply containers nest in a decoded document or Value tree.

    Scalars have depth 0, ``[]`` has depth 1, ``[[1]]`` depth 2. Walks
    with an explicit stack, so any document the decoder accepted can be
    measured.
    """
    deepest = 0
    stack = [(obj, 0)]
    while stack:
        node, depth = stack.pop()
        if isinstance(node, Sequence):
            children = node.items
        elif isinstance(node, Mapping):
            children = node.entries.values()
        elif isinstance(node, (list, tuple)):
            children = node
        elif isinstance(node, dict):
            children = node.values()
        else:
            continue
        depth += 1
        deepest = max(deepest, depth)
        stack.extend((child, depth) for child in children)
    return deepest
