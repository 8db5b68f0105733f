"""Data models for jsonmatch."""

from __future__ import annotations

from dataclasses import dataclass, field, fields
from enum import Enum, IntEnum
from pathlib import Path
from typing import Iterable, Optional

import yaml

from .exceptions import ConfigError


class Difference(IntEnum):
    """
    Outcome of a comparison.

    FULL_MATCH < SUPERSET_MATCH < NO_MATCH are ordered by severity. The
    *_INVALID members are only produced before structural comparison
    starts, when a document fails to decode.
    """
    FULL_MATCH = 0
    SUPERSET_MATCH = 1
    NO_MATCH = 2
    FIRST_INVALID = 3
    SECOND_INVALID = 4
    BOTH_INVALID = 5

    @property
    def is_invalid(self) -> bool:
        return self >= Difference.FIRST_INVALID

    @property
    def is_match(self) -> bool:
        """True for full and superset matches."""
        return self <= Difference.SUPERSET_MATCH

    @classmethod
    def from_name(cls, name: str) -> 'Difference':
        """Look up a member by name, accepting 'FullMatch' and 'full_match' spellings."""
        normalized = ''.join(ch for ch in name if ch.isalnum()).lower()
        for member in cls:
            if member.name.replace('_', '').lower() == normalized:
                return member
        raise ValueError(f"Unknown difference: {name}")


class TagRole(Enum):
    NORMAL = "normal"
    ADDED = "added"
    REMOVED = "removed"
    CHANGED = "changed"


@dataclass(frozen=True)
class Tag:
    """Begin/end markup wrapped around a rendered span."""
    begin: str = ""
    end: str = ""

    @classmethod
    def from_dict(cls, data: dict) -> 'Tag':
        if not isinstance(data, dict):
            raise ConfigError("Tag must be a mapping with 'begin' and 'end'",
                              {"type": type(data).__name__})
        unknown = set(data) - {"begin", "end"}
        if unknown:
            raise ConfigError(f"Unknown tag keys: {sorted(unknown)}")
        return cls(begin=str(data.get("begin", "")), end=str(data.get("end", "")))


def _field_set(names: Optional[Iterable[str]]) -> frozenset[str]:
    if names is None:
        return frozenset()
    if isinstance(names, str):
        return frozenset([names])
    return frozenset(str(n) for n in names)


@dataclass
class DiffOptions:
    """Options controlling matching and rendering."""
    normal: Tag = field(default_factory=Tag)
    added: Tag = field(default_factory=Tag)
    removed: Tag = field(default_factory=Tag)
    changed: Tag = field(default_factory=Tag)
    prefix: str = ""
    indent: str = ""
    print_types: bool = False
    fuzzy_fields: frozenset[str] = field(default_factory=frozenset)
    ignore_fields: frozenset[str] = field(default_factory=frozenset)
    string_as_map_fields: frozenset[str] = field(default_factory=frozenset)
    null_as_empty: bool = False

    def __post_init__(self):
        self.fuzzy_fields = _field_set(self.fuzzy_fields)
        self.ignore_fields = _field_set(self.ignore_fields)
        self.string_as_map_fields = _field_set(self.string_as_map_fields)

    def tag_for(self, role: TagRole) -> Tag:
        return getattr(self, role.value)

    @classmethod
    def from_dict(cls, data: Optional[dict]) -> 'DiffOptions':
        """
        Build options from a plain mapping.

        A 'preset' key ('console' or 'html') seeds the options; the
        remaining keys override it. Role tags are given as
        {begin, end} mappings.

        Raises:
            ConfigError: on unknown keys or malformed values
        """
        data = dict(data or {})
        data.pop("suite", None)

        from .presets import get_preset

        preset_name = data.pop("preset", None)
        options = get_preset(preset_name) if preset_name else cls()

        known = {f.name for f in fields(cls)}
        unknown = set(data) - known
        if unknown:
            raise ConfigError(f"Unknown option keys: {sorted(unknown)}",
                              {"keys": sorted(unknown)})

        for role in TagRole:
            if role.value in data:
                setattr(options, role.value, Tag.from_dict(data.pop(role.value)))

        for name in ("prefix", "indent"):
            if name in data:
                value = data.pop(name)
                setattr(options, name, "" if value is None else str(value))

        for name in ("print_types", "null_as_empty"):
            if name in data:
                value = data.pop(name)
                if not isinstance(value, bool):
                    raise ConfigError(f"Option '{name}' must be a boolean",
                                      {"type": type(value).__name__})
                setattr(options, name, value)

        for name in ("fuzzy_fields", "ignore_fields", "string_as_map_fields"):
            if name in data:
                value = data.pop(name)
                if value is not None and not isinstance(value, (list, tuple, set, frozenset, str)):
                    raise ConfigError(f"Option '{name}' must be a list of field names",
                                      {"type": type(value).__name__})
                setattr(options, name, _field_set(value))

        return options

    @classmethod
    def from_file(cls, path: str | Path) -> 'DiffOptions':
        """Load options from a YAML or JSON file."""
        return cls.from_dict(load_config_file(path))


def load_config_file(path: str | Path) -> dict:
    """Load a YAML/JSON configuration file into a dict."""
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Options file not found: {path}")

    with open(path, 'r') as f:
        content = f.read()

    # JSON is valid YAML, so one loader covers both
    try:
        data = yaml.safe_load(content)
    except yaml.YAMLError as e:
        raise ConfigError(f"Failed to parse options file: {e}", {"path": str(path)})

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigError("Options file must contain a mapping",
                          {"path": str(path), "type": type(data).__name__})
    return data
