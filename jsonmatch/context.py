"""Per-comparison state: nesting, open markup tag and aggregate result."""

from __future__ import annotations

from typing import Optional, TextIO

from .models import DiffOptions, Difference, TagRole
from .utils import quote


class ComparisonContext:
    """
    Mutable state for a single top-level comparison.

    Tracks the indentation level, the tag role whose begin marker is
    currently open, the bare name of the key being visited, and the
    aggregate classification. The aggregate only ever grows in severity.
    """

    def __init__(self, options: DiffOptions):
        self.options = options
        self.level = 0
        self.open_role: Optional[TagRole] = None
        self.difference = Difference.FULL_MATCH
        self.current_key: Optional[str] = None

    def is_fuzzy(self) -> bool:
        return self.current_key is not None and self.current_key in self.options.fuzzy_fields

    def is_ignored(self, key: str) -> bool:
        return key in self.options.ignore_fields

    def is_string_as_map(self) -> bool:
        return (self.current_key is not None
                and self.current_key in self.options.string_as_map_fields)

    def tag(self, buf: TextIO, role: TagRole):
        """Switch the open tag to ``role``; a no-op if it is already open."""
        if self.open_role is role:
            return
        if self.open_role is not None:
            buf.write(self.options.tag_for(self.open_role).end)
        buf.write(self.options.tag_for(role).begin)
        self.open_role = role

    def close(self, buf: TextIO):
        if self.open_role is not None:
            buf.write(self.options.tag_for(self.open_role).end)

    def newline(self, buf: TextIO, text: str):
        """Write ``text`` and break the line, keeping the open tag well-formed."""
        buf.write(text)
        self.close(buf)
        buf.write("\n")
        buf.write(self.options.prefix)
        buf.write(self.options.indent * self.level)
        if self.open_role is not None:
            buf.write(self.options.tag_for(self.open_role).begin)

    def key(self, buf: TextIO, name: str):
        buf.write(quote(name))
        buf.write(": ")

    def result(self, difference: Difference):
        """Record a node result into the aggregate."""
        if difference > self.difference:
            self.difference = difference
