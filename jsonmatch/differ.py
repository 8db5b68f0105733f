"""Structural comparison and diff rendering for jsonmatch."""

from __future__ import annotations

import io
import logging
from typing import TextIO

from .context import ComparisonContext
from .models import DiffOptions, Difference, TagRole
from .parser import try_parse
from .utils import quote
from .values import (
    Bool,
    Mapping,
    Null,
    Number,
    Sequence,
    Text,
    Value,
)

logger = logging.getLogger(__name__)


class Differ:
    """
    Walks two value trees in lock-step, classifying and rendering them.

    Each node is classified and written to the caller's buffer in the
    same pass. Container children are rendered into scratch buffers and
    only appended when they differ, so fully matching subtrees never
    show up in the output.

    Handles:
    - Null values, optionally equal to empty containers (null_as_empty)
    - Fuzzy fields, which match whatever value they hold
    - Ignored fields, which are skipped on both sides
    - String-as-map fields, whose text is compared as embedded JSON
    """

    def __init__(self, context: ComparisonContext):
        self.context = context
        self.options = context.options

    def diff(self, a: Value, b: Value, buf: TextIO) -> Difference:
        """
        Compare two values and render the result into ``buf``.

        Args:
            a: The value from the first (expected superset) document
            b: The value from the second document
            buf: Output buffer

        Returns:
            The classification of this node
        """
        ctx = self.context
        is_fuzzy = ctx.is_fuzzy()

        if isinstance(a, Null) or isinstance(b, Null):
            other = b if isinstance(a, Null) else a
            if (is_fuzzy
                    or (isinstance(a, Null) and isinstance(b, Null))
                    or (self.options.null_as_empty and other.is_empty_container())):
                return self._match(buf, a, full=False)
            return self._mismatch(buf, a, b)

        if a.kind != b.kind:
            return self._mismatch(buf, a, b)

        if is_fuzzy:
            return self._match(buf, a, full=False)

        if isinstance(a, Bool):
            if a.value != b.value:
                return self._mismatch(buf, a, b)
        elif isinstance(a, Number):
            # Literal comparison: 1.0 and 1.00 differ
            if a.literal != b.literal:
                return self._mismatch(buf, a, b)
        elif isinstance(a, Text):
            if a.value != b.value:
                difference = self._diff_text(a, b, buf)
                if difference != Difference.FULL_MATCH:
                    return difference
        elif isinstance(a, Sequence):
            return self._diff_sequences(a, b, buf)
        elif isinstance(a, Mapping):
            return self._diff_mappings(a, b, buf)

        return self._match(buf, a, full=True)

    def _diff_text(self, a: Text, b: Text, buf: TextIO) -> Difference:
        """Compare unequal strings, decoding them first for string-as-map fields."""
        if not self.context.is_string_as_map():
            return self._mismatch(buf, a, b)

        embedded_a = try_parse(a.value)
        embedded_b = try_parse(b.value)
        if embedded_a is None or embedded_b is None:
            logger.debug("Field %r does not hold embedded JSON on both sides, comparing as text",
                         self.context.current_key)
            return self._mismatch(buf, a, b)

        try:
            difference, message = render_diff(embedded_a, embedded_b, self.options)
        except RecursionError:
            # Embedded documents nested inside embedded documents
            logger.debug("Field %r nests embedded JSON too deeply, comparing as text",
                         self.context.current_key)
            return self._mismatch(buf, a, b)

        if difference != Difference.FULL_MATCH:
            buf.write(message)
            self.context.result(difference)
        return difference

    def _diff_sequences(self, a: Sequence, b: Sequence, buf: TextIO) -> Difference:
        """Compare arrays index by index."""
        ctx = self.context
        ctx.tag(buf, TagRole.NORMAL)

        size = max(len(a.items), len(b.items))
        if size == 0:
            buf.write("[]")
            self._write_type(buf, a)
            return Difference.FULL_MATCH

        ctx.level += 1
        ctx.newline(buf, "[")

        result = Difference.FULL_MATCH
        first = True
        for i in range(size):
            item_buf = io.StringIO()
            saved_role = ctx.open_role

            if i < len(a.items) and i < len(b.items):
                item = self.diff(a.items[i], b.items[i], item_buf)
            elif i < len(a.items):
                item = self._removed(item_buf, a.items[i])
            else:
                item = self._added(item_buf, b.items[i])

            if self._append_child(buf, item_buf, item, saved_role, first):
                first = False
                result = max(result, item)

        ctx.level -= 1
        ctx.newline(buf, "")
        buf.write("]")
        self._write_type(buf, a)
        return result

    def _diff_mappings(self, a: Mapping, b: Mapping, buf: TextIO) -> Difference:
        """Compare objects key by key, in sorted key order."""
        ctx = self.context
        ctx.tag(buf, TagRole.NORMAL)

        keys = sorted(set(a.entries) | set(b.entries))
        if not keys:
            buf.write("{}")
            self._write_type(buf, a)
            return Difference.FULL_MATCH

        ctx.level += 1
        ctx.newline(buf, "{")

        result = Difference.FULL_MATCH
        first = True
        for key in keys:
            if ctx.is_ignored(key):
                continue

            item_buf = io.StringIO()
            saved_role = ctx.open_role

            if key in a.entries and key in b.entries:
                parent_key = ctx.current_key
                ctx.current_key = key
                ctx.key(item_buf, key)
                item = self.diff(a.entries[key], b.entries[key], item_buf)
                ctx.current_key = parent_key
            elif key in a.entries:
                item = self._removed(item_buf, a.entries[key], key)
            else:
                item = self._added(item_buf, b.entries[key], key)

            if self._append_child(buf, item_buf, item, saved_role, first):
                first = False
                result = max(result, item)

        ctx.level -= 1
        ctx.newline(buf, "")
        buf.write("}")
        self._write_type(buf, a)
        return result

    def _append_child(
        self,
        buf: TextIO,
        item_buf: io.StringIO,
        difference: Difference,
        saved_role: TagRole,
        first: bool
    ) -> bool:
        """Append a rendered child if it differs. Returns True if appended."""
        ctx = self.context
        if difference == Difference.FULL_MATCH:
            ctx.open_role = saved_role
            return False

        if not first:
            # The separator belongs to the span that was open before the child
            child_role = ctx.open_role
            ctx.open_role = saved_role
            ctx.newline(buf, ",")
            ctx.open_role = child_role

        buf.write(item_buf.getvalue())
        ctx.tag(buf, TagRole.NORMAL)
        return True

    def _match(self, buf: TextIO, value: Value, full: bool) -> Difference:
        self.context.tag(buf, TagRole.NORMAL)
        self._write_value(buf, value, full)
        self.context.result(Difference.FULL_MATCH)
        return Difference.FULL_MATCH

    def _mismatch(self, buf: TextIO, a: Value, b: Value) -> Difference:
        self.context.tag(buf, TagRole.CHANGED)
        self._write_value(buf, a, full=False)
        buf.write(" => ")
        self._write_value(buf, b, full=False)
        self.context.result(Difference.NO_MATCH)
        return Difference.NO_MATCH

    def _removed(self, buf: TextIO, value: Value, key: str = None) -> Difference:
        """Render a value present only in the first document."""
        self.context.tag(buf, TagRole.REMOVED)
        if key is not None:
            self.context.key(buf, key)
        self._write_value(buf, value, full=True)
        self.context.result(Difference.SUPERSET_MATCH)
        return Difference.SUPERSET_MATCH

    def _added(self, buf: TextIO, value: Value, key: str = None) -> Difference:
        """Render a value present only in the second document."""
        self.context.tag(buf, TagRole.ADDED)
        if key is not None:
            self.context.key(buf, key)
        self._write_value(buf, value, full=True)
        self.context.result(Difference.NO_MATCH)
        return Difference.NO_MATCH

    def _write_value(self, buf: TextIO, value: Value, full: bool):
        """
        Render a value.

        Full rendering expands containers over several indented lines;
        compact rendering shows them as [] or {}.
        """
        ctx = self.context
        if isinstance(value, Bool):
            buf.write("true" if value.value else "false")
        elif isinstance(value, Number):
            buf.write(value.literal)
        elif isinstance(value, Text):
            buf.write(quote(value.value))
        elif isinstance(value, Sequence):
            if full and value.items:
                ctx.level += 1
                ctx.newline(buf, "[")
                last = len(value.items) - 1
                for i, item in enumerate(value.items):
                    self._write_value(buf, item, full=True)
                    if i != last:
                        ctx.newline(buf, ",")
                ctx.level -= 1
                ctx.newline(buf, "")
                buf.write("]")
            else:
                buf.write("[]")
        elif isinstance(value, Mapping):
            if full and value.entries:
                ctx.level += 1
                ctx.newline(buf, "{")
                keys = value.sorted_keys()
                for i, key in enumerate(keys):
                    ctx.key(buf, key)
                    self._write_value(buf, value.entries[key], full=True)
                    if i != len(keys) - 1:
                        ctx.newline(buf, ",")
                ctx.level -= 1
                ctx.newline(buf, "")
                buf.write("}")
            else:
                buf.write("{}")
        else:
            buf.write("null")

        self._write_type(buf, value)

    def _write_type(self, buf: TextIO, value: Value):
        if self.options.print_types:
            buf.write(f" ({value.kind})")


def render_diff(a: Value, b: Value, options: DiffOptions) -> tuple[Difference, str]:
    """
    Compare two decoded documents.

    Returns:
        (FULL_MATCH, "") when nothing differs, otherwise the most severe
        classification recorded and the rendered difference text
    """
    context = ComparisonContext(options)
    buf = io.StringIO()
    Differ(context).diff(a, b, buf)

    if context.difference == Difference.FULL_MATCH:
        return Difference.FULL_MATCH, ""

    context.close(buf)
    return context.difference, buf.getvalue()
