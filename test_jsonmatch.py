"""Tests for jsonmatch comparison engine."""

import pytest
from jsonmatch import (
    JsonMatchEngine,
    DiffOptions,
    Difference,
    DecodeError,
    Tag,
    compare,
    console_options,
    html_options,
)
from jsonmatch.parser import MAX_DEPTH


class TestBasicComparison:
    """Test basic comparison functionality."""

    def setup_method(self):
        self.engine = JsonMatchEngine()

    @pytest.mark.parametrize("document", [
        b'null',
        b'true',
        b'42',
        b'"text"',
        b'[]',
        b'{}',
        b'[1, [2, [3, {"a": null}]]]',
        b'{"a": {"b": [1, 2.50, "x", false]}, "c": null}',
    ])
    def test_identical_documents(self, document):
        """Test that a document fully matches itself with an empty message."""
        assert self.engine.compare(document, document) == (Difference.FULL_MATCH, "")

    def test_whitespace_and_key_order_do_not_matter(self):
        result, message = self.engine.compare(b'{"a": 1, "b": [1, 2]}', b'{ "b":[1,2],"a":1 }')
        assert result == Difference.FULL_MATCH
        assert message == ""

    def test_superset_is_directional(self):
        """Test that extra keys only on the first side give a superset match."""
        result, _ = self.engine.compare(b'{"a": 1, "b": 2}', b'{"a": 1}')
        assert result == Difference.SUPERSET_MATCH

        result, _ = self.engine.compare(b'{"a": 1}', b'{"a": 1, "b": 2}')
        assert result == Difference.NO_MATCH

    def test_different_values(self):
        result, _ = self.engine.compare(b'{"a": 5}', b'{"a": 6}')
        assert result == Difference.NO_MATCH

    @pytest.mark.parametrize("first,second", [
        (b'5', b'"5"'),
        (b'{"a": 5}', b'["a"]'),
        (b'{"a": 5}', b'{"a": true}'),
        (b'{"a": "null"}', b'{"a": null}'),
        (b'{"a": {"b": [1, {"c": 4213123123}]}}', b'{"a": {"b": [1, {"c": "4213123123"}]}}'),
    ])
    def test_kind_mismatch_is_never_coerced(self, first, second):
        result, _ = self.engine.compare(first, second)
        assert result == Difference.NO_MATCH

    def test_numbers_compare_by_literal(self):
        result, _ = self.engine.compare(b'{"a": 3.1415}', b'{"a": 3.14150}')
        assert result == Difference.NO_MATCH

        result, _ = self.engine.compare(b'{"a": 1}', b'{"a": 1.0}')
        assert result == Difference.NO_MATCH

        result, _ = self.engine.compare(b'{"a": 4213123123}', b'{"a": 4213123123}')
        assert result == Difference.FULL_MATCH

    def test_null_values(self):
        assert self.engine.compare(b'{"a": null}', b'{"a": null}')[0] == Difference.FULL_MATCH
        assert self.engine.compare(b'{"a": null}', b'{"a": 1}')[0] == Difference.NO_MATCH
        assert self.engine.compare(b'{"a": 1}', b'{"a": null}')[0] == Difference.NO_MATCH

    def test_str_input_is_accepted(self):
        assert self.engine.compare('{"a": "é"}', '{"a": "é"}')[0] == Difference.FULL_MATCH


class TestArrayComparison:
    """Test index-by-index array comparison."""

    def setup_method(self):
        self.engine = JsonMatchEngine()

    def test_extra_items_in_first(self):
        result, _ = self.engine.compare(b'[1, 2, 3]', b'[1, 2]')
        assert result == Difference.SUPERSET_MATCH

    def test_extra_items_in_second(self):
        result, _ = self.engine.compare(b'[1, 2]', b'[1, 2, 3]')
        assert result == Difference.NO_MATCH

    def test_order_matters(self):
        result, _ = self.engine.compare(b'["a", "b", "c"]', b'["a", "c", "b"]')
        assert result == Difference.NO_MATCH

    def test_nested_superset(self):
        result, _ = self.engine.compare(
            b'{"a": 123, "b": 456, "c": [7, 8, 9]}',
            b'{"a": 123, "c": [7, 8]}'
        )
        assert result == Difference.SUPERSET_MATCH


class TestResultAggregation:
    """Test that the most severe result wins."""

    def setup_method(self):
        self.engine = JsonMatchEngine()

    def test_no_match_dominates_superset(self):
        result, _ = self.engine.compare(
            b'{"a": [1, 2, 3], "b": 1}',
            b'{"a": [1, 2], "b": 2}'
        )
        assert result == Difference.NO_MATCH

    def test_no_match_before_superset_in_key_order(self):
        result, _ = self.engine.compare(b'{"a": 1, "b": 2}', b'{"a": 2}')
        assert result == Difference.NO_MATCH

    def test_superset_in_separate_branches(self):
        result, _ = self.engine.compare(
            b'{"x": {"a": 1, "b": 2}, "y": [1, 2]}',
            b'{"x": {"a": 1}, "y": [1]}'
        )
        assert result == Difference.SUPERSET_MATCH


class TestCombinedOptions:
    """Cases run with ignore, fuzzy, string-as-map and null-as-empty together."""

    def setup_method(self):
        options = console_options()
        options.ignore_fields = frozenset({"fuzz1"})
        options.fuzzy_fields = frozenset({"fuzz2"})
        options.string_as_map_fields = frozenset({"stringAsMap"})
        options.null_as_empty = True
        self.engine = JsonMatchEngine(options)

    @pytest.mark.parametrize("first,second,expected", [
        ('{"a": 5}', '["a"]', Difference.NO_MATCH),
        ('{"a": 5}', '{"a": 6}', Difference.NO_MATCH),
        ('{"a": 5}', '{"a": true}', Difference.NO_MATCH),
        ('{"a": 5}', '{"a": 5}', Difference.FULL_MATCH),
        ('{"a": 5}', '{"a": 5, "b": 6}', Difference.NO_MATCH),
        ('{"a": 5, "b": 6}', '{"a": 5}', Difference.SUPERSET_MATCH),
        ('{"a": 5, "b": 6}', '{"b": 6}', Difference.SUPERSET_MATCH),
        ('{"a": null}', '{"a": 1}', Difference.NO_MATCH),
        ('{"a": null}', '{"a": null}', Difference.FULL_MATCH),
        ('{"a": "null"}', '{"a": null}', Difference.NO_MATCH),
        ('{"a": 3.1415}', '{"a": 3.14156}', Difference.NO_MATCH),
        ('{"a": 3.1415}', '{"a": 3.1415}', Difference.FULL_MATCH),
        ('{"a": 4213123123}', '{"a": "4213123123"}', Difference.NO_MATCH),
        ('{"a": 4213123123}', '{"a": 4213123123}', Difference.FULL_MATCH),
        ('{"a": 4213123123,"fuzz1":1,"fuzz2":13,"inner":{"e":"f"}}',
         '{"a": 4213123123,"fuzz2":2,"inner":{"e":"f"}}', Difference.FULL_MATCH),
        ('{"stringAsMap":"{\\"a\\":1,\\"b\\":2}"}',
         '{"stringAsMap":"{\\"b\\":2,\\"a\\":1}"}', Difference.FULL_MATCH),
        ('{"stringAsMap":"{\\"a\\":1,\\"b\\":2,\\"c\\":3}"}',
         '{"stringAsMap":"{\\"b\\":2,\\"a\\":1}"}', Difference.SUPERSET_MATCH),
        ('{"stringAsMap":"{\\"a\\":1,\\"b\\":2,\\"c\\":3}"}',
         '{"stringAsMap":"{\\"b\\":2,\\"a\\":1,\\"c\\":4}"}', Difference.NO_MATCH),
        ('{}', 'null', Difference.FULL_MATCH),
        ('{"key":null}', '{"key":{}}', Difference.FULL_MATCH),
        ('{"key":null}', '{}', Difference.SUPERSET_MATCH),
    ])
    def test_case(self, first, second, expected):
        result, message = self.engine.compare(first, second)
        assert result == expected
        if expected == Difference.FULL_MATCH:
            assert message == ""
        else:
            assert message != ""


class TestIgnoreFields:
    """Test ignored fields."""

    def setup_method(self):
        self.engine = JsonMatchEngine(DiffOptions(ignore_fields={"x"}, indent="  "))

    def test_value_and_kind_are_irrelevant(self):
        assert self.engine.compare(b'{"x": 1}', b'{"x": "y"}')[0] == Difference.FULL_MATCH

    def test_one_sided_ignored_key(self):
        assert self.engine.compare(b'{"x": 1}', b'{}')[0] == Difference.FULL_MATCH
        assert self.engine.compare(b'{}', b'{"x": 1}')[0] == Difference.FULL_MATCH

    def test_ignored_at_any_depth(self):
        result, _ = self.engine.compare(
            b'{"a": {"b": [{"x": 1, "y": 2}]}}',
            b'{"a": {"b": [{"x": false, "y": 2}]}}'
        )
        assert result == Difference.FULL_MATCH

    def test_ignored_key_is_not_rendered(self):
        result, message = self.engine.compare(b'{"x": 1, "a": 1}', b'{"x": 2, "a": 2}')
        assert result == Difference.NO_MATCH
        assert message == '{\n  "a": 1 => 2\n}'


class TestFuzzyFields:
    """Test fuzzy fields."""

    def setup_method(self):
        self.engine = JsonMatchEngine(DiffOptions(fuzzy_fields={"f"}))

    def test_null_on_either_side(self):
        assert self.engine.compare(b'{"f": 1}', b'{"f": null}')[0] == Difference.FULL_MATCH
        assert self.engine.compare(b'{"f": null}', b'{"f": [1]}')[0] == Difference.FULL_MATCH

    def test_same_kind_any_value(self):
        assert self.engine.compare(b'{"f": 13}', b'{"f": 2}')[0] == Difference.FULL_MATCH
        assert self.engine.compare(b'{"f": {"x": 1}}', b'{"f": {"y": 2}}')[0] == Difference.FULL_MATCH

    def test_kind_mismatch_still_fails(self):
        assert self.engine.compare(b'{"f": 1}', b'{"f": "1"}')[0] == Difference.NO_MATCH

    def test_matched_by_bare_key_name(self):
        result, _ = self.engine.compare(b'{"outer": {"f": 1}}', b'{"outer": {"f": 2}}')
        assert result == Difference.FULL_MATCH

    def test_one_sided_fuzzy_key(self):
        assert self.engine.compare(b'{"f": 1}', b'{}')[0] == Difference.SUPERSET_MATCH
        assert self.engine.compare(b'{}', b'{"f": 1}')[0] == Difference.NO_MATCH

    def test_key_does_not_leak_to_siblings(self):
        """A fuzzy key inside one array element does not affect the next element."""
        result, _ = self.engine.compare(
            b'{"list": [{"f": 1}, 5]}',
            b'{"list": [{"f": 2}, 6]}'
        )
        assert result == Difference.NO_MATCH

    def test_no_key_context_at_top_level(self):
        assert self.engine.compare(b'1', b'2')[0] == Difference.NO_MATCH


class TestNullAsEmpty:
    """Test null-as-empty option."""

    def setup_method(self):
        self.engine = JsonMatchEngine(DiffOptions(null_as_empty=True))

    @pytest.mark.parametrize("first,second,expected", [
        (b'{"key": null}', b'{"key": {}}', Difference.FULL_MATCH),
        (b'{"key": null}', b'{"key": []}', Difference.FULL_MATCH),
        (b'{"key": []}', b'{"key": null}', Difference.FULL_MATCH),
        (b'{"key": null}', b'{}', Difference.SUPERSET_MATCH),
        (b'{}', b'null', Difference.FULL_MATCH),
        (b'null', b'[]', Difference.FULL_MATCH),
        (b'{"key": null}', b'{"key": [1]}', Difference.NO_MATCH),
        (b'{"key": null}', b'{"key": ""}', Difference.NO_MATCH),
    ])
    def test_null_as_empty(self, first, second, expected):
        assert self.engine.compare(first, second)[0] == expected

    def test_disabled_by_default(self):
        engine = JsonMatchEngine()
        assert engine.compare(b'{}', b'null')[0] == Difference.NO_MATCH
        assert engine.compare(b'{"key": null}', b'{"key": {}}')[0] == Difference.NO_MATCH


class TestStringAsMap:
    """Test string-as-map fields."""

    def setup_method(self):
        self.engine = JsonMatchEngine(DiffOptions(string_as_map_fields={"s"}, indent="  "))

    def test_reordered_embedded_document(self):
        result, message = self.engine.compare(
            b'{"s": "{\\"a\\":1,\\"b\\":2}"}',
            b'{"s": "{\\"b\\":2,\\"a\\":1}"}'
        )
        assert result == Difference.FULL_MATCH
        assert message == ""

    def test_embedded_superset(self):
        result, message = self.engine.compare(
            b'{"s": "{\\"a\\":1,\\"b\\":2}"}',
            b'{"s": "{\\"a\\":1}"}'
        )
        assert result == Difference.SUPERSET_MATCH
        assert message == '{\n  "s": {\n  "b": 2\n}\n}'

    def test_embedded_value_mismatch(self):
        result, _ = self.engine.compare(
            b'{"s": "{\\"a\\":1,\\"c\\":3}"}',
            b'{"s": "{\\"a\\":1,\\"c\\":4}"}'
        )
        assert result == Difference.NO_MATCH

    def test_other_keys_compare_as_text(self):
        result, _ = self.engine.compare(
            b'{"t": "{\\"a\\":1,\\"b\\":2}"}',
            b'{"t": "{\\"b\\":2,\\"a\\":1}"}'
        )
        assert result == Difference.NO_MATCH

    def test_invalid_embedded_document_is_text_mismatch(self):
        result, message = self.engine.compare(b'{"s": "abc"}', b'{"s": "abd"}')
        assert result == Difference.NO_MATCH
        assert message == '{\n  "s": "abc" => "abd"\n}'

    def test_array_elements_inherit_key(self):
        result, _ = self.engine.compare(
            b'{"s": ["{\\"a\\": 1}"]}',
            b'{"s": ["{ \\"a\\" : 1 }"]}'
        )
        assert result == Difference.FULL_MATCH

    def test_embedded_walk_too_deep_is_text_mismatch(self, monkeypatch):
        def exhausted(*args):
            raise RecursionError("maximum recursion depth exceeded")

        monkeypatch.setattr("jsonmatch.differ.render_diff", exhausted)
        result, message = self.engine.compare(b'{"s": "{\\"a\\":1}"}', b'{"s": "{\\"a\\":2}"}')
        assert result == Difference.NO_MATCH
        assert message == '{\n  "s": "{\\"a\\":1}" => "{\\"a\\":2}"\n}'


class TestInvalidInput:
    """Test malformed documents."""

    def setup_method(self):
        self.engine = JsonMatchEngine()

    def test_first_invalid(self):
        assert self.engine.compare(b'{"a":', b'{}') == (
            Difference.FIRST_INVALID, "first argument is invalid json")

    def test_second_invalid(self):
        assert self.engine.compare(b'{}', b'[1,') == (
            Difference.SECOND_INVALID, "second argument is invalid json")

    def test_both_invalid(self):
        assert self.engine.compare(b'nope', b'') == (
            Difference.BOTH_INVALID, "both arguments are invalid json")

    @pytest.mark.parametrize("document", [
        b'',
        b'{"a": 1} trailing',
        b'[1] [2]',
        b'NaN',
        b'{"a": Infinity}',
        b"{'a': 1}",
        b'\xc3\x28',
    ])
    def test_malformed_documents(self, document):
        assert self.engine.compare(document, b'{}')[0] == Difference.FIRST_INVALID

    def test_invalid_dominates_valid_mismatch(self):
        assert self.engine.compare(b'{"a": 1', b'{"b": 2}')[0] == Difference.FIRST_INVALID

    def test_nesting_within_limit_matches(self):
        document = b"[" * MAX_DEPTH + b"]" * MAX_DEPTH
        assert self.engine.compare(document, document) == (Difference.FULL_MATCH, "")

    @pytest.mark.parametrize("depth", [MAX_DEPTH + 1, 600, 5000])
    def test_nesting_too_deep_is_invalid(self, depth):
        deep = b"[" * depth + b"]" * depth
        assert self.engine.compare(deep, deep)[0] == Difference.BOTH_INVALID
        assert self.engine.compare(deep, b"[]")[0] == Difference.FIRST_INVALID

    def test_deep_removed_value_renders(self):
        deep = b"[" * (MAX_DEPTH - 1) + b"]" * (MAX_DEPTH - 1)
        result, message = self.engine.compare(b"[1, " + deep + b"]", b"[1]")
        assert result == Difference.SUPERSET_MATCH
        assert message.count("[") == MAX_DEPTH


class TestRendering:
    """Test the annotated difference text."""

    def test_removed_key(self):
        _, message = compare(b'{"a": 5, "b": 6}', b'{"a": 5}', DiffOptions(indent="  "))
        assert message == '{\n  "b": 6\n}'

    def test_changed_value(self):
        _, message = compare(b'{"a": 5}', b'{"a": 6}', DiffOptions(indent="  "))
        assert message == '{\n  "a": 5 => 6\n}'

    def test_added_container_is_expanded(self):
        _, message = compare(b'{"a": 1}', b'{"a": 1, "b": [1, 2]}', DiffOptions(indent="  "))
        assert message == '{\n  "b": [\n    1,\n    2\n  ]\n}'

    def test_removed_nested_container_keys_are_sorted(self):
        _, message = compare(b'{"a": {"y": [1, 2], "x": 1}}', b'{}', DiffOptions(indent="  "))
        assert message == (
            '{\n'
            '  "a": {\n'
            '    "x": 1,\n'
            '    "y": [\n'
            '      1,\n'
            '      2\n'
            '    ]\n'
            '  }\n'
            '}'
        )

    def test_only_differing_children_are_rendered(self):
        result, message = compare(
            b'{"a": 1, "b": 2, "c": 3}',
            b'{"a": 9, "b": 2, "d": 4}',
            DiffOptions(indent="  ")
        )
        assert result == Difference.NO_MATCH
        assert message == '{\n  "a": 1 => 9,\n  "c": 3,\n  "d": 4\n}'

    def test_sequence_rendering(self):
        result, message = compare(b'[1, 2, 3]', b'[1, 5]', DiffOptions(indent="  "))
        assert result == Difference.NO_MATCH
        assert message == '[\n  2 => 5,\n  3\n]'

    def test_changed_containers_are_compact(self):
        _, message = compare(b'{"a": [1]}', b'{"a": {"x": 1}}', DiffOptions(indent="  "))
        assert message == '{\n  "a": [] => {}\n}'

    def test_print_types(self):
        _, message = compare(b'{"a": 5}', b'{"a": true}', DiffOptions(print_types=True))
        assert message == '{\n"a": 5 (number) => true (boolean)\n} (object)'

    def test_print_types_for_null(self):
        _, message = compare(b'null', b'"x"', DiffOptions(print_types=True))
        assert message == 'null (null) => "x" (string)'

    def test_prefix(self):
        _, message = compare(b'{"a": 5}', b'{"a": 6}', DiffOptions(prefix="> ", indent="  "))
        assert message == '{\n>   "a": 5 => 6\n> }'

    def test_non_ascii_keys(self):
        _, message = compare('{"é": "ü"}', '{}')
        assert message == '{\n"é": "ü"\n}'


class TestTags:
    """Test markup tag emission."""

    def setup_method(self):
        self.options = DiffOptions(
            added=Tag("<a>", "</a>"),
            removed=Tag("<r>", "</r>"),
            changed=Tag("<c>", "</c>"),
        )

    def test_tags_switch_between_roles(self):
        _, message = compare(b'{"a": 1, "b": 2}', b'{"a": 3}', self.options)
        assert message == '{\n"a": <c>1 => 3</c>,\n<r>"b": 2</r>\n}'

    def test_multiline_spans_are_closed_on_every_line(self):
        self.options.indent = "  "
        _, message = compare(b'{"a": 1, "b": [1, 2]}', b'{"a": 1}', self.options)
        assert message == '{\n  <r>"b": [</r>\n    <r>1,</r>\n    <r>2</r>\n  <r>]</r>\n}'
        for line in message.split("\n"):
            assert line.count("<r>") == line.count("</r>")

    def test_each_removed_item_gets_its_own_span(self):
        _, message = compare(b'[1, 2]', b'[]', self.options)
        assert message == '[\n<r>1</r>,\n<r>2</r>\n]'

    def test_top_level_tag_closed(self):
        assert compare(b'5', b'"5"', self.options) == (Difference.NO_MATCH, '<c>5 => "5"</c>')

    def test_normal_tag_wraps_structure(self):
        self.options.normal = Tag("<n>", "</n>")
        _, message = compare(b'[1]', b'[2]', self.options)
        assert message == '<n>[</n>\n<n></n><c>1 => 2</c><n></n>\n<n>]</n>'

    def test_console_preset(self):
        result, message = compare(b'5', b'"5"', console_options())
        assert result == Difference.NO_MATCH
        assert message == '\033[0;33m5 => "5"\033[0m'

    def test_html_preset(self):
        _, message = compare(b'{"a": 1}', b'{"a": 2}', html_options())
        assert message == '{\n    "a": <span style="background-color: #fcff7f">1 => 2</span>\n}'


class TestCompareValues:
    """Test comparing already decoded documents."""

    def setup_method(self):
        self.engine = JsonMatchEngine()

    def test_python_objects(self):
        result, _ = self.engine.compare_values({"a": [1, None], "b": True}, {"a": [1, None]})
        assert result == Difference.SUPERSET_MATCH

    def test_python_floats_keep_repr(self):
        result, _ = self.engine.compare_values({"a": 1}, {"a": 1.0})
        assert result == Difference.NO_MATCH

    def test_nesting_too_deep_raises_decode_error(self):
        deep = []
        for _ in range(MAX_DEPTH):
            deep = [deep]
        with pytest.raises(DecodeError):
            self.engine.compare_values(deep, deep)


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
