"""Unit tests for JSON predicates, the JSON pipeline and the text codec."""

from __future__ import annotations

import pytest

from normkit.exceptions import NormalizationError
from normkit.json_types import (
    is_json,
    json_normalizer,
    parse,
    parse_safe,
    stringify,
    stringify_safe,
)


class TestIsJson:
    """Test the JSON predicates."""

    @pytest.mark.parametrize("value", [None, 1, 1.5, "x", True, [], {}, {"a": [1, {"b": None}]}, (1, 2)])
    def test_json_values(self, value) -> None:
        """Test leaves, arrays, tuples and nested objects are JSON."""
        assert is_json(value)

    @pytest.mark.parametrize("value", [object(), {1: "a"}, [set()], {"a": {"b": b"x"}}])
    def test_non_json_values(self, value) -> None:
        """Test non-string keys and foreign leaves are not JSON."""
        assert not is_json(value)


class TestJsonNormalizer:
    """Test the pipeline that admits any JSON value."""

    def test_accepts_json(self) -> None:
        """Test a JSON value passes through unchanged."""
        assert json_normalizer.normalize({"a": [1]}).value == {"a": [1]}

    def test_rejects_non_json(self) -> None:
        """Test a set nested in an object is rejected."""
        assert json_normalizer.normalize({"a": {1, 2}}).error_message == "Invalid JSON object."


class TestParse:
    """Test parsing JSON text and its relaxed YAML superset."""

    def test_strict_json(self) -> None:
        """Test strict JSON parses to the matching Python values."""
        assert parse('{"a": [1, 2.5, null, true]}') == {"a": [1, 2.5, None, True]}

    def test_relaxed_input(self) -> None:
        """Test comments, unquoted keys and block style are accepted."""
        text = "# schema\ntype: object\nproperties:\n  name: {type: string}\n"
        assert parse(text) == {"type": "object", "properties": {"name": {"type": "string"}}}

    def test_dates_stay_strings(self) -> None:
        """Test an unquoted date is not turned into a date object."""
        assert parse("created: 2024-01-02") == {"created": "2024-01-02"}

    def test_yaml_only_scalars_stay_strings(self) -> None:
        """Test sexagesimal, octal and YAML 1.1 boolean spellings stay strings."""
        parsed = parse("{time: 1:30, zip: 010, country: NO, flag: on, answer: Yes, big: 0x1F}")
        assert parsed == {
            "time": "1:30",
            "zip": "010",
            "country": "NO",
            "flag": "on",
            "answer": "Yes",
            "big": "0x1F",
        }

    def test_capitalized_literals_stay_strings(self) -> None:
        """Test only lower-case true, false and null are typed."""
        assert parse("[True, FALSE, Null, ~]") == ["True", "FALSE", "Null", "~"]

    def test_relaxed_json_scalars_are_typed(self) -> None:
        """Test unquoted JSON numbers, booleans and null keep their types."""
        parsed = parse("a: true\nb: false\nc: null\nd: 12\ne: -1.5e3\nf: 0\ng: 0.25")
        assert parsed == {"a": True, "b": False, "c": None, "d": 12, "e": -1500.0, "f": 0, "g": 0.25}
        assert isinstance(parsed["d"], int)
        assert isinstance(parsed["e"], float)

    def test_invalid(self) -> None:
        """Test text that is neither JSON nor YAML reports the JSON error."""
        with pytest.raises(NormalizationError, match="^Invalid JSON: "):
            parse("{unclosed: [")

    def test_parse_safe(self) -> None:
        """Test parse_safe wraps the value or the error message."""
        assert parse_safe("[1]").value == [1]
        assert parse_safe("{unclosed: [").error_message.startswith("Invalid JSON: ")


class TestStringify:
    """Test serializing JSON values to text."""

    def test_compact_and_indented(self) -> None:
        """Test the default output and an indented one."""
        assert stringify({"a": 1}) == '{"a": 1}'
        assert stringify({"a": 1}, indent=2) == '{\n  "a": 1\n}'

    def test_unicode_kept(self) -> None:
        """Test non-ASCII text is written as is."""
        assert stringify("café") == '"café"'

    def test_stringify_safe(self) -> None:
        """Test stringify_safe reports unserializable values as errors."""
        assert stringify_safe([1]).value == "[1]"
        assert not stringify_safe({"a": object()}).ok
