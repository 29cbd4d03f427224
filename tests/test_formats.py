"""Tests for the JSON / YAML text helpers."""

import json

import pytest
import re2
import yaml

from serde_regex import (
    BytesRegex,
    BytesRegexSet,
    CompileError,
    DecodeError,
    Regex,
    RegexSet,
    from_json,
    from_yaml,
    to_json,
    to_yaml,
)


class TestJson:
    def test_single(self) -> None:
        p = from_json('"a.*b"', Regex)
        assert p.pattern == "a.*b"
        assert to_json(p) == '"a.*b"'

    def test_list(self) -> None:
        value = from_json('["a.*b", "c?d"]', list[Regex])
        assert to_json(value, list[Regex]) == '["a.*b", "c?d"]'

    def test_optional_null(self) -> None:
        assert from_json("null", Regex | None) is None
        assert to_json(None, Regex | None) == "null"

    def test_escapes_survive(self) -> None:
        text = json.dumps([r"^\d+\.\d+$", r"\bword\b"])
        value = from_json(text, list[Regex])
        assert value[0].search("3.14") is not None
        assert json.loads(to_json(value)) == [r"^\d+\.\d+$", r"\bword\b"]

    def test_sort_keys(self) -> None:
        value = from_json('{"b": "x", "a": "y"}', dict[str, Regex])
        assert to_json(value) == '{"b": "x", "a": "y"}'
        assert to_json(value, sort_keys=True) == '{"a": "y", "b": "x"}'

    def test_int_keys_round_trip(self) -> None:
        value = {1: re2.compile("a.*b"), 20: re2.compile("c?d")}
        text = to_json(value, dict[int, Regex])
        assert text == '{"1": "a.*b", "20": "c?d"}'
        decoded = from_json(text, dict[int, Regex])
        assert list(decoded) == [1, 20]
        assert decoded[20].pattern == "c?d"

    def test_bool_keys_round_trip(self) -> None:
        value = {True: re2.compile("x")}
        decoded = from_json(to_json(value, dict[bool, Regex]), dict[bool, Regex])
        assert decoded[True].pattern == "x"

    def test_bytes_input(self) -> None:
        s = from_json(b'["^GET ", "^POST "]', BytesRegexSet)
        assert s.is_match(b"POST /")

    def test_invalid_pattern(self) -> None:
        with pytest.raises(CompileError) as exc_info:
            from_json('{"ok": "x", "bad": "(?P<name"}', dict[str, Regex])
        assert exc_info.value.path == "$['bad']"

    @pytest.mark.parametrize("shape", [Regex, BytesRegex, list[Regex], RegexSet])
    def test_lone_surrogate_is_a_compile_error(self, shape: object) -> None:
        text = '"a\\ud800"' if shape in (Regex, BytesRegex) else '["ok", "a\\ud800"]'
        with pytest.raises(CompileError):
            from_json(text, shape)

    def test_syntax_error_is_the_parsers(self) -> None:
        with pytest.raises(json.JSONDecodeError):
            from_json('["a.*b"', list[Regex])


class TestYaml:
    def test_list(self) -> None:
        value = from_yaml("- a.*b\n- c?d\n", list[Regex])
        assert [p.pattern for p in value] == ["a.*b", "c?d"]
        assert to_yaml(value) == "- a.*b\n- c?d\n"

    def test_mapping_keeps_order(self) -> None:
        value = from_yaml("zeta: z\nalpha: a\n", dict[str, Regex])
        assert to_yaml(value) == "zeta: z\nalpha: a\n"
        assert to_yaml(value, sort_keys=True) == "alpha: a\nzeta: z\n"

    def test_duplicate_keys_last_wins(self) -> None:
        value = from_yaml("a: first\nb: x\na: second\n", dict[str, Regex])
        assert value["a"].pattern == "second"
        assert len(value) == 2

    def test_set(self) -> None:
        s = from_yaml("['^a', '^b']", RegexSet)
        assert s.matches("b") == [1]
        assert yaml.safe_load(to_yaml(s)) == ["^a", "^b"]

    def test_type_mismatch(self) -> None:
        with pytest.raises(DecodeError, match="expected sequence, got str"):
            from_yaml("just-a-string", RegexSet)

    def test_syntax_error_is_the_parsers(self) -> None:
        with pytest.raises(yaml.YAMLError):
            from_yaml("key: [unclosed", dict[str, Regex])
