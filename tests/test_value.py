"""Tests for the plain-data Decoder / Encoder (serde_regex._value)."""

import pytest

from serde_regex import (
    VALUE_ENCODER,
    DecodeError,
    Decoder,
    Encoder,
    ValueDecoder,
)


class TestValueDecoder:
    def test_satisfies_protocol(self) -> None:
        assert isinstance(ValueDecoder("x"), Decoder)

    def test_read_str(self) -> None:
        assert ValueDecoder("a.*b").read_str() == "a.*b"

    @pytest.mark.parametrize(
        ("value", "got"),
        [(None, "null"), (42, "int"), (["a"], "list"), ({"a": 1}, "dict"), (True, "bool")],
    )
    def test_read_str_rejects(self, value: object, got: str) -> None:
        with pytest.raises(DecodeError, match=f"expected string, got {got}"):
            ValueDecoder(value).read_str()

    def test_read_optional(self) -> None:
        assert ValueDecoder(None).read_optional() is None
        inner = ValueDecoder("x").read_optional()
        assert inner is not None
        assert inner.read_str() == "x"

    def test_read_seq_paths(self) -> None:
        paths = [d.path for d in ValueDecoder(["a", "b"], "$.rules").read_seq()]
        assert paths == ["$.rules[0]", "$.rules[1]"]

    def test_read_seq_accepts_tuple(self) -> None:
        assert [d.read_str() for d in ValueDecoder(("a", "b")).read_seq()] == ["a", "b"]

    def test_read_seq_rejects_string(self) -> None:
        with pytest.raises(DecodeError, match="expected sequence, got str"):
            ValueDecoder("ab").read_seq()

    def test_read_map_paths(self) -> None:
        entries = list(ValueDecoder({"web": "x", 3: "y"}).read_map())
        assert [(k.read_any(), v.path) for k, v in entries] == [
            ("web", "$['web']"),
            (3, "$[3]"),
        ]

    def test_read_map_rejects_list(self) -> None:
        with pytest.raises(DecodeError, match="expected mapping, got list"):
            ValueDecoder([]).read_map()

    def test_error_carries_path(self) -> None:
        err = ValueDecoder(1, "$[4]").error("boom")
        assert err.path == "$[4]"
        assert err.message == "boom"
        assert str(err) == "$[4]: boom"


class TestValueEncoder:
    def test_satisfies_protocol(self) -> None:
        assert isinstance(VALUE_ENCODER, Encoder)

    def test_scalars(self) -> None:
        assert VALUE_ENCODER.write_str("x") == "x"
        assert VALUE_ENCODER.write_none() is None
        assert VALUE_ENCODER.write_any(3) == 3

    def test_seq(self) -> None:
        seq = VALUE_ENCODER.write_seq(2)
        seq.element(lambda e: e.write_str("a"))
        seq.element(lambda e: e.write_none())
        assert seq.end() == ["a", None]

    def test_map_last_write_wins(self) -> None:
        mapping = VALUE_ENCODER.write_map(None)
        mapping.entry(lambda e: e.write_str("k"), lambda e: e.write_str("1"))
        mapping.entry(lambda e: e.write_str("k"), lambda e: e.write_str("2"))
        assert mapping.end() == {"k": "2"}
