"""Decoder / Encoder over plain data trees.

A plain data tree is what ``json.loads`` and ``yaml.safe_load`` return and
what ``json.dumps`` / ``yaml.safe_dump`` accept: dicts, lists, strings,
numbers, booleans and None. This is the only format implementation the
package ships; JSON and YAML text go through it (see ``_formats``).

Paths are JSONPath-like: ``$`` for the root, ``[2]`` for sequence items,
``['key']`` for mapping entries (record fields included).
"""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

from serde_regex._errors import DecodeError

if TYPE_CHECKING:
    from serde_regex._types import WriteFn


def _type_name(value: Any) -> str:
    if value is None:
        return "null"
    return type(value).__name__


def _is_sequence(value: Any) -> bool:
    return isinstance(value, list | tuple)


# ═══════════════════════════════════════════════════════════════════════════════
# Decoding
# ═══════════════════════════════════════════════════════════════════════════════


@dataclass(frozen=True, slots=True)
class ValueDecoder:
    """Decoder positioned at one value of a plain data tree."""

    value: Any
    path: str = "$"

    def read_str(self) -> str:
        if not isinstance(self.value, str):
            raise self.error(f"expected string, got {_type_name(self.value)}")
        return self.value

    def read_optional(self) -> ValueDecoder | None:
        if self.value is None:
            return None
        return self

    def read_seq(self) -> ValueSeqAccess:
        if not _is_sequence(self.value):
            raise self.error(f"expected sequence, got {_type_name(self.value)}")
        return ValueSeqAccess(self.value, self.path)

    def read_map(self) -> ValueMapAccess:
        if not isinstance(self.value, Mapping):
            raise self.error(f"expected mapping, got {_type_name(self.value)}")
        return ValueMapAccess(self.value, self.path)

    def read_any(self) -> Any:
        return self.value

    def error(self, message: str) -> DecodeError:
        return DecodeError(message, self.path)


@dataclass(frozen=True, slots=True)
class ValueSeqAccess:
    items: list[Any] | tuple[Any, ...]
    path: str

    def __iter__(self) -> Iterator[ValueDecoder]:
        for i, item in enumerate(self.items):
            yield ValueDecoder(item, f"{self.path}[{i}]")


@dataclass(frozen=True, slots=True)
class ValueMapAccess:
    entries: Mapping[Any, Any]
    path: str

    def __iter__(self) -> Iterator[tuple[ValueDecoder, ValueDecoder]]:
        for key, value in self.entries.items():
            child = f"{self.path}[{key!r}]"
            yield ValueDecoder(key, child), ValueDecoder(value, child)


# ═══════════════════════════════════════════════════════════════════════════════
# Encoding
# ═══════════════════════════════════════════════════════════════════════════════


class ValueEncoder:
    """Encoder producing a plain data tree.

    Stateless; a single module-level instance (``VALUE_ENCODER``) serves
    every call.
    """

    __slots__ = ()

    def write_str(self, value: str, /) -> str:
        return value

    def write_none(self) -> None:
        return None

    def write_seq(self, length: int | None) -> ValueSeqEncoder:
        return ValueSeqEncoder(self)

    def write_map(self, length: int | None) -> ValueMapEncoder:
        return ValueMapEncoder(self)

    def write_any(self, value: Any, /) -> Any:
        return value


@dataclass(slots=True)
class ValueSeqEncoder:
    encoder: ValueEncoder
    items: list[Any] = field(default_factory=list)

    def element(self, write: WriteFn, /) -> None:
        self.items.append(write(self.encoder))

    def end(self) -> list[Any]:
        return self.items


@dataclass(slots=True)
class ValueMapEncoder:
    encoder: ValueEncoder
    entries: dict[Any, Any] = field(default_factory=dict)

    def entry(self, write_key: WriteFn, write_value: WriteFn, /) -> None:
        key = write_key(self.encoder)
        self.entries[key] = write_value(self.encoder)

    def end(self) -> dict[Any, Any]:
        return self.entries


VALUE_ENCODER = ValueEncoder()
