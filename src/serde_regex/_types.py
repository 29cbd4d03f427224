"""Serialization capability protocols.

The adapter never looks at a concrete format. It reads through a Decoder
and writes through an Encoder; ``_value`` provides the implementation over
plain data trees (what ``json.loads`` / ``yaml.safe_load`` return), and any
other format can plug in by implementing the same protocols.

Decoders are positioned at exactly one value. Container reads hand out
child decoders, one per element or entry, each positioned at that child.
"""

from __future__ import annotations

from collections.abc import Callable, Iterator
from typing import TYPE_CHECKING, Any, Protocol, runtime_checkable

if TYPE_CHECKING:
    from serde_regex._errors import DecodeError


@runtime_checkable
class SeqAccess(Protocol):
    """Elements of a sequence, yielded on demand."""

    def __iter__(self) -> Iterator[Decoder]: ...


@runtime_checkable
class MapAccess(Protocol):
    """Entries of a mapping as (key decoder, value decoder) pairs."""

    def __iter__(self) -> Iterator[tuple[Decoder, Decoder]]: ...


@runtime_checkable
class Decoder(Protocol):
    """Read one value of the underlying format."""

    @property
    def path(self) -> str: ...

    def read_str(self) -> str: ...

    def read_optional(self) -> Decoder | None:
        """Return None at an absence marker, else a decoder for the value."""
        ...

    def read_seq(self) -> SeqAccess: ...

    def read_map(self) -> MapAccess: ...

    def read_any(self) -> Any:
        """Read the value as plain data, uninterpreted."""
        ...

    def error(self, message: str) -> DecodeError:
        """Wrap a diagnostic into the format's structured error at this position."""
        ...


# An element writer receives the encoder positioned at the element.
type WriteFn = Callable[[Encoder], Any]


@runtime_checkable
class SeqEncoder(Protocol):
    def element(self, write: WriteFn, /) -> None: ...

    def end(self) -> Any: ...


@runtime_checkable
class MapEncoder(Protocol):
    def entry(self, write_key: WriteFn, write_value: WriteFn, /) -> None: ...

    def end(self) -> Any: ...


@runtime_checkable
class Encoder(Protocol):
    """Write one value of the underlying format.

    Each ``write_*`` returns the format's output for the value (for the
    plain-data encoder, the value itself).
    """

    def write_str(self, value: str, /) -> Any: ...

    def write_none(self) -> Any: ...

    def write_seq(self, length: int | None) -> SeqEncoder: ...

    def write_map(self, length: int | None) -> MapEncoder: ...

    def write_any(self, value: Any, /) -> Any: ...
