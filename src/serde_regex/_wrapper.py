"""Serde — the carrier that gives pattern values a decode/encode contract.

Compiled RE2 patterns belong to the engine, containers belong to Python;
neither can grow serialization methods. Serde[T] wraps a value of any
supported shape and carries that contract for it instead.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from serde_regex._codec import codec_for, codec_of
from serde_regex._config import DEFAULT_CONFIG, RegexConfig

if TYPE_CHECKING:
    from collections.abc import Iterator

    from serde_regex._types import Decoder, Encoder


@dataclass(frozen=True, slots=True)
class Serde[T]:
    """Holds one value. Equality and hashing delegate to that value.

    Attribute access passes through to the held value, so a wrapped pattern
    can be used directly:

    >>> import re2
    >>> Serde(re2.compile("a.*b")).search("xaxb") is not None
    True
    """

    value: T

    def __getattr__(self, name: str) -> Any:
        # Only reached when normal lookup fails. The guard keeps a
        # half-built instance (copy, pickle) from recursing.
        if name == "value":
            raise AttributeError(name)
        return getattr(self.value, name)

    def __len__(self) -> int:
        return len(self.value)  # type: ignore[arg-type]

    def __iter__(self) -> Iterator[Any]:
        return iter(self.value)  # type: ignore[call-overload]

    def __getitem__(self, key: Any) -> Any:
        return self.value[key]  # type: ignore[index]

    def __contains__(self, item: Any) -> bool:
        return item in self.value  # type: ignore[operator]

    def into_inner(self) -> T:
        """Return the held value."""
        return self.value

    @classmethod
    def deserialize(
        cls, decoder: Decoder, shape: Any, config: RegexConfig = DEFAULT_CONFIG
    ) -> Serde[Any]:
        """Decode a value of ``shape`` and wrap it.

        Raises:
            CompileError: A pattern failed to compile (nothing is returned).
            DecodeError: The data does not have the requested shape.
            TypeError: ``shape`` is not a supported shape.
        """
        return cls(codec_for(shape, config).decode(decoder))

    def serialize(self, encoder: Encoder, shape: Any = None) -> Any:
        """Encode the held value. Without ``shape``, it is inferred from the value."""
        codec = codec_of(self.value) if shape is None else codec_for(shape)
        return codec.encode(self.value, encoder)
