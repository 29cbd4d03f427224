"""Free entry points and declarative record fields.

``serialize`` / ``deserialize`` are what a record field is bound to, so a
plain dataclass can hold compiled patterns without ever touching Serde:

    @dataclass(frozen=True)
    class Rule:
        name: str
        pattern: Regex = regex_field()
        deny: list[Regex] = regex_field(default_factory=list)

    rule = from_dict(Rule, {"name": "api", "pattern": "^/api/"})
    to_dict(rule)  # {"name": "api", "pattern": "^/api/", "deny": []}
"""

from __future__ import annotations

import dataclasses
from typing import TYPE_CHECKING, Any

from serde_regex._codec import SERDE_WITH, FieldAdapter
from serde_regex._config import DEFAULT_CONFIG, RegexConfig
from serde_regex._value import VALUE_ENCODER, ValueDecoder
from serde_regex._wrapper import Serde

if TYPE_CHECKING:
    from serde_regex._types import Decoder, Encoder


def deserialize(decoder: Decoder, shape: Any, config: RegexConfig = DEFAULT_CONFIG) -> Any:
    """Decode a value of ``shape`` from ``decoder``."""
    return Serde.deserialize(decoder, shape, config).into_inner()


def serialize(value: Any, encoder: Encoder, shape: Any = None) -> Any:
    """Encode ``value`` through ``encoder``; ``shape`` is inferred when omitted."""
    return Serde(value).serialize(encoder, shape)


REGEX_ADAPTER = FieldAdapter(serialize=serialize, deserialize=deserialize)


def regex_field(*, adapter: FieldAdapter = REGEX_ADAPTER, **kwargs: Any) -> Any:
    """A ``dataclasses.field`` (de)serialized through ``adapter``.

    The field's annotation is the shape. Accepts every keyword that
    ``dataclasses.field`` does.
    """
    metadata = {**(kwargs.pop("metadata", None) or {}), SERDE_WITH: adapter}
    return dataclasses.field(metadata=metadata, **kwargs)


def from_dict[T](cls: type[T], data: Any, config: RegexConfig = DEFAULT_CONFIG) -> T:
    """Decode plain data (e.g. from ``json.loads``) into ``cls``.

    ``cls`` can be any shape, not only a record.
    """
    return deserialize(ValueDecoder(data), cls, config)


def to_dict(value: Any, shape: Any = None) -> Any:
    """Encode a record (or any supported value) to plain data."""
    return serialize(value, VALUE_ENCODER, shape)
