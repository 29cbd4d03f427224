"""Per-shape codecs and shape resolution.

A codec pairs ``decode(decoder) -> value`` with ``encode(value, encoder)``.
Pattern kinds get a leaf codec each; optionals, sequences, mappings and
records are generic over their element codec, so every container shape is
available for every kind without repeating the container logic.

Shapes are ordinary type expressions:

    codec_for(Regex)                       # one pattern
    codec_for(Regex | None)                # optional pattern
    codec_for(list[BytesRegex])            # sequence of byte patterns
    codec_for(dict[str, RegexSet | None])  # mapping of optional sets
    codec_for(MyRecord)                    # dataclass with regex_field()s

Decoding is all-or-nothing: containers are assembled only after every child
decoded, and the first failure propagates unchanged to the caller.
"""

from __future__ import annotations

import collections.abc
import dataclasses
import types
import typing
from dataclasses import dataclass
from functools import cache, partial
from typing import TYPE_CHECKING, Any, Protocol, TypeAliasType

from serde_regex._config import DEFAULT_CONFIG, RegexConfig
from serde_regex._kinds import (
    PATTERN_KINDS,
    SET_KINDS,
    RegexKind,
    RegexSetKind,
    kind_of,
)

if TYPE_CHECKING:
    from collections.abc import Callable

    from serde_regex._types import Decoder, Encoder

# Field metadata key carrying a FieldAdapter (see regex_field()).
SERDE_WITH = "serde_with"


class Codec[T](Protocol):
    def decode(self, decoder: Decoder, /) -> T: ...

    def encode(self, value: T, encoder: Encoder, /) -> Any: ...


# ═══════════════════════════════════════════════════════════════════════════════
# Leaf codecs
# ═══════════════════════════════════════════════════════════════════════════════


@dataclass(frozen=True, slots=True)
class PatternCodec:
    """One text or byte pattern ↔ its source string."""

    kind: RegexKind
    config: RegexConfig = DEFAULT_CONFIG

    def decode(self, decoder: Decoder, /) -> Any:
        source = decoder.read_str()
        return self.kind.compile(source, self.config, decoder.path)

    def encode(self, value: Any, encoder: Encoder, /) -> Any:
        kind = kind_of(value)
        if kind != self.kind:
            got = kind.name if kind is not None else type(value).__name__
            msg = f"expected a compiled {self.kind.name}, got {got}"
            raise TypeError(msg)
        return encoder.write_str(self.kind.source_of(value))


@dataclass(frozen=True, slots=True)
class SetCodec:
    """A pattern set ↔ the ordered list of its member sources.

    Members are read in full first and the set is built from all of them
    in one call.
    """

    kind: RegexSetKind
    config: RegexConfig = DEFAULT_CONFIG

    def decode(self, decoder: Decoder, /) -> Any:
        sources = [element.read_str() for element in decoder.read_seq()]
        return self.kind.build(sources, self.config, decoder.path)

    def encode(self, value: Any, encoder: Encoder, /) -> Any:
        if kind_of(value) != self.kind:
            msg = f"expected a {self.kind.name}, got {type(value).__name__}"
            raise TypeError(msg)
        sources = self.kind.sources_of(value)
        seq = encoder.write_seq(len(sources))
        for source in sources:
            seq.element(partial(_write_str, source))
        return seq.end()


def _write_str(value: str, encoder: Encoder) -> Any:
    return encoder.write_str(value)


@dataclass(frozen=True, slots=True)
class ScalarCodec:
    """Plain scalar. Checked on decode, written as-is.

    As a mapping key (``key=True``), a string is also accepted and parsed
    into the key type: text formats such as JSON only have string keys, so
    ``{1: ...}`` comes back as ``{"1": ...}``.
    """

    type_: type[Any]
    key: bool = False

    def decode(self, decoder: Decoder, /) -> Any:
        value = decoder.read_any()
        if self.key and isinstance(value, str) and self.type_ is not str:
            return self._parse_key(value, decoder)
        # bool is an int subclass; a JSON true is not a key of type int.
        if not isinstance(value, self.type_) or (
            isinstance(value, bool) and self.type_ is not bool
        ):
            got = "null" if value is None else type(value).__name__
            raise decoder.error(f"expected {self.type_.__name__}, got {got}")
        return value

    def _parse_key(self, text: str, decoder: Decoder) -> Any:
        if self.type_ is bool:
            if text in _BOOL_KEYS:
                return _BOOL_KEYS[text]
        elif self.type_ is int:
            try:
                value = int(text)
            except ValueError:
                pass
            else:
                # Only the canonical spelling, the one json.dumps writes.
                if str(value) == text:
                    return value
        else:
            try:
                return float(text)
            except ValueError:
                pass
        raise decoder.error(f"expected {self.type_.__name__}, got str {text!r}")

    def encode(self, value: Any, encoder: Encoder, /) -> Any:
        return encoder.write_any(value)


_BOOL_KEYS = {"true": True, "false": False}


class PlainCodec:
    """Uninterpreted plain data in both directions."""

    __slots__ = ()

    def decode(self, decoder: Decoder, /) -> Any:
        return decoder.read_any()

    def encode(self, value: Any, encoder: Encoder, /) -> Any:
        return encoder.write_any(value)


class InferredCodec:
    """Plain data on decode; picks the codec from the value on encode."""

    __slots__ = ()

    def decode(self, decoder: Decoder, /) -> Any:
        return decoder.read_any()

    def encode(self, value: Any, encoder: Encoder, /) -> Any:
        return codec_of(value).encode(value, encoder)


PLAIN = PlainCodec()
INFERRED = InferredCodec()


# ═══════════════════════════════════════════════════════════════════════════════
# Container codecs
# ═══════════════════════════════════════════════════════════════════════════════


@dataclass(frozen=True, slots=True)
class OptionalCodec[T]:
    """``T | None``: the format's absence marker ↔ None, else delegate."""

    inner: Codec[T]

    def decode(self, decoder: Decoder, /) -> T | None:
        present = decoder.read_optional()
        if present is None:
            return None
        return self.inner.decode(present)

    def encode(self, value: T | None, encoder: Encoder, /) -> Any:
        if value is None:
            return encoder.write_none()
        return self.inner.encode(value, encoder)


@dataclass(frozen=True, slots=True)
class SeqCodec[T]:
    """Homogeneous sequence; order is preserved both ways."""

    inner: Codec[T]
    factory: Callable[[list[T]], Any] = list

    def decode(self, decoder: Decoder, /) -> Any:
        items = [self.inner.decode(element) for element in decoder.read_seq()]
        return self.factory(items)

    def encode(self, value: collections.abc.Sequence[T], encoder: Encoder, /) -> Any:
        seq = encoder.write_seq(len(value))
        for item in value:
            seq.element(partial(self.inner.encode, item))
        return seq.end()


@dataclass(frozen=True, slots=True)
class MapCodec[K, T]:
    """Key → value mapping.

    Keys go through their own codec. Scalar keys also accept their string
    spelling, which is how text formats carry them.
    A key seen twice keeps its last value. Encoding follows the mapping's
    own iteration order.
    """

    key: Codec[K]
    inner: Codec[T]

    def decode(self, decoder: Decoder, /) -> dict[K, T]:
        result: dict[K, T] = {}
        for key_decoder, value_decoder in decoder.read_map():
            result[self.key.decode(key_decoder)] = self.inner.decode(value_decoder)
        return result

    def encode(self, value: collections.abc.Mapping[K, T], encoder: Encoder, /) -> Any:
        mapping = encoder.write_map(len(value))
        for k, v in value.items():
            mapping.entry(partial(self.key.encode, k), partial(self.inner.encode, v))
        return mapping.end()


# ═══════════════════════════════════════════════════════════════════════════════
# Records
# ═══════════════════════════════════════════════════════════════════════════════


@dataclass(frozen=True, slots=True)
class FieldAdapter:
    """The ``serialize`` / ``deserialize`` pair bound to a record field."""

    serialize: Callable[..., Any]
    deserialize: Callable[..., Any]


@dataclass(frozen=True, slots=True)
class WithCodec:
    """Routes one record field through its FieldAdapter."""

    adapter: FieldAdapter
    shape: Any
    config: RegexConfig = DEFAULT_CONFIG

    def decode(self, decoder: Decoder, /) -> Any:
        return self.adapter.deserialize(decoder, self.shape, self.config)

    def encode(self, value: Any, encoder: Encoder, /) -> Any:
        return self.adapter.serialize(value, encoder, self.shape)


@dataclass(frozen=True, slots=True)
class _FieldPlan:
    name: str
    codec: Codec[Any]
    required: bool


@cache
def _record_plan(cls: type[Any], config: RegexConfig) -> tuple[_FieldPlan, ...]:
    hints = typing.get_type_hints(cls)
    plans = []
    for f in dataclasses.fields(cls):
        if not f.init:
            continue
        adapter = f.metadata.get(SERDE_WITH)
        hint = hints[f.name]
        codec: Codec[Any]
        if adapter is not None:
            codec = WithCodec(adapter, hint, config)
        elif isinstance(hint, type) and dataclasses.is_dataclass(hint):
            # Nested records (and pattern sets) need no regex_field().
            codec = codec_for(hint, config)
        else:
            codec = PLAIN
        required = (
            f.default is dataclasses.MISSING and f.default_factory is dataclasses.MISSING
        )
        plans.append(_FieldPlan(f.name, codec, required))
    return tuple(plans)


@dataclass(frozen=True, slots=True)
class RecordCodec:
    """A dataclass record ↔ a mapping of field name to field value.

    Fields declared with ``regex_field()`` go through their adapter, fields
    typed as another record are nested, and all other fields are carried as
    plain data. Missing fields fall back to their defaults; unknown keys
    are rejected.
    """

    cls: type[Any]
    config: RegexConfig = DEFAULT_CONFIG

    def decode(self, decoder: Decoder, /) -> Any:
        plans = {plan.name: plan for plan in _record_plan(self.cls, self.config)}
        values: dict[str, Any] = {}
        for key_decoder, value_decoder in decoder.read_map():
            name = key_decoder.read_str()
            plan = plans.get(name)
            if plan is None:
                raise key_decoder.error(
                    f"unknown field {name!r} for {self.cls.__name__} "
                    f"(expected one of {sorted(plans)})"
                )
            values[name] = plan.codec.decode(value_decoder)
        for plan in plans.values():
            if plan.required and plan.name not in values:
                raise decoder.error(
                    f"{self.cls.__name__} missing required field {plan.name!r}"
                )
        return self.cls(**values)

    def encode(self, value: Any, encoder: Encoder, /) -> Any:
        plans = _record_plan(self.cls, self.config)
        mapping = encoder.write_map(len(plans))
        for plan in plans:
            mapping.entry(
                partial(_write_str, plan.name),
                partial(plan.codec.encode, getattr(value, plan.name)),
            )
        return mapping.end()


# ═══════════════════════════════════════════════════════════════════════════════
# Shape resolution
# ═══════════════════════════════════════════════════════════════════════════════

_SCALARS = (str, int, float, bool)
_SEQUENCE_ORIGINS = (
    list,
    collections.abc.Sequence,
    collections.abc.MutableSequence,
)
_MAPPING_ORIGINS = (
    dict,
    collections.abc.Mapping,
    collections.abc.MutableMapping,
)


@cache
def codec_for(shape: Any, config: RegexConfig = DEFAULT_CONFIG) -> Codec[Any]:
    """Return the codec for a shape.

    Codecs are immutable and memoised per (shape, config); compiled
    patterns are never cached here.

    Raises:
        TypeError: If the shape is not supported.
    """
    if shape is Any or shape is object:
        return INFERRED
    if shape in PATTERN_KINDS:
        return PatternCodec(PATTERN_KINDS[shape], config)
    if shape in SET_KINDS:
        return SetCodec(SET_KINDS[shape], config)
    if shape in _SCALARS:
        return ScalarCodec(shape)
    if shape is list:
        return SeqCodec(INFERRED)
    if shape is dict:
        return MapCodec(INFERRED, INFERRED)
    if isinstance(shape, type) and dataclasses.is_dataclass(shape):
        return RecordCodec(shape, config)
    if isinstance(shape, TypeAliasType):
        return codec_for(shape.__value__, config)

    origin = typing.get_origin(shape)
    args = typing.get_args(shape)

    if origin is typing.Union or origin is types.UnionType:
        present = [arg for arg in args if arg is not types.NoneType]
        if len(present) == 1 and len(args) == 2:
            return OptionalCodec(codec_for(present[0], config))
        msg = f"unsupported union shape {shape!r}: only 'X | None' is supported"
        raise TypeError(msg)
    if origin in _SEQUENCE_ORIGINS:
        inner = codec_for(args[0], config) if args else INFERRED
        return SeqCodec(inner)
    if origin is tuple:
        if len(args) == 2 and args[1] is Ellipsis:
            return SeqCodec(codec_for(args[0], config), tuple)
        msg = f"unsupported tuple shape {shape!r}: only 'tuple[X, ...]' is supported"
        raise TypeError(msg)
    if origin in _MAPPING_ORIGINS:
        if args:
            return MapCodec(_key_codec(args[0], config), codec_for(args[1], config))
        return MapCodec(INFERRED, INFERRED)

    msg = f"unsupported shape: {shape!r}"
    raise TypeError(msg)


def codec_of(value: Any) -> Codec[Any]:
    """Return the encode codec for a runtime value.

    Used when serializing without an explicit shape. Plain values that are
    not patterns, containers or records are written as-is.
    """
    kind = kind_of(value)
    if isinstance(kind, RegexKind):
        return PatternCodec(kind)
    if isinstance(kind, RegexSetKind):
        return SetCodec(kind)
    if value is None:
        return OptionalCodec(PLAIN)
    if isinstance(value, collections.abc.Mapping):
        return MapCodec(INFERRED, INFERRED)
    if isinstance(value, list | tuple):
        return SeqCodec(INFERRED)
    if dataclasses.is_dataclass(value) and not isinstance(value, type):
        return RecordCodec(type(value))
    return PLAIN


def _key_codec(shape: Any, config: RegexConfig) -> Codec[Any]:
    if shape in _SCALARS:
        return ScalarCodec(shape, key=True)
    return codec_for(shape, config)
