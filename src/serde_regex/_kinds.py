"""Pattern kinds: the compile / recover-source capability per pattern type.

Each kind knows two things about its pattern type: how to build a value
from source text, and how to get the source text back. Everything else
(optionals, sequences, mappings) is written once in ``_codec`` against
these two operations.

Shape markers used in type expressions:

| Marker          | Runtime value                  | Wire form          |
|-----------------|--------------------------------|--------------------|
| Regex           | RE2 pattern over ``str``       | string             |
| BytesRegex      | RE2 pattern over ``bytes``     | string (UTF-8)     |
| RegexSet        | RegexSet                       | list of strings    |
| BytesRegexSet   | BytesRegexSet                  | list of strings    |
"""

from __future__ import annotations

import logging
from collections.abc import Iterator, Sequence
from dataclasses import dataclass, field
from typing import Any, ClassVar, Protocol

import re2

from serde_regex._config import DEFAULT_CONFIG, RegexConfig
from serde_regex._errors import CompileError, PatternTooLongError

logger = logging.getLogger(__name__)

# Both aliases name the RE2 pattern class. They are distinct alias objects,
# which is what lets shape resolution tell text mode from byte mode.
type Regex = re2.Pattern[str]
type BytesRegex = re2.Pattern[bytes]

PATTERN_TYPE: type[Any] = type(re2.compile(""))


class PatternKind[P](Protocol):
    """Compile source text into a ``P`` and recover it again."""

    name: str

    def compile(self, source: str, config: RegexConfig, path: str = "$") -> P: ...

    def source_of(self, value: P, /) -> str: ...


class SetKind[S](Protocol):
    """Build a pattern set from all of its member sources in one call."""

    name: str

    def build(self, sources: Sequence[str], config: RegexConfig, path: str = "$") -> S: ...

    def sources_of(self, value: S, /) -> Sequence[str]: ...


def _check_pattern_length(source: str, config: RegexConfig, path: str) -> None:
    limit = config.max_pattern_length
    if limit is not None and len(source) > limit:
        raise PatternTooLongError(source, limit, path)


# ═══════════════════════════════════════════════════════════════════════════════
# Single patterns
# ═══════════════════════════════════════════════════════════════════════════════


@dataclass(frozen=True, slots=True)
class RegexKind:
    """RE2 patterns, in text or byte mode.

    Byte mode compiles the UTF-8 encoding of the source text: pattern syntax
    stays textual even when the subject is raw bytes.
    """

    name: str
    bytes_mode: bool = False

    def compile(self, source: str, config: RegexConfig, path: str = "$") -> Any:
        _check_pattern_length(source, config, path)
        try:
            # Lone surrogates (legal in JSON escapes) have no UTF-8 form.
            engine_source = source.encode("utf-8") if self.bytes_mode else source
            return re2.compile(engine_source, config.to_options())
        except (re2.error, UnicodeEncodeError) as e:
            logger.debug("%s compile failed at %s: %r: %s", self.name, path, source, e)
            raise CompileError(source, str(e), path) from e

    def source_of(self, value: Any, /) -> str:
        source = value.pattern
        if isinstance(source, bytes):
            return source.decode("utf-8")
        return source


TEXT_REGEX = RegexKind("regex")
BYTES_REGEX = RegexKind("bytes regex", bytes_mode=True)


# ═══════════════════════════════════════════════════════════════════════════════
# Pattern sets
# ═══════════════════════════════════════════════════════════════════════════════


@dataclass(frozen=True, slots=True)
class RegexSet:
    """An ordered set of patterns matched together in one pass.

    The set is compiled once, from all member sources together, into a
    single RE2 set. Its visible state is the ordered tuple of member
    sources; the compiled set is never exposed. Searching is unanchored:
    a member matches if it matches anywhere in the subject.

    >>> s = RegexSet(["a.*b", "c?d"])
    >>> s.matches("xxd")
    [1]

    Raises:
        CompileError: If any member fails to compile. The whole set fails.
    """

    _bytes_mode: ClassVar[bool] = False

    patterns: tuple[str, ...]
    config: RegexConfig = DEFAULT_CONFIG
    _compiled: Any = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        patterns = tuple(self.patterns)
        object.__setattr__(self, "patterns", patterns)
        object.__setattr__(self, "_compiled", self._build(patterns))

    def _build(self, patterns: tuple[str, ...]) -> Any:
        # An empty RE2 set cannot be compiled; an empty RegexSet never matches.
        if not patterns:
            return None
        options = self.config.to_options()
        compiled = re2.Set.SearchSet(options)
        for source in patterns:
            try:
                compiled.Add(self._to_engine(source))
            except UnicodeEncodeError as e:
                logger.debug("set member is not valid UTF-8: %r: %s", source, e)
                raise CompileError(source, str(e)) from e
            except re2.error as e:
                diagnostic = _member_diagnostic(self._to_engine(source), options, e)
                logger.debug("set member failed to compile: %r: %s", source, diagnostic)
                raise CompileError(source, diagnostic) from e
        try:
            compiled.Compile()
        except re2.error as e:
            raise CompileError(", ".join(patterns), str(e)) from e
        return compiled

    @classmethod
    def _to_engine(cls, text: str) -> str | bytes:
        return text.encode("utf-8") if cls._bytes_mode else text

    def matches(self, subject: Any) -> list[int]:
        """Return the indexes of every member matching ``subject``, ascending."""
        if self._compiled is None:
            return []
        # The binding returns None, not an empty list, when nothing matches.
        return sorted(self._compiled.Match(subject) or ())

    def is_match(self, subject: Any) -> bool:
        return bool(self.matches(subject))

    def __len__(self) -> int:
        return len(self.patterns)

    def __iter__(self) -> Iterator[str]:
        return iter(self.patterns)


@dataclass(frozen=True, slots=True)
class BytesRegexSet(RegexSet):
    """RegexSet matching over ``bytes`` subjects."""

    _bytes_mode: ClassVar[bool] = True


def _member_diagnostic(source: str | bytes, options: re2.Options, error: re2.error) -> str:
    """Recover RE2's own diagnostic for a member the set rejected.

    The set binding only reports that adding failed; compiling the member
    alone yields the real syntax error.
    """
    try:
        re2.compile(source, options)
    except re2.error as e:
        return str(e)
    return str(error)


@dataclass(frozen=True, slots=True)
class RegexSetKind:
    """Pattern-set kind for RegexSet and its subclasses."""

    name: str
    set_type: type[RegexSet]

    def build(self, sources: Sequence[str], config: RegexConfig, path: str = "$") -> RegexSet:
        for source in sources:
            _check_pattern_length(source, config, path)
        try:
            return self.set_type(tuple(sources), config)
        except CompileError as e:
            raise CompileError(e.pattern, e.diagnostic, path) from e

    def sources_of(self, value: RegexSet, /) -> Sequence[str]:
        return value.patterns


REGEX_SET = RegexSetKind("regex set", RegexSet)
BYTES_REGEX_SET = RegexSetKind("bytes regex set", BytesRegexSet)


# ═══════════════════════════════════════════════════════════════════════════════
# Lookup
# ═══════════════════════════════════════════════════════════════════════════════

PATTERN_KINDS: dict[Any, RegexKind] = {
    Regex: TEXT_REGEX,
    BytesRegex: BYTES_REGEX,
}

SET_KINDS: dict[Any, RegexSetKind] = {
    RegexSet: REGEX_SET,
    BytesRegexSet: BYTES_REGEX_SET,
}


def kind_of(value: Any) -> RegexKind | RegexSetKind | None:
    """Return the kind a runtime value belongs to, or None."""
    if isinstance(value, BytesRegexSet):
        return BYTES_REGEX_SET
    if isinstance(value, RegexSet):
        return REGEX_SET
    if isinstance(value, PATTERN_TYPE):
        return BYTES_REGEX if isinstance(value.pattern, bytes) else TEXT_REGEX
    return None

