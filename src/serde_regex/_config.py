"""Compile configuration for decoded patterns.

The config is a decode-side parameter: it selects the RE2 options every
decoded pattern is compiled with, and never appears on the wire. Decode with
the same config that produced the encoded document, or the round trip will
yield patterns with different matching behaviour.

Config loading path mirrors the rest of the package:
  dict → parse_regex_config() → RegexConfig → RegexConfig.to_options() → re2.Options
"""

from __future__ import annotations

from dataclasses import dataclass, fields
from typing import Any

import re2

from serde_regex._errors import ConfigParseError

# RE2's own default budget for a compiled program (8 MiB).
DEFAULT_MAX_MEM = 8 << 20

# Ready-made value for RegexConfig.max_pattern_length.
MAX_REGEX_PATTERN_LENGTH = 4096


@dataclass(frozen=True, slots=True)
class RegexConfig:
    """RE2 options applied when compiling decoded source text.

    Defaults are RE2's defaults, so an empty config compiles exactly what
    ``re2.compile(source)`` would. ``max_pattern_length`` is the only
    option that is not an RE2 flag: when set, longer sources are rejected
    before they reach the engine.
    """

    case_sensitive: bool = True
    dot_nl: bool = False
    never_nl: bool = False
    longest_match: bool = False
    posix_syntax: bool = False
    literal: bool = False
    never_capture: bool = False
    perl_classes: bool = False
    word_boundary: bool = False
    one_line: bool = False
    max_mem: int = DEFAULT_MAX_MEM
    max_pattern_length: int | None = None

    def __post_init__(self) -> None:
        if self.max_mem <= 0:
            msg = f"max_mem must be positive, got {self.max_mem}"
            raise ConfigParseError(msg)
        if self.max_pattern_length is not None and self.max_pattern_length <= 0:
            msg = f"max_pattern_length must be positive, got {self.max_pattern_length}"
            raise ConfigParseError(msg)

    def to_options(self) -> re2.Options:
        """Build the ``re2.Options`` for this config.

        RE2's stderr error logging is always disabled: compile diagnostics
        reach the caller through CompileError instead.
        """
        options = re2.Options()
        for name in _RE2_OPTION_NAMES:
            setattr(options, name, getattr(self, name))
        options.log_errors = False
        return options


DEFAULT_CONFIG = RegexConfig()

_RE2_OPTION_NAMES = (
    "case_sensitive",
    "dot_nl",
    "never_nl",
    "longest_match",
    "posix_syntax",
    "literal",
    "never_capture",
    "perl_classes",
    "word_boundary",
    "one_line",
    "max_mem",
)

_BOOL_FIELDS = frozenset(_RE2_OPTION_NAMES) - {"max_mem"}


def parse_regex_config(data: dict[str, Any]) -> RegexConfig:
    """Parse a dict (from JSON/YAML) into a RegexConfig.

    Missing keys take their defaults. Unknown keys are rejected so a typo
    does not silently fall back to a default.

    Raises:
        ConfigParseError: If the dict is malformed.
    """
    if not isinstance(data, dict):
        msg = f"expected dict, got {type(data).__name__}"
        raise ConfigParseError(msg)

    known = {f.name for f in fields(RegexConfig)}
    unknown = sorted(set(data) - known)
    if unknown:
        msg = f"unknown config keys: {unknown} (expected some of {sorted(known)})"
        raise ConfigParseError(msg)

    for name, value in data.items():
        if name in _BOOL_FIELDS:
            if not isinstance(value, bool):
                msg = f"'{name}' must be a bool, got {type(value).__name__}"
                raise ConfigParseError(msg)
        elif name == "max_pattern_length":
            if value is not None and not _is_int(value):
                msg = f"'max_pattern_length' must be an int or null, got {type(value).__name__}"
                raise ConfigParseError(msg)
        elif not _is_int(value):
            msg = f"'{name}' must be an int, got {type(value).__name__}"
            raise ConfigParseError(msg)

    return RegexConfig(**data)


def _is_int(value: Any) -> bool:
    # bool is an int subclass; True is not a memory budget.
    return isinstance(value, int) and not isinstance(value, bool)
