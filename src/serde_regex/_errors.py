"""Error types for serde_regex.

Everything raised by this package derives from SerdeError. Decode failures
carry the path of the offending value inside the document so callers can
point at the broken entry, not just the broken text.
"""

from __future__ import annotations


class SerdeError(Exception):
    """Base class for serde_regex errors."""


class DecodeError(SerdeError):
    """A value could not be decoded into the requested shape.

    This is the structured error of the serialization layer: it wraps a
    diagnostic message together with the path at which decoding failed.
    """

    def __init__(self, message: str, path: str = "$") -> None:
        self.message = message
        self.path = path
        super().__init__(f"{path}: {message}")


class CompileError(DecodeError):
    """Source text failed to compile into a pattern or pattern set.

    ``diagnostic`` is the engine's message, unmodified.
    """

    def __init__(self, pattern: str, diagnostic: str, path: str = "$") -> None:
        self.pattern = pattern
        self.diagnostic = diagnostic
        super().__init__(f'invalid regex pattern "{pattern}": {diagnostic}', path)


class PatternTooLongError(CompileError):
    """A pattern exceeds the configured length limit."""

    def __init__(self, pattern: str, max_: int, path: str = "$") -> None:
        self.length = len(pattern)
        self.max = max_
        super().__init__(
            pattern,
            f"pattern length {self.length} exceeds maximum {max_}",
            path,
        )


class ConfigParseError(SerdeError):
    """Error parsing a config dict into RegexConfig."""
