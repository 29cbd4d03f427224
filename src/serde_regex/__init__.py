"""serde_regex — serialize compiled RE2 patterns as their source text.

All public types are exported from this module for flat imports:

    from serde_regex import Regex, RegexSet, regex_field, from_json, to_json
"""

__version__ = "0.1.0"

# Codecs and shape resolution — see serde_regex._codec for details
from serde_regex._codec import (
    Codec,
    FieldAdapter,
    MapCodec,
    OptionalCodec,
    PatternCodec,
    RecordCodec,
    SeqCodec,
    SetCodec,
    codec_for,
    codec_of,
)

# Config
from serde_regex._config import (
    DEFAULT_CONFIG,
    MAX_REGEX_PATTERN_LENGTH,
    RegexConfig,
    parse_regex_config,
)

# Errors
from serde_regex._errors import (
    CompileError,
    ConfigParseError,
    DecodeError,
    PatternTooLongError,
    SerdeError,
)

# Entry points
from serde_regex._fields import (
    REGEX_ADAPTER,
    deserialize,
    from_dict,
    regex_field,
    serialize,
    to_dict,
)
from serde_regex._formats import from_json, from_yaml, to_json, to_yaml

# Pattern kinds
from serde_regex._kinds import BytesRegex, BytesRegexSet, Regex, RegexSet

# Format protocols
from serde_regex._types import Decoder, Encoder, MapAccess, MapEncoder, SeqAccess, SeqEncoder
from serde_regex._value import VALUE_ENCODER, ValueDecoder, ValueEncoder
from serde_regex._wrapper import Serde

__all__ = [
    # Pattern kinds
    "Regex",
    "BytesRegex",
    "RegexSet",
    "BytesRegexSet",
    # Carrier
    "Serde",
    # Entry points
    "serialize",
    "deserialize",
    "regex_field",
    "from_dict",
    "to_dict",
    "from_json",
    "to_json",
    "from_yaml",
    "to_yaml",
    "REGEX_ADAPTER",
    "FieldAdapter",
    # Codecs
    "Codec",
    "PatternCodec",
    "SetCodec",
    "OptionalCodec",
    "SeqCodec",
    "MapCodec",
    "RecordCodec",
    "codec_for",
    "codec_of",
    # Format protocols
    "Decoder",
    "Encoder",
    "SeqAccess",
    "MapAccess",
    "SeqEncoder",
    "MapEncoder",
    "ValueDecoder",
    "ValueEncoder",
    "VALUE_ENCODER",
    # Config
    "RegexConfig",
    "DEFAULT_CONFIG",
    "MAX_REGEX_PATTERN_LENGTH",
    "parse_regex_config",
    # Errors
    "SerdeError",
    "DecodeError",
    "CompileError",
    "PatternTooLongError",
    "ConfigParseError",
]
