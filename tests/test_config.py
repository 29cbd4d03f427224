"""Tests for compile config parsing (serde_regex._config).

Validates the dict → RegexConfig → re2.Options conversion.
"""

import pytest

from serde_regex import (
    DEFAULT_CONFIG,
    MAX_REGEX_PATTERN_LENGTH,
    ConfigParseError,
    RegexConfig,
    parse_regex_config,
)


class TestParseRegexConfig:
    """Tests for parse_regex_config()."""

    def test_empty_is_default(self) -> None:
        assert parse_regex_config({}) == DEFAULT_CONFIG

    def test_flags(self) -> None:
        config = parse_regex_config({"case_sensitive": False, "dot_nl": True})
        assert config.case_sensitive is False
        assert config.dot_nl is True
        assert config.never_nl is False

    def test_limits(self) -> None:
        config = parse_regex_config(
            {"max_mem": 1 << 16, "max_pattern_length": MAX_REGEX_PATTERN_LENGTH}
        )
        assert config.max_mem == 65536
        assert config.max_pattern_length == 4096

    def test_null_length_limit(self) -> None:
        assert parse_regex_config({"max_pattern_length": None}).max_pattern_length is None

    def test_config_is_hashable(self) -> None:
        assert hash(parse_regex_config({"literal": True})) == hash(RegexConfig(literal=True))


class TestParseErrors:
    """Error cases for parse_regex_config()."""

    def test_not_a_dict(self) -> None:
        with pytest.raises(ConfigParseError, match="expected dict"):
            parse_regex_config(["case_sensitive"])  # type: ignore[arg-type]

    def test_unknown_key(self) -> None:
        with pytest.raises(ConfigParseError, match="unknown config keys: \\['case_sensitiv'\\]"):
            parse_regex_config({"case_sensitiv": False})

    def test_flag_must_be_bool(self) -> None:
        with pytest.raises(ConfigParseError, match="'dot_nl' must be a bool"):
            parse_regex_config({"dot_nl": "yes"})

    def test_bool_is_not_an_int(self) -> None:
        with pytest.raises(ConfigParseError, match="'max_mem' must be an int"):
            parse_regex_config({"max_mem": True})

    def test_length_must_be_int_or_null(self) -> None:
        with pytest.raises(ConfigParseError, match="int or null"):
            parse_regex_config({"max_pattern_length": "10"})

    @pytest.mark.parametrize("data", [{"max_mem": 0}, {"max_pattern_length": -1}])
    def test_limits_must_be_positive(self, data: dict[str, int]) -> None:
        with pytest.raises(ConfigParseError, match="must be positive"):
            parse_regex_config(data)


class TestToOptions:
    def test_flags_are_copied(self) -> None:
        options = RegexConfig(case_sensitive=False, longest_match=True).to_options()
        assert options.case_sensitive is False
        assert options.longest_match is True
        assert options.dot_nl is False

    def test_max_mem(self) -> None:
        assert RegexConfig(max_mem=1 << 20).to_options().max_mem == 1 << 20

    def test_engine_logging_disabled(self) -> None:
        assert DEFAULT_CONFIG.to_options().log_errors is False
