"""Tests for configuration parsing, environment lookup and merging"""

import pytest

from loggical import ColorLevel, LogLevel
from loggical.config.environment_config import (
    get_query_config,
    get_server_environment_config,
    parse_config_from_source,
)
from loggical.config.merger import (
    handle_preset_configuration,
    merge_configuration,
    process_logger_configuration,
)
from loggical.config.parsers import parse_boolean, parse_color_level, parse_log_level
from loggical.core.logger_config import (
    DEFAULT_LOGGER_OPTIONS,
    LoggerOptions,
    NormalizedLoggerOptions,
)
from loggical.environment import (
    detect_environment,
    detect_paas,
    is_ci_environment,
    is_development_mode,
    supports_color,
)


class TestParsers:
    """Test string parsers."""

    def test_parse_log_level(self):
        assert parse_log_level("debug") == LogLevel.DEBUG
        assert parse_log_level("WARN") == LogLevel.WARN
        assert parse_log_level("warning") == LogLevel.WARN
        assert parse_log_level("Highlight") == LogLevel.HIGHLIGHT

    def test_parse_log_level_rejects(self):
        assert parse_log_level("verbose") is None
        assert parse_log_level(" debug") is None
        assert parse_log_level("") is None

    def test_parse_color_level(self):
        assert parse_color_level("none") == ColorLevel.NONE
        assert parse_color_level("Basic") == ColorLevel.BASIC
        assert parse_color_level("ENHANCED") == ColorLevel.ENHANCED
        assert parse_color_level("rainbow") is None

    @pytest.mark.parametrize("value", ["true", "1", "YES", " on "])
    def test_parse_boolean_true(self, value):
        assert parse_boolean(value) is True

    @pytest.mark.parametrize("value", ["false", "0", "No", "off"])
    def test_parse_boolean_false(self, value):
        assert parse_boolean(value) is False

    def test_parse_boolean_rejects(self):
        assert parse_boolean("maybe") is None


class TestEnvironmentConfig:
    """Test environment-derived configuration."""

    def test_server_environment(self):
        config = get_server_environment_config({
            "LOGGER_LEVEL": "debug",
            "LOGGER_COLORS": "none",
            "LOGGER_TIMESTAMPS": "false",
            "LOGGER_REDACTION": "off",
            "LOGGER_FATAL_EXIT": "1",
        })
        assert config.min_level == LogLevel.DEBUG
        assert config.color_level == ColorLevel.NONE
        assert config.timestamped is False
        assert config.redaction is False
        assert config.fatal_exits_process is True

    def test_invalid_values_omitted(self):
        config = get_server_environment_config({"LOGGER_LEVEL": "loud", "LOGGER_COLORS": ""})
        assert config.given() == {}

    def test_reads_os_environ(self, monkeypatch):
        monkeypatch.setenv("LOGGER_LEVEL", "error")
        assert get_server_environment_config().min_level == LogLevel.ERROR

    def test_format_preset(self):
        config = get_server_environment_config({"LOGGER_FORMAT": "server"})
        assert config.color_level == ColorLevel.NONE
        assert config.compact_objects is True
        assert config.use_symbols is False
        assert config.short_timestamp is False

    def test_explicit_field_beats_format_preset(self):
        config = get_server_environment_config({
            "LOGGER_FORMAT": "server",
            "LOGGER_COLORS": "basic",
        })
        assert config.color_level == ColorLevel.BASIC

    def test_unknown_format_ignored(self):
        assert get_server_environment_config({"LOGGER_FORMAT": "fancy"}).given() == {}

    def test_query_config(self):
        config = get_query_config("?logger_level=warn&logger_colors=none&other=1")
        assert config.min_level == LogLevel.WARN
        assert config.color_level == ColorLevel.NONE

    def test_query_beats_store(self):
        config = get_query_config(
            "logger_level=error",
            store={"logger_level": "debug", "logger_timestamps": "false"},
        )
        assert config.min_level == LogLevel.ERROR
        assert config.timestamped is False

    def test_custom_source(self):
        values = {"app_level": "info"}
        config = parse_config_from_source(values.get, key_prefix="app_")
        assert config.min_level == LogLevel.INFO


class TestMerger:
    """Test configuration precedence."""

    def test_defaults(self):
        options = merge_configuration(LoggerOptions(), LoggerOptions(), development_mode=False)
        assert options == DEFAULT_LOGGER_OPTIONS
        assert options.color_level == ColorLevel.ENHANCED
        assert options.max_value_length == 100
        assert options.min_level == LogLevel.INFO
        assert options.redaction is True
        assert options.fatal_exits_process is False

    def test_programmatic_beats_environment(self):
        options = merge_configuration(
            LoggerOptions(min_level=LogLevel.ERROR),
            LoggerOptions(min_level=LogLevel.DEBUG, timestamped=False),
            development_mode=False,
        )
        assert options.min_level == LogLevel.ERROR
        assert options.timestamped is False

    def test_environment_level_used(self):
        options = merge_configuration(LoggerOptions(), LoggerOptions(min_level=LogLevel.WARN),
                                      development_mode=True)
        assert options.min_level == LogLevel.WARN

    def test_development_mode_default(self):
        options = merge_configuration(LoggerOptions(), LoggerOptions(), development_mode=True)
        assert options.min_level == LogLevel.DEBUG

    def test_development_mode_detected(self, monkeypatch):
        monkeypatch.setenv("PYTHON_ENV", "development")
        assert process_logger_configuration().min_level == LogLevel.DEBUG

    def test_environment_variables_applied(self, monkeypatch):
        monkeypatch.setenv("LOGGER_LEVEL", "debug")
        options = process_logger_configuration(LoggerOptions(min_level=LogLevel.ERROR))
        assert options.min_level == LogLevel.ERROR

    def test_none_never_overrides(self):
        options = merge_configuration(
            LoggerOptions(compact_objects=None),
            LoggerOptions(compact_objects=True),
            development_mode=False,
        )
        assert options.compact_objects is True


class TestPresets:
    """Test preset handling."""

    def test_no_preset_unchanged(self):
        options = LoggerOptions(compact_objects=True)
        assert handle_preset_configuration(options) is options

    def test_user_overrides_preset(self):
        options = process_logger_configuration(
            LoggerOptions(preset="compact", compact_objects=False),
            environment=LoggerOptions(),
            development_mode=False,
        )
        assert options.compact_objects is False
        assert options.max_value_length == 50

    @pytest.mark.parametrize("preset,length,separators", [
        ("standard", 100, False),
        ("compact", 50, False),
        ("readable", 60, False),
        ("server", 40, True),
    ])
    def test_presets(self, preset, length, separators):
        options = process_logger_configuration(
            {"preset": preset}, environment=LoggerOptions(), development_mode=False,
        )
        assert options.max_value_length == length
        assert options.show_separators is separators

    def test_unknown_preset_ignored(self):
        options = process_logger_configuration(
            LoggerOptions(preset="fancy"), environment=LoggerOptions(), development_mode=False,
        )
        assert options.max_value_length == 100
        assert options.preset is None


class TestOptions:
    """Test option value objects."""

    def test_prefix_copied(self):
        prefixes = ["API"]
        options = LoggerOptions(prefix=prefixes)
        prefixes.append("Users")
        assert options.prefix == ["API"]

    def test_string_levels_accepted(self):
        options = LoggerOptions(min_level="warn", color_level="none")
        assert options.min_level == LogLevel.WARN
        assert options.color_level == ColorLevel.NONE

    def test_invalid_values(self):
        with pytest.raises(ValueError):
            LoggerOptions(min_level="loud")
        with pytest.raises(ValueError):
            LoggerOptions(max_value_length=-1)

    def test_normalized_frozen(self):
        options = NormalizedLoggerOptions(prefix=["A"])
        assert options.prefix == ("A",)
        with pytest.raises(AttributeError):
            options.min_level = LogLevel.DEBUG

    def test_derive(self):
        child = DEFAULT_LOGGER_OPTIONS.derive(min_level=LogLevel.ERROR)
        assert child.min_level == LogLevel.ERROR
        assert DEFAULT_LOGGER_OPTIONS.min_level == LogLevel.INFO


class TestEnvironmentDetection:
    """Test runtime capability detection."""

    def test_development_mode(self):
        assert is_development_mode({"APP_ENV": "dev"}) is True
        assert is_development_mode({"PYTHON_ENV": "production"}) is False
        assert is_development_mode({}) is False

    def test_ci(self):
        assert is_ci_environment({"GITHUB_ACTIONS": "true"}) is True
        assert is_ci_environment({}) is False

    def test_paas(self):
        assert detect_paas({"DYNO": "web.1"}) == "heroku"
        assert detect_paas({}) is None

    def test_color_support(self):
        assert supports_color({"NO_COLOR": "1", "FORCE_COLOR": "1"}) is False
        assert supports_color({"FORCE_COLOR": "1"}) is True
        assert supports_color({"FORCE_COLOR": "0"}) is False

    def test_snapshot(self):
        env = detect_environment({"CI": "1"})
        assert env.is_server is True
        assert env.is_browser is False
        assert env.is_ci is True
        assert env.has_filesystem is True
