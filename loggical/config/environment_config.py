"""
Environment-based configuration

Reads logger options from the outside world:

- Server runtime: LOGGER_<KEY> environment variables
- Page runtime: logger_<key> query parameters, then a key/value store

Reading only. Merging and presets live in loggical.config.merger.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Any, Callable, Mapping, Optional
from urllib.parse import parse_qs
import os

from loggical.config.parsers import (
    parse_boolean,
    parse_color_level,
    parse_format_preset,
    parse_log_level,
)
from loggical.core.logger_config import FORMAT_PRESETS, LoggerOptions
from loggical.environment import is_browser_environment, is_server_environment

ENV_PREFIX = "LOGGER_"
QUERY_PREFIX = "logger_"


@dataclass(frozen=True)
class ConfigField:
    """One externally configurable field."""

    source_key: str
    target_field: Optional[str]
    parser: Callable[[str], Any]
    is_format_preset: bool = False


CONFIG_FIELDS = (
    ConfigField("level", "min_level", parse_log_level),
    ConfigField("format", None, parse_format_preset, is_format_preset=True),
    ConfigField("colors", "color_level", parse_color_level),
    ConfigField("timestamps", "timestamped", parse_boolean),
    ConfigField("redaction", "redaction", parse_boolean),
    ConfigField("fatal_exit", "fatal_exits_process", parse_boolean),
)


def parse_config_from_source(
    value_getter: Callable[[str], Optional[str]],
    key_prefix: str = "",
) -> LoggerOptions:
    """
    Extract logger options from any key/value source.

    Missing or empty raw values are skipped, as are values the field's
    parser rejects. A format preset contributes all of its fields; fields
    listed after it in CONFIG_FIELDS override them.

    Args:
        value_getter: Returns the raw string for a key, or None
        key_prefix: Prepended to every source key

    Returns:
        LoggerOptions holding only the values that were found
    """
    config = LoggerOptions()

    for config_field in CONFIG_FIELDS:
        raw_value = value_getter(key_prefix + config_field.source_key)
        if not raw_value:
            continue

        parsed = config_field.parser(raw_value)
        if parsed is None:
            continue

        if config_field.is_format_preset:
            config = config.merged_with(FORMAT_PRESETS[parsed])
        else:
            setattr(config, config_field.target_field, parsed)

    return config


def get_server_environment_config(env: Optional[Mapping[str, str]] = None) -> LoggerOptions:
    """Read LOGGER_<KEY> variables (default: os.environ)."""
    environ = os.environ if env is None else env

    def env_getter(key: str) -> Optional[str]:
        return environ.get(f"{ENV_PREFIX}{key.upper()}")

    return parse_config_from_source(env_getter)


def get_query_config(
    query_string: str = "",
    store: Optional[Mapping[str, str]] = None,
) -> LoggerOptions:
    """
    Read page runtime configuration.

    Query parameters (logger_<key>) win over the store.

    Example:
        get_query_config("?logger_level=debug&logger_colors=none")
    """
    params = parse_qs(query_string.lstrip("?"), keep_blank_values=True)

    def page_getter(key: str) -> Optional[str]:
        name = f"{QUERY_PREFIX}{key}"
        if name in params:
            return params[name][0]
        if store is not None:
            return store.get(name) or None
        return None

    return parse_config_from_source(page_getter)


def get_environment_config(
    env: Optional[Mapping[str, str]] = None,
    query_string: str = "",
    store: Optional[Mapping[str, str]] = None,
) -> LoggerOptions:
    """
    Get configuration for the current runtime.

    Precedence (applied by the merger): programmatic options, then this
    environment config, then defaults.
    """
    if is_server_environment():
        return get_server_environment_config(env)
    if is_browser_environment():
        return get_query_config(query_string, store)
    return LoggerOptions()
