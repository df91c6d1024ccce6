"""Configuration module - parsing, environment lookup and merging"""

from loggical.config.environment_config import (
    get_environment_config,
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

__all__ = [
    "get_environment_config",
    "get_query_config",
    "get_server_environment_config",
    "parse_config_from_source",
    "handle_preset_configuration",
    "merge_configuration",
    "process_logger_configuration",
    "parse_boolean",
    "parse_color_level",
    "parse_log_level",
]
