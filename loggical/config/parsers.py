"""
Parsers for configuration values coming from strings

Every parser returns None for input it does not understand so the caller
can skip the value instead of failing.
"""

from typing import Optional

from loggical.core.log_level import ColorLevel, LogLevel
from loggical.core.logger_config import FORMAT_PRESETS

TRUE_VALUES = ("true", "1", "yes", "on")
FALSE_VALUES = ("false", "0", "no", "off")


def parse_log_level(value: str) -> Optional[LogLevel]:
    """
    Parse a log level name.

    Matching is case-insensitive but exact: surrounding whitespace is not
    tolerated. WARNING is accepted as an alias of WARN.

    Example:
        parse_log_level("debug")    # LogLevel.DEBUG
        parse_log_level(" debug")   # None
    """
    try:
        return LogLevel.from_string(value)
    except ValueError:
        return None


def parse_color_level(value: str) -> Optional[ColorLevel]:
    """Parse NONE, BASIC or ENHANCED (case-insensitive)."""
    normalized = value.upper()
    if normalized in ColorLevel.__members__:
        return ColorLevel[normalized]
    return None


def parse_boolean(value: str) -> Optional[bool]:
    """Parse true/false, 1/0, yes/no or on/off (case-insensitive, trimmed)."""
    normalized = value.strip().lower()
    if normalized in TRUE_VALUES:
        return True
    if normalized in FALSE_VALUES:
        return False
    return None


def parse_format_preset(value: str) -> Optional[str]:
    """Accept a known format preset name."""
    normalized = value.strip().lower()
    return normalized if normalized in FORMAT_PRESETS else None
