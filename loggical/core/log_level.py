"""
Log level and color level enumerations
"""

from enum import Enum, IntEnum
from typing import Dict


class LogLevel(IntEnum):
    """
    Log level enumeration.

    Lower numbers are more verbose. A message is emitted when its level
    is greater than or equal to the configured minimum.
    """

    DEBUG = 0       # Detailed diagnostic information
    INFO = 1        # General application flow
    WARN = 2        # Potentially harmful situations
    ERROR = 3       # Errors that don't require termination
    HIGHLIGHT = 4   # Important information that needs attention
    FATAL = 5       # Unrecoverable errors

    def __str__(self) -> str:
        """String representation of log level."""
        return self.name

    @classmethod
    def from_string(cls, level_str: str) -> "LogLevel":
        """
        Convert string to LogLevel.

        Args:
            level_str: Level name (case-insensitive)

        Returns:
            LogLevel enum value

        Raises:
            ValueError: If level_str is not valid
        """
        normalized = level_str.upper()
        if normalized == "WARNING":
            return cls.WARN
        if normalized in cls.__members__:
            return cls[normalized]
        raise ValueError(f"Invalid log level: {level_str}")

    def is_enabled_for(self, min_level: "LogLevel") -> bool:
        """Return True if this level passes a gate set at min_level."""
        return self >= min_level


class ColorLevel(str, Enum):
    """
    How much ANSI decoration is applied to output.

    NONE disables colors entirely, BASIC applies flat colors and
    ENHANCED additionally highlights URLs, IPs, paths and numbers.
    """

    NONE = "NONE"
    BASIC = "BASIC"
    ENHANCED = "ENHANCED"

    def __str__(self) -> str:
        return self.value


# Mapping from log level to names
LEVEL_NAMES: Dict[LogLevel, str] = {level: level.name for level in LogLevel}

# Reverse mapping
LEVEL_FROM_NAME: Dict[str, LogLevel] = {v: k for k, v in LEVEL_NAMES.items()}

# Three letter codes used by compact output
LEVEL_SHORT_LABELS: Dict[LogLevel, str] = {
    LogLevel.DEBUG: "DBG",
    LogLevel.INFO: "INF",
    LogLevel.WARN: "WRN",
    LogLevel.ERROR: "ERR",
    LogLevel.HIGHLIGHT: "HLT",
    LogLevel.FATAL: "FTL",
}

LEVEL_SYMBOLS: Dict[LogLevel, str] = {
    LogLevel.DEBUG: "🔍",
    LogLevel.INFO: "ℹ️",
    LogLevel.WARN: "⚠️",
    LogLevel.ERROR: "❌",
    LogLevel.HIGHLIGHT: "⭐",
    LogLevel.FATAL: "💀",
}
