"""Prefix block formatting"""

from typing import Optional, Sequence, Union

from loggical.core.log_level import ColorLevel, LogLevel
from loggical.formatters.level_formatting import colorize
from loggical.utils.colors import colors

MAX_PREFIX_LENGTH = 20


def truncate_prefix(prefix: str, max_length: int = MAX_PREFIX_LENGTH) -> str:
    """Cut a prefix to max_length characters, ending in ".."."""
    if len(prefix) <= max_length:
        return prefix
    return f"{prefix[:max_length - 2]}.."


def format_prefixes(
    prefixes: Sequence[str],
    level: LogLevel,
    color_level: Optional[ColorLevel] = None,
) -> str:
    """Render prefixes as a dimmed, level-colored "[A:B]" block."""
    if not prefixes:
        return ""
    block = f"[{':'.join(prefixes)}]"
    return colors.dim(colorize(level, block, color_level), color_level)


def format_log_prefix(
    prefix: Union[str, Sequence[str], None],
    level: LogLevel,
    color_level: Optional[ColorLevel] = None,
) -> str:
    """
    Format logger prefixes.

    Example:
        format_log_prefix(["API", "Users"], LogLevel.INFO)  # "[API:Users]"
    """
    if prefix is None:
        prefixes = []
    elif isinstance(prefix, str):
        prefixes = [prefix]
    else:
        prefixes = list(prefix)
    return format_prefixes([truncate_prefix(p) for p in prefixes], level, color_level)
