"""
Contextual highlighting of message text

Used only at ColorLevel.ENHANCED. One composite pattern is applied so a
region is colored at most once.
"""

from typing import Optional
import re

from loggical.core.log_level import ColorLevel
from loggical.utils.colors import colors

SYNTAX_PATTERN = re.compile(
    r"(https?://[^\s]+)"
    r"|(/[^\s]+\.[a-zA-Z0-9]+)"
    r"|(\b(?:(?:25[0-5]|2[0-4][0-9]|[01]?[0-9][0-9]?)\.){3}"
    r"(?:25[0-5]|2[0-4][0-9]|[01]?[0-9][0-9]?)\b)"
    r"|(\d+(?:\.\d+)?%)"
    r"|(?<![a-zA-Z0-9/:.\d])(\b\d+(?:\.\d+)?)\b(?![a-zA-Z0-9/:-]|\.\d)",
    re.IGNORECASE,
)


def syntax_highlight(text: str, color_level: Optional[ColorLevel] = None) -> str:
    """
    Highlight URLs, file paths, IPv4 addresses, percentages and numbers.

    Example:
        syntax_highlight("GET http://x.io took 25ms", ColorLevel.ENHANCED)
    """

    def paint(match: re.Match) -> str:
        url, path, ip_address, percentage, number = match.groups()
        if url:
            return colors.blue(url, color_level)
        if path:
            return colors.dim(path, color_level)
        if ip_address:
            return colors.blue(ip_address, color_level)
        if percentage:
            return colors.yellow(percentage, color_level)
        if number:
            return colors.yellow(number, color_level)
        return match.group(0)

    return SYNTAX_PATTERN.sub(paint, text)


def apply_enhanced_highlighting(text: str, color_level: Optional[ColorLevel]) -> str:
    """Highlight only at ColorLevel.ENHANCED."""
    if color_level == ColorLevel.ENHANCED:
        return syntax_highlight(text, color_level)
    return text
