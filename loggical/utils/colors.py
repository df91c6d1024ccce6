"""
ANSI color helpers

Every color function takes the text and the active ColorLevel and acts
as an identity when colors are disabled.
"""

from __future__ import annotations
from typing import Optional, Tuple

from loggical.core.log_level import ColorLevel
from loggical.environment import supports_color


def should_apply_colors(color_level: Optional[ColorLevel]) -> bool:
    """
    Check if colors should be applied.

    ColorLevel.NONE (or no level) always disables colors. Otherwise the
    terminal capability decides.
    """
    if color_level is None or color_level == ColorLevel.NONE:
        return False
    return supports_color()


class ColorFunction:
    """A composable ANSI style: call it with text and a color level."""

    def __init__(self, *styles: Tuple[str, str]):
        self.styles = styles

    def __call__(self, text: str, color_level: Optional[ColorLevel] = None) -> str:
        if text == "" or not should_apply_colors(color_level):
            return text
        opening = "".join(f"\033[{start}m" for start, _ in self.styles)
        closing = "".join(f"\033[{end}m" for _, end in reversed(self.styles))
        return f"{opening}{text}{closing}"

    def __add__(self, other: "ColorFunction") -> "ColorFunction":
        return ColorFunction(*self.styles, *other.styles)

    def __repr__(self) -> str:
        codes = ";".join(start for start, _ in self.styles)
        return f"ColorFunction({codes})"


class colors:
    """Color palette used by the formatters."""

    # Foreground
    black = ColorFunction(("30", "39"))
    red = ColorFunction(("31", "39"))
    green = ColorFunction(("32", "39"))
    yellow = ColorFunction(("33", "39"))
    blue = ColorFunction(("34", "39"))
    magenta = ColorFunction(("35", "39"))
    cyan = ColorFunction(("36", "39"))
    white = ColorFunction(("37", "39"))

    # Modifiers
    bold = ColorFunction(("1", "22"))
    dim = ColorFunction(("2", "22"))

    # Background
    bg_red = ColorFunction(("41", "49"))
    bg_magenta = ColorFunction(("45", "49"))

    # Combinations
    dim_cyan = dim + cyan
    dim_white = dim + white
