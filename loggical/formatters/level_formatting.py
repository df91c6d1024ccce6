"""
Level presentation: labels, symbols and per-level colors
"""

from dataclasses import dataclass
from typing import Dict, Optional

from loggical.core.log_level import (
    LEVEL_NAMES,
    LEVEL_SHORT_LABELS,
    LEVEL_SYMBOLS,
    ColorLevel,
    LogLevel,
)
from loggical.utils.colors import ColorFunction, colors, should_apply_colors


@dataclass(frozen=True)
class LevelStyle:
    """How a level is colored and which console method receives it."""

    label_color: ColorFunction
    method: str
    background: Optional[ColorFunction] = None

    def paint(self, text: str, color_level: Optional[ColorLevel]) -> str:
        painted = self.label_color(text, color_level)
        if self.background is not None:
            painted = self.background(painted, color_level)
        return painted


LEVEL_STYLES: Dict[LogLevel, LevelStyle] = {
    LogLevel.DEBUG: LevelStyle(colors.cyan, "log"),
    LogLevel.INFO: LevelStyle(colors.green, "info"),
    LogLevel.WARN: LevelStyle(colors.yellow, "warn"),
    LogLevel.ERROR: LevelStyle(colors.red, "error"),
    LogLevel.HIGHLIGHT: LevelStyle(colors.black, "info", background=colors.bg_magenta),
    LogLevel.FATAL: LevelStyle(colors.white, "error", background=colors.bg_red),
}


def get_level_label(level: LogLevel) -> str:
    return LEVEL_NAMES.get(level, "UNKNOWN")


def get_level_symbol(level: LogLevel) -> str:
    return LEVEL_SYMBOLS.get(level, "?")


def get_level_short_label(level: LogLevel) -> str:
    return LEVEL_SHORT_LABELS.get(level, "UNK")


def get_console_method(level: LogLevel) -> str:
    """Console method name for a level ("log" when unknown)."""
    style = LEVEL_STYLES.get(level)
    return style.method if style else "log"


def colorize(level: LogLevel, text: Optional[str] = None,
             color_level: Optional[ColorLevel] = None) -> str:
    """Apply the level's colors to text (the level label by default)."""
    if text is None:
        text = get_level_label(level)
    if text == "" or not should_apply_colors(color_level):
        return text
    return LEVEL_STYLES[level].paint(text, color_level)


def format_log_level(
    level: LogLevel,
    use_symbols: bool = False,
    compact_objects: bool = False,
    color_level: Optional[ColorLevel] = None,
) -> str:
    """
    Format the level indicator.

    Symbol when use_symbols, three letter code when compact_objects,
    full name otherwise. Always level-colored.
    """
    if use_symbols:
        name = get_level_symbol(level)
    elif compact_objects:
        name = get_level_short_label(level)
    else:
        name = get_level_label(level)
    return colorize(level, name, color_level)
