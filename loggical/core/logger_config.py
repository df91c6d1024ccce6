"""
Logger configuration management

LoggerOptions is what callers pass in: every field is optional and None
means "not given". NormalizedLoggerOptions is the resolved configuration a
logger actually runs with.
"""

from __future__ import annotations
from dataclasses import dataclass, field, fields, replace
from typing import Any, Dict, Optional, Sequence, Tuple, Union

from loggical.core.log_level import ColorLevel, LogLevel

PrefixType = Union[str, Sequence[str]]


def _prefix_tuple(prefix: Optional[PrefixType]) -> Tuple[str, ...]:
    if prefix is None:
        return ()
    if isinstance(prefix, str):
        return (prefix,)
    return tuple(prefix)


@dataclass
class LoggerOptions:
    """
    Partial logger configuration.

    Only fields that are not None take part in merging. prefix is copied
    at construction so later changes to the caller's list have no effect.
    """

    preset: Optional[str] = None
    prefix: Optional[PrefixType] = None
    min_level: Optional[LogLevel] = None
    color_level: Optional[ColorLevel] = None
    timestamped: Optional[bool] = None
    compact_objects: Optional[bool] = None
    short_timestamp: Optional[bool] = None
    max_value_length: Optional[int] = None
    use_symbols: Optional[bool] = None
    show_separators: Optional[bool] = None
    space_messages: Optional[bool] = None
    redaction: Optional[bool] = None
    fatal_exits_process: Optional[bool] = None
    transports: Optional[Sequence[Any]] = None
    plugins: Optional[Sequence[Any]] = None
    namespace: Optional[str] = None
    namespace_registry: Optional[Any] = None
    metrics: Optional[Any] = None

    def __post_init__(self):
        """Validate configuration after initialization."""
        if self.prefix is not None:
            self.prefix = list(_prefix_tuple(self.prefix))
        if self.transports is not None:
            self.transports = list(self.transports)
        if self.plugins is not None:
            self.plugins = list(self.plugins)
        if isinstance(self.min_level, str):
            self.min_level = LogLevel.from_string(self.min_level)
        if isinstance(self.color_level, str):
            self.color_level = ColorLevel(self.color_level.upper())
        if self.max_value_length is not None and self.max_value_length < 0:
            raise ValueError("max_value_length cannot be negative")

    def given(self) -> Dict[str, Any]:
        """Fields that were explicitly set (not None)."""
        return {
            f.name: getattr(self, f.name)
            for f in fields(self)
            if getattr(self, f.name) is not None
        }

    def merged_with(self, other: "LoggerOptions") -> "LoggerOptions":
        """Return a copy with other's given fields layered on top."""
        return replace(self, **other.given())

    @classmethod
    def from_dict(cls, values: Dict[str, Any]) -> "LoggerOptions":
        """Build options from a plain mapping, ignoring unknown keys."""
        known = {f.name for f in fields(cls)}
        return cls(**{k: v for k, v in values.items() if k in known})


@dataclass(frozen=True)
class NormalizedLoggerOptions:
    """
    Fully resolved logger configuration.

    Instances are never mutated. Child loggers derive new instances with
    dataclasses.replace.
    """

    color_level: ColorLevel = ColorLevel.ENHANCED
    timestamped: bool = True
    compact_objects: bool = False
    short_timestamp: bool = True
    max_value_length: int = 100
    use_symbols: bool = True
    show_separators: bool = False
    space_messages: bool = False
    min_level: LogLevel = LogLevel.INFO
    redaction: bool = True
    fatal_exits_process: bool = False
    transports: Tuple[Any, ...] = field(default_factory=tuple)
    plugins: Tuple[Any, ...] = field(default_factory=tuple)
    prefix: Tuple[str, ...] = field(default_factory=tuple)
    preset: Optional[str] = None
    namespace: Optional[str] = None
    namespace_registry: Optional[Any] = None
    metrics: Optional[Any] = None

    def __post_init__(self):
        # Freeze sequences handed in as lists
        object.__setattr__(self, "prefix", _prefix_tuple(self.prefix))
        object.__setattr__(self, "transports", tuple(self.transports))
        object.__setattr__(self, "plugins", tuple(self.plugins))

    def derive(self, **overrides) -> "NormalizedLoggerOptions":
        """Create a copy with some fields replaced."""
        return replace(self, **overrides)

    def to_dict(self) -> Dict[str, Any]:
        return {f.name: getattr(self, f.name) for f in fields(self)}


DEFAULT_LOGGER_OPTIONS = NormalizedLoggerOptions()


# Named presets selected through LoggerOptions.preset
PRESET_CONFIGS: Dict[str, LoggerOptions] = {
    "standard": LoggerOptions(),
    "compact": LoggerOptions(compact_objects=True, max_value_length=50),
    "readable": LoggerOptions(compact_objects=True, max_value_length=60),
    "server": LoggerOptions(
        compact_objects=True,
        max_value_length=40,
        show_separators=True,
    ),
}

# Output styles selected through the "format" environment key
FORMAT_PRESETS: Dict[str, LoggerOptions] = {
    "compact": LoggerOptions(
        color_level=ColorLevel.ENHANCED,
        timestamped=True,
        compact_objects=True,
        short_timestamp=True,
        use_symbols=True,
        space_messages=False,
    ),
    "readable": LoggerOptions(
        color_level=ColorLevel.ENHANCED,
        timestamped=True,
        compact_objects=False,
        short_timestamp=False,
        use_symbols=False,
        space_messages=True,
    ),
    "server": LoggerOptions(
        color_level=ColorLevel.NONE,
        timestamped=True,
        compact_objects=True,
        short_timestamp=False,
        use_symbols=False,
        space_messages=False,
    ),
}
