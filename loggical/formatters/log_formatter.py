"""
Log line assembly

format_complete_log builds one line from its parts:
timestamp, level, prefix block, context block and messages.
"""

from __future__ import annotations
from datetime import datetime
from typing import Any, Iterable, Mapping, Optional, Sequence
import json

from loggical.core.log_level import ColorLevel, LogLevel
from loggical.formatters.level_formatting import format_log_level
from loggical.formatters.object_formatting import (
    format_compact,
    process_object_for_serialization,
    serialize_error,
)
from loggical.formatters.prefix_formatting import format_log_prefix
from loggical.formatters.syntax_highlighting import apply_enhanced_highlighting
from loggical.formatters.timestamp_formatting import format_log_timestamp
from loggical.utils.colors import colors
from loggical.utils.redaction import redact
from loggical.utils.serialization import json_default, safe_str, stringify
from loggical.utils.string_utils import join_non_empty, truncate_value

OBJECT_TYPES = (dict, list, tuple, set, frozenset, BaseException)


def _apply_redaction(value: Any, redaction: bool, redaction_strategy=None) -> Any:
    if not redaction:
        return value
    if redaction_strategy is not None:
        return redaction_strategy.redact(value)
    return redact(value, True)


def format_object(
    level: LogLevel,
    obj: Any,
    compact_objects: bool = False,
    max_value_length: int = 100,
    color_level: Optional[ColorLevel] = None,
) -> str:
    """Render a container or exception, compact or as indented JSON."""
    if isinstance(obj, BaseException):
        obj = serialize_error(obj)

    if compact_objects:
        return format_compact(obj, max_value_length, level, color_level)

    return stringify(process_object_for_serialization(obj), indent=2)


def format_message(
    level: LogLevel,
    message: Any,
    max_value_length: int = 100,
    color_level: Optional[ColorLevel] = None,
    compact_objects: bool = False,
    redaction: bool = True,
    indent: int = 0,
    redaction_strategy=None,
) -> str:
    """
    Format a single message argument.

    Args:
        level: Log level of the call
        message: Any value passed to the logger
        max_value_length: Strings longer than this are truncated
        color_level: Active color level
        compact_objects: Single-line object rendering
        redaction: Whether sensitive values are masked
        indent: Spaces placed before the result
        redaction_strategy: Replaces the built-in redaction when given

    Returns:
        Formatted message text
    """
    indent_str = " " * indent
    processed = _apply_redaction(message, redaction, redaction_strategy)

    if isinstance(processed, str):
        truncated = truncate_value(processed, max_value_length)
        return f"{indent_str}{apply_enhanced_highlighting(truncated, color_level)}"

    if isinstance(processed, OBJECT_TYPES):
        rendered = format_object(level, processed, compact_objects, max_value_length, color_level)
        return f"{indent_str}{rendered}"

    truncated = truncate_value(safe_str(processed), max_value_length)
    return f"{indent_str}{apply_enhanced_highlighting(truncated, color_level)}"


def format_log_messages(
    level: LogLevel,
    messages: Iterable[Any],
    max_value_length: int = 100,
    color_level: Optional[ColorLevel] = None,
    compact_objects: bool = False,
    redaction: bool = True,
    redaction_strategy=None,
) -> str:
    """Format every message and join them with spaces."""
    return " ".join(
        format_message(
            level,
            message,
            max_value_length=max_value_length,
            color_level=color_level,
            compact_objects=compact_objects,
            redaction=redaction,
            redaction_strategy=redaction_strategy,
        )
        for message in messages
    )


def _context_value(value: Any) -> str:
    if isinstance(value, str):
        return value
    try:
        return json.dumps(value, default=json_default, ensure_ascii=False)
    except (TypeError, ValueError):
        return safe_str(value)


def format_log_context(
    context: Optional[Mapping[str, Any]],
    color_level: Optional[ColorLevel] = None,
    compact_objects: bool = False,
    redaction: bool = True,
    redaction_strategy=None,
) -> str:
    """
    Format persistent context.

    Compact output is "key=value key2=value2", expanded output is
    "[key:value key2:value2]". Empty context yields "".
    """
    if not context:
        return ""

    processed = _apply_redaction(dict(context), redaction, redaction_strategy)

    if compact_objects:
        return " ".join(
            f"{colors.dim_cyan(safe_str(key), color_level)}="
            f"{colors.dim_white(_context_value(value), color_level)}"
            for key, value in processed.items()
        )

    body = " ".join(
        f"{colors.cyan(safe_str(key), color_level)}:{_context_value(value)}"
        for key, value in processed.items()
    )
    return colors.dim(f"[{body}]", color_level)


def format_complete_log(
    level: LogLevel,
    messages: Sequence[Any],
    options,
    context: Optional[Mapping[str, Any]] = None,
    timestamp: Optional[datetime] = None,
    redaction_strategy=None,
) -> str:
    """
    Format a complete log line.

    Args:
        level: Log level
        messages: Message arguments
        options: Resolved logger options
        context: Persistent context to render
        timestamp: Time of the call (default: now)
        redaction_strategy: Replaces the built-in redaction when given

    Returns:
        The formatted line, without a trailing newline
    """
    color_level = options.color_level

    raw_timestamp = format_log_timestamp(options.timestamped, options.short_timestamp, timestamp)
    level_display = format_log_level(
        level,
        use_symbols=options.use_symbols,
        compact_objects=options.compact_objects,
        color_level=color_level,
    )
    prefix = format_log_prefix(options.prefix, level, color_level)
    context_part = format_log_context(
        context,
        color_level=color_level,
        compact_objects=options.compact_objects,
        redaction=options.redaction,
        redaction_strategy=redaction_strategy,
    )
    message_parts = format_log_messages(
        level,
        messages,
        max_value_length=options.max_value_length,
        color_level=color_level,
        compact_objects=options.compact_objects,
        redaction=options.redaction,
        redaction_strategy=redaction_strategy,
    )

    return join_non_empty([
        colors.dim(raw_timestamp, color_level) if raw_timestamp else "",
        level_display,
        prefix,
        context_part,
        message_parts,
    ])


class LogFormatter:
    """
    Formats log lines for one logger.

    Applies the redaction strategy and message transforms supplied by
    plugins on top of format_complete_log.
    """

    def __init__(self, options, plugins=None):
        self.options = options
        self.plugins = plugins

    def format_log(
        self,
        level: LogLevel,
        messages: Sequence[Any],
        context: Optional[Mapping[str, Any]] = None,
        timestamp: Optional[datetime] = None,
    ) -> str:
        strategy = self.plugins.get_redaction_strategy() if self.plugins is not None else None
        line = format_complete_log(
            level,
            messages,
            self.options,
            context=context,
            timestamp=timestamp,
            redaction_strategy=strategy,
        )
        if self.plugins is not None:
            line = self.plugins.apply_transforms(line, level)
        return line
