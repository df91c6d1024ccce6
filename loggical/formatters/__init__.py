"""Formatters module - turns log calls into text"""

from loggical.formatters.log_formatter import (
    LogFormatter,
    format_complete_log,
    format_log_context,
    format_message,
    format_object,
)
from loggical.formatters.object_formatting import format_compact, serialize_error
from loggical.formatters.syntax_highlighting import syntax_highlight

__all__ = [
    "LogFormatter",
    "format_complete_log",
    "format_log_context",
    "format_message",
    "format_object",
    "format_compact",
    "serialize_error",
    "syntax_highlight",
]
