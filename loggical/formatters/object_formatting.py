"""
Object rendering: compact single-line summaries and exception serialization
"""

from __future__ import annotations
from typing import Any, Dict, Optional, Set
import traceback

from loggical.core.log_level import ColorLevel, LogLevel
from loggical.utils.colors import colors
from loggical.utils.serialization import CIRCULAR_REFERENCE, is_primitive, safe_str
from loggical.utils.string_utils import truncate_value

COMPACT_ARRAY_ITEMS = 3
COMPACT_ARRAY_VALUE_LENGTH = 15
COMPACT_OBJECT_ENTRIES = 5
COMPACT_OBJECT_VALUE_LENGTH = 20

_ERROR_FIELDS = ("name", "message", "stack", "cause")


def serialize_error(error: BaseException, seen: Optional[Set[int]] = None) -> Dict[str, Any]:
    """
    Serialize an exception into a plain dict.

    Includes the type name, message, formatted traceback, the explicit
    cause (recursively) and any public attributes set on the instance.
    A cause already serialized higher up the chain becomes
    "[Circular Reference]".

    Example:
        serialize_error(ValueError("bad"))
        # {"name": "ValueError", "message": "bad", "stack": "ValueError: bad"}
    """
    if seen is None:
        seen = set()
    seen.add(id(error))

    result: Dict[str, Any] = {
        "name": type(error).__name__,
        "message": safe_str(error),
        "stack": "".join(
            traceback.format_exception(type(error), error, error.__traceback__)
        ).rstrip(),
    }

    cause = error.__cause__
    if cause is not None:
        if id(cause) in seen:
            result["cause"] = CIRCULAR_REFERENCE
        else:
            result["cause"] = serialize_error(cause, seen)

    for key, value in getattr(error, "__dict__", {}).items():
        if key.startswith("_") or key in _ERROR_FIELDS:
            continue
        result[key] = value

    return result


def process_object_for_serialization(obj: Any, seen: Optional[Set[int]] = None) -> Any:
    """
    Make an object safe for JSON serialization.

    Exceptions become dicts, tuples and sets become lists, mapping keys
    become strings and containers reached twice become
    "[Circular Reference]".
    """
    if seen is None:
        seen = set()

    if isinstance(obj, BaseException):
        if id(obj) in seen:
            return CIRCULAR_REFERENCE
        return process_object_for_serialization(serialize_error(obj, seen), seen)

    if isinstance(obj, (list, tuple, set, frozenset)):
        if id(obj) in seen:
            return CIRCULAR_REFERENCE
        seen.add(id(obj))
        return [process_object_for_serialization(item, seen) for item in obj]

    if isinstance(obj, dict):
        if id(obj) in seen:
            return CIRCULAR_REFERENCE
        seen.add(id(obj))
        return {
            (key if isinstance(key, str) else safe_str(key)): process_object_for_serialization(value, seen)
            for key, value in obj.items()
        }

    return obj


def format_compact_value(value: Any, max_length: int) -> str:
    """Summarize a value nested inside a compact object or array."""
    if value is None:
        return str(value)
    if isinstance(value, str):
        if len(value) > max_length:
            return f'"{value[:max_length - 5]}..."'
        return f'"{value}"'
    if isinstance(value, (bool, int, float)):
        return str(value)
    if isinstance(value, (list, tuple, set, frozenset)):
        return f"Array({len(value)})"
    if isinstance(value, BaseException):
        return f"Error: {safe_str(value)}"
    if isinstance(value, dict):
        return f"{{{len(value)} keys}}"
    return truncate_value(safe_str(value), max_length)


def format_compact(
    obj: Any,
    max_length: int = 100,
    level: Optional[LogLevel] = None,
    color_level: Optional[ColorLevel] = None,
) -> str:
    """
    Format an object as a single line.

    Arrays show their first three items, objects their first five entries
    with a "+N more" marker for the rest. The result is truncated to
    max_length.

    Example:
        format_compact({"user": "bob", "id": 7})  # '{ user: "bob", id: 7 }'
    """
    if is_primitive(obj):
        return str(obj)

    if isinstance(obj, BaseException):
        message = safe_str(obj) or "Unknown error"
        return colors.red(f"Error: {message}", color_level)

    if isinstance(obj, (list, tuple, set, frozenset)):
        items = list(obj)
        shown = [format_compact_value(item, COMPACT_ARRAY_VALUE_LENGTH)
                 for item in items[:COMPACT_ARRAY_ITEMS]]
        more = len(items) - COMPACT_ARRAY_ITEMS
        suffix = f", +{more} more" if more > 0 else ""
        return truncate_value(f"[{', '.join(shown)}{suffix}]", max_length)

    if isinstance(obj, dict):
        entries = list(obj.items())
        if not entries:
            return "{}"
        limit = min(COMPACT_OBJECT_ENTRIES, len(entries))
        shown = [
            f"{colors.cyan(safe_str(key), color_level)}: "
            f"{format_compact_value(value, COMPACT_OBJECT_VALUE_LENGTH)}"
            for key, value in entries[:limit]
        ]
        more = len(entries) - limit
        suffix = f", +{more} more" if more > 0 else ""
        return truncate_value(f"{{ {', '.join(shown)}{suffix} }}", max_length)

    return truncate_value(safe_str(obj), max_length)
