"""JSON serialization helpers that never raise"""

from __future__ import annotations
from datetime import date, datetime
from decimal import Decimal
from enum import Enum
from typing import Any
import json

CIRCULAR_REFERENCE = "[Circular Reference]"


def is_primitive(obj: Any) -> bool:
    """Return True for None, strings, numbers and booleans."""
    return obj is None or isinstance(obj, (str, int, float, complex, bool, bytes))


def safe_str(value: Any) -> str:
    """str() that reports a failing __str__ instead of raising."""
    try:
        return str(value)
    except Exception as e:
        return f"[Unable to format: {type(e).__name__}]"


def json_default(value: Any) -> Any:
    """Fallback for values json cannot encode natively."""
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    if isinstance(value, Enum):
        return value.name
    if isinstance(value, Decimal):
        return safe_str(value)
    if isinstance(value, (set, frozenset)):
        return list(value)
    if isinstance(value, bytes):
        return value.decode("utf-8", errors="replace")
    return safe_str(value)


def stringify(obj: Any, indent: int = 2) -> str:
    """
    Safe JSON stringify.

    Circular containers must already be replaced (see
    process_object_for_serialization), anything left over that json
    rejects is reported instead of raised.

    Args:
        obj: Object to serialize
        indent: Indentation (None for a single line)

    Returns:
        JSON string or an "[Unable to serialize: ...]" marker
    """
    try:
        return json.dumps(obj, indent=indent, default=json_default, ensure_ascii=False)
    except ValueError as e:
        if "Circular" in str(e):
            return "[Object with circular reference]"
        return f"[Unable to serialize: {e}]"
    except (TypeError, RecursionError) as e:
        return f"[Unable to serialize: {e}]"
