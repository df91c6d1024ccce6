"""
Redaction of sensitive values

Walks dicts, lists and tuples and masks values whose key looks like it
holds a credential. Key matching is a fixed heuristic:
exact, substring, underscore suffix or dash suffix, case-insensitive.
"""

from __future__ import annotations
from typing import Any, Optional, Set

SENSITIVE_KEYS = (
    "password",
    "passwd",
    "pwd",
    "secret",
    "token",
    "auth",
    "authorization",
    "bearer",
    "jwt",
    "key",
    "apikey",
    "api_key",
)

REDACTED_VALUE = "***"
CIRCULAR_REFERENCE = "[Circular Reference]"


def is_sensitive_key(key: Any) -> bool:
    """
    Check if a key name indicates sensitive data.

    Args:
        key: Mapping key (non-string keys are compared by their str())

    Returns:
        True if the key appears to hold sensitive data
    """
    lower_key = str(key).lower()
    for pattern in SENSITIVE_KEYS:
        if (
            lower_key == pattern
            or pattern in lower_key
            or lower_key.endswith(f"_{pattern}")
            or lower_key.endswith(f"-{pattern}")
        ):
            return True
    return False


def _is_container(value: Any) -> bool:
    return isinstance(value, (dict, list, tuple))


def _redact(value: Any, seen: Set[int]) -> Any:
    if isinstance(value, BaseException):
        # Diagnostic detail must survive
        return value

    if not _is_container(value):
        return value

    if id(value) in seen:
        return CIRCULAR_REFERENCE
    seen.add(id(value))

    if isinstance(value, list):
        return [_redact(item, seen) for item in value]

    if isinstance(value, tuple):
        items = [_redact(item, seen) for item in value]
        if hasattr(value, "_fields"):
            # namedtuple
            return type(value)(*items)
        return tuple(items)

    result = {}
    for key, item in value.items():
        if is_sensitive_key(key):
            result[key] = REDACTED_VALUE
        elif _is_container(item):
            result[key] = _redact(item, seen)
        else:
            result[key] = item
    return result


def redact(value: Any, enabled: bool = True, seen: Optional[Set[int]] = None) -> Any:
    """
    Apply redaction to any value.

    Disabled redaction and non-container values return the input itself.
    Containers are rebuilt, the input is never modified. A container
    reached a second time is replaced by "[Circular Reference]".

    Args:
        value: Value to redact
        enabled: Whether redaction is enabled
        seen: Identity set shared across calls (for callers walking
              several values as one graph)

    Returns:
        Redacted value

    Example:
        redact({"user": "bob", "password": "hunter2"})
        # {"user": "bob", "password": "***"}
    """
    if not enabled or not _is_container(value):
        return value
    return _redact(value, seen if seen is not None else set())
