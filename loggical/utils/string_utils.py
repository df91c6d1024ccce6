"""String helpers shared by the formatters"""

from typing import Iterable, Optional

ELLIPSIS = "..."


def join_non_empty(
    parts: Iterable[Optional[str]],
    separator: str = " ",
    filter_whitespace: bool = True,
) -> str:
    """
    Join parts, skipping empty (and optionally whitespace-only) values.

    Args:
        parts: Strings to join, None and "" are skipped
        separator: Separator placed between parts
        filter_whitespace: Also skip parts containing only whitespace

    Returns:
        Joined string
    """
    kept = []
    for part in parts:
        if not part:
            continue
        if filter_whitespace and not part.strip():
            continue
        kept.append(part)
    return separator.join(kept)


def truncate_value(value: str, max_length: int) -> str:
    """
    Truncate long values with an ellipsis.

    The result is exactly max_length characters long when truncation
    happens. A max_length too small to hold the ellipsis hard-cuts the
    value instead of returning something longer than requested.

    Example:
        truncate_value("this is a very long string", 10)  # "this is..."
    """
    if len(value) <= max_length:
        return value
    if max_length < len(ELLIPSIS):
        return value[:max(max_length, 0)]
    return f"{value[:max_length - len(ELLIPSIS)]}{ELLIPSIS}"


def pad_number(num: int, width: int) -> str:
    """
    Format a number with leading zeros.

    Negative numbers keep their sign in front of the padding and the
    sign counts towards the width. Values wider than width are never cut.

    Example:
        pad_number(5, 2)   # "05"
        pad_number(-5, 3)  # "-05"
        pad_number(10, 1)  # "10"
    """
    if num < 0:
        return "-" + str(abs(num)).rjust(width - 1, "0")
    return str(num).rjust(width, "0")
