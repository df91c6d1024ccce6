"""Timestamp formatting"""

from datetime import datetime, timezone
from typing import Optional

from loggical.utils.string_utils import pad_number


def format_timestamp(moment: Optional[datetime] = None) -> str:
    """
    Full timestamp in UTC: YYYY-MM-DDTHH:MM:SS.mmmZ

    Naive datetimes are taken as local time.
    """
    moment = moment or datetime.now(timezone.utc)
    utc = moment.astimezone(timezone.utc)
    return (
        f"{utc.year}-{pad_number(utc.month, 2)}-{pad_number(utc.day, 2)}"
        f"T{pad_number(utc.hour, 2)}:{pad_number(utc.minute, 2)}:"
        f"{pad_number(utc.second, 2)}.{pad_number(utc.microsecond // 1000, 3)}Z"
    )


def format_compact_timestamp(moment: Optional[datetime] = None) -> str:
    """Short local timestamp: HH:MM:SS.mmm"""
    moment = moment or datetime.now()
    if moment.tzinfo is not None:
        moment = moment.astimezone()
    return (
        f"{pad_number(moment.hour, 2)}:{pad_number(moment.minute, 2)}:"
        f"{pad_number(moment.second, 2)}.{pad_number(moment.microsecond // 1000, 3)}"
    )


def format_log_timestamp(
    timestamped: bool,
    short_timestamp: bool = True,
    moment: Optional[datetime] = None,
) -> str:
    """Timestamp for a log line, "" when timestamps are off."""
    if not timestamped:
        return ""
    if short_timestamp:
        return format_compact_timestamp(moment)
    return format_timestamp(moment)
