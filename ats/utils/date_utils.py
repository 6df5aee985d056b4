"""Date parsing and day arithmetic shared by the SLA and report services."""

import math
from datetime import date, datetime, time, timedelta, timezone
from typing import Optional, Union

from ats.constants import EXPORT_DATE_FORMAT, SECONDS_PER_DAY
from ats.errors import InvalidDate

DateLike = Union[str, date, datetime]


def ensure_utc(value: datetime) -> datetime:
    """Return an aware UTC datetime. Naive values are taken as UTC."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def parse_datetime(value: Optional[DateLike]) -> Optional[datetime]:
    """Parse a stored timestamp into an aware UTC datetime.

    Accepts ISO-8601 strings (with or without a trailing "Z"), plain dates and
    datetimes. Empty strings and the literal strings "null"/"undefined" that
    leak out of the browser client are treated as missing.

    Args:
        value: Raw value from a record.

    Returns:
        Aware UTC datetime, or None when the value is missing.

    Raises:
        InvalidDate: If the value cannot be parsed.
    """
    if value is None:
        return None

    if isinstance(value, datetime):
        return ensure_utc(value)

    if isinstance(value, date):
        return datetime.combine(value, time.min, tzinfo=timezone.utc)

    if not isinstance(value, str):
        raise InvalidDate(f"Unsupported date value: {value!r}")

    text = value.strip()
    if not text or text in ("null", "undefined"):
        return None

    if text.endswith("Z"):
        text = text[:-1] + "+00:00"

    try:
        return ensure_utc(datetime.fromisoformat(text))
    except ValueError:
        raise InvalidDate(f"Invalid date: {value!r}")


def start_of_day(day: date) -> datetime:
    return datetime.combine(day, time.min, tzinfo=timezone.utc)


def end_of_day(day: date) -> datetime:
    return datetime.combine(day, time.max, tzinfo=timezone.utc)


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def ceil_days(delta: timedelta) -> int:
    """Whole days in a duration, any started day counting as a full day."""
    return math.ceil(delta.total_seconds() / SECONDS_PER_DAY)


def floor_days(delta: timedelta) -> int:
    """Whole days fully elapsed in a duration."""
    return math.floor(delta.total_seconds() / SECONDS_PER_DAY)


def format_date(value: Optional[datetime]) -> str:
    """Render a timestamp as dd/mm/YYYY for spreadsheets; empty when missing."""
    if value is None:
        return ""
    return value.strftime(EXPORT_DATE_FORMAT)


def utc_or_now(value: Optional[datetime]) -> datetime:
    """A caller-supplied instant normalized to UTC, or now when absent."""
    return ensure_utc(value) if value else utc_now()
