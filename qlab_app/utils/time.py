"""
Trading-date utilities.

The benchmark source stamps each daily index value with a full UTC timestamp.
These helpers reduce such timestamps to calendar trading dates in a single
configured timezone so that date lookups never depend on time of day.
"""

from datetime import date, datetime, timezone, tzinfo
from typing import Union
from zoneinfo import ZoneInfo

DateLike = Union[date, datetime, str]


def resolve_timezone(name: str) -> tzinfo:
    """
    Resolve a timezone name to a tzinfo.

    Args:
        name: IANA timezone name, e.g. "UTC" or "Asia/Seoul"

    Returns:
        tzinfo for the name

    Raises:
        KeyError: If the name is unknown (ZoneInfoNotFoundError)
        ValueError: If the name is not a valid key
    """
    if name.upper() == "UTC":
        return timezone.utc
    return ZoneInfo(name)


def parse_timestamp(raw: str, fmt: str) -> datetime:
    """
    Parse a source timestamp into an aware UTC datetime.

    The source format ends with a literal UTC marker, so the parsed naive
    value is UTC by construction.

    Raises:
        ValueError: If the string does not match the format
    """
    return datetime.strptime(raw.strip(), fmt).replace(tzinfo=timezone.utc)


def to_trading_date(ts: datetime, tz: tzinfo) -> date:
    """Calendar date of a timestamp in the benchmark timezone."""
    if ts.tzinfo is None:
        ts = ts.replace(tzinfo=timezone.utc)
    return ts.astimezone(tz).date()


def coerce_date(value: DateLike) -> date:
    """
    Coerce a caller-supplied date into a calendar date.

    Accepts a date, a datetime (its date part is used), or an ISO-8601
    date string such as "2024-01-02".

    Raises:
        ValueError: If a string is not an ISO date
        TypeError: For any other type
    """
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        return date.fromisoformat(value.strip()[:10])
    raise TypeError(f"Cannot interpret {type(value).__name__} as a date")


def format_trading_date(value: date) -> str:
    """Format a trading date for payloads and logging."""
    return value.isoformat()
