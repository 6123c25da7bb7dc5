"""
Date utilities for News Digest.

Publish dates arrive as whatever the feed put in them: ISO-8601, RFC 822,
or garbage. Everything here tolerates bad input and returns None instead
of raising.
"""
import logging
from datetime import datetime, timedelta, timezone
from typing import Optional, Union

import dateutil.parser

logger = logging.getLogger(__name__)

DateLike = Union[str, datetime, None]


def parse_date(value: DateLike) -> Optional[datetime]:
    """
    Parse a publish date into a timezone-aware datetime.

    Args:
        value: Date string, datetime, or None

    Returns:
        Aware datetime (naive values are taken as UTC), or None if the
        value is missing or unparseable
    """
    if value is None or value == "":
        return None

    if isinstance(value, datetime):
        dt = value
    else:
        try:
            dt = dateutil.parser.parse(str(value))
        except (ValueError, OverflowError) as e:
            logger.debug(f"Failed to parse date '{value}': {e}")
            return None

    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return dt


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def days_since(value: DateLike, now: Optional[datetime] = None) -> Optional[int]:
    """
    Whole days elapsed between a publish date and now, floored.

    Future dates give negative values. Returns None for invalid dates.
    """
    published = parse_date(value)
    if published is None:
        return None
    now = parse_date(now) or utc_now()
    return (now - published) // timedelta(days=1)


def week_start(now: datetime) -> datetime:
    """Monday 00:00 of the week containing now."""
    start = now - timedelta(days=now.weekday())
    return start.replace(hour=0, minute=0, second=0, microsecond=0)


def week_key(dt: datetime) -> str:
    """ISO week key, e.g. '2024-W07'."""
    year, week, _ = dt.isocalendar()
    return f"{year}-W{week:02d}"


def to_iso(dt: Optional[datetime]) -> Optional[str]:
    if dt is None:
        return None
    return dt.isoformat()
