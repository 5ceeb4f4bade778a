"""
Standardized Date Handling Utilities

Streaks and weekly windows are reasoned about in calendar days, never in
wall-clock instants:
1. "Today" is the calendar day in the configured streak timezone
2. Day differences use date arithmetic only (no time of day, no DST drift)
3. Game weeks run Sunday through Saturday
"""

import logging
from datetime import datetime, date, timedelta, timezone
from typing import Any, Optional
from zoneinfo import ZoneInfo

from streak_bonus.config import STREAK_TIMEZONE
from streak_bonus.exceptions import InvalidRowError

logger = logging.getLogger(__name__)

# Default timezone if configuration is unusable
DEFAULT_TIMEZONE = "UTC"

_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


def get_streak_timezone(tz_name: Optional[str] = None) -> ZoneInfo:
    """
    Get the timezone in which calendar days are evaluated

    Args:
        tz_name: IANA timezone name (defaults to STREAK_TIMEZONE)

    Returns:
        ZoneInfo object, UTC when the name is invalid
    """
    tz_name = tz_name or STREAK_TIMEZONE
    try:
        return ZoneInfo(tz_name)
    except Exception as e:
        logger.error(f"Invalid timezone '{tz_name}': {e}")
        return ZoneInfo(DEFAULT_TIMEZONE)


def today_local(tz_name: Optional[str] = None) -> date:
    """Today's calendar date in the streak timezone"""
    return datetime.now(get_streak_timezone(tz_name)).date()


def days_between(later: date, earlier: date) -> int:
    """
    Whole calendar days from earlier to later

    Uses date ordinals, so the result is exact across DST changes,
    month ends and leap days.
    """
    return later.toordinal() - earlier.toordinal()


def coerce_log_date(value: Any, tz_name: Optional[str] = None) -> date:
    """
    Convert a raw log date into a calendar date

    Args:
        value: date, datetime (naive values are read as UTC) or ISO string
        tz_name: Timezone the calendar day is taken in

    Returns:
        Calendar date of the row

    Raises:
        InvalidRowError: missing, unparseable or zero-epoch dates
    """
    if value is None or value == "":
        raise InvalidRowError("Log row has no date", raw_date=value)

    if isinstance(value, str):
        text = value.strip()
        if text.endswith(("Z", "z")):
            text = text[:-1] + "+00:00"
        try:
            # Plain "YYYY-MM-DD" strings already name the calendar day
            value = date.fromisoformat(text) if len(text) == 10 else datetime.fromisoformat(text)
        except ValueError:
            raise InvalidRowError(f"Unparseable log date '{text}'", raw_date=text)

    if isinstance(value, datetime):
        if value.tzinfo is None:
            value = value.replace(tzinfo=timezone.utc)
        if value == _EPOCH:
            raise InvalidRowError("Log row has a zero-epoch date", raw_date=value)
        return value.astimezone(get_streak_timezone(tz_name)).date()

    if isinstance(value, date):
        if value == _EPOCH.date():
            raise InvalidRowError("Log row has a zero-epoch date", raw_date=value)
        return value

    raise InvalidRowError(f"Unsupported log date type {type(value).__name__}", raw_date=value)


def format_date_ymd(value: date) -> str:
    """Format as YYYY-MM-DD for display and comparison"""
    return value.strftime("%Y-%m-%d")


def get_week_start_date(value: date) -> date:
    """Sunday that starts the game week containing value"""
    # date.weekday(): Monday=0 ... Sunday=6
    return value - timedelta(days=(value.weekday() + 1) % 7)


def get_week_end_date(value: date) -> date:
    """Saturday that ends the game week containing value"""
    return get_week_start_date(value) + timedelta(days=6)


def get_iso_week_number(value: date) -> int:
    """ISO 8601 week number (weeks start Monday)"""
    return value.isocalendar()[1]
