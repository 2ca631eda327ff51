"""
Calendar/time-zone helpers for reporting windows.

Timestamps are stored in UTC. SQLite hands them back naive, so anything read
from the database goes through as_utc() before being compared or bucketed.
"""

from datetime import date, datetime, time, timedelta, timezone, tzinfo
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from shared.config.logging import get_logger
from shared.config.settings import settings

logger = get_logger(__name__)

ONE_DAY = timedelta(days=1)
ONE_MILLISECOND = timedelta(milliseconds=1)


def get_zone(name: str | None) -> tzinfo:
    """Resolve an IANA zone name; unknown or empty names fall back to UTC."""
    if not name:
        return timezone.utc
    try:
        return ZoneInfo(name)
    except (ZoneInfoNotFoundError, ValueError):
        logger.warning("Unknown time zone, using UTC", zone=name)
        return timezone.utc


def as_utc(value: datetime) -> datetime:
    """Normalize a datetime to aware UTC (naive values are taken as UTC)."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def local_midnight(now: datetime) -> datetime:
    """Start of the calendar day containing ``now``, in now's own zone."""
    if now.tzinfo is None:
        now = now.replace(tzinfo=timezone.utc)
    return datetime.combine(now.date(), time.min, tzinfo=now.tzinfo)


def day_start(day: date, zone: tzinfo) -> datetime:
    """00:00:00.000 of ``day`` in ``zone``."""
    return datetime.combine(day, time.min, tzinfo=zone)


def next_day_start(day: date, zone: tzinfo) -> datetime:
    """00:00 of the following calendar day (DST-safe: computed from the date)."""
    return datetime.combine(day + ONE_DAY, time.min, tzinfo=zone)


def business_now() -> datetime:
    """Current instant in the configured business time zone."""
    return datetime.now(get_zone(settings.business_timezone))
