"""
Centralized Utilities for Time Handling in ClassDesk.
Goal: Ensure consistent UTC storage and local-timezone display.
"""
from datetime import datetime, timezone
from typing import Optional

import pytz


def utcnow() -> datetime:
    """
    Get the current timezone-aware UTC datetime.
    This is the default clock handed to services; logic code never calls it.
    """
    return datetime.now(timezone.utc)


def ensure_utc(dt: Optional[datetime]) -> Optional[datetime]:
    """
    Normalize a datetime to aware UTC.

    SQLite drops tzinfo on the way back from the database, so naive values
    are taken to be UTC already.
    """
    if dt is None:
        return None
    if dt.tzinfo is None:
        return dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc)


def to_timezone(dt: Optional[datetime], tz_name: str = 'UTC') -> Optional[datetime]:
    """Convert a datetime (naive means UTC) to the named timezone."""
    if dt is None:
        return None
    try:
        target = pytz.timezone(tz_name)
    except pytz.UnknownTimeZoneError:
        target = pytz.UTC
    return ensure_utc(dt).astimezone(target)


def isoformat(dt: Optional[datetime]) -> Optional[str]:
    """Serialize a datetime as an ISO 8601 UTC string, or ``None``."""
    if dt is None:
        return None
    return ensure_utc(dt).isoformat()
