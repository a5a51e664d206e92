"""
Helper Functions
================

Common utility functions used across the application.
"""

import math
import uuid
from datetime import date, datetime, time, timedelta, timezone


def generate_id() -> str:
    """Generate a short random id for nested items (subtasks, milestones)."""
    return uuid.uuid4().hex[:12]


def utc_now() -> datetime:
    """Get current UTC datetime with timezone info."""
    return datetime.now(timezone.utc)


def utc_today() -> date:
    """Current calendar date in UTC."""
    return utc_now().date()


def start_of_day(day: date) -> datetime:
    """Midnight UTC at the start of ``day``."""
    return datetime.combine(day, time.min, tzinfo=timezone.utc)


def start_of_month(day: date) -> date:
    return day.replace(day=1)


def start_of_week(day: date) -> date:
    """Monday of the week containing ``day``."""
    return day - timedelta(days=day.weekday())


def round_half_up(value: float) -> int:
    """
    Round to the nearest integer with halves rounded up.

    Python's ``round`` uses banker's rounding (``round(0.5) == 0``); the
    dashboard figures are defined with halves going up.
    """
    return int(math.floor(value + 0.5))


def round_to(value: float, digits: int = 1) -> float:
    """Round half up to ``digits`` decimal places."""
    factor = 10 ** digits
    return math.floor(value * factor + 0.5) / factor


def as_utc(value: datetime) -> datetime:
    """Treat naive datetimes as UTC; convert aware ones to UTC."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)
