"""Time-related utility functions."""

from datetime import date, datetime, time, timedelta, timezone
from typing import Optional

DAY_NAMES = ["Lundi", "Mardi", "Mercredi", "Jeudi", "Vendredi", "Samedi", "Dimanche"]


def utc_now() -> datetime:
    """Return current UTC time as timezone-aware datetime."""
    return datetime.now(timezone.utc)


def parse_hhmm(value: Optional[str]) -> Optional[tuple[int, int]]:
    """Parse an "HH:MM" clock string, returning None when it is not one."""
    if not value or not isinstance(value, str):
        return None
    parts = value.strip().split(":")
    if len(parts) != 2 or not all(p.isdigit() for p in parts):
        return None
    hour, minute = int(parts[0]), int(parts[1])
    if hour > 23 or minute > 59:
        return None
    return hour, minute


def shift_duration_hours(start: str, end: str) -> float:
    """
    Duration of a shift in hours.

    An end clock earlier than the start clock means the shift crosses
    midnight, so 24 hours are added.
    """
    start_hour, start_min = parse_hhmm(start)
    end_hour, end_min = parse_hhmm(end)

    minutes = (end_hour * 60 + end_min) - (start_hour * 60 + start_min)
    if minutes < 0:
        minutes += 24 * 60
    return minutes / 60


def anchor_time(week_start: date, day: int, clock: str, cutoff_hour: int) -> datetime:
    """
    Anchor a wall-clock time to an absolute datetime within the week.

    Clock times earlier than ``cutoff_hour`` belong to the night following
    ``day`` and are moved to the next calendar date.
    """
    hour, minute = parse_hhmm(clock)
    shift_date = week_start + timedelta(days=day)
    if hour < cutoff_hour:
        shift_date += timedelta(days=1)
    return datetime.combine(shift_date, time(hour, minute))


def anchor_shift(
    week_start: date, day: int, start: str, end: str, cutoff_hour: int
) -> tuple[datetime, datetime]:
    """
    Anchor both ends of a shift.

    The end never precedes the start: an end clock at or after the cutoff
    that still falls before the start (e.g. 23:00-07:00) moves to the next day.
    """
    start_at = anchor_time(week_start, day, start, cutoff_hour)
    end_at = anchor_time(week_start, day, end, cutoff_hour)
    if end_at < start_at:
        end_at += timedelta(days=1)
    return start_at, end_at


def hours_between(start: datetime, end: datetime) -> float:
    return (end - start).total_seconds() / 3600


def minutes_between(start: datetime, end: datetime) -> float:
    return (end - start).total_seconds() / 60


def day_name(day: Optional[int]) -> str:
    """French day name for a week offset (0 = Monday)."""
    if day is not None and 0 <= day < len(DAY_NAMES):
        return DAY_NAMES[day]
    return f"Jour {day}"


def format_hours(hours: float) -> str:
    """Render a duration as "10h30"."""
    total_minutes = round(hours * 60)
    sign = "-" if total_minutes < 0 else ""
    h, m = divmod(abs(total_minutes), 60)
    return f"{sign}{h}h{m:02d}"
