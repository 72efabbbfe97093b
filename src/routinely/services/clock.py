"""Reference-frame clock helpers.

Every notion of "today" in the app (client day keys, server calendar buckets,
reminder occurrences) is computed in a fixed UTC offset rather than the host's
local timezone, so two devices agree on the calendar day.
"""

from __future__ import annotations

from datetime import date, datetime, time, timedelta, timezone

from ..exceptions import ValidationError


def region_tz(offset_hours: float) -> timezone:
    """Return a fixed-offset tzinfo for ``offset_hours`` east of UTC."""

    return timezone(timedelta(hours=offset_hours))


def region_now(offset_hours: float, *, now: datetime | None = None) -> datetime:
    """Return ``now`` (or the wall clock) expressed in the reference frame.

    Naive datetimes are treated as UTC.
    """

    moment = now or datetime.now(timezone.utc)
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=timezone.utc)
    return moment.astimezone(region_tz(offset_hours))


def day_key(day: date) -> str:
    """Format a calendar day as ``YYYY-M-D`` (no zero padding)."""

    return f"{day.year}-{day.month}-{day.day}"


def today_key(offset_hours: float, *, now: datetime | None = None) -> str:
    return day_key(region_now(offset_hours, now=now).date())


def to_region_date(timestamp: datetime, offset_hours: float) -> date:
    """Map a stored UTC timestamp (naive values are taken as UTC) to its reference-frame day."""

    return region_now(offset_hours, now=timestamp).date()


def parse_hhmm(value: str) -> time:
    """Parse a 24h ``HH:MM`` string, raising :class:`ValidationError` when malformed."""

    if not isinstance(value, str):
        raise ValidationError("Time must be a string in HH:MM format.", field="time")
    parts = value.strip().split(":")
    if len(parts) != 2 or not all(part.isdigit() for part in parts):
        raise ValidationError(f"Invalid time {value!r}; expected HH:MM.", field="time")
    hour, minute = int(parts[0]), int(parts[1])
    if not (0 <= hour <= 23 and 0 <= minute <= 59):
        raise ValidationError(f"Time {value!r} is out of range.", field="time")
    return time(hour, minute)


def format_hhmm(value: time) -> str:
    return f"{value.hour:02d}:{value.minute:02d}"


def next_occurrence(hhmm: str, offset_hours: float, *, now: datetime | None = None) -> datetime:
    """Return the next future occurrence of ``hhmm`` in the reference frame.

    If today's occurrence is not strictly after ``now`` it rolls to tomorrow.
    """

    current = region_now(offset_hours, now=now)
    at = parse_hhmm(hhmm)
    candidate = current.replace(hour=at.hour, minute=at.minute, second=0, microsecond=0)
    if candidate <= current:
        candidate += timedelta(days=1)
    return candidate


__all__ = [
    "day_key",
    "format_hhmm",
    "next_occurrence",
    "parse_hhmm",
    "region_now",
    "region_tz",
    "to_region_date",
    "today_key",
]
