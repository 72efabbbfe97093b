"""Check-in recording and dashboard statistics.

Two windowing policies are supported:

``calendar`` (default)
    ``daily`` is the number of distinct routines checked in today. ``weekly``
    and ``monthly`` are *sums of daily distinct counts* over the last 7 days
    and over today plus the previous 30 days. A routine completed on two
    different days therefore counts twice in ``weekly``.

``sliding``
    ``daily``/``weekly``/``monthly`` are raw event counts within the trailing
    24 hours, 7 days and 30 days, with no de-duplication.

Calendar days are always taken in the configured reference UTC offset.
``breakdown`` and ``weeklyHistory`` do not depend on the policy.
"""

from __future__ import annotations

import math
from collections import defaultdict
from dataclasses import dataclass, field
from datetime import date, datetime, timedelta, timezone
from typing import Callable, Iterable

from ..domain.repositories import CheckInRepository
from ..exceptions import ValidationError
from ..logging_config import get_logger
from ..models.checkin import CheckIn, as_utc
from .clock import region_now, to_region_date

logger = get_logger(__name__)

ROUTINE_ID_MAX_LENGTH = 64


@dataclass(slots=True)
class DayCompletion:
    date: date
    percentage: int

    def to_dict(self) -> dict:
        return {"date": self.date.isoformat(), "percentage": self.percentage}


@dataclass(slots=True)
class CheckInStats:
    """Aggregate statistics derived from the check-in log."""

    daily: int = 0
    weekly: int = 0
    monthly: int = 0
    breakdown: dict[str, int] = field(default_factory=dict)
    weekly_history: list[DayCompletion] = field(default_factory=list)
    current_streak: int = 0
    longest_streak: int = 0

    def to_dict(self) -> dict:
        return {
            "daily": self.daily,
            "weekly": self.weekly,
            "monthly": self.monthly,
            "breakdown": dict(self.breakdown),
            "weeklyHistory": [day.to_dict() for day in self.weekly_history],
            "currentStreak": self.current_streak,
            "longestStreak": self.longest_streak,
        }


def validate_routine_id(routine_id: object) -> str:
    """Return the cleaned routine id or raise :class:`ValidationError`."""

    if not isinstance(routine_id, str) or not routine_id.strip():
        raise ValidationError("routineId is required", field="routineId")
    cleaned = routine_id.strip()
    if len(cleaned) > ROUTINE_ID_MAX_LENGTH:
        raise ValidationError(
            f"routineId must be at most {ROUTINE_ID_MAX_LENGTH} characters", field="routineId"
        )
    return cleaned


def completion_percentage(count: int, total: int) -> int:
    """Percentage of ``total`` routines done, rounded half-up to an integer."""

    if total <= 0:
        raise ValueError("total routine count must be greater than zero")
    return int(math.floor(100 * count / total + 0.5))


def distinct_routines_by_day(events: Iterable[CheckIn], offset_hours: float) -> dict[date, set[str]]:
    """Bucket events into reference-frame calendar days, keeping distinct routine ids."""

    by_day: dict[date, set[str]] = defaultdict(set)
    for event in events:
        by_day[to_region_date(event.timestamp, offset_hours)].add(event.routine_id)
    return by_day


def compute_streaks(days: Iterable[date], *, today: date) -> tuple[int, int]:
    """Return (current_streak, longest_streak) for days with at least one check-in."""

    active = set(days)

    # Current streak: walk backwards from today until a gap.
    current = 0
    cursor = today
    while cursor in active:
        current += 1
        cursor -= timedelta(days=1)

    longest = 0
    run = 0
    last_day: date | None = None
    for day in sorted(active):
        if last_day is not None and day == last_day + timedelta(days=1):
            run += 1
        else:
            run = 1
        longest = max(longest, run)
        last_day = day

    return current, longest


def build_weekly_history(
    by_day: dict[date, set[str]], *, today: date, total_routines: int, days: int = 7
) -> list[DayCompletion]:
    """Per-day completion percentages for the last ``days`` days, oldest first."""

    history: list[DayCompletion] = []
    for offset in range(days - 1, -1, -1):
        day = today - timedelta(days=offset)
        count = len(by_day.get(day, ()))
        history.append(DayCompletion(date=day, percentage=completion_percentage(count, total_routines)))
    return history


def sum_daily_distinct(by_day: dict[date, set[str]], *, start: date, end: date) -> int:
    return sum(len(routines) for day, routines in by_day.items() if start <= day <= end)


class CheckInService:
    """Records check-ins and computes dashboard statistics."""

    def __init__(
        self,
        repository: CheckInRepository,
        *,
        total_routines: int = 7,
        offset_hours: float = 6.0,
        policy: str = "calendar",
        weekly_days: int = 7,
        monthly_lookback_days: int = 30,
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        if total_routines <= 0:
            raise ValueError("total_routines must be greater than zero")
        if policy not in ("calendar", "sliding"):
            raise ValueError(f"Unknown stats window policy: {policy!r}")
        self.repository = repository
        self.total_routines = total_routines
        self.offset_hours = offset_hours
        self.policy = policy
        self.weekly_days = weekly_days
        self.monthly_lookback_days = monthly_lookback_days
        self._clock = clock or (lambda: datetime.now(timezone.utc))

    @classmethod
    def from_config(cls, repository: CheckInRepository, config, **kwargs) -> "CheckInService":
        return cls(
            repository,
            total_routines=config.TOTAL_ROUTINES,
            offset_hours=config.REGION_UTC_OFFSET_HOURS,
            policy=config.STATS_WINDOW,
            weekly_days=config.WEEKLY_WINDOW_DAYS,
            monthly_lookback_days=config.MONTHLY_LOOKBACK_DAYS,
            **kwargs,
        )

    def _now_utc(self) -> datetime:
        return as_utc(self._clock())

    def record_checkin(self, routine_id: str) -> CheckIn:
        """Append a check-in event stamped with the current time."""

        cleaned = validate_routine_id(routine_id)
        checkin = self.repository.create(cleaned, timestamp=self._now_utc())
        logger.info("Recorded check-in", extra={"routine_id": cleaned, "checkin_id": checkin.id})
        return checkin

    def compute_stats(self) -> CheckInStats:
        """Compute the dashboard statistics from the full event log."""

        now_utc = self._now_utc()
        today = region_now(self.offset_hours, now=now_utc).date()

        events = self.repository.list_all()
        by_day = distinct_routines_by_day(events, self.offset_hours)
        current_streak, longest_streak = compute_streaks(by_day.keys(), today=today)

        stats = CheckInStats(
            breakdown=self.repository.count_by_routine(),
            weekly_history=build_weekly_history(
                by_day, today=today, total_routines=self.total_routines, days=self.weekly_days
            ),
            current_streak=current_streak,
            longest_streak=longest_streak,
        )

        if self.policy == "calendar":
            stats.daily = len(by_day.get(today, ()))
            stats.weekly = sum_daily_distinct(
                by_day, start=today - timedelta(days=self.weekly_days - 1), end=today
            )
            stats.monthly = sum_daily_distinct(
                by_day, start=today - timedelta(days=self.monthly_lookback_days), end=today
            )
        else:
            stats.daily = self.repository.count_since(now_utc - timedelta(hours=24))
            stats.weekly = self.repository.count_since(now_utc - timedelta(days=self.weekly_days))
            stats.monthly = self.repository.count_since(
                now_utc - timedelta(days=self.monthly_lookback_days)
            )

        logger.debug(
            "Computed check-in stats",
            extra={"policy": self.policy, "daily": stats.daily, "events": len(events)},
        )
        return stats


__all__ = [
    "CheckInService",
    "CheckInStats",
    "DayCompletion",
    "build_weekly_history",
    "completion_percentage",
    "compute_streaks",
    "distinct_routines_by_day",
    "validate_routine_id",
]
