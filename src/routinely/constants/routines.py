"""Fixed daily routine slots and the reminders seeded on first launch."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class Routine:
    id: str
    title_key: str
    subtitle_key: str = ""


ROUTINES: tuple[Routine, ...] = (
    Routine("1", "earlyMorning", "afterWakingUp"),
    Routine("2", "breakfast", "mostImportantMeal"),
    Routine("3", "midMorningSnack", "around11AM"),
    Routine("4", "lunch", "plateMethod"),
    Routine("5", "eveningSnack"),
    Routine("6", "dinner", "eatBefore8PM"),
    Routine("7", "beforeBed", "ifFeelingWeak"),
)

# (id, "HH:MM", title localization key); all start disabled.
DEFAULT_REMINDERS: tuple[tuple[str, str, str], ...] = (
    ("morning", "06:00", "earlyMorning"),
    ("breakfast", "08:00", "breakfast"),
    ("water", "10:00", "hydration"),
    ("lunch", "13:00", "lunch"),
    ("exercise", "17:00", "exercise"),
    ("dinner", "19:30", "dinner"),
    ("sleep", "22:30", "sleep"),
)
