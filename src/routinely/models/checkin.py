"""Check-in event log table."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import ClassVar, Optional

from sqlalchemy import Column, DateTime
from sqlmodel import Field, SQLModel


def utcnow() -> datetime:
    """Return the current time as an aware UTC datetime."""

    return datetime.now(timezone.utc)


def as_utc(value: datetime) -> datetime:
    """Normalise ``value`` to aware UTC; naive values (SQLite reads) are taken as UTC."""

    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


class CheckIn(SQLModel, table=True):
    """An append-only record that a routine was completed at a point in time."""

    __tablename__: ClassVar[str] = "checkin"

    id: Optional[int] = Field(default=None, primary_key=True)
    routine_id: str = Field(nullable=False, max_length=64, index=True)
    timestamp: datetime = Field(
        default_factory=utcnow,
        sa_column=Column(DateTime(timezone=True), nullable=False, index=True),
    )

    # No uniqueness on (routine_id, day): repeated check-ins are kept as-is.
