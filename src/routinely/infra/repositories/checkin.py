"""SQLModel implementation of the check-in repository."""

from __future__ import annotations

from datetime import datetime
from typing import Callable

from sqlalchemy import func
from sqlmodel import Session, select

from ...models.checkin import CheckIn, as_utc, utcnow


class SQLModelCheckInRepository:
    """SQLModel-based check-in repository implementation."""

    def __init__(self, session_factory: Callable[[], Session]):
        self.session_factory = session_factory

    def create(self, routine_id: str, *, timestamp: datetime | None = None) -> CheckIn:
        """Append a check-in event; ``timestamp`` is stored as UTC."""
        with self.session_factory() as session:
            checkin = CheckIn(
                routine_id=routine_id, timestamp=as_utc(timestamp) if timestamp else utcnow()
            )
            session.add(checkin)
            session.commit()
            session.refresh(checkin)
            session.expunge(checkin)
            checkin.timestamp = as_utc(checkin.timestamp)
            return checkin

    def list_all(self) -> list[CheckIn]:
        with self.session_factory() as session:
            rows = list(session.exec(select(CheckIn).order_by(CheckIn.timestamp)).all())  # type: ignore
            session.expunge_all()
        for row in rows:
            row.timestamp = as_utc(row.timestamp)
        return rows

    def count_by_routine(self) -> dict[str, int]:
        """Raw all-time counts per routine id (no de-duplication)."""
        with self.session_factory() as session:
            statement = select(CheckIn.routine_id, func.count()).group_by(CheckIn.routine_id)
            return {routine_id: int(count) for routine_id, count in session.exec(statement).all()}

    def count_since(self, since: datetime) -> int:
        with self.session_factory() as session:
            statement = select(func.count()).select_from(CheckIn).where(CheckIn.timestamp >= as_utc(since))
            return int(session.exec(statement).one())
