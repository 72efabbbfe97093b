"""Key/value settings persisted on the client device."""

from __future__ import annotations

from datetime import datetime
from typing import ClassVar

from sqlalchemy import Column, DateTime, Text
from sqlmodel import Field, SQLModel

from .checkin import utcnow


class AppSetting(SQLModel, table=True):
    """Key-value storage for client state (preferences, reminders, ledger)."""

    __tablename__: ClassVar[str] = "app_setting"

    key: str = Field(primary_key=True, max_length=64)
    # The completion ledger grows without bound, so the value is unbounded text.
    value: str = Field(sa_column=Column(Text, nullable=False))
    updated_at: datetime = Field(
        default_factory=utcnow, sa_column=Column(DateTime(timezone=True), nullable=False)
    )
