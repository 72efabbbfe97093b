"""Checkout log table (payment stub)."""

from __future__ import annotations

from datetime import datetime
from typing import ClassVar, Optional

from sqlalchemy import Column, DateTime
from sqlmodel import Field, SQLModel

from .checkin import utcnow


class Checkout(SQLModel, table=True):
    """A recorded checkout request; no payment provider is involved."""

    __tablename__: ClassVar[str] = "checkout"

    id: Optional[int] = Field(default=None, primary_key=True)
    amount: float = Field(nullable=False)
    user_id: Optional[str] = Field(default=None, max_length=64, index=True)
    status: str = Field(default="pending", max_length=32)
    created_at: datetime = Field(
        default_factory=utcnow, sa_column=Column(DateTime(timezone=True), nullable=False)
    )

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "amount": self.amount,
            "userId": self.user_id,
            "status": self.status,
            "createdAt": self.created_at.isoformat() if self.created_at else None,
        }
