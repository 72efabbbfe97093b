"""SQLModel implementation of the checkout repository."""

from __future__ import annotations

from typing import Callable, Optional

from sqlmodel import Session, select

from ...models.checkout import Checkout


class SQLModelCheckoutRepository:
    def __init__(self, session_factory: Callable[[], Session]):
        self.session_factory = session_factory

    def create(self, amount: float, *, user_id: Optional[str] = None, status: str = "pending") -> Checkout:
        with self.session_factory() as session:
            checkout = Checkout(amount=amount, user_id=user_id, status=status or "pending")
            session.add(checkout)
            session.commit()
            session.refresh(checkout)
            session.expunge(checkout)
            return checkout

    def list_all(self) -> list[Checkout]:
        with self.session_factory() as session:
            rows = list(session.exec(select(Checkout).order_by(Checkout.id)).all())  # type: ignore
            session.expunge_all()
            return rows
