"""Checkout repository protocol."""

from __future__ import annotations

from typing import Optional, Protocol

from ...models.checkout import Checkout


class CheckoutRepository(Protocol):
    def create(self, amount: float, *, user_id: Optional[str] = None, status: str = "pending") -> Checkout:
        ...

    def list_all(self) -> list[Checkout]:
        ...
