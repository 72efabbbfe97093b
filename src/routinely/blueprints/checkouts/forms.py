"""Checkout payload validation."""

from __future__ import annotations

import math
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any, Optional

CHECKOUT_STATUSES = ("pending", "completed", "failed", "cancelled")


@dataclass(slots=True)
class CheckoutForm:
    """Represents checkout input prior to validation."""

    amount: float | None = None
    user_id: Optional[str] = None
    status: str = "pending"
    errors: dict[str, list[str]] = field(default_factory=dict, init=False)
    raw_data: dict[str, Any] = field(default_factory=dict, init=False)

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> CheckoutForm:
        form = cls()
        form.raw_data = dict(data)
        return form

    def validate(self) -> bool:
        """Validate the bound data and populate typed attributes."""

        self.errors.clear()

        amount_raw = self.raw_data.get("amount")
        self.amount = None
        if amount_raw is None or amount_raw == "":
            self._add_error("amount", "Amount is required.")
        elif isinstance(amount_raw, bool):
            self._add_error("amount", "Enter a valid number for the amount.")
        else:
            try:
                parsed_amount = float(amount_raw)
            except (TypeError, ValueError):
                self._add_error("amount", "Enter a valid number for the amount.")
            else:
                if not math.isfinite(parsed_amount):
                    self._add_error("amount", "Enter a valid number for the amount.")
                elif parsed_amount <= 0:
                    self._add_error("amount", "Amount must be greater than zero.")
                else:
                    self.amount = parsed_amount

        user_raw = self.raw_data.get("userId")
        self.user_id = None
        if user_raw not in (None, ""):
            self.user_id = str(user_raw).strip()[:64] or None

        status_raw = self.raw_data.get("status") or "pending"
        if status_raw not in CHECKOUT_STATUSES:
            self._add_error("status", f"Status must be one of {', '.join(CHECKOUT_STATUSES)}.")
        else:
            self.status = status_raw

        return not self.errors

    def _add_error(self, field: str, message: str) -> None:
        self.errors.setdefault(field, []).append(message)
