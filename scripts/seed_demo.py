"""Demo check-in seeding script."""

from __future__ import annotations

import random
from datetime import datetime, timedelta, timezone

from routinely.config import BaseConfig
from routinely.constants import ROUTINES
from routinely.infra.database import bootstrap_database
from routinely.infra.repositories import SQLModelCheckInRepository


def seed_demo(days: int = 30, *, seed: int = 7) -> int:
    """Record a plausible month of check-ins; returns how many were written."""

    rng = random.Random(seed)
    _engine, session_factory = bootstrap_database(BaseConfig())
    repo = SQLModelCheckInRepository(session_factory)

    now = datetime.now(timezone.utc)
    written = 0
    for offset in range(days):
        day = now - timedelta(days=offset)
        for routine in ROUTINES:
            if rng.random() < 0.6:
                repo.create(routine.id, timestamp=day - timedelta(minutes=rng.randint(0, 600)))
                written += 1
    return written


if __name__ == "__main__":
    print(f"Seeded {seed_demo()} check-ins.")
