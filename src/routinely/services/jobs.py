"""Fire-and-forget background calls.

The client uses this to send check-ins and refresh statistics without
blocking the toggle that triggered them. A failing call is logged and marked
on its :class:`Job`; nothing is raised to the caller.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from threading import Thread
from typing import Any, Callable, Optional

from ..logging_config import get_logger

logger = get_logger(__name__)

_RUN_ASYNC = True


@dataclass
class Job:
    name: str
    status: str = "queued"
    error: Optional[str] = None
    metadata: dict[str, Any] = field(default_factory=dict)


def set_async_execution(enabled: bool) -> None:
    """Run jobs on daemon threads (True) or inline in the caller (False)."""

    global _RUN_ASYNC
    _RUN_ASYNC = enabled


def fire_and_forget(
    name: str,
    target: Callable[..., Any],
    *,
    metadata: Optional[dict[str, Any]] = None,
    **kwargs: Any,
) -> Job:
    """Start ``target(**kwargs)`` and return its :class:`Job` without waiting."""

    job = Job(name=name, metadata=metadata or {})

    def run() -> None:
        job.status = "running"
        try:
            target(**kwargs)
        except Exception as exc:
            job.status = "failed"
            job.error = str(exc)
            logger.warning("Background job %s failed: %s", name, exc, exc_info=True)
            return
        job.status = "succeeded"

    if _RUN_ASYNC:
        Thread(target=run, name=f"routinely-{name}", daemon=True).start()
    else:
        run()
    return job


__all__ = ["Job", "fire_and_forget", "set_async_execution"]
