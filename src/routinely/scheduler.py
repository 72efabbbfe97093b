"""Background scheduler for repeating local notifications."""

from __future__ import annotations

from datetime import datetime, tzinfo
from typing import Any, Callable, Optional

from apscheduler.jobstores.base import JobLookupError
from apscheduler.schedulers.background import BackgroundScheduler as APScheduler
from apscheduler.triggers.cron import CronTrigger

from .logging_config import get_logger

logger = get_logger("scheduler")


class NotificationScheduler:
    """Thin wrapper over APScheduler keyed by notification id."""

    def __init__(self, timezone: tzinfo):
        """Initialize the scheduler in the given reference timezone.

        Args:
            timezone: Fixed-offset tzinfo every cron trigger is evaluated in
        """
        self.timezone = timezone
        self.scheduler = APScheduler(timezone=timezone)

    @property
    def running(self) -> bool:
        return self.scheduler.running

    def start(self, *, paused: bool = False) -> None:
        """Start the background scheduler."""
        if self.scheduler.running:
            logger.warning("Scheduler already running")
            return
        self.scheduler.start(paused=paused)
        logger.info("Notification scheduler started")

    def stop(self) -> None:
        """Stop the background scheduler gracefully."""
        if self.scheduler.running:
            self.scheduler.shutdown(wait=False)
            logger.info("Notification scheduler stopped")

    def add_daily_job(
        self,
        job_id: str,
        func: Callable[..., Any],
        *,
        first_run: datetime,
        name: str | None = None,
        kwargs: Optional[dict[str, Any]] = None,
    ) -> Optional[datetime]:
        """Register ``func`` to run every day at ``first_run``'s time of day.

        Re-registering an existing ``job_id`` replaces it. Returns the next run
        time when the scheduler is running.
        """
        trigger = CronTrigger(
            hour=first_run.hour,
            minute=first_run.minute,
            timezone=self.timezone,
            start_date=first_run,
        )
        job = self.scheduler.add_job(
            func=func,
            trigger=trigger,
            id=job_id,
            name=name or job_id,
            kwargs=kwargs or {},
            replace_existing=True,
        )
        logger.info("Scheduled daily job %s starting %s", job_id, first_run.isoformat())
        return getattr(job, "next_run_time", None)

    def remove_job(self, job_id: str) -> bool:
        """Remove a job; returns False when no job with ``job_id`` exists."""
        try:
            self.scheduler.remove_job(job_id)
        except JobLookupError:
            return False
        logger.info("Removed job %s", job_id)
        return True

    def has_job(self, job_id: str) -> bool:
        return self.scheduler.get_job(job_id) is not None

    def next_run_time(self, job_id: str) -> Optional[datetime]:
        job = self.scheduler.get_job(job_id)
        if job is None:
            return None
        return getattr(job, "next_run_time", None)

    def job_ids(self) -> list[str]:
        return [job.id for job in self.scheduler.get_jobs()]


__all__ = ["NotificationScheduler"]
