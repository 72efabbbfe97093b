"""Tests for reminder persistence and notification scheduling."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone

import pytest

from routinely.client.reminders import ReminderScheduler
from routinely.client.storage import REMINDERS_KEY
from routinely.constants import DEFAULT_REMINDERS
from routinely.exceptions import PermissionDeniedError, ValidationError
from tests.conftest import REGION, FakeNotificationBackend


@pytest.fixture
def reminders(store, backend, fixed_clock) -> ReminderScheduler:
    scheduler = ReminderScheduler(store, backend, offset_hours=6, clock=fixed_clock)
    scheduler.load()
    return scheduler


def test_defaults_are_seeded_and_persisted(reminders, store):
    ids = [reminder.id for reminder in reminders.reminders]

    assert ids == [rid for rid, _, _ in DEFAULT_REMINDERS]
    assert all(not reminder.enabled for reminder in reminders.reminders)
    assert len(store.get_json(REMINDERS_KEY)) == len(DEFAULT_REMINDERS)


def test_enabling_past_time_schedules_tomorrow(reminders, backend):
    """At 14:00 a 06:00 reminder first fires tomorrow morning."""

    reminders.update_reminder_time("morning", "06:00")

    first_fire, _title = backend.scheduled["morning"]
    assert first_fire == datetime(2024, 3, 16, 6, 0, tzinfo=REGION)


def test_enabling_later_time_schedules_today(reminders, backend):
    reminder = reminders.toggle("dinner")

    assert reminder.enabled
    first_fire, _title = backend.scheduled["dinner"]
    assert first_fire == datetime(2024, 3, 15, 19, 30, tzinfo=REGION)
    assert first_fire.astimezone(timezone.utc) == datetime(2024, 3, 15, 13, 30, tzinfo=timezone.utc)


def test_time_equal_to_now_rolls_over(reminders, backend):
    reminders.update_reminder_time("lunch", "14:00")

    first_fire, _title = backend.scheduled["lunch"]
    assert first_fire == datetime(2024, 3, 15, 14, 0, tzinfo=REGION) + timedelta(days=1)


def test_disabling_cancels_notification(reminders, backend):
    reminders.toggle("water")
    reminders.toggle("water")

    assert "water" not in backend.scheduled
    assert backend.cancelled == ["water"]
    assert not reminders.get("water").enabled


def test_update_time_replaces_registration(reminders, backend, store):
    reminders.update_reminder_time("sleep", "22:00")
    reminders.update_reminder_time("sleep", "23:15")

    assert list(backend.scheduled) == ["sleep"]
    assert backend.scheduled["sleep"][0].hour == 23
    stored = {item["id"]: item for item in store.get_json(REMINDERS_KEY)}
    assert stored["sleep"] == {"id": "sleep", "time": "23:15", "title": stored["sleep"]["title"], "enabled": True}


def test_permission_is_requested_once_granted(store, fixed_clock):
    backend = FakeNotificationBackend(granted=False, grant_on_request=True)
    reminders = ReminderScheduler(store, backend, clock=fixed_clock)
    reminders.load()

    reminders.toggle("lunch")
    reminders.toggle("dinner")

    assert backend.permission_requests == 1
    assert set(backend.scheduled) == {"lunch", "dinner"}


def test_denied_permission_leaves_reminder_disabled(store, fixed_clock):
    backend = FakeNotificationBackend(granted=False, grant_on_request=False)
    reminders = ReminderScheduler(store, backend, clock=fixed_clock)
    reminders.load()

    with pytest.raises(PermissionDeniedError):
        reminders.toggle("exercise")

    assert not reminders.get("exercise").enabled
    assert backend.scheduled == {}


def test_denied_permission_still_saves_new_time(store, fixed_clock):
    backend = FakeNotificationBackend(granted=False, grant_on_request=False)
    reminders = ReminderScheduler(store, backend, clock=fixed_clock)
    reminders.load()

    reminder = reminders.update_reminder_time("breakfast", "07:45")

    assert reminder.time == "07:45"
    assert reminder.enabled
    assert backend.scheduled == {}


def test_scheduling_failure_is_logged_not_raised(reminders, backend, caplog):
    backend.fail_schedule = True

    with caplog.at_level("ERROR", logger="routinely"):
        reminder = reminders.toggle("lunch")

    assert reminder.enabled
    assert "Error scheduling reminder lunch" in caplog.text


@pytest.mark.parametrize("value", ["24:00", "7:60", "noon", "", "12:3:4"])
def test_invalid_time_is_rejected(reminders, value):
    with pytest.raises(ValidationError):
        reminders.update_reminder_time("lunch", value)

    assert reminders.get("lunch").time == "13:00"


def test_unknown_reminder(reminders):
    with pytest.raises(ValidationError):
        reminders.toggle("nap")


def test_reschedule_all_registers_enabled(reminders, store, fixed_clock):
    reminders.toggle("water")
    reminders.toggle("dinner")

    fresh_backend = FakeNotificationBackend()
    reloaded = ReminderScheduler(store, fresh_backend, clock=fixed_clock)
    reloaded.load()

    assert reloaded.reschedule_all() == 2
    assert set(fresh_backend.scheduled) == {"water", "dinner"}


def test_malformed_stored_reminders_fall_back_to_defaults(store, backend, fixed_clock):
    store.set_json(REMINDERS_KEY, [{"id": "x", "time": "bad"}])
    reminders = ReminderScheduler(store, backend, clock=fixed_clock)

    loaded = reminders.load()

    assert len(loaded) == len(DEFAULT_REMINDERS)
