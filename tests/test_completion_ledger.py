"""Tests for the client-side completion ledger."""

from __future__ import annotations

from datetime import datetime, timezone

import pytest
import requests

from routinely.client.ledger import CompletionLedger
from routinely.client.storage import COMPLETED_ROUTINES_KEY
from routinely.exceptions import ValidationError


@pytest.fixture
def ledger(store, fake_api, fixed_clock) -> CompletionLedger:
    ledger = CompletionLedger(store, offset_hours=6, api=fake_api, clock=fixed_clock)
    ledger.load()
    return ledger


def test_today_key_uses_reference_offset(store):
    # 20:30 UTC on the 14th is already 02:30 on the 15th at UTC+6.
    late = datetime(2024, 3, 14, 20, 30, tzinfo=timezone.utc)
    ledger = CompletionLedger(store, offset_hours=6, clock=lambda: late)

    assert ledger.today_key() == "2024-3-15"


def test_toggle_twice_restores_state(ledger):
    before = ledger.snapshot()

    assert ledger.toggle("1") is True
    assert ledger.is_completed("1")
    assert ledger.toggle("1") is False

    assert ledger.snapshot() == before
    assert not ledger.is_completed("1")


def test_today_count_counts_distinct_ids(ledger):
    ledger.toggle("1")
    ledger.toggle("3")

    assert ledger.today_count() == 2
    assert ledger.completed_on("2024-3-15") == {"1", "3"}


def test_state_survives_reload(ledger, store, fixed_clock):
    ledger.toggle("2")

    reloaded = CompletionLedger(store, offset_hours=6, clock=fixed_clock)
    reloaded.load()

    assert reloaded.snapshot() == {"2024-3-15": ["2"]}
    assert store.get_json(COMPLETED_ROUTINES_KEY) == {"2024-3-15": ["2"]}


def test_completing_sends_checkin_and_refreshes_stats(store, fake_api, fixed_clock):
    received = []
    ledger = CompletionLedger(
        store, offset_hours=6, api=fake_api, clock=fixed_clock, on_stats=received.append
    )

    ledger.toggle("5")

    assert fake_api.checkins == ["5"]
    assert fake_api.stats_requests == 1
    assert received == [fake_api.stats]


def test_uncompleting_does_not_call_server(ledger, fake_api):
    ledger.toggle("5")
    ledger.toggle("5")

    assert fake_api.checkins == ["5"]
    assert fake_api.stats_requests == 1


def test_checkin_failure_keeps_local_completion(ledger, fake_api):
    fake_api.checkin_error = requests.ConnectionError("offline")

    assert ledger.toggle("4") is True

    assert ledger.is_completed("4")
    assert fake_api.stats_requests == 1


def test_stats_failure_keeps_previous_stats(ledger, fake_api):
    ledger.refresh_stats()
    previous = ledger.latest_stats
    fake_api.stats_error = requests.Timeout("slow")

    assert ledger.refresh_stats() == previous


def test_malformed_storage_loads_empty(store, fixed_clock):
    store.set_json(COMPLETED_ROUTINES_KEY, ["not", "a", "mapping"])
    ledger = CompletionLedger(store, clock=fixed_clock)

    assert ledger.load() == {}


def test_duplicate_ids_in_storage_are_collapsed(store, fixed_clock):
    store.set_json(COMPLETED_ROUTINES_KEY, {"2024-3-15": ["1", "1", "2"]})
    ledger = CompletionLedger(store, clock=fixed_clock)
    ledger.load()

    assert ledger.today_count() == 2


def test_toggle_rejects_blank_id(ledger):
    with pytest.raises(ValidationError):
        ledger.toggle("  ")
