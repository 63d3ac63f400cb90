from __future__ import annotations

import pytest

from game.party.powerups import PowerUpTracker
from game.party.state import GameState


@pytest.fixture()
def tracker() -> PowerUpTracker:
    return PowerUpTracker(GameState().active_power_ups)


def test_remaining_time_decreases_by_delta(tracker: PowerUpTracker) -> None:
    tracker.activate("shield", 8000)
    tracker.tick(100)
    assert tracker.get("shield").remaining_time == 7900
    tracker.tick(250)
    assert tracker.get("shield").remaining_time == 7650
    assert tracker.get("shield").total_duration == 8000


def test_expires_on_first_tick_reaching_zero(tracker: PowerUpTracker) -> None:
    tracker.activate("superjump", 3000)
    assert tracker.tick(2999) == []
    assert tracker.has_superjump
    assert tracker.tick(1) == ["superjump"]
    assert not tracker.has_superjump


def test_overshoot_also_expires(tracker: PowerUpTracker) -> None:
    tracker.activate("speed", 5000)
    tracker.tick(6000)
    assert tracker.active == []


def test_at_most_one_entry_per_type(tracker: PowerUpTracker) -> None:
    tracker.activate("speed", 5000)
    tracker.activate("shield", 8000)
    tracker.activate("speed", 5000)
    assert sorted(p.type for p in tracker.active) == ["shield", "speed"]


def test_predicates(tracker: PowerUpTracker) -> None:
    assert not (tracker.has_speed or tracker.has_shield or tracker.has_superjump)
    tracker.activate("shield", 8000)
    assert tracker.has_shield
    assert not tracker.has_speed


def test_tracker_shares_the_state_list() -> None:
    state = GameState()
    tracker = PowerUpTracker(state.active_power_ups)
    tracker.activate("speed", 5000)
    tracker.tick(5000)
    assert state.active_power_ups == []
    tracker.activate("shield", 8000)
    assert [p.type for p in state.active_power_ups] == ["shield"]
