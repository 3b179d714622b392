from __future__ import annotations

import itertools

import pytest

from arctic_sky.explorer.state import FilterSnapshot, FilterState

SITES = ["Alpha", "Beta", "Gamma"]


def test_initial_state_selects_everything() -> None:
    state = FilterState(SITES)

    assert state.snapshot() == FilterSnapshot(
        season="All",
        metric="brightness_index",
        active_sites=("Alpha", "Beta", "Gamma"),
        all_sites=("Alpha", "Beta", "Gamma"),
    )


def test_toggle_refuses_to_remove_the_last_active_site() -> None:
    state = FilterState(SITES)
    assert state.toggle_site("Alpha") is True
    assert state.toggle_site("Beta") is True

    assert state.toggle_site("Gamma") is False
    assert state.active_sites == ("Gamma",)


def test_active_sites_never_empty_for_any_toggle_sequence() -> None:
    for sequence in itertools.product(SITES, repeat=5):
        state = FilterState(SITES)
        for site in sequence:
            state.toggle_site(site)
            assert state.active_sites
            assert set(state.active_sites) <= set(SITES)


def test_active_sites_keep_discovery_order() -> None:
    state = FilterState(SITES)
    state.toggle_site("Alpha")
    state.toggle_site("Alpha")

    assert state.active_sites == ("Alpha", "Beta", "Gamma")


def test_listeners_are_notified_synchronously_in_order() -> None:
    state = FilterState(SITES)
    calls: list[tuple[str, str]] = []
    state.subscribe(lambda snapshot: calls.append(("first", snapshot.season)))
    state.subscribe(lambda snapshot: calls.append(("second", snapshot.season)))

    state.set_season("Summer")

    assert calls == [("first", "Summer"), ("second", "Summer")]


def test_refused_toggle_does_not_notify() -> None:
    state = FilterState(["Alpha"])
    calls: list[FilterSnapshot] = []
    state.subscribe(calls.append)

    assert state.toggle_site("Alpha") is False
    assert calls == []


def test_unsubscribe_stops_notifications() -> None:
    state = FilterState(SITES)
    calls: list[FilterSnapshot] = []
    unsubscribe = state.subscribe(calls.append)
    state.set_metric("cloud_cover")
    unsubscribe()
    state.set_metric("daylight_hours")

    assert [snapshot.metric for snapshot in calls] == ["cloud_cover"]


def test_reset_restores_initial_state() -> None:
    state = FilterState(SITES, default_metric="daylight_hours")
    initial = state.snapshot()
    state.set_season("Winter")
    state.set_metric("cloud_cover")
    state.toggle_site("Beta")

    state.reset()

    assert state.snapshot() == initial


def test_invalid_mutations_raise_value_error() -> None:
    state = FilterState(SITES)
    with pytest.raises(ValueError):
        state.set_season("Monsoon")
    with pytest.raises(ValueError):
        state.set_metric("temperature")
    with pytest.raises(ValueError, match="Unknown site"):
        state.toggle_site("Delta")
    assert state.snapshot().season == "All"


def test_state_requires_sites() -> None:
    with pytest.raises(ValueError):
        FilterState([])
