from __future__ import annotations

from pathlib import Path

import pytest

from arctic_sky.explorer.app import Explorer
from arctic_sky.explorer.events import apply_event, describe_event, load_events, normalize_event


def test_load_events_normalizes_script(tmp_path: Path) -> None:
    script = tmp_path / "events.yaml"
    script.write_text(
        "\n".join(
            [
                "- season: Summer",
                "- metric: cloud_cover",
                "- hover:",
                "    point: Alpha|Jun",
                "    x: 10",
                "    y: 20",
                "- reset",
            ]
        ),
        encoding="utf-8",
    )

    events = load_events(script)

    assert events == [
        {"season": "Summer"},
        {"metric": "cloud_cover"},
        {"hover": {"point": "Alpha|Jun", "x": 10, "y": 20}},
        {"reset": True},
    ]


def test_load_events_rejects_non_lists(tmp_path: Path) -> None:
    script = tmp_path / "events.yaml"
    script.write_text("season: Summer\n", encoding="utf-8")

    with pytest.raises(ValueError, match="YAML list"):
        load_events(script)


@pytest.mark.parametrize(
    "item",
    [
        {"season": "Summer", "metric": "cloud_cover"},
        {"zoom": 2},
        {"hover": "Alpha|Jun"},
        {"hover": {"x": 1, "y": 2}},
        "toggle",
    ],
)
def test_normalize_event_rejects_malformed_items(item: object) -> None:
    with pytest.raises(ValueError):
        normalize_event(item, 3)


def test_describe_event() -> None:
    assert describe_event({"season": "Winter"}) == "season Winter"
    assert describe_event({"hover": {"point": "Alpha|Jun"}}) == "hover Alpha|Jun"
    assert describe_event({"reset": True}) == "reset"


def test_apply_event_returns_redraw_transitions(explorer: Explorer) -> None:
    transitions = apply_event(explorer, {"season": "Summer"})

    assert transitions
    assert {transition.layer for transition in transitions} >= {"points", "lines", "legend"}


def test_apply_event_refused_toggle_returns_nothing(explorer: Explorer) -> None:
    apply_event(explorer, {"toggle_site": "Alpha"})

    assert apply_event(explorer, {"toggle_site": "Beta"}) == []


def test_apply_event_pointer_sequence(explorer: Explorer) -> None:
    hover = apply_event(explorer, {"hover": {"point": "Beta|Jul", "x": 10, "y": 50}})
    move = apply_event(explorer, {"move": {"x": 20, "y": 60}})
    leave = apply_event(explorer, {"leave": "Beta|Jul"})

    assert [transition.phase for transition in hover] == ["update"]
    assert move == []
    assert leave[0].end["r"] == 5.0
    assert explorer.surface.tooltip.visible is False


def test_apply_event_propagates_invalid_values(explorer: Explorer) -> None:
    with pytest.raises(ValueError):
        apply_event(explorer, {"metric": "temperature"})
