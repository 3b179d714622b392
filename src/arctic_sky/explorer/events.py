from __future__ import annotations

from pathlib import Path
from typing import Any

import yaml

from arctic_sky.explorer.app import Explorer
from arctic_sky.explorer.scene import Transition

EVENT_KINDS = ("season", "metric", "toggle_site", "reset", "hover", "move", "leave")


def load_events(path: Path) -> list[dict[str, Any]]:
    with path.open("r", encoding="utf-8") as handle:
        data = yaml.safe_load(handle) or []
    if not isinstance(data, list):
        raise ValueError("Event script must be a YAML list")
    return [normalize_event(item, index) for index, item in enumerate(data)]


def normalize_event(item: Any, index: int = 0) -> dict[str, Any]:
    if isinstance(item, str) and item == "reset":
        return {"reset": True}
    if not isinstance(item, dict) or len(item) != 1:
        raise ValueError(f"Event #{index} must be a mapping with exactly one key")
    kind = next(iter(item))
    if kind not in EVENT_KINDS:
        allowed = ", ".join(EVENT_KINDS)
        raise ValueError(f"Event #{index} has unknown kind {kind!r}; expected one of: {allowed}")
    if kind in ("hover", "move") and not isinstance(item[kind], dict):
        raise ValueError(f"Event #{index} ({kind}) needs a mapping with pointer coordinates")
    if kind == "hover" and "point" not in item[kind]:
        raise ValueError(f"Event #{index} (hover) needs a 'point' key such as 'Site|Jun'")
    return dict(item)


def describe_event(event: dict[str, Any]) -> str:
    kind, value = next(iter(event.items()))
    if kind == "reset":
        return "reset"
    if kind in ("hover", "move") and isinstance(value, dict):
        return f"{kind} {value.get('point', '')}".strip()
    return f"{kind} {value}"


def apply_event(explorer: Explorer, event: dict[str, Any]) -> list[Transition]:
    """Dispatch one interaction and return the transitions it produced."""
    kind, value = next(iter(event.items()))
    before = explorer.last_result
    if kind == "season":
        explorer.set_season(str(value))
    elif kind == "metric":
        explorer.set_metric(str(value))
    elif kind == "toggle_site":
        explorer.toggle_site(str(value))
    elif kind == "reset":
        explorer.reset()
    elif kind == "hover":
        return explorer.pointer_enter(
            str(value["point"]), float(value.get("x", 0.0)), float(value.get("y", 0.0))
        )
    elif kind == "move":
        explorer.pointer_move(float(value.get("x", 0.0)), float(value.get("y", 0.0)))
        return []
    elif kind == "leave":
        return explorer.pointer_leave(str(value))
    else:  # pragma: no cover
        raise ValueError(f"Unknown event kind: {kind}")

    after = explorer.last_result
    if after is None or after is before:
        return []
    return list(after.transitions)
