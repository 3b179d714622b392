from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence
from pathlib import Path
from typing import Any

from arctic_sky.config import AppConfig
from arctic_sky.explorer.app import Explorer
from arctic_sky.explorer.events import apply_event, describe_event
from arctic_sky.explorer.scene import tween_layers
from arctic_sky.io.write import write_summary, write_text
from arctic_sky.paths import OutputPaths, build_output_paths
from arctic_sky.report.render import (
    explorer_payload,
    render_chart_svg,
    render_error_page,
    render_explorer_page,
)

LOGGER = logging.getLogger(__name__)

EXPLORER_PAGE = "explorer.html"
EXPLORER_SVG = "explorer.svg"


def apply_filters(
    explorer: Explorer,
    *,
    season: str | None = None,
    metric: str | None = None,
    exclude_sites: Iterable[str] = (),
) -> None:
    if season:
        explorer.set_season(season)
    if metric:
        explorer.set_metric(metric)
    for site in exclude_sites:
        state = explorer.state
        if site in state.all_sites and site not in state.active_sites:
            continue
        if not explorer.toggle_site(site):
            raise ValueError(f"Cannot exclude {site!r}: at least one site must stay active")


def build_explorer(
    config: AppConfig,
    *,
    source: str | None = None,
    season: str | None = None,
    metric: str | None = None,
    exclude_sites: Iterable[str] = (),
) -> Explorer:
    explorer = Explorer.load(config, source=source)
    apply_filters(explorer, season=season, metric=metric, exclude_sites=exclude_sites)
    return explorer


def write_explorer_outputs(explorer: Explorer, out_dir: Path) -> dict[str, Path]:
    paths = build_output_paths(out_dir)
    page = render_explorer_page(explorer, paths.root / EXPLORER_PAGE)
    chart = write_text(render_chart_svg(explorer.surface), paths.charts / EXPLORER_SVG)
    summary = write_summary(explorer_payload(explorer), paths.summary / "summary.json")
    return {"page": page, "chart": chart, "summary": summary}


def write_error_outputs(message: str, out_dir: Path, config: AppConfig) -> Path:
    paths = build_output_paths(out_dir)
    write_summary({"error": message}, paths.summary / "summary.json")
    return render_error_page(message, config, paths.root / EXPLORER_PAGE)


def _write_frame(explorer: Explorer, paths: OutputPaths, name: str, layers: Any = None) -> str:
    write_text(render_chart_svg(explorer.surface, layers), paths.frames / name)
    return name


def replay_events(
    explorer: Explorer,
    events: Sequence[dict[str, Any]],
    out_dir: Path,
    *,
    tween_steps: int = 0,
) -> list[dict[str, Any]]:
    """Apply scripted interactions, writing one SVG frame per step.

    With ``tween_steps`` > 0, intermediate frames sample each step's
    transitions at evenly spaced points of its longest duration.
    """
    paths = build_output_paths(out_dir)
    initial = explorer.last_result
    rows: list[dict[str, Any]] = [
        {
            "step": 0,
            "event": "initial",
            **(initial.phase_counts() if initial else {"enter": 0, "update": 0, "exit": 0}),
            "duration_ms": 0,
            "summary": explorer.surface.summary,
            "frames": [_write_frame(explorer, paths, "frame_000.svg")],
        }
    ]
    for step, event in enumerate(events, start=1):
        transitions = apply_event(explorer, event)
        duration = max((transition.duration_ms for transition in transitions), default=0)
        frames: list[str] = []
        if tween_steps > 0 and duration > 0:
            for index in range(1, tween_steps + 1):
                elapsed = duration * index / (tween_steps + 1)
                layers = tween_layers(explorer.surface, transitions, elapsed)
                name = f"frame_{step:03d}_{index:02d}.svg"
                frames.append(_write_frame(explorer, paths, name, layers))
        frames.append(_write_frame(explorer, paths, f"frame_{step:03d}.svg"))

        counts = {phase: 0 for phase in ("enter", "update", "exit")}
        for transition in transitions:
            counts[transition.phase] += 1
        label = describe_event(event)
        LOGGER.info("Step %d (%s): %s", step, label, counts)
        rows.append(
            {
                "step": step,
                "event": label,
                **counts,
                "duration_ms": duration,
                "summary": explorer.surface.summary,
                "frames": frames,
            }
        )

    write_summary(rows, paths.summary / "transitions.json")
    return rows
