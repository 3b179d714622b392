from __future__ import annotations

from collections.abc import Iterable
from pathlib import Path

from arctic_sky.config import AppConfig
from arctic_sky.pipeline.exploratory import render_exploratory_figures
from arctic_sky.pipeline.explorer import build_explorer, write_explorer_outputs


def run_all(
    out_dir: Path,
    config: AppConfig,
    *,
    source: str | None = None,
    season: str | None = None,
    metric: str | None = None,
    exclude_sites: Iterable[str] = (),
) -> dict[str, Path]:
    explorer = build_explorer(
        config,
        source=source,
        season=season,
        metric=metric,
        exclude_sites=exclude_sites,
    )
    outputs = write_explorer_outputs(explorer, out_dir)
    figures = render_exploratory_figures(explorer.records, out_dir, config)
    return {**outputs, **{f"figure:{name}": path for name, path in figures.items()}}
