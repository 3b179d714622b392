from __future__ import annotations

import logging
from collections.abc import Callable
from pathlib import Path

import pandas as pd

from arctic_sky.config import AppConfig
from arctic_sky.paths import build_output_paths
from arctic_sky.viz.distributions import plot_seasonal_brightness_boxplot
from arctic_sky.viz.heatmaps import plot_site_month_heatmap
from arctic_sky.viz.monthly import (
    plot_monthly_brightness_bars,
    plot_monthly_daylight_line,
    plot_radial_daylight,
)
from arctic_sky.viz.seasonal import plot_seasonal_daylight_comparison

LOGGER = logging.getLogger(__name__)

EXPLORATORY_FIGURES: dict[str, Callable[..., Path | None]] = {
    "monthly_daylight_line": plot_monthly_daylight_line,
    "monthly_brightness_bars": plot_monthly_brightness_bars,
    "seasonal_daylight_comparison": plot_seasonal_daylight_comparison,
    "site_month_heatmap": plot_site_month_heatmap,
    "seasonal_brightness_boxplot": plot_seasonal_brightness_boxplot,
    "radial_daylight": plot_radial_daylight,
}


def render_exploratory_figures(
    records: pd.DataFrame,
    out_dir: Path,
    config: AppConfig,
) -> dict[str, Path]:
    paths = build_output_paths(out_dir)
    suffix = str(config.outputs.figures_format or "").strip().lstrip(".") or "png"

    written: dict[str, Path] = {}
    for name, plot in EXPLORATORY_FIGURES.items():
        output_path = paths.figures / f"{name}.{suffix}"
        try:
            result = plot(records, output_path, dpi=config.outputs.figures_dpi)
        except Exception:  # pragma: no cover
            LOGGER.exception("Failed rendering exploratory figure %s", name)
            continue
        if result is None:
            LOGGER.info("Skipped %s: no observations for this figure", name)
            continue
        written[name] = result
    LOGGER.info("Wrote %d exploratory figures to %s", len(written), paths.figures)
    return written
