from __future__ import annotations

from pathlib import Path

import matplotlib.pyplot as plt
import pandas as pd

from arctic_sky.io.schema import CanonicalColumns
from arctic_sky.stats import seasonal_means
from arctic_sky.viz.common import save_figure

SEASON_COLORS = {
    "Winter": "#34495e",
    "Spring": "#3498db",
    "Summer": "#f39c12",
    "Fall": "#e67e22",
}
SEASON_RANGES = {
    "Winter": "Dec-Feb",
    "Spring": "Mar-May",
    "Summer": "Jun-Aug",
    "Fall": "Sep-Nov",
}


def plot_seasonal_daylight_comparison(
    records: pd.DataFrame,
    output_path: Path,
    dpi: int | None = None,
) -> Path | None:
    means = seasonal_means(records, CanonicalColumns.daylight_hours).dropna(subset=["mean"])
    if means.empty:
        return None
    labels = [f"{season} ({SEASON_RANGES[season]})" for season in means["season"]]
    plt.figure(figsize=(8, 4.5))
    plt.bar(labels, means["mean"], color=[SEASON_COLORS[season] for season in means["season"]])
    plt.ylim(0, 24)
    plt.title("Average daylight hours by season")
    plt.ylabel("Daylight hours")
    return save_figure(output_path, dpi=dpi)
