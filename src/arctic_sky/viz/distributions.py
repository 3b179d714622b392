from __future__ import annotations

from pathlib import Path

import matplotlib.pyplot as plt
import pandas as pd

from arctic_sky.io.schema import CanonicalColumns
from arctic_sky.stats import seasonal_box_stats
from arctic_sky.viz.common import save_figure


def plot_seasonal_brightness_boxplot(
    records: pd.DataFrame,
    output_path: Path,
    dpi: int | None = None,
) -> Path | None:
    stats = seasonal_box_stats(records, CanonicalColumns.brightness_index)
    if not stats:
        return None
    boxes = [
        {
            "label": season,
            "q1": summary["q1"],
            "med": summary["median"],
            "q3": summary["q3"],
            "whislo": summary["whisker_low"],
            "whishi": summary["whisker_high"],
            "fliers": [],
        }
        for season, summary in stats.items()
    ]
    fig, ax = plt.subplots(figsize=(8, 4.5))
    artists = ax.bxp(boxes, showfliers=False, patch_artist=True)
    for patch in artists["boxes"]:
        patch.set_facecolor("#3498db")
        patch.set_alpha(0.6)
    for median in artists["medians"]:
        median.set_color("#2c3e50")
        median.set_linewidth(2)
    ax.set_title("Brightness distribution by season")
    ax.set_ylabel("Brightness index")
    return save_figure(output_path, dpi=dpi)
