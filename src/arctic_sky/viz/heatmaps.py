from __future__ import annotations

from pathlib import Path

import matplotlib.pyplot as plt
import numpy as np
import pandas as pd

from arctic_sky.io.schema import CanonicalColumns
from arctic_sky.stats import site_month_matrix
from arctic_sky.viz.common import save_figure


def plot_site_month_heatmap(
    records: pd.DataFrame,
    output_path: Path,
    column: str = CanonicalColumns.daylight_hours,
    title: str = "Daylight hours by site and month",
    dpi: int | None = None,
) -> Path | None:
    matrix = site_month_matrix(records, column)
    if matrix.empty or matrix.isna().all().all():
        return None
    values = np.ma.masked_invalid(matrix.to_numpy(dtype=float))
    fig, ax = plt.subplots(figsize=(12, 1.2 + 0.6 * len(matrix.index)))
    image = ax.imshow(values, aspect="auto", cmap="viridis")
    ax.set_xticks(range(len(matrix.columns)))
    ax.set_xticklabels(matrix.columns)
    ax.set_yticks(range(len(matrix.index)))
    ax.set_yticklabels(matrix.index)
    ax.set_title(title)
    fig.colorbar(image, ax=ax)
    return save_figure(output_path, dpi=dpi)
