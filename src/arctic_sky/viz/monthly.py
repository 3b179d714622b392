from __future__ import annotations

from pathlib import Path

import matplotlib.pyplot as plt
import numpy as np
import pandas as pd

from arctic_sky.io.schema import CanonicalColumns
from arctic_sky.stats import monthly_means
from arctic_sky.viz.common import save_figure


def plot_monthly_daylight_line(
    records: pd.DataFrame,
    output_path: Path,
    dpi: int | None = None,
) -> Path | None:
    means = monthly_means(records, CanonicalColumns.daylight_hours)
    if means["mean"].isna().all():
        return None
    plt.figure(figsize=(10, 4.5))
    plt.plot(means["month_name"], means["mean"], color="#3498db", linewidth=2.5)
    plt.scatter(means["month_name"], means["mean"], color="#2980b9", zorder=3)
    plt.ylim(0, 24)
    plt.title("Seasonal daylight hours (mean across sites)")
    plt.xlabel("Month")
    plt.ylabel("Daylight hours")
    return save_figure(output_path, dpi=dpi)


def plot_monthly_brightness_bars(
    records: pd.DataFrame,
    output_path: Path,
    dpi: int | None = None,
) -> Path | None:
    means = monthly_means(records, CanonicalColumns.brightness_index)
    values = means["mean"].to_numpy(dtype=float)
    if np.isnan(values).all():
        return None
    low, high = np.nanmin(values), np.nanmax(values)
    span = high - low if high > low else 1.0
    cmap = plt.get_cmap("YlGnBu")
    colors = [
        cmap(0.15 + 0.85 * (value - low) / span) if np.isfinite(value) else "#d0d7de"
        for value in values
    ]
    plt.figure(figsize=(10, 4.5))
    plt.bar(means["month_name"], np.nan_to_num(values), color=colors)
    plt.title("Monthly average brightness index")
    plt.xlabel("Month")
    plt.ylabel("Brightness index")
    return save_figure(output_path, dpi=dpi)


def plot_radial_daylight(
    records: pd.DataFrame,
    output_path: Path,
    dpi: int | None = None,
) -> Path | None:
    means = monthly_means(records, CanonicalColumns.daylight_hours)
    observed = means.dropna(subset=["mean"])
    if observed.empty:
        return None
    angles = 2 * np.pi * (observed["month"].to_numpy(dtype=float) - 1) / 12
    radii = observed["mean"].to_numpy(dtype=float)
    closed_angles = np.append(angles, angles[0])
    closed_radii = np.append(radii, radii[0])

    fig = plt.figure(figsize=(6, 6))
    ax = fig.add_subplot(projection="polar")
    ax.set_theta_zero_location("N")
    ax.set_theta_direction(-1)
    ax.fill(closed_angles, closed_radii, color="#3498db", alpha=0.3)
    ax.plot(closed_angles, closed_radii, color="#2980b9", linewidth=2)
    ax.scatter(angles, radii, color="#e74c3c", zorder=3)
    ax.set_xticks(2 * np.pi * np.arange(12) / 12)
    ax.set_xticklabels(means["month_name"].tolist())
    ax.set_ylim(0, 24)
    ax.set_title("Annual daylight cycle")
    return save_figure(output_path, dpi=dpi)
