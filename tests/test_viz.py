from __future__ import annotations

from pathlib import Path

import pandas as pd
import pytest

from arctic_sky.viz.distributions import plot_seasonal_brightness_boxplot
from arctic_sky.viz.heatmaps import plot_site_month_heatmap
from arctic_sky.viz.monthly import (
    plot_monthly_brightness_bars,
    plot_monthly_daylight_line,
    plot_radial_daylight,
)
from arctic_sky.viz.seasonal import plot_seasonal_daylight_comparison

PLOTS = [
    plot_monthly_daylight_line,
    plot_monthly_brightness_bars,
    plot_seasonal_daylight_comparison,
    plot_site_month_heatmap,
    plot_seasonal_brightness_boxplot,
    plot_radial_daylight,
]


@pytest.mark.parametrize("plot", PLOTS)
def test_plot_writes_file(plot, sample_records: pd.DataFrame, tmp_path: Path) -> None:
    output_path = tmp_path / f"{plot.__name__}.png"
    result = plot(sample_records, output_path)
    assert result == output_path
    assert output_path.exists()


@pytest.mark.parametrize("plot", PLOTS)
def test_plot_returns_none_for_empty_records(
    plot,
    sample_records: pd.DataFrame,
    tmp_path: Path,
) -> None:
    output_path = tmp_path / f"{plot.__name__}.png"
    assert plot(sample_records.iloc[0:0], output_path) is None
    assert not output_path.exists()


def test_heatmap_accepts_other_metrics(sample_records: pd.DataFrame, tmp_path: Path) -> None:
    output_path = tmp_path / "cloud_heatmap.png"
    result = plot_site_month_heatmap(
        sample_records,
        output_path,
        column="cloud_cover",
        title="Cloud cover by site and month",
        dpi=80,
    )
    assert result == output_path
    assert output_path.exists()
