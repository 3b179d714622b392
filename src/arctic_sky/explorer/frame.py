from __future__ import annotations

from collections.abc import Iterable, Mapping, Sequence
from dataclasses import dataclass

import pandas as pd

from arctic_sky.config import AppConfig
from arctic_sky.explorer.metrics import MetricDescriptor, get_metric
from arctic_sky.explorer.scales import ChartScales, build_scales
from arctic_sky.explorer.series import SeriesPoint, SiteSeries, build_series, flatten_series
from arctic_sky.explorer.state import FilterSnapshot
from arctic_sky.explorer.summary import summarize


@dataclass(frozen=True)
class ChartFrame:
    """Everything one redraw needs, computed without touching the surface."""

    filters: FilterSnapshot
    metric: MetricDescriptor
    series: tuple[SiteSeries, ...]
    inactive_series: tuple[SiteSeries, ...]
    scales: ChartScales | None
    summary: str
    colors: Mapping[str, str]

    @property
    def points(self) -> list[SeriesPoint]:
        return flatten_series(self.series)

    @property
    def is_empty(self) -> bool:
        return self.scales is None


def site_colors(sites: Iterable[str], palette: Sequence[str]) -> dict[str, str]:
    """Ordinal colour assignment in site discovery order; the palette repeats."""
    return {site: palette[index % len(palette)] for index, site in enumerate(sites)}


def build_frame(
    records: pd.DataFrame,
    filters: FilterSnapshot,
    config: AppConfig,
    colors: Mapping[str, str] | None = None,
) -> ChartFrame:
    metric = get_metric(filters.metric)
    series = build_series(records, filters, metric)
    inactive_sites = [site for site in filters.all_sites if not filters.is_active(site)]
    inactive_series = build_series(records, filters, metric, sites=inactive_sites)
    scales = build_scales(
        series,
        season=filters.season,
        layout=config.layout,
        padding=config.chart.x_padding,
    )
    summary = summarize(
        flatten_series(series),
        metric=metric,
        season=filters.season,
        active_site_count=len(filters.active_sites),
        cycle_label=config.chart.cycle_label,
    )
    return ChartFrame(
        filters=filters,
        metric=metric,
        series=tuple(series),
        inactive_series=tuple(inactive_series),
        scales=scales,
        summary=summary,
        colors=colors or site_colors(filters.all_sites, config.chart.palette),
    )
