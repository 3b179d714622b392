from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass

import pandas as pd

from arctic_sky.explorer.metrics import MetricDescriptor
from arctic_sky.explorer.seasons import season_month_indices, season_month_order
from arctic_sky.explorer.state import FilterSnapshot
from arctic_sky.io.schema import CanonicalColumns


@dataclass(frozen=True)
class SeriesPoint:
    site: str
    month_index: int
    month_name: str
    season: str
    region: str
    value: float

    @property
    def key(self) -> str:
        return f"{self.site}|{self.month_name}"


@dataclass(frozen=True)
class SiteSeries:
    site: str
    values: tuple[SeriesPoint, ...]


def build_site_series(
    records: pd.DataFrame,
    site: str,
    season: str,
    metric: MetricDescriptor,
) -> SiteSeries:
    month_indices = set(season_month_indices(season))
    month_order = season_month_order(season)
    in_scope = records[
        (records[CanonicalColumns.site] == site)
        & (records[CanonicalColumns.month] - 1).isin(month_indices)
    ]

    points: list[SeriesPoint] = []
    for row in in_scope.itertuples(index=False):
        value = metric.value(row)
        if value is None:
            continue
        points.append(
            SeriesPoint(
                site=site,
                month_index=int(row.month) - 1,
                month_name=str(row.month_name),
                season=str(row.season),
                region=str(row.region),
                value=value,
            )
        )
    # list.sort is stable; records keep their order within a month.
    points.sort(key=lambda point: month_order.get(point.month_name, len(month_order)))
    return SiteSeries(site=site, values=tuple(points))


def build_series(
    records: pd.DataFrame,
    filters: FilterSnapshot,
    metric: MetricDescriptor,
    sites: Iterable[str] | None = None,
) -> list[SiteSeries]:
    """Per-site ordered value sequences for the current filter.

    ``sites`` defaults to the active sites; sites with no surviving points are
    kept with an empty sequence.
    """
    selected = filters.active_sites if sites is None else tuple(sites)
    return [
        build_site_series(records, site=site, season=filters.season, metric=metric)
        for site in selected
    ]


def flatten_series(series: Iterable[SiteSeries]) -> list[SeriesPoint]:
    return [point for site_series in series for point in site_series.values]
