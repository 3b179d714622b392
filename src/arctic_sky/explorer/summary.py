from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

from arctic_sky.explorer.metrics import MetricDescriptor
from arctic_sky.explorer.seasons import ALL_SEASONS
from arctic_sky.explorer.series import SeriesPoint

NO_DATA_MESSAGE = "No data available for the selected filters."
DEFAULT_CYCLE_LABEL = "the full 2023 cycle"


@dataclass(frozen=True)
class Extremes:
    highest: SeriesPoint
    lowest: SeriesPoint


def find_extremes(points: Sequence[SeriesPoint]) -> Extremes | None:
    """Max and min points; the earliest point wins ties."""
    if not points:
        return None
    highest = lowest = points[0]
    for point in points[1:]:
        if point.value > highest.value:
            highest = point
        if point.value < lowest.value:
            lowest = point
    return Extremes(highest=highest, lowest=lowest)


def season_phrase(season: str, cycle_label: str = DEFAULT_CYCLE_LABEL) -> str:
    return cycle_label if season == ALL_SEASONS else f"{season.lower()} months"


def summarize(
    points: Sequence[SeriesPoint],
    metric: MetricDescriptor,
    season: str,
    active_site_count: int,
    cycle_label: str = DEFAULT_CYCLE_LABEL,
) -> str:
    extremes = find_extremes(points)
    if extremes is None:
        return NO_DATA_MESSAGE

    plural = "s" if active_site_count != 1 else ""
    high, low = extremes.highest, extremes.lowest
    return (
        f"Viewing {metric.label.lower()} across {season_phrase(season, cycle_label)} "
        f"for {active_site_count} site{plural}. "
        f"Highest value: {high.site} in {high.month_name} "
        f"({metric.format_with_suffix(high.value)}). "
        f"Lowest value: {low.site} in {low.month_name} "
        f"({metric.format_with_suffix(low.value)})."
    )
