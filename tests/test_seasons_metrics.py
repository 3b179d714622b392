from __future__ import annotations

import pytest

from arctic_sky.explorer.metrics import METRICS, get_metric
from arctic_sky.explorer.seasons import (
    MONTH_NAMES,
    SEASONS,
    season_for_month,
    season_month_names,
    season_month_order,
)


def test_all_covers_twelve_calendar_months() -> None:
    assert season_month_names("All") == [
        "Jan",
        "Feb",
        "Mar",
        "Apr",
        "May",
        "Jun",
        "Jul",
        "Aug",
        "Sep",
        "Oct",
        "Nov",
        "Dec",
    ]


@pytest.mark.parametrize(
    ("season", "months"),
    [
        ("Winter", ["Dec", "Jan", "Feb"]),
        ("Spring", ["Mar", "Apr", "May"]),
        ("Summer", ["Jun", "Jul", "Aug"]),
        ("Fall", ["Sep", "Oct", "Nov"]),
    ],
)
def test_named_seasons_have_three_months_in_canonical_order(
    season: str,
    months: list[str],
) -> None:
    assert season_month_names(season) == months


def test_winter_order_crosses_the_year_boundary() -> None:
    order = season_month_order("Winter")
    assert order["Dec"] < order["Jan"] < order["Feb"]


def test_season_for_month_matches_registry() -> None:
    for season in SEASONS[1:]:
        for name in season_month_names(season):
            assert season_for_month(MONTH_NAMES.index(name) + 1) == season


def test_unknown_season_is_rejected() -> None:
    with pytest.raises(ValueError, match="Unknown season"):
        season_month_names("Monsoon")


def test_metric_registry_formats_values() -> None:
    assert get_metric("brightness_index").format_with_suffix(90.6) == "91 idx"
    assert get_metric("daylight_hours").format_with_suffix(24) == "24.0 h"
    assert get_metric("cloud_cover").format_with_suffix(61.2) == "61%"


def test_metric_accessor_drops_missing_values() -> None:
    metric = METRICS["daylight_hours"]
    assert metric.value({"daylight_hours": 0.0}) == 0.0
    assert metric.value({"daylight_hours": None}) is None
    assert metric.value({"daylight_hours": float("nan")}) is None


def test_unknown_metric_is_rejected() -> None:
    with pytest.raises(ValueError, match="Unknown metric"):
        get_metric("temperature")
