from __future__ import annotations

from collections.abc import Iterable

import numpy as np
import pandas as pd

from arctic_sky.explorer.seasons import MONTH_NAMES, SEASONS

SEASON_NAMES = [season for season in SEASONS if season != "All"]


def _metric_frame(records: pd.DataFrame, column: str) -> pd.DataFrame:
    if records.empty or column not in records.columns:
        return pd.DataFrame(columns=["site", "month", "season", column])
    working = records.copy()
    working[column] = pd.to_numeric(working[column], errors="coerce")
    return working.dropna(subset=[column])


def _group_means(working: pd.DataFrame, by: str, column: str) -> pd.Series:
    if working.empty:
        return pd.Series(dtype=float)
    return working.groupby(by)[column].mean()


def monthly_means(records: pd.DataFrame, column: str) -> pd.DataFrame:
    """Mean of ``column`` across sites for each calendar month (always 12 rows)."""
    working = _metric_frame(records, column)
    means = _group_means(working, "month", column).reindex(range(1, 13))
    return pd.DataFrame(
        {
            "month": list(range(1, 13)),
            "month_name": MONTH_NAMES,
            "mean": means.to_numpy(dtype=float),
        }
    )


def seasonal_means(records: pd.DataFrame, column: str) -> pd.DataFrame:
    working = _metric_frame(records, column)
    means = _group_means(working, "season", column).reindex(SEASON_NAMES)
    return pd.DataFrame({"season": SEASON_NAMES, "mean": means.to_numpy(dtype=float)})


def site_month_matrix(records: pd.DataFrame, column: str) -> pd.DataFrame:
    """Sites (discovery order) by month name (calendar order); NaN where unobserved."""
    if records.empty or column not in records.columns:
        return pd.DataFrame(columns=MONTH_NAMES, dtype=float)
    working = records.copy()
    working[column] = pd.to_numeric(working[column], errors="coerce")
    sites = list(pd.unique(working["site"]))
    pivot = working.pivot_table(index="site", columns="month", values=column, aggfunc="mean")
    pivot = pivot.reindex(index=sites, columns=range(1, 13))
    pivot.columns = MONTH_NAMES
    pivot.index.name = "site"
    return pivot


def box_stats(values: Iterable[float]) -> dict[str, float] | None:
    """Quartiles with whiskers clamped to 1.5 IQR and to the observed range."""
    array = np.asarray([value for value in values if value is not None], dtype=float)
    array = array[np.isfinite(array)]
    if array.size == 0:
        return None
    q1, median, q3 = np.quantile(array, [0.25, 0.5, 0.75])
    iqr = q3 - q1
    return {
        "n": int(array.size),
        "q1": float(q1),
        "median": float(median),
        "q3": float(q3),
        "iqr": float(iqr),
        "whisker_low": float(max(array.min(), q1 - 1.5 * iqr)),
        "whisker_high": float(min(array.max(), q3 + 1.5 * iqr)),
    }


def seasonal_box_stats(records: pd.DataFrame, column: str) -> dict[str, dict[str, float]]:
    working = _metric_frame(records, column)
    stats: dict[str, dict[str, float]] = {}
    for season in SEASON_NAMES:
        values = working.loc[working["season"] == season, column] if not working.empty else []
        summary = box_stats(values)
        if summary is not None:
            stats[season] = summary
    return stats
