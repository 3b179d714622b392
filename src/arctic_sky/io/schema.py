from __future__ import annotations

from dataclasses import dataclass

import pandas as pd

from arctic_sky.config import ColumnsConfig


@dataclass(frozen=True)
class CanonicalColumns:
    site: str = "site"
    month: str = "month"
    month_name: str = "month_name"
    season: str = "season"
    region: str = "region"
    brightness_index: str = "brightness_index"
    daylight_hours: str = "daylight_hours"
    cloud_cover: str = "cloud_cover"


METRIC_COLUMNS = [
    CanonicalColumns.brightness_index,
    CanonicalColumns.daylight_hours,
    CanonicalColumns.cloud_cover,
]
REQUIRED_SOURCE_FIELDS = ("site", "month")


def normalize_columns(df: pd.DataFrame, columns: ColumnsConfig) -> pd.DataFrame:
    """Rename source fields to the canonical snake_case record columns."""
    rename_map = {
        getattr(columns, field): getattr(CanonicalColumns, field)
        for field in ColumnsConfig.model_fields
    }
    missing = [
        getattr(columns, field)
        for field in REQUIRED_SOURCE_FIELDS
        if getattr(columns, field) not in df.columns
    ]
    if missing:
        missing_str = ", ".join(missing)
        raise ValueError(f"Missing required fields in dataset: {missing_str}")

    normalized = df.rename(columns=rename_map)
    for column in (CanonicalColumns.month_name, CanonicalColumns.season, CanonicalColumns.region):
        if column not in normalized.columns:
            normalized[column] = pd.NA
    for column in METRIC_COLUMNS:
        if column not in normalized.columns:
            normalized[column] = float("nan")
    return normalized[[getattr(CanonicalColumns, field) for field in ColumnsConfig.model_fields]]
