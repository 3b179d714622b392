from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class MetricDescriptor:
    key: str
    label: str
    column: str
    format_spec: str
    suffix: str
    color: str
    y_label: str

    def value(self, record: Any) -> float | None:
        """Numeric accessor; ``None`` when the record has no observation."""
        raw = record[self.column] if isinstance(record, dict) else getattr(record, self.column)
        if raw is None:
            return None
        try:
            number = float(raw)
        except (TypeError, ValueError):
            return None
        return None if math.isnan(number) else number

    def format(self, value: float) -> str:
        return format(value, self.format_spec)

    def format_with_suffix(self, value: float) -> str:
        return f"{self.format(value)}{self.suffix}"


METRICS: dict[str, MetricDescriptor] = {
    "brightness_index": MetricDescriptor(
        key="brightness_index",
        label="Surface brightness index",
        column="brightness_index",
        format_spec=".0f",
        suffix=" idx",
        color="#0f8cc6",
        y_label="Brightness index (0–100)",
    ),
    "daylight_hours": MetricDescriptor(
        key="daylight_hours",
        label="Daylight hours",
        column="daylight_hours",
        format_spec=".1f",
        suffix=" h",
        color="#f6b93b",
        y_label="Daylight duration (hours)",
    ),
    "cloud_cover": MetricDescriptor(
        key="cloud_cover",
        label="Cloud cover",
        column="cloud_cover",
        format_spec=".0f",
        suffix="%",
        color="#6c7a89",
        y_label="Cloud cover (%)",
    ),
}

DEFAULT_METRIC = "brightness_index"


def get_metric(key: str) -> MetricDescriptor:
    try:
        return METRICS[key]
    except KeyError:
        allowed = ", ".join(METRICS)
        raise ValueError(f"Unknown metric {key!r}; expected one of: {allowed}") from None
