from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import pandas as pd
import pytest
import yaml

from arctic_sky.config import AppConfig
from arctic_sky.explorer.app import Explorer
from arctic_sky.explorer.seasons import MONTH_NAMES, season_for_month
from arctic_sky.io.read import records_from_payload

SITES = {
    "Alpha": {
        "region": "North",
        "brightness": [None, None, 40, 60, 80, 91, 85, 70, 50, 30, 10, None],
        "daylight": [1.0, 6.0, 11.0, 16.0, 21.0, 24.0, 24.0, 18.0, 13.0, 8.0, 3.0, 0.0],
        "cloud": [60, 58, 55, 57, 62, 70, 75, 80, 82, 78, 70, 65],
    },
    "Beta": {
        "region": "East",
        "brightness": [8, 22, 45, 62, 78, 88, 90, 72, 48, 28, 12, 4],
        "daylight": [3.0, 8.0, 12.0, 15.0, 19.0, 22.0, 21.0, 17.0, 12.0, 9.0, 5.0, 2.0],
        "cloud": [70, 68, 66, 64, 66, 72, 76, 79, 81, 80, 75, 72],
    },
}


def build_payload() -> list[dict[str, Any]]:
    payload: list[dict[str, Any]] = []
    for site, values in SITES.items():
        for month in range(1, 13):
            payload.append(
                {
                    "site": site,
                    "month": month,
                    "monthName": MONTH_NAMES[month - 1],
                    "season": season_for_month(month),
                    "region": values["region"],
                    "brightnessIndex": values["brightness"][month - 1],
                    "daylightHours": values["daylight"][month - 1],
                    "cloudCover": values["cloud"][month - 1],
                }
            )
    return payload


@pytest.fixture
def app_config() -> AppConfig:
    return AppConfig()


@pytest.fixture
def sample_payload() -> list[dict[str, Any]]:
    return build_payload()


@pytest.fixture
def sample_records(sample_payload: list[dict[str, Any]], app_config: AppConfig) -> pd.DataFrame:
    return records_from_payload(sample_payload, app_config)


@pytest.fixture
def explorer(sample_records: pd.DataFrame, app_config: AppConfig) -> Explorer:
    instance = Explorer(sample_records, app_config)
    instance.start()
    return instance


@pytest.fixture
def dataset_path(tmp_path: Path, sample_payload: list[dict[str, Any]]) -> Path:
    path = tmp_path / "observations.json"
    path.write_text(json.dumps(sample_payload), encoding="utf-8")
    return path


@pytest.fixture
def config_path(
    tmp_path: Path,
    dataset_path: Path,
    monkeypatch: pytest.MonkeyPatch,
) -> Path:
    monkeypatch.delenv("ARCTIC_SKY_DATA", raising=False)
    path = tmp_path / "config.yaml"
    path.write_text(
        yaml.safe_dump({"data": {"source": dataset_path.name}}),
        encoding="utf-8",
    )
    return path
