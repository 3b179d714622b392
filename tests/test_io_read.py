from __future__ import annotations

from pathlib import Path
from typing import Any

import pandas as pd
import pytest
import requests

from arctic_sky.config import AppConfig
from arctic_sky.io.read import DatasetError, discover_sites, load_records, records_from_payload


class _FakeResponse:
    def __init__(self, payload: Any, status_code: int = 200) -> None:
        self._payload = payload
        self.status_code = status_code

    def raise_for_status(self) -> None:
        if self.status_code >= 400:
            raise requests.HTTPError(f"{self.status_code} Server Error")

    def json(self) -> Any:
        return self._payload


def test_load_records_normalizes_source_fields(dataset_path: Path, app_config: AppConfig) -> None:
    records = load_records(app_config, source=str(dataset_path))

    assert list(records.columns) == [
        "site",
        "month",
        "month_name",
        "season",
        "region",
        "brightness_index",
        "daylight_hours",
        "cloud_cover",
    ]
    assert len(records) == 24
    first = records.iloc[0]
    assert first["site"] == "Alpha"
    assert first["month_name"] == "Jan"
    assert first["season"] == "Winter"


def test_null_metrics_become_nan(sample_records: pd.DataFrame) -> None:
    alpha_jan = sample_records[
        (sample_records["site"] == "Alpha") & (sample_records["month"] == 1)
    ].iloc[0]
    assert pd.isna(alpha_jan["brightness_index"])
    assert alpha_jan["daylight_hours"] == 1.0


def test_missing_month_names_and_seasons_are_derived(app_config: AppConfig) -> None:
    records = records_from_payload(
        [{"site": "Alpha", "month": 12, "daylightHours": 0.0}],
        app_config,
    )

    assert records.loc[0, "month_name"] == "Dec"
    assert records.loc[0, "season"] == "Winter"
    assert records.loc[0, "region"] == ""


def test_custom_column_mapping() -> None:
    config = AppConfig.model_validate({"columns": {"site": "station", "month": "m"}})
    records = records_from_payload([{"station": "Alpha", "m": 6, "brightnessIndex": 91}], config)

    assert records.loc[0, "site"] == "Alpha"
    assert records.loc[0, "brightness_index"] == 91.0


@pytest.mark.parametrize(
    ("payload", "message"),
    [
        ({"site": "Alpha"}, "JSON array"),
        ([], "no records"),
        (["Alpha"], "JSON object"),
        ([{"month": 1}], "Missing required fields"),
        ([{"site": "Alpha", "month": 13}], "outside 1..12"),
        ([{"site": "Alpha", "month": "June"}], "outside 1..12"),
        ([{"site": None, "month": 1}], "site identifier"),
        ([{"site": "Alpha", "month": 6}, {"site": "Alpha", "month": "6"}], "repeat a site"),
    ],
)
def test_invalid_payloads_raise_dataset_error(
    payload: Any,
    message: str,
    app_config: AppConfig,
) -> None:
    with pytest.raises(DatasetError, match=message):
        records_from_payload(payload, app_config)


def test_missing_file_raises_dataset_error(tmp_path: Path, app_config: AppConfig) -> None:
    with pytest.raises(DatasetError, match="not found"):
        load_records(app_config, source=str(tmp_path / "absent.json"))


def test_invalid_json_file_raises_dataset_error(tmp_path: Path, app_config: AppConfig) -> None:
    path = tmp_path / "broken.json"
    path.write_text("[{", encoding="utf-8")

    with pytest.raises(DatasetError, match="not valid JSON"):
        load_records(app_config, source=str(path))


def test_non_utf8_file_raises_dataset_error(tmp_path: Path, app_config: AppConfig) -> None:
    path = tmp_path / "latin.json"
    path.write_bytes(b"[\xff\xfe]")

    with pytest.raises(DatasetError, match="not valid UTF-8"):
        load_records(app_config, source=str(path))


def test_directory_source_raises_dataset_error(tmp_path: Path, app_config: AppConfig) -> None:
    with pytest.raises(DatasetError, match="not a file"):
        load_records(app_config, source=str(tmp_path))


def test_dataset_error_is_a_value_error() -> None:
    assert issubclass(DatasetError, ValueError)


def test_load_records_fetches_urls(
    monkeypatch: pytest.MonkeyPatch,
    sample_payload: list[dict[str, Any]],
    app_config: AppConfig,
) -> None:
    captured: dict[str, Any] = {}

    def _fake_get(url: str, headers: dict[str, str], timeout: float) -> _FakeResponse:
        captured["url"] = url
        captured["timeout"] = timeout
        return _FakeResponse(sample_payload)

    monkeypatch.setattr("arctic_sky.io.read.requests.get", _fake_get)
    records = load_records(app_config, source="https://example.org/arctic.json")

    assert captured == {"url": "https://example.org/arctic.json", "timeout": 30.0}
    assert len(records) == len(sample_payload)


def test_http_errors_raise_dataset_error(
    monkeypatch: pytest.MonkeyPatch,
    app_config: AppConfig,
) -> None:
    monkeypatch.setattr(
        "arctic_sky.io.read.requests.get",
        lambda url, headers, timeout: _FakeResponse(None, status_code=503),
    )

    with pytest.raises(DatasetError, match="Failed to fetch"):
        load_records(app_config, source="https://example.org/arctic.json")


def test_discover_sites_keeps_first_appearance_order(app_config: AppConfig) -> None:
    payload = [
        {"site": "Gamma", "month": 1},
        {"site": "Alpha", "month": 1},
        {"site": "Gamma", "month": 2},
        {"site": "Beta", "month": 1},
    ]
    records = records_from_payload(payload, app_config)

    assert discover_sites(records) == ["Gamma", "Alpha", "Beta"]


def test_invalid_json_response_raises_dataset_error(
    monkeypatch: pytest.MonkeyPatch,
    app_config: AppConfig,
) -> None:
    class _HtmlResponse(_FakeResponse):
        def json(self) -> Any:
            raise requests.exceptions.JSONDecodeError("Expecting value", "<html>", 0)

    monkeypatch.setattr(
        "arctic_sky.io.read.requests.get",
        lambda url, headers, timeout: _HtmlResponse(None),
    )

    with pytest.raises(DatasetError, match="not valid JSON"):
        load_records(app_config, source="https://example.org/arctic.json")
