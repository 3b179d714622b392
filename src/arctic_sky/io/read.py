from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

import pandas as pd
import requests

from arctic_sky.config import AppConfig
from arctic_sky.explorer.seasons import MONTH_NAMES, season_for_month
from arctic_sky.io.schema import METRIC_COLUMNS, CanonicalColumns, normalize_columns

LOGGER = logging.getLogger(__name__)


class DatasetError(ValueError):
    """Raised when the observation dataset cannot be fetched or parsed."""


def _fetch_payload(source: str, timeout: float) -> Any:
    if source.startswith(("http://", "https://")):
        headers = {"Accept": "application/json", "User-Agent": "arctic-sky-explorer"}
        try:
            response = requests.get(source, headers=headers, timeout=timeout)
            response.raise_for_status()
            return response.json()
        except requests.exceptions.JSONDecodeError as exc:
            raise DatasetError(f"Dataset at {source} is not valid JSON: {exc}") from exc
        except requests.exceptions.RequestException as exc:
            raise DatasetError(f"Failed to fetch dataset from {source}: {exc}") from exc

    path = Path(source)
    if not path.exists():
        raise DatasetError(f"Dataset file not found: {path}")
    if not path.is_file():
        raise DatasetError(f"Dataset source is not a file: {path}")
    try:
        return json.loads(path.read_text(encoding="utf-8"))
    except UnicodeDecodeError as exc:
        raise DatasetError(f"Dataset file {path} is not valid UTF-8: {exc}") from exc
    except json.JSONDecodeError as exc:
        raise DatasetError(f"Dataset file {path} is not valid JSON: {exc}") from exc
    except OSError as exc:
        raise DatasetError(f"Failed to read dataset file {path}: {exc}") from exc


def records_from_payload(payload: Any, config: AppConfig) -> pd.DataFrame:
    """Validate a decoded JSON payload and return canonical record columns."""
    if not isinstance(payload, list):
        raise DatasetError("Dataset must be a JSON array of records")
    if not payload:
        raise DatasetError("Dataset contains no records")
    if not all(isinstance(item, dict) for item in payload):
        raise DatasetError("Every dataset entry must be a JSON object")

    try:
        df = normalize_columns(pd.DataFrame.from_records(payload), columns=config.columns)
    except ValueError as exc:
        raise DatasetError(str(exc)) from exc

    months = pd.to_numeric(df[CanonicalColumns.month], errors="coerce")
    invalid = months.isna() | (months % 1 != 0) | (months < 1) | (months > 12)
    if invalid.any():
        bad_rows = ", ".join(str(index) for index in df.index[invalid][:5])
        raise DatasetError(f"Dataset rows have month outside 1..12: {bad_rows}")
    if df[CanonicalColumns.site].isna().any():
        raise DatasetError("Dataset rows are missing a site identifier")

    df[CanonicalColumns.site] = df[CanonicalColumns.site].astype(str)
    df[CanonicalColumns.month] = months.astype(int)
    duplicated = df.duplicated(subset=[CanonicalColumns.site, CanonicalColumns.month])
    if duplicated.any():
        bad_rows = ", ".join(str(index) for index in df.index[duplicated][:5])
        raise DatasetError(f"Dataset rows repeat a site and month: {bad_rows}")
    month_names = df[CanonicalColumns.month].map(lambda month: MONTH_NAMES[month - 1])
    df[CanonicalColumns.month_name] = df[CanonicalColumns.month_name].fillna(month_names)
    df[CanonicalColumns.season] = df[CanonicalColumns.season].fillna(
        df[CanonicalColumns.month].map(season_for_month)
    )
    df[CanonicalColumns.region] = df[CanonicalColumns.region].fillna("")
    for column in METRIC_COLUMNS:
        df[column] = pd.to_numeric(df[column], errors="coerce").astype(float)
    return df.reset_index(drop=True)


def load_records(config: AppConfig, source: str | None = None) -> pd.DataFrame:
    """Load the observation dataset once from a file path or http(s) URL."""
    resolved = source or config.data.source
    payload = _fetch_payload(resolved, timeout=config.data.request_timeout_seconds)
    records = records_from_payload(payload, config)
    LOGGER.info(
        "Loaded %d records for %d sites from %s",
        len(records),
        records[CanonicalColumns.site].nunique(),
        resolved,
    )
    return records


def discover_sites(records: pd.DataFrame) -> list[str]:
    """Sites in order of first appearance."""
    return [str(site) for site in pd.unique(records[CanonicalColumns.site])]
