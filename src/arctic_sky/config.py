from __future__ import annotations

import os
from pathlib import Path

import yaml
from pydantic import BaseModel, ConfigDict, Field

TABLEAU10_PALETTE = [
    "#4e79a7",
    "#f28e2c",
    "#e15759",
    "#76b7b2",
    "#59a14f",
    "#edc949",
    "#af7aa1",
    "#ff9da7",
    "#9c755f",
    "#bab0ab",
]


class ColumnsConfig(BaseModel):
    site: str = "site"
    month: str = "month"
    month_name: str = "monthName"
    season: str = "season"
    region: str = "region"
    brightness_index: str = "brightnessIndex"
    daylight_hours: str = "daylightHours"
    cloud_cover: str = "cloudCover"


class DataConfig(BaseModel):
    source: str = "data/modis_arctic_2023.json"
    request_timeout_seconds: float = Field(default=30.0, gt=0)


class MarginConfig(BaseModel):
    top: int = Field(default=54, ge=0)
    right: int = Field(default=40, ge=0)
    bottom: int = Field(default=72, ge=0)
    left: int = Field(default=92, ge=0)


class LayoutConfig(BaseModel):
    width: int = Field(default=1100, gt=0)
    height: int = Field(default=520, gt=0)
    margin: MarginConfig = Field(default_factory=MarginConfig)

    @property
    def inner_width(self) -> float:
        return float(self.width - self.margin.left - self.margin.right)

    @property
    def inner_height(self) -> float:
        return float(self.height - self.margin.top - self.margin.bottom)


class ChartConfig(BaseModel):
    default_metric: str = "brightness_index"
    inactive_line_opacity: float = Field(default=0.35, ge=0, le=1)
    inactive_legend_opacity: float = Field(default=0.4, ge=0, le=1)
    point_radius: float = Field(default=5.0, gt=0)
    hover_radius: float = Field(default=7.0, gt=0)
    y_tick_count: int = Field(default=6, ge=1)
    x_padding: float = Field(default=0.5, ge=0, le=1)
    curve_alpha: float = Field(default=0.65, ge=0, le=1)
    tooltip_offset_x: int = 16
    tooltip_offset_y: int = -32
    cycle_label: str = "the full 2023 cycle"
    palette: list[str] = Field(default_factory=lambda: list(TABLEAU10_PALETTE), min_length=1)


class TransitionsConfig(BaseModel):
    axis_ms: int = Field(default=400, ge=0)
    grid_ms: int = Field(default=400, ge=0)
    line_ms: int = Field(default=500, ge=0)
    point_ms: int = Field(default=350, ge=0)
    point_exit_ms: int = Field(default=200, ge=0)
    legend_ms: int = Field(default=300, ge=0)
    hover_ms: int = Field(default=150, ge=0)


class OutputsConfig(BaseModel):
    figures_format: str = "png"
    figures_dpi: int = Field(default=120, ge=36)


class AppConfig(BaseModel):
    model_config = ConfigDict(extra="forbid")

    columns: ColumnsConfig = Field(default_factory=ColumnsConfig)
    data: DataConfig = Field(default_factory=DataConfig)
    layout: LayoutConfig = Field(default_factory=LayoutConfig)
    chart: ChartConfig = Field(default_factory=ChartConfig)
    transitions: TransitionsConfig = Field(default_factory=TransitionsConfig)
    outputs: OutputsConfig = Field(default_factory=OutputsConfig)


DEFAULT_CONFIG_PATH = Path("configs/default.yaml")


def _is_url(value: str) -> bool:
    return value.startswith(("http://", "https://"))


def _resolve_source(source: str, base_dir: Path) -> str:
    if _is_url(source):
        return source
    candidate = Path(source)
    if candidate.is_absolute():
        return str(candidate)
    return str((base_dir / candidate).resolve())


def load_config(path: Path) -> AppConfig:
    with path.open("r", encoding="utf-8") as handle:
        data = yaml.safe_load(handle) or {}

    config = AppConfig.model_validate(data)
    base_dir = path.resolve().parent

    env_source = os.getenv("ARCTIC_SKY_DATA")
    if env_source:
        config.data.source = env_source if _is_url(env_source) else str(Path(env_source).resolve())
    else:
        config.data.source = _resolve_source(config.data.source, base_dir)
    return config
