"""Coordinate scales for the seasonal chart.

The point and linear scales follow the d3-scale conventions the chart was
designed around: point positions are centred inside equal steps, and linear
domains are extended outward to round tick values by ``nice``.
"""

from __future__ import annotations

import math
from collections.abc import Sequence
from dataclasses import dataclass

from arctic_sky.config import LayoutConfig
from arctic_sky.explorer.seasons import season_month_names
from arctic_sky.explorer.series import SiteSeries, flatten_series

_E10 = math.sqrt(50)
_E5 = math.sqrt(10)
_E2 = math.sqrt(2)


def _round_half_up(value: float) -> int:
    return math.floor(value + 0.5)


def _tick_spec(start: float, stop: float, count: float) -> tuple[int, int, float]:
    step = (stop - start) / max(0.0, count)
    power = math.floor(math.log10(step))
    error = step / math.pow(10, power)
    factor = 10 if error >= _E10 else 5 if error >= _E5 else 2 if error >= _E2 else 1
    if power < 0:
        inc = math.pow(10, -power) / factor
        i1 = _round_half_up(start * inc)
        i2 = _round_half_up(stop * inc)
        if i1 / inc < start:
            i1 += 1
        if i2 / inc > stop:
            i2 -= 1
        inc = -inc
    else:
        inc = math.pow(10, power) * factor
        i1 = _round_half_up(start / inc)
        i2 = _round_half_up(stop / inc)
        if i1 * inc < start:
            i1 += 1
        if i2 * inc > stop:
            i2 -= 1
    if i2 < i1 and 0.5 <= count < 2:
        return _tick_spec(start, stop, count * 2)
    return i1, i2, inc


def tick_increment(start: float, stop: float, count: float) -> float:
    """Signed tick step; negative values encode ``1 / step`` for sub-unit steps."""
    if not (count > 0) or stop <= start:
        return 0.0
    return _tick_spec(start, stop, count)[2]


def ticks(start: float, stop: float, count: float) -> list[float]:
    if not (count > 0):
        return []
    if start == stop:
        return [float(start)]
    reverse = stop < start
    low, high = (stop, start) if reverse else (start, stop)
    i1, i2, inc = _tick_spec(low, high, count)
    if i2 < i1:
        return []
    if inc < 0:
        values = [(i1 + offset) / -inc for offset in range(i2 - i1 + 1)]
    else:
        values = [(i1 + offset) * inc for offset in range(i2 - i1 + 1)]
    return values[::-1] if reverse else values


def nice_domain(start: float, stop: float, count: int = 10) -> tuple[float, float]:
    """Extend a domain outward to round values, iterating until the step settles."""
    if start == stop:
        return float(start) + 0.0, float(stop) + 0.0
    reverse = stop < start
    low, high = (stop, start) if reverse else (start, stop)
    previous_step: float | None = None
    for _ in range(10):
        step = tick_increment(low, high, count)
        if step == previous_step:
            break
        if step > 0:
            low = math.floor(low / step) * step
            high = math.ceil(high / step) * step
        elif step < 0:
            low = math.ceil(low * step) / step
            high = math.floor(high * step) / step
        else:
            break
        previous_step = step
    # Adding 0.0 turns -0.0 from the ceil/floor rounding into 0.0.
    low, high = float(low) + 0.0, float(high) + 0.0
    return (high, low) if reverse else (low, high)


@dataclass(frozen=True)
class PointScale:
    domain: tuple[str, ...]
    range: tuple[float, float]
    padding: float = 0.5

    @property
    def step(self) -> float:
        start, stop = self.range
        count = len(self.domain)
        return (stop - start) / max(1.0, count - 1 + self.padding * 2)

    def __call__(self, value: str) -> float | None:
        try:
            index = self.domain.index(value)
        except ValueError:
            return None
        start, stop = self.range
        offset = (stop - start - self.step * (len(self.domain) - 1)) * 0.5
        return start + offset + self.step * index


@dataclass(frozen=True)
class LinearScale:
    domain: tuple[float, float]
    range: tuple[float, float]

    def __call__(self, value: float) -> float:
        d0, d1 = self.domain
        r0, r1 = self.range
        if d1 == d0:
            return (r0 + r1) / 2.0
        return r0 + (value - d0) / (d1 - d0) * (r1 - r0)

    def ticks(self, count: int = 10) -> list[float]:
        return ticks(self.domain[0], self.domain[1], count)


@dataclass(frozen=True)
class ChartScales:
    x: PointScale
    y: LinearScale


def build_x_scale(season: str, layout: LayoutConfig, padding: float = 0.5) -> PointScale:
    return PointScale(
        domain=tuple(season_month_names(season)),
        range=(0.0, layout.inner_width),
        padding=padding,
    )


def build_y_scale(values: Sequence[float], layout: LayoutConfig) -> LinearScale:
    low = min(min(values), 0.0)
    high = max(values)
    return LinearScale(domain=nice_domain(low, high), range=(layout.inner_height, 0.0))


def build_scales(
    series: Sequence[SiteSeries],
    season: str,
    layout: LayoutConfig,
    padding: float = 0.5,
) -> ChartScales | None:
    """Scales bounding the visible series, or ``None`` when nothing is visible."""
    values = [point.value for point in flatten_series(series)]
    if not values:
        return None
    return ChartScales(
        x=build_x_scale(season, layout, padding=padding),
        y=build_y_scale(values, layout),
    )
