from __future__ import annotations

import logging
from collections import Counter
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from arctic_sky.config import AppConfig
from arctic_sky.explorer.curves import catmull_rom_path, format_number
from arctic_sky.explorer.frame import ChartFrame
from arctic_sky.explorer.metrics import MetricDescriptor
from arctic_sky.explorer.reconcile import diff_keyed
from arctic_sky.explorer.scales import ChartScales
from arctic_sky.explorer.scene import (
    DATA_LAYERS,
    Element,
    Surface,
    Tooltip,
    Transition,
)
from arctic_sky.explorer.series import SeriesPoint, SiteSeries

LOGGER = logging.getLogger(__name__)

GRID_STROKE = "rgba(15, 140, 198, 0.12)"
AXIS_TEXT_FILL = "#526479"
POINT_STROKE = "#ffffff"
LEGEND_SPACING = 150


@dataclass(frozen=True)
class LayerMotion:
    enter_from: Mapping[str, Any]
    enter_ms: int
    update_ms: int
    exit_to: Mapping[str, Any]
    exit_ms: int

    @classmethod
    def fade(cls, duration_ms: int) -> LayerMotion:
        return cls({"opacity": 0.0}, duration_ms, duration_ms, {"opacity": 0.0}, duration_ms)


@dataclass(frozen=True)
class RenderResult:
    frame: ChartFrame
    transitions: tuple[Transition, ...]
    first_draw: bool
    cleared: bool

    def phase_counts(self, layer: str | None = None) -> dict[str, int]:
        counts = Counter(
            transition.phase
            for transition in self.transitions
            if layer is None or transition.layer == layer
        )
        return {phase: counts.get(phase, 0) for phase in ("enter", "update", "exit")}

    @property
    def duration_ms(self) -> int:
        return max((transition.duration_ms for transition in self.transitions), default=0)


def tooltip_lines(point: SeriesPoint, metric: MetricDescriptor) -> tuple[str, ...]:
    return (
        f"{point.site} · {point.region}",
        f"{point.month_name} ({point.season})",
        f"{metric.label}: {metric.format_with_suffix(point.value)}",
    )


class ChartRenderer:
    """Reconciles chart frames onto a :class:`Surface` by stable element keys."""

    def __init__(self, surface: Surface, config: AppConfig) -> None:
        self.surface = surface
        self.config = config
        self._hovered: str | None = None
        timings = config.transitions
        self._motions = {
            "grid": LayerMotion({}, 0, timings.grid_ms, {}, 0),
            "lines": LayerMotion.fade(timings.line_ms),
            "points": LayerMotion(
                {"r": 0.0, "opacity": 0.0},
                timings.point_ms,
                timings.point_ms,
                {"r": 0.0, "opacity": 0.0},
                timings.point_exit_ms,
            ),
            "x_axis": LayerMotion.fade(timings.axis_ms),
            "y_axis": LayerMotion.fade(timings.axis_ms),
            "legend": LayerMotion.fade(timings.legend_ms),
        }

    def render(self, frame: ChartFrame) -> RenderResult:
        first_draw = not self.surface.drawn
        animate = not first_draw
        self.surface.error = None
        self.surface.y_label = frame.metric.y_label
        self.surface.summary = frame.summary

        transitions: list[Transition] = []
        if frame.scales is None:
            for layer in DATA_LAYERS:
                transitions.extend(self._reconcile(layer, {}, animate=False))
            self._hide_tooltip()
        else:
            targets = {
                "grid": self._grid_elements(frame.scales),
                "lines": self._line_elements(frame, frame.scales),
                "points": self._point_elements(frame, frame.scales),
                "x_axis": self._x_axis_elements(frame.scales),
                "y_axis": self._y_axis_elements(frame.scales, frame.metric),
            }
            for layer in DATA_LAYERS:
                transitions.extend(self._reconcile(layer, targets[layer], animate=animate))
            if self._hovered:
                hovered = self.surface.layers["points"].get(self._hovered)
                if hovered is None:
                    self._hide_tooltip()
                else:
                    self.surface.tooltip.lines = hovered.title

        transitions.extend(self._reconcile("legend", self._legend_elements(frame), animate=animate))
        self.surface.drawn = True

        result = RenderResult(
            frame=frame,
            transitions=tuple(transitions),
            first_draw=first_draw,
            cleared=frame.scales is None,
        )
        LOGGER.debug(
            "Redraw season=%s metric=%s: %s%s",
            frame.filters.season,
            frame.filters.metric,
            result.phase_counts(),
            " (cleared)" if result.cleared else "",
        )
        return result

    def _reconcile(
        self,
        layer: str,
        targets: dict[str, Element],
        *,
        animate: bool,
    ) -> list[Transition]:
        previous = self.surface.layers[layer]
        motion = self._motions[layer]
        diff = diff_keyed(previous, targets)

        transitions: list[Transition] = []
        for key in diff.entered:
            element = targets[key]
            end = dict(element.attrs)
            start = {**end, **motion.enter_from} if animate else end
            transitions.append(
                Transition(
                    layer, key, "enter", element, start, end, motion.enter_ms if animate else 0
                )
            )
        for key in diff.retained:
            element = targets[key]
            transitions.append(
                Transition(
                    layer,
                    key,
                    "update",
                    element,
                    dict(previous[key].attrs),
                    dict(element.attrs),
                    motion.update_ms if animate else 0,
                )
            )
        for key in diff.exited:
            element = previous[key]
            start = dict(element.attrs)
            transitions.append(
                Transition(
                    layer,
                    key,
                    "exit",
                    element,
                    start,
                    {**start, **motion.exit_to},
                    motion.exit_ms if animate else 0,
                )
            )
        self.surface.layers[layer] = dict(targets)
        return transitions

    def _grid_elements(self, scales: ChartScales) -> dict[str, Element]:
        width = self.config.layout.inner_width
        elements: dict[str, Element] = {}
        for value in scales.y.ticks(self.config.chart.y_tick_count):
            y = scales.y(value)
            key = format_number(value)
            elements[key] = Element(
                key=key,
                tag="line",
                attrs={"x1": 0.0, "x2": width, "y1": y, "y2": y, "stroke": GRID_STROKE},
            )
        return elements

    def _x_axis_elements(self, scales: ChartScales) -> dict[str, Element]:
        elements: dict[str, Element] = {}
        for month_name in scales.x.domain:
            elements[month_name] = Element(
                key=month_name,
                tag="text",
                attrs={
                    "x": scales.x(month_name),
                    "y": 24.0,
                    "text-anchor": "middle",
                    "fill": AXIS_TEXT_FILL,
                    "opacity": 1.0,
                },
                text=month_name,
            )
        return elements

    def _y_axis_elements(self, scales: ChartScales, metric: MetricDescriptor) -> dict[str, Element]:
        elements: dict[str, Element] = {}
        for value in scales.y.ticks(self.config.chart.y_tick_count):
            key = format_number(value)
            elements[key] = Element(
                key=key,
                tag="text",
                attrs={
                    "x": -12.0,
                    "y": scales.y(value),
                    "dy": "0.32em",
                    "text-anchor": "end",
                    "fill": AXIS_TEXT_FILL,
                    "opacity": 1.0,
                },
                text=metric.format_with_suffix(value),
            )
        return elements

    def _ordered_series(self, frame: ChartFrame) -> list[tuple[SiteSeries, bool]]:
        by_site = {series.site: (series, True) for series in frame.series}
        by_site.update({series.site: (series, False) for series in frame.inactive_series})
        return [by_site[site] for site in frame.filters.all_sites if site in by_site]

    def _line_elements(self, frame: ChartFrame, scales: ChartScales) -> dict[str, Element]:
        chart = self.config.chart
        elements: dict[str, Element] = {}
        for series, active in self._ordered_series(frame):
            coordinates = []
            for point in series.values:
                x = scales.x(point.month_name)
                if x is not None:
                    coordinates.append((x, scales.y(point.value)))
            elements[series.site] = Element(
                key=series.site,
                tag="path",
                attrs={
                    "d": catmull_rom_path(coordinates, alpha=chart.curve_alpha),
                    "fill": "none",
                    "stroke": frame.colors[series.site],
                    "stroke-width": 2.6,
                    "stroke-linejoin": "round",
                    "stroke-linecap": "round",
                    "opacity": 1.0 if active else chart.inactive_line_opacity,
                },
                title=(series.site,),
            )
        return elements

    def _point_elements(self, frame: ChartFrame, scales: ChartScales) -> dict[str, Element]:
        chart = self.config.chart
        elements: dict[str, Element] = {}
        for series, active in self._ordered_series(frame):
            for point in series.values:
                x = scales.x(point.month_name)
                if x is None:
                    continue
                radius = chart.hover_radius if point.key == self._hovered else chart.point_radius
                elements[point.key] = Element(
                    key=point.key,
                    tag="circle",
                    attrs={
                        "cx": x,
                        "cy": scales.y(point.value),
                        "r": radius,
                        "fill": frame.colors[series.site],
                        "stroke": POINT_STROKE,
                        "stroke-width": 1.6,
                        "opacity": 1.0 if active else chart.inactive_line_opacity,
                    },
                    title=tooltip_lines(point, frame.metric),
                )
        return elements

    def _legend_elements(self, frame: ChartFrame) -> dict[str, Element]:
        chart = self.config.chart
        elements: dict[str, Element] = {}
        for index, site in enumerate(frame.filters.all_sites):
            active = frame.filters.is_active(site)
            elements[site] = Element(
                key=site,
                tag="legend",
                attrs={
                    "x": float(index * LEGEND_SPACING),
                    "y": 0.0,
                    "fill": frame.colors[site],
                    "opacity": 1.0 if active else chart.inactive_legend_opacity,
                },
                text=site,
            )
        return elements

    def _hide_tooltip(self) -> None:
        self._hovered = None
        self.surface.tooltip = Tooltip()

    def hover(self, key: str, x: float, y: float) -> list[Transition]:
        points = self.surface.layers["points"]
        element = points.get(key)
        if element is None:
            LOGGER.debug("Ignoring hover on missing point %s", key)
            return []
        chart = self.config.chart
        target = {**element.attrs, "r": chart.hover_radius}
        points[key] = element.with_attrs(target)
        self._hovered = key
        self.surface.tooltip = Tooltip(
            visible=True,
            x=x + chart.tooltip_offset_x,
            y=y + chart.tooltip_offset_y,
            lines=element.title,
            target=key,
        )
        return [
            Transition(
                "points",
                key,
                "update",
                points[key],
                dict(element.attrs),
                target,
                self.config.transitions.hover_ms,
            )
        ]

    def move_pointer(self, x: float, y: float) -> None:
        tooltip = self.surface.tooltip
        if not tooltip.visible:
            return
        chart = self.config.chart
        tooltip.x = x + chart.tooltip_offset_x
        tooltip.y = y + chart.tooltip_offset_y

    def leave(self, key: str) -> list[Transition]:
        if key != self._hovered:
            LOGGER.debug("Ignoring leave on %s; hovered point is %s", key, self._hovered)
            return []
        points = self.surface.layers["points"]
        element = points.get(key)
        self._hide_tooltip()
        if element is None:
            return []
        target = {**element.attrs, "r": self.config.chart.point_radius}
        points[key] = element.with_attrs(target)
        return [
            Transition(
                "points",
                key,
                "update",
                points[key],
                dict(element.attrs),
                target,
                self.config.transitions.hover_ms,
            )
        ]

