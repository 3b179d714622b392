from __future__ import annotations

import re
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field, replace
from typing import Any, Literal

from arctic_sky.config import LayoutConfig

Phase = Literal["enter", "update", "exit"]

LAYER_ORDER = ("grid", "lines", "points", "x_axis", "y_axis", "legend")
DATA_LAYERS = ("grid", "lines", "points", "x_axis", "y_axis")

_NUMBER = re.compile(r"[-+]?(?:\d+\.?\d*|\.\d+)(?:[eE][-+]?\d+)?")
_HEX_COLOR = re.compile(r"^#[0-9a-fA-F]{6}$")


@dataclass(frozen=True)
class Element:
    key: str
    tag: str
    attrs: Mapping[str, Any]
    text: str | None = None
    title: tuple[str, ...] = ()

    def with_attrs(self, attrs: Mapping[str, Any]) -> Element:
        return replace(self, attrs=dict(attrs))


@dataclass(frozen=True)
class Transition:
    layer: str
    key: str
    phase: Phase
    element: Element
    start: Mapping[str, Any]
    end: Mapping[str, Any]
    duration_ms: int

    def progress(self, elapsed_ms: float) -> float:
        if self.duration_ms <= 0:
            return 1.0
        return max(0.0, min(1.0, elapsed_ms / self.duration_ms))

    def attrs_at(self, elapsed_ms: float) -> dict[str, Any]:
        return interpolate_attrs(self.start, self.end, self.progress(elapsed_ms))


@dataclass
class Tooltip:
    visible: bool = False
    x: float = 0.0
    y: float = 0.0
    lines: tuple[str, ...] = ()
    target: str | None = None


def _lerp(a: float, b: float, t: float) -> float:
    return a + (b - a) * t


def _interpolate_color(a: str, b: str, t: float) -> str:
    channels = []
    for offset in (1, 3, 5):
        start = int(a[offset : offset + 2], 16)
        stop = int(b[offset : offset + 2], 16)
        channels.append(round(_lerp(start, stop, t)))
    return "#" + "".join(f"{channel:02x}" for channel in channels)


def _interpolate_string(a: str, b: str, t: float) -> str:
    """Interpolate numbers embedded in ``b`` against their counterparts in ``a``."""
    source_numbers = [float(match) for match in _NUMBER.findall(a)]
    pieces: list[str] = []
    cursor = 0
    for index, match in enumerate(_NUMBER.finditer(b)):
        pieces.append(b[cursor : match.start()])
        target = float(match.group())
        if index < len(source_numbers):
            value = _lerp(source_numbers[index], target, t)
            pieces.append(f"{value:.3f}".rstrip("0").rstrip(".") or "0")
        else:
            pieces.append(match.group())
        cursor = match.end()
    pieces.append(b[cursor:])
    return "".join(pieces)


def interpolate_value(a: Any, b: Any, t: float) -> Any:
    if t >= 1.0:
        return b
    if t <= 0.0:
        return a
    if isinstance(a, (int, float)) and isinstance(b, (int, float)) and not isinstance(a, bool):
        return _lerp(float(a), float(b), t)
    if isinstance(a, str) and isinstance(b, str):
        if _HEX_COLOR.match(a) and _HEX_COLOR.match(b):
            return _interpolate_color(a, b, t)
        if a and b:
            return _interpolate_string(a, b, t)
    return b


def interpolate_attrs(start: Mapping[str, Any], end: Mapping[str, Any], t: float) -> dict[str, Any]:
    result = dict(start)
    for name, target in end.items():
        result[name] = interpolate_value(start.get(name, target), target, t)
    return result


@dataclass
class Surface:
    """In-memory SVG scene. Only :class:`ChartRenderer` mutates it."""

    layout: LayoutConfig
    layers: dict[str, dict[str, Element]] = field(
        default_factory=lambda: {name: {} for name in LAYER_ORDER}
    )
    y_label: str = ""
    summary: str = ""
    tooltip: Tooltip = field(default_factory=Tooltip)
    error: str | None = None
    drawn: bool = False

    def layer(self, name: str) -> dict[str, Element]:
        return self.layers[name]

    def element_count(self, names: Iterable[str] = DATA_LAYERS) -> int:
        return sum(len(self.layers[name]) for name in names)

    def show_error(self, message: str) -> None:
        for name in LAYER_ORDER:
            self.layers[name] = {}
        self.error = message
        self.summary = message
        self.tooltip = Tooltip()


def tween_layers(
    surface: Surface,
    transitions: Iterable[Transition],
    elapsed_ms: float,
) -> dict[str, list[Element]]:
    """Scene layers as they appear ``elapsed_ms`` into a redraw.

    Exiting elements are still drawn until their transition completes.
    """
    by_layer: dict[str, dict[str, Transition]] = {name: {} for name in LAYER_ORDER}
    for transition in transitions:
        by_layer.setdefault(transition.layer, {})[transition.key] = transition

    snapshot: dict[str, list[Element]] = {}
    for name in LAYER_ORDER:
        layer_transitions = by_layer.get(name, {})
        elements: list[Element] = []
        for key, element in surface.layers[name].items():
            transition = layer_transitions.get(key)
            if transition is None:
                elements.append(element)
            else:
                elements.append(element.with_attrs(transition.attrs_at(elapsed_ms)))
        for key, transition in layer_transitions.items():
            if transition.phase == "exit" and transition.progress(elapsed_ms) < 1.0:
                elements.append(transition.element.with_attrs(transition.attrs_at(elapsed_ms)))
        snapshot[name] = elements
    return snapshot
