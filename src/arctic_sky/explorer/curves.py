"""SVG path data for smoothed series lines.

Centripetal Catmull-Rom splines expressed as cubic Bezier segments. ``alpha``
0.5 is the centripetal variant; the chart uses 0.65 for slightly tighter
bends around seasonal peaks.
"""

from __future__ import annotations

import math
from collections.abc import Sequence

_EPSILON = 1e-12


def format_number(value: float) -> str:
    text = f"{value:.3f}".rstrip("0").rstrip(".")
    return "0" if text in ("", "-0") else text


def _pair(x: float, y: float) -> str:
    return f"{format_number(x)},{format_number(y)}"


def catmull_rom_path(points: Sequence[tuple[float, float]], alpha: float = 0.65) -> str:
    if not points:
        return ""
    if len(points) == 1:
        x, y = points[0]
        return f"M{_pair(x, y)}Z"
    if len(points) == 2:
        (x0, y0), (x1, y1) = points
        return f"M{_pair(x0, y0)}L{_pair(x1, y1)}"

    # Duplicate the end points so every segment has four control points.
    padded = [points[0], *points, points[-1]]
    commands = [f"M{_pair(*points[0])}"]
    for index in range(1, len(padded) - 2):
        p0, p1, p2, p3 = padded[index - 1 : index + 3]
        commands.append(_segment(p0, p1, p2, p3, alpha))
    return "".join(commands)


def _distance_pow(
    a: tuple[float, float],
    b: tuple[float, float],
    alpha: float,
) -> tuple[float, float]:
    """(d**alpha, d**(2*alpha)) for the chord between two points."""
    squared = (b[0] - a[0]) ** 2 + (b[1] - a[1]) ** 2
    two_alpha = math.pow(squared, alpha)
    return math.sqrt(two_alpha), two_alpha


def _segment(
    p0: tuple[float, float],
    p1: tuple[float, float],
    p2: tuple[float, float],
    p3: tuple[float, float],
    alpha: float,
) -> str:
    l01_a, l01_2a = _distance_pow(p0, p1, alpha)
    l12_a, l12_2a = _distance_pow(p1, p2, alpha)
    l23_a, l23_2a = _distance_pow(p2, p3, alpha)

    c1x, c1y = p1
    c2x, c2y = p2
    if l01_a > _EPSILON:
        a = 2 * l01_2a + 3 * l01_a * l12_a + l12_2a
        n = 3 * l01_a * (l01_a + l12_a)
        c1x = (p1[0] * a - p0[0] * l12_2a + p2[0] * l01_2a) / n
        c1y = (p1[1] * a - p0[1] * l12_2a + p2[1] * l01_2a) / n
    if l23_a > _EPSILON:
        b = 2 * l23_2a + 3 * l23_a * l12_a + l12_2a
        m = 3 * l23_a * (l23_a + l12_a)
        c2x = (p2[0] * b + p1[0] * l23_2a - p3[0] * l12_2a) / m
        c2y = (p2[1] * b + p1[1] * l23_2a - p3[1] * l12_2a) / m
    return f"C{_pair(c1x, c1y)},{_pair(c2x, c2y)},{_pair(*p2)}"
