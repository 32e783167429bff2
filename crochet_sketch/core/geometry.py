# -*- coding: utf-8 -*-
"""Geometry helpers."""

from __future__ import annotations

import math
from typing import Iterable, Tuple

Point = Tuple[float, float]


def midpoint(a: Point, b: Point) -> Point:
    return (a[0] + b[0]) / 2.0, (a[1] + b[1]) / 2.0


def dist(ax: float, ay: float, bx: float, by: float) -> float:
    return math.hypot(bx - ax, by - ay)


def heading(frm: Point, to: Point) -> float:
    """World angle (radians) of the direction frm -> to."""
    return math.atan2(to[1] - frm[1], to[0] - frm[0])


def in_box(p: Point, start: Point, end: Point) -> bool:
    """Inclusive containment in the axis-aligned box spanned by two corners."""
    x0, x1 = sorted((start[0], end[0]))
    y0, y1 = sorted((start[1], end[1]))
    return x0 <= p[0] <= x1 and y0 <= p[1] <= y1


def bounds(points: Iterable[Point]) -> Tuple[float, float, float, float]:
    """Return (xmin, ymin, xmax, ymax); infinities when empty."""
    xmin = ymin = math.inf
    xmax = ymax = -math.inf
    for x, y in points:
        xmin = min(xmin, x)
        ymin = min(ymin, y)
        xmax = max(xmax, x)
        ymax = max(ymax, y)
    return xmin, ymin, xmax, ymax
