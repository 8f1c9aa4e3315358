"""
Geometry primitives shared by layouts, collision handling and animation.

All functions are pure and work on Position values in canvas coordinates
(origin top-left, y grows downward).
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Iterable, Optional

from .types import Position


@dataclass(frozen=True)
class BoundingBox:
    """Axis-aligned rectangle given by its corners."""

    min_x: float
    min_y: float
    max_x: float
    max_y: float

    @property
    def width(self) -> float:
        return self.max_x - self.min_x

    @property
    def height(self) -> float:
        return self.max_y - self.min_y

    @property
    def center(self) -> Position:
        return Position((self.min_x + self.max_x) / 2, (self.min_y + self.max_y) / 2)

    def contains(self, point: Position) -> bool:
        return self.min_x <= point.x <= self.max_x and self.min_y <= point.y <= self.max_y


@dataclass(frozen=True)
class FitTransform:
    """Uniform scale plus translation mapping layout space onto a viewport."""

    scale: float
    translate_x: float
    translate_y: float

    def apply(self, point: Position) -> Position:
        return Position(
            point.x * self.scale + self.translate_x,
            point.y * self.scale + self.translate_y,
        )


def midpoint(a: Position, b: Position) -> Position:
    """Point halfway between a and b."""
    return Position((a.x + b.x) / 2, (a.y + b.y) / 2)


def distance(a: Position, b: Position) -> float:
    """Euclidean distance between two points."""
    return math.hypot(b.x - a.x, b.y - a.y)


def center_point(points: Iterable[Position]) -> Optional[Position]:
    """Mean of the given points, or None when there are none."""
    xs: list[float] = []
    ys: list[float] = []
    for p in points:
        xs.append(p.x)
        ys.append(p.y)
    if not xs:
        return None
    return Position(sum(xs) / len(xs), sum(ys) / len(ys))


def bounding_box(points: Iterable[Position], padding: float = 0.0) -> BoundingBox:
    """
    Smallest box containing every point, grown by padding on each side.

    An empty input gives a zero-size box at the origin.
    """
    pts = list(points)
    if not pts:
        return BoundingBox(0.0, 0.0, 0.0, 0.0)
    return BoundingBox(
        min(p.x for p in pts) - padding,
        min(p.y for p in pts) - padding,
        max(p.x for p in pts) + padding,
        max(p.y for p in pts) + padding,
    )


def interpolate_position(a: Position, b: Position, t: float) -> Position:
    """Linear interpolation from a (t=0) to b (t=1). t is not clamped."""
    return Position(a.x + (b.x - a.x) * t, a.y + (b.y - a.y) * t)


def clamp_position(
    point: Position,
    width: float,
    height: float,
    margin_x: float = 0.0,
    margin_y: Optional[float] = None,
) -> Position:
    """
    Clamp a point into ``[margin_x, width - margin_x] x [margin_y, height - margin_y]``.

    When a margin leaves no room on an axis the point is put on that axis's center.
    """
    if margin_y is None:
        margin_y = margin_x
    return Position(
        clamp(point.x, margin_x, width - margin_x),
        clamp(point.y, margin_y, height - margin_y),
    )


def clamp(value: float, low: float, high: float) -> float:
    """Clamp value into [low, high]; an empty range yields its midpoint."""
    if low > high:
        return (low + high) / 2
    return min(max(value, low), high)


def polar(cx: float, cy: float, radius: float, angle: float) -> Position:
    """Point at ``angle`` radians on a circle around (cx, cy)."""
    return Position(cx + radius * math.cos(angle), cy + radius * math.sin(angle))


def fit_transform(
    points: Iterable[Position],
    width: float,
    height: float,
    padding: float = 50.0,
    max_scale: float = 2.0,
) -> FitTransform:
    """
    Transform that fits the points into a ``width x height`` viewport.

    The scale fills the padded viewport on the tighter axis and never
    exceeds ``max_scale``; the points' center maps onto the viewport center.
    """
    pts = list(points)
    if not pts:
        return FitTransform(1.0, 0.0, 0.0)

    box = bounding_box(pts)
    scales = [max_scale]
    if box.width > 0:
        scales.append((width - padding * 2) / box.width)
    if box.height > 0:
        scales.append((height - padding * 2) / box.height)
    scale = min(scales)

    center = box.center
    return FitTransform(
        scale=scale,
        translate_x=width / 2 - center.x * scale,
        translate_y=height / 2 - center.y * scale,
    )


def scale_node_size(
    value: float,
    min_value: float,
    max_value: float,
    min_size: float = 20.0,
    max_size: float = 60.0,
) -> float:
    """Map a metric onto a node size range, clamping outside [min_value, max_value]."""
    if max_value == min_value:
        return min_size
    normalized = (value - min_value) / (max_value - min_value)
    return min_size + max(0.0, min(1.0, normalized)) * (max_size - min_size)


__all__ = [
    "BoundingBox",
    "FitTransform",
    "midpoint",
    "distance",
    "center_point",
    "bounding_box",
    "interpolate_position",
    "clamp",
    "clamp_position",
    "polar",
    "fit_transform",
    "scale_node_size",
]
