"""
Node overlap detection and resolution.

Nodes are axis-aligned boxes centered on their positions. Sizes come from a
mapping of node id to ``(width, height)``, a ``{"width", "height"}`` dict or
any object with ``width``/``height`` attributes; missing entries and missing
dimensions use ``default_size``.
"""

from __future__ import annotations

import math
import warnings
from dataclasses import dataclass
from typing import Any, Mapping, Optional, Sequence

from .geometry import clamp
from .types import NodeSize, Position, SizeType
from .validation import LayoutWarning, validate_canvas_size

DEFAULT_NODE_SIZE = (40.0, 40.0)

# Extra separation added to every push so resolved pairs end strictly apart
_EPSILON = 1e-6

_GOLDEN_ANGLE = math.pi * (3 - math.sqrt(5))


class CollisionResolutionWarning(LayoutWarning):
    """Warning issued when overlaps remain after resolution (bounds too tight)."""

    pass


@dataclass(frozen=True)
class Collision:
    """
    One overlapping pair.

    ``node_a`` comes before ``node_b`` in input order. ``overlap_x`` and
    ``overlap_y`` give how far the padded boxes intrude into each other.
    """

    node_a: str
    node_b: str
    overlap_x: float
    overlap_y: float


def _size_of(size: Any, default: tuple[float, float]) -> tuple[float, float]:
    """Read (width, height) from a tuple, dict, number or object."""
    if size is None:
        return default
    if isinstance(size, (int, float)):
        return float(size), float(size)
    if isinstance(size, (tuple, list)):
        return float(size[0]), float(size[1])
    if isinstance(size, dict):
        w, h = size.get("width"), size.get("height")
    else:
        w, h = getattr(size, "width", None), getattr(size, "height", None)
    return (
        float(w) if w is not None else default[0],
        float(h) if h is not None else default[1],
    )


def _half_extents(
    ids: Sequence[str],
    sizes: Optional[Mapping[str, NodeSize]],
    default_size: SizeType,
) -> tuple[list[float], list[float]]:
    default = (float(default_size[0]), float(default_size[1]))
    sizes = sizes or {}
    hw: list[float] = []
    hh: list[float] = []
    for node_id in ids:
        w, h = _size_of(sizes.get(node_id), default)
        hw.append(abs(w) / 2)
        hh.append(abs(h) / 2)
    return hw, hh


def _find_pairs(
    xs: Sequence[float],
    ys: Sequence[float],
    hw: Sequence[float],
    hh: Sequence[float],
    padding: float,
) -> list[tuple[int, int, float, float]]:
    """
    Sweep and prune over x: (i, j, overlap_x, overlap_y) with i < j.

    A pair collides when the gap between the boxes is at most ``padding``
    on both axes.
    """
    n = len(xs)
    order = sorted(range(n), key=lambda i: xs[i] - hw[i])
    pairs: list[tuple[int, int, float, float]] = []

    for pos, i in enumerate(order):
        right = xs[i] + hw[i]
        for j in order[pos + 1 :]:
            if xs[j] - hw[j] - right > padding:
                break
            gap_x = abs(xs[i] - xs[j]) - (hw[i] + hw[j])
            gap_y = abs(ys[i] - ys[j]) - (hh[i] + hh[j])
            if gap_x <= padding and gap_y <= padding:
                a, b = (i, j) if i < j else (j, i)
                pairs.append((a, b, padding - gap_x, padding - gap_y))

    pairs.sort()
    return pairs


def detect_collisions(
    positions: Mapping[str, Position],
    sizes: Optional[Mapping[str, NodeSize]] = None,
    *,
    default_size: SizeType = DEFAULT_NODE_SIZE,
    padding: float = 0.0,
) -> list[Collision]:
    """
    Find every pair of overlapping node boxes.

    Boxes that merely touch (zero gap) collide. With ``padding`` a pair also
    collides when its gap is at most ``padding`` on both axes.

    Args:
        positions: Box centers keyed by node id
        sizes: Box sizes keyed by node id
        default_size: (width, height) for nodes without a size
        padding: Required clearance between boxes

    Returns:
        Each colliding unordered pair once, sorted by input order.

    Example:
        >>> from diagram_layout.types import Position
        >>> hits = detect_collisions(
        ...     {"a": Position(100, 100), "b": Position(120, 110)},
        ...     {"a": (100, 50), "b": (100, 50)},
        ... )
        >>> (hits[0].node_a, hits[0].node_b)
        ('a', 'b')
    """
    ids = list(positions)
    xs = [positions[i].x for i in ids]
    ys = [positions[i].y for i in ids]
    hw, hh = _half_extents(ids, sizes, default_size)
    return [
        Collision(ids[a], ids[b], ox, oy)
        for a, b, ox, oy in _find_pairs(xs, ys, hw, hh, max(0.0, float(padding)))
    ]


def resolve_collisions(
    positions: Mapping[str, Position],
    sizes: Optional[Mapping[str, NodeSize]] = None,
    *,
    padding: float = 10.0,
    bounds: Optional[SizeType] = None,
    default_size: SizeType = DEFAULT_NODE_SIZE,
    max_iterations: int = 200,
) -> dict[str, Position]:
    """
    Push overlapping nodes apart until every pair is ``padding`` apart.

    Each colliding pair is moved along the line between its centers, just
    far enough to clear on the cheaper axis, both nodes moving half the
    distance. Coincident centers are fanned out along golden-angle
    directions so the result stays deterministic. With ``bounds`` every box
    is kept inside ``[0, width] x [0, height]`` (a box wider than the bounds
    is centered on that axis); when one node is held by the bounds its
    partner takes the whole move.

    If overlaps remain after ``max_iterations`` sweeps (the bounds cannot
    hold the nodes apart) the partial, bounds-respecting result is returned
    and a CollisionResolutionWarning is issued.

    Args:
        positions: Box centers keyed by node id
        sizes: Box sizes keyed by node id
        padding: Clearance to leave between boxes
        bounds: Optional (width, height) the boxes must stay inside
        default_size: (width, height) for nodes without a size
        max_iterations: Maximum number of resolution sweeps

    Returns:
        New position map with the same keys, in the same order.
    """
    ids = list(positions)
    xs = [float(positions[i].x) for i in ids]
    ys = [float(positions[i].y) for i in ids]
    hw, hh = _half_extents(ids, sizes, default_size)
    padding = max(0.0, float(padding))
    box = validate_canvas_size(bounds) if bounds is not None else None

    def keep_inside(k: int) -> None:
        if box is None:
            return
        xs[k] = clamp(xs[k], hw[k], box[0] - hw[k])
        ys[k] = clamp(ys[k], hh[k], box[1] - hh[k])

    for k in range(len(ids)):
        keep_inside(k)

    for _ in range(max(1, int(max_iterations))):
        pairs = _find_pairs(xs, ys, hw, hh, padding)
        if not pairs:
            break
        for i, j, _ox, _oy in pairs:
            dx, dy = xs[j] - xs[i], ys[j] - ys[i]
            need_x = hw[i] + hw[j] + padding - abs(dx)
            need_y = hh[i] + hh[j] + padding - abs(dy)
            if need_x < 0 or need_y < 0:
                # Already cleared by an earlier move in this sweep
                continue

            dist = math.hypot(dx, dy)
            if dist < 1e-9:
                angle = j * _GOLDEN_ANGLE
                ux, uy = math.cos(angle), math.sin(angle)
            else:
                ux, uy = dx / dist, dy / dist

            candidates = []
            if abs(ux) > 1e-12:
                candidates.append(need_x / abs(ux))
            if abs(uy) > 1e-12:
                candidates.append(need_y / abs(uy))
            push = min(candidates) + _EPSILON

            old_x, old_y = xs[i], ys[i]
            xs[i] -= ux * push / 2
            ys[i] -= uy * push / 2
            keep_inside(i)
            # Whatever node i could not take, node j takes
            xs[j] += ux * push + (xs[i] - old_x)
            ys[j] += uy * push + (ys[i] - old_y)
            keep_inside(j)

    remaining = _find_pairs(xs, ys, hw, hh, padding)
    if remaining:
        warnings.warn(
            f"{len(remaining)} overlapping pair(s) remain after collision resolution. "
            "The bounds are too small to separate all nodes with the requested padding.",
            CollisionResolutionWarning,
            stacklevel=2,
        )

    return {node_id: Position(xs[k], ys[k]) for k, node_id in enumerate(ids)}


__all__ = [
    "Collision",
    "CollisionResolutionWarning",
    "DEFAULT_NODE_SIZE",
    "detect_collisions",
    "resolve_collisions",
]
