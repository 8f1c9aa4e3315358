"""
Layout quality metrics.

Provides quantitative measures of a position map:
- Total edge length: Sum of straight-line edge lengths
- Edge crossings: Number of intersecting edge pairs

Both work with the position map returned by any layout.
"""

from __future__ import annotations

import math
from typing import Mapping, Optional, Sequence

from .types import EdgeLike, Position
from .validation import _get_endpoint


def edge_pairs(
    positions: Mapping[str, Position], edges: Sequence[EdgeLike]
) -> list[tuple[str, str]]:
    """(source, target) ids of edges whose endpoints both have a position."""
    pairs = []
    for edge in edges:
        src = _get_endpoint(edge, "source")
        tgt = _get_endpoint(edge, "target")
        if src in positions and tgt in positions:
            pairs.append((src, tgt))
    return pairs


def total_edge_length(
    positions: Mapping[str, Position],
    edges: Sequence[EdgeLike],
    pairs: Optional[Sequence[tuple[str, str]]] = None,
) -> float:
    """
    Sum of straight-line edge lengths.

    Edges naming nodes without a position are ignored.

    Args:
        positions: Position map
        edges: Edges of the diagram
        pairs: Already resolved endpoint pairs (skips resolving ``edges``)
    """
    if pairs is None:
        pairs = edge_pairs(positions, edges)
    total = 0.0
    for src, tgt in pairs:
        a, b = positions[src], positions[tgt]
        total += math.hypot(b.x - a.x, b.y - a.y)
    return total


def edge_crossings(
    positions: Mapping[str, Position],
    edges: Sequence[EdgeLike],
    pairs: Optional[Sequence[tuple[str, str]]] = None,
) -> int:
    """
    Count the number of edge crossings in the layout.

    Two edges cross if their line segments intersect (excluding
    shared endpoints).

    Time Complexity: O(m^2) where m = number of edges
    """
    if pairs is None:
        pairs = edge_pairs(positions, edges)
    crossings = 0
    n_pairs = len(pairs)

    for i in range(n_pairs):
        s1, t1 = pairs[i]
        for j in range(i + 1, n_pairs):
            s2, t2 = pairs[j]
            # Skip if edges share an endpoint
            if s1 == s2 or s1 == t2 or t1 == s2 or t1 == t2:
                continue
            if _segments_intersect(
                positions[s1].as_tuple(),
                positions[t1].as_tuple(),
                positions[s2].as_tuple(),
                positions[t2].as_tuple(),
            ):
                crossings += 1

    return crossings


def _segments_intersect(
    p1: tuple[float, float],
    p2: tuple[float, float],
    p3: tuple[float, float],
    p4: tuple[float, float],
) -> bool:
    """Check if line segments (p1,p2) and (p3,p4) intersect."""

    def ccw(a: tuple[float, float], b: tuple[float, float], c: tuple[float, float]) -> bool:
        return (c[1] - a[1]) * (b[0] - a[0]) > (b[1] - a[1]) * (c[0] - a[0])

    return ccw(p1, p3, p4) != ccw(p2, p3, p4) and ccw(p1, p2, p3) != ccw(p1, p2, p4)


__all__ = [
    "edge_pairs",
    "total_edge_length",
    "edge_crossings",
]
