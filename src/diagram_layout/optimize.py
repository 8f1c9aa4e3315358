"""
Post-layout optimisation.

optimize_layout() improves an existing position map with greedy local
moves: every node tries a few candidate spots near its neighbors and keeps
one only if the objective strictly drops. The objective is the total edge
length, plus a crossing penalty when ``minimize_crossings`` is set, so the
result is never worse than the input.
"""

from __future__ import annotations

import math
from typing import Mapping, Sequence

from .base import DEFAULT_SIZE
from .geometry import clamp_position
from .metrics import _segments_intersect, edge_pairs
from .types import EdgeLike, Position, SizeType
from .validation import validate_canvas_size

_TOLERANCE = 1e-9


def optimize_layout(
    positions: Mapping[str, Position],
    edges: Sequence[EdgeLike],
    *,
    size: SizeType = DEFAULT_SIZE,
    iterations: int = 50,
    step: float = 0.25,
    min_distance: float = 30.0,
    minimize_crossings: bool = False,
) -> dict[str, Position]:
    """
    Shorten edges (and optionally remove crossings) of a position map.

    Args:
        positions: Position map to improve (not modified)
        edges: Edges of the diagram; edges naming unknown ids are ignored
        size: Canvas size; moved nodes stay inside it
        iterations: Maximum number of sweeps over all nodes
        step: Fraction of the way toward the neighbors' barycenter tried per move
        min_distance: Moves may not bring a node closer than this to any other
        minimize_crossings: Weigh every edge crossing like a canvas diagonal
            of extra length, and also try spots right next to the barycenter

    Returns:
        New position map with the same keys.

    Example:
        >>> better = optimize_layout(layout.positions, edges, size=(800, 600))
    """
    width, height = validate_canvas_size(size)
    result = dict(positions)
    pairs = [pair for pair in edge_pairs(result, edges) if pair[0] != pair[1]]
    if not pairs:
        return result

    incident: dict[str, list[int]] = {}
    neighbors: dict[str, list[str]] = {}
    for e, (src, tgt) in enumerate(pairs):
        incident.setdefault(src, []).append(e)
        incident.setdefault(tgt, []).append(e)
        neighbors.setdefault(src, []).append(tgt)
        neighbors.setdefault(tgt, []).append(src)

    penalty = math.hypot(width, height) if minimize_crossings else 0.0
    step = max(0.0, min(1.0, float(step)))

    for _ in range(max(0, int(iterations))):
        improved = False
        for node_id in result:
            if node_id not in incident:
                continue
            current = result[node_id]
            best = current
            best_cost = _local_cost(result, pairs, incident[node_id], penalty)
            floor = min(min_distance, _nearest(result, node_id, current))

            for candidate in _candidates(result, neighbors[node_id], current, step,
                                         min_distance, minimize_crossings):
                candidate = clamp_position(candidate, width, height)
                if _nearest(result, node_id, candidate) < floor:
                    continue
                result[node_id] = candidate
                cost = _local_cost(result, pairs, incident[node_id], penalty)
                result[node_id] = current
                if cost < best_cost - _TOLERANCE:
                    best, best_cost = candidate, cost

            if best is not current:
                result[node_id] = best
                improved = True
        if not improved:
            break

    return result


def _candidates(
    positions: Mapping[str, Position],
    neighbor_ids: list[str],
    current: Position,
    step: float,
    offset: float,
    near_moves: bool,
) -> list[Position]:
    bx = sum(positions[n].x for n in neighbor_ids) / len(neighbor_ids)
    by = sum(positions[n].y for n in neighbor_ids) / len(neighbor_ids)
    moves = [Position(current.x + (bx - current.x) * step, current.y + (by - current.y) * step)]
    if near_moves:
        moves.extend(
            [
                Position(bx + offset, by),
                Position(bx - offset, by),
                Position(bx, by + offset),
                Position(bx, by - offset),
            ]
        )
    return moves


def _nearest(positions: Mapping[str, Position], node_id: str, point: Position) -> float:
    """Distance from point to the closest other node."""
    nearest = math.inf
    for other_id, other in positions.items():
        if other_id != node_id:
            nearest = min(nearest, math.hypot(other.x - point.x, other.y - point.y))
    return nearest


def _local_cost(
    positions: Mapping[str, Position],
    pairs: Sequence[tuple[str, str]],
    edge_ids: list[int],
    penalty: float,
) -> float:
    """Length of the given edges plus ``penalty`` per crossing they take part in."""
    cost = 0.0
    for e in edge_ids:
        src, tgt = pairs[e]
        a, b = positions[src], positions[tgt]
        cost += math.hypot(b.x - a.x, b.y - a.y)
        if penalty == 0:
            continue
        for f, (s2, t2) in enumerate(pairs):
            if f == e or src in (s2, t2) or tgt in (s2, t2):
                continue
            if _segments_intersect(
                a.as_tuple(), b.as_tuple(), positions[s2].as_tuple(), positions[t2].as_tuple()
            ):
                cost += penalty
    return cost


__all__ = ["optimize_layout"]
