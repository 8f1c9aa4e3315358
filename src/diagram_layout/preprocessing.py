"""
Graph preprocessing utilities.

This module provides reusable functions for preparing graphs before layout:
- Root detection
- Level (tier) assignment
- Crossing minimization between levels

Nodes are referred to by id and edges by (source, target) id pairs. These
utilities are used internally by layout algorithms but can also be used
directly for graph analysis.
"""

from __future__ import annotations

from collections import deque
from typing import Mapping, Optional, Sequence

Pair = tuple[str, str]


# =============================================================================
# Roots and Levels
# =============================================================================


def find_roots(ids: Sequence[str], pairs: Sequence[Pair]) -> list[str]:
    """
    Find root nodes: nodes that never appear as an edge target.

    Args:
        ids: Node ids in input order
        pairs: Directed (source, target) edges

    Returns:
        Root ids in input order. Empty if every node has a parent
        (e.g. the graph is one big cycle).

    Example:
        >>> find_roots(["a", "b", "c"], [("a", "b"), ("b", "c")])
        ['a']
    """
    targets = {tgt for _, tgt in pairs}
    return [node_id for node_id in ids if node_id not in targets]


def assign_levels(
    ids: Sequence[str],
    pairs: Sequence[Pair],
    explicit: Optional[Mapping[str, int]] = None,
) -> dict[str, int]:
    """
    Assign a level (depth) to every node.

    Nodes with an explicit level keep it. Everything else gets its BFS
    depth: roots sit at level 0 and a child one level below the parent
    that first reaches it. Nodes not reachable from any root or explicitly
    levelled node fall back to level 0.

    Args:
        ids: Node ids in input order
        pairs: Directed (source, target) edges
        explicit: Known levels keyed by id

    Returns:
        Level per node id.

    Example:
        >>> assign_levels(["a", "b", "c"], [("a", "b"), ("a", "c")])
        {'a': 0, 'b': 1, 'c': 1}
    """
    explicit = dict(explicit or {})
    levels: dict[str, int] = {}

    if explicit and all(node_id in explicit for node_id in ids):
        return {node_id: max(0, explicit[node_id]) for node_id in ids}

    children: dict[str, list[str]] = {}
    for src, tgt in pairs:
        children.setdefault(src, []).append(tgt)

    queue: deque[str] = deque()
    for node_id in find_roots(ids, pairs):
        levels[node_id] = max(0, explicit.get(node_id, 0))
        queue.append(node_id)
    for node_id in ids:
        if node_id in explicit and node_id not in levels:
            levels[node_id] = max(0, explicit[node_id])
            queue.append(node_id)

    while queue:
        node_id = queue.popleft()
        for child in children.get(node_id, []):
            if child not in levels:
                levels[child] = levels[node_id] + 1
                queue.append(child)

    # Handle unreachable nodes (cycles without roots)
    for node_id in ids:
        if node_id not in levels:
            levels[node_id] = 0

    return {node_id: levels[node_id] for node_id in ids}


def group_by_level(ids: Sequence[str], levels: Mapping[str, int]) -> list[list[str]]:
    """
    Group ids into levels, keeping input order inside each level.

    Levels without nodes are kept as empty lists so list index equals level.
    """
    if not ids:
        return []
    max_level = max(levels[node_id] for node_id in ids)
    layers: list[list[str]] = [[] for _ in range(max_level + 1)]
    for node_id in ids:
        layers[levels[node_id]].append(node_id)
    return layers


# =============================================================================
# Crossing Minimization
# =============================================================================


def minimize_crossings_barycenter(
    layers: list[list[str]],
    pairs: Sequence[Pair],
    iterations: int = 24,
) -> list[list[str]]:
    """
    Minimize edge crossings between layers using the barycenter heuristic.

    Repeatedly sweeps through layers, reordering nodes based on the
    average position of their neighbors in adjacent layers. Sorting is
    stable, so nodes without neighbors keep their relative order.

    Args:
        layers: List of layers, each a list of node ids
        pairs: Directed (source, target) edges
        iterations: Number of sweep iterations

    Returns:
        Reordered layers with minimized crossings.
    """
    if len(layers) < 2:
        return [list(layer) for layer in layers]

    node_layer: dict[str, int] = {}
    for layer_idx, layer in enumerate(layers):
        for node in layer:
            node_layer[node] = layer_idx

    outgoing: dict[str, list[str]] = {node: [] for node in node_layer}
    incoming: dict[str, list[str]] = {node: [] for node in node_layer}
    for src, tgt in pairs:
        if src in node_layer and tgt in node_layer:
            outgoing[src].append(tgt)
            incoming[tgt].append(src)

    result = [list(layer) for layer in layers]

    position: dict[str, int] = {}
    for layer in result:
        for pos, node in enumerate(layer):
            position[node] = pos

    def order_layer(layer_idx: int, adj: dict[str, list[str]]) -> None:
        layer = result[layer_idx]
        if not layer:
            return

        barycenters: list[tuple[float, str]] = []
        for node in layer:
            neighbors = adj[node]
            if neighbors:
                avg = sum(position[n] for n in neighbors) / len(neighbors)
            else:
                avg = float(position[node])
            barycenters.append((avg, node))

        barycenters.sort(key=lambda x: x[0])
        result[layer_idx] = [node for _, node in barycenters]

        for pos, (_, node) in enumerate(barycenters):
            position[node] = pos

    best = [list(layer) for layer in result]
    best_crossings = count_crossings(best, pairs)

    # Iterate with alternating sweeps
    for i in range(iterations):
        if i % 2 == 0:
            # Sweep down
            for layer_idx in range(1, len(result)):
                order_layer(layer_idx, incoming)
        else:
            # Sweep up
            for layer_idx in range(len(result) - 2, -1, -1):
                order_layer(layer_idx, outgoing)

        crossings = count_crossings(result, pairs)
        if crossings < best_crossings:
            best = [list(layer) for layer in result]
            best_crossings = crossings
            if crossings == 0:
                break

    return best


def count_crossings(layers: list[list[str]], pairs: Sequence[Pair]) -> int:
    """
    Count the number of edge crossings in a layered layout.

    Args:
        layers: List of layers, each containing node ids
        pairs: Directed (source, target) edges

    Returns:
        Number of edge crossings.
    """
    node_layer: dict[str, int] = {}
    node_pos: dict[str, int] = {}
    for layer_idx, layer in enumerate(layers):
        for pos, node in enumerate(layer):
            node_layer[node] = layer_idx
            node_pos[node] = pos

    # Group edges by layer pairs
    layer_edges: dict[tuple[int, int], list[tuple[int, int]]] = {}
    for src, tgt in pairs:
        if src in node_layer and tgt in node_layer:
            l1, l2 = node_layer[src], node_layer[tgt]
            if l1 > l2:
                l1, l2 = l2, l1
                src, tgt = tgt, src
            layer_edges.setdefault((l1, l2), []).append((node_pos[src], node_pos[tgt]))

    total = 0
    for edges in layer_edges.values():
        for i, (s1, t1) in enumerate(edges):
            for s2, t2 in edges[i + 1 :]:
                # Two edges cross if one is "above" on left and "below" on right
                if (s1 < s2 and t1 > t2) or (s1 > s2 and t1 < t2):
                    total += 1

    return total


__all__ = [
    "find_roots",
    "assign_levels",
    "group_by_level",
    "minimize_crossings_barycenter",
    "count_crossings",
]
