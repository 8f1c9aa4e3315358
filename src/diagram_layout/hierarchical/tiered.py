"""
Hierarchical (tiered) layout algorithm.

Stacks levels as horizontal bands from top to bottom and spreads the nodes
of each level across the canvas width. Optionally centers every parent over
its direct children and reorders levels to reduce edge crossings.
"""

from __future__ import annotations

import warnings
from typing import Any, Optional, Sequence

from ..base import DEFAULT_SIZE, StaticLayout
from ..preprocessing import group_by_level, minimize_crossings_barycenter
from ..types import (
    EdgeLike,
    EventCallback,
    NodeLike,
    SizeType,
)
from ..validation import LayoutWarning

DEFAULT_NODE_GAP = 40.0


class TreeStructureWarning(LayoutWarning):
    """Warning issued when graph structure doesn't match tree assumptions."""

    pass


class HierarchicalLayout(StaticLayout):
    """
    Hierarchical layout - levels as horizontal bands.

    Level ``k`` sits at ``y = padding + k * level_spacing``; the spacing
    shrinks when the levels would not fit the padded canvas height. Levels
    come from the nodes' ``level`` (or ``tier``), otherwise from BFS depth
    below the roots (nodes that are never an edge target).

    Within a level the ``m`` nodes are spread evenly over
    ``[padding, width - padding]`` in input order, so a lone root lands at
    ``width / 2``. With ``center_parents`` (the default) a bottom-up pass
    then moves every parent to the mean x of its direct children and the
    drawing is shifted so the roots are centered on the canvas, shrinking
    horizontally if it would leave the padded area.

    Example:
        layout = HierarchicalLayout(
            nodes=[
                {"id": "queen", "level": 0},
                {"id": "w1", "level": 1},
                {"id": "w2", "level": 1},
            ],
            edges=[("queen", "w1"), ("queen", "w2")],
            size=(800, 600),
            level_spacing=100,
        )
        layout.run()
    """

    default_padding = 60.0

    def __init__(
        self,
        *,
        nodes: Optional[Sequence[NodeLike]] = None,
        edges: Optional[Sequence[EdgeLike]] = None,
        size: SizeType = DEFAULT_SIZE,
        padding: Optional[float] = None,
        random_seed: Optional[int] = None,
        on_start: Optional[EventCallback] = None,
        on_tick: Optional[EventCallback] = None,
        on_end: Optional[EventCallback] = None,
        # Hierarchical-specific parameters
        level_spacing: float = 120.0,
        tier_spacing: Optional[float] = None,
        node_spacing: float = 0.0,
        center_parents: bool = True,
        minimize_crossings: bool = False,
    ) -> None:
        """
        Initialize Hierarchical layout.

        Args:
            nodes: List of nodes (``level``/``tier`` pins a node's band)
            edges: List of edges (parent -> child)
            size: Canvas size as (width, height)
            padding: Distance kept from canvas edges (default 60)
            random_seed: Unused, accepted for a uniform constructor
            on_start: Callback for start event
            on_tick: Callback for tick event
            on_end: Callback for end event
            level_spacing: Vertical distance between levels
            tier_spacing: Alias for level_spacing; wins when both are given
            node_spacing: Minimum horizontal gap kept between nodes of one level
                after parent centering (0 uses DEFAULT_NODE_GAP, capped by the
                even spread of the level)
            center_parents: Center each parent over its direct children
            minimize_crossings: Reorder levels with the barycenter heuristic
        """
        super().__init__(
            nodes=nodes,
            edges=edges,
            size=size,
            padding=padding,
            random_seed=random_seed,
            on_start=on_start,
            on_tick=on_tick,
            on_end=on_end,
        )

        if tier_spacing is not None:
            level_spacing = tier_spacing
        self._level_spacing: float = max(0.0, float(level_spacing))
        self._node_spacing: float = max(0.0, float(node_spacing))
        self._center_parents: bool = center_parents
        self._minimize_crossings: bool = minimize_crossings

    # -------------------------------------------------------------------------
    # Properties
    # -------------------------------------------------------------------------

    @property
    def level_spacing(self) -> float:
        """Get vertical distance between levels."""
        return self._level_spacing

    @level_spacing.setter
    def level_spacing(self, value: float) -> None:
        self._level_spacing = max(0.0, float(value))

    tier_spacing = level_spacing

    @property
    def node_spacing(self) -> float:
        return self._node_spacing

    @node_spacing.setter
    def node_spacing(self, value: float) -> None:
        self._node_spacing = max(0.0, float(value))

    @property
    def center_parents(self) -> bool:
        return self._center_parents

    @center_parents.setter
    def center_parents(self, value: bool) -> None:
        self._center_parents = bool(value)

    @property
    def minimize_crossings(self) -> bool:
        return self._minimize_crossings

    @minimize_crossings.setter
    def minimize_crossings(self, value: bool) -> None:
        self._minimize_crossings = bool(value)

    # -------------------------------------------------------------------------
    # Layout Computation
    # -------------------------------------------------------------------------

    def layers(self) -> list[list[str]]:
        """Node ids per level, in placement order."""
        ids = [node.id for node in self._nodes]
        if self._edge_pairs() and not self._find_roots():
            warnings.warn(
                "No root node found (all nodes have incoming edges). "
                "This suggests the graph is not a tree. "
                "Nodes without an explicit level are placed on level 0.",
                TreeStructureWarning,
                stacklevel=3,
            )
        layers = group_by_level(ids, self._assign_levels())
        if self._minimize_crossings:
            layers = minimize_crossings_barycenter(layers, self._edge_pairs())
        return layers

    def _compute(self, **kwargs: Any) -> None:
        """Compute hierarchical layout positions."""
        layers = self.layers()
        width, height = self._canvas_size
        pad = self._padding

        spacing = self._level_spacing
        if len(layers) > 1:
            spacing = min(spacing, max(0.0, height - 2 * pad) / (len(layers) - 1))

        xs: dict[str, float] = {}
        available = width - 2 * pad
        for layer in layers:
            m = len(layer)
            for i, node_id in enumerate(layer):
                xs[node_id] = pad + (i + 1) * available / (m + 1)

        if self._center_parents and len(layers) > 1:
            self._center_over_children(layers, xs)

        for k, layer in enumerate(layers):
            for node_id in layer:
                self._place(node_id, xs[node_id], pad + k * spacing)

    def _center_over_children(self, layers: list[list[str]], xs: dict[str, float]) -> None:
        """Bottom-up parent centering, then recentre and fit horizontally."""
        width = self._canvas_size[0]
        level_of = {node_id: k for k, layer in enumerate(layers) for node_id in layer}

        direct: dict[str, list[str]] = {}
        for src, tgt in self._edge_pairs():
            if level_of[tgt] == level_of[src] + 1:
                direct.setdefault(src, []).append(tgt)

        self._separate(layers[-1], xs)
        for k in range(len(layers) - 2, -1, -1):
            for node_id in layers[k]:
                kids = direct.get(node_id)
                if kids:
                    xs[node_id] = sum(xs[kid] for kid in kids) / len(kids)
            self._separate(layers[k], xs)

        # Roots' span centered on the canvas
        top = next((layer for layer in layers if layer), [])
        if top:
            mid = (min(xs[r] for r in top) + max(xs[r] for r in top)) / 2
            shift = width / 2 - mid
            for node_id in xs:
                xs[node_id] += shift

        # Shrink about the vertical axis when the drawing leaves the padded area
        axis = width / 2
        reach = max((abs(x - axis) for x in xs.values()), default=0.0)
        limit = max(0.0, axis - self._padding)
        if reach > limit:
            factor = limit / reach
            for node_id in xs:
                xs[node_id] = axis + (xs[node_id] - axis) * factor

    def _separate(self, layer: list[str], xs: dict[str, float]) -> None:
        """
        Push nodes of one level apart, left to right.

        The gap is ``node_spacing``, or without one the smaller of
        DEFAULT_NODE_GAP and the even spread of the level. Nodes sharing an
        x keep their input order.
        """
        if len(layer) < 2:
            return
        gap = self._node_spacing
        if gap <= 0:
            available = self._canvas_size[0] - 2 * self._padding
            gap = min(DEFAULT_NODE_GAP, max(available, 0.0) / (len(layer) + 1))
        if gap <= 0:
            gap = DEFAULT_NODE_GAP
        ordered = sorted(layer, key=lambda node_id: xs[node_id])
        for prev, node_id in zip(ordered, ordered[1:]):
            if xs[node_id] < xs[prev] + gap:
                xs[node_id] = xs[prev] + gap


__all__ = ["HierarchicalLayout", "TreeStructureWarning"]
