"""
Hierarchical-mesh (hybrid) layout algorithm.

Clusters nodes by category: every category gets a centroid on an outer ring
and its members sit on a small circle around that centroid.
"""

from __future__ import annotations

import math
from typing import Any, Optional, Sequence

from ..base import DEFAULT_SIZE, StaticLayout
from ..geometry import polar
from ..types import (
    EdgeLike,
    EventCallback,
    NodeLike,
    SizeType,
)

DEFAULT_CATEGORY = "default"


class HierarchicalMeshLayout(StaticLayout):
    """
    Hybrid layout - a ring of category clusters.

    Categories are taken in order of first appearance; nodes without a
    category share one default group. Cluster centroids are evenly spaced by
    angle (first one at 12 o'clock) on a ring of radius
    ``ring_ratio * (min(width, height)/2 - padding)``. A cluster's members
    are evenly spaced on a circle of ``inner_radius`` around the centroid; a
    single-member cluster puts its node exactly on the centroid. With only
    one category the cluster is centered on the canvas.

    Example:
        layout = HierarchicalMeshLayout(
            nodes=[
                {"id": "api", "category": "core"},
                {"id": "db", "category": "core"},
                {"id": "cli", "category": "tools"},
            ],
            size=(800, 600),
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
        # Hybrid-specific parameters
        inner_radius: float = 60.0,
        ring_ratio: float = 0.6,
        start_angle: float = -math.pi / 2,
    ) -> None:
        """
        Initialize HierarchicalMesh layout.

        Args:
            nodes: List of nodes (``category`` or ``group`` selects the cluster)
            edges: List of edges (not used for positioning)
            size: Canvas size as (width, height)
            padding: Distance kept from canvas edges (default 60)
            random_seed: Unused, accepted for a uniform constructor
            on_start: Callback for start event
            on_tick: Callback for tick event
            on_end: Callback for end event
            inner_radius: Radius of each cluster's member circle
            ring_ratio: Centroid ring radius as a fraction of the padded canvas radius
            start_angle: Angle of the first centroid and of each cluster's first member
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

        self._inner_radius: float = max(0.0, float(inner_radius))
        self._ring_ratio: float = max(0.0, min(1.0, float(ring_ratio)))
        self._start_angle: float = float(start_angle)

    # -------------------------------------------------------------------------
    # Properties
    # -------------------------------------------------------------------------

    @property
    def inner_radius(self) -> float:
        return self._inner_radius

    @inner_radius.setter
    def inner_radius(self, value: float) -> None:
        self._inner_radius = max(0.0, float(value))

    @property
    def ring_ratio(self) -> float:
        return self._ring_ratio

    @ring_ratio.setter
    def ring_ratio(self, value: float) -> None:
        """Set centroid ring ratio, clamped to [0, 1]."""
        self._ring_ratio = max(0.0, min(1.0, float(value)))

    # -------------------------------------------------------------------------
    # Layout Computation
    # -------------------------------------------------------------------------

    def categories(self) -> dict[str, list[str]]:
        """Member ids per category, in order of first appearance."""
        groups: dict[str, list[str]] = {}
        for node in self._nodes:
            key = str(node.category or DEFAULT_CATEGORY)
            groups.setdefault(key, []).append(node.id)
        return groups

    def _compute(self, **kwargs: Any) -> None:
        """Compute hybrid layout positions."""
        groups = self.categories()
        width, height = self._canvas_size
        cx, cy = self._canvas_center()

        outer_radius = max(0.0, min(width, height) / 2 - self._padding)
        ring_radius = outer_radius * self._ring_ratio if len(groups) > 1 else 0.0
        k = len(groups)

        for cat_index, members in enumerate(groups.values()):
            centroid = polar(cx, cy, ring_radius, self._start_angle + 2 * math.pi * cat_index / k)
            if len(members) == 1:
                self._place(members[0], centroid.x, centroid.y)
                continue
            m = len(members)
            for i, node_id in enumerate(members):
                p = polar(
                    centroid.x, centroid.y, self._inner_radius, self._start_angle + 2 * math.pi * i / m
                )
                self._place(node_id, p.x, p.y)


__all__ = ["HierarchicalMeshLayout", "DEFAULT_CATEGORY"]
