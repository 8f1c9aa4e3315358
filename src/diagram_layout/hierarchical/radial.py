"""
Radial (ring) layout algorithm.

Places the root at the canvas center and every deeper tier on a concentric
ring. Children stay in an angular sector around their parent.
"""

from __future__ import annotations

import math
from collections import deque
from typing import Any, Optional, Sequence

from ..base import DEFAULT_SIZE, StaticLayout
from ..geometry import polar
from ..types import (
    EdgeLike,
    EventCallback,
    NodeLike,
    SizeType,
)


class RadialLayout(StaticLayout):
    """
    Radial layout - tiers on concentric rings.

    The first node of the lowest tier sits at the exact canvas center. A
    node of tier ``k`` sits on the ring of radius ``k * ring_spacing``
    (capped at the padded canvas radius). Angles are allocated top-down:
    each node owns an angular slot, its children share that slot narrowed
    to at most ``angular_spread`` radians and centered on the parent's
    angle, and siblings split it into equal sub-slots in input order.

    A node's parent is the source of its first incoming edge from a lower
    tier. Nodes without such a parent (extra roots, orphans) are treated as
    children of the center node; extra roots go on the first ring.

    Example:
        layout = RadialLayout(
            nodes=["hub", "a", "b", "a1"],
            edges=[("hub", "a"), ("hub", "b"), ("a", "a1")],
            size=(800, 600),
            ring_spacing=100,
        )
        layout.run()
    """

    default_padding = 50.0

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
        # Radial-specific parameters
        ring_spacing: float = 80.0,
        angular_spread: float = 1.5 * math.pi,
        start_angle: float = -math.pi / 2,
    ) -> None:
        """
        Initialize Radial layout.

        Args:
            nodes: List of nodes (``level``/``tier`` selects the ring)
            edges: List of edges (parent -> child)
            size: Canvas size as (width, height)
            padding: Distance kept from canvas edges (default 50)
            random_seed: Unused, accepted for a uniform constructor
            on_start: Callback for start event
            on_tick: Callback for tick event
            on_end: Callback for end event
            ring_spacing: Radius increment per tier
            angular_spread: Widest sector (radians) a node's children may use
            start_angle: Direction of the center node's sector (default -pi/2, up)
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

        self._ring_spacing: float = max(0.0, float(ring_spacing))
        self._angular_spread: float = max(0.0, min(2 * math.pi, float(angular_spread)))
        self._start_angle: float = float(start_angle)

    # -------------------------------------------------------------------------
    # Properties
    # -------------------------------------------------------------------------

    @property
    def ring_spacing(self) -> float:
        """Get radius increment per tier."""
        return self._ring_spacing

    @ring_spacing.setter
    def ring_spacing(self, value: float) -> None:
        self._ring_spacing = max(0.0, float(value))

    @property
    def angular_spread(self) -> float:
        """Get the widest sector available to one node's children."""
        return self._angular_spread

    @angular_spread.setter
    def angular_spread(self, value: float) -> None:
        """Set angular spread, clamped to [0, 2*pi]."""
        self._angular_spread = max(0.0, min(2 * math.pi, float(value)))

    @property
    def start_angle(self) -> float:
        return self._start_angle

    @start_angle.setter
    def start_angle(self, value: float) -> None:
        self._start_angle = float(value)

    # -------------------------------------------------------------------------
    # Tree Construction
    # -------------------------------------------------------------------------

    def _build_tree(self, levels: dict[str, int]) -> tuple[str, dict[str, list[str]]]:
        """Pick the center node and build parent -> children lists."""
        ids = [node.id for node in self._nodes]
        root_tier = min(levels.values())
        center = next(node_id for node_id in ids if levels[node_id] == root_tier)

        parent: dict[str, str] = {}
        for src, tgt in self._edge_pairs():
            if tgt not in parent and tgt != center and levels[src] < levels[tgt]:
                parent[tgt] = src

        children: dict[str, list[str]] = {node_id: [] for node_id in ids}
        for node_id in ids:
            if node_id == center:
                continue
            children[parent.get(node_id, center)].append(node_id)
        return center, children

    # -------------------------------------------------------------------------
    # Layout Computation
    # -------------------------------------------------------------------------

    def _compute(self, **kwargs: Any) -> None:
        """Compute radial layout positions."""
        levels = self._assign_levels()
        center, children = self._build_tree(levels)
        root_tier = levels[center]

        width, height = self._canvas_size
        cx, cy = self._canvas_center()
        max_radius = max(0.0, min(width - 2 * self._padding, height - 2 * self._padding) / 2)

        self._place(center, cx, cy)

        # (node, angle, slot width) - the center owns the full circle
        queue: deque[tuple[str, float, float]] = deque([(center, self._start_angle, 2 * math.pi)])
        while queue:
            node_id, angle, slot = queue.popleft()
            kids = children[node_id]
            if not kids:
                continue
            span = min(self._angular_spread, slot)
            sub = span / len(kids)
            first = angle - span / 2
            for i, kid in enumerate(kids):
                kid_angle = first + (i + 0.5) * sub
                ring = max(1, levels[kid] - root_tier)
                radius = min(ring * self._ring_spacing, max_radius)
                p = polar(cx, cy, radius, kid_angle)
                self._place(kid, p.x, p.y)
                queue.append((kid, kid_angle, sub))


__all__ = ["RadialLayout"]
