"""
Mesh (circular) layout algorithm.

Places all nodes evenly distributed on a single circle.
"""

from __future__ import annotations

import math
from typing import Any, Optional, Sequence

from ..base import DEFAULT_SIZE, SortKey, StaticLayout
from ..geometry import polar
from ..types import (
    EdgeLike,
    EventCallback,
    NodeLike,
    SizeType,
)


class MeshLayout(StaticLayout):
    """
    Mesh layout - positions nodes on one circle around the canvas center.

    Node ``i`` of ``n`` sits at angle ``start_angle + 2*pi*i/n``. The default
    start angle of ``-pi/2`` puts the first node at 12 o'clock, continuing
    clockwise on screen. The order can be customized using ``sort_by``.

    Example:
        layout = MeshLayout(
            nodes=["a", "b", "c", "d", "e"],
            size=(800, 600),
        )
        layout.run()
    """

    default_padding = 80.0

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
        # Mesh-specific parameters
        radius: Optional[float] = None,
        start_angle: float = -math.pi / 2,
        sort_by: Optional[SortKey] = None,
    ) -> None:
        """
        Initialize Mesh layout.

        Args:
            nodes: List of nodes
            edges: List of edges (used only by ``sort_by='degree'``)
            size: Canvas size as (width, height)
            padding: Distance kept from canvas edges (default 80)
            random_seed: Unused, accepted for a uniform constructor
            on_start: Callback for start event
            on_tick: Callback for tick event
            on_end: Callback for end event
            radius: Circle radius. If None, min(width, height)/2 - padding.
            start_angle: Angle of the first node in radians (default -pi/2).
            sort_by: None, 'degree', or a key function over LayoutNode
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

        self._radius: Optional[float] = float(radius) if radius is not None else None
        self._start_angle: float = float(start_angle)
        self._sort_by = sort_by

    # -------------------------------------------------------------------------
    # Properties
    # -------------------------------------------------------------------------

    @property
    def radius(self) -> Optional[float]:
        """Get circle radius (None = auto-fit)."""
        return self._radius

    @radius.setter
    def radius(self, value: Optional[float]) -> None:
        """Set circle radius."""
        self._radius = float(value) if value is not None else None

    @property
    def start_angle(self) -> float:
        """Get starting angle in radians."""
        return self._start_angle

    @start_angle.setter
    def start_angle(self, value: float) -> None:
        """Set starting angle in radians."""
        self._start_angle = float(value)

    @property
    def sort_by(self) -> Optional[SortKey]:
        """Get sort key for node ordering."""
        return self._sort_by

    @sort_by.setter
    def sort_by(self, value: Optional[SortKey]) -> None:
        """Set sort key for node ordering."""
        self._sort_by = value

    # -------------------------------------------------------------------------
    # Layout Computation
    # -------------------------------------------------------------------------

    def effective_radius(self) -> float:
        """Radius actually used: the explicit one, or the padded canvas fit."""
        if self._radius is not None:
            return self._radius
        width, height = self._canvas_size
        return max(0.0, min(width, height) / 2 - self._padding)

    def _compute(self, **kwargs: Any) -> None:
        """Compute mesh layout positions."""
        order = self._sorted_ids(self._sort_by)
        n = len(order)

        cx, cy = self._canvas_center()
        radius = self.effective_radius()
        angle_step = 2 * math.pi / n

        for i, node_id in enumerate(order):
            p = polar(cx, cy, radius, self._start_angle + i * angle_step)
            self._place(node_id, p.x, p.y)


__all__ = ["MeshLayout"]
