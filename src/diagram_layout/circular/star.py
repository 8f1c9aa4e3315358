"""
Star layout algorithm.

One hub node at the canvas center, every other node on a circle around it.
"""

from __future__ import annotations

import math
from typing import Any, Optional, Sequence, Union

from ..base import DEFAULT_SIZE, StaticLayout
from ..geometry import polar
from ..types import (
    EdgeLike,
    EventCallback,
    NodeLike,
    SizeType,
)


class StarLayout(StaticLayout):
    """
    Star layout - hub in the middle, spokes on a circle.

    The spokes keep input order, start at 12 o'clock and are evenly spaced
    on the circle of radius ``min(width, height)/2 - padding``.

    Example:
        layout = StarLayout(
            nodes=["hub", "a", "b", "c"],
            size=(800, 600),
            center="hub",
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
        # Star-specific parameters
        center: Union[int, str] = 0,
        radius: Optional[float] = None,
        start_angle: float = -math.pi / 2,
    ) -> None:
        """
        Initialize Star layout.

        Args:
            nodes: List of nodes
            edges: List of edges (not used for positioning)
            size: Canvas size as (width, height)
            padding: Distance kept from canvas edges (default 50)
            random_seed: Unused, accepted for a uniform constructor
            on_start: Callback for start event
            on_tick: Callback for tick event
            on_end: Callback for end event
            center: Hub node, by input index (int) or id (str). Default 0.
            radius: Spoke circle radius. If None, min(width, height)/2 - padding.
            start_angle: Angle of the first spoke in radians (default -pi/2).
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

        self._center: Union[int, str] = center
        self._radius: Optional[float] = float(radius) if radius is not None else None
        self._start_angle: float = float(start_angle)

    # -------------------------------------------------------------------------
    # Properties
    # -------------------------------------------------------------------------

    @property
    def center(self) -> Union[int, str]:
        """Get hub node (index or id)."""
        return self._center

    @center.setter
    def center(self, value: Union[int, str]) -> None:
        self._center = value

    @property
    def radius(self) -> Optional[float]:
        return self._radius

    @radius.setter
    def radius(self, value: Optional[float]) -> None:
        self._radius = float(value) if value is not None else None

    # -------------------------------------------------------------------------
    # Layout Computation
    # -------------------------------------------------------------------------

    def _center_index(self) -> int:
        """Input index of the hub; unknown ids and out-of-range indices fall back to 0."""
        if isinstance(self._center, str):
            return self.node_ids.get(self._center, 0)
        if 0 <= self._center < len(self._nodes):
            return self._center
        return 0

    def _compute(self, **kwargs: Any) -> None:
        """Compute star layout positions."""
        hub = self._center_index()
        cx, cy = self._canvas_center()
        width, height = self._canvas_size
        if self._radius is not None:
            radius = self._radius
        else:
            radius = max(0.0, min(width, height) / 2 - self._padding)

        self._place(self._nodes[hub].id, cx, cy)

        spokes = [node.id for i, node in enumerate(self._nodes) if i != hub]
        angle_step = 2 * math.pi / len(spokes)
        for k, node_id in enumerate(spokes):
            p = polar(cx, cy, radius, self._start_angle + k * angle_step)
            self._place(node_id, p.x, p.y)


__all__ = ["StarLayout"]
