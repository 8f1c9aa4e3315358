"""
Random layout algorithm.

Places nodes at random positions within the padded canvas.
Useful as a seed for the force simulation and as a baseline for
comparing layout quality metrics.
"""

from __future__ import annotations

from typing import Any, Optional, Sequence

from ..base import DEFAULT_SIZE, StaticLayout
from ..types import (
    EdgeLike,
    EventCallback,
    NodeLike,
    SizeType,
)


class RandomLayout(StaticLayout):
    """
    Random layout - positions nodes uniformly within the padded canvas.

    Use cases:
        - Seed positions for the force simulation
        - Baseline for comparing layout quality metrics
        - Quick visualization when structure doesn't matter

    Example:
        layout = RandomLayout(
            nodes=["a", "b", "c"],
            size=(800, 600),
            padding=50,
            random_seed=42,
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
    ) -> None:
        """
        Initialize Random layout.

        Args:
            nodes: List of nodes
            edges: List of edges (not used for positioning)
            size: Canvas size as (width, height)
            padding: Distance kept from canvas edges (default 50). Nodes are
                placed within [padding, width-padding] x [padding, height-padding].
            random_seed: Random seed for reproducible layouts
            on_start: Callback for start event
            on_tick: Callback for tick event
            on_end: Callback for end event
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

    # -------------------------------------------------------------------------
    # Layout Computation
    # -------------------------------------------------------------------------

    def _compute(self, **kwargs: Any) -> None:
        """Compute random layout positions."""
        rng = self._rng()

        # Calculate placement bounds with padding
        width, height = self._canvas_size
        min_x, max_x = self._padding, width - self._padding
        min_y, max_y = self._padding, height - self._padding

        # Handle case where padding is too large for canvas
        if max_x <= min_x:
            min_x, max_x = 0.0, width
        if max_y <= min_y:
            min_y, max_y = 0.0, height

        for node in self._nodes:
            self._place(node.id, rng.uniform(min_x, max_x), rng.uniform(min_y, max_y))


__all__ = ["RandomLayout"]
