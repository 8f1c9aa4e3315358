"""
Grid layout algorithm.

Places nodes row-major into the cells of a regular grid.
"""

from __future__ import annotations

import math
from typing import Any, Optional, Sequence

from ..base import DEFAULT_SIZE, SortKey, StaticLayout
from ..types import (
    EdgeLike,
    EventCallback,
    NodeLike,
    SizeType,
)


class GridLayout(StaticLayout):
    """
    Grid layout - positions nodes at the centers of grid cells.

    The padded canvas is divided into ``columns`` columns and
    ``ceil(n / columns)`` rows; ``gap`` is left free between neighbouring
    cells. Nodes fill the grid row by row in input order (or ``sort_by``).

    Example:
        layout = GridLayout(
            nodes=["a", "b", "c", "d", "e"],
            size=(800, 600),
            columns=3,
            gap=20,
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
        # Grid-specific parameters
        columns: Optional[int] = None,
        gap: float = 0.0,
        sort_by: Optional[SortKey] = None,
    ) -> None:
        """
        Initialize Grid layout.

        Args:
            nodes: List of nodes
            edges: List of edges (used only by ``sort_by='degree'``)
            size: Canvas size as (width, height)
            padding: Distance kept from canvas edges (default 50)
            random_seed: Unused, accepted for a uniform constructor
            on_start: Callback for start event
            on_tick: Callback for tick event
            on_end: Callback for end event
            columns: Number of columns. If None, uses ceil(sqrt(n)).
            gap: Free space between neighbouring cells
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

        self._columns: Optional[int] = None
        self.columns = columns
        self._gap: float = max(0.0, float(gap))
        self._sort_by = sort_by

    # -------------------------------------------------------------------------
    # Properties
    # -------------------------------------------------------------------------

    @property
    def columns(self) -> Optional[int]:
        """Get number of columns (None = automatic)."""
        return self._columns

    @columns.setter
    def columns(self, value: Optional[int]) -> None:
        """Set number of columns (minimum 1, None = automatic)."""
        self._columns = max(1, int(value)) if value is not None else None

    @property
    def gap(self) -> float:
        """Get space between cells."""
        return self._gap

    @gap.setter
    def gap(self, value: float) -> None:
        self._gap = max(0.0, float(value))

    @property
    def sort_by(self) -> Optional[SortKey]:
        """Get sort key for node ordering."""
        return self._sort_by

    @sort_by.setter
    def sort_by(self, value: Optional[SortKey]) -> None:
        self._sort_by = value

    # -------------------------------------------------------------------------
    # Layout Computation
    # -------------------------------------------------------------------------

    def _compute(self, **kwargs: Any) -> None:
        """Compute grid layout positions."""
        n = len(self._nodes)
        cols = self._columns if self._columns is not None else math.ceil(math.sqrt(n))
        rows = math.ceil(n / cols)

        width, height = self._canvas_size
        cell_w, pitch_x = self._cell(width, cols)
        cell_h, pitch_y = self._cell(height, rows)

        for i, node_id in enumerate(self._sorted_ids(self._sort_by)):
            row, col = divmod(i, cols)
            self._place(
                node_id,
                self._padding + col * pitch_x + cell_w / 2,
                self._padding + row * pitch_y + cell_h / 2,
            )

    def _cell(self, extent: float, count: int) -> tuple[float, float]:
        """Cell size and pitch along one axis."""
        available = extent - 2 * self._padding
        cell = max(0.0, (available - self._gap * (count - 1)) / count)
        return cell, cell + self._gap


__all__ = ["GridLayout"]
