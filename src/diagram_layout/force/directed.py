"""
Force-directed layout as a one-shot algorithm.
"""

from __future__ import annotations

from typing import Any, Optional, Sequence

from ..base import DEFAULT_SIZE, StaticLayout
from ..geometry import clamp_position
from ..types import EdgeLike, EventCallback, NodeLike, SizeType
from .simulation import ForceSimulation


class ForceDirectedLayout(StaticLayout):
    """
    Settle a ForceSimulation and report where the nodes ended up.

    Connected nodes are pulled toward ``link_distance`` apart while every
    pair repels with ``repulsion_strength``. The simulation runs for at most
    ``iterations`` ticks or until it cools down; final positions are clamped
    into the padded canvas.

    Example:
        layout = ForceDirectedLayout(
            nodes=["a", "b", "c"],
            edges=[("a", "b")],
            random_seed=7,
        )
        layout.run()
    """

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
        # ForceDirectedLayout-specific parameters
        iterations: int = 300,
        repulsion_strength: float = 300.0,
        link_distance: float = 120.0,
        link_strength: float = 0.5,
        center_strength: float = 1.0,
        collision_radius: float = 50.0,
    ) -> None:
        """
        Initialize force-directed layout.

        Args:
            iterations: Maximum number of simulation ticks (minimum 1)
            repulsion_strength: Magnitude of the pairwise repulsion
            link_distance: Rest length of edges without their own ``length``
            link_strength: Spring stiffness of edges
            center_strength: Pull of the node mean toward the canvas center
            collision_radius: Node radius kept clear of other nodes
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
        self.iterations = iterations
        self.repulsion_strength = repulsion_strength
        self.link_distance = link_distance
        self.link_strength = link_strength
        self.center_strength = center_strength
        self.collision_radius = collision_radius

    @property
    def iterations(self) -> int:
        return self._iterations

    @iterations.setter
    def iterations(self, value: int) -> None:
        """Set maximum ticks (minimum 1)."""
        self._iterations = max(1, int(value))

    @property
    def repulsion_strength(self) -> float:
        return self._repulsion_strength

    @repulsion_strength.setter
    def repulsion_strength(self, value: float) -> None:
        """Set repulsion magnitude; the sign is ignored."""
        self._repulsion_strength = abs(float(value))

    def _compute(self, **kwargs: Any) -> None:
        simulation = ForceSimulation(
            nodes=self._nodes,
            edges=self._edges,
            size=self._canvas_size,
            random_seed=self._random_seed,
            iterations=self._iterations,
            charge_strength=-self._repulsion_strength,
            link_distance=self.link_distance,
            link_strength=self.link_strength,
            center_strength=self.center_strength,
            collision_radius=self.collision_radius,
        )
        simulation.run()

        width, height = self._canvas_size
        for node_id, pos in simulation.positions.items():
            inside = clamp_position(pos, width, height, self._padding)
            self._place(node_id, inside.x, inside.y)


__all__ = ["ForceDirectedLayout"]
