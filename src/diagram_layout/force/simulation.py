"""
Interactive force simulation.

ForceSimulation positions nodes by integrating centering, charge, link and
collision forces, tick by tick, while an energy value (alpha) cools toward
zero. Node state lives in numpy arrays indexed by slot; every tick publishes
a fresh position map so callers never hold references into the arena.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Mapping, Optional, Sequence

import numpy as np

if TYPE_CHECKING:
    from typing_extensions import Self

from ..animation.scheduler import FrameDriven, FrameScheduler
from ..base import DEFAULT_SIZE, IterativeLayout
from ..types import (
    EdgeLike,
    EventCallback,
    EventType,
    NodeLike,
    Position,
    SimulationNode,
    SizeType,
)
from ..validation import InvalidNodeError
from .forces import apply_center, apply_charge, apply_collide, apply_link, link_bias

#: Alpha target held while a node is being dragged
DRAG_ALPHA_TARGET = 0.3

#: Alpha used by reheat() when none is given
REHEAT_ALPHA = 0.5


@dataclass(frozen=True)
class DragState:
    """Current drag interaction, if any."""

    is_dragging: bool = False
    node_id: Optional[str] = None
    start_position: Optional[Position] = None


class ForceSimulation(IterativeLayout, FrameDriven):
    """
    Force-directed simulation with a drag interaction protocol.

    Each tick:
        1. alpha += (alpha_target - alpha) * alpha_decay
        2. Forces add to velocities (center moves positions directly)
        3. Velocities shrink by velocity_decay, positions advance
        4. Pinned nodes are held at their pin

    The simulation is settled once alpha falls below alpha_min; an end
    event fires and is_running turns False. While a node is dragged the
    alpha target is raised so the graph keeps reacting.

    Example:
        sim = ForceSimulation(
            nodes=["a", "b", "c"],
            edges=[("a", "b"), ("b", "c")],
            random_seed=1,
        )
        sim.start()
        while not sim.tick():
            pass
        sim.positions["a"]
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
        # IterativeLayout parameters
        alpha: float = 1.0,
        alpha_min: float = 0.001,
        alpha_decay: float = 0.0228,
        alpha_target: float = 0.0,
        iterations: int = 300,
        # ForceSimulation-specific parameters
        center_strength: float = 1.0,
        charge_strength: float = -300.0,
        link_strength: float = 0.5,
        link_distance: float = 120.0,
        collision_radius: float = 50.0,
        velocity_decay: float = 0.4,
        fix_on_drag_end: bool = True,
        initial_positions: Optional[Mapping[str, Any]] = None,
        jitter: float = 50.0,
        scheduler: Optional[FrameScheduler] = None,
    ) -> None:
        """
        Initialize the simulation.

        Args:
            center_strength: Fraction of the offset between the nodes' mean
                and the canvas center removed per tick (0 to 1)
            charge_strength: Pairwise charge; negative repels
            link_strength: Spring stiffness of every edge
            link_distance: Rest length of edges without their own ``length``
            collision_radius: Node radius; centers are kept 2x apart
            velocity_decay: Friction applied to velocities per tick (0 to 1)
            fix_on_drag_end: Keep a dragged node pinned where it was dropped
            initial_positions: Seed positions by node id (Position or (x, y))
            jitter: Nodes without a seed start up to this far from the center
            scheduler: FrameScheduler to tick once per frame while running
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
            alpha=alpha,
            alpha_min=alpha_min,
            alpha_decay=alpha_decay,
            alpha_target=alpha_target,
            iterations=iterations,
        )
        self._initial_alpha = self._alpha
        self.center_strength = center_strength
        self.charge_strength = charge_strength
        self.link_strength = link_strength
        self.link_distance = link_distance
        self.collision_radius = collision_radius
        self.velocity_decay = velocity_decay
        self.fix_on_drag_end = fix_on_drag_end
        self.jitter = jitter
        self._initial_positions: dict[str, Position] = {}
        if initial_positions is not None:
            self.initial_positions = initial_positions

        self._scheduler = scheduler
        self._frame_handle = None
        self._generator = np.random.default_rng(random_seed)
        self._drag_state = DragState()

        # Arena
        self._ids: list[str] = []
        self._index: dict[str, int] = {}
        self._synced_nodes: Optional[list] = None
        self._synced_edges: Optional[list] = None
        self._x = np.zeros(0, dtype=np.float64)
        self._y = np.zeros(0, dtype=np.float64)
        self._vx = np.zeros(0, dtype=np.float64)
        self._vy = np.zeros(0, dtype=np.float64)
        self._fx = np.zeros(0, dtype=np.float64)
        self._fy = np.zeros(0, dtype=np.float64)
        self._sources = np.zeros(0, dtype=np.intp)
        self._targets = np.zeros(0, dtype=np.intp)
        self._distances = np.zeros(0, dtype=np.float64)
        self._bias = np.zeros(0, dtype=np.float64)

    # -------------------------------------------------------------------------
    # Properties
    # -------------------------------------------------------------------------

    @property
    def center_strength(self) -> float:
        return self._center_strength

    @center_strength.setter
    def center_strength(self, value: float) -> None:
        """Set center strength, clamped to [0, 1]."""
        self._center_strength = max(0.0, min(1.0, float(value)))

    @property
    def charge_strength(self) -> float:
        return self._charge_strength

    @charge_strength.setter
    def charge_strength(self, value: float) -> None:
        self._charge_strength = float(value)

    @property
    def link_strength(self) -> float:
        return self._link_strength

    @link_strength.setter
    def link_strength(self, value: float) -> None:
        """Set link strength (minimum 0)."""
        self._link_strength = max(0.0, float(value))

    @property
    def link_distance(self) -> float:
        return self._link_distance

    @link_distance.setter
    def link_distance(self, value: float) -> None:
        """Set default edge rest length (minimum 0)."""
        self._link_distance = max(0.0, float(value))

    @property
    def collision_radius(self) -> float:
        return self._collision_radius

    @collision_radius.setter
    def collision_radius(self, value: float) -> None:
        """Set collision radius (0 disables the collision force)."""
        self._collision_radius = max(0.0, float(value))

    @property
    def velocity_decay(self) -> float:
        return self._velocity_decay

    @velocity_decay.setter
    def velocity_decay(self, value: float) -> None:
        """Set velocity decay, clamped to [0, 1]."""
        self._velocity_decay = max(0.0, min(1.0, float(value)))

    @property
    def jitter(self) -> float:
        return self._jitter

    @jitter.setter
    def jitter(self, value: float) -> None:
        self._jitter = max(0.0, float(value))

    @property
    def initial_positions(self) -> dict[str, Position]:
        return dict(self._initial_positions)

    @initial_positions.setter
    def initial_positions(self, value: Mapping[str, Any]) -> None:
        """Set seed positions from Position objects or (x, y) pairs."""
        seeds: dict[str, Position] = {}
        for node_id, pos in value.items():
            if isinstance(pos, Position):
                seeds[str(node_id)] = pos
            else:
                seeds[str(node_id)] = Position(float(pos[0]), float(pos[1]))
        self._initial_positions = seeds

    @property
    def drag_state(self) -> DragState:
        return self._drag_state

    @property
    def simulation_nodes(self) -> list[SimulationNode]:
        """Snapshot of every slot in arena order."""
        return [self._snapshot(i) for i in range(len(self._ids))]

    # -------------------------------------------------------------------------
    # Lifecycle Methods
    # -------------------------------------------------------------------------

    def start(self) -> Self:
        """
        Seed the arena and start ticking with full energy.

        Nodes that were already in the arena keep their position; new nodes
        are seeded from ``initial_positions``, their own x/y, or the canvas
        center plus jitter.
        """
        self._sync_arena()
        self._alpha = self._initial_alpha
        self._running = True
        self._publish()
        self.trigger({"type": EventType.start, "alpha": self._alpha})
        self._schedule_frame()
        return self

    def run(self, **kwargs: Any) -> Self:
        """Start and tick synchronously until settled or ``iterations`` ticks ran."""
        self.start()
        self.kick()
        return self

    def restart(self) -> Self:
        """Resume ticking at the current alpha, picking up node/edge changes."""
        self._sync_arena()
        self._running = True
        self._publish()
        self._schedule_frame()
        return self

    def reheat(self, alpha: float = REHEAT_ALPHA) -> Self:
        """Raise alpha and restart."""
        self.alpha = alpha
        return self.restart()

    def stop(self) -> Self:
        """Stop ticking and cancel the pending frame; positions are kept."""
        self._running = False
        self._cancel_frame()
        return self

    def tick(self) -> bool:
        """
        Advance the simulation by one step.

        Returns:
            True once settled or stopped, False while more ticks are needed.
        """
        if not self._running:
            return True
        if self._arena_stale():
            self._sync_arena()

        self._alpha += (self._alpha_target - self._alpha) * self._alpha_decay
        self._apply_forces()
        self._integrate()
        self._publish()
        self.trigger({"type": EventType.tick, "alpha": self._alpha, "positions": self.positions})

        if self._alpha < self._alpha_min:
            self._running = False
            self._cancel_frame()
            self.trigger({"type": EventType.end, "alpha": self._alpha, "positions": self.positions})
            return True

        self._schedule_frame()
        return False

    def _frame(self, now: float) -> None:
        self.tick()

    # -------------------------------------------------------------------------
    # Interaction
    # -------------------------------------------------------------------------

    def drag_start(self, node_id: str) -> None:
        """Pin a node where it is and warm the simulation up."""
        i = self._slot(node_id)
        self._fx[i] = self._x[i]
        self._fy[i] = self._y[i]
        self._drag_state = DragState(
            is_dragging=True,
            node_id=self._ids[i],
            start_position=Position(float(self._x[i]), float(self._y[i])),
        )
        self.alpha_target = DRAG_ALPHA_TARGET
        self.restart()

    def drag(self, node_id: str, x: float, y: float) -> None:
        """Move the pin of a dragged node; the node follows on the next tick."""
        i = self._slot(node_id)
        self._fx[i] = float(x)
        self._fy[i] = float(y)

    def drag_end(self, node_id: str) -> None:
        """Let the simulation cool again; the pin stays unless fix_on_drag_end is False."""
        i = self._slot(node_id)
        self.alpha_target = 0.0
        if not self.fix_on_drag_end:
            self._fx[i] = np.nan
            self._fy[i] = np.nan
        self._drag_state = DragState()

    def pin(self, node_id: str, x: Optional[float] = None, y: Optional[float] = None) -> None:
        """Fix a node at (x, y), or where it currently is."""
        i = self._slot(node_id)
        self._fx[i] = self._x[i] if x is None else float(x)
        self._fy[i] = self._y[i] if y is None else float(y)

    def release(self, node_id: str) -> None:
        """Let a pinned node move freely again."""
        i = self._slot(node_id)
        self._fx[i] = np.nan
        self._fy[i] = np.nan

    def release_all(self) -> None:
        self._fx[:] = np.nan
        self._fy[:] = np.nan

    def node(self, node_id: str) -> SimulationNode:
        """Snapshot of one node's position, velocity and pin."""
        return self._snapshot(self._slot(node_id))

    # -------------------------------------------------------------------------
    # Internals
    # -------------------------------------------------------------------------

    def _slot(self, node_id: str) -> int:
        if self._arena_stale():
            self._sync_arena()
        try:
            return self._index[str(node_id)]
        except KeyError:
            raise InvalidNodeError(f"Unknown node id: {node_id!r}") from None

    def _snapshot(self, i: int) -> SimulationNode:
        fx = None if np.isnan(self._fx[i]) else float(self._fx[i])
        fy = None if np.isnan(self._fy[i]) else float(self._fy[i])
        return SimulationNode(
            id=self._ids[i],
            x=float(self._x[i]),
            y=float(self._y[i]),
            vx=float(self._vx[i]),
            vy=float(self._vy[i]),
            fx=fx,
            fy=fy,
        )

    def _sync_arena(self) -> None:
        """Rebuild the arena from the current nodes and edges."""
        ids = [node.id for node in self._nodes]
        if ids != self._ids:
            self._build_arena(ids)
        self._build_links()
        self._synced_nodes = self._nodes
        self._synced_edges = self._edges

    def _arena_stale(self) -> bool:
        """True when nodes or edges were replaced since the arena was built."""
        return self._nodes is not self._synced_nodes or self._edges is not self._synced_edges

    def _build_arena(self, ids: list[str]) -> None:
        n = len(ids)
        old_index = self._index
        cx, cy = self._canvas_center()
        x = np.empty(n, dtype=np.float64)
        y = np.empty(n, dtype=np.float64)
        vx = np.zeros(n, dtype=np.float64)
        vy = np.zeros(n, dtype=np.float64)
        fx = np.full(n, np.nan, dtype=np.float64)
        fy = np.full(n, np.nan, dtype=np.float64)

        for i, node in enumerate(self._nodes):
            j = old_index.get(node.id)
            if j is not None:
                # Existing node: carry its state over
                x[i], y[i] = self._x[j], self._y[j]
                vx[i], vy[i] = self._vx[j], self._vy[j]
                fx[i], fy[i] = self._fx[j], self._fy[j]
            elif node.id in self._initial_positions:
                seed = self._initial_positions[node.id]
                x[i], y[i] = seed.x, seed.y
            elif node.x is not None and node.y is not None:
                x[i], y[i] = float(node.x), float(node.y)
            else:
                x[i] = cx + (self._generator.random() - 0.5) * 2 * self._jitter
                y[i] = cy + (self._generator.random() - 0.5) * 2 * self._jitter

        self._ids = ids
        self._index = {node_id: i for i, node_id in enumerate(ids)}
        self._x, self._y = x, y
        self._vx, self._vy = vx, vy
        self._fx, self._fy = fx, fy

    def _build_links(self) -> None:
        sources: list[int] = []
        targets: list[int] = []
        distances: list[float] = []
        for edge in self._edges:
            s = self._index.get(edge.source)
            t = self._index.get(edge.target)
            if s is None or t is None or s == t:
                continue
            sources.append(s)
            targets.append(t)
            distances.append(
                float(edge.length) if edge.length is not None else self._link_distance
            )
        self._sources = np.asarray(sources, dtype=np.intp)
        self._targets = np.asarray(targets, dtype=np.intp)
        self._distances = np.asarray(distances, dtype=np.float64)
        self._bias = link_bias(self._sources, self._targets, len(self._ids))

    def _apply_forces(self) -> None:
        cx, cy = self._canvas_center()
        apply_center(self._x, self._y, cx, cy, self._center_strength)
        apply_charge(
            self._x, self._y, self._vx, self._vy,
            self._charge_strength, self._alpha, self._generator,
        )
        apply_link(
            self._x, self._y, self._vx, self._vy,
            self._sources, self._targets, self._bias, self._distances,
            self._link_strength, self._alpha, self._generator,
        )
        apply_collide(
            self._x, self._y, self._vx, self._vy,
            self._collision_radius, self._generator,
        )

    def _integrate(self) -> None:
        friction = 1.0 - self._velocity_decay
        self._vx *= friction
        self._vy *= friction
        self._x += self._vx
        self._y += self._vy

        pinned_x = ~np.isnan(self._fx)
        self._x[pinned_x] = self._fx[pinned_x]
        self._vx[pinned_x] = 0.0
        pinned_y = ~np.isnan(self._fy)
        self._y[pinned_y] = self._fy[pinned_y]
        self._vy[pinned_y] = 0.0

    def _publish(self) -> None:
        self._positions = {
            node_id: Position(float(self._x[i]), float(self._y[i]))
            for i, node_id in enumerate(self._ids)
        }


__all__ = ["ForceSimulation", "DragState", "DRAG_ALPHA_TARGET", "REHEAT_ALPHA"]
