"""
Base classes for diagram layout algorithms.

This module provides abstract base classes that define the common interface
and shared functionality for all layout algorithms:

- BaseLayout: Abstract base with event system, node/edge management
- IterativeLayout: For animated layouts with tick loop (force simulation)
- StaticLayout: For single-pass layouts (hierarchical, circular, grid, etc.)
"""

from __future__ import annotations

import random
from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Any, Callable, Optional, Sequence, Union

if TYPE_CHECKING:
    from typing_extensions import Self

from .preprocessing import assign_levels, find_roots
from .types import (
    Edge,
    EdgeLike,
    Event,
    EventCallback,
    EventType,
    LayoutNode,
    NodeLike,
    Position,
    SizeType,
)
from .validation import (
    validate_canvas_size,
    validate_edge_ids,
    validate_node_ids,
)

DEFAULT_SIZE = (800.0, 600.0)

SortKey = Union[str, Callable[[LayoutNode], Any]]


class BaseLayout(ABC):
    """
    Abstract base class for all layout algorithms.

    Provides shared infrastructure:
    - Event system (start/tick/end events)
    - Node/edge management via properties
    - Canvas size and padding management
    - Level and parent/child inference from edges

    Example:
        layout = SomeLayout(
            nodes=[{"id": "a"}, {"id": "b"}],
            edges=[{"source": "a", "target": "b"}],
            size=(800, 600),
        )
        layout.run()

        for node_id, pos in layout.positions.items():
            print(f"{node_id}: ({pos.x}, {pos.y})")
    """

    #: Margin kept free along the canvas edges when ``padding`` is not given.
    default_padding: float = 50.0

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
        Initialize layout with configuration.

        Args:
            nodes: List of nodes (LayoutNode objects, dicts, ids, or objects with an id)
            edges: List of edges (Edge objects, dicts, or (source, target) tuples)
            size: Canvas size as (width, height)
            padding: Margin from the canvas edges. Defaults to ``default_padding``.
            random_seed: Random seed for reproducible layouts
            on_start: Callback for start event
            on_tick: Callback for tick event (iterative layouts)
            on_end: Callback for end event
        """
        self._nodes: list[LayoutNode] = []
        self._edges: list[Edge] = []
        self._canvas_size: tuple[float, float] = DEFAULT_SIZE
        self._padding: float = self.default_padding
        self._events: dict[EventType, EventCallback] = {}
        self._random_seed: Optional[int] = None
        self._positions: dict[str, Position] = {}

        if nodes is not None:
            self.nodes = nodes
        if edges is not None:
            self.edges = edges
        self.size = size
        if padding is not None:
            self.padding = padding
        if random_seed is not None:
            self.random_seed = random_seed

        if on_start:
            self._events[EventType.start] = on_start
        if on_tick:
            self._events[EventType.tick] = on_tick
        if on_end:
            self._events[EventType.end] = on_end

    # -------------------------------------------------------------------------
    # Properties
    # -------------------------------------------------------------------------

    @property
    def nodes(self) -> list[LayoutNode]:
        """Get the list of nodes."""
        return self._nodes

    @nodes.setter
    def nodes(self, value: Sequence[NodeLike]) -> None:
        """
        Set nodes from LayoutNode objects, dicts, bare ids, or objects.

        Raises:
            InvalidNodeError: If two nodes share an id.
        """
        nodes: list[LayoutNode] = []
        for node_data in value:
            if isinstance(node_data, LayoutNode):
                nodes.append(node_data)
            elif isinstance(node_data, dict):
                nodes.append(LayoutNode(**node_data))
            elif isinstance(node_data, (str, int)):
                nodes.append(LayoutNode(node_data))
            else:
                # Generic object - copy public attributes
                attrs = {
                    attr: getattr(node_data, attr)
                    for attr in dir(node_data)
                    if not attr.startswith("_") and not callable(getattr(node_data, attr))
                }
                nodes.append(LayoutNode(**attrs))
        validate_node_ids([node.id for node in nodes], strict=True)
        self._nodes = nodes
        self._positions = {}

    @property
    def edges(self) -> list[Edge]:
        """Get the list of edges."""
        return self._edges

    @edges.setter
    def edges(self, value: Sequence[EdgeLike]) -> None:
        """Set edges from Edge objects, dicts, tuples, or objects."""
        self._edges = []
        for edge_data in value:
            if isinstance(edge_data, Edge):
                self._edges.append(edge_data)
            elif isinstance(edge_data, dict):
                self._edges.append(Edge(**edge_data))
            elif isinstance(edge_data, (tuple, list)):
                self._edges.append(Edge(*edge_data))
            else:
                self._edges.append(
                    Edge(
                        getattr(edge_data, "source", None),
                        getattr(edge_data, "target", None),
                        type=getattr(edge_data, "type", None),
                        length=getattr(edge_data, "length", None),
                        weight=getattr(edge_data, "weight", None),
                    )
                )

    @property
    def size(self) -> tuple[float, float]:
        """Get canvas size as (width, height)."""
        return self._canvas_size

    @size.setter
    def size(self, value: SizeType) -> None:
        """
        Set canvas size.

        Raises:
            InvalidCanvasSizeError: If width or height is not positive.
        """
        self._canvas_size = validate_canvas_size(value)

    @property
    def padding(self) -> float:
        """Get margin kept free along the canvas edges."""
        return self._padding

    @padding.setter
    def padding(self, value: float) -> None:
        """Set padding (negative values clamp to 0)."""
        self._padding = max(0.0, float(value))

    @property
    def random_seed(self) -> Optional[int]:
        """Get random seed for reproducible layouts."""
        return self._random_seed

    @random_seed.setter
    def random_seed(self, value: Optional[int]) -> None:
        """Set random seed for reproducible layouts."""
        self._random_seed = value

    @property
    def positions(self) -> dict[str, Position]:
        """
        Get the computed positions keyed by node id.

        Returns a new dict on every access; mutating it does not affect
        the layout.
        """
        return dict(self._positions)

    # -------------------------------------------------------------------------
    # Event System
    # -------------------------------------------------------------------------

    def on(self, event: EventType | str, callback: EventCallback) -> Self:
        """
        Subscribe to a layout event.

        Args:
            event: Event type (EventType enum or string name)
            callback: Function to call when event fires

        Returns:
            self (for chaining)
        """
        if isinstance(event, str):
            event = EventType[event]
        self._events[event] = callback
        return self

    def trigger(self, event: Event) -> None:
        """Trigger an event, calling the registered callback."""
        event_type = event.get("type")
        if event_type is not None and event_type in self._events:
            self._events[event_type](event)

    # -------------------------------------------------------------------------
    # Validation
    # -------------------------------------------------------------------------

    def validate(self) -> Self:
        """
        Validate current configuration.

        Layouts skip edges that name unknown nodes; call this first for
        fail-fast behavior.

        Returns:
            self (for chaining)

        Raises:
            InvalidEdgeError: If any edge references an unknown node id.
        """
        if self._edges:
            validate_edge_ids(self._edges, self.node_ids, strict=True)
        return self

    # -------------------------------------------------------------------------
    # Lifecycle Methods
    # -------------------------------------------------------------------------

    @abstractmethod
    def run(self, **kwargs: Any) -> Self:
        """
        Run the layout algorithm.

        Returns:
            self (for chaining)
        """
        pass

    def stop(self) -> Self:
        """Stop the layout (for iterative layouts)."""
        return self

    # -------------------------------------------------------------------------
    # Utility Methods
    # -------------------------------------------------------------------------

    @property
    def node_ids(self) -> dict[str, int]:
        """Map of node id to input index."""
        return {node.id: i for i, node in enumerate(self._nodes)}

    def _rng(self) -> random.Random:
        """Random generator honouring random_seed."""
        return random.Random(self._random_seed)

    def _canvas_center(self) -> tuple[float, float]:
        return self._canvas_size[0] / 2, self._canvas_size[1] / 2

    def _place(self, node_id: str, x: float, y: float) -> None:
        self._positions[node_id] = Position(float(x), float(y))

    def _edge_pairs(self) -> list[tuple[str, str]]:
        """(source, target) pairs of edges whose endpoints are both known.

        Edges naming unknown nodes are silently skipped to prevent crashes.
        Use validate() first to ensure all ids are valid.
        """
        known = self.node_ids
        return [
            (edge.source, edge.target)
            for edge in self._edges
            if edge.source in known and edge.target in known
        ]

    def _build_children_map(self) -> dict[str, list[str]]:
        """Build map from parent id to child ids in edge order."""
        children: dict[str, list[str]] = {}
        for src, tgt in self._edge_pairs():
            children.setdefault(src, []).append(tgt)
        return children

    def _build_adjacency(self) -> dict[str, list[str]]:
        """Build undirected adjacency lists keyed by node id."""
        adj: dict[str, list[str]] = {node.id: [] for node in self._nodes}
        for src, tgt in self._edge_pairs():
            adj[src].append(tgt)
            adj[tgt].append(src)
        return adj

    def _sorted_ids(self, sort_by: Optional[SortKey] = None) -> list[str]:
        """
        Node ids in placement order.

        ``sort_by`` may be None (input order), ``'degree'`` (most connected
        first) or a key function receiving the LayoutNode. Sorting is stable.
        """
        nodes = list(self._nodes)
        if sort_by == "degree":
            adj = self._build_adjacency()
            nodes.sort(key=lambda node: -len(adj[node.id]))
        elif callable(sort_by):
            sort_fn = sort_by  # Store in local for proper type narrowing
            nodes.sort(key=lambda node: sort_fn(node))
        return [node.id for node in nodes]

    def _find_roots(self) -> list[str]:
        """Nodes that never appear as an edge target, in input order."""
        return find_roots([node.id for node in self._nodes], self._edge_pairs())

    def _assign_levels(self) -> dict[str, int]:
        """Level of each node: explicit ``level`` or BFS depth from the roots."""
        explicit = {node.id: node.level for node in self._nodes if node.level is not None}
        return assign_levels([node.id for node in self._nodes], self._edge_pairs(), explicit)


class IterativeLayout(BaseLayout):
    """
    Base class for iterative/animated layout algorithms.

    Provides:
    - Alpha (energy) management with a target the alpha relaxes toward
    - Tick-based iteration loop
    - Convergence checking

    Each tick moves alpha toward ``alpha_target`` by ``alpha_decay`` of the
    remaining gap; the layout is settled once alpha falls below ``alpha_min``.
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
        # IterativeLayout-specific parameters
        alpha: float = 1.0,
        alpha_min: float = 0.001,
        alpha_decay: float = 0.0228,
        alpha_target: float = 0.0,
        iterations: int = 300,
    ) -> None:
        """
        Initialize iterative layout.

        Args:
            alpha: Initial alpha/energy (0 to 1)
            alpha_min: Alpha below which the layout counts as settled
            alpha_decay: Fraction of the gap to alpha_target closed per tick (0 to 1)
            alpha_target: Value alpha relaxes toward (raised while dragging)
            iterations: Maximum number of ticks for run()/kick()
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
        self._alpha: float = max(0.0, min(1.0, float(alpha)))
        self._alpha_min: float = float(alpha_min)
        self._alpha_decay: float = max(0.0, min(1.0, float(alpha_decay)))
        self._alpha_target: float = max(0.0, min(1.0, float(alpha_target)))
        self._running: bool = False
        self._iterations: int = max(1, int(iterations))

    # -------------------------------------------------------------------------
    # Properties
    # -------------------------------------------------------------------------

    @property
    def alpha(self) -> float:
        """Get current alpha (energy)."""
        return self._alpha

    @alpha.setter
    def alpha(self, value: float) -> None:
        """Set alpha, clamped to [0, 1]."""
        self._alpha = max(0.0, min(1.0, float(value)))

    @property
    def alpha_min(self) -> float:
        """Get minimum alpha (convergence threshold)."""
        return self._alpha_min

    @alpha_min.setter
    def alpha_min(self, value: float) -> None:
        self._alpha_min = float(value)

    @property
    def alpha_decay(self) -> float:
        """Get alpha decay rate."""
        return self._alpha_decay

    @alpha_decay.setter
    def alpha_decay(self, value: float) -> None:
        """Set alpha decay rate, clamped to [0, 1]."""
        self._alpha_decay = max(0.0, min(1.0, float(value)))

    @property
    def alpha_target(self) -> float:
        """Get the value alpha relaxes toward."""
        return self._alpha_target

    @alpha_target.setter
    def alpha_target(self, value: float) -> None:
        self._alpha_target = max(0.0, min(1.0, float(value)))

    @property
    def iterations(self) -> int:
        """Get maximum iterations."""
        return self._iterations

    @iterations.setter
    def iterations(self, value: int) -> None:
        """Set maximum iterations (minimum 1)."""
        self._iterations = max(1, int(value))

    @property
    def is_running(self) -> bool:
        """True while the layout has energy left and has not been stopped."""
        return self._running

    # -------------------------------------------------------------------------
    # Lifecycle Methods
    # -------------------------------------------------------------------------

    @abstractmethod
    def tick(self) -> bool:
        """
        Perform one iteration of the layout.

        Returns:
            True if converged/done, False if more iterations needed.
        """
        pass

    def kick(self) -> None:
        """Run tick() repeatedly until convergence or max iterations."""
        for _ in range(self._iterations):
            if self.tick():
                break

    def stop(self) -> Self:
        """Stop the layout; positions are kept."""
        self._running = False
        return self


class StaticLayout(BaseLayout):
    """
    Base class for single-pass layout algorithms.

    These layouts compute positions in one pass without iteration.
    An empty node list yields an empty map and a single node is always
    placed at the canvas center, whatever the algorithm.

    Example:
        layout = MeshLayout(
            nodes=["a", "b", "c"],
            size=(800, 600),
        )
        positions = layout.run().positions
    """

    def run(self, **kwargs: Any) -> Self:
        """
        Run the layout algorithm.

        Fires start event, computes layout, fires end event.

        Args:
            **kwargs: Additional arguments passed to _compute()

        Returns:
            self (for chaining)
        """
        self._positions = {}
        self.trigger({"type": EventType.start, "alpha": 1.0})

        if len(self._nodes) == 1:
            cx, cy = self._canvas_center()
            self._place(self._nodes[0].id, cx, cy)
        elif self._nodes:
            # Subclasses implement _compute()
            self._compute(**kwargs)

        self.trigger({"type": EventType.end, "alpha": 0.0, "positions": self.positions})
        return self

    @abstractmethod
    def _compute(self, **kwargs: Any) -> None:
        """
        Compute node positions.

        Subclasses must implement this and call _place() once per node.
        """
        pass


__all__ = [
    "BaseLayout",
    "IterativeLayout",
    "StaticLayout",
    "DEFAULT_SIZE",
    "SortKey",
]
