"""
Common types for diagram layout algorithms.

This module provides the fundamental types used across all layout algorithms:
- Position: Immutable canvas coordinate
- LayoutNode: Diagram vertex identified by id, with optional sizing and grouping
- Edge: Directed connection between two node ids
- SimulationNode: Snapshot of one force simulation slot
- EventType: Layout lifecycle events
- Event: Event payload for callbacks
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum
from typing import Any, Callable, Dict, Optional, Sequence, Tuple, TypedDict, Union

from .validation import InvalidNodeError


class EventType(IntEnum):
    """
    Layout lifecycle events.

    - start: Layout iterations have begun
    - tick: Fired once per iteration (for animation)
    - end: Layout has converged or stopped
    """

    start = 0
    tick = 1
    end = 2


class Event(TypedDict, total=False):
    """Event payload passed to event listeners."""

    type: EventType
    alpha: float
    positions: Dict[str, "Position"]


@dataclass(frozen=True)
class Position:
    """A point in canvas coordinates (origin top-left, y grows downward)."""

    x: float
    y: float

    def as_tuple(self) -> Tuple[float, float]:
        return (self.x, self.y)

    def __repr__(self) -> str:
        return f"Position(x={self.x:.2f}, y={self.y:.2f})"


PositionMap = Dict[str, Position]
"""Universal layout result: one Position per node id."""


class LayoutNode:
    """
    Diagram node with identity and optional layout hints.

    Attributes:
        id: Unique identifier within one layout call (required)
        width: Node width (for collision sizing)
        height: Node height (for collision sizing)
        level: Tier/depth (>= 0) used by hierarchical and radial layouts
        category: Cluster key used by the hierarchical-mesh layout
        x, y: Optional initial position (used to seed simulations)
    """

    def __init__(self, id: Any = None, **kwargs: Any) -> None:
        if id is None:
            raise InvalidNodeError("LayoutNode id cannot be None")
        self.id: str = str(id)
        self.width: Optional[float] = kwargs.get("width")
        self.height: Optional[float] = kwargs.get("height")

        level = kwargs.get("level", kwargs.get("tier"))
        self.level: Optional[int] = int(level) if level is not None else None

        self.category: Optional[str] = kwargs.get("category", kwargs.get("group"))
        self.x: Optional[float] = kwargs.get("x")
        self.y: Optional[float] = kwargs.get("y")

        # Copy any additional custom properties
        for key, value in kwargs.items():
            if not hasattr(self, key):
                setattr(self, key, value)

    @property
    def tier(self) -> Optional[int]:
        """Alias for level."""
        return self.level

    def __repr__(self) -> str:
        return f"LayoutNode(id={self.id!r}, level={self.level}, category={self.category!r})"


class Edge:
    """
    Directed connection between two nodes.

    Attributes:
        source: Source node id
        target: Target node id
        type: Connection kind (e.g. 'uses', 'depends'), not used for layout
        length: Ideal edge length (optional)
        weight: Edge weight/strength (optional)
    """

    def __init__(
        self,
        source: Any,
        target: Any,
        type: Optional[str] = None,
        length: Optional[float] = None,
        weight: Optional[float] = None,
        **kwargs: Any,
    ) -> None:
        """
        Initialize edge between two nodes.

        Args:
            source: Source node id or LayoutNode (required)
            target: Target node id or LayoutNode (required)
            type: Connection kind
            length: Ideal edge length (optional)
            weight: Edge weight/strength (optional)

        Raises:
            ValueError: If source or target is None
        """
        if source is None:
            raise ValueError("Edge source cannot be None")
        if target is None:
            raise ValueError("Edge target cannot be None")

        self.source: str = _endpoint_id(source)
        self.target: str = _endpoint_id(target)
        self.type = type
        self.length = length
        self.weight = weight

        for key, value in kwargs.items():
            if not hasattr(self, key):
                setattr(self, key, value)

    def __repr__(self) -> str:
        return f"Edge({self.source} -> {self.target})"


@dataclass(frozen=True)
class SimulationNode:
    """
    Snapshot of one force simulation slot.

    fx/fy are None unless the node is pinned (dragged or explicitly fixed).
    """

    id: str
    x: float
    y: float
    vx: float = 0.0
    vy: float = 0.0
    fx: Optional[float] = None
    fy: Optional[float] = None

    @property
    def pinned(self) -> bool:
        return self.fx is not None and self.fy is not None


def _endpoint_id(endpoint: Any) -> str:
    """Get a node id from an edge endpoint (id, LayoutNode or dict)."""
    if isinstance(endpoint, LayoutNode):
        return endpoint.id
    if isinstance(endpoint, dict):
        return str(endpoint["id"])
    if hasattr(endpoint, "id") and not isinstance(endpoint, (str, int)):
        return str(endpoint.id)
    return str(endpoint)


# Type aliases for callbacks
EventCallback = Callable[[Optional[Event]], None]
EasingFunction = Callable[[float], float]

# Type aliases for Pythonic API
# These allow flexible input types while maintaining type safety
NodeLike = Union[LayoutNode, Dict[str, Any], str, Any]
"""Input type for nodes: LayoutNode objects, dicts, bare ids, or objects with an id."""

EdgeLike = Union[Edge, Dict[str, Any], Tuple[Any, Any], Any]
"""Input type for edges: Edge objects, dicts, (source, target) tuples, or objects."""

SizeType = Union[Tuple[float, float], Sequence[float]]
"""Canvas size: (width, height) tuple, list, or sequence."""

NodeSize = Union[Tuple[float, float], Dict[str, float], Any]
"""Per-node size for collision handling: (w, h), {'width', 'height'} or object."""


__all__ = [
    "EventType",
    "Event",
    "Position",
    "PositionMap",
    "LayoutNode",
    "Edge",
    "SimulationNode",
    "EventCallback",
    "EasingFunction",
    # Pythonic API type aliases
    "NodeLike",
    "EdgeLike",
    "SizeType",
    "NodeSize",
]
