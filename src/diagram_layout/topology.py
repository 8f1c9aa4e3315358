"""
Layout orchestration.

Maps a topology name onto one layout algorithm, runs it and optionally
resolves node overlaps afterwards. Also blends between two position maps
so a diagram can crossfade when its topology changes.
"""

from __future__ import annotations

import inspect
from enum import Enum
from typing import Any, Callable, Mapping, Optional, Sequence, Union

from .animation.animated_value import AnimatedValue
from .animation.scheduler import FrameScheduler
from .base import DEFAULT_SIZE, BaseLayout
from .basic import GridLayout, RandomLayout
from .circular import HierarchicalMeshLayout, MeshLayout, StarLayout
from .collision import resolve_collisions
from .easing import EasingLike, get_easing
from .force import ForceDirectedLayout
from .hierarchical import HierarchicalLayout, RadialLayout
from .types import EdgeLike, NodeLike, Position, SizeType
from .validation import InvalidTopologyError

DEFAULT_TRANSITION_EASING = "easeInOutCubic"


class Topology(str, Enum):
    """Closed set of diagram arrangements."""

    hierarchical = "hierarchical"
    mesh = "mesh"
    hierarchical_mesh = "hierarchical-mesh"
    adaptive = "adaptive"
    ring = "ring"
    radial = "radial"
    star = "star"
    grid = "grid"
    random = "random"

    @classmethod
    def parse(cls, value: Union[Topology, str]) -> Topology:
        """
        Get a Topology from a member or its name.

        Both ``"hierarchical-mesh"`` and ``"hierarchical_mesh"`` are accepted.

        Raises:
            InvalidTopologyError: If the name is unknown.
        """
        if isinstance(value, Topology):
            return value
        name = str(value).strip().lower()
        try:
            return cls(name.replace("_", "-"))
        except ValueError:
            valid = ", ".join(t.value for t in cls)
            raise InvalidTopologyError(
                f"Unknown topology {value!r}; expected one of: {valid}"
            ) from None


LAYOUTS: dict[Topology, type[BaseLayout]] = {
    Topology.hierarchical: HierarchicalLayout,
    Topology.mesh: MeshLayout,
    Topology.hierarchical_mesh: HierarchicalMeshLayout,
    Topology.adaptive: ForceDirectedLayout,
    Topology.ring: RadialLayout,
    Topology.radial: RadialLayout,
    Topology.star: StarLayout,
    Topology.grid: GridLayout,
    Topology.random: RandomLayout,
}
"""Layout class used for each topology."""


def layout_class(topology: Union[Topology, str]) -> type[BaseLayout]:
    """Layout class for a topology name or member."""
    return LAYOUTS[Topology.parse(topology)]


def _accepted_options(cls: type[BaseLayout], options: Mapping[str, Any]) -> dict[str, Any]:
    """Keep only the options the layout's constructor takes."""
    params = inspect.signature(cls.__init__).parameters
    return {key: value for key, value in options.items() if key in params}


def get_layout(
    topology: Union[Topology, str],
    nodes: Sequence[NodeLike],
    edges: Optional[Sequence[EdgeLike]] = None,
    *,
    size: SizeType = DEFAULT_SIZE,
    avoid_overlap: bool = False,
    overlap_padding: float = 10.0,
    **options: Any,
) -> dict[str, Position]:
    """
    Compute a position map for the given topology.

    Options the selected algorithm does not take are ignored, so one option
    set can be reused across topology switches.

    Args:
        topology: Topology member or name
        nodes: Nodes to place
        edges: Edges between them
        size: Canvas size as (width, height)
        avoid_overlap: Run a collision pass sized from node width/height
        overlap_padding: Minimum gap between node boxes for that pass
        **options: Layout options (padding, level_spacing, radius, ...)

    Returns:
        Fresh dict with one Position per node.

    Raises:
        InvalidTopologyError: If the topology is unknown.

    Example:
        >>> positions = get_layout("mesh", ["a", "b", "c"], size=(400, 400))
    """
    cls = layout_class(topology)
    layout = cls(
        nodes=nodes,
        edges=edges if edges is not None else [],
        size=size,
        **_accepted_options(cls, options),
    )
    positions = layout.run().positions

    if avoid_overlap and len(positions) > 1:
        sizes = {
            node.id: {"width": node.width, "height": node.height} for node in layout.nodes
        }
        positions = resolve_collisions(
            positions,
            sizes,
            padding=overlap_padding,
            bounds=layout.size,
        )
    return positions


def interpolate_layouts(
    from_positions: Mapping[str, Position],
    to_positions: Mapping[str, Position],
    progress: float,
    easing: EasingLike = DEFAULT_TRANSITION_EASING,
) -> dict[str, Position]:
    """
    Blend two position maps.

    Every node of ``to_positions`` moves from its ``from_positions`` entry
    toward its target; nodes new in ``to_positions`` sit at their target and
    nodes missing from it are dropped. ``progress`` is clamped to [0, 1]
    before easing.
    """
    t = get_easing(easing)(max(0.0, min(1.0, float(progress))))
    result: dict[str, Position] = {}
    for node_id, target in to_positions.items():
        start = from_positions.get(node_id, target)
        result[node_id] = Position(
            start.x + (target.x - start.x) * t,
            start.y + (target.y - start.y) * t,
        )
    return result


class LayoutTransition:
    """
    Frame-driven crossfade between two layouts.

    Wraps an AnimatedValue running from 0 to 1; each frame blends the two
    maps with interpolate_layouts().

    Example:
        transition = LayoutTransition(old, new, duration=600)
        transition.tick(0)
        halfway = transition.tick(300)
    """

    def __init__(
        self,
        from_positions: Mapping[str, Position],
        to_positions: Mapping[str, Position],
        duration: float = 600.0,
        *,
        easing: EasingLike = DEFAULT_TRANSITION_EASING,
        scheduler: Optional[FrameScheduler] = None,
        on_update: Optional[Callable[[dict[str, Position]], None]] = None,
        on_complete: Optional[Callable[[dict[str, Position]], None]] = None,
    ) -> None:
        self._from = dict(from_positions)
        self._to = dict(to_positions)
        self._easing = get_easing(easing)
        self.on_update = on_update
        self.on_complete = on_complete
        self._positions = interpolate_layouts(self._from, self._to, 0.0, self._easing)
        self._progress = AnimatedValue(
            0.0,
            1.0,
            duration,
            easing="linear",
            scheduler=scheduler,
            on_update=self._blend,
            on_complete=self._completed,
        )

    @property
    def positions(self) -> dict[str, Position]:
        return dict(self._positions)

    @property
    def progress(self) -> float:
        return self._progress.progress

    @property
    def is_animating(self) -> bool:
        return self._progress.is_animating

    @property
    def is_complete(self) -> bool:
        return self._progress.is_complete

    def tick(self, now: float) -> dict[str, Position]:
        """Advance to time ``now`` (ms) and return the blended map."""
        self._progress.tick(now)
        return self.positions

    def dispose(self) -> None:
        self._progress.dispose()

    def _blend(self, t: float) -> None:
        self._positions = interpolate_layouts(self._from, self._to, t, self._easing)
        if self.on_update is not None:
            self.on_update(self.positions)

    def _completed(self, _: float) -> None:
        if self.on_complete is not None:
            self.on_complete(self.positions)


__all__ = [
    "Topology",
    "LAYOUTS",
    "layout_class",
    "get_layout",
    "interpolate_layouts",
    "LayoutTransition",
    "DEFAULT_TRANSITION_EASING",
]
