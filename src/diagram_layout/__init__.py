"""
diagram-layout: Layout and animation engine for interactive node-link diagrams.

This package positions the nodes of a diagram and animates the transitions
between positions and numeric values.

Available components:
- hierarchical: Tiered bands and radial rings driven by node levels
- circular: Mesh circle, star and per-category cluster layouts
- basic: Grid and random layouts
- force: Interactive force simulation with drag support
- collision: Overlap detection and resolution for node boxes
- topology: Topology dispatch, layout interpolation and transitions
- animation: Eased animated values on a frame clock
"""

__version__ = "0.1.0"

# Animation
from .animation import (
    AnimatedValue,
    AnimatedValues,
    AnimationState,
    FrameScheduler,
)

# Base classes for building layouts
from .base import (
    BaseLayout,
    IterativeLayout,
    StaticLayout,
)

# Basic layouts
from .basic import GridLayout, RandomLayout

# Circular layouts
from .circular import (
    HierarchicalMeshLayout,
    MeshLayout,
    StarLayout,
)

# Collision handling
from .collision import (
    Collision,
    CollisionResolutionWarning,
    detect_collisions,
    resolve_collisions,
)

# Easing
from .easing import EASINGS, get_easing

# Force-directed positioning
from .force import DragState, ForceDirectedLayout, ForceSimulation

# Geometry helpers
from .geometry import (
    BoundingBox,
    bounding_box,
    center_point,
    distance,
    fit_transform,
    interpolate_position,
    midpoint,
    scale_node_size,
)

# Hierarchical layouts
from .hierarchical import (
    HierarchicalLayout,
    RadialLayout,
    TreeStructureWarning,
)

# Metrics and optimisation
from .metrics import edge_crossings, total_edge_length
from .optimize import optimize_layout

# Preprocessing utilities
from .preprocessing import (
    assign_levels,
    count_crossings,
    find_roots,
    minimize_crossings_barycenter,
)

# Orchestration
from .topology import (
    LayoutTransition,
    Topology,
    get_layout,
    interpolate_layouts,
)
from .types import (
    Edge,
    EdgeLike,
    Event,
    EventType,
    LayoutNode,
    NodeLike,
    Position,
    PositionMap,
    SimulationNode,
    SizeType,
)

# Validation utilities
from .validation import (
    InvalidCanvasSizeError,
    InvalidEdgeError,
    InvalidNodeError,
    InvalidTopologyError,
    LayoutWarning,
    ValidationError,
    validate_canvas_size,
    validate_edge_ids,
)

__all__ = [
    # Version
    "__version__",
    # Shared types
    "Position",
    "PositionMap",
    "LayoutNode",
    "Edge",
    "SimulationNode",
    "EventType",
    "Event",
    # Type aliases for API
    "NodeLike",
    "EdgeLike",
    "SizeType",
    # Base classes
    "BaseLayout",
    "IterativeLayout",
    "StaticLayout",
    # Hierarchical layouts
    "HierarchicalLayout",
    "RadialLayout",
    "TreeStructureWarning",
    # Circular layouts
    "MeshLayout",
    "StarLayout",
    "HierarchicalMeshLayout",
    # Basic layouts
    "GridLayout",
    "RandomLayout",
    # Force-directed positioning
    "ForceSimulation",
    "ForceDirectedLayout",
    "DragState",
    # Collision handling
    "Collision",
    "CollisionResolutionWarning",
    "detect_collisions",
    "resolve_collisions",
    # Orchestration
    "Topology",
    "get_layout",
    "interpolate_layouts",
    "LayoutTransition",
    # Animation
    "AnimatedValue",
    "AnimatedValues",
    "AnimationState",
    "FrameScheduler",
    "EASINGS",
    "get_easing",
    # Geometry
    "BoundingBox",
    "bounding_box",
    "center_point",
    "distance",
    "midpoint",
    "interpolate_position",
    "fit_transform",
    "scale_node_size",
    # Metrics and optimisation
    "total_edge_length",
    "edge_crossings",
    "optimize_layout",
    # Validation
    "ValidationError",
    "InvalidCanvasSizeError",
    "InvalidNodeError",
    "InvalidEdgeError",
    "InvalidTopologyError",
    "LayoutWarning",
    "validate_canvas_size",
    "validate_edge_ids",
    # Preprocessing
    "find_roots",
    "assign_levels",
    "minimize_crossings_barycenter",
    "count_crossings",
]
