"""
Force-directed positioning.

- ForceSimulation: interactive tick-by-tick simulation with drag support
- ForceDirectedLayout: runs a simulation to rest as a one-shot layout
"""

from .directed import ForceDirectedLayout
from .simulation import DragState, ForceSimulation

__all__ = [
    "ForceSimulation",
    "ForceDirectedLayout",
    "DragState",
]
