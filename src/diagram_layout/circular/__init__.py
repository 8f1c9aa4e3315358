"""
Circular layout algorithms.

This module provides layouts that place nodes on circles:
- MeshLayout: Every node on one circle
- StarLayout: Hub at the center, spokes on a circle
- HierarchicalMeshLayout: A ring of per-category clusters
"""

from .cluster import HierarchicalMeshLayout
from .mesh import MeshLayout
from .star import StarLayout

__all__ = [
    "MeshLayout",
    "StarLayout",
    "HierarchicalMeshLayout",
]
