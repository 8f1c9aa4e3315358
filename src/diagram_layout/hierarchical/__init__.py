"""
Hierarchical layout algorithms.

This module provides layouts driven by node levels (tiers):
- HierarchicalLayout: Levels as horizontal bands, parents over children
- RadialLayout: Levels as concentric rings around a center node
"""

from .radial import RadialLayout
from .tiered import HierarchicalLayout, TreeStructureWarning

__all__ = [
    "HierarchicalLayout",
    "RadialLayout",
    "TreeStructureWarning",
]
