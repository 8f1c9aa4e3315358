"""
Basic layout algorithms.

- RandomLayout: Uniform random positions (simulation seed, baseline)
- GridLayout: Row-major placement into grid cells
"""

from .grid import GridLayout
from .random import RandomLayout

__all__ = [
    "GridLayout",
    "RandomLayout",
]
