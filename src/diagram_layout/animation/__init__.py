"""
Frame-driven animation.

- AnimatedValue: one number eased from a start value to a target
- AnimatedValues: several numbers sharing one clock
- FrameScheduler: virtual animation-frame host
"""

from .animated_value import AnimatedValue, AnimationState
from .batch import AnimatedValues
from .scheduler import FRAME_INTERVAL, FrameDriven, FrameScheduler

__all__ = [
    "AnimatedValue",
    "AnimatedValues",
    "AnimationState",
    "FrameScheduler",
    "FrameDriven",
    "FRAME_INTERVAL",
]
