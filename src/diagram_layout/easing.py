"""
Easing functions.

Each easing maps normalized time ``t`` in [0, 1] to animation progress.
Results may leave [0, 1] (elastic and spring curves overshoot), but every
named curve returns exactly 0 at ``t = 0`` and exactly 1 at ``t = 1``.

Names use the camelCase spelling common to animation libraries
(``easeOutCubic``); snake_case spellings (``ease_out_cubic``) resolve to the
same functions.
"""

from __future__ import annotations

import math
import re
from typing import Union

from .types import EasingFunction

EasingLike = Union[str, EasingFunction, None]

DEFAULT_EASING = "easeOutCubic"


def linear(t: float) -> float:
    return t


def ease_in(t: float) -> float:
    """Quadratic ease-in."""
    return t * t


def ease_out(t: float) -> float:
    """Quadratic ease-out."""
    return t * (2 - t)


def ease_in_out(t: float) -> float:
    """Quadratic ease-in-out."""
    return 2 * t * t if t < 0.5 else -1 + (4 - 2 * t) * t


def ease_in_cubic(t: float) -> float:
    return t * t * t


def ease_out_cubic(t: float) -> float:
    return 1 - (1 - t) ** 3


def ease_in_out_cubic(t: float) -> float:
    return 4 * t * t * t if t < 0.5 else (t - 1) * (2 * t - 2) * (2 * t - 2) + 1


def ease_in_elastic(t: float) -> float:
    if t == 0 or t == 1:
        return t
    return -(2 ** (10 * (t - 1))) * math.sin((t - 1.1) * 5 * math.pi)


def ease_out_elastic(t: float) -> float:
    if t == 0 or t == 1:
        return t
    return 2 ** (-10 * t) * math.sin((t - 0.1) * 5 * math.pi) + 1


def ease_in_out_elastic(t: float) -> float:
    if t == 0 or t == 1:
        return t
    s = t * 2 - 1
    if s < 0:
        return -0.5 * 2 ** (10 * s) * math.sin((s - 0.1) * 5 * math.pi)
    return 0.5 * 2 ** (-10 * s) * math.sin((s - 0.1) * 5 * math.pi) + 1


def spring(t: float) -> float:
    """Decaying sine that overshoots once before settling on 1."""
    if t == 0 or t == 1:
        return t
    return 2 ** (-10 * t) * math.sin((t * 10 - 0.75) * (2 * math.pi / 3)) + 1


EASINGS: dict[str, EasingFunction] = {
    "linear": linear,
    "easeIn": ease_in,
    "easeOut": ease_out,
    "easeInOut": ease_in_out,
    "easeInQuad": ease_in,
    "easeOutQuad": ease_out,
    "easeInOutQuad": ease_in_out,
    "easeInCubic": ease_in_cubic,
    "easeOutCubic": ease_out_cubic,
    "easeInOutCubic": ease_in_out_cubic,
    "easeInElastic": ease_in_elastic,
    "easeOutElastic": ease_out_elastic,
    "easeInOutElastic": ease_in_out_elastic,
    "spring": spring,
}


def _camel_case(name: str) -> str:
    return re.sub(r"_([a-z])", lambda m: m.group(1).upper(), name)


def get_easing(easing: EasingLike = None) -> EasingFunction:
    """
    Resolve an easing by name or pass a callable through untouched.

    Args:
        easing: Easing name, custom function, or None for the default

    Returns:
        The easing function. Unknown names fall back to easeOutCubic.

    Example:
        >>> get_easing("linear")(0.25)
        0.25
        >>> get_easing("ease_in_quad")(0.5)
        0.25
    """
    if callable(easing):
        return easing
    if easing is None:
        return EASINGS[DEFAULT_EASING]
    return EASINGS.get(easing) or EASINGS.get(_camel_case(easing)) or EASINGS[DEFAULT_EASING]


__all__ = [
    "EASINGS",
    "DEFAULT_EASING",
    "EasingLike",
    "get_easing",
    "linear",
    "ease_in",
    "ease_out",
    "ease_in_out",
    "ease_in_cubic",
    "ease_out_cubic",
    "ease_in_out_cubic",
    "ease_in_elastic",
    "ease_out_elastic",
    "ease_in_out_elastic",
    "spring",
]
