"""
Force kernels for the force simulation.

Every kernel works in place on the simulation arena: flat numpy arrays of
positions (``x``, ``y``) and velocities (``vx``, ``vy``) indexed by slot.
The formulas follow the usual velocity-Verlet style solver used by
interactive graph renderers: forces add to velocities, scaled by ``alpha``,
and the simulation integrates positions afterwards.
"""

from __future__ import annotations

import numpy as np

# Magnitude of the random nudge that separates coincident nodes
JIGGLE = 1e-6


def jiggle(rng: np.random.Generator, size: int | tuple[int, ...] | None = None) -> np.ndarray:
    """Tiny random offsets in (-JIGGLE/2, JIGGLE/2)."""
    return (rng.random(size) - 0.5) * JIGGLE


def apply_center(x: np.ndarray, y: np.ndarray, cx: float, cy: float, strength: float) -> None:
    """
    Translate all nodes so their mean moves toward (cx, cy).

    Relative positions are untouched; only positions move, not velocities.
    """
    n = len(x)
    if n == 0 or strength == 0:
        return
    x -= (x.mean() - cx) * strength
    y -= (y.mean() - cy) * strength


def apply_charge(
    x: np.ndarray,
    y: np.ndarray,
    vx: np.ndarray,
    vy: np.ndarray,
    strength: float,
    alpha: float,
    rng: np.random.Generator,
    distance_min: float = 1.0,
) -> None:
    """
    All-pairs charge force.

    Node i gains ``(p_j - p_i) * strength * alpha / d^2`` from every other
    node j. Negative strength repels. Distances below ``distance_min`` are
    softened to avoid huge kicks.
    """
    n = len(x)
    if n < 2 or strength == 0:
        return

    dx = x[np.newaxis, :] - x[:, np.newaxis]
    dy = y[np.newaxis, :] - y[:, np.newaxis]
    off_diagonal = ~np.eye(n, dtype=bool)

    # Coincident nodes get a random direction
    zero_x = (dx == 0) & off_diagonal
    if zero_x.any():
        dx[zero_x] = jiggle(rng, int(zero_x.sum()))
    zero_y = (dy == 0) & off_diagonal
    if zero_y.any():
        dy[zero_y] = jiggle(rng, int(zero_y.sum()))

    l2 = dx * dx + dy * dy
    near = l2 < distance_min * distance_min
    l2 = np.where(near, np.sqrt(distance_min * distance_min * l2), l2)
    np.fill_diagonal(l2, np.inf)

    w = strength * alpha / l2
    vx += (dx * w).sum(axis=1)
    vy += (dy * w).sum(axis=1)


def link_bias(sources: np.ndarray, targets: np.ndarray, n: int) -> np.ndarray:
    """
    Share of each link's correction taken by its target.

    Low-degree endpoints move more than hubs.
    """
    count = np.bincount(np.concatenate([sources, targets]), minlength=n).astype(np.float64)
    if len(sources) == 0:
        return np.zeros(0, dtype=np.float64)
    return count[sources] / (count[sources] + count[targets])


def apply_link(
    x: np.ndarray,
    y: np.ndarray,
    vx: np.ndarray,
    vy: np.ndarray,
    sources: np.ndarray,
    targets: np.ndarray,
    bias: np.ndarray,
    distances: np.ndarray,
    strength: float,
    alpha: float,
    rng: np.random.Generator,
) -> None:
    """
    Spring force pulling every linked pair toward its rest length.

    ``distances`` holds one rest length per link.

    Links are processed one after another so corrections compound within a
    tick, as they do in interactive solvers.
    """
    if strength == 0:
        return
    for e in range(len(sources)):
        s, t = sources[e], targets[e]
        dx = x[t] + vx[t] - x[s] - vx[s]
        dy = y[t] + vy[t] - y[s] - vy[s]
        if dx == 0:
            dx = float(jiggle(rng))
        if dy == 0:
            dy = float(jiggle(rng))
        length = float(np.hypot(dx, dy))
        k = (length - distances[e]) / length * alpha * strength
        dx *= k
        dy *= k
        b = bias[e]
        vx[t] -= dx * b
        vy[t] -= dy * b
        vx[s] += dx * (1 - b)
        vy[s] += dy * (1 - b)


def apply_collide(
    x: np.ndarray,
    y: np.ndarray,
    vx: np.ndarray,
    vy: np.ndarray,
    radius: float,
    rng: np.random.Generator,
    strength: float = 1.0,
) -> None:
    """
    Keep predicted positions (position + velocity) at least ``2 * radius`` apart.

    Candidate pairs are found in one vectorized pass, then resolved in index
    order against the velocities updated so far.
    """
    n = len(x)
    if n < 2 or radius <= 0:
        return
    reach = 2 * radius
    px = x + vx
    py = y + vy
    dx = px[:, np.newaxis] - px[np.newaxis, :]
    dy = py[:, np.newaxis] - py[np.newaxis, :]
    close = np.triu((dx * dx + dy * dy) < reach * reach, k=1)

    for i, j in zip(*np.nonzero(close)):
        cx = x[i] + vx[i] - x[j] - vx[j]
        cy = y[i] + vy[i] - y[j] - vy[j]
        l2 = cx * cx + cy * cy
        if l2 >= reach * reach:
            continue
        if cx == 0:
            cx = float(jiggle(rng))
            l2 += cx * cx
        if cy == 0:
            cy = float(jiggle(rng))
            l2 += cy * cy
        length = float(np.sqrt(l2))
        k = (reach - length) / length * strength
        # Equal radii: each node takes half the correction
        vx[i] += cx * k * 0.5
        vy[i] += cy * k * 0.5
        vx[j] -= cx * k * 0.5
        vy[j] -= cy * k * 0.5


__all__ = [
    "JIGGLE",
    "jiggle",
    "apply_center",
    "apply_charge",
    "apply_link",
    "apply_collide",
    "link_bias",
]
