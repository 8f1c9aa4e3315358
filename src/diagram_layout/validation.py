"""
Input validation utilities for diagram layout algorithms.

Provides centralized validation functions for nodes, edges, canvas size,
and other layout parameters. Raises descriptive exceptions on invalid input.
"""

from __future__ import annotations

import math
from typing import Any, Optional, Sequence


class ValidationError(ValueError):
    """Base exception for layout validation errors."""

    pass


class InvalidCanvasSizeError(ValidationError):
    """Raised when canvas dimensions are invalid."""

    pass


class InvalidNodeError(ValidationError):
    """Raised when a node is malformed or its id is not unique."""

    pass


class InvalidEdgeError(ValidationError):
    """Raised when an edge references unknown nodes."""

    pass


class InvalidTopologyError(ValidationError):
    """Raised when a topology name is not one of the known layouts."""

    pass


class LayoutWarning(UserWarning):
    """Base class for warnings about inputs a layout can only partly honour."""

    pass


def validate_canvas_size(size: Sequence[float]) -> tuple[float, float]:
    """
    Validate canvas size dimensions.

    Args:
        size: [width, height] sequence

    Returns:
        Validated (width, height) tuple

    Raises:
        InvalidCanvasSizeError: If dimensions are invalid
    """
    if len(size) < 2:
        raise InvalidCanvasSizeError(
            f"Canvas size must have 2 elements [width, height], got {len(size)}"
        )

    width, height = float(size[0]), float(size[1])

    if not math.isfinite(width) or width <= 0:
        raise InvalidCanvasSizeError(f"Canvas width must be positive, got {width}")
    if not math.isfinite(height) or height <= 0:
        raise InvalidCanvasSizeError(f"Canvas height must be positive, got {height}")

    return width, height


def validate_node_ids(ids: Sequence[str], strict: bool = True) -> list[tuple[int, str]]:
    """
    Validate that node ids are unique.

    Args:
        ids: Node ids in input order
        strict: If True, raises on duplicates. If False, returns list of issues.

    Returns:
        List of (node_index, issue_description) tuples

    Raises:
        InvalidNodeError: If strict=True and duplicate ids found
    """
    issues: list[tuple[int, str]] = []
    seen: dict[str, int] = {}

    for i, node_id in enumerate(ids):
        if node_id in seen:
            issues.append((i, f"Node {i}: id {node_id!r} already used by node {seen[node_id]}"))
        else:
            seen[node_id] = i

    if strict and issues:
        msg = "Duplicate node ids:\n" + "\n".join(issue[1] for issue in issues)
        raise InvalidNodeError(msg)

    return issues


def validate_edge_ids(
    edges: Sequence[Any],
    node_ids: Any,
    strict: bool = True,
) -> list[tuple[int, str]]:
    """
    Validate that all edge source/target ids name known nodes.

    Args:
        edges: Sequence of Edge objects or dicts with source/target
        node_ids: Container of known node ids
        strict: If True, raises on invalid. If False, returns list of issues.

    Returns:
        List of (edge_index, issue_description) tuples

    Raises:
        InvalidEdgeError: If strict=True and invalid edges found
    """
    issues: list[tuple[int, str]] = []

    for i, edge in enumerate(edges):
        src = _get_endpoint(edge, "source")
        tgt = _get_endpoint(edge, "target")

        if src is None:
            issues.append((i, f"Edge {i}: source is None"))
        elif src not in node_ids:
            issues.append((i, f"Edge {i}: unknown source id {src!r}"))

        if tgt is None:
            issues.append((i, f"Edge {i}: target is None"))
        elif tgt not in node_ids:
            issues.append((i, f"Edge {i}: unknown target id {tgt!r}"))

    if strict and issues:
        msg = "Invalid edge ids:\n" + "\n".join(issue[1] for issue in issues)
        raise InvalidEdgeError(msg)

    return issues


def validate_iterations(iterations: int) -> int:
    """
    Validate iteration count is positive.

    Raises:
        ValidationError: If iterations < 1
    """
    if iterations < 1:
        raise ValidationError(f"iterations must be >= 1, got {iterations}")
    return iterations


def validate_alpha(alpha: float) -> float:
    """
    Validate alpha is in valid range.

    Raises:
        ValidationError: If alpha not in [0, 1]
    """
    if alpha < 0 or alpha > 1:
        raise ValidationError(f"alpha must be in [0, 1], got {alpha}")
    return alpha


def _get_endpoint(obj: Any, attr: str) -> Optional[str]:
    """Extract an endpoint id from an Edge, dict or tuple."""
    if isinstance(obj, dict):
        val = obj.get(attr)
    elif isinstance(obj, (tuple, list)):
        val = obj[0 if attr == "source" else 1] if len(obj) >= 2 else None
    else:
        val = getattr(obj, attr, None)

    if val is None:
        return None
    if hasattr(val, "id") and not isinstance(val, (str, int)):
        return str(val.id)
    return str(val)


__all__ = [
    "ValidationError",
    "InvalidCanvasSizeError",
    "InvalidNodeError",
    "InvalidEdgeError",
    "InvalidTopologyError",
    "LayoutWarning",
    "validate_canvas_size",
    "validate_node_ids",
    "validate_edge_ids",
    "validate_iterations",
    "validate_alpha",
]
