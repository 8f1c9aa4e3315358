"""
Tests for collision detection and resolution.
"""

import random

import pytest

from diagram_layout import Position
from diagram_layout.collision import (
    CollisionResolutionWarning,
    detect_collisions,
    resolve_collisions,
)

# =============================================================================
# Test Fixtures
# =============================================================================


def create_boxes(*points, size=(100, 50)):
    """Positions n0..nk at the given points, all with the same box size."""
    positions = {f"n{i}": Position(x, y) for i, (x, y) in enumerate(points)}
    sizes = {node_id: size for node_id in positions}
    return positions, sizes


# =============================================================================
# detect_collisions Tests
# =============================================================================


class TestDetectCollisions:
    """Tests for detect_collisions."""

    def test_overlapping_pair(self):
        """Overlapping boxes are reported."""
        positions, sizes = create_boxes((100, 100), (150, 120))
        collisions = detect_collisions(positions, sizes)
        assert len(collisions) == 1
        hit = collisions[0]
        assert (hit.node_a, hit.node_b) == ("n0", "n1")
        assert hit.overlap_x == pytest.approx(50)
        assert hit.overlap_y == pytest.approx(30)

    def test_separated_pair(self):
        """Separated boxes are not reported."""
        positions, sizes = create_boxes((100, 100), (300, 100))
        assert detect_collisions(positions, sizes) == []

    def test_touching_boxes_collide(self):
        """Touching boxes collide."""
        positions, sizes = create_boxes((100, 100), (200, 100))
        assert len(detect_collisions(positions, sizes)) == 1

    def test_padding_widens_detection(self):
        """Padding widens detection."""
        positions, sizes = create_boxes((100, 100), (210, 100))
        assert detect_collisions(positions, sizes) == []
        assert len(detect_collisions(positions, sizes, padding=20)) == 1

    def test_each_pair_once_in_input_order(self):
        """Each pair once in input order."""
        positions, sizes = create_boxes((300, 100), (100, 100), (120, 100))
        pairs = [(c.node_a, c.node_b) for c in detect_collisions(positions, sizes)]
        assert pairs == [("n1", "n2")]

    def test_default_size(self):
        """Nodes without a size use the default box."""
        positions = {"a": Position(0, 0), "b": Position(30, 0)}
        assert len(detect_collisions(positions)) == 1
        assert detect_collisions(positions, default_size=(20, 20)) == []

    def test_size_formats(self):
        """Sizes may be tuples, dicts or objects."""
        positions = {"a": Position(0, 0), "b": Position(70, 0)}
        sizes = {"a": {"width": 100, "height": 10}, "b": 50}
        assert len(detect_collisions(positions, sizes)) == 1


# =============================================================================
# resolve_collisions Tests
# =============================================================================


class TestResolveCollisions:
    """Tests for resolve_collisions."""

    def test_resolves_overlap(self):
        """Resolution removes a simple overlap."""
        positions, sizes = create_boxes((100, 100), (120, 110))
        resolved = resolve_collisions(positions, sizes)
        assert detect_collisions(resolved, sizes) == []

    def test_horizontal_gap_respects_padding(self):
        """Horizontal gap respects padding."""
        positions, sizes = create_boxes((100, 100), (150, 100))
        resolved = resolve_collisions(positions, sizes, padding=20)
        gap = abs(resolved["n1"].x - resolved["n0"].x) - 100
        assert gap >= 20

    def test_fixed_point(self):
        """Already separated input comes back unchanged."""
        positions, sizes = create_boxes((100, 100), (400, 100), (100, 400))
        resolved = resolve_collisions(positions, sizes)
        assert resolved == positions

    def test_dense_random_cluster_reaches_fixed_point(self):
        """A crowded, seeded cloud of boxes ends with no collisions."""
        rng = random.Random(7)
        points = [(rng.uniform(300, 500), rng.uniform(200, 400)) for _ in range(20)]
        positions, sizes = create_boxes(*points, size=(60, 40))
        assert detect_collisions(positions, sizes)

        resolved = resolve_collisions(positions, sizes)
        assert detect_collisions(resolved, sizes) == []

    def test_coincident_centers_are_separated(self):
        """Coincident centers are separated."""
        positions, sizes = create_boxes((200, 200), (200, 200), (200, 200))
        resolved = resolve_collisions(positions, sizes, padding=5)
        assert detect_collisions(resolved, sizes, padding=5) == []

    def test_deterministic(self):
        """Same input gives the same result."""
        positions, sizes = create_boxes((200, 200), (200, 200), (210, 205))
        assert resolve_collisions(positions, sizes) == resolve_collisions(positions, sizes)

    def test_bounds_keep_boxes_inside(self):
        """Bounds keep boxes inside."""
        positions, sizes = create_boxes((10, 10), (20, 15), (790, 590))
        resolved = resolve_collisions(positions, sizes, bounds=(800, 600))
        for pos in resolved.values():
            assert 50 <= pos.x <= 750
            assert 25 <= pos.y <= 575
        assert detect_collisions(resolved, sizes) == []

    def test_too_tight_bounds_warn(self):
        """Too tight bounds warn."""
        positions, sizes = create_boxes(*[(75, 75)] * 5, size=(100, 100))
        with pytest.warns(CollisionResolutionWarning):
            resolved = resolve_collisions(positions, sizes, bounds=(150, 150), max_iterations=20)
        for pos in resolved.values():
            assert 50 <= pos.x <= 100
            assert 50 <= pos.y <= 100

    def test_input_not_modified(self):
        """Input not modified."""
        positions, sizes = create_boxes((100, 100), (110, 100))
        snapshot = dict(positions)
        resolve_collisions(positions, sizes)
        assert positions == snapshot
