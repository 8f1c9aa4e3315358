"""
Tests for geometry helpers.
"""

import math

import pytest

from diagram_layout import Position
from diagram_layout.geometry import (
    BoundingBox,
    bounding_box,
    center_point,
    clamp,
    clamp_position,
    distance,
    fit_transform,
    interpolate_position,
    midpoint,
    polar,
    scale_node_size,
)


class TestPointHelpers:
    """Tests for midpoint, distance and center."""

    def test_midpoint(self):
        """Midpoint of two positions."""
        assert midpoint(Position(0, 0), Position(10, 20)) == Position(5, 10)

    def test_distance(self):
        """Euclidean distance."""
        assert distance(Position(0, 0), Position(3, 4)) == pytest.approx(5.0)

    def test_center_point(self):
        """Center of several points."""
        points = [Position(0, 0), Position(10, 0), Position(10, 10), Position(0, 10)]
        assert center_point(points) == Position(5, 5)

    def test_center_point_empty(self):
        """Center point empty."""
        assert center_point([]) is None

    def test_polar_at_twelve_o_clock(self):
        """Polar at twelve o clock."""
        p = polar(100, 100, 50, -math.pi / 2)
        assert p.x == pytest.approx(100)
        assert p.y == pytest.approx(50)


class TestBoundingBox:
    """Tests for bounding_box."""

    def test_box_of_points(self):
        """Box of points."""
        box = bounding_box([Position(10, 20), Position(30, 5), Position(15, 40)])
        assert box == BoundingBox(10, 5, 30, 40)
        assert box.width == 20
        assert box.height == 35
        assert box.center == Position(20, 22.5)

    def test_padding_grows_box(self):
        """Padding grows box."""
        box = bounding_box([Position(0, 0), Position(10, 10)], padding=5)
        assert box == BoundingBox(-5, -5, 15, 15)

    def test_empty_input(self):
        """Bounding box of nothing is empty."""
        box = bounding_box([])
        assert box.width == 0
        assert box.height == 0

    def test_contains(self):
        """Bounding box containment check."""
        box = BoundingBox(0, 0, 10, 10)
        assert box.contains(Position(10, 0))
        assert not box.contains(Position(11, 5))


class TestInterpolationAndClamping:
    """Tests for interpolate_position and clamping."""

    def test_interpolate_endpoints_and_middle(self):
        """Interpolate endpoints and middle."""
        a, b = Position(0, 0), Position(100, 50)
        assert interpolate_position(a, b, 0) == a
        assert interpolate_position(a, b, 1) == b
        assert interpolate_position(a, b, 0.5) == Position(50, 25)

    def test_clamp(self):
        """Values are clamped into range."""
        assert clamp(5, 0, 10) == 5
        assert clamp(-5, 0, 10) == 0
        assert clamp(50, 0, 10) == 10

    def test_clamp_empty_range_gives_midpoint(self):
        """Clamp empty range gives midpoint."""
        assert clamp(3, 10, 0) == 5

    def test_clamp_position_with_margin(self):
        """Clamp position with margin."""
        p = clamp_position(Position(-20, 700), 800, 600, 10)
        assert p == Position(10, 590)


class TestFitTransform:
    """Tests for fit_transform."""

    def test_centers_points_in_viewport(self):
        """Centers points in viewport."""
        points = [Position(0, 0), Position(100, 100)]
        transform = fit_transform(points, 400, 400, padding=50, max_scale=10)

        assert transform.scale == pytest.approx(3.0)
        center = transform.apply(Position(50, 50))
        assert center.x == pytest.approx(200)
        assert center.y == pytest.approx(200)

    def test_scale_is_capped(self):
        """Scale is capped."""
        transform = fit_transform([Position(0, 0), Position(10, 10)], 800, 600)
        assert transform.scale == 2.0

    def test_empty_points_is_identity(self):
        """Empty points is identity."""
        transform = fit_transform([], 800, 600)
        assert transform.apply(Position(3, 4)) == Position(3, 4)


class TestScaleNodeSize:
    """Tests for scale_node_size."""

    def test_linear_mapping(self):
        """Metric values map linearly onto node sizes."""
        assert scale_node_size(5, 0, 10) == pytest.approx(40)

    def test_out_of_range_is_clamped(self):
        """Out of range is clamped."""
        assert scale_node_size(-5, 0, 10) == 20
        assert scale_node_size(50, 0, 10) == 60

    def test_degenerate_range(self):
        """A flat metric range gives the minimum size."""
        assert scale_node_size(3, 3, 3) == 20
