"""
Tests for GridLayout and RandomLayout.
"""

import pytest

from diagram_layout import EventType
from diagram_layout.basic import GridLayout, RandomLayout


def create_nodes(n):
    return [f"n{i}" for i in range(n)]


class TestGridLayout:
    """Tests for the grid layout."""

    def test_rows_share_y(self):
        """Rows share y."""
        positions = GridLayout(nodes=create_nodes(6), columns=3).run().positions
        assert positions["n0"].y == positions["n1"].y == positions["n2"].y
        assert positions["n3"].y == positions["n4"].y == positions["n5"].y
        assert positions["n3"].y > positions["n0"].y

    def test_columns_share_x(self):
        """Columns share x."""
        positions = GridLayout(nodes=create_nodes(6), columns=3).run().positions
        assert positions["n0"].x == positions["n3"].x
        assert positions["n1"].x > positions["n0"].x

    def test_two_columns_give_three_rows(self):
        """Two columns give three rows."""
        positions = GridLayout(nodes=create_nodes(6), columns=2).run().positions
        assert len({round(p.y, 6) for p in positions.values()}) == 3

    def test_default_columns_is_square(self):
        """Default columns is square."""
        positions = GridLayout(nodes=create_nodes(9)).run().positions
        assert len({round(p.x, 6) for p in positions.values()}) == 3

    def test_equal_spacing_with_gap(self):
        """Equal spacing with gap."""
        positions = GridLayout(nodes=create_nodes(4), columns=4, gap=20).run().positions
        xs = [positions[f"n{i}"].x for i in range(4)]
        steps = [b - a for a, b in zip(xs, xs[1:])]
        for step in steps:
            assert step == pytest.approx(steps[0])

    def test_cells_inside_padded_canvas(self):
        """Cells inside padded canvas."""
        positions = GridLayout(nodes=create_nodes(7), columns=3, padding=40).run().positions
        for pos in positions.values():
            assert 40 <= pos.x <= 760
            assert 40 <= pos.y <= 560

    def test_sort_by_callable(self):
        """Sort by callable."""
        nodes = [{"id": "b", "rank": 2}, {"id": "a", "rank": 1}]
        positions = GridLayout(nodes=nodes, columns=2, sort_by=lambda n: n.rank).run().positions
        assert positions["a"].x < positions["b"].x


class TestRandomLayout:
    """Tests for the random layout."""

    def test_inside_padded_canvas(self):
        """Inside padded canvas."""
        positions = RandomLayout(nodes=create_nodes(30), random_seed=3).run().positions
        assert len(positions) == 30
        for pos in positions.values():
            assert 50 <= pos.x <= 750
            assert 50 <= pos.y <= 550

    def test_seed_is_reproducible(self):
        """Seed is reproducible."""
        a = RandomLayout(nodes=create_nodes(5), random_seed=42).run().positions
        b = RandomLayout(nodes=create_nodes(5), random_seed=42).run().positions
        assert a == b

    def test_padding_too_large_uses_whole_canvas(self):
        """Padding too large uses whole canvas."""
        positions = RandomLayout(
            nodes=create_nodes(5), size=(100, 100), padding=80, random_seed=1
        ).run().positions
        for pos in positions.values():
            assert 0 <= pos.x <= 100
            assert 0 <= pos.y <= 100

    def test_single_node_centered(self):
        """Single node centered."""
        positions = RandomLayout(nodes=["solo"], random_seed=9).run().positions
        assert positions["solo"].x == 400
        assert positions["solo"].y == 300

    def test_end_event_carries_positions(self):
        """End event carries positions."""
        seen = {}
        layout = RandomLayout(nodes=create_nodes(3), random_seed=1)
        layout.on("end", lambda e: seen.update(e["positions"]))
        layout.run()
        assert seen == layout.positions

    def test_event_subscription_by_enum(self):
        """Event subscription by enum."""
        seen = []
        layout = RandomLayout(nodes=create_nodes(2))
        layout.on(EventType.start, lambda e: seen.append(e["alpha"]))
        layout.run()
        assert seen == [1.0]

    def test_positions_is_a_copy(self):
        """Positions is a copy."""
        layout = RandomLayout(nodes=create_nodes(2), random_seed=1).run()
        layout.positions.clear()
        assert len(layout.positions) == 2
