"""
Tests for the force simulation and the force-directed layout.
"""

import math

import numpy as np
import pytest

from diagram_layout import EventType, InvalidNodeError, Position
from diagram_layout.animation import FrameScheduler
from diagram_layout.force import DragState, ForceDirectedLayout, ForceSimulation
from diagram_layout.force.forces import apply_center, apply_charge, apply_collide, link_bias

# =============================================================================
# Test Fixtures
# =============================================================================


def create_path(n=4):
    nodes = [f"n{i}" for i in range(n)]
    edges = [(f"n{i}", f"n{i + 1}") for i in range(n - 1)]
    return nodes, edges


def dist(a, b):
    return math.hypot(a.x - b.x, a.y - b.y)


def settle(sim, max_ticks=2000):
    for _ in range(max_ticks):
        if sim.tick():
            break
    return sim


# =============================================================================
# Force Kernel Tests
# =============================================================================


class TestForces:
    """Tests for the individual force kernels."""

    def test_center_moves_mean(self):
        """Center moves mean."""
        x = np.array([0.0, 100.0])
        y = np.array([0.0, 50.0])
        apply_center(x, y, 400, 300, 1.0)
        assert x.mean() == pytest.approx(400)
        assert y.mean() == pytest.approx(300)
        assert x[1] - x[0] == pytest.approx(100)

    def test_negative_charge_repels(self):
        """Negative charge repels."""
        x = np.array([0.0, 10.0])
        y = np.array([0.0, 0.0])
        vx = np.zeros(2)
        vy = np.zeros(2)
        apply_charge(x, y, vx, vy, -300.0, 1.0, np.random.default_rng(0))
        assert vx[0] < 0 < vx[1]
        assert vx[0] == pytest.approx(-vx[1])

    def test_coincident_nodes_get_pushed(self):
        """Coincident nodes get pushed."""
        x = np.zeros(2)
        y = np.zeros(2)
        vx = np.zeros(2)
        vy = np.zeros(2)
        apply_charge(x, y, vx, vy, -300.0, 1.0, np.random.default_rng(0))
        assert np.all(np.isfinite(vx))
        assert vx[0] != 0

    def test_collide_separates_predicted_positions(self):
        """Collide separates predicted positions."""
        x = np.array([0.0, 10.0])
        y = np.array([0.0, 0.0])
        vx = np.zeros(2)
        vy = np.zeros(2)
        apply_collide(x, y, vx, vy, 20.0, np.random.default_rng(0))
        assert (x[1] + vx[1]) - (x[0] + vx[0]) == pytest.approx(40)

    def test_link_bias_favours_low_degree(self):
        """Link bias favours low degree."""
        sources = np.array([0, 0, 0])
        targets = np.array([1, 2, 3])
        bias = link_bias(sources, targets, 4)
        assert bias.tolist() == pytest.approx([0.75, 0.75, 0.75])


# =============================================================================
# ForceSimulation Tests
# =============================================================================


class TestForceSimulationLifecycle:
    """Start, tick and settle."""

    def test_settles(self):
        """The simulation cools down and stops."""
        nodes, edges = create_path()
        sim = ForceSimulation(nodes=nodes, edges=edges, random_seed=1).start()
        assert sim.is_running
        settle(sim)
        assert not sim.is_running
        assert sim.alpha < sim.alpha_min

    def test_alpha_decays_toward_target(self):
        """Alpha decays toward target."""
        sim = ForceSimulation(nodes=["a", "b"], random_seed=1).start()
        sim.tick()
        assert sim.alpha == pytest.approx(1 - 0.0228)

    def test_events(self):
        """Start, tick and end events fire in order."""
        events = []
        nodes, edges = create_path(3)
        sim = ForceSimulation(
            nodes=nodes,
            edges=edges,
            random_seed=1,
            on_start=lambda e: events.append(e["type"]),
            on_tick=lambda e: events.append(e["type"]),
            on_end=lambda e: events.append(e["type"]),
        )
        sim.start()
        settle(sim)
        assert events[0] == EventType.start
        assert events[-1] == EventType.end
        assert events.count(EventType.end) == 1
        assert EventType.tick in events

    def test_tick_event_carries_snapshot(self):
        """Tick event carries snapshot."""
        snapshots = []
        sim = ForceSimulation(
            nodes=["a", "b"], random_seed=1, on_tick=lambda e: snapshots.append(e["positions"])
        )
        sim.start()
        sim.tick()
        sim.tick()
        assert snapshots[0] is not snapshots[1]
        assert set(snapshots[0]) == {"a", "b"}

    def test_seeded_runs_are_identical(self):
        """Seeded runs are identical."""
        nodes, edges = create_path()
        a = ForceSimulation(nodes=nodes, edges=edges, random_seed=5).run().positions
        b = ForceSimulation(nodes=nodes, edges=edges, random_seed=5).run().positions
        assert a == b

    def test_seed_positions(self):
        """Initial positions and node x/y seed the arena."""
        sim = ForceSimulation(
            nodes=[{"id": "a", "x": 10, "y": 20}, "b"],
            initial_positions={"b": (30, 40)},
            jitter=0,
        )
        sim.start()
        assert sim.positions["a"] == Position(10, 20)
        assert sim.positions["b"] == Position(30, 40)

    def test_jitter_seeds_near_center(self):
        """Jitter seeds near center."""
        sim = ForceSimulation(nodes=[f"n{i}" for i in range(10)], random_seed=2, jitter=50)
        sim.start()
        for pos in sim.positions.values():
            assert abs(pos.x - 400) <= 50
            assert abs(pos.y - 300) <= 50

    def test_single_node_goes_to_center(self):
        """Single node goes to center."""
        sim = ForceSimulation(nodes=["solo"], random_seed=3).start()
        sim.tick()
        assert sim.positions["solo"].x == pytest.approx(400)
        assert sim.positions["solo"].y == pytest.approx(300)

    def test_linked_nodes_near_link_distance(self):
        """Linked nodes near link distance."""
        sim = ForceSimulation(
            nodes=["a", "b"],
            edges=[("a", "b")],
            charge_strength=0,
            collision_radius=0,
            random_seed=4,
        )
        sim.run()
        assert dist(sim.positions["a"], sim.positions["b"]) == pytest.approx(120, abs=5)

    def test_edge_length_overrides_link_distance(self):
        """Edge length overrides link distance."""
        sim = ForceSimulation(
            nodes=["a", "b"],
            edges=[{"source": "a", "target": "b", "length": 60}],
            charge_strength=0,
            collision_radius=0,
            random_seed=4,
        )
        sim.run()
        assert dist(sim.positions["a"], sim.positions["b"]) == pytest.approx(60, abs=5)

    def test_collision_keeps_nodes_apart(self):
        """Collision keeps nodes apart."""
        sim = ForceSimulation(
            nodes=[f"n{i}" for i in range(5)],
            charge_strength=0,
            collision_radius=30,
            random_seed=6,
        )
        sim.run()
        points = list(sim.positions.values())
        for i in range(len(points)):
            for j in range(i + 1, len(points)):
                assert dist(points[i], points[j]) > 50

    def test_stop(self):
        """A stopped simulation ignores ticks."""
        sim = ForceSimulation(nodes=["a", "b"], random_seed=1).start()
        sim.stop()
        assert not sim.is_running
        before = sim.positions
        assert sim.tick() is True
        assert sim.positions == before

    def test_reheat(self):
        """Reheat restarts a settled simulation at alpha 0.5."""
        sim = ForceSimulation(nodes=["a", "b"], random_seed=1)
        sim.run()
        sim.reheat()
        assert sim.is_running
        assert sim.alpha == pytest.approx(0.5)

    def test_restart_picks_up_new_nodes(self):
        """Restart picks up new nodes."""
        sim = ForceSimulation(nodes=["a", "b"], random_seed=1)
        sim.run()
        kept = sim.positions["a"]
        sim.nodes = ["a", "b", "c"]
        sim.restart()
        assert set(sim.positions) == {"a", "b", "c"}
        assert sim.positions["a"] == kept

    def test_replacing_nodes_with_same_count(self):
        """A same-sized node list with new ids replaces the published ids."""
        sim = ForceSimulation(nodes=["a", "b", "c"], random_seed=1).start()
        sim.tick()
        sim.nodes = ["x", "y", "z"]
        sim.tick()
        assert list(sim.positions) == ["x", "y", "z"]
        assert sim.node("x").id == "x"
        sim.drag_start("y")
        assert sim.drag_state.node_id == "y"

    def test_replacing_edges_rebuilds_links(self):
        """New edges take effect on the next tick without a restart."""
        sim = ForceSimulation(
            nodes=["a", "b"],
            charge_strength=0,
            collision_radius=0,
            random_seed=4,
        ).start()
        sim.tick()
        sim.edges = [{"source": "a", "target": "b", "length": 60}]
        settle(sim)
        assert dist(sim.positions["a"], sim.positions["b"]) == pytest.approx(60, abs=5)


class TestForceSimulationDrag:
    """Drag protocol and pins."""

    def create_running(self, **kwargs):
        nodes, edges = create_path()
        sim = ForceSimulation(nodes=nodes, edges=edges, random_seed=1, **kwargs)
        sim.run()
        return sim

    def test_drag_start_pins_and_reheats(self):
        """Drag start pins and reheats."""
        sim = self.create_running()
        where = sim.positions["n1"]
        sim.drag_start("n1")

        node = sim.node("n1")
        assert node.pinned
        assert (node.fx, node.fy) == (where.x, where.y)
        assert sim.alpha_target == pytest.approx(0.3)
        assert sim.is_running
        assert sim.drag_state == DragState(True, "n1", where)

    def test_drag_moves_node_without_changing_alpha(self):
        """Drag moves node without changing alpha."""
        sim = self.create_running()
        sim.drag_start("n1")
        alpha = sim.alpha
        sim.drag("n1", 100, 120)
        assert sim.alpha == alpha
        sim.tick()
        assert sim.positions["n1"] == Position(100, 120)

    def test_drag_keeps_simulation_warm(self):
        """Drag keeps simulation warm."""
        sim = self.create_running()
        sim.drag_start("n1")
        for _ in range(500):
            sim.tick()
        assert sim.is_running
        assert sim.alpha > sim.alpha_min

    def test_drag_end_keeps_pin_by_default(self):
        """Drag end keeps pin by default."""
        sim = self.create_running()
        sim.drag_start("n1")
        sim.drag("n1", 200, 200)
        sim.tick()
        sim.drag_end("n1")

        assert sim.alpha_target == 0
        assert sim.node("n1").pinned
        assert not sim.drag_state.is_dragging
        settle(sim)
        assert sim.positions["n1"] == Position(200, 200)

    def test_drag_end_releases_when_floating(self):
        """Drag end releases when floating."""
        sim = self.create_running(fix_on_drag_end=False)
        sim.drag_start("n1")
        sim.drag_end("n1")
        assert not sim.node("n1").pinned

    def test_pin_and_release(self):
        """Pin and release."""
        sim = self.create_running()
        sim.pin("n0", 50, 60)
        sim.reheat()
        settle(sim)
        assert sim.positions["n0"] == Position(50, 60)

        sim.release("n0")
        assert sim.node("n0").fx is None

    def test_release_all(self):
        """release_all unpins every node."""
        sim = self.create_running()
        sim.pin("n0")
        sim.pin("n2")
        sim.release_all()
        assert not any(node.pinned for node in sim.simulation_nodes)

    def test_unknown_node(self):
        """Dragging an unknown id raises."""
        sim = self.create_running()
        with pytest.raises(InvalidNodeError):
            sim.drag_start("missing")


class TestForceSimulationScheduler:
    """Frame-driven ticking."""

    def test_ticks_once_per_frame(self):
        """Ticks once per frame."""
        ticks = []
        scheduler = FrameScheduler()
        sim = ForceSimulation(
            nodes=["a", "b"],
            random_seed=1,
            scheduler=scheduler,
            on_tick=lambda e: ticks.append(e["alpha"]),
        )
        sim.start()
        assert scheduler.pending == 1
        scheduler.run_frame()
        scheduler.run_frame()
        assert len(ticks) == 2

    def test_runs_until_settled(self):
        """Runs until settled."""
        scheduler = FrameScheduler()
        sim = ForceSimulation(nodes=["a", "b", "c"], random_seed=1, scheduler=scheduler)
        sim.start()
        scheduler.run_until_idle()
        assert not sim.is_running
        assert scheduler.pending == 0

    def test_stop_cancels_frame(self):
        """Stop cancels frame."""
        scheduler = FrameScheduler()
        sim = ForceSimulation(nodes=["a", "b"], random_seed=1, scheduler=scheduler)
        sim.start()
        sim.stop()
        assert scheduler.pending == 0
        assert not sim.has_pending_frame


# =============================================================================
# ForceDirectedLayout Tests
# =============================================================================


class TestForceDirectedLayout:
    """Tests for the one-shot force layout."""

    def test_positions_inside_canvas(self):
        """Positions inside canvas."""
        nodes, edges = create_path(8)
        positions = ForceDirectedLayout(
            nodes=nodes, edges=edges, size=(800, 600), random_seed=1
        ).run().positions
        assert len(positions) == 8
        for pos in positions.values():
            assert 0 <= pos.x <= 800
            assert 0 <= pos.y <= 600

    def test_disconnected_nodes_repel(self):
        """Disconnected nodes repel."""
        positions = ForceDirectedLayout(
            nodes=["a", "b"], repulsion_strength=500, random_seed=1
        ).run().positions
        assert dist(positions["a"], positions["b"]) > 100

    def test_connected_closer_than_unconnected(self):
        """Connected closer than unconnected."""
        positions = ForceDirectedLayout(
            nodes=["a", "b", "c"], edges=[("a", "b")], random_seed=1
        ).run().positions
        linked = dist(positions["a"], positions["b"])
        assert linked < dist(positions["a"], positions["c"])
        assert linked < dist(positions["b"], positions["c"])

    def test_repulsion_sign_ignored(self):
        """Repulsion sign ignored."""
        layout = ForceDirectedLayout(repulsion_strength=-250)
        assert layout.repulsion_strength == 250

    def test_deterministic_with_seed(self):
        """Deterministic with seed."""
        nodes, edges = create_path(5)
        a = ForceDirectedLayout(nodes=nodes, edges=edges, random_seed=9).run().positions
        b = ForceDirectedLayout(nodes=nodes, edges=edges, random_seed=9).run().positions
        assert a == b
