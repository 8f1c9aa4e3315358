"""
Tests for animated values and the frame scheduler.
"""

import pytest

from diagram_layout.animation import (
    AnimatedValue,
    AnimatedValues,
    FrameDriven,
    FrameScheduler,
)

# =============================================================================
# Test Fixtures
# =============================================================================


def make_linear(from_value=0, to_value=100, duration=1000, **kwargs):
    """AnimatedValue with linear easing and no scheduler."""
    return AnimatedValue(from_value, to_value, duration, easing="linear", **kwargs)


class Recorder:
    """Callable collecting every argument it is called with."""

    def __init__(self):
        self.calls = []

    def __call__(self, *args):
        self.calls.append(args[0] if args else None)


# =============================================================================
# AnimatedValue Tests
# =============================================================================


class TestAnimatedValueProgress:
    """Value over time."""

    def test_linear_midpoint(self):
        """Linear easing is halfway at half the duration."""
        value = make_linear()
        value.tick(0)
        assert value.tick(500).value == pytest.approx(50)

    def test_custom_quadratic_easing(self):
        """Custom quadratic easing."""
        value = AnimatedValue(0, 100, 1000, easing=lambda t: t * t)
        value.tick(0)
        value.tick(500)
        assert value.value == pytest.approx(25)

    def test_named_easing(self):
        """Easings can be chosen by name."""
        value = AnimatedValue(0, 100, 1000, easing="easeInCubic")
        value.tick(0)
        assert value.tick(500).value == pytest.approx(12.5)

    def test_values_stay_between_endpoints(self):
        """Values stay between endpoints."""
        value = AnimatedValue(10, 90, 1000)
        for now in range(0, 1100, 37):
            state = value.tick(now)
            assert 10 <= state.value <= 90
            assert 0 <= state.progress <= 1

    def test_ends_exactly_on_target(self):
        """Ends exactly on target."""
        value = AnimatedValue(0, 1 / 3, 1000, easing="easeOutElastic")
        value.tick(0)
        value.tick(1000)
        assert value.value == 1 / 3
        assert value.is_complete
        assert not value.is_animating

    def test_elapsed_and_remaining(self):
        """Elapsed and remaining."""
        value = make_linear()
        value.tick(0)
        state = value.tick(250)
        assert state.elapsed == pytest.approx(250)
        assert state.remaining == pytest.approx(750)
        assert state.is_animating

    def test_delay_holds_start_value(self):
        """Delay holds start value."""
        value = make_linear(delay=200)
        value.tick(0)
        assert value.tick(100).value == 0
        assert value.tick(700).value == pytest.approx(50)

    def test_not_started_without_auto_start(self):
        """Not started without auto start."""
        value = make_linear(auto_start=False)
        assert value.tick(500).value == 0
        assert not value.is_animating


class TestAnimatedValueCallbacks:
    """Start, update and completion callbacks."""

    def test_on_start_fires_once(self):
        """On start fires once."""
        started = Recorder()
        value = make_linear(on_start=started)
        value.tick(0)
        value.tick(100)
        assert len(started.calls) == 1

    def test_on_complete_fires_once_with_final_value(self):
        """On complete fires once with final value."""
        completed = Recorder()
        value = make_linear(on_complete=completed)
        value.tick(0)
        value.tick(1000)
        value.tick(2000)
        assert completed.calls == [100]

    def test_on_update_receives_values(self):
        """On update receives values."""
        updates = Recorder()
        value = make_linear(on_update=updates)
        value.tick(0)
        value.tick(500)
        assert updates.calls == [pytest.approx(0), pytest.approx(50)]

    def test_zero_duration_completes_immediately(self):
        """Zero duration completes immediately."""
        completed = Recorder()
        value = make_linear(duration=0, on_complete=completed)
        assert value.value == 100
        assert completed.calls == [100]

    def test_nan_duration_completes_immediately(self):
        """Nan duration completes immediately."""
        value = make_linear(duration=float("nan"))
        assert value.value == 100
        assert value.is_complete

    def test_disabled_jumps_to_target(self):
        """Disabled jumps to target."""
        updates = Recorder()
        value = make_linear(enabled=False, on_update=updates)
        assert value.value == 100
        assert updates.calls == [100]


class TestAnimatedValueControls:
    """Pause, resume, reset and retarget."""

    def test_pause_and_resume_with_explicit_time(self):
        """Pause and resume with explicit time."""
        value = make_linear()
        value.tick(0)
        value.tick(250)
        value.pause(250)
        assert value.is_paused
        assert value.tick(900).value == pytest.approx(25)

        value.resume(1250)
        assert value.tick(1500).value == pytest.approx(50)

    def test_pause_and_resume_are_idempotent(self):
        """Pause and resume are idempotent."""
        value = make_linear()
        value.tick(0)
        value.tick(250)
        value.pause(250)
        value.pause(600)
        value.resume(1250)
        value.resume(1400)
        assert value.tick(1500).value == pytest.approx(50)

    def test_resume_without_clock_measures_at_next_tick(self):
        """Resume without clock measures at next tick."""
        value = make_linear()
        value.tick(0)
        value.tick(250)
        value.pause()
        value.resume()
        assert value.tick(1250).value == pytest.approx(25)
        assert value.tick(1500).value == pytest.approx(50)

    def test_reset(self):
        """Reset returns to the start value and stops."""
        value = make_linear()
        value.tick(0)
        value.tick(600)
        value.reset()
        assert value.value == 0
        assert value.progress == 0
        assert not value.is_animating
        assert value.tick(700).value == 0

    def test_restart(self):
        """Restart begins a fresh run from the start value."""
        value = make_linear()
        value.tick(0)
        value.tick(600)
        value.restart()
        value.tick(1000)
        assert value.tick(1500).value == pytest.approx(50)

    def test_retarget_completes_once(self):
        """Retarget completes once."""
        completed = Recorder()
        value = make_linear(on_complete=completed)
        value.tick(0)
        value.tick(500)
        value.retarget(200)
        assert value.target == 200

        value.tick(600)
        assert value.value == pytest.approx(50)
        value.tick(1100)
        assert value.value == pytest.approx(125)
        value.tick(1600)
        assert value.value == 200
        assert completed.calls == [200]

    def test_retarget_to_same_target_is_noop(self):
        """Retarget to same target is noop."""
        value = make_linear()
        value.tick(0)
        value.tick(500)
        value.retarget(100)
        assert value.tick(750).value == pytest.approx(75)

    def test_retarget_after_completion_animates_again(self):
        """Retarget after completion animates again."""
        value = make_linear()
        value.tick(0)
        value.tick(1000)
        value.retarget(0)
        value.tick(2000)
        assert value.tick(2500).value == pytest.approx(50)

    def test_set_jumps(self):
        """set() jumps without animating."""
        value = make_linear()
        value.tick(0)
        value.set(42)
        assert value.value == 42
        assert not value.is_animating
        assert value.tick(500).value == 42

    def test_repeat_with_yoyo(self):
        """Repeat with yoyo."""
        value = make_linear(repeat=1, yoyo=True)
        value.tick(0)
        value.tick(1000)
        assert value.value == 100
        assert value.is_animating
        assert value.tick(1500).value == pytest.approx(50)
        assert value.tick(2000).value == 0
        assert value.is_complete


class TestAnimatedValueDisplay:
    """display_value formatting."""

    def test_precision(self):
        """Precision controls displayed decimals."""
        value = make_linear(0, 3.14159, duration=0, precision=2)
        assert value.display_value == "3.14"

    def test_default_precision_is_integer(self):
        """Default precision is integer."""
        value = make_linear(0, 99.6, duration=0)
        assert value.display_value == "100"

    def test_grouping(self):
        """Large values are grouped by thousands."""
        value = make_linear(0, 1234567.891, duration=0, precision=1, grouping=True)
        assert value.display_value == "1,234,567.9"

    def test_custom_format(self):
        """A custom formatter overrides the display."""
        value = make_linear(0, 75, duration=0, format=lambda v: f"{v:.0f}%")
        assert value.display_value == "75%"


class TestAnimatedValueScheduler:
    """Driving an AnimatedValue from a FrameScheduler."""

    def test_runs_to_completion(self):
        """Runs to completion."""
        scheduler = FrameScheduler()
        value = make_linear(0, 100, 500, scheduler=scheduler)
        assert scheduler.pending == 1

        scheduler.advance(250)
        assert value.value == pytest.approx(50)

        scheduler.advance(250)
        assert value.value == 100
        assert scheduler.pending == 0

    def test_dispose_cancels_frame(self):
        """Dispose cancels frame."""
        scheduler = FrameScheduler()
        value = make_linear(scheduler=scheduler)
        scheduler.advance(100)
        value.dispose()
        assert scheduler.pending == 0
        assert not value.has_pending_frame

    def test_pause_cancels_frame_and_resume_shifts_clock(self):
        """Pause cancels frame and resume shifts clock."""
        scheduler = FrameScheduler()
        value = make_linear(scheduler=scheduler)
        scheduler.advance(250)
        value.pause()
        assert scheduler.pending == 0

        scheduler.advance(1000)
        value.resume()
        assert scheduler.pending == 1

        scheduler.advance(250)
        assert value.value == pytest.approx(50)

    def test_delay_counts_from_start(self):
        """Delay counts from start."""
        scheduler = FrameScheduler()
        value = make_linear(delay=500, scheduler=scheduler)
        scheduler.advance(500)
        assert value.value == 0
        scheduler.advance(500)
        assert value.value == pytest.approx(50)


# =============================================================================
# AnimatedValues Tests
# =============================================================================


class TestAnimatedValues:
    """Tests for batch animation."""

    def test_shared_progress(self):
        """All values share one eased progress."""
        bars = AnimatedValues(0, [10, 20, 40], duration=1000, easing="linear")
        bars.tick(0)
        assert bars.tick(500).values == [pytest.approx(5), pytest.approx(10), pytest.approx(20)]
        assert bars.display_values == ["5", "10", "20"]

    def test_completion(self):
        """Batch completion fires once."""
        completed = Recorder()
        bars = AnimatedValues(0, [10, 20], duration=1000, on_complete=completed)
        bars.tick(0)
        bars.tick(1000)
        assert completed.calls == [[10, 20]]
        assert not bars.is_animating

    def test_retarget_from_current_values(self):
        """Retarget from current values."""
        bars = AnimatedValues(0, [100, 200], duration=1000, easing="linear")
        bars.tick(0)
        bars.tick(500)
        bars.retarget([0, 0])
        bars.tick(600)
        assert bars.tick(1100).values == [pytest.approx(25), pytest.approx(50)]


# =============================================================================
# FrameScheduler Tests
# =============================================================================


class TestFrameScheduler:
    """Tests for the virtual frame host."""

    def test_request_and_run(self):
        """Request and run."""
        scheduler = FrameScheduler()
        seen = []
        scheduler.request_frame(seen.append)
        assert scheduler.run_frame(16) == 1
        assert seen == [16]
        assert scheduler.pending == 0

    def test_cancel(self):
        """Cancelled callbacks never run."""
        scheduler = FrameScheduler()
        handle = scheduler.request_frame(lambda now: None)
        assert scheduler.cancel_frame(handle)
        assert not scheduler.cancel_frame(handle)
        assert scheduler.run_frame() == 0

    def test_requests_during_frame_wait_for_next_frame(self):
        """Requests during frame wait for next frame."""
        scheduler = FrameScheduler()
        seen = []

        def again(now):
            seen.append(now)
            if len(seen) < 3:
                scheduler.request_frame(again)

        scheduler.request_frame(again)
        scheduler.run_frame(10)
        assert seen == [10]
        scheduler.run_until_idle()
        assert len(seen) == 3

    def test_advance_lands_on_target_time(self):
        """Advance lands on target time."""
        scheduler = FrameScheduler(frame_interval=10)
        assert scheduler.advance(25) == 3
        assert scheduler.now == 25

    def test_advance_on_frame_grid_hits_target_exactly(self):
        """Many 60 Hz frames add up to exactly the requested time."""
        scheduler = FrameScheduler()
        seen = []

        def record(now):
            seen.append(now)
            scheduler.request_frame(record)

        scheduler.request_frame(record)
        scheduler.advance(500)
        assert scheduler.now == 500
        assert seen[-1] == 500
        assert all(now <= 500 for now in seen)
        scheduler.advance(1000)
        assert scheduler.now == 1500
        assert seen[-1] == 1500

    def test_frame_driven_requires_frame_hook(self):
        """Engines must implement _frame to be instantiated."""

        class Silent(FrameDriven):
            pass

        with pytest.raises(TypeError):
            Silent()

    def test_invalid_interval(self):
        """Non-positive frame intervals are rejected."""
        with pytest.raises(ValueError):
            FrameScheduler(frame_interval=0)
