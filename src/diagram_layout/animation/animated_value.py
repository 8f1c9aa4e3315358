"""
Animated scalar values.

AnimatedValue moves a number from a start value to a target over a duration
under an easing curve. It is a driven state machine: every call to
``tick(now)`` computes the value for time ``now`` (milliseconds on any
monotonic clock) and returns an AnimationState snapshot. Attach a
FrameScheduler to have frames requested and cancelled automatically.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Callable, Optional

from ..easing import DEFAULT_EASING, EasingLike, get_easing
from .scheduler import FrameDriven, FrameScheduler


@dataclass(frozen=True)
class AnimationState:
    """Snapshot of an animation after a frame."""

    value: float
    progress: float
    elapsed: float
    remaining: float
    is_animating: bool


class AnimatedValue(FrameDriven):
    """
    Time-based interpolation of one number.

    The first frame after ``start()`` fixes the time origin (with a
    scheduler attached, the scheduler clock at ``start()`` does). The easing
    clock starts ``delay`` ms later; from then on

        raw = clamp((now - t0) / duration, 0, 1)
        value = start + (target - start) * ease(raw)

    When ``raw`` reaches 1 the value is exactly the target and
    ``on_complete`` fires once.

    Args:
        from_value: Start value (also the value ``reset()`` returns to)
        to_value: Target value
        duration: Duration of one run in ms. ``<= 0`` or NaN completes at once.
        delay: Wait before the easing clock starts, in ms
        easing: Easing name or function (default easeOutCubic)
        precision: Decimals shown by ``display_value`` (default 0)
        format: Function turning the value into ``display_value``
        grouping: Use thousands separators in ``display_value``
        repeat: Extra runs after the first (-1 repeats forever)
        yoyo: Alternate direction on every repeat
        auto_start: Call ``start()`` from the constructor
        enabled: When False every run resolves straight to the target
        scheduler: FrameScheduler requesting frames while animating
        on_start: Called once when the easing clock starts
        on_update: Called with the value on every computed frame
        on_complete: Called with the final value when the last run ends

    Example:
        counter = AnimatedValue(0, 100, duration=1000, easing="linear")
        counter.tick(0)
        counter.tick(500).value  # 50.0
    """

    def __init__(
        self,
        from_value: float = 0.0,
        to_value: float = 1.0,
        duration: float = 1000.0,
        *,
        delay: float = 0.0,
        easing: EasingLike = DEFAULT_EASING,
        precision: Optional[int] = None,
        format: Optional[Callable[[float], str]] = None,
        grouping: bool = False,
        repeat: int = 0,
        yoyo: bool = False,
        auto_start: bool = True,
        enabled: bool = True,
        scheduler: Optional[FrameScheduler] = None,
        on_start: Optional[Callable[[], None]] = None,
        on_update: Optional[Callable[[float], None]] = None,
        on_complete: Optional[Callable[[float], None]] = None,
    ) -> None:
        self._from = float(from_value)
        self._to = float(to_value)
        self._duration = float(duration)
        self._delay = max(0.0, float(delay))
        self._easing = get_easing(easing)
        self._precision = precision
        self._formatter = format
        self._grouping = grouping
        self._repeat = int(repeat)
        self._yoyo = yoyo
        self._enabled = enabled
        self._scheduler = scheduler
        self._frame_handle = None

        self.on_start = on_start
        self.on_update = on_update
        self.on_complete = on_complete

        # Run state
        self._value = self._from
        self._start_value = self._from
        self._progress = 0.0
        self._t0: Optional[float] = None
        self._pending_delay = self._delay
        self._running = False
        self._paused = False
        self._finished = False
        self._disposed = False
        self._started_fired = False
        self._paused_at: Optional[float] = None
        self._resume_pending = False
        self._last_now: Optional[float] = None
        self._repeat_count = 0
        self._forward = True

        if auto_start:
            self.start()

    # -------------------------------------------------------------------------
    # Properties
    # -------------------------------------------------------------------------

    @property
    def value(self) -> float:
        """Current numeric value (never rounded)."""
        return self._value

    @property
    def display_value(self) -> str:
        """Value formatted with ``format``, or ``precision``/``grouping``."""
        if self._formatter is not None:
            return self._formatter(self._value)
        precision = self._precision if self._precision is not None else 0
        if self._grouping:
            return f"{self._value:,.{precision}f}"
        return f"{self._value:.{precision}f}"

    @property
    def from_value(self) -> float:
        return self._from

    @property
    def target(self) -> float:
        return self._to

    @property
    def duration(self) -> float:
        return self._duration

    @property
    def progress(self) -> float:
        """Raw (un-eased) progress of the current run in [0, 1]."""
        return self._progress

    @property
    def elapsed(self) -> float:
        """Milliseconds of the current run covered so far (frozen while paused)."""
        if not self._has_duration():
            return 0.0
        return self._progress * self._duration

    @property
    def remaining(self) -> float:
        if not self._has_duration():
            return 0.0
        return self._duration - self.elapsed

    @property
    def is_animating(self) -> bool:
        return self._running and not self._paused

    @property
    def is_paused(self) -> bool:
        return self._paused

    @property
    def is_complete(self) -> bool:
        return self._finished

    @property
    def state(self) -> AnimationState:
        return AnimationState(
            value=self._value,
            progress=self._progress,
            elapsed=self.elapsed,
            remaining=self.remaining,
            is_animating=self.is_animating,
        )

    # -------------------------------------------------------------------------
    # Controls
    # -------------------------------------------------------------------------

    def start(self) -> None:
        """Start (or start over) from ``from_value`` toward the target."""
        if self._disposed:
            return
        self._cancel_frame()
        self._value = self._from
        self._start_value = self._from
        self._repeat_count = 0
        self._forward = True
        self._started_fired = False
        self._begin_run(self._delay)

    def pause(self, now: Optional[float] = None) -> None:
        """Freeze the value and stop requesting frames; elapsed time is kept."""
        if not self._running or self._paused:
            return
        self._paused = True
        self._resume_pending = False
        clock = self._clock(now)
        self._paused_at = clock if clock is not None else self._last_now
        self._cancel_frame()

    def resume(self, now: Optional[float] = None) -> None:
        """
        Continue a paused animation.

        The start time moves forward by the paused duration. Without a known
        time (no ``now``, no scheduler) the shift is measured at the next tick.
        """
        if not self._paused:
            return
        self._paused = False
        if self._t0 is not None and self._paused_at is not None:
            clock = self._clock(now)
            if clock is not None:
                self._t0 += clock - self._paused_at
                self._paused_at = None
            else:
                self._resume_pending = True
        self._schedule_frame()

    def reset(self) -> None:
        """Stop and return to ``from_value`` with zero elapsed time."""
        self._cancel_frame()
        self._value = self._from
        self._start_value = self._from
        self._progress = 0.0
        self._t0 = None
        self._running = False
        self._paused = False
        self._finished = False
        self._started_fired = False
        self._paused_at = None
        self._resume_pending = False
        self._repeat_count = 0
        self._forward = True

    def restart(self) -> None:
        """Reset, then start."""
        self.reset()
        self.start()

    def retarget(self, to_value: float) -> None:
        """
        Animate toward a new target from the value held right now.

        The superseded run never completes, so ``on_complete`` fires at most
        once per distinct target. Retargeting to the current target is a no-op.
        Before the first ``start()`` only the target is updated.
        """
        to_value = float(to_value)
        if to_value == self._to and (self._running or self._finished):
            return
        self._to = to_value
        if self._disposed or not (self._running or self._finished):
            return
        self._cancel_frame()
        self._start_value = self._value
        self._repeat_count = 0
        self._forward = True
        self._begin_run(0.0)

    set_target = retarget

    def set(self, value: float) -> None:
        """Jump to ``value`` immediately, cancelling any animation in flight."""
        self._cancel_frame()
        self._value = float(value)
        self._to = self._value
        self._start_value = self._value
        self._progress = 1.0
        self._running = False
        self._paused = False
        self._finished = True
        self._resume_pending = False

    def dispose(self) -> None:
        """Stop for good; no frame callback is left behind."""
        self._cancel_frame()
        self._running = False
        self._paused = False
        self._disposed = True

    # -------------------------------------------------------------------------
    # Frame Loop
    # -------------------------------------------------------------------------

    def tick(self, now: float) -> AnimationState:
        """
        Advance to time ``now`` (ms) and return the resulting state.

        Ticks while idle, paused, finished or disposed change nothing.
        """
        now = float(now)
        self._last_now = now
        if not self._running or self._paused:
            return self.state

        if self._resume_pending:
            if self._t0 is not None and self._paused_at is not None:
                self._t0 += now - self._paused_at
            self._paused_at = None
            self._resume_pending = False

        if self._t0 is None:
            self._t0 = now + self._pending_delay

        if now >= self._t0:
            if not self._started_fired:
                self._started_fired = True
                if self.on_start is not None:
                    self.on_start()
            self._step(now)

        if self._running:
            self._schedule_frame()
        return self.state

    def _frame(self, now: float) -> None:
        self.tick(now)

    def _step(self, now: float) -> None:
        if self._t0 is None:
            return
        raw = min(1.0, max(0.0, (now - self._t0) / self._duration))
        begin, end = self._endpoints()
        self._progress = raw
        if raw >= 1.0:
            self._value = end
        else:
            self._value = begin + (end - begin) * self._easing(raw)
        if self.on_update is not None:
            self.on_update(self._value)

        if raw >= 1.0:
            if self._repeat == -1 or self._repeat_count < self._repeat:
                self._repeat_count += 1
                if self._yoyo:
                    self._forward = not self._forward
                self._t0 = now
                self._progress = 0.0
            else:
                self._complete()

    # -------------------------------------------------------------------------
    # Internals
    # -------------------------------------------------------------------------

    def _begin_run(self, delay: float) -> None:
        self._progress = 0.0
        self._paused = False
        self._finished = False
        self._paused_at = None
        self._resume_pending = False

        if not self._enabled or not self._has_duration():
            self._running = False
            self._progress = 1.0
            self._value = self._to
            if self.on_update is not None:
                self.on_update(self._value)
            self._complete()
            return

        self._running = True
        self._pending_delay = delay
        self._t0 = self._scheduler.now + delay if self._scheduler is not None else None
        self._schedule_frame()

    def _complete(self) -> None:
        self._running = False
        self._finished = True
        self._cancel_frame()
        if self.on_complete is not None:
            self.on_complete(self._value)

    def _endpoints(self) -> tuple[float, float]:
        if self._forward:
            return self._start_value, self._to
        return self._to, self._start_value

    def _has_duration(self) -> bool:
        return not math.isnan(self._duration) and self._duration > 0

    def _clock(self, now: Optional[float]) -> Optional[float]:
        if now is not None:
            return float(now)
        if self._scheduler is not None:
            return self._scheduler.now
        return None

    def __repr__(self) -> str:
        return (
            f"AnimatedValue(value={self._value:.4g}, target={self._to:.4g}, "
            f"progress={self._progress:.2f})"
        )


__all__ = ["AnimatedValue", "AnimationState"]
