"""
Virtual animation-frame scheduler.

Engines in this package are driven state machines: the host calls
``tick(now)`` once per rendered frame. FrameScheduler stands in for the
host's animation-frame callback so engines can be driven on a virtual clock
(tests, offline rendering) and so that leaked frame requests are observable
through ``pending``.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Callable, Optional

FrameCallback = Callable[[float], None]

FRAME_INTERVAL = 1000.0 / 60.0

_TIME_TOLERANCE = 1e-9


class FrameScheduler:
    """
    Frame callback registry with a manually advanced clock (milliseconds).

    Callbacks requested during a frame run on the next frame, never the
    current one.

    Example:
        scheduler = FrameScheduler()
        value = AnimatedValue(0, 100, duration=500, scheduler=scheduler)
        scheduler.advance(500)
        assert value.value == 100
        assert scheduler.pending == 0
    """

    def __init__(self, frame_interval: float = FRAME_INTERVAL, start_time: float = 0.0) -> None:
        if frame_interval <= 0:
            raise ValueError(f"frame_interval must be positive, got {frame_interval}")
        self._frame_interval = float(frame_interval)
        self._now = float(start_time)
        self._callbacks: dict[int, FrameCallback] = {}
        self._next_handle = 1
        self._frame_count = 0

    @property
    def now(self) -> float:
        """Current virtual time in milliseconds."""
        return self._now

    @property
    def frame_interval(self) -> float:
        return self._frame_interval

    @property
    def pending(self) -> int:
        """Number of callbacks waiting for the next frame."""
        return len(self._callbacks)

    @property
    def frame_count(self) -> int:
        """Number of frames run so far."""
        return self._frame_count

    def request_frame(self, callback: FrameCallback) -> int:
        """Schedule ``callback(now)`` for the next frame; returns a handle."""
        handle = self._next_handle
        self._next_handle += 1
        self._callbacks[handle] = callback
        return handle

    def cancel_frame(self, handle: int) -> bool:
        """Cancel a pending callback. Returns False if it already ran or was cancelled."""
        return self._callbacks.pop(handle, None) is not None

    def run_frame(self, now: Optional[float] = None) -> int:
        """
        Run one frame at ``now`` (default: current time).

        Returns:
            Number of callbacks invoked.
        """
        if now is not None:
            self._now = max(self._now, float(now))
        callbacks = list(self._callbacks.values())
        self._callbacks.clear()
        self._frame_count += 1
        for callback in callbacks:
            callback(self._now)
        return len(callbacks)

    def advance(self, ms: float) -> int:
        """
        Advance the clock by ``ms``, running a frame every ``frame_interval``.

        A final frame runs exactly at the target time when it does not fall
        on the frame grid.

        Returns:
            Number of frames run.
        """
        start = self._now
        target = start + max(0.0, float(ms))
        frames = 0
        # Frame times come from the grid, not repeated addition, so that
        # rounding never carries a frame past the target.
        while True:
            t = start + (frames + 1) * self._frame_interval
            if t > target + _TIME_TOLERANCE:
                break
            if target - t <= _TIME_TOLERANCE:
                t = target
            self.run_frame(t)
            frames += 1
        if self._now < target:
            self.run_frame(target)
            frames += 1
        return frames

    def run_until_idle(self, max_frames: int = 100_000) -> int:
        """Run frames until nothing is pending (or max_frames is reached)."""
        frames = 0
        while self._callbacks and frames < max_frames:
            self.run_frame(self._now + self._frame_interval)
            frames += 1
        return frames


class FrameDriven(ABC):
    """
    Mixin for engines that request one frame at a time from a FrameScheduler.

    Subclasses implement ``_frame(now)`` and call ``_schedule_frame()`` while
    they still have work, ``_cancel_frame()`` when they stop.
    """

    _scheduler: Optional[FrameScheduler] = None
    _frame_handle: Optional[int] = None

    @property
    def scheduler(self) -> Optional[FrameScheduler]:
        return self._scheduler

    @property
    def has_pending_frame(self) -> bool:
        """True while a frame callback is registered with the scheduler."""
        return self._frame_handle is not None

    def _schedule_frame(self) -> None:
        if self._scheduler is not None and self._frame_handle is None:
            self._frame_handle = self._scheduler.request_frame(self._on_frame)

    def _cancel_frame(self) -> None:
        if self._scheduler is not None and self._frame_handle is not None:
            self._scheduler.cancel_frame(self._frame_handle)
        self._frame_handle = None

    def _on_frame(self, now: float) -> None:
        self._frame_handle = None
        self._frame(now)

    @abstractmethod
    def _frame(self, now: float) -> None:
        """Handle one animation frame at time ``now``."""
        pass


__all__ = [
    "FrameScheduler",
    "FrameDriven",
    "FrameCallback",
    "FRAME_INTERVAL",
]
