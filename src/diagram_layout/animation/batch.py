"""
Batch animation of several numbers off one clock.
"""

from __future__ import annotations

from typing import Callable, Optional, Sequence

from ..easing import DEFAULT_EASING, EasingLike
from .animated_value import AnimatedValue, AnimationState
from .scheduler import FrameScheduler


class AnimatedValues:
    """
    Animate many values together with a shared eased progress.

    Every value travels from its own start to its own target; the easing,
    delay and timing are common. Useful for dashboards where a row of
    counters should land at the same moment.

    Example:
        bars = AnimatedValues(0, [10, 20, 40], duration=1000, easing="linear")
        bars.tick(0)
        bars.tick(500).values  # [5.0, 10.0, 20.0]
    """

    def __init__(
        self,
        from_value: float,
        targets: Sequence[float],
        duration: float = 1000.0,
        *,
        delay: float = 0.0,
        easing: EasingLike = DEFAULT_EASING,
        precision: int = 0,
        auto_start: bool = True,
        scheduler: Optional[FrameScheduler] = None,
        on_update: Optional[Callable[[list[float]], None]] = None,
        on_complete: Optional[Callable[[list[float]], None]] = None,
    ) -> None:
        self._from = float(from_value)
        self._starts = [self._from] * len(targets)
        self._targets = [float(t) for t in targets]
        self._values = list(self._starts)
        self._precision = precision
        self.on_update = on_update
        self.on_complete = on_complete

        self._clock = AnimatedValue(
            0.0,
            1.0,
            duration,
            delay=delay,
            easing=easing,
            auto_start=False,
            scheduler=scheduler,
            on_update=self._apply,
            on_complete=self._completed,
        )
        if auto_start:
            self.start()

    @property
    def values(self) -> list[float]:
        return list(self._values)

    @property
    def display_values(self) -> list[str]:
        return [f"{v:.{self._precision}f}" for v in self._values]

    @property
    def targets(self) -> list[float]:
        return list(self._targets)

    @property
    def progress(self) -> float:
        return self._clock.progress

    @property
    def is_animating(self) -> bool:
        return self._clock.is_animating

    def tick(self, now: float) -> AnimatedValues:
        self._clock.tick(now)
        return self

    def start(self) -> None:
        """Start from ``from_value`` for every entry."""
        self._starts = [self._from] * len(self._targets)
        self._values = list(self._starts)
        self._clock.start()

    def retarget(self, targets: Sequence[float]) -> None:
        """Animate from the current values toward new targets (restarts the clock)."""
        current = self._values + [self._from] * (len(targets) - len(self._values))
        self._starts = current[: len(targets)]
        self._targets = [float(t) for t in targets]
        self._values = list(self._starts)
        self._clock.start()

    def pause(self, now: Optional[float] = None) -> None:
        self._clock.pause(now)

    def resume(self, now: Optional[float] = None) -> None:
        self._clock.resume(now)

    def reset(self) -> None:
        self._clock.reset()
        self._starts = [self._from] * len(self._targets)
        self._values = list(self._starts)

    def dispose(self) -> None:
        self._clock.dispose()

    @property
    def state(self) -> AnimationState:
        return self._clock.state

    def _apply(self, eased: float) -> None:
        self._values = [s + (t - s) * eased for s, t in zip(self._starts, self._targets)]
        if self.on_update is not None:
            self.on_update(list(self._values))

    def _completed(self, _: float) -> None:
        if self.on_complete is not None:
            self.on_complete(list(self._values))


__all__ = ["AnimatedValues"]
