"""Wall-clock timing for the physics and camera schedules."""
from __future__ import annotations

import time
from dataclasses import dataclass, field


@dataclass
class FrameTimer:
    """Seconds between successive :meth:`tick` calls.

    ``max_delta`` caps a single reading, e.g. after the window was dragged
    or the process was suspended.
    """

    max_delta: float | None = None
    last_time: float = field(default_factory=time.perf_counter)

    def tick(self) -> float:
        now = time.perf_counter()
        elapsed = max(0.0, now - self.last_time)
        self.last_time = now
        if self.max_delta is not None:
            elapsed = min(elapsed, self.max_delta)
        return elapsed

    def restart(self) -> None:
        self.last_time = time.perf_counter()


@dataclass
class FixedStepAccumulator:
    """Banks elapsed time and pays it out as whole ticks of ``step`` seconds."""

    step: float
    max_substeps: int
    value: float = 0.0

    def accrue(self, delta: float) -> None:
        if delta > 0.0:
            self.value += delta

    def clear(self) -> None:
        self.value = 0.0

    def consume(self) -> int:
        if self.value < self.step:
            return 0
        ticks = int(self.value // self.step)
        if ticks > self.max_substeps:
            # Too far behind: run the cap and drop the backlog.
            self.value = 0.0
            return self.max_substeps
        self.value -= ticks * self.step
        return ticks


__all__ = ["FixedStepAccumulator", "FrameTimer"]
