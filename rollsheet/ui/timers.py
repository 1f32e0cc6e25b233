"""Delayed-callback schedulers that deliver animation ticks to the engine."""
from __future__ import annotations

import sched
import time
from typing import Callable


class Scheduler:
    """Real-time scheduler: ``step`` sleeps until the next callback is due."""

    def __init__(
        self,
        timefunc: Callable[[], float] = time.monotonic,
        delayfunc: Callable[[float], None] = time.sleep,
    ) -> None:
        self._timefunc = timefunc
        self._delayfunc = delayfunc
        self._sched = sched.scheduler(timefunc, delayfunc)

    def call_later(self, delay_ms: int, callback: Callable[[], None]) -> None:
        self._sched.enter(delay_ms / 1000.0, 0, callback)

    @property
    def pending(self) -> int:
        return len(self._sched.queue)

    def step(self) -> bool:
        """Run the earliest callback (and anything due with it). False when idle."""
        queue = self._sched.queue
        if not queue:
            return False
        wait = queue[0].time - self._timefunc()
        if wait > 0:
            self._delayfunc(wait)
        self._sched.run(blocking=False)
        return True

    def drain(self, limit: int = 10_000) -> int:
        """Step until nothing is scheduled; returns the number of steps taken."""
        steps = 0
        while steps < limit and self.step():
            steps += 1
        return steps


class ManualScheduler(Scheduler):
    """Virtual clock: waiting advances ``now`` instead of sleeping."""

    def __init__(self) -> None:
        self.now = 0.0
        super().__init__(self._clock, self._advance)

    def _clock(self) -> float:
        return self.now

    def _advance(self, seconds: float) -> None:
        self.now += seconds

    def step(self) -> bool:
        queue = self._sched.queue
        if not queue:
            return False
        # jump straight to the deadline so float drift never leaves it unrun
        self.now = max(self.now, queue[0].time)
        self._sched.run(blocking=False)
        return True
