"""Timer schedulers driving the coordinator.

Every unit of work in the coordinator is a timer callback.  The scheduler is
pluggable so the same state machine runs on a live asyncio event loop
(:class:`LoopTimers`) or on a deterministic simulated clock
(:class:`VirtualTimers`) used by tests and by ``scanstage run --simulate``.
"""

from __future__ import annotations

import asyncio
import heapq
import itertools
from collections.abc import Callable
from typing import Protocol

DEFAULT_MAX_IDLE_TIMERS: int = 100_000


class TimerHandle(Protocol):
    """A pending timer that can be released."""

    def cancel(self) -> None: ...


class TimerScheduler(Protocol):
    """Minimal clock + delayed-call interface, in milliseconds."""

    def now_ms(self) -> float: ...

    def call_later(self, delay_ms: float, callback: Callable[[], None]) -> TimerHandle: ...


class LoopTimers:
    """Timer scheduler backed by an asyncio event loop."""

    def __init__(self, loop: asyncio.AbstractEventLoop | None = None) -> None:
        self._loop = loop if loop is not None else asyncio.get_running_loop()

    @property
    def loop(self) -> asyncio.AbstractEventLoop:
        return self._loop

    def now_ms(self) -> float:
        return self._loop.time() * 1000.0

    def call_later(self, delay_ms: float, callback: Callable[[], None]) -> TimerHandle:
        return self._loop.call_later(max(delay_ms, 0.0) / 1000.0, callback)


class VirtualTimer:
    """Handle for a callback scheduled on :class:`VirtualTimers`."""

    __slots__ = ("callback", "cancelled", "due_ms")

    def __init__(self, due_ms: float, callback: Callable[[], None]) -> None:
        self.due_ms = due_ms
        self.callback = callback
        self.cancelled = False

    def cancel(self) -> None:
        self.cancelled = True


class VirtualTimers:
    """Deterministic simulated clock.

    Time only moves when :meth:`advance` or :meth:`run_until_idle` is called.
    Due timers fire in (due time, scheduling order); timers scheduled from a
    callback fire in the same call if they fall due inside the window.
    """

    def __init__(self, start_ms: float = 0.0) -> None:
        self._now_ms = start_ms
        self._queue: list[tuple[float, int, VirtualTimer]] = []
        self._sequence = itertools.count()

    def now_ms(self) -> float:
        return self._now_ms

    def call_later(self, delay_ms: float, callback: Callable[[], None]) -> VirtualTimer:
        if delay_ms < 0:
            raise ValueError(f"delay_ms must be non-negative, got {delay_ms}")
        timer = VirtualTimer(self._now_ms + delay_ms, callback)
        heapq.heappush(self._queue, (timer.due_ms, next(self._sequence), timer))
        return timer

    @property
    def pending(self) -> int:
        """Number of scheduled timers that have not been cancelled."""
        return sum(1 for _, _, timer in self._queue if not timer.cancelled)

    @property
    def next_due_ms(self) -> float | None:
        self._drop_cancelled()
        return self._queue[0][0] if self._queue else None

    def advance(self, delta_ms: float) -> int:
        """Move the clock forward, firing every timer that falls due.

        Returns the number of callbacks fired.
        """
        if delta_ms < 0:
            raise ValueError(f"delta_ms must be non-negative, got {delta_ms}")
        target = self._now_ms + delta_ms
        fired = 0
        while True:
            self._drop_cancelled()
            if not self._queue or self._queue[0][0] > target:
                break
            due_ms, _, timer = heapq.heappop(self._queue)
            self._now_ms = due_ms
            timer.cancelled = True
            timer.callback()
            fired += 1
        self._now_ms = target
        return fired

    def run_until_idle(self, max_timers: int = DEFAULT_MAX_IDLE_TIMERS) -> int:
        """Fire timers in order until none remain.

        Raises ``RuntimeError`` if more than *max_timers* fire, which means
        something keeps rescheduling itself.
        """
        fired = 0
        while True:
            due_ms = self.next_due_ms
            if due_ms is None:
                return fired
            fired += self.advance(due_ms - self._now_ms)
            if fired > max_timers:
                raise RuntimeError(f"Timers still pending after {max_timers} callbacks")

    def _drop_cancelled(self) -> None:
        while self._queue and self._queue[0][2].cancelled:
            heapq.heappop(self._queue)
