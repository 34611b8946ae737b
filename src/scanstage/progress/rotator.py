"""Cosmetic focus pointer over the concurrently running phases."""

from __future__ import annotations

from collections.abc import Callable

from scanstage.constants.progress import FIRST_CONCURRENT_INDEX, NO_FOCUS
from scanstage.progress.cancellation import CancellationToken
from scanstage.progress.timers import TimerHandle, TimerScheduler


class FocusRotator:
    """Cycles a pointer through ``1..count`` every *interval_ms*, wrapping around.

    Index 0 is the gating phase and is never focused.  Once stopped the
    pointer keeps its last value.
    """

    def __init__(
        self,
        count: int,
        *,
        timers: TimerScheduler,
        token: CancellationToken,
        interval_ms: float,
        on_rotate: Callable[[int], None],
    ) -> None:
        self._count = count
        self._timers = timers
        self._token = token
        self._interval_ms = interval_ms
        self._on_rotate = on_rotate
        self._pointer = NO_FOCUS
        self._running = False
        self._pending: TimerHandle | None = None
        token.add_callback(self.stop)

    @property
    def pointer(self) -> int:
        return self._pointer

    @property
    def running(self) -> bool:
        return self._running

    def start(self) -> None:
        if self._running or self._count <= 0 or self._token.cancelled:
            return
        self._running = True
        self._pointer = FIRST_CONCURRENT_INDEX
        self._schedule()

    def stop(self) -> None:
        self._running = False
        if self._pending is not None:
            self._pending.cancel()
            self._pending = None

    def _schedule(self) -> None:
        self._pending = self._timers.call_later(self._interval_ms, self._advance)

    def _advance(self) -> None:
        self._pending = None
        if not self._running or self._token.cancelled:
            return
        self._pointer = self._pointer % self._count + 1
        self._on_rotate(self._pointer)
        if self._running and not self._token.cancelled:
            self._schedule()
