"""Readiness gate for the initial (parsing) phase."""

from __future__ import annotations

import logging
from collections.abc import Callable

from scanstage.progress.cancellation import CancellationToken
from scanstage.progress.timers import TimerHandle, TimerScheduler

logger = logging.getLogger(__name__)


class PhaseGate:
    """Holds the gating phase open until the external job reports ready.

    The gate opens at ``max(elapsed, min_duration_ms)`` after :meth:`start`,
    but never before the readiness signal arrives.  When the signal is
    already set and the floor has passed, it opens synchronously.
    """

    def __init__(
        self,
        *,
        timers: TimerScheduler,
        token: CancellationToken,
        min_duration_ms: float,
        on_open: Callable[[], None],
        ready: bool = False,
    ) -> None:
        self._timers = timers
        self._token = token
        self._min_duration_ms = min_duration_ms
        self._on_open = on_open
        self._ready = ready
        self._started_at: float | None = None
        self._opened = False
        self._pending: TimerHandle | None = None
        token.add_callback(self._release)

    @property
    def is_open(self) -> bool:
        return self._opened

    @property
    def is_ready(self) -> bool:
        return self._ready

    def start(self) -> None:
        if self._started_at is not None:
            return
        self._started_at = self._timers.now_ms()
        self._evaluate()

    def signal_ready(self, value: bool = True) -> None:
        """Record the external readiness flag. It only ever moves to ``True``."""
        if not value:
            if self._ready:
                logger.warning("Ignoring readiness reset; the external signal is monotone")
            return
        if self._ready:
            return
        self._ready = True
        logger.debug("External job reported ready")
        if self._started_at is not None:
            self._evaluate()

    def _evaluate(self) -> None:
        self._pending = None
        if self._token.cancelled or self._opened or not self._ready:
            return
        assert self._started_at is not None
        remaining = self._min_duration_ms - (self._timers.now_ms() - self._started_at)
        if remaining > 0:
            logger.debug("Holding gating phase for another %.0fms", remaining)
            self._pending = self._timers.call_later(remaining, self._evaluate)
            return
        self._opened = True
        self._on_open()

    def _release(self) -> None:
        if self._pending is not None:
            self._pending.cancel()
            self._pending = None
