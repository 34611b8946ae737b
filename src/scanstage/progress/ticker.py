"""Per-phase subtitle revealer."""

from __future__ import annotations

import logging
from collections.abc import Callable

from scanstage.model import Phase, PhaseRuntimeState
from scanstage.progress.cancellation import CancellationToken
from scanstage.progress.timers import TimerHandle, TimerScheduler

logger = logging.getLogger(__name__)


class SubtitleTicker:
    """Reveals a phase's subtitles one by one at a fixed interval.

    With ``k`` subtitles and interval ``Δ`` the reveals happen at
    ``Δ, 2Δ, …, kΔ`` after :meth:`start`, and the phase is done on the last
    one.  A phase without subtitles is done as soon as it starts.
    """

    def __init__(
        self,
        index: int,
        phase: Phase,
        *,
        timers: TimerScheduler,
        token: CancellationToken,
        interval_ms: float,
        on_reveal: Callable[[int, str], None],
        on_done: Callable[[int], None],
    ) -> None:
        self.index = index
        self.phase = phase
        self._timers = timers
        self._token = token
        self._interval_ms = interval_ms
        self._on_reveal = on_reveal
        self._on_done = on_done
        self._revealed = 0
        self._done = False
        self._started = False
        self._pending: TimerHandle | None = None
        token.add_callback(self._release)

    @property
    def state(self) -> PhaseRuntimeState:
        return PhaseRuntimeState(revealed_count=self._revealed, is_done=self._done)

    @property
    def revealed(self) -> tuple[str, ...]:
        return self.phase.subtitles[: self._revealed]

    def start(self) -> None:
        if self._started or self._token.cancelled:
            return
        self._started = True
        if not self.phase.subtitles:
            self._finish()
            return
        self._pending = self._timers.call_later(self._interval_ms, self._tick)

    def _tick(self) -> None:
        self._pending = None
        if self._token.cancelled or self._done:
            return
        subtitle = self.phase.subtitles[self._revealed]
        self._revealed += 1
        logger.debug(
            "Phase %d revealed %d/%d: %s",
            self.index,
            self._revealed,
            len(self.phase.subtitles),
            subtitle,
        )
        if self._revealed == len(self.phase.subtitles):
            self._done = True
        self._on_reveal(self.index, subtitle)
        if self._done:
            self._on_done(self.index)
            return
        if self._token.cancelled:
            return
        self._pending = self._timers.call_later(self._interval_ms, self._tick)

    def _finish(self) -> None:
        self._done = True
        self._on_done(self.index)

    def _release(self) -> None:
        if self._pending is not None:
            self._pending.cancel()
            self._pending = None
