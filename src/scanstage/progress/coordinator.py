"""Staged analysis-progress coordinator.

The coordinator is a three-state machine driven entirely by timer callbacks::

    GATING ──gate opens──▶ RUNNING ──all tickers done──▶ COMPLETE

``GATING`` waits on the external readiness signal (see :class:`PhaseGate`).
``RUNNING`` starts one :class:`SubtitleTicker` per non-initial phase at the
same instant, plus the cosmetic :class:`FocusRotator`, and completes when the
last ticker finishes.  ``COMPLETE`` is terminal and fires ``on_complete``
exactly once.

A single :class:`CancellationToken` is handed to every unit; :meth:`cancel`
sets it, releases all pending timers and guarantees no further mutation.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable, Sequence
from typing import Any, TypeAlias

from scanstage.config.model import ProgressConfig, ProgressTuning, check_phases
from scanstage.constants.progress import NO_FOCUS
from scanstage.exceptions import ConfigError, ScanStageError
from scanstage.model import CoordinatorPhase, Phase, PhaseRuntimeState, ProgressSnapshot
from scanstage.progress.aggregate import ProgressAggregator
from scanstage.progress.cancellation import CancellationToken
from scanstage.progress.gate import PhaseGate
from scanstage.progress.rotator import FocusRotator
from scanstage.progress.ticker import SubtitleTicker
from scanstage.progress.timers import LoopTimers, TimerScheduler

logger = logging.getLogger(__name__)

SnapshotListener: TypeAlias = Callable[[ProgressSnapshot], None]


class PhaseScheduler:
    """Drives one gating phase followed by N concurrently revealing phases."""

    def __init__(
        self,
        phases: Sequence[Phase],
        *,
        tuning: ProgressTuning | None = None,
        timers: TimerScheduler | None = None,
        on_complete: Callable[[], None] | None = None,
        on_update: SnapshotListener | None = None,
        external_ready: bool = False,
    ) -> None:
        self._phases = check_phases(phases)
        if tuning is None:
            tuning = ProgressTuning()
        if not isinstance(tuning, ProgressTuning):
            raise ConfigError(f"tuning must be a ProgressTuning, got {type(tuning).__name__}")
        self._tuning = tuning
        self._timers = timers
        self._on_complete = on_complete
        self._listeners: list[SnapshotListener] = [on_update] if on_update is not None else []
        self._external_ready = bool(external_ready)

        self._token = CancellationToken()
        self._aggregator = ProgressAggregator(self._phases)
        self._phase = CoordinatorPhase.GATING
        self._started_at: float | None = None
        self._gate: PhaseGate | None = None
        self._tickers: tuple[SubtitleTicker, ...] = ()
        self._rotator: FocusRotator | None = None

    @classmethod
    def from_config(cls, config: ProgressConfig, **kwargs: Any) -> PhaseScheduler:
        """Build a scheduler from a loaded :class:`ProgressConfig`."""
        return cls(config.stages, tuning=config.tuning, **kwargs)

    @property
    def phase(self) -> CoordinatorPhase:
        return self._phase

    @property
    def phases(self) -> tuple[Phase, ...]:
        return self._phases

    @property
    def tuning(self) -> ProgressTuning:
        return self._tuning

    @property
    def started(self) -> bool:
        return self._started_at is not None

    @property
    def cancelled(self) -> bool:
        return self._token.cancelled

    @property
    def focus_pointer(self) -> int:
        return self._rotator.pointer if self._rotator is not None else NO_FOCUS

    def add_listener(self, listener: SnapshotListener) -> None:
        self._listeners.append(listener)

    def remove_listener(self, listener: SnapshotListener) -> None:
        if listener in self._listeners:
            self._listeners.remove(listener)

    def revealed_subtitles(self, index: int) -> tuple[str, ...]:
        """Subtitles revealed so far for the phase at *index*."""
        if index <= 0 or index > len(self._tickers):
            return ()
        return self._tickers[index - 1].revealed

    def start(self) -> None:
        """Begin gating. Calling again, after cancellation or completion, is a no-op.

        Without an explicit *timers* scheduler this binds to the running event
        loop, so it must then be called from inside one.
        """
        if self._started_at is not None or self._token.cancelled:
            return
        if self._timers is None:
            try:
                self._timers = LoopTimers()
            except RuntimeError as exc:
                raise ScanStageError(
                    "start() needs a running event loop or an explicit TimerScheduler (e.g. VirtualTimers)"
                ) from exc
        self._started_at = self._timers.now_ms()
        self._gate = PhaseGate(
            timers=self._timers,
            token=self._token,
            min_duration_ms=self._tuning.min_gating_ms,
            on_open=self._enter_running,
            ready=self._external_ready,
        )
        logger.info(
            "Analysis progress started: %d concurrent phase(s), gating floor %sms",
            len(self._phases) - 1,
            self._tuning.min_gating_ms,
        )
        self._emit()
        self._gate.start()

    def set_external_ready(self, value: bool = True) -> None:
        """Forward the host's readiness flag (monotone: false → true)."""
        if self._gate is not None:
            self._gate.signal_ready(value)
            self._external_ready = self._gate.is_ready
            return
        if not value:
            if self._external_ready:
                logger.warning("Ignoring readiness reset; the external signal is monotone")
            return
        self._external_ready = True

    def cancel(self) -> None:
        """Tear down. Idempotent; never fires ``on_complete``."""
        if self._phase is CoordinatorPhase.COMPLETE:
            return
        if self._token.cancel():
            logger.info("Analysis progress cancelled during %s", self._phase.value)

    def snapshot(self) -> ProgressSnapshot:
        """Pure projection of the internal counters."""
        states = self._states()
        elapsed = 0.0
        if self._started_at is not None and self._timers is not None:
            elapsed = self._timers.now_ms() - self._started_at
        return ProgressSnapshot(
            phase=self._phase,
            per_phase=states,
            focus_pointer=self.focus_pointer,
            overall_percent=self._aggregator.percent(self._phase, states),
            stage_statuses=self._aggregator.stage_statuses(self._phase, states),
            elapsed_ms=elapsed,
            cancelled=self._token.cancelled,
        )

    async def run(self, ready: asyncio.Event | None = None) -> ProgressSnapshot:
        """Drive the coordinator on the running event loop until completion.

        *ready*, when given, is forwarded to :meth:`set_external_ready` once
        set.  If the awaiting task is cancelled the coordinator is torn down
        and ``CancelledError`` propagates.
        """
        loop = asyncio.get_running_loop()
        if self._timers is None:
            self._timers = LoopTimers(loop)
        elif not isinstance(self._timers, LoopTimers):
            raise RuntimeError("run() requires loop-backed timers")
        if self._token.cancelled or self._phase is CoordinatorPhase.COMPLETE:
            return self.snapshot()

        finished: asyncio.Future[ProgressSnapshot] = loop.create_future()

        def _resolve(snapshot: ProgressSnapshot) -> None:
            if snapshot.is_complete and not finished.done():
                finished.set_result(snapshot)

        self.add_listener(_resolve)
        watcher = asyncio.create_task(self._forward_ready(ready)) if ready is not None else None
        try:
            self.start()
            return await finished
        finally:
            if watcher is not None:
                watcher.cancel()
            self.remove_listener(_resolve)
            if self._phase is not CoordinatorPhase.COMPLETE:
                self.cancel()

    async def _forward_ready(self, ready: asyncio.Event) -> None:
        await ready.wait()
        self.set_external_ready(True)

    def _states(self) -> tuple[PhaseRuntimeState, ...]:
        gating = PhaseRuntimeState(revealed_count=0, is_done=self._phase is not CoordinatorPhase.GATING)
        if self._tickers:
            return (gating, *(ticker.state for ticker in self._tickers))
        return (gating, *(PhaseRuntimeState() for _ in self._phases[1:]))

    def _enter_running(self) -> None:
        if self._token.cancelled or self._phase is not CoordinatorPhase.GATING:
            return
        assert self._timers is not None
        self._phase = CoordinatorPhase.RUNNING
        logger.info("Gating phase complete; running %d phase(s)", len(self._phases) - 1)
        self._tickers = tuple(
            SubtitleTicker(
                index,
                phase,
                timers=self._timers,
                token=self._token,
                interval_ms=self._tuning.subtitle_tick_ms,
                on_reveal=self._handle_reveal,
                on_done=self._handle_done,
            )
            for index, phase in enumerate(self._phases[1:], start=1)
        )
        if not self._tickers:
            self._complete()
            return
        self._rotator = FocusRotator(
            len(self._tickers),
            timers=self._timers,
            token=self._token,
            interval_ms=self._tuning.focus_rotation_ms,
            on_rotate=self._handle_rotate,
        )
        self._rotator.start()
        self._emit()
        for ticker in self._tickers:
            if self._phase is not CoordinatorPhase.RUNNING or self._token.cancelled:
                break
            ticker.start()

    def _handle_reveal(self, index: int, subtitle: str) -> None:
        if self._token.cancelled:
            return
        if self._tickers[index - 1].state.is_done:
            # _handle_done publishes the frame for the final reveal.
            return
        self._emit()

    def _handle_done(self, index: int) -> None:
        if self._token.cancelled or self._phase is not CoordinatorPhase.RUNNING:
            return
        logger.debug("Phase %d (%s) done", index, self._phases[index].label)
        if all(ticker.state.is_done for ticker in self._tickers):
            self._complete()
            return
        self._emit()

    def _handle_rotate(self, pointer: int) -> None:
        if self._token.cancelled or self._phase is not CoordinatorPhase.RUNNING:
            return
        self._emit()

    def _complete(self) -> None:
        if self._phase is CoordinatorPhase.COMPLETE:
            return
        self._phase = CoordinatorPhase.COMPLETE
        if self._rotator is not None:
            self._rotator.stop()
        logger.info("Analysis progress complete")
        self._emit()
        if self._on_complete is not None:
            self._on_complete()

    def _emit(self) -> None:
        snapshot = self.snapshot()
        for listener in list(self._listeners):
            try:
                listener(snapshot)
            except Exception:
                logger.exception("Progress listener %r failed on a %s frame", listener, snapshot.phase.value)
