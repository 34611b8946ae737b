"""End-to-end progress runs for the CLI.

The external audit job is simulated: it reports ready after a fixed delay.
``simulate_progress`` runs on a virtual clock and returns instantly;
``run_progress`` runs on the asyncio event loop in real time.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Iterable
from dataclasses import dataclass

from scanstage.config import ProgressConfig
from scanstage.exceptions import ConfigError
from scanstage.model import ProgressSnapshot
from scanstage.progress import PhaseScheduler, SnapshotListener, TimerHandle, VirtualTimers

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RunOutcome:
    """Final state of a progress run."""

    snapshot: ProgressSnapshot
    timed_out: bool = False

    @property
    def completed(self) -> bool:
        return self.snapshot.is_complete


def _check_delays(ready_after_ms: float, timeout_ms: float | None) -> None:
    if ready_after_ms < 0:
        raise ConfigError(f"ready_after_ms must be non-negative, got {ready_after_ms}")
    if timeout_ms is not None and timeout_ms <= 0:
        raise ConfigError(f"timeout must be positive, got {timeout_ms}ms")


def simulate_progress(
    config: ProgressConfig,
    *,
    ready_after_ms: float = 0.0,
    timeout_ms: float | None = None,
    listeners: Iterable[SnapshotListener] = (),
) -> RunOutcome:
    """Run the coordinator to the end on a simulated clock."""
    _check_delays(ready_after_ms, timeout_ms)
    timers = VirtualTimers()
    timeout_handle: TimerHandle | None = None

    def _release_timeout() -> None:
        if timeout_handle is not None:
            timeout_handle.cancel()

    def _time_out() -> None:
        ready_handle.cancel()
        scheduler.cancel()

    scheduler = PhaseScheduler.from_config(config, timers=timers, on_complete=_release_timeout)
    for listener in listeners:
        scheduler.add_listener(listener)

    # Pending host timers would otherwise move the clock past the end of the run.
    ready_handle = timers.call_later(ready_after_ms, scheduler.set_external_ready)
    if timeout_ms is not None:
        timeout_handle = timers.call_later(timeout_ms, _time_out)
    scheduler.start()
    timers.run_until_idle()

    snapshot = scheduler.snapshot()
    timed_out = scheduler.cancelled
    if timed_out:
        logger.warning("Simulated run timed out after %.0fms in %s", timeout_ms, snapshot.phase.value)
    return RunOutcome(snapshot=snapshot, timed_out=timed_out)


async def run_progress(
    config: ProgressConfig,
    *,
    ready_after_ms: float = 0.0,
    timeout_ms: float | None = None,
    listeners: Iterable[SnapshotListener] = (),
) -> RunOutcome:
    """Run the coordinator on the running event loop in real time."""
    _check_delays(ready_after_ms, timeout_ms)
    scheduler = PhaseScheduler.from_config(config)
    for listener in listeners:
        scheduler.add_listener(listener)

    ready = asyncio.Event()
    loop = asyncio.get_running_loop()
    ready_handle = loop.call_later(ready_after_ms / 1000.0, ready.set)
    timeout_s = timeout_ms / 1000.0 if timeout_ms is not None else None
    try:
        snapshot = await asyncio.wait_for(scheduler.run(ready), timeout=timeout_s)
    except TimeoutError:
        logger.warning("Run timed out after %.0fms in %s", timeout_ms, scheduler.phase.value)
        return RunOutcome(snapshot=scheduler.snapshot(), timed_out=True)
    finally:
        ready_handle.cancel()
    return RunOutcome(snapshot=snapshot)
