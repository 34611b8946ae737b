"""Tests for the virtual and loop-backed timer schedulers."""

from __future__ import annotations

import asyncio

import pytest

from scanstage.progress import LoopTimers, VirtualTimers


def test_advance_fires_due_timers_in_time_then_schedule_order(timers: VirtualTimers) -> None:
    fired: list[str] = []
    timers.call_later(20, lambda: fired.append("late"))
    timers.call_later(10, lambda: fired.append("first"))
    timers.call_later(10, lambda: fired.append("second"))

    count = timers.advance(15)

    assert fired == ["first", "second"]
    assert count == 2
    assert timers.now_ms() == 15
    assert timers.pending == 1


def test_callbacks_see_their_own_due_time(timers: VirtualTimers) -> None:
    seen: list[float] = []
    timers.call_later(7, lambda: seen.append(timers.now_ms()))

    timers.advance(100)

    assert seen == [7]
    assert timers.now_ms() == 100


def test_timer_scheduled_from_callback_fires_within_window(timers: VirtualTimers) -> None:
    fired: list[float] = []

    def _chain() -> None:
        fired.append(timers.now_ms())
        if len(fired) < 3:
            timers.call_later(10, _chain)

    timers.call_later(10, _chain)
    timers.advance(30)

    assert fired == [10, 20, 30]


def test_cancelled_timer_never_fires(timers: VirtualTimers) -> None:
    fired: list[int] = []
    handle = timers.call_later(5, lambda: fired.append(1))

    handle.cancel()
    timers.advance(10)

    assert fired == []
    assert timers.pending == 0
    assert timers.next_due_ms is None


def test_negative_delays_are_rejected(timers: VirtualTimers) -> None:
    with pytest.raises(ValueError, match="delay_ms"):
        timers.call_later(-1, lambda: None)
    with pytest.raises(ValueError, match="delta_ms"):
        timers.advance(-1)


def test_run_until_idle_stops_at_last_due_time(timers: VirtualTimers) -> None:
    timers.call_later(40, lambda: None)
    timers.call_later(15, lambda: None)

    assert timers.run_until_idle() == 2
    assert timers.now_ms() == 40


def test_run_until_idle_guards_against_endless_rescheduling(timers: VirtualTimers) -> None:
    def _forever() -> None:
        timers.call_later(1, _forever)

    timers.call_later(1, _forever)

    with pytest.raises(RuntimeError, match="still pending"):
        timers.run_until_idle(max_timers=5)


def test_loop_timers_fire_on_the_event_loop() -> None:
    async def _scenario() -> tuple[float, float]:
        loop_timers = LoopTimers()
        fired = asyncio.Event()
        started = loop_timers.now_ms()
        loop_timers.call_later(5, fired.set)
        await asyncio.wait_for(fired.wait(), timeout=2)
        return started, loop_timers.now_ms()

    started, finished = asyncio.run(_scenario())

    assert finished >= started


def test_loop_timers_handle_can_be_cancelled() -> None:
    async def _scenario() -> bool:
        loop_timers = LoopTimers(asyncio.get_running_loop())
        fired: list[int] = []
        handle = loop_timers.call_later(1, lambda: fired.append(1))
        handle.cancel()
        await asyncio.sleep(0.01)
        return bool(fired)

    assert asyncio.run(_scenario()) is False
