"""Tests for the per-phase subtitle ticker."""

from __future__ import annotations

import pytest

from scanstage.model import Phase
from scanstage.progress import CancellationToken, SubtitleTicker, VirtualTimers


class _Recorder:
    def __init__(self, timers: VirtualTimers) -> None:
        self._timers = timers
        self.reveals: list[tuple[float, int, str]] = []
        self.done: list[tuple[float, int]] = []

    def on_reveal(self, index: int, subtitle: str) -> None:
        self.reveals.append((self._timers.now_ms(), index, subtitle))

    def on_done(self, index: int) -> None:
        self.done.append((self._timers.now_ms(), index))


def _ticker(
    timers: VirtualTimers,
    subtitles: tuple[str, ...],
    *,
    interval_ms: float = 10,
    token: CancellationToken | None = None,
) -> tuple[SubtitleTicker, _Recorder]:
    recorder = _Recorder(timers)
    ticker = SubtitleTicker(
        2,
        Phase(label="Security", subtitles=subtitles),
        timers=timers,
        token=token or CancellationToken(),
        interval_ms=interval_ms,
        on_reveal=recorder.on_reveal,
        on_done=recorder.on_done,
    )
    return ticker, recorder


def test_reveals_each_subtitle_one_interval_apart(timers: VirtualTimers) -> None:
    ticker, recorder = _ticker(timers, ("a", "b", "c"))

    ticker.start()
    timers.run_until_idle()

    assert recorder.reveals == [(10, 2, "a"), (20, 2, "b"), (30, 2, "c")]
    assert recorder.done == [(30, 2)]
    assert ticker.state.revealed_count == 3
    assert ticker.state.is_done
    assert ticker.revealed == ("a", "b", "c")


def test_empty_phase_is_done_immediately(timers: VirtualTimers) -> None:
    ticker, recorder = _ticker(timers, ())

    ticker.start()

    assert ticker.state.is_done
    assert recorder.reveals == []
    assert recorder.done == [(0, 2)]
    assert timers.pending == 0


def test_nothing_happens_before_start(timers: VirtualTimers) -> None:
    ticker, recorder = _ticker(timers, ("a",))

    timers.advance(100)

    assert recorder.reveals == []
    assert not ticker.state.is_done


def test_second_start_does_not_restart(timers: VirtualTimers) -> None:
    ticker, recorder = _ticker(timers, ("a", "b"))

    ticker.start()
    timers.advance(10)
    ticker.start()
    timers.run_until_idle()

    assert [subtitle for _, _, subtitle in recorder.reveals] == ["a", "b"]
    assert len(recorder.done) == 1


@pytest.mark.parametrize("cancel_at", [0, 10, 15, 20])
def test_cancel_keeps_revealed_state_and_stops(timers: VirtualTimers, cancel_at: int) -> None:
    token = CancellationToken()
    ticker, recorder = _ticker(timers, ("a", "b", "c"), token=token)
    ticker.start()
    timers.advance(cancel_at)
    revealed_before = ticker.state.revealed_count

    token.cancel()
    timers.advance(1_000)

    assert ticker.state.revealed_count == revealed_before == cancel_at // 10
    assert not ticker.state.is_done
    assert recorder.done == []
    assert timers.pending == 0


def test_revealed_count_is_monotonic_and_consistent_with_done(timers: VirtualTimers) -> None:
    ticker, _ = _ticker(timers, ("a", "b", "c", "d"), interval_ms=7)
    ticker.start()
    seen: list[int] = []

    for _ in range(6):
        timers.advance(7)
        state = ticker.state
        seen.append(state.revealed_count)
        if state.is_done:
            assert state.revealed_count == 4

    assert seen == sorted(seen)
    assert seen[-1] == 4
