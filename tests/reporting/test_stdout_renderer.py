"""Tests for stdout frame rendering."""

from __future__ import annotations

import pytest

from scanstage.constants.reporting import ANSI_GREEN, ANSI_RESET, PROGRESS_BAR_WIDTH
from scanstage.model import CoordinatorPhase, Phase, PhaseRuntimeState, ProgressSnapshot
from scanstage.reporting import StdoutRenderer, progress_bar


def _snapshot(
    *,
    phase: CoordinatorPhase = CoordinatorPhase.RUNNING,
    revealed: tuple[int, int] = (1, 0),
    focus: int = 1,
    percent: int = 50,
    cancelled: bool = False,
) -> ProgressSnapshot:
    done = phase is CoordinatorPhase.COMPLETE
    return ProgressSnapshot(
        phase=phase,
        per_phase=(
            PhaseRuntimeState(is_done=phase is not CoordinatorPhase.GATING),
            PhaseRuntimeState(revealed_count=revealed[0], is_done=done),
            PhaseRuntimeState(revealed_count=revealed[1], is_done=done or revealed[1] == 1),
        ),
        focus_pointer=focus,
        overall_percent=percent,
        stage_statuses=("done", "active", "done") if not done else ("done", "done", "done"),
        elapsed_ms=1234.5,
        cancelled=cancelled,
    )


@pytest.mark.parametrize(
    ("percent", "filled"),
    [(0, 0), (50, 15), (99, 30), (100, 30), (150, 30), (-5, 0)],
)
def test_progress_bar_fill(percent: int, filled: int) -> None:
    bar = progress_bar(percent)

    assert len(bar) == PROGRESS_BAR_WIDTH
    assert bar.count("█") == filled


def test_render_full_frame_plain(scenario_phases: tuple[Phase, ...]) -> None:
    renderer = StdoutRenderer(scenario_phases, color=False)

    text = renderer.render(_snapshot())

    assert "Overall progress" in text
    assert " 50%" in text
    assert "State       running" in text
    assert "  › [~] Complexity  (50/100)  1/2" in text
    assert "        - a" in text
    assert "    [x] Security  (50/100)  0/1" in text
    assert "\033[" not in text


def test_render_hides_subtitles_of_unfocused_stages(scenario_phases: tuple[Phase, ...]) -> None:
    renderer = StdoutRenderer(scenario_phases, color=False)

    text = renderer.render(_snapshot(revealed=(1, 1), focus=2))

    assert "- a" not in text
    assert "- c" in text


def test_render_verbose_shows_all_revealed_subtitles(scenario_phases: tuple[Phase, ...]) -> None:
    renderer = StdoutRenderer(scenario_phases, color=False, verbose=True)

    text = renderer.render(_snapshot(revealed=(2, 1), focus=2))

    assert "- a" in text
    assert "- b" in text
    assert "- c" in text


def test_render_cancelled_state(scenario_phases: tuple[Phase, ...]) -> None:
    renderer = StdoutRenderer(scenario_phases, color=False)

    text = renderer.render(_snapshot(cancelled=True))

    assert "running (cancelled)" in text


def test_render_complete_with_color(scenario_phases: tuple[Phase, ...]) -> None:
    renderer = StdoutRenderer(scenario_phases, color=True)

    text = renderer.render(_snapshot(phase=CoordinatorPhase.COMPLETE, revealed=(2, 1), percent=100))

    assert f"{ANSI_GREEN}complete{ANSI_RESET}" in text
    assert "100%" in text


def test_status_line_names_focused_stage(scenario_phases: tuple[Phase, ...]) -> None:
    renderer = StdoutRenderer(scenario_phases, color=False)

    line = renderer.render_status_line(_snapshot(focus=2))

    assert line == "[  1.23s]  50% running › Security"


def test_status_line_without_focus_while_gating(scenario_phases: tuple[Phase, ...]) -> None:
    renderer = StdoutRenderer(scenario_phases, color=False)

    line = renderer.render_status_line(_snapshot(phase=CoordinatorPhase.GATING, focus=0, percent=0))

    assert line == "[  1.23s]   0% gating"
