"""Overall completion percentage and per-stage display states.

Everything here is a pure projection over the coordinator's counters, so it
can be recomputed on every tick and read at any time.
"""

from __future__ import annotations

import math
from collections.abc import Sequence

from scanstage.constants.progress import (
    GATING_UNITS,
    PERCENT_CAP_INCOMPLETE,
    PERCENT_COMPLETE,
)
from scanstage.model import CoordinatorPhase, Phase, PhaseRuntimeState
from scanstage.types import StageStatus


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves away from zero for positives."""
    return math.floor(value + 0.5)


class ProgressAggregator:
    """Computes the overall percentage from per-phase reveal counts.

    The work is measured in units: one per subtitle of every concurrent phase
    plus a fixed allowance for the gating phase::

        total = Σ len(subtitles[1:]) + 1
        done  = Σ min(revealed_i, len(subtitles_i)) + (1 if gating finished)
        pct   = round(100 × done / max(total, 1))

    The result is capped below 100 until the coordinator is complete, so a
    rounding edge can never report 100 before the completion callback fires.
    """

    def __init__(self, phases: Sequence[Phase]) -> None:
        self._phases = tuple(phases)
        self._total_units = sum(len(phase.subtitles) for phase in self._phases[1:]) + GATING_UNITS

    @property
    def total_units(self) -> int:
        return self._total_units

    def done_units(self, phase: CoordinatorPhase, states: Sequence[PhaseRuntimeState]) -> int:
        gating_done = GATING_UNITS if phase is not CoordinatorPhase.GATING else 0
        revealed = sum(
            min(state.revealed_count, len(stage.subtitles))
            for stage, state in zip(self._phases[1:], states[1:], strict=False)
        )
        return revealed + gating_done

    def percent(self, phase: CoordinatorPhase, states: Sequence[PhaseRuntimeState]) -> int:
        """Overall completion in ``[0, 100]``; 100 only once ``COMPLETE``."""
        if phase is CoordinatorPhase.COMPLETE:
            return PERCENT_COMPLETE
        raw = round_half_up(PERCENT_COMPLETE * self.done_units(phase, states) / max(self._total_units, 1))
        return max(0, min(raw, PERCENT_CAP_INCOMPLETE))

    def stage_statuses(
        self,
        phase: CoordinatorPhase,
        states: Sequence[PhaseRuntimeState],
    ) -> tuple[StageStatus, ...]:
        """Display state per phase: pending, active or done."""
        statuses: list[StageStatus] = []
        for index, state in enumerate(states):
            if index == 0:
                statuses.append("active" if phase is CoordinatorPhase.GATING else "done")
            elif state.is_done:
                statuses.append("done")
            elif phase is CoordinatorPhase.GATING:
                statuses.append("pending")
            else:
                statuses.append("active")
        return tuple(statuses)
