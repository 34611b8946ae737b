"""Core data models for the analysis-progress coordinator."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from scanstage.types import PhaseStateEntry, StageEntry, StageStatus, TimelineFrame


class CoordinatorPhase(Enum):
    """Lifecycle of a coordinator. Transitions only move forward."""

    GATING = "gating"
    RUNNING = "running"
    COMPLETE = "complete"


@dataclass(frozen=True)
class Phase:
    """One labelled unit of work with subtitles revealed over time."""

    label: str
    weight: str | None = None
    subtitles: tuple[str, ...] = ()

    def to_dict(self) -> StageEntry:
        return {
            "label": self.label,
            "weight": self.weight,
            "subtitles": list(self.subtitles),
        }


@dataclass(frozen=True)
class PhaseRuntimeState:
    """Reveal progress of one phase at a point in time."""

    revealed_count: int = 0
    is_done: bool = False

    def to_dict(self) -> PhaseStateEntry:
        return {"revealed_count": self.revealed_count, "is_done": self.is_done}


@dataclass(frozen=True)
class ProgressSnapshot:
    """Observable coordinator state, safe to read at any time."""

    phase: CoordinatorPhase
    per_phase: tuple[PhaseRuntimeState, ...]
    focus_pointer: int
    overall_percent: int
    stage_statuses: tuple[StageStatus, ...] = ()
    elapsed_ms: float = 0.0
    cancelled: bool = False

    @property
    def is_complete(self) -> bool:
        return self.phase is CoordinatorPhase.COMPLETE

    def to_dict(self) -> TimelineFrame:
        """Serialize to a JSON-compatible timeline frame."""
        return {
            "elapsed_ms": round(self.elapsed_ms, 3),
            "phase": self.phase.value,
            "overall_percent": self.overall_percent,
            "focus_pointer": self.focus_pointer,
            "cancelled": self.cancelled,
            "per_phase": [state.to_dict() for state in self.per_phase],
            "stage_statuses": list(self.stage_statuses),
        }
