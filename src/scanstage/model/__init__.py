"""Core data models for scanstage."""

from .entities import CoordinatorPhase, Phase, PhaseRuntimeState, ProgressSnapshot

__all__ = [
    "CoordinatorPhase",
    "Phase",
    "PhaseRuntimeState",
    "ProgressSnapshot",
]
