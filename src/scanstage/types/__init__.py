"""Shared type aliases for scanstage."""

from .common import StageStatus
from .timeline import PhaseStateEntry, StageEntry, TimelineFrame, TimelinePayload, TuningEntry

__all__ = [
    "PhaseStateEntry",
    "StageEntry",
    "StageStatus",
    "TimelineFrame",
    "TimelinePayload",
    "TuningEntry",
]
