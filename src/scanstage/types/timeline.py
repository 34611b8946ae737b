"""Typed timeline payload structures."""

from __future__ import annotations

from typing import TypedDict

from scanstage.types.common import StageStatus


class PhaseStateEntry(TypedDict):
    """Serialized runtime state of one phase."""

    revealed_count: int
    is_done: bool


class TimelineFrame(TypedDict):
    """One recorded progress snapshot."""

    elapsed_ms: float
    phase: str
    overall_percent: int
    focus_pointer: int
    cancelled: bool
    per_phase: list[PhaseStateEntry]
    stage_statuses: list[StageStatus]


class StageEntry(TypedDict):
    """Serialized stage definition."""

    label: str
    weight: str | None
    subtitles: list[str]


class TuningEntry(TypedDict):
    """Serialized tuning values."""

    min_gating_ms: int
    subtitle_tick_ms: int
    focus_rotation_ms: int


class TimelinePayload(TypedDict):
    """Top-level timeline document written by ``scanstage run``."""

    schema_version: str
    tuning: TuningEntry
    stages: list[StageEntry]
    frames: list[TimelineFrame]
