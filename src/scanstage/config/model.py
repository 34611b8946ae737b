"""Config data model for the analysis-progress coordinator."""

from __future__ import annotations

import math
from collections.abc import Sequence
from dataclasses import dataclass, field, replace

from scanstage.constants.config import (
    DEFAULT_FOCUS_ROTATION_MS,
    DEFAULT_MIN_GATING_MS,
    DEFAULT_SUBTITLE_TICK_MS,
)
from scanstage.constants.stages import DEFAULT_STAGE_CATALOG
from scanstage.exceptions import ConfigError
from scanstage.model import Phase
from scanstage.types import TuningEntry


def default_stages() -> tuple[Phase, ...]:
    """Build the bundled audit stage catalog."""
    return tuple(
        Phase(label=label, weight=weight, subtitles=subtitles) for label, weight, subtitles in DEFAULT_STAGE_CATALOG
    )


def check_phases(phases: Sequence[Phase]) -> tuple[Phase, ...]:
    """Validate a phase list for the coordinator and return it as a tuple.

    The first phase is the gating phase: it must exist and carry no subtitles.
    Subtitle lists are copied into tuples so later edits to a caller's list
    cannot change the run.
    """
    resolved: list[Phase] = []
    for index, phase in enumerate(phases):
        if not isinstance(phase, Phase):
            raise ConfigError(f"phase {index} must be a Phase, got {type(phase).__name__}")
        if not isinstance(phase.label, str) or not phase.label.strip():
            raise ConfigError(f"phase {index} label must be a non-empty string")
        subtitles = phase.subtitles
        if not isinstance(subtitles, (list, tuple)):
            raise ConfigError(f"phase {index} subtitles must be a list of strings, got {type(subtitles).__name__}")
        if not all(isinstance(subtitle, str) for subtitle in subtitles):
            raise ConfigError(f"phase {index} subtitles must be a list of strings")
        resolved.append(phase if isinstance(subtitles, tuple) else replace(phase, subtitles=tuple(subtitles)))
    if not resolved:
        raise ConfigError("at least one phase is required (the gating phase)")
    if resolved[0].subtitles:
        raise ConfigError(f"gating phase {resolved[0].label!r} must not declare subtitles")
    return tuple(resolved)


@dataclass(frozen=True)
class ProgressTuning:
    """Timing knobs for the coordinator, in milliseconds.

    ``min_gating_ms`` is the floor before the gating phase can complete,
    ``subtitle_tick_ms`` the interval between subtitle reveals and
    ``focus_rotation_ms`` the interval between focus-pointer advances.
    """

    min_gating_ms: int = DEFAULT_MIN_GATING_MS
    subtitle_tick_ms: int = DEFAULT_SUBTITLE_TICK_MS
    focus_rotation_ms: int = DEFAULT_FOCUS_ROTATION_MS

    def __post_init__(self) -> None:
        for name in ("min_gating_ms", "subtitle_tick_ms", "focus_rotation_ms"):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, (int, float)):
                raise ConfigError(f"{name} must be a number, got {type(value).__name__}")
            if not math.isfinite(value):
                raise ConfigError(f"{name} must be finite, got {value}")
            if value < 0:
                raise ConfigError(f"{name} must be non-negative, got {value}")
        if self.focus_rotation_ms <= 0:
            raise ConfigError(f"focus_rotation_ms must be positive, got {self.focus_rotation_ms}")

    def to_dict(self) -> TuningEntry:
        return {
            "min_gating_ms": self.min_gating_ms,
            "subtitle_tick_ms": self.subtitle_tick_ms,
            "focus_rotation_ms": self.focus_rotation_ms,
        }


@dataclass(frozen=True)
class ProgressConfig:
    """Resolved coordinator config."""

    tuning: ProgressTuning = ProgressTuning()
    stages: tuple[Phase, ...] = field(default_factory=default_stages)

    @property
    def concurrent_stages(self) -> tuple[Phase, ...]:
        return self.stages[1:]

    @property
    def expected_running_ms(self) -> int:
        """Running-phase duration once the gate opens: tick × longest subtitle list."""
        longest = max((len(stage.subtitles) for stage in self.concurrent_stages), default=0)
        return self.tuning.subtitle_tick_ms * longest

    @property
    def minimum_total_ms(self) -> int:
        """Shortest possible end-to-end duration, with the job ready immediately."""
        return self.tuning.min_gating_ms + self.expected_running_ms
