"""Timeline recording and JSON output for ``scanstage run``."""

from __future__ import annotations

import logging
from pathlib import Path

from scanstage.config import ProgressConfig
from scanstage.constants.reporting import SCHEMA_VERSION, TIMELINE_FILENAME
from scanstage.io import write_json_atomic
from scanstage.model import ProgressSnapshot
from scanstage.types import TimelineFrame, TimelinePayload

logger = logging.getLogger(__name__)


class TimelineRecorder:
    """Snapshot listener that keeps every frame in arrival order."""

    def __init__(self) -> None:
        self._frames: list[ProgressSnapshot] = []

    def __call__(self, snapshot: ProgressSnapshot) -> None:
        self._frames.append(snapshot)

    @property
    def frames(self) -> tuple[ProgressSnapshot, ...]:
        return tuple(self._frames)

    @property
    def last(self) -> ProgressSnapshot | None:
        return self._frames[-1] if self._frames else None

    def percents(self) -> list[int]:
        return [frame.overall_percent for frame in self._frames]

    def serialize_frames(self) -> list[TimelineFrame]:
        return [frame.to_dict() for frame in self._frames]


def build_timeline(config: ProgressConfig, recorder: TimelineRecorder) -> TimelinePayload:
    """Assemble the timeline document for a finished (or cancelled) run."""
    return {
        "schema_version": SCHEMA_VERSION,
        "tuning": config.tuning.to_dict(),
        "stages": [stage.to_dict() for stage in config.stages],
        "frames": recorder.serialize_frames(),
    }


def write_timeline(path: Path, config: ProgressConfig, recorder: TimelineRecorder) -> Path:
    """Write the timeline JSON atomically. A directory *path* gets ``timeline.json``."""
    target = path / TIMELINE_FILENAME if path.is_dir() else path
    write_json_atomic(path=target, payload=build_timeline(config, recorder))
    logger.info("Wrote %d timeline frame(s) to %s", len(recorder.frames), target)
    return target
