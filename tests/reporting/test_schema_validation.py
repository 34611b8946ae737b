"""Tests for JSON Schema validation of timeline output."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import jsonschema
import pytest

from scanstage.config import ProgressConfig, ProgressTuning, load_config
from scanstage.constants.reporting import SCHEMA_VERSION
from scanstage.reporting import TimelineRecorder, build_timeline, write_timeline
from scanstage.runner import simulate_progress

SCHEMAS_DIR: Path = Path(__file__).resolve().parents[2] / "schemas"
TIMELINE_SCHEMA_PATH: Path = SCHEMAS_DIR / "timeline.schema.json"


def _load_schema(path: Path) -> dict[str, Any]:
    """Load a JSON Schema file from disk."""
    return json.loads(path.read_text(encoding="utf-8"))


@pytest.fixture()
def timeline_schema() -> dict[str, Any]:
    """Load the timeline JSON Schema."""
    return _load_schema(TIMELINE_SCHEMA_PATH)


def _recorded_run(config: ProgressConfig, **kwargs: Any) -> TimelineRecorder:
    recorder = TimelineRecorder()
    simulate_progress(config, listeners=(recorder,), **kwargs)
    return recorder


def test_timeline_schema_is_valid_draft(timeline_schema: dict[str, Any]) -> None:
    jsonschema.Draft202012Validator.check_schema(timeline_schema)


def test_completed_timeline_matches_schema(
    basic_config_root: Path,
    timeline_schema: dict[str, Any],
) -> None:
    config = load_config(basic_config_root)

    payload = build_timeline(config, _recorded_run(config))

    jsonschema.validate(instance=payload, schema=timeline_schema)
    assert payload["schema_version"] == SCHEMA_VERSION
    assert payload["frames"][-1]["phase"] == "complete"


def test_cancelled_timeline_matches_schema(
    basic_config_root: Path,
    timeline_schema: dict[str, Any],
) -> None:
    config = load_config(basic_config_root)

    payload = build_timeline(config, _recorded_run(config, ready_after_ms=250, timeout_ms=300))

    jsonschema.validate(instance=payload, schema=timeline_schema)
    assert all(frame["overall_percent"] < 100 for frame in payload["frames"])


def test_default_catalog_timeline_matches_schema(timeline_schema: dict[str, Any]) -> None:
    config = ProgressConfig(tuning=ProgressTuning(min_gating_ms=0, subtitle_tick_ms=1, focus_rotation_ms=3))

    payload = build_timeline(config, _recorded_run(config))

    jsonschema.validate(instance=payload, schema=timeline_schema)
    assert payload["stages"][0]["weight"] is None


def test_written_timeline_file_matches_schema(
    basic_config_root: Path,
    tmp_path: Path,
    timeline_schema: dict[str, Any],
) -> None:
    config = load_config(basic_config_root)
    recorder = _recorded_run(config)

    target = write_timeline(tmp_path / "run" / "frames.json", config, recorder)

    assert target == tmp_path / "run" / "frames.json"
    payload = json.loads(target.read_text(encoding="utf-8"))
    jsonschema.validate(instance=payload, schema=timeline_schema)
    assert len(payload["frames"]) == len(recorder.frames)


def test_schema_rejects_out_of_range_percent(
    basic_config_root: Path,
    timeline_schema: dict[str, Any],
) -> None:
    config = load_config(basic_config_root)
    payload = build_timeline(config, _recorded_run(config))
    payload["frames"][0]["overall_percent"] = 101

    with pytest.raises(jsonschema.ValidationError):
        jsonschema.validate(instance=payload, schema=timeline_schema)
