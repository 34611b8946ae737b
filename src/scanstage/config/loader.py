"""Config loading and normalization for scanstage runs."""

from __future__ import annotations

from pathlib import Path
from typing import Any

import yaml

from scanstage.config.model import ProgressConfig, ProgressTuning, check_phases, default_stages
from scanstage.constants.config import CONFIG_FILENAME, TUNING_KEYS
from scanstage.exceptions import ConfigError
from scanstage.model import Phase


def load_config(root: Path, config_path: Path | None = None) -> ProgressConfig:
    """Load and validate coordinator config from ``scanstage.yaml`` or an explicit path."""
    root = root.resolve()
    path = config_path.resolve() if config_path else (root / CONFIG_FILENAME)
    if not path.exists():
        if config_path is not None:
            raise ConfigError(f"Config file not found: {path}")
        return ProgressConfig()

    try:
        raw = yaml.safe_load(path.read_text(encoding="utf-8"))
    except yaml.YAMLError as exc:
        raise ConfigError(f"Invalid YAML config file at {path}: {exc}") from exc

    if raw is None:
        raw = {}
    if not isinstance(raw, dict):
        raise ConfigError(f"Config file at {path} must be a YAML mapping")

    tuning_raw = raw.get("tuning", {})
    if tuning_raw is None:
        tuning_raw = {}
    if not isinstance(tuning_raw, dict):
        raise ConfigError("tuning must be a mapping")

    stages_raw = raw.get("stages")
    stages = default_stages() if stages_raw is None else _build_stages(stages_raw)

    return ProgressConfig(tuning=_build_tuning(tuning_raw), stages=check_phases(stages))


def _build_tuning(raw: dict[str, Any]) -> ProgressTuning:
    """Build ProgressTuning from the raw ``tuning`` block, keeping defaults for absent keys."""
    unknown = sorted(set(raw) - set(TUNING_KEYS))
    if unknown:
        raise ConfigError(f"tuning has unknown keys: {unknown}")
    values: dict[str, int] = {}
    for key in TUNING_KEYS:
        if key not in raw:
            continue
        value = raw[key]
        if isinstance(value, bool) or not isinstance(value, int):
            raise ConfigError(f"tuning.{key} must be an integer number of milliseconds")
        values[key] = value
    return ProgressTuning(**values)


def _build_stages(raw: Any) -> tuple[Phase, ...]:
    if not isinstance(raw, list) or not raw:
        raise ConfigError("stages must be a non-empty list")
    return tuple(_build_stage(entry, index) for index, entry in enumerate(raw))


def _build_stage(entry: Any, index: int) -> Phase:
    if not isinstance(entry, dict):
        raise ConfigError(f"stages[{index}] must be a mapping")
    label = entry.get("label")
    if not isinstance(label, str) or not label.strip():
        raise ConfigError(f"stages[{index}].label must be a non-empty string")
    weight = entry.get("weight")
    if weight is not None and not isinstance(weight, str):
        raise ConfigError(f"stages[{index}].weight must be a string")
    return Phase(
        label=label.strip(),
        weight=weight or None,
        subtitles=tuple(_ensure_string_list(entry.get("subtitles", []), f"stages[{index}].subtitles")),
    )


def _ensure_string_list(value: Any, key_name: str) -> list[str]:
    """Coerce a value to a list of strings, raising ConfigError on type mismatch."""
    if value is None:
        return []
    if not isinstance(value, (list, tuple)) or not all(isinstance(item, str) for item in value):
        raise ConfigError(f"{key_name} must be a list of strings")
    return list(value)
