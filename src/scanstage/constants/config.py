"""Configuration defaults and filenames."""

from __future__ import annotations

CONFIG_FILENAME: str = "scanstage.yaml"

DEFAULT_MIN_GATING_MS: int = 1000
DEFAULT_SUBTITLE_TICK_MS: int = 300
DEFAULT_FOCUS_ROTATION_MS: int = 1500

TUNING_KEYS: tuple[str, ...] = ("min_gating_ms", "subtitle_tick_ms", "focus_rotation_ms")
POSITIVE_TUNING_KEYS: frozenset[str] = frozenset({"focus_rotation_ms"})
