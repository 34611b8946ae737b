"""Stable validation error codes and allowed-key sets for config validation."""

from __future__ import annotations

CFG001: str = "CFG001"  # config file not found (explicit --config)
CFG002: str = "CFG002"  # invalid YAML parse
CFG003: str = "CFG003"  # top-level value is not a mapping
CFG004: str = "CFG004"  # unknown key
CFG005: str = "CFG005"  # invalid value type
CFG007: str = "CFG007"  # value out of range
CFG009: str = "CFG009"  # invalid nested mapping
CFG010: str = "CFG010"  # root directory not found

STG001: str = "STG001"  # empty stage list
STG002: str = "STG002"  # invalid stage entry
STG003: str = "STG003"  # gating stage declares subtitles

ALL_CFG_CODES: tuple[str, ...] = (
    CFG001,
    CFG002,
    CFG003,
    CFG004,
    CFG005,
    CFG007,
    CFG009,
    CFG010,
)

ALL_STG_CODES: tuple[str, ...] = (STG001, STG002, STG003)

ALLOWED_CONFIG_KEYS: frozenset[str] = frozenset({"tuning", "stages"})
ALLOWED_TUNING_KEYS: frozenset[str] = frozenset({"min_gating_ms", "subtitle_tick_ms", "focus_rotation_ms"})
ALLOWED_STAGE_KEYS: frozenset[str] = frozenset({"label", "weight", "subtitles"})
