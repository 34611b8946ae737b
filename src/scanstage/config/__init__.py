"""Configuration loading, validation, and normalization for scanstage runs.

This package facade re-exports all public names so that
``from scanstage.config import ...`` statements stay short.
"""

from __future__ import annotations

from scanstage.config.loader import load_config
from scanstage.config.model import ProgressConfig, ProgressTuning, check_phases, default_stages
from scanstage.config.validator import _suggest_key, validate_config_file

__all__ = [
    "ProgressConfig",
    "ProgressTuning",
    "_suggest_key",
    "check_phases",
    "default_stages",
    "load_config",
    "validate_config_file",
]
