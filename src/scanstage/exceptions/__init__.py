"""Shared exception hierarchy for scanstage."""

from __future__ import annotations

from .base import ScanStageError
from .config import ConfigError

__all__ = [
    "ConfigError",
    "ScanStageError",
]
