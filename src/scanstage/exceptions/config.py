"""Configuration-related exceptions."""

from __future__ import annotations

from scanstage.exceptions.base import ScanStageError


class ConfigError(ScanStageError, ValueError):
    """Raised when coordinator or stage configuration is invalid."""
