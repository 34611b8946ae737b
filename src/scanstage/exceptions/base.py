"""Root exception for scanstage."""

from __future__ import annotations


class ScanStageError(Exception):
    """Base class for all scanstage errors."""
