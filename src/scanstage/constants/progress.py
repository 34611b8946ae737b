"""Constants for progress aggregation and focus rotation."""

from __future__ import annotations

GATING_UNITS: int = 1
PERCENT_COMPLETE: int = 100
PERCENT_CAP_INCOMPLETE: int = 99

FIRST_CONCURRENT_INDEX: int = 1
NO_FOCUS: int = 0

