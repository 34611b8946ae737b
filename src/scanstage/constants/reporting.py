"""Constants for timeline output, atomic writing, and stdout formatting."""

from __future__ import annotations

TIMELINE_FILENAME: str = "timeline.json"
REPORT_TEMP_PREFIX: str = ".tmp-"
REPORT_TEMP_SUFFIX: str = ".json"

SCHEMA_VERSION: str = "1.0.0"

PROGRESS_BAR_WIDTH: int = 30
PROGRESS_BAR_FILL: str = "█"
PROGRESS_BAR_EMPTY: str = "░"

STAGE_MARKERS: dict[str, str] = {
    "done": "[x]",
    "active": "[~]",
    "pending": "[ ]",
}
FOCUS_MARKER: str = "›"

ANSI_RESET: str = "\033[0m"
ANSI_GREEN: str = "\033[32m"
ANSI_YELLOW: str = "\033[33m"
ANSI_CYAN: str = "\033[36m"
ANSI_DIM: str = "\033[2m"

STAGE_COLORS: dict[str, str] = {
    "done": ANSI_GREEN,
    "active": ANSI_YELLOW,
    "pending": ANSI_DIM,
}
