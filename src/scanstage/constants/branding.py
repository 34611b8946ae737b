"""Branding constants for terminal output."""

from __future__ import annotations

BRAND_NAME: str = "SCANSTAGE"
ASCII_LOGO_LINES: tuple[str, ...] = (
    ">_ SCANSTAGE",
    "     // audit analysis in progress",
)
PROGRESS_TITLE: str = "Overall progress"
CLI_DESCRIPTION: str = "\n".join((*ASCII_LOGO_LINES, "", f"{BRAND_NAME} analysis-progress coordinator"))
