"""Reporting helpers for progress frames."""

from __future__ import annotations

from scanstage.reporting.stdout import StdoutRenderer, progress_bar
from scanstage.reporting.timeline import TimelineRecorder, build_timeline, write_timeline

__all__ = [
    "StdoutRenderer",
    "TimelineRecorder",
    "build_timeline",
    "progress_bar",
    "write_timeline",
]
