"""Timer-driven analysis-progress coordinator."""

from __future__ import annotations

from scanstage.progress.aggregate import ProgressAggregator, round_half_up
from scanstage.progress.cancellation import CancellationToken
from scanstage.progress.coordinator import PhaseScheduler, SnapshotListener
from scanstage.progress.gate import PhaseGate
from scanstage.progress.rotator import FocusRotator
from scanstage.progress.ticker import SubtitleTicker
from scanstage.progress.timers import LoopTimers, TimerHandle, TimerScheduler, VirtualTimers

__all__ = [
    "CancellationToken",
    "FocusRotator",
    "LoopTimers",
    "PhaseGate",
    "PhaseScheduler",
    "ProgressAggregator",
    "SnapshotListener",
    "SubtitleTicker",
    "TimerHandle",
    "TimerScheduler",
    "VirtualTimers",
    "round_half_up",
]
