"""Human-readable stdout rendering of progress snapshots."""

from __future__ import annotations

from collections.abc import Sequence

from scanstage.constants.branding import ASCII_LOGO_LINES, PROGRESS_TITLE
from scanstage.constants.reporting import (
    ANSI_CYAN,
    ANSI_GREEN,
    ANSI_RESET,
    ANSI_YELLOW,
    FOCUS_MARKER,
    PROGRESS_BAR_EMPTY,
    PROGRESS_BAR_FILL,
    PROGRESS_BAR_WIDTH,
    STAGE_COLORS,
    STAGE_MARKERS,
)
from scanstage.model import CoordinatorPhase, Phase, ProgressSnapshot
from scanstage.types import StageStatus


def _colorize(text: str, color: str) -> str:
    return f"{color}{text}{ANSI_RESET}"


def progress_bar(percent: int, width: int = PROGRESS_BAR_WIDTH) -> str:
    """Fixed-width bar for a 0-100 percentage."""
    clamped = max(0, min(percent, 100))
    filled = round(width * clamped / 100)
    return PROGRESS_BAR_FILL * filled + PROGRESS_BAR_EMPTY * (width - filled)


class StdoutRenderer:
    """Formats coordinator snapshots as terminal frames."""

    def __init__(
        self,
        phases: Sequence[Phase],
        *,
        color: bool = True,
        verbose: bool = False,
    ) -> None:
        self._phases = tuple(phases)
        self._color = color
        self._verbose = verbose

    def render(self, snapshot: ProgressSnapshot) -> str:
        """Render a full frame: header, overall bar and one line per stage."""
        sep = "  " + "─" * 38
        lines = [
            "",
            f"  {ASCII_LOGO_LINES[0]}",
            f"  {ASCII_LOGO_LINES[1]}",
            sep,
            f"  {PROGRESS_TITLE}  {self._render_bar(snapshot.overall_percent)} {snapshot.overall_percent:>3}%",
            f"  State       {self._render_phase(snapshot)}",
            "",
        ]
        for index, phase in enumerate(self._phases):
            lines.extend(self._render_stage(snapshot, index, phase))
        return "\n".join(lines)

    def render_status_line(self, snapshot: ProgressSnapshot) -> str:
        """Render a compact single-line status for each update."""
        parts = [
            f"[{snapshot.elapsed_ms / 1000:6.2f}s]",
            f"{snapshot.overall_percent:>3}%",
            snapshot.phase.value,
        ]
        focused = self._focused_stage(snapshot)
        if focused is not None:
            parts.append(f"{FOCUS_MARKER} {focused}")
        return " ".join(parts)

    def _render_bar(self, percent: int) -> str:
        bar = progress_bar(percent)
        if not self._color:
            return bar
        return _colorize(bar, ANSI_GREEN if percent >= 100 else ANSI_CYAN)

    def _render_phase(self, snapshot: ProgressSnapshot) -> str:
        label = snapshot.phase.value
        if snapshot.cancelled:
            label = f"{label} (cancelled)"
        if not self._color:
            return label
        color = ANSI_GREEN if snapshot.phase is CoordinatorPhase.COMPLETE else ANSI_YELLOW
        return _colorize(label, color)

    def _render_stage(self, snapshot: ProgressSnapshot, index: int, phase: Phase) -> list[str]:
        status: StageStatus = snapshot.stage_statuses[index] if index < len(snapshot.stage_statuses) else "pending"
        marker = STAGE_MARKERS[status]
        if self._color:
            marker = _colorize(marker, STAGE_COLORS[status])
        focus = FOCUS_MARKER if index and index == snapshot.focus_pointer else " "

        line = f"  {focus} {marker} {phase.label}"
        if phase.weight:
            line = f"{line}  ({phase.weight})"
        revealed = snapshot.per_phase[index].revealed_count if index < len(snapshot.per_phase) else 0
        if phase.subtitles:
            line = f"{line}  {revealed}/{len(phase.subtitles)}"

        lines = [line]
        shown = phase.subtitles[:revealed]
        if not self._verbose:
            shown = shown[-1:] if focus == FOCUS_MARKER else ()
        lines.extend(f"        - {subtitle}" for subtitle in shown)
        return lines

    def _focused_stage(self, snapshot: ProgressSnapshot) -> str | None:
        pointer = snapshot.focus_pointer
        if snapshot.phase is not CoordinatorPhase.RUNNING or not 0 < pointer < len(self._phases):
            return None
        return self._phases[pointer].label
