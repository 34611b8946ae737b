"""Shared pytest fixtures for repository-local test data."""

from __future__ import annotations

from pathlib import Path

import pytest

from scanstage.config import ProgressTuning
from scanstage.model import Phase
from scanstage.progress import VirtualTimers


@pytest.fixture(scope="session")
def fixtures_root() -> Path:
    """Return root directory for test fixtures."""
    return Path(__file__).parent / "fixtures"


@pytest.fixture(scope="session")
def basic_config_root(fixtures_root: Path) -> Path:
    """Return the workspace holding a valid ``scanstage.yaml``."""
    return fixtures_root / "configs" / "basic"


@pytest.fixture(scope="session")
def invalid_config_root(fixtures_root: Path) -> Path:
    """Return the workspace holding a ``scanstage.yaml`` with several errors."""
    return fixtures_root / "configs" / "invalid"


@pytest.fixture()
def timers() -> VirtualTimers:
    """Return a fresh simulated clock starting at t=0."""
    return VirtualTimers()


@pytest.fixture()
def scenario_phases() -> tuple[Phase, ...]:
    """Gating phase plus two concurrent phases with 2 and 1 subtitles."""
    return (
        Phase(label="Parsing"),
        Phase(label="Complexity", weight="50/100", subtitles=("a", "b")),
        Phase(label="Security", weight="50/100", subtitles=("c",)),
    )


@pytest.fixture()
def fast_tuning() -> ProgressTuning:
    """No gating floor, 10ms subtitle ticks, 25ms focus rotation."""
    return ProgressTuning(min_gating_ms=0, subtitle_tick_ms=10, focus_rotation_ms=25)
