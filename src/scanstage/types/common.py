"""Cross-module type aliases."""

from __future__ import annotations

from typing import Literal, TypeAlias

StageStatus: TypeAlias = Literal["pending", "active", "done"]
