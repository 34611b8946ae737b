"""Tests for JSON IO helpers."""

from __future__ import annotations

from pathlib import Path

import pytest

from scanstage.io import load_json_file, write_json_atomic


def test_write_json_atomic_cleans_temp_file_on_error(tmp_path: Path) -> None:
    out_path = tmp_path / "timeline.json"
    temp_prefix = ".tmp-"
    temp_suffix = ".json"

    with pytest.raises(TypeError):
        write_json_atomic(
            path=out_path,
            payload={"bad": object()},
            temp_prefix=temp_prefix,
            temp_suffix=temp_suffix,
        )

    leftovers = [
        item for item in tmp_path.iterdir() if item.name.startswith(temp_prefix) and item.name.endswith(temp_suffix)
    ]
    assert not leftovers
    assert not out_path.exists()


def test_write_json_atomic_creates_parents_and_keeps_key_order(tmp_path: Path) -> None:
    out_path = tmp_path / "nested" / "dir" / "timeline.json"

    written = write_json_atomic(path=out_path, payload={"zeta": 1, "alpha": "Übersicht"})

    assert written == out_path
    text = out_path.read_text(encoding="utf-8")
    assert text.index("zeta") < text.index("alpha")
    assert "Übersicht" in text
    assert load_json_file(out_path) == {"zeta": 1, "alpha": "Übersicht"}


def test_write_json_atomic_replaces_existing_file(tmp_path: Path) -> None:
    out_path = tmp_path / "timeline.json"
    out_path.write_text('{"old": true}', encoding="utf-8")

    write_json_atomic(path=out_path, payload={"new": True})

    assert load_json_file(out_path) == {"new": True}
    assert [item.name for item in tmp_path.iterdir()] == ["timeline.json"]
