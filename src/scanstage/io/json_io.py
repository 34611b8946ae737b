"""JSON read/write helpers with atomic persistence."""

from __future__ import annotations

import json
import os
import tempfile
from contextlib import suppress
from pathlib import Path

from scanstage.constants.reporting import REPORT_TEMP_PREFIX, REPORT_TEMP_SUFFIX


def load_json_file(path: Path) -> object:
    """Load and parse JSON from disk."""
    return json.loads(path.read_text(encoding="utf-8"))


def write_json_atomic(
    *,
    path: Path,
    payload: object,
    temp_prefix: str = REPORT_TEMP_PREFIX,
    temp_suffix: str = REPORT_TEMP_SUFFIX,
) -> Path:
    """Write *payload* next to *path* in a temp file, then rename it into place.

    Keys keep insertion order so frames read top to bottom in time order.
    Returns the final path.
    """
    path.parent.mkdir(parents=True, exist_ok=True)
    handle = tempfile.NamedTemporaryFile(
        mode="w",
        encoding="utf-8",
        dir=path.parent,
        prefix=temp_prefix,
        suffix=temp_suffix,
        delete=False,
    )
    temp_path = Path(handle.name)
    try:
        with handle:
            json.dump(payload, handle, indent=2, ensure_ascii=False)
            handle.write("\n")
        os.replace(temp_path, path)
    except BaseException:
        with suppress(FileNotFoundError):
            temp_path.unlink()
        raise
    return path
