"""Config file validation for scanstage runs."""

from __future__ import annotations

import difflib
from pathlib import Path
from typing import Any

import yaml

from scanstage.constants.config import CONFIG_FILENAME, POSITIVE_TUNING_KEYS
from scanstage.constants.validation import (
    ALLOWED_CONFIG_KEYS,
    ALLOWED_STAGE_KEYS,
    ALLOWED_TUNING_KEYS,
    CFG001,
    CFG002,
    CFG003,
    CFG004,
    CFG005,
    CFG007,
    CFG009,
    STG001,
    STG002,
    STG003,
)
from scanstage.exceptions.validation import ValidationError


def validate_config_file(
    root: Path,
    config_path: Path | None = None,
    *,
    config_explicit: bool = False,
) -> list[ValidationError]:
    """Validate a scanstage.yaml file and return all validation errors.

    This is the collect-all entry point used by both ``scanstage validate-config``
    and ``scanstage run`` preflight.  It never raises; all problems are returned
    as :class:`ValidationError` instances.
    """
    errors: list[ValidationError] = []
    root = root.resolve()
    path = config_path.resolve() if config_path else (root / CONFIG_FILENAME)
    path_str = str(path)

    if not path.exists():
        if config_explicit:
            errors.append(
                ValidationError(
                    code=CFG001,
                    path=path_str,
                    field="",
                    message=f"config file not found: {path}",
                )
            )
        return errors

    try:
        raw = yaml.safe_load(path.read_text(encoding="utf-8"))
    except yaml.YAMLError as exc:
        errors.append(
            ValidationError(
                code=CFG002,
                path=path_str,
                field="",
                message=f"invalid YAML: {exc}",
            )
        )
        return errors

    if raw is None:
        return errors

    if not isinstance(raw, dict):
        errors.append(
            ValidationError(
                code=CFG003,
                path=path_str,
                field="",
                message=f"config must be a YAML mapping, got {type(raw).__name__}",
            )
        )
        return errors

    _check_unknown_keys(raw, ALLOWED_CONFIG_KEYS, prefix="", path_str=path_str, errors=errors)
    _validate_tuning_block(raw, path_str, errors)
    _validate_stages_block(raw, path_str, errors)
    return errors


def _suggest_key(unknown: str, allowed: frozenset[str]) -> str:
    """Return a 'did you mean ...' hint for a close key match, or empty string."""
    matches = difflib.get_close_matches(unknown, sorted(allowed), n=1, cutoff=0.6)
    if matches:
        return f"did you mean `{matches[0]}`?"
    return ""


def _check_unknown_keys(
    block: dict[Any, Any],
    allowed: frozenset[str],
    *,
    prefix: str,
    path_str: str,
    errors: list[ValidationError],
) -> None:
    for key in sorted(block.keys(), key=str):
        if key not in allowed:
            errors.append(
                ValidationError(
                    code=CFG004,
                    path=path_str,
                    field=f"{prefix}{key}",
                    message=f"unknown key `{prefix}{key}`",
                    hint=_suggest_key(str(key), allowed),
                )
            )


def _validate_tuning_block(
    raw: dict[str, Any],
    path_str: str,
    errors: list[ValidationError],
) -> None:
    """Validate the ``tuning`` nested mapping in scanstage.yaml."""
    if "tuning" not in raw or raw["tuning"] is None:
        return
    tuning = raw["tuning"]
    if not isinstance(tuning, dict):
        errors.append(
            ValidationError(
                code=CFG009,
                path=path_str,
                field="tuning",
                message="`tuning` must be a mapping",
            )
        )
        return

    _check_unknown_keys(tuning, ALLOWED_TUNING_KEYS, prefix="tuning.", path_str=path_str, errors=errors)
    for key in sorted(ALLOWED_TUNING_KEYS & set(tuning)):
        val = tuning[key]
        field = f"tuning.{key}"
        if isinstance(val, bool) or not isinstance(val, int):
            errors.append(
                ValidationError(
                    code=CFG005,
                    path=path_str,
                    field=field,
                    message=f"invalid type for `{field}`",
                    hint="expected an integer number of milliseconds",
                )
            )
        elif key in POSITIVE_TUNING_KEYS and val <= 0:
            errors.append(
                ValidationError(
                    code=CFG007,
                    path=path_str,
                    field=field,
                    message=f"`{field}` must be a positive integer, got {val}",
                )
            )
        elif val < 0:
            errors.append(
                ValidationError(
                    code=CFG007,
                    path=path_str,
                    field=field,
                    message=f"`{field}` must be a non-negative integer, got {val}",
                )
            )


def _validate_stages_block(
    raw: dict[str, Any],
    path_str: str,
    errors: list[ValidationError],
) -> None:
    """Validate the ``stages`` list in scanstage.yaml."""
    if "stages" not in raw or raw["stages"] is None:
        return
    stages = raw["stages"]
    if not isinstance(stages, list):
        errors.append(
            ValidationError(
                code=CFG005,
                path=path_str,
                field="stages",
                message="invalid type for `stages`",
                hint="expected a list of stage mappings",
            )
        )
        return
    if not stages:
        errors.append(
            ValidationError(
                code=STG001,
                path=path_str,
                field="stages",
                message="`stages` must contain at least the gating stage",
            )
        )
        return

    for index, entry in enumerate(stages):
        _validate_stage_entry(entry, index, path_str, errors)


def _validate_stage_entry(
    entry: Any,
    index: int,
    path_str: str,
    errors: list[ValidationError],
) -> None:
    prefix = f"stages[{index}]"
    if not isinstance(entry, dict):
        errors.append(
            ValidationError(
                code=STG002,
                path=path_str,
                field=prefix,
                message=f"`{prefix}` must be a mapping, got {type(entry).__name__}",
            )
        )
        return

    _check_unknown_keys(entry, ALLOWED_STAGE_KEYS, prefix=f"{prefix}.", path_str=path_str, errors=errors)

    label = entry.get("label")
    if not isinstance(label, str) or not label.strip():
        errors.append(
            ValidationError(
                code=STG002,
                path=path_str,
                field=f"{prefix}.label",
                message=f"`{prefix}.label` must be a non-empty string",
            )
        )

    weight = entry.get("weight")
    if weight is not None and not isinstance(weight, str):
        errors.append(
            ValidationError(
                code=STG002,
                path=path_str,
                field=f"{prefix}.weight",
                message=f"`{prefix}.weight` must be a string",
                hint='quote fractional weights, e.g. "20/100"',
            )
        )

    subtitles = entry.get("subtitles")
    if subtitles is None:
        return
    if not isinstance(subtitles, list) or not all(isinstance(item, str) for item in subtitles):
        errors.append(
            ValidationError(
                code=STG002,
                path=path_str,
                field=f"{prefix}.subtitles",
                message=f"`{prefix}.subtitles` must be a list of strings",
            )
        )
    elif index == 0 and subtitles:
        errors.append(
            ValidationError(
                code=STG003,
                path=path_str,
                field=f"{prefix}.subtitles",
                message="the gating stage (first entry) must not declare subtitles",
            )
        )
