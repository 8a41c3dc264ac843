"""Validates raw analyzer output against each stage's required fields."""

from typing import Any

from resume_review.review.exceptions import MalformedAnalyzerResponseError
from resume_review.review.models import STAGE_RESULT_TYPES, StageResult
from resume_review.review.stages import STAGE_FIELDS, ReviewStage

_MIN_SCORE = 0.0
_MAX_SCORE = 100.0


def validate_stage_result(stage: ReviewStage, data: Any) -> StageResult:
    """Validate a parsed analyzer object and build the typed stage result.

    Only the shape is checked: the score is a number within 0-100 and every
    list field is a list of strings. Unknown extra fields are ignored.

    Raises:
        MalformedAnalyzerResponseError: on any validation failure.
    """
    if stage not in STAGE_FIELDS:
        raise ValueError(f"Stage '{stage.value}' produces no result")
    if not isinstance(data, dict):
        raise MalformedAnalyzerResponseError(
            f"{stage.display_name}: analyzer result must be an object"
        )

    fields = STAGE_FIELDS[stage]
    _require_fields(stage, data, (fields.score_field, *fields.list_fields))
    values: dict[str, Any] = {
        fields.score_field: _build_score(stage, fields.score_field, data[fields.score_field])
    }
    for name in fields.list_fields:
        values[name] = _build_string_list(stage, name, data[name])
    return STAGE_RESULT_TYPES[stage](**values)


def build_json_schema(stage: ReviewStage) -> dict[str, object]:
    """Return the strict JSON schema an analyzer response must satisfy for a stage."""
    fields = STAGE_FIELDS[stage]
    properties: dict[str, object] = {fields.score_field: {"type": "number"}}
    for name in fields.list_fields:
        properties[name] = {"type": "array", "items": {"type": "string"}}
    return {
        "type": "object",
        "properties": properties,
        "required": [fields.score_field, *fields.list_fields],
        "additionalProperties": False,
    }


def _require_fields(stage: ReviewStage, data: dict[str, Any], names: tuple[str, ...]) -> None:
    missing = [name for name in names if name not in data]
    if missing:
        raise MalformedAnalyzerResponseError(
            f"{stage.display_name}: missing required fields: {', '.join(missing)}"
        )


def _build_score(stage: ReviewStage, name: str, raw: Any) -> float:
    if isinstance(raw, bool) or not isinstance(raw, (int, float)):
        raise MalformedAnalyzerResponseError(
            f"{stage.display_name}: '{name}' must be a number"
        )
    if not _MIN_SCORE <= raw <= _MAX_SCORE:
        raise MalformedAnalyzerResponseError(
            f"{stage.display_name}: '{name}' must be between "
            f"{_MIN_SCORE:g} and {_MAX_SCORE:g}, got {raw}"
        )
    return float(raw)


def _build_string_list(stage: ReviewStage, name: str, raw: Any) -> list[str]:
    if not isinstance(raw, list):
        raise MalformedAnalyzerResponseError(
            f"{stage.display_name}: '{name}' must be a list"
        )
    for index, item in enumerate(raw):
        if not isinstance(item, str):
            raise MalformedAnalyzerResponseError(
                f"{stage.display_name}: '{name}[{index}]' must be a string"
            )
    return list(raw)
