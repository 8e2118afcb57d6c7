"""Builds domain records from raw JSON payloads."""

import math
from typing import Any

from biomarker_engine.interpretation.exceptions import PayloadValidationError
from biomarker_engine.interpretation.models import (
    AnalysisRequest,
    Gender,
    LearnedMarker,
    MetricPoint,
    ReferenceRange,
)


def validate_request(data: Any, default_gender: Gender = Gender.MALE) -> AnalysisRequest:
    """Validate a raw analysis request and build an AnalysisRequest.

    Raises:
        PayloadValidationError: on any validation failure.
    """
    if not isinstance(data, dict):
        raise PayloadValidationError("Request must be an object")
    for field in ("marker", "value", "date"):
        if field not in data:
            raise PayloadValidationError(f"Missing required field: {field}")

    marker = _require_string(data["marker"], "marker")
    date = _require_string(data["date"], "date")
    value = parse_number(data["value"], "value")
    gender = build_gender(data.get("gender"), default_gender)
    history = tuple(
        build_metric_point(item, i)
        for i, item in enumerate(_require_list(data.get("history"), "history"))
    )
    reference_range = _build_reference_range(data.get("reference_range"))
    learned: dict[str, LearnedMarker] = {}
    for i, item in enumerate(_require_list(data.get("learned"), "learned")):
        entry = build_learned_marker(item, i)
        learned[entry.key] = entry

    return AnalysisRequest(
        marker=marker,
        value=value,
        date=date,
        gender=gender,
        history=history,
        reference_range=reference_range,
        learned=learned,
    )


def build_gender(raw: Any, default: Gender = Gender.MALE) -> Gender:
    if raw is None:
        return default
    try:
        return Gender(raw)
    except ValueError:
        raise PayloadValidationError(
            f"'gender' must be one of {[g.value for g in Gender]}, got {raw!r}"
        ) from None


def build_metric_point(raw: Any, index: int) -> MetricPoint:
    if not isinstance(raw, dict):
        raise PayloadValidationError(f"History point at index {index} must be an object")
    where = f"history[{index}]"
    if "date" not in raw or "value" not in raw:
        raise PayloadValidationError(f"{where}: 'date' and 'value' are required")
    return MetricPoint(
        date=_require_string(raw["date"], f"{where}.date"),
        value=parse_number(raw["value"], f"{where}.value"),
        unit=_optional_string(raw.get("unit"), f"{where}.unit"),
        label=_optional_string(raw.get("label"), f"{where}.label"),
        ref_min=_optional_number(raw.get("ref_min"), f"{where}.ref_min"),
        ref_max=_optional_number(raw.get("ref_max"), f"{where}.ref_max"),
        created_at=raw.get("created_at") if isinstance(raw.get("created_at"), str) else None,
    )


def build_learned_marker(raw: Any, index: int) -> LearnedMarker:
    if not isinstance(raw, dict):
        raise PayloadValidationError(f"Learned marker at index {index} must be an object")
    where = f"learned[{index}]"
    key = raw.get("key")
    if not key or not isinstance(key, str):
        raise PayloadValidationError(f"{where}: 'key' must be a non-empty string")
    return LearnedMarker(
        key=key.lower().strip(),
        label=_optional_string(raw.get("label"), f"{where}.label") or key,
        unit=_optional_string(raw.get("unit"), f"{where}.unit"),
        definition=_optional_string(raw.get("definition"), f"{where}.definition"),
        male_min=_optional_number(raw.get("male_min"), f"{where}.male_min"),
        male_max=_optional_number(raw.get("male_max"), f"{where}.male_max"),
        female_min=_optional_number(raw.get("female_min"), f"{where}.female_min"),
        female_max=_optional_number(raw.get("female_max"), f"{where}.female_max"),
        source_url=_optional_string(raw.get("source_url"), f"{where}.source_url"),
        source_title=_optional_string(raw.get("source_title"), f"{where}.source_title"),
    )


def parse_number(raw: Any, field: str) -> float:
    """Accept JSON numbers and numeric strings (comma or dot decimals).

    NaN and infinite values are rejected.
    """
    if isinstance(raw, bool):
        raise PayloadValidationError(f"'{field}' must be a number")
    number: float | None = None
    if isinstance(raw, (int, float)):
        try:
            number = float(raw)
        except OverflowError:
            number = math.inf
    elif isinstance(raw, str):
        try:
            number = float(raw.strip().replace(",", "."))
        except ValueError:
            pass
    if number is not None:
        if not math.isfinite(number):
            raise PayloadValidationError(f"'{field}' must be a finite number, got {raw!r}")
        return number
    raise PayloadValidationError(f"'{field}' must be a number, got {raw!r}")


def _optional_number(raw: Any, field: str) -> float | None:
    if raw is None:
        return None
    return parse_number(raw, field)


def _require_string(raw: Any, field: str) -> str:
    if not raw or not isinstance(raw, str):
        raise PayloadValidationError(f"'{field}' must be a non-empty string")
    return raw


def _optional_string(raw: Any, field: str) -> str:
    if raw is None:
        return ""
    if not isinstance(raw, str):
        raise PayloadValidationError(f"'{field}' must be a string")
    return raw


def _require_list(raw: Any, field: str) -> list[Any]:
    if raw is None:
        return []
    if not isinstance(raw, list):
        raise PayloadValidationError(f"'{field}' must be a list")
    return raw


def _build_reference_range(raw: Any) -> ReferenceRange | None:
    if raw is None:
        return None
    if not isinstance(raw, dict):
        raise PayloadValidationError("'reference_range' must be an object or null")
    return ReferenceRange(
        min=_optional_number(raw.get("min"), "reference_range.min"),
        max=_optional_number(raw.get("max"), "reference_range.max"),
    )
