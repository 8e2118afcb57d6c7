"""Detects manual values that a newer exam result has superseded."""

from collections.abc import Iterable

from biomarker_engine.interpretation.models import MetricPoint, StaleValue
from biomarker_engine.interpretation.trend import parse_date

MANUAL_LABEL_MARKERS: tuple[str, ...] = ("manual", "wizard", "profile", "user", "input")


def is_manual(point: MetricPoint) -> bool:
    """True when the point was typed in by the user rather than extracted from a document."""
    label = (point.label or "").lower()
    return any(marker in label for marker in MANUAL_LABEL_MARKERS)


def check_stale(history: Iterable[MetricPoint], date: str, value: float) -> StaleValue | None:
    """Flag the displayed point if it is the latest manual entry and an exam is newer.

    Older manual entries are never flagged, even when a later exam exists.
    """
    points = list(history)
    manual = _newest_first(point for point in points if is_manual(point))
    exams = _newest_first(point for point in points if not is_manual(point))
    if not manual or not exams:
        return None

    latest_manual = manual[0]
    if latest_manual.date != date or latest_manual.value != value:
        return None

    latest_exam = exams[0]
    if parse_date(latest_exam.date) <= parse_date(latest_manual.date):
        return None

    return StaleValue(
        is_stale=True,
        exam_date=latest_exam.date,
        exam_value=latest_exam.value,
        exam_unit=latest_exam.unit,
    )


def _newest_first(points: Iterable[MetricPoint]) -> list[MetricPoint]:
    return sorted(
        points,
        key=lambda point: (parse_date(point.date), parse_date(point.created_at)),
        reverse=True,
    )
