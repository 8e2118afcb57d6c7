"""Entry points that run a value through the full interpretation chain."""

from collections.abc import Mapping, Sequence

from biomarker_engine.interpretation.keys import normalize_marker_key
from biomarker_engine.interpretation.models import (
    AnalysisResult,
    Gender,
    LearnedMarker,
    MetricPoint,
    ReferenceRange,
)
from biomarker_engine.interpretation.narrative import compose_message
from biomarker_engine.interpretation.ranges import (
    classification_bounds,
    dynamic_range_of,
    resolve_range,
)
from biomarker_engine.interpretation.registry import resolve_descriptor
from biomarker_engine.interpretation.trend import compute_trend
from biomarker_engine.interpretation.zones import classify_zone
from biomarker_engine.logging.logger import Log


def analyze_point(
    marker_label: str,
    value: float,
    date: str,
    history: Sequence[MetricPoint],
    gender: Gender,
    dynamic_range: ReferenceRange | None = None,
    learned: Mapping[str, LearnedMarker] | None = None,
) -> AnalysisResult:
    """Interpret one value: resolve the marker, classify it and compare it with history."""
    key = normalize_marker_key(marker_label)
    descriptor = resolve_descriptor(key, gender, learned=learned, raw_label=marker_label)
    Log.debug(
        "Resolved marker",
        label=marker_label,
        key=key.value,
        provenance=descriptor.provenance.value,
    )

    effective = resolve_range(dynamic_range, descriptor, gender)
    bounds = classification_bounds(effective)
    if bounds is None:
        zone = classify_zone(value, None, None)
    else:
        zone = classify_zone(value, *bounds)

    trend = compute_trend(value, date, history)
    message = compose_message(
        zone.status, trend.trend, trend.trend_percent, effective.min, effective.max
    )
    return AnalysisResult(
        status=zone.status,
        trend=trend.trend,
        trend_percent=trend.trend_percent,
        delta=trend.delta,
        message=message,
        risk_color=zone.risk_color,
        active_range=None if effective.is_empty else effective,
        marker_key=key.value,
        descriptor=descriptor,
    )


def analyze_history(
    marker_label: str,
    history: Sequence[MetricPoint],
    gender: Gender,
    learned: Mapping[str, LearnedMarker] | None = None,
) -> list[AnalysisResult]:
    """Analyze every point of a series in input order, each with its own document range."""
    return [
        analyze_point(
            marker_label,
            point.value,
            point.date,
            history,
            gender,
            dynamic_range=dynamic_range_of(point),
            learned=learned,
        )
        for point in history
    ]
