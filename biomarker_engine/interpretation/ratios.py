"""Ratios between two marker series measured on the same date."""

from collections.abc import Iterable
from dataclasses import dataclass

from biomarker_engine.interpretation.models import MetricPoint
from biomarker_engine.interpretation.trend import sort_chronologically

CASTELLI_HIGH = 3.5
CASTELLI_MEDIUM = 3.0


@dataclass(frozen=True)
class RatioPoint:
    date: str
    value: float
    unit: str
    risk: str | None = None


def castelli_index(ldl: Iterable[MetricPoint], hdl: Iterable[MetricPoint]) -> list[RatioPoint]:
    """LDL/HDL ratio per shared date, oldest first, tagged Alto / Médio / Ótimo."""
    return [
        RatioPoint(date=ratio.date, value=ratio.value, unit="Ratio", risk=_castelli_risk(ratio.value))
        for ratio in _paired_ratio(ldl, hdl, unit="Ratio")
    ]


def relative_strength(
    strength: Iterable[MetricPoint], weight: Iterable[MetricPoint]
) -> list[RatioPoint]:
    """Load lifted per kilogram of body weight on the same date."""
    return _paired_ratio(strength, weight, unit="x BW")


def _paired_ratio(
    numerators: Iterable[MetricPoint],
    denominators: Iterable[MetricPoint],
    unit: str,
) -> list[RatioPoint]:
    by_date = {point.date: point for point in denominators}
    pairs: list[MetricPoint] = []
    for point in numerators:
        denominator = by_date.get(point.date)
        if denominator is None or not point.value or denominator.value <= 0:
            continue
        pairs.append(
            MetricPoint(date=point.date, value=round(point.value / denominator.value, 2), unit=unit)
        )
    return [
        RatioPoint(date=point.date, value=point.value, unit=unit)
        for point in sort_chronologically(pairs)
    ]


def _castelli_risk(ratio: float) -> str:
    if ratio > CASTELLI_HIGH:
        return "Alto"
    if ratio > CASTELLI_MEDIUM:
        return "Médio"
    return "Ótimo"
