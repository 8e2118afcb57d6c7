"""Classifies a value into one of seven zones relative to its range."""

from biomarker_engine.interpretation.models import RiskColor, Status, ZoneResult

# A span this wide means one bound was the unbounded sentinel.
UNBOUNDED_SPAN_THRESHOLD = 100_000.0

ORANGE_BUFFER_FRACTION = 0.10
YELLOW_BUFFER_FRACTION = 0.20

_UNKNOWN = ZoneResult(Status.UNKNOWN, RiskColor.GRAY)
_CRITICAL_LOW = ZoneResult(Status.CRITICAL_LOW, RiskColor.RED)
_CRITICAL_HIGH = ZoneResult(Status.CRITICAL_HIGH, RiskColor.RED)
_NORMAL = ZoneResult(Status.NORMAL, RiskColor.EMERALD)


def classify_zone(value: float, low: float | None, high: float | None) -> ZoneResult:
    """Classify ``value`` against ``[low, high]``.

    Predicates are evaluated in order and the first match wins, so a value
    sitting exactly on a buffer boundary takes the more severe zone.
    """
    if low is None and high is None:
        return _UNKNOWN
    if low is None:
        low = float("-inf")
    if high is None:
        high = float("inf")

    span = high - low
    if span <= 0 or span > UNBOUNDED_SPAN_THRESHOLD:
        return _binary_zone(value, low, high)

    orange = span * ORANGE_BUFFER_FRACTION
    yellow = span * YELLOW_BUFFER_FRACTION

    if value < low:
        return _CRITICAL_LOW
    if value > high:
        return _CRITICAL_HIGH
    if value <= low + orange:
        return ZoneResult(Status.LOW, RiskColor.ORANGE)
    if value >= high - orange:
        return ZoneResult(Status.HIGH, RiskColor.ORANGE)
    if value <= low + yellow:
        return ZoneResult(Status.BORDERLINE_LOW, RiskColor.YELLOW)
    if value >= high - yellow:
        return ZoneResult(Status.BORDERLINE_HIGH, RiskColor.YELLOW)
    return _NORMAL


def _binary_zone(value: float, low: float, high: float) -> ZoneResult:
    if value < low:
        return _CRITICAL_LOW
    if value > high:
        return _CRITICAL_HIGH
    return _NORMAL
