"""Date parsing, chronological ordering and point-to-point trend."""

from collections.abc import Iterable
from datetime import datetime, timezone

from biomarker_engine.interpretation.models import MetricPoint, Trend, TrendResult

TREND_THRESHOLD_PERCENT = 5.0


def parse_date(text: str | None) -> float:
    """Parse ``DD/MM/YYYY`` or ISO-8601 into a UTC timestamp.

    Anything unparsable maps to 0.0 (the epoch), so it sorts first.
    """
    if not text:
        return 0.0
    raw = text.strip()
    parts = raw.split("/")
    if len(parts) == 3:
        try:
            day, month, year = (int(part) for part in parts)
            return _timestamp(datetime(year, month, day))
        except (ValueError, OverflowError):
            return 0.0
    try:
        parsed = datetime.fromisoformat(raw.replace("Z", "+00:00"))
    except ValueError:
        return 0.0
    return _timestamp(parsed)


def sort_chronologically(history: Iterable[MetricPoint]) -> list[MetricPoint]:
    """Oldest first; points with equal dates keep their input order."""
    return sorted(history, key=lambda point: parse_date(point.date))


def find_point(sorted_history: list[MetricPoint], date: str, value: float) -> int:
    """Index of the first point matching both date and value, or -1."""
    for index, point in enumerate(sorted_history):
        if point.date == date and point.value == value:
            return index
    return -1


def compute_trend(value: float, date: str, history: Iterable[MetricPoint]) -> TrendResult:
    """Compare a value with the point immediately before it in time."""
    ordered = sort_chronologically(history)
    index = find_point(ordered, date, value)
    if index <= 0:
        return TrendResult()

    previous = ordered[index - 1].value
    delta = value - previous
    if previous == 0:
        return TrendResult(trend=Trend.UNKNOWN, trend_percent=0.0, delta=delta)

    percent = delta / previous * 100
    if percent > TREND_THRESHOLD_PERCENT:
        trend = Trend.UP
    elif percent < -TREND_THRESHOLD_PERCENT:
        trend = Trend.DOWN
    else:
        trend = Trend.STABLE
    return TrendResult(trend=trend, trend_percent=percent, delta=delta)


def _timestamp(moment: datetime) -> float:
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=timezone.utc)
    try:
        return moment.timestamp()
    except (OverflowError, OSError, ValueError):
        return 0.0
