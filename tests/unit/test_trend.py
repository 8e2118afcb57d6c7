"""Tests for date parsing, ordering and trend computation."""

from datetime import datetime, timezone

import pytest

from biomarker_engine.interpretation.models import MetricPoint, Trend
from biomarker_engine.interpretation.trend import (
    compute_trend,
    find_point,
    parse_date,
    sort_chronologically,
)


def _point(date: str, value: float, label: str = "Lab PDF") -> MetricPoint:
    return MetricPoint(date=date, value=value, unit="ng/dL", label=label)


class TestParseDate:
    def test_day_month_year(self) -> None:
        expected = datetime(2024, 2, 1, tzinfo=timezone.utc).timestamp()
        assert parse_date("01/02/2024") == expected

    def test_iso_date(self) -> None:
        expected = datetime(2024, 2, 1, tzinfo=timezone.utc).timestamp()
        assert parse_date("2024-02-01") == expected

    def test_iso_datetime_with_zulu(self) -> None:
        expected = datetime(2024, 2, 1, 12, 30, tzinfo=timezone.utc).timestamp()
        assert parse_date("2024-02-01T12:30:00Z") == expected

    @pytest.mark.parametrize("raw", ["", None, "ontem", "32/13/2024", "aa/bb/cccc", "2024-99-99"])
    def test_unparsable_is_epoch(self, raw: str | None) -> None:
        assert parse_date(raw) == 0.0

    def test_formats_compare_consistently(self) -> None:
        assert parse_date("15/03/2024") > parse_date("2024-03-01")


class TestSortChronologically:
    def test_sorts_by_parsed_date_not_text(self) -> None:
        history = [_point("01/02/2024", 2), _point("15/01/2024", 1), _point("2023-12-31", 0)]
        assert [p.value for p in sort_chronologically(history)] == [0, 1, 2]

    def test_unparsable_dates_sort_first(self) -> None:
        history = [_point("01/01/2024", 1), _point("sem data", 0)]
        assert [p.value for p in sort_chronologically(history)] == [0, 1]

    def test_does_not_mutate_input(self) -> None:
        history = [_point("01/02/2024", 2), _point("01/01/2024", 1)]
        sort_chronologically(history)
        assert [p.value for p in history] == [2, 1]


class TestFindPoint:
    def test_first_match_wins_on_duplicates(self) -> None:
        history = [_point("01/01/2024", 5, "A"), _point("01/01/2024", 5, "B")]
        assert find_point(history, "01/01/2024", 5) == 0

    def test_requires_date_and_value(self) -> None:
        history = [_point("01/01/2024", 5)]
        assert find_point(history, "01/01/2024", 6) == -1
        assert find_point(history, "02/01/2024", 5) == -1


class TestComputeTrend:
    def test_down_trend(self, testosterone_history: list[MetricPoint]) -> None:
        result = compute_trend(450, "01/02/2024", testosterone_history)
        assert result.delta == -50
        assert result.trend_percent == pytest.approx(-10)
        assert result.trend is Trend.DOWN

    def test_up_trend(self) -> None:
        history = [_point("01/01/2024", 100), _point("01/02/2024", 110)]
        result = compute_trend(110, "01/02/2024", history)
        assert result.trend is Trend.UP
        assert result.trend_percent == pytest.approx(10)

    def test_stable_within_five_percent(self) -> None:
        history = [_point("01/01/2024", 100), _point("01/02/2024", 105)]
        result = compute_trend(105, "01/02/2024", history)
        assert result.trend is Trend.STABLE
        assert result.delta == 5

    def test_first_point_has_no_trend(self, testosterone_history: list[MetricPoint]) -> None:
        result = compute_trend(500, "01/01/2024", testosterone_history)
        assert result.trend is Trend.UNKNOWN
        assert result.delta == 0
        assert result.trend_percent == 0

    def test_point_not_in_history(self, testosterone_history: list[MetricPoint]) -> None:
        result = compute_trend(999, "01/02/2024", testosterone_history)
        assert result.trend is Trend.UNKNOWN

    def test_zero_previous_value_is_guarded(self) -> None:
        history = [_point("01/01/2024", 0), _point("01/02/2024", 50)]
        result = compute_trend(50, "01/02/2024", history)
        assert result.trend is Trend.UNKNOWN
        assert result.trend_percent == 0

    def test_mixed_date_formats(self) -> None:
        history = [_point("2024-02-01", 200), _point("15/01/2024", 100)]
        result = compute_trend(200, "2024-02-01", history)
        assert result.trend is Trend.UP
        assert result.delta == 100

    def test_empty_history(self) -> None:
        assert compute_trend(1, "01/01/2024", []).trend is Trend.UNKNOWN
