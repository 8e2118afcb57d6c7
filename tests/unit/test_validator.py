import pytest

from biomarker_engine.interpretation.exceptions import PayloadError, PayloadValidationError
from biomarker_engine.interpretation.models import Gender, ReferenceRange
from biomarker_engine.interpretation.validator import (
    build_gender,
    build_learned_marker,
    build_metric_point,
    parse_number,
    validate_request,
)


def _minimal_request(**overrides: object) -> dict:
    data: dict = {"marker": "TSH", "value": 2.1, "date": "01/02/2024"}
    data.update(overrides)
    return data


class TestValidateRequest:
    def test_minimal_request(self) -> None:
        request = validate_request(_minimal_request())
        assert request.marker == "TSH"
        assert request.value == 2.1
        assert request.gender is Gender.MALE
        assert request.history == ()
        assert request.reference_range is None
        assert request.learned == {}

    def test_default_gender_applies(self) -> None:
        request = validate_request(_minimal_request(), default_gender=Gender.FEMALE)
        assert request.gender is Gender.FEMALE

    def test_full_request(self) -> None:
        request = validate_request(
            _minimal_request(
                gender="Feminino",
                history=[{"date": "01/01/2024", "value": "1,8", "unit": "mUI/L", "label": "Lab"}],
                reference_range={"min": 0.5, "max": None},
                learned=[{"key": " Homocisteína ", "label": "Homocisteína", "male_max": 15}],
            )
        )
        assert request.gender is Gender.FEMALE
        assert request.history[0].value == 1.8
        assert request.history[0].unit == "mUI/L"
        assert request.reference_range == ReferenceRange(0.5, None)
        assert request.learned["homocisteína"].male_max == 15

    def test_not_an_object(self) -> None:
        with pytest.raises(PayloadValidationError, match="must be an object"):
            validate_request(["TSH"])

    @pytest.mark.parametrize("field", ["marker", "value", "date"])
    def test_missing_required_field(self, field: str) -> None:
        data = _minimal_request()
        del data[field]
        with pytest.raises(PayloadValidationError, match=f"Missing required field: {field}"):
            validate_request(data)

    def test_empty_marker(self) -> None:
        with pytest.raises(PayloadValidationError, match="'marker'"):
            validate_request(_minimal_request(marker=""))

    def test_history_must_be_list(self) -> None:
        with pytest.raises(PayloadValidationError, match="'history' must be a list"):
            validate_request(_minimal_request(history={"date": "01/01/2024"}))

    def test_reference_range_must_be_object(self) -> None:
        with pytest.raises(PayloadValidationError, match="reference_range"):
            validate_request(_minimal_request(reference_range=[1, 2]))

    def test_validation_error_is_payload_error(self) -> None:
        with pytest.raises(PayloadError):
            validate_request(None)


class TestBuildGender:
    def test_none_returns_default(self) -> None:
        assert build_gender(None, Gender.FEMALE) is Gender.FEMALE

    def test_valid(self) -> None:
        assert build_gender("Masculino") is Gender.MALE

    def test_invalid(self) -> None:
        with pytest.raises(PayloadValidationError, match="'gender' must be one of"):
            build_gender("Outro")


class TestBuildMetricPoint:
    def test_optional_fields(self) -> None:
        point = build_metric_point(
            {"date": "01/01/2024", "value": 5, "ref_min": "1", "ref_max": 10,
             "created_at": "2024-01-01T10:00:00Z"},
            0,
        )
        assert point.ref_min == 1.0
        assert point.ref_max == 10.0
        assert point.created_at == "2024-01-01T10:00:00Z"
        assert point.label == ""

    def test_not_an_object(self) -> None:
        with pytest.raises(PayloadValidationError, match="index 3"):
            build_metric_point("5", 3)

    def test_missing_value(self) -> None:
        with pytest.raises(PayloadValidationError, match=r"history\[0\]"):
            build_metric_point({"date": "01/01/2024"}, 0)

    def test_non_string_unit(self) -> None:
        with pytest.raises(PayloadValidationError, match=r"history\[1\]\.unit"):
            build_metric_point({"date": "01/01/2024", "value": 1, "unit": 5}, 1)


class TestBuildLearnedMarker:
    def test_label_defaults_to_key(self) -> None:
        entry = build_learned_marker({"key": "Lp(a)"}, 0)
        assert entry.key == "lp(a)"
        assert entry.label == "Lp(a)"

    def test_missing_key(self) -> None:
        with pytest.raises(PayloadValidationError, match=r"learned\[2\]: 'key'"):
            build_learned_marker({"label": "X"}, 2)


class TestParseNumber:
    @pytest.mark.parametrize(
        ("raw", "expected"),
        [(5, 5.0), (2.5, 2.5), ("3.7", 3.7), ("3,7", 3.7), (" 12 ", 12.0)],
    )
    def test_accepted(self, raw: object, expected: float) -> None:
        assert parse_number(raw, "value") == expected

    @pytest.mark.parametrize("raw", [True, "abc", None, [1]])
    def test_rejected(self, raw: object) -> None:
        with pytest.raises(PayloadValidationError, match="'value' must be a number"):
            parse_number(raw, "value")

    @pytest.mark.parametrize(
        "raw", ["nan", "inf", "-Infinity", "1e999", float("nan"), float("inf"), 10**400]
    )
    def test_non_finite_rejected(self, raw: object) -> None:
        with pytest.raises(PayloadValidationError, match="'value' must be a finite number"):
            parse_number(raw, "value")

    def test_non_finite_history_value_rejected(self) -> None:
        with pytest.raises(PayloadValidationError, match=r"history\[0\]\.value"):
            validate_request(_minimal_request(history=[{"date": "01/01/2024", "value": "nan"}]))

    def test_non_finite_request_value_rejected(self) -> None:
        with pytest.raises(PayloadValidationError, match="finite"):
            validate_request(_minimal_request(value="1e999"))
