import pytest

from biomarker_engine.interpretation.models import MetricPoint


@pytest.fixture()
def testosterone_history() -> list[MetricPoint]:
    """Two lab results, listed newest first to exercise chronological sorting."""
    return [
        MetricPoint(date="01/02/2024", value=450, unit="ng/dL", label="Lab PDF"),
        MetricPoint(date="01/01/2024", value=500, unit="ng/dL", label="Lab PDF"),
    ]


@pytest.fixture()
def mixed_origin_history() -> list[MetricPoint]:
    """Manual entries superseded by a later lab result."""
    return [
        MetricPoint(date="01/01/2024", value=480, unit="ng/dL", label="Manual Input"),
        MetricPoint(date="01/03/2024", value=450, unit="ng/dL", label="Wizard Input"),
        MetricPoint(date="15/03/2024", value=420, unit="ng/dL", label="Lab PDF"),
    ]
