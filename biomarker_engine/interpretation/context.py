"""Builds the structured-metrics block fed to the conversational AI."""

from collections.abc import Mapping, Sequence

from biomarker_engine.interpretation.engine import analyze_point
from biomarker_engine.interpretation.models import Gender, LearnedMarker, MetricPoint
from biomarker_engine.interpretation.ranges import dynamic_range_of
from biomarker_engine.interpretation.trend import sort_chronologically

CONTEXT_HEADER = (
    "=== HISTÓRICO DE MÉTRICAS ESTRUTURADAS (FONTE DE VERDADE 1) ===\n"
    "Estes valores foram extraídos de exames reais (Bioimpedância, Sangue, etc). "
    "Eles TÊM PRIORIDADE sobre os índices matemáticos acima se houver divergência.\n"
)
CONTEXT_FOOTER = "============================================================\n\n"


def build_metrics_context(
    metrics: Mapping[str, Sequence[MetricPoint]],
    gender: Gender,
    learned: Mapping[str, LearnedMarker] | None = None,
    history_limit: int = 5,
) -> str:
    """Summarize each category: latest value, its status and recent history.

    Returns an empty string when there are no points at all.
    """
    lines = [
        _category_line(category, points, gender, learned, history_limit)
        for category, points in metrics.items()
        if points
    ]
    if not lines:
        return ""
    return CONTEXT_HEADER + "".join(lines) + CONTEXT_FOOTER


def _category_line(
    category: str,
    points: Sequence[MetricPoint],
    gender: Gender,
    learned: Mapping[str, LearnedMarker] | None,
    history_limit: int,
) -> str:
    newest_first = list(reversed(sort_chronologically(points)))
    latest = newest_first[0]
    analysis = analyze_point(
        category,
        latest.value,
        latest.date,
        points,
        gender,
        dynamic_range=dynamic_range_of(latest),
        learned=learned,
    )
    recent = ", ".join(
        f"{point.value:g} {point.unit} ({point.date})" for point in newest_first[:history_limit]
    )
    return (
        f"- **{category}**: Atual: {latest.value:g} {latest.unit} ({latest.date}) "
        f"[{analysis.status.value}]. Histórico Recente: [{recent}]\n"
    )
