"""Human-readable status messages for tooltips, panels and AI context."""

from biomarker_engine.interpretation.models import MarkerDescriptor, Status, Trend

_TREND_ARROWS = {
    Trend.UP: "⬆️",
    Trend.DOWN: "⬇️",
    Trend.STABLE: "➡️",
}

_STATUS_LABELS = {
    Status.CRITICAL_LOW: "Crítico (baixo)",
    Status.LOW: "Baixo",
    Status.BORDERLINE_LOW: "Limítrofe (baixo)",
    Status.NORMAL: "Normal / Ideal",
    Status.BORDERLINE_HIGH: "Limítrofe (alto)",
    Status.HIGH: "Elevado",
    Status.CRITICAL_HIGH: "Crítico (alto)",
    Status.UNKNOWN: "Sem referência",
}

HIGH_SIDE = frozenset({Status.BORDERLINE_HIGH, Status.HIGH, Status.CRITICAL_HIGH})
LOW_SIDE = frozenset({Status.BORDERLINE_LOW, Status.LOW, Status.CRITICAL_LOW})


def compose_message(
    status: Status,
    trend: Trend,
    trend_percent: float,
    low: float | None,
    high: float | None,
) -> str:
    message = _status_sentence(status, low, high)
    if trend is not Trend.UNKNOWN:
        message += (
            f" {_TREND_ARROWS[trend]} Variação de {trend_percent:+.1f}% em relação ao anterior."
        )
    return message


def status_label(status: Status) -> str:
    """Short badge text for a status."""
    return _STATUS_LABELS[status]


def risk_notes(status: Status, descriptor: MarkerDescriptor) -> tuple[str, ...]:
    """Risks worth showing for a status: the high list above range, the low list below."""
    if status in HIGH_SIDE:
        return descriptor.risks.high
    if status in LOW_SIDE:
        return descriptor.risks.low
    return ()


def _status_sentence(status: Status, low: float | None, high: float | None) -> str:
    bounds = f"{_fmt(low)}–{_fmt(high)}"
    if status is Status.NORMAL:
        return "✅ Ideal, longe dos limites."
    if status is Status.CRITICAL_HIGH:
        return f"🚨 CRÍTICO: Ultrapassou a faixa de referência ({bounds}) para cima."
    if status is Status.CRITICAL_LOW:
        return f"🚨 CRÍTICO: Ultrapassou a faixa de referência ({bounds}) para baixo."
    if status is Status.HIGH:
        return "🟠 ATENÇÃO: Muito próximo do limite superior (<10%)."
    if status is Status.LOW:
        return "🟠 ATENÇÃO: Muito próximo do limite inferior (<10%)."
    if status is Status.BORDERLINE_HIGH:
        return "⚠️ ALERTA: Aproximando-se do limite superior (10–20%)."
    if status is Status.BORDERLINE_LOW:
        return "⚠️ ALERTA: Aproximando-se do limite inferior (10–20%)."
    return "Sem referência disponível para este marcador."


def _fmt(bound: float | None) -> str:
    if bound is None:
        return "—"
    return f"{bound:g}"
