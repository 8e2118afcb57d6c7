from biomarker_engine.interpretation.engine import analyze_history, analyze_point
from biomarker_engine.interpretation.keys import normalize_marker_key
from biomarker_engine.interpretation.registry import resolve_descriptor
from biomarker_engine.interpretation.staleness import check_stale

__all__ = [
    "analyze_history",
    "analyze_point",
    "check_stale",
    "normalize_marker_key",
    "resolve_descriptor",
]
