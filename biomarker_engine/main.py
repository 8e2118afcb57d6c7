import argparse
import json
import sys
from dataclasses import asdict
from enum import Enum
from pathlib import Path
from typing import Any

from biomarker_engine.config.settings import Settings
from biomarker_engine.interpretation.context import build_metrics_context
from biomarker_engine.interpretation.engine import analyze_point
from biomarker_engine.interpretation.exceptions import PayloadError
from biomarker_engine.interpretation.staleness import check_stale
from biomarker_engine.interpretation.validator import validate_request
from biomarker_engine.logging.logger import Log


def main(argv: list[str] | None = None) -> int:
    """Entry point: load settings -> read request -> analyze -> print JSON."""
    args = _parse_args(argv)
    settings = Settings()
    Log.configure(settings.log_level, stream=sys.stderr)

    try:
        data = _read_payload(args.request)
        request = validate_request(data, default_gender=settings.default_gender)
    except PayloadError as exc:
        Log.error(f"Invalid request: {exc}", path=args.request)
        return 1

    result = analyze_point(
        request.marker,
        request.value,
        request.date,
        request.history,
        request.gender,
        dynamic_range=request.reference_range,
        learned=request.learned,
    )
    output: dict[str, Any] = {"analysis": asdict(result)}
    if args.stale:
        stale = check_stale(request.history, request.date, request.value)
        output["stale"] = asdict(stale) if stale is not None else None
    if args.context:
        output["context"] = build_metrics_context(
            {request.marker: request.history},
            request.gender,
            learned=request.learned,
            history_limit=settings.context_history_limit,
        )

    Log.info(
        "Analysis complete",
        marker=request.marker,
        status=result.status.value,
        trend=result.trend.value,
    )
    print(json.dumps(output, indent=settings.output_indent, ensure_ascii=False, default=_encode))
    return 0


def _parse_args(argv: list[str] | None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="biomarker-engine",
        description="Interpret a biomarker value against its reference range and history.",
    )
    parser.add_argument("request", help="Path to a JSON request file, or '-' for stdin")
    parser.add_argument(
        "--stale",
        action="store_true",
        help="Also check whether the value is a manual entry superseded by a newer exam",
    )
    parser.add_argument(
        "--context",
        action="store_true",
        help="Also render the structured-metrics block for the request history",
    )
    return parser.parse_args(argv)


def _read_payload(path: str) -> Any:
    try:
        raw = sys.stdin.read() if path == "-" else Path(path).read_text(encoding="utf-8")
    except OSError as exc:
        raise PayloadError(f"Cannot read request file: {exc}") from exc
    try:
        return json.loads(raw)
    except json.JSONDecodeError as exc:
        raise PayloadError(f"Invalid JSON request: {exc}") from exc


def _encode(value: object) -> object:
    if isinstance(value, Enum):
        return value.value
    raise TypeError(f"Object of type {type(value).__name__} is not JSON serializable")


if __name__ == "__main__":
    sys.exit(main())
