"""Runs the command-line entry point end to end on request files."""

import io
import json
from pathlib import Path

import pytest

from biomarker_engine.main import main


def _write_request(tmp_path: Path, payload: object) -> str:
    path = tmp_path / "request.json"
    path.write_text(json.dumps(payload, ensure_ascii=False), encoding="utf-8")
    return str(path)


@pytest.fixture()
def testosterone_request() -> dict:
    return {
        "marker": "Testosterona Total",
        "value": 450,
        "date": "01/02/2024",
        "gender": "Masculino",
        "history": [
            {"date": "01/02/2024", "value": 450, "unit": "ng/dL", "label": "Lab PDF"},
            {"date": "01/01/2024", "value": 500, "unit": "ng/dL", "label": "Lab PDF"},
        ],
    }


class TestMain:
    def test_prints_analysis(
        self, tmp_path: Path, testosterone_request: dict, capsys: pytest.CaptureFixture[str]
    ) -> None:
        assert main([_write_request(tmp_path, testosterone_request)]) == 0

        output = json.loads(capsys.readouterr().out)
        analysis = output["analysis"]
        assert analysis["marker_key"] == "testosterone"
        assert analysis["status"] == "NORMAL"
        assert analysis["trend"] == "DOWN"
        assert analysis["delta"] == -50
        assert analysis["risk_color"] == "emerald"
        assert analysis["active_range"] == {"min": 300, "max": 900}
        assert analysis["descriptor"]["provenance"] == "curated"
        assert "stale" not in output

    def test_logs_to_stderr(
        self, tmp_path: Path, testosterone_request: dict, capsys: pytest.CaptureFixture[str]
    ) -> None:
        main([_write_request(tmp_path, testosterone_request)])
        assert "Analysis complete" in capsys.readouterr().err

    def test_stale_flag(self, tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
        payload = {
            "marker": "Testosterona",
            "value": 450,
            "date": "01/03/2024",
            "history": [
                {"date": "01/01/2024", "value": 480, "unit": "ng/dL", "label": "Manual Input"},
                {"date": "01/03/2024", "value": 450, "unit": "ng/dL", "label": "Wizard Input"},
                {"date": "15/03/2024", "value": 420, "unit": "ng/dL", "label": "Lab PDF"},
            ],
        }
        assert main([_write_request(tmp_path, payload), "--stale"]) == 0

        stale = json.loads(capsys.readouterr().out)["stale"]
        assert stale == {
            "is_stale": True,
            "exam_date": "15/03/2024",
            "exam_value": 420,
            "exam_unit": "ng/dL",
        }

    def test_stale_flag_without_newer_exam(
        self, tmp_path: Path, testosterone_request: dict, capsys: pytest.CaptureFixture[str]
    ) -> None:
        main([_write_request(tmp_path, testosterone_request), "--stale"])
        assert json.loads(capsys.readouterr().out)["stale"] is None

    def test_context_flag_respects_history_limit(
        self,
        tmp_path: Path,
        testosterone_request: dict,
        monkeypatch: pytest.MonkeyPatch,
        capsys: pytest.CaptureFixture[str],
    ) -> None:
        monkeypatch.setenv("CONTEXT_HISTORY_LIMIT", "1")
        assert main([_write_request(tmp_path, testosterone_request), "--context"]) == 0

        context = json.loads(capsys.readouterr().out)["context"]
        assert "- **Testosterona Total**: Atual: 450 ng/dL (01/02/2024) [NORMAL]." in context
        assert "Histórico Recente: [450 ng/dL (01/02/2024)]" in context

    def test_reads_stdin(
        self,
        testosterone_request: dict,
        monkeypatch: pytest.MonkeyPatch,
        capsys: pytest.CaptureFixture[str],
    ) -> None:
        monkeypatch.setattr("sys.stdin", io.StringIO(json.dumps(testosterone_request)))
        assert main(["-"]) == 0
        assert json.loads(capsys.readouterr().out)["analysis"]["status"] == "NORMAL"

    def test_output_indent_from_env(
        self,
        tmp_path: Path,
        testosterone_request: dict,
        monkeypatch: pytest.MonkeyPatch,
        capsys: pytest.CaptureFixture[str],
    ) -> None:
        monkeypatch.setenv("OUTPUT_INDENT", "4")
        main([_write_request(tmp_path, testosterone_request)])
        assert '\n    "analysis"' in capsys.readouterr().out


class TestMainErrors:
    def test_missing_file(self, tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
        assert main([str(tmp_path / "missing.json")]) == 1
        captured = capsys.readouterr()
        assert captured.out == ""
        assert "Cannot read request file" in captured.err

    def test_invalid_json(self, tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
        path = tmp_path / "broken.json"
        path.write_text("{not json", encoding="utf-8")
        assert main([str(path)]) == 1
        assert "Invalid JSON request" in capsys.readouterr().err

    def test_invalid_payload(self, tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
        assert main([_write_request(tmp_path, {"marker": "TSH", "date": "01/01/2024"})]) == 1
        assert "Missing required field: value" in capsys.readouterr().err


class TestMainNonFinite:
    def test_nan_value_rejected(self, tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
        payload = {"marker": "Glicose", "value": "nan", "date": "01/01/2024"}
        assert main([_write_request(tmp_path, payload)]) == 1
        captured = capsys.readouterr()
        assert captured.out == ""
        assert "must be a finite number" in captured.err

    def test_json_infinity_rejected(self, tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
        path = tmp_path / "request.json"
        path.write_text(
            '{"marker": "Glicose", "value": Infinity, "date": "01/01/2024"}', encoding="utf-8"
        )
        assert main([str(path)]) == 1
        assert "must be a finite number" in capsys.readouterr().err

    def test_runs_repeatedly_in_one_process(
        self, tmp_path: Path, testosterone_request: dict, capsys: pytest.CaptureFixture[str]
    ) -> None:
        path = _write_request(tmp_path, testosterone_request)
        assert main([path]) == 0
        assert main([path]) == 0
        assert capsys.readouterr().out.count('"analysis"') == 2
