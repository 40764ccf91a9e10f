from __future__ import annotations

import json
from datetime import datetime
from pathlib import Path

import pytest

from assetiq.cli import main as cli_main
from assetiq.tools.generate_demo import demo_health_request, demo_impact_request, write_json
from assetiq.tools.validate_json import validate_json

AS_OF = "2026-01-15T08:00:00"


@pytest.fixture
def data_dir(tmp_path: Path) -> Path:
    d = tmp_path / "data"
    write_json(d / "health_request.json", demo_health_request("BGE-TF-001"))
    write_json(d / "impact_request.json", demo_impact_request(datetime.fromisoformat(AS_OF), "equipment_failure"))
    return d


def test_health_end_to_end_generates_pdf_and_json(tmp_path: Path, data_dir: Path,
                                                  capsys: pytest.CaptureFixture[str]) -> None:
    pdf_out = tmp_path / "outputs" / "check.pdf"
    json_out = tmp_path / "outputs" / "check.json"

    rc = cli_main(
        [
            "health",
            "--input", str(data_dir / "health_request.json"),
            "--out", str(pdf_out),
            "--json", str(json_out),
            "--top", "3",
            "--as-of", AS_OF,
        ]
    )

    assert rc == 0
    assert pdf_out.exists() and pdf_out.stat().st_size > 0
    assert pdf_out.read_bytes().startswith(b"%PDF")

    result = validate_json(json_out)
    assert result.prediction_count == 5

    obj = json.loads(json_out.read_text(encoding="utf-8"))
    assert len(obj["asset"]["table"]) == 3
    assert obj["report"]["timestamp"] == AS_OF

    out = capsys.readouterr().out
    assert "Asset:           BGE-TF-001" in out
    assert "[CRITICAL] Winding Insulation" in out


def test_impact_end_to_end(tmp_path: Path, data_dir: Path, capsys: pytest.CaptureFixture[str]) -> None:
    json_out = tmp_path / "outputs" / "impact.json"
    rc = cli_main(["impact", "--input", str(data_dir / "impact_request.json"), "--json-out", str(json_out)])

    assert rc == 0
    obj = json.loads(json_out.read_text(encoding="utf-8"))
    assert obj["meta"]["kind"] == "impact"
    assert obj["result"]["overallRisk"] == "critical"
    # no --as-of: the snapshot time in the request is used
    assert obj["result"]["timestamp"] == AS_OF

    out = capsys.readouterr().out
    assert "Overall risk:    critical" in out
    assert "[critical] Conduct immediate safety stand-down" in out


def test_config_file_supplies_paths(tmp_path: Path, data_dir: Path) -> None:
    json_out = tmp_path / "from_config.json"
    cfg = tmp_path / "assetiq.toml"
    cfg.write_text(
        f"""
[assetiq]
input = "{(data_dir / 'health_request.json').as_posix()}"
json_out = "{json_out.as_posix()}"
as_of = "{AS_OF}"
top_predictions = 2
""",
        encoding="utf-8",
    )

    rc = cli_main(["health", "--config", str(cfg), "--no-pdf"])
    assert rc == 0
    obj = json.loads(json_out.read_text(encoding="utf-8"))
    assert len(obj["asset"]["table"]) == 2
    assert obj["report"]["timestamp"] == AS_OF


def test_missing_input_exits_2(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    rc = cli_main(["health", "--input", str(tmp_path / "nope.json"), "--no-pdf",
                   "--json", str(tmp_path / "x.json")])
    assert rc == 2
    assert capsys.readouterr().out.startswith("ERROR:")


def test_bad_as_of_exits_2(tmp_path: Path, data_dir: Path) -> None:
    rc = cli_main(["impact", "--input", str(data_dir / "impact_request.json"), "--as-of", "soon",
                   "--json", str(tmp_path / "x.json")])
    assert rc == 2


def test_unknown_component_type_exits_2(tmp_path: Path) -> None:
    req = tmp_path / "bad.json"
    write_json(req, {"assetId": "X", "components": [{"id": "a", "name": "A", "type": "flux_capacitor"}]})
    rc = cli_main(["health", "--input", str(req), "--no-pdf", "--json", str(tmp_path / "x.json")])
    assert rc == 2


def test_malformed_json_exits_2(tmp_path: Path) -> None:
    req = tmp_path / "bad.json"
    req.write_text("{not json", encoding="utf-8")
    rc = cli_main(["impact", "--input", str(req), "--json", str(tmp_path / "x.json")])
    assert rc == 2


def test_subcommand_is_required() -> None:
    with pytest.raises(SystemExit) as exc:
        cli_main([])
    assert exc.value.code == 2


def test_non_numeric_change_parameter_exits_2(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    payload = demo_impact_request(datetime.fromisoformat(AS_OF), "vessel_assignment")
    payload["change"]["parameters"] = {"delayDays": "two weeks"}
    req = write_json(tmp_path / "impact.json", payload)

    rc = cli_main(["impact", "--input", str(req), "--json", str(tmp_path / "x.json")])
    assert rc == 2
    assert "delayDays" in capsys.readouterr().out
