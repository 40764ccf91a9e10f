from __future__ import annotations

import json
from datetime import datetime
from pathlib import Path

import jsonschema
import pytest

from assetiq.core.health import HealthInferenceEngine, analyze_health
from assetiq.report.json_report import health_report_payload, write_health_json
from assetiq.tools import validate_json as vj
from assetiq.tools.generate_demo import demo_health_request
from tests.helpers.payloads import health_request


def _write_json(path: Path, obj: dict) -> None:
    path.write_text(json.dumps(obj, indent=2, allow_nan=False), encoding="utf-8")


@pytest.fixture
def payload(health_engine: HealthInferenceEngine, as_of: datetime) -> dict:
    report = analyze_health(demo_health_request("BGE-TF-001"), as_of=as_of, engine=health_engine)
    return json.loads(json.dumps(health_report_payload(report, generated_at="2026-01-15 08:00", top_n=3)))


def test_bundled_schema_validates_written_report(tmp_path: Path, health_engine: HealthInferenceEngine,
                                                 as_of: datetime) -> None:
    report = analyze_health(demo_health_request("COMED-TF-004"), as_of=as_of, engine=health_engine)
    out = write_health_json(tmp_path / "check.json", report, generated_at="2026-01-15 08:00")

    result = vj.validate_json(out)
    assert result.ok is True
    assert result.schema_version == vj.EXPECTED_SCHEMA_VERSION
    assert result.prediction_count == 4


def test_empty_report_is_valid(tmp_path: Path, health_engine: HealthInferenceEngine, as_of: datetime) -> None:
    report = analyze_health(health_request("EMPTY-1"), as_of=as_of, engine=health_engine)
    out = write_health_json(tmp_path / "empty.json", report)
    assert vj.validate_json(out).prediction_count == 0


def test_schema_rejects_unknown_priority(payload: dict) -> None:
    payload["report"]["predictions"][0]["priority"] = "urgent"
    with pytest.raises(jsonschema.ValidationError):
        vj.validate_payload(payload)


def test_schema_rejects_extra_top_level_keys(payload: dict) -> None:
    payload["debug"] = {}
    with pytest.raises(jsonschema.ValidationError):
        vj.validate_payload(payload)


def test_schema_rejects_impact_payloads(payload: dict) -> None:
    payload["meta"]["kind"] = "impact"
    with pytest.raises(jsonschema.ValidationError):
        vj.validate_payload(payload)


def test_version_lock_runs_before_schema(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    def _boom() -> dict:
        raise AssertionError("schema should not be loaded for a version mismatch")

    monkeypatch.setattr(vj, "load_schema", _boom)

    p = tmp_path / "report.json"
    _write_json(p, {"meta": {"schema_version": "v999"}, "asset": {}, "report": {}})
    with pytest.raises(vj.SchemaVersionMismatch):
        vj.validate_json(p)


def test_accepts_matching_version_with_minimal_schema(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    minimal_schema = {
        "$schema": "https://json-schema.org/draft/2020-12/schema",
        "type": "object",
        "required": ["meta", "report"],
    }
    monkeypatch.setattr(vj, "load_schema", lambda: minimal_schema)

    p = tmp_path / "report.json"
    _write_json(p, {"meta": {"schema_version": vj.EXPECTED_SCHEMA_VERSION}, "report": {"predictions": [{}]}})
    result = vj.validate_json(p)
    assert result.prediction_count == 1


def test_missing_meta_is_a_version_error(tmp_path: Path) -> None:
    p = tmp_path / "report.json"
    _write_json(p, {"report": {}})
    with pytest.raises(vj.SchemaVersionMismatch):
        vj.validate_json(p)


def test_strict_parse_rejects_nan_and_non_objects() -> None:
    with pytest.raises(vj.StrictJsonError):
        vj.parse_strict_json('{"x": NaN}')
    with pytest.raises(vj.StrictJsonError):
        vj.parse_strict_json("[1, 2]")
    with pytest.raises(vj.StrictJsonError):
        vj.parse_strict_json("{oops")


def test_validate_main_exit_codes(tmp_path: Path, capsys: pytest.CaptureFixture[str],
                                  health_engine: HealthInferenceEngine, as_of: datetime) -> None:
    report = analyze_health(demo_health_request("PECO-TF-001"), as_of=as_of, engine=health_engine)
    good = write_health_json(tmp_path / "good.json", report)
    assert vj.main([str(good)]) == 0
    assert capsys.readouterr().out.startswith("OK:")

    assert vj.main([str(tmp_path / "missing.json")]) == 1
    assert capsys.readouterr().out.startswith("ERROR:")
