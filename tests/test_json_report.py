from __future__ import annotations

import json
import math
from datetime import datetime
from pathlib import Path
from typing import Any

import numpy as np
import pandas as pd
import pytest

from assetiq.core.contract import ASSETIQ_DECISION_VERSION
from assetiq.core.health import HealthInferenceEngine, analyze_health
from assetiq.impact.demo import demo_change_dict
from assetiq.impact.engine import analyze_impact
from assetiq.report.json_report import (
    _df_to_records,
    _json_safe,
    health_report_payload,
    write_health_json,
    write_impact_json,
)
from assetiq.tools.generate_demo import demo_health_request


def _reject_constants(x: str):
    raise ValueError(f"Non-JSON constant encountered: {x}")


def test_json_safe_scrubs_non_finite_and_numpy() -> None:
    raw = {
        "nan": float("nan"),
        "inf": math.inf,
        "np_int": np.int64(3),
        "np_float": np.float64(1.5),
        "np_nan": np.float64("nan"),
        "flag": True,
        "when": datetime(2026, 1, 15, 8, 0),
        "nested": [pd.NA, (1, None)],
    }
    assert _json_safe(raw) == {
        "nan": None,
        "inf": None,
        "np_int": 3,
        "np_float": 1.5,
        "np_nan": None,
        "flag": True,
        "when": "2026-01-15T08:00:00",
        "nested": [None, [1, None]],
    }


def test_df_to_records_handles_missing_values() -> None:
    df = pd.DataFrame({"a": [1.0, np.nan], "b": ["x", None]})
    # the writer scrubs the records once more before serialising
    assert _json_safe(_df_to_records(df)) == [{"a": 1.0, "b": "x"}, {"a": None, "b": None}]
    assert _df_to_records(pd.DataFrame()) == []


def test_health_payload_shape(health_engine: HealthInferenceEngine, as_of: datetime) -> None:
    report = analyze_health(demo_health_request("BGE-TF-001"), as_of=as_of, engine=health_engine)
    payload = health_report_payload(report, generated_at="2026-01-15 08:00", top_n=2)

    assert payload["meta"] == {
        "kind": "health",
        "generated_at": "2026-01-15 08:00",
        "decision_version": ASSETIQ_DECISION_VERSION,
        "schema_version": "v1",
    }
    assert len(payload["asset"]["table"]) == 2
    # the verdict covers every component, not just the listed ones
    assert "Surge Arresters" in payload["asset"]["verdict"]
    assert payload["report"]["assetId"] == "BGE-TF-001"


def test_write_health_json_is_strict(tmp_path: Path, health_engine: HealthInferenceEngine, as_of: datetime) -> None:
    report = analyze_health(demo_health_request("COMED-TF-004"), as_of=as_of, engine=health_engine)
    out = write_health_json(tmp_path / "nested" / "health.json", report)

    assert out.exists()
    obj = json.loads(out.read_text(encoding="utf-8"), parse_constant=_reject_constants)
    assert obj["meta"]["generated_at"] is None
    assert len(obj["asset"]["table"]) == len(obj["report"]["predictions"])


def test_write_impact_json(tmp_path: Path, fleet_without_lng: dict[str, Any], as_of: datetime) -> None:
    result = analyze_impact(demo_change_dict("fuel_switch"), fleet_without_lng, as_of=as_of)
    out = write_impact_json(tmp_path / "impact.json", result, decision_version=ASSETIQ_DECISION_VERSION)

    obj = json.loads(out.read_text(encoding="utf-8"), parse_constant=_reject_constants)
    assert obj["meta"]["kind"] == "impact"
    assert obj["result"]["overallRisk"] == "critical"
    assert obj["result"]["summary"]["totalImpacts"] == 6
    assert [i["id"] for i in obj["impacts"]][0] == "equipment-retrofit"

    audit = next(i for i in obj["impacts"] if i["id"] == "compliance-audit-risk")
    assert audit["percent_change"] is None

    chain_ids = [n["id"] for n in obj["result"]["impactChain"]]
    assert chain_ids == ["fuel-contract-needed", "equipment-retrofit", "compliance-audit-risk", "imo2030-risk"]


def test_writer_refuses_nan_that_escapes_scrubbing(tmp_path: Path, monkeypatch: pytest.MonkeyPatch,
                                                   health_engine: HealthInferenceEngine, as_of: datetime) -> None:
    from assetiq.report import json_report

    report = analyze_health(demo_health_request("PECO-TF-001"), as_of=as_of, engine=health_engine)
    monkeypatch.setattr(json_report, "_json_safe", lambda x: {"bad": float("nan")})
    with pytest.raises(ValueError):
        json_report.write_health_json(tmp_path / "bad.json", report)
