from __future__ import annotations

import json
import math
from datetime import date, datetime
from pathlib import Path
from typing import Any

import pandas as pd

from assetiq.core.fleet import asset_verdict, impacts_frame, predictions_frame
from assetiq.core.health import HealthReport
from assetiq.impact.models import ImpactAnalysisResult
from assetiq.schema_constants import SCHEMA_VERSION


def _json_safe(x: Any) -> Any:
    """
    Convert values into strict JSON-safe Python types.

    Guarantees:
    - No NaN / Infinity (converted to None)
    - pandas/numpy NA -> None
    - numpy scalars -> python primitives
    - datetimes -> ISO 8601 strings
    - Recurses through dict/list/tuple
    """
    if isinstance(x, dict):
        return {str(k): _json_safe(v) for k, v in x.items()}

    if isinstance(x, (list, tuple)):
        return [_json_safe(v) for v in x]

    # bool before the NA probe; pd.isna is fine with it but keep it exact
    if isinstance(x, bool) or x is None:
        return x

    if isinstance(x, (pd.Timestamp, datetime, date)):
        return x.isoformat()

    try:
        if pd.isna(x):
            return None
    except (TypeError, ValueError):
        pass

    if isinstance(x, float):
        if math.isnan(x) or math.isinf(x):
            return None
        return x

    if isinstance(x, (str, int)):
        return x

    # numpy scalars
    if hasattr(x, "item") and callable(x.item):
        try:
            return _json_safe(x.item())
        except (TypeError, ValueError):
            pass

    return str(x)


def _df_to_records(df: pd.DataFrame) -> list[dict[str, Any]]:
    if df is None or df.empty:
        return []
    clean = df.astype(object)
    for col in clean.columns:
        clean[col] = clean[col].apply(_json_safe)
    return clean.to_dict(orient="records")


def _meta(kind: str, generated_at: str | None, decision_version: str) -> dict[str, Any]:
    return {
        "kind": kind,
        "generated_at": generated_at,
        "decision_version": decision_version,
        "schema_version": SCHEMA_VERSION,
    }


def _write(out_path: str | Path, payload: dict[str, Any]) -> Path:
    p = Path(out_path)
    p.parent.mkdir(parents=True, exist_ok=True)

    payload = _json_safe(payload)

    # strict JSON: a stray NaN is a bug, not something to serialise
    p.write_text(
        json.dumps(payload, indent=2, sort_keys=False, allow_nan=False),
        encoding="utf-8",
    )
    return p


def health_report_payload(
    report: HealthReport,
    *,
    generated_at: str | None = None,
    top_n: int | None = None,
) -> dict[str, Any]:
    full = predictions_frame(report)
    frame = full if top_n is None else full.head(max(0, int(top_n)))

    return {
        "meta": _meta("health", generated_at, report.analysis_version),
        "asset": {
            "verdict": asset_verdict(full),
            "table": _df_to_records(frame),
        },
        "report": report.to_dict(),
    }


def impact_report_payload(
    result: ImpactAnalysisResult,
    *,
    generated_at: str | None = None,
    decision_version: str,
) -> dict[str, Any]:
    return {
        "meta": _meta("impact", generated_at, decision_version),
        "impacts": _df_to_records(impacts_frame(result)),
        "result": result.to_dict(),
    }


def write_health_json(
    out_path: str | Path,
    report: HealthReport,
    *,
    generated_at: str | None = None,
    top_n: int | None = None,
) -> Path:
    """
    Write the canonical health report JSON.

    `meta` is schema-locked: add keys there only together with a schema bump.
    """
    return _write(out_path, health_report_payload(report, generated_at=generated_at, top_n=top_n))


def write_impact_json(
    out_path: str | Path,
    result: ImpactAnalysisResult,
    *,
    generated_at: str | None = None,
    decision_version: str,
) -> Path:
    return _write(
        out_path,
        impact_report_payload(result, generated_at=generated_at, decision_version=decision_version),
    )
