from __future__ import annotations

from typing import TYPE_CHECKING

import pandas as pd

from assetiq.core.contract import PRIORITY_ORDER, SEVERITY_ORDER

if TYPE_CHECKING:
    from assetiq.core.health import HealthReport
    from assetiq.impact.models import ImpactAnalysisResult

PREDICTION_COLUMNS = [
    "component_id",
    "component",
    "type",
    "priority",
    "health",
    "remaining",
    "confidence",
    "action",
]

IMPACT_COLUMNS = [
    "id",
    "direction",
    "category",
    "severity",
    "timeframe",
    "title",
    "confidence",
    "depends_on",
    "percent_change",
]


def predictions_frame(report: HealthReport) -> pd.DataFrame:
    """One row per component prediction, worst first."""
    if not report.predictions:
        return pd.DataFrame(columns=PREDICTION_COLUMNS)

    rows = []
    for p in report.predictions:
        rows.append(
            {
                "component_id": p.component_id,
                "component": p.component_name,
                "type": p.component_type,
                "priority": p.priority,
                "health": round(float(p.current_health), 1),
                "remaining": f"{p.remaining_life.value} {p.remaining_life.unit}",
                "confidence": int(p.confidence),
                "action": p.recommended_action,
            }
        )

    df = pd.DataFrame(rows, columns=PREDICTION_COLUMNS)
    df["_p"] = df["priority"].map(PRIORITY_ORDER).fillna(9)
    df = (
        df.sort_values(["_p", "health"], ascending=[True, True], kind="mergesort")
          .drop(columns="_p")
          .reset_index(drop=True)
    )
    return df


def asset_verdict(frame: pd.DataFrame) -> str:
    if frame.empty:
        return "No component data available."

    def names(priority: str) -> list[str]:
        return frame.loc[frame["priority"] == priority, "component"].astype(str).tolist()

    parts: list[str] = []
    critical = names("critical")
    high = names("high")
    medium = names("medium")
    low = names("low")
    if critical:
        parts.append(f"{', '.join(critical)} requires immediate intervention")
    if high:
        parts.append(f"{', '.join(high)} should be scheduled for repair within 30 days")
    if medium:
        parts.append(f"{', '.join(medium)} shows degradation and should be monitored")
    if low:
        parts.append(f"{', '.join(low)} remains healthy")

    return ". ".join(parts) + "."


def impacts_frame(result: ImpactAnalysisResult) -> pd.DataFrame:
    """Flatten every impact of an analysis, most severe first."""
    if not result.impacts:
        return pd.DataFrame(columns=IMPACT_COLUMNS)

    rows = []
    for i in result.impacts:
        rows.append(
            {
                "id": i.id,
                "direction": i.direction,
                "category": i.category,
                "severity": i.severity,
                "timeframe": i.timeframe,
                "title": i.title,
                "confidence": float(i.confidence),
                "depends_on": ", ".join(i.depends_on),
                "percent_change": None if i.quantitative is None else float(i.quantitative.percent_change),
            }
        )

    df = pd.DataFrame(rows, columns=IMPACT_COLUMNS)
    df["_s"] = df["severity"].map(SEVERITY_ORDER).fillna(9)
    return df.sort_values("_s", kind="mergesort").drop(columns="_s").reset_index(drop=True)
