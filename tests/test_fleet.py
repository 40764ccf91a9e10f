from __future__ import annotations

from datetime import datetime
from typing import Any

import pandas as pd

from assetiq.core.fleet import IMPACT_COLUMNS, PREDICTION_COLUMNS, asset_verdict, impacts_frame, predictions_frame
from assetiq.core.health import HealthInferenceEngine, analyze_health
from assetiq.impact.demo import demo_change_dict
from assetiq.impact.engine import analyze_impact
from assetiq.tools.generate_demo import demo_health_request
from tests.helpers.payloads import component, health_request


def test_predictions_frame_sorted_worst_first(health_engine: HealthInferenceEngine, as_of: datetime) -> None:
    report = analyze_health(demo_health_request("BGE-TF-001"), as_of=as_of, engine=health_engine)
    df = predictions_frame(report)

    assert list(df.columns) == PREDICTION_COLUMNS
    assert len(df) == len(report.predictions)
    assert df.loc[0, "component"] == "Winding Insulation"
    assert df.loc[0, "priority"] == "critical"

    order = {"critical": 0, "high": 1, "medium": 2, "low": 3}
    ranks = df["priority"].map(order).tolist()
    assert ranks == sorted(ranks)


def test_predictions_frame_breaks_ties_on_health(health_engine: HealthInferenceEngine, as_of: datetime) -> None:
    req = health_request(
        "TIE-1",
        component("a", "Relay A", "relay", ageYears=1, currentHealth=97),
        component("b", "Relay B", "relay", ageYears=1, currentHealth=92),
    )
    df = predictions_frame(analyze_health(req, as_of=as_of, engine=health_engine))
    assert df["component_id"].tolist() == ["b", "a"]
    assert df["remaining"].str.endswith("months").all()


def test_empty_report_gives_empty_frame(health_engine: HealthInferenceEngine, as_of: datetime) -> None:
    df = predictions_frame(analyze_health(health_request("EMPTY-1"), as_of=as_of, engine=health_engine))
    assert df.empty
    assert list(df.columns) == PREDICTION_COLUMNS
    assert asset_verdict(df) == "No component data available."


def test_asset_verdict_groups_by_priority() -> None:
    df = pd.DataFrame(
        [
            {"component": "Winding", "priority": "critical"},
            {"component": "Bushings", "priority": "high"},
            {"component": "Oil", "priority": "high"},
            {"component": "Relay", "priority": "low"},
        ]
    )
    assert asset_verdict(df) == (
        "Winding requires immediate intervention. "
        "Bushings, Oil should be scheduled for repair within 30 days. "
        "Relay remains healthy."
    )


def test_impacts_frame(fleet_without_lng: dict[str, Any], as_of: datetime) -> None:
    result = analyze_impact(demo_change_dict("fuel_switch"), fleet_without_lng, as_of=as_of)
    df = impacts_frame(result)

    assert list(df.columns) == IMPACT_COLUMNS
    assert len(df) == result.summary.total
    assert df.loc[0, "id"] == "equipment-retrofit"
    assert df["severity"].tolist()[-2:] == ["positive", "positive"]

    row = df.set_index("id").loc["esg-score-impact"]
    assert row["depends_on"] == "emissions-change"
    assert pd.isna(df.set_index("id").loc["compliance-audit-risk", "percent_change"])


def test_impacts_frame_empty(fleet_dict: dict[str, Any], as_of: datetime) -> None:
    result = analyze_impact({"id": "noop", "type": "route_change"}, fleet_dict, as_of=as_of)
    df = impacts_frame(result)
    assert df.empty
    assert list(df.columns) == IMPACT_COLUMNS
