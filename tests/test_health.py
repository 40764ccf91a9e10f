from __future__ import annotations

from datetime import datetime, timedelta

import pytest

from assetiq.core.contract import PRIORITY_ORDER
from assetiq.core.errors import MalformedRequest, UnknownComponentType
from assetiq.core.health import (
    HealthInferenceEngine,
    HealthRequest,
    analyze_health,
    classify_priority,
    remaining_life,
    top_predictions,
)
from tests.helpers.payloads import component, health_request


class EmptySynthesizer:
    """No maintenance history of any kind."""

    def work_orders(self, asset_id, component_id, as_of=None):
        return []

    def inspections(self, asset_id, component_id, as_of=None):
        return []

    def oil_analyses(self, asset_id, component_id, as_of=None):
        return []

    def fleet_patterns(self, component_type=None):
        return []


# ----------------------------
# Pure rules
# ----------------------------

def test_classify_priority_thresholds() -> None:
    assert classify_priority(25, 80) == "critical"
    assert classify_priority(90, 5) == "critical"
    assert classify_priority(90, 80, failure_probability=0.9) == "critical"
    assert classify_priority(90, 80, failure_probability=0.5) == "low"
    assert classify_priority(45, 80) == "high"
    assert classify_priority(50, 80) == "medium"
    assert classify_priority(90, 20) == "high"
    assert classify_priority(65, 80) == "medium"
    assert classify_priority(90, 45) == "medium"
    assert classify_priority(90, 80) == "low"


def test_priority_is_monotone_in_health_and_remaining_life() -> None:
    by_health = [PRIORITY_ORDER[classify_priority(h, 80)] for h in range(0, 101)]
    assert by_health == sorted(by_health)

    by_remaining = [PRIORITY_ORDER[classify_priority(95, r)] for r in range(0, 101)]
    assert by_remaining == sorted(by_remaining)


def test_remaining_life_units() -> None:
    long_life = remaining_life(50, 10, 100)
    assert (long_life.value, long_life.unit, long_life.percent_remaining) == (480, "months", 80)

    short = remaining_life(50, 49.9, 50)
    assert short.unit == "days"
    assert short.value >= 1

    exhausted = remaining_life(50, 60, 90)
    assert (exhausted.value, exhausted.unit, exhausted.percent_remaining) == (1, "days", 0)


# ----------------------------
# Scenarios
# ----------------------------

def test_aging_asset_is_critical(health_engine: HealthInferenceEngine, as_of: datetime) -> None:
    req = health_request("TEST-TF-9", component("w1", "Main Winding", "winding", ageYears=50, currentHealth=38))
    report = analyze_health(req, as_of=as_of, engine=health_engine)

    (pred,) = report.predictions
    assert pred.priority == "critical"
    assert pred.remaining_life.percent_remaining == 0
    assert pred.remaining_life.unit == "days"
    assert pred.current_health == 38
    assert pred.confidence == 95
    # longest winding task is 8h at 2000/h; critical multiplier 5
    assert pred.cost_of_inaction == 16000 * 5 * 3
    assert (pred.repair_cost_min, pred.repair_cost_max) == (12800, 32000)
    assert (pred.downtime_min_hours, pred.downtime_max_hours) == (120, 360)
    assert report.overall_health_score == 38


def test_known_issue_overrides_live_reading(health_engine: HealthInferenceEngine, as_of: datetime) -> None:
    req = health_request(
        "BGE-TF-001",
        component("c1", "Winding Insulation", "winding", currentHealth=90, ageYears=5),
        component("c2", "HV Bushings", "bushing", currentHealth=99, ageYears=1),
    )
    report = health_engine.analyze(HealthRequest.from_dict(req), as_of=as_of)
    by_id = {p.component_id: p for p in report.predictions}

    winding = by_id["c1"]
    assert winding.current_health == 35
    assert winding.priority == "critical"
    assert winding.confidence == 92
    assert winding.customers_at_risk == 72000
    assert winding.recommended_action.startswith("IMMEDIATE")

    bushings = by_id["c2"]
    assert bushings.priority == "high"
    assert bushings.current_health == 48

    first_step = next(s for s in report.reasoning_chain if s.component_id == "c1")
    assert first_step.text.startswith("Known issue:")
    assert first_step.is_key


def test_evidence_gap_lowers_confidence(as_of: datetime) -> None:
    engine = HealthInferenceEngine(synthesizer=EmptySynthesizer())
    req = health_request(
        "GAP-1",
        component("b1", "Bushing A", "bushing", ageYears=10),
        component("b2", "Bushing B", "bushing", ageYears=10, currentHealth=96),
    )
    report = engine.analyze(HealthRequest.from_dict(req), as_of=as_of)
    by_id = {p.component_id: p for p in report.predictions}

    assert by_id["b1"].confidence == 70
    assert by_id["b2"].confidence == 73
    assert all(s.source_type != "work_history" for s in report.reasoning_chain)
    assert all(s.source_type != "fleet_data" for s in report.reasoning_chain)


def test_health_falls_back_to_wear_curve(health_engine: HealthInferenceEngine, as_of: datetime) -> None:
    req = health_request("NEW-1", component("w", "Winding", "winding", ageYears=25))
    report = analyze_health(req, as_of=as_of, engine=health_engine)
    assert report.predictions[0].current_health == pytest.approx(77.5)


def test_analysis_is_deterministic(as_of: datetime) -> None:
    req = health_request(
        "BGE-TF-001",
        component("c1", "Winding Insulation", "winding", ageYears=42),
        component("c3", "On-Load Tap Changer", "tap_changer", ageYears=42, currentHealth=74),
    )
    a = analyze_health(req, as_of=as_of).to_dict()
    b = analyze_health(req, as_of=as_of, engine=HealthInferenceEngine()).to_dict()
    assert a == b


def test_predictions_sorted_by_priority_stably(health_engine: HealthInferenceEngine, as_of: datetime) -> None:
    req = health_request(
        "SORT-1",
        component("a", "Fresh Arrester", "surge_arrester", ageYears=1, currentHealth=99),
        component("b", "Old Winding", "winding", ageYears=50, currentHealth=30),
        component("c", "Fresh Relay", "relay", ageYears=1, currentHealth=99),
        component("d", "Old Bushing", "bushing", ageYears=40, currentHealth=20),
    )
    report = analyze_health(req, as_of=as_of, engine=health_engine)
    ids = [p.component_id for p in report.predictions]
    assert ids[:2] == ["b", "d"]
    ranks = [PRIORITY_ORDER[p.priority] for p in report.predictions]
    assert ranks == sorted(ranks)
    assert top_predictions(report, 2) == report.predictions[:2]
    assert top_predictions(report, -1) == ()


def test_prediction_ids_and_windows(health_engine: HealthInferenceEngine, as_of: datetime) -> None:
    req = health_request("ID-1", component("cool-1", "Cooling", "cooling_system", ageYears=3))
    report = analyze_health(req, as_of=as_of, engine=health_engine)
    pred = report.predictions[0]
    assert pred.id == "pred-ID-1-cool-1"
    assert pred.window_start == as_of + timedelta(days=14)
    assert pred.window_end == as_of + timedelta(days=30)
    assert report.next_analysis == as_of + timedelta(hours=24)


def test_degradation_curve_shape(health_engine: HealthInferenceEngine, as_of: datetime) -> None:
    req = health_request("CURVE-1", component("w", "Winding", "winding", ageYears=50, currentHealth=38))
    curve = analyze_health(req, as_of=as_of, engine=health_engine).degradation_curve

    history = [p for p in curve if not p.is_projected]
    projected = [p for p in curve if p.is_projected]
    assert len(history) == 8 and len(projected) == 5
    assert history[0].health_score == 100.0
    assert history[-1].health_score == 38.0
    assert history[-1].timestamp == as_of
    # slope 62/50 per year, accelerated by 1.3, two-year steps
    assert projected[0].health_score == pytest.approx(34.8)
    scores = [p.health_score for p in curve]
    assert scores == sorted(scores, reverse=True)
    assert min(scores) >= 0


def test_empty_component_list(health_engine: HealthInferenceEngine, as_of: datetime) -> None:
    report = analyze_health(health_request("EMPTY-1"), as_of=as_of, engine=health_engine)
    assert report.predictions == ()
    assert report.degradation_curve == ()
    assert report.overall_health_score == 100


def test_component_list_alias(as_of: datetime) -> None:
    req = {"assetId": "ALIAS-1", "componentList": [component("w", "Winding", "winding", ageYears=10)]}
    parsed = HealthRequest.from_dict(req)
    assert [c.id for c in parsed.components] == ["w"]
    assert parsed.asset_name == "ALIAS-1"


def test_bad_requests_are_rejected(health_engine: HealthInferenceEngine, as_of: datetime) -> None:
    with pytest.raises(MalformedRequest):
        HealthRequest.from_dict({"components": []})
    with pytest.raises(MalformedRequest):
        HealthRequest.from_dict({"assetId": "X", "components": [{"id": "a", "type": "winding"}]})
    with pytest.raises(MalformedRequest):
        HealthRequest.from_dict({"assetId": "X", "components": "winding"})

    req = health_request("X", component("a", "Thing", "flux_capacitor"))
    with pytest.raises(UnknownComponentType):
        analyze_health(req, as_of=as_of, engine=health_engine)


def test_report_dict_contract(health_engine: HealthInferenceEngine, as_of: datetime) -> None:
    req = health_request("BGE-TF-001", component("c1", "Winding Insulation", "winding", ageYears=42))
    d = analyze_health(req, as_of=as_of, engine=health_engine).to_dict()

    assert d["status"] == "complete"
    assert d["timestamp"] == as_of.isoformat()
    assert len(d["sourcesQueried"]) == 9
    assert len(d["sourceContributions"]) == 6
    pred = d["predictions"][0]
    assert pred["remainingLife"]["unit"] in ("months", "days")
    assert pred["costOfInaction"]["currency"] == "USD"
    assert pred["estimatedDowntime"]["unit"] == "hours"
