from __future__ import annotations

from datetime import datetime
from typing import Any

import pytest

from assetiq.core.errors import InputError, MalformedRequest, UnknownChangeType
from assetiq.impact.demo import demo_change_dict
from assetiq.impact.engine import ImpactPropagationEngine, analyze_impact, parse_impact_request
from assetiq.impact.generators import seeded_delay_days
from assetiq.impact.models import FleetState, ProposedChange


def _analyze(change: dict[str, Any], fleet: dict[str, Any], as_of: datetime):
    return ImpactPropagationEngine().analyze(
        ProposedChange.from_dict(change), FleetState.from_dict(fleet), as_of=as_of
    )


def _ids(items) -> list[str]:
    return [i.id for i in items]


# ----------------------------
# Fuel switch
# ----------------------------

def test_lng_switch_without_lng_contract(fleet_without_lng: dict[str, Any], as_of: datetime) -> None:
    res = _analyze(demo_change_dict("fuel_switch"), fleet_without_lng, as_of)

    assert _ids(res.upstream) == ["fuel-contract-needed", "equipment-retrofit"]
    assert _ids(res.downstream) == ["emissions-change", "compliance-audit-risk", "imo2030-risk", "esg-score-impact"]
    assert res.lateral == ()

    by_id = {i.id: i for i in res.impacts}
    assert by_id["fuel-contract-needed"].severity == "high"
    assert by_id["fuel-contract-needed"].timeframe == "medium_term"
    assert by_id["equipment-retrofit"].severity == "critical"
    assert by_id["emissions-change"].severity == "positive"
    assert by_id["emissions-change"].quantitative.percent_change == pytest.approx(-25)
    assert by_id["imo2030-risk"].severity == "medium"

    assert res.overall_risk == "critical"
    s = res.summary
    assert (s.total, s.critical, s.high, s.medium, s.low, s.positive) == (6, 1, 1, 2, 0, 2)
    assert res.overall_confidence == pytest.approx(0.78)


def test_lng_switch_causal_chain(fleet_without_lng: dict[str, Any], as_of: datetime) -> None:
    res = _analyze(demo_change_dict("fuel_switch"), fleet_without_lng, as_of)
    by_id = {i.id: i for i in res.impacts}

    assert by_id["emissions-change"].depends_on == ("equipment-retrofit",)
    assert by_id["esg-score-impact"].depends_on == ("emissions-change",)

    assert [n.id for n in res.chain] == [
        "fuel-contract-needed", "equipment-retrofit", "compliance-audit-risk", "imo2030-risk",
    ]
    retrofit = res.chain[1]
    assert [(n.id, n.depth) for n in retrofit.walk()] == [
        ("equipment-retrofit", 0), ("emissions-change", 1), ("esg-score-impact", 2),
    ]
    # the forest reaches every impact exactly once
    assert sorted(n.id for root in res.chain for n in root.walk()) == sorted(by_id)


def test_lng_switch_summaries(fleet_without_lng: dict[str, Any], as_of: datetime) -> None:
    res = _analyze(demo_change_dict("fuel_switch"), fleet_without_lng, as_of)

    assert res.esg.co2_change == pytest.approx(-25)
    assert res.esg.nox_change == pytest.approx(-20)
    assert res.esg.compliance_risk_change == 5
    assert res.esg.esg_score_change == 5

    # 45 t/day over a year, a quarter of it at 85 per credit
    assert res.financial.carbon_credit_impact == pytest.approx(-349031.25)
    assert res.financial.estimated_cost_impact == 0

    actions = [(r.priority, r.action) for r in res.recommendations]
    assert actions == [
        ("critical", "Phase conversion during scheduled dry-dock"),
        ("high", "Initiate contract negotiations immediately"),
        ("medium", "Schedule stakeholder review meeting"),
    ]
    assert len(res.alternatives) == 3


def test_lng_switch_with_existing_contract_prices_the_fuel(fleet_dict: dict[str, Any], as_of: datetime) -> None:
    res = _analyze(demo_change_dict("fuel_switch"), fleet_dict, as_of)
    by_id = {i.id: i for i in res.impacts}

    assert "fuel-contract-needed" not in by_id
    cost = by_id["fuel-cost-change"]
    # (520 - 450) * 10000 * 12
    assert cost.quantitative.delta == pytest.approx(8_400_000)
    assert cost.severity == "high"


# ----------------------------
# Other change types
# ----------------------------

@pytest.mark.parametrize("change_type", ["route_change", "weather_event", "crew_reassignment"])
def test_change_types_without_generators(change_type: str, fleet_dict: dict[str, Any], as_of: datetime) -> None:
    res = _analyze({"id": "noop", "type": change_type}, fleet_dict, as_of)

    assert res.impacts == ()
    assert res.chain == ()
    assert res.overall_risk == "low"
    assert res.overall_confidence == 0.0
    assert [r.priority for r in res.recommendations] == ["medium"]


def test_vessel_assignment(fleet_dict: dict[str, Any], as_of: datetime) -> None:
    res = _analyze(demo_change_dict("vessel_assignment"), fleet_dict, as_of)
    by_id = {i.id: i for i in res.impacts}

    assert _ids(res.upstream) == ["supply-chain-parts-risk", "maintenance-conflict", "port-congestion"]
    assert _ids(res.lateral) == ["lateral-vessel-v3"]
    assert by_id["maintenance-conflict"].severity == "high"
    assert by_id["revenue-impact"].quantitative.projected_value == 1_200_000

    assert by_id["timeline-p1"].depends_on == ("maintenance-conflict",)
    for dependent in ("client-communication", "revenue-impact", "lateral-vessel-v3"):
        assert by_id[dependent].depends_on == ("timeline-p1",)

    assert res.overall_risk == "medium"
    assert res.operational.schedule_delay_days == 10
    assert res.operational.maintenance_reschedules == 1
    assert res.financial.revenue_impact == -1_200_000


def test_lateral_fan_out_is_bounded(fleet_dict: dict[str, Any], as_of: datetime) -> None:
    client = fleet_dict["projects"][0]["client"]
    for i in range(5, 12):
        fleet_dict["vessels"].append(dict(fleet_dict["vessels"][0], id=f"v{i}", name=f"Extra {i}"))
    fleet_dict["projects"].append(
        {"id": "p9", "name": "Extra", "client": client, "status": "active", "priority": "low", "progress": 0,
         "budget": {"allocated": 1, "spent": 0}, "deadline": fleet_dict["projects"][0]["deadline"],
         "assignedVessels": [f"v{i}" for i in range(2, 12)], "dailyBurnRate": 0, "penaltyPerDayDelay": 0}
    )
    res = _analyze(demo_change_dict("vessel_assignment"), fleet_dict, as_of)
    assert _ids(res.lateral) == ["lateral-vessel-v2", "lateral-vessel-v3", "lateral-vessel-v4"]


def test_seeded_delay_is_stable(fleet_dict: dict[str, Any], as_of: datetime) -> None:
    change = {"id": "sched-42", "type": "schedule_change", "affectedProjects": ["p1"]}
    expected = seeded_delay_days("sched-42", "p1")
    assert 3 <= expected <= 17
    assert seeded_delay_days("sched-42", "p1") == expected

    a = _analyze(change, fleet_dict, as_of)
    b = _analyze(change, fleet_dict, as_of)
    timeline = next(i for i in a.impacts if i.id == "timeline-p1")
    assert timeline.quantitative.projected_value == expected
    assert a.to_dict() == b.to_dict()


def test_missed_deadline_is_critical(fleet_dict: dict[str, Any], as_of: datetime) -> None:
    change = {"id": "late", "type": "schedule_change", "affectedProjects": ["p1"], "parameters": {"delayDays": 100}}
    res = _analyze(change, fleet_dict, as_of)
    timeline = next(i for i in res.impacts if i.id == "timeline-p1")
    assert timeline.severity == "critical"
    assert "miss deadline by 10 days" in timeline.description
    assert res.overall_risk == "critical"


def test_equipment_failure(fleet_dict: dict[str, Any], as_of: datetime) -> None:
    res = _analyze(demo_change_dict("equipment_failure"), fleet_dict, as_of)
    by_id = {i.id: i for i in res.impacts}

    assert _ids(res.downstream) == ["safety-assessment", "vessel-availability", "insurance-claim", "esg-score-impact"]
    assert by_id["safety-assessment"].severity == "critical"
    assert by_id["vessel-availability"].severity == "critical"
    assert by_id["insurance-claim"].severity == "high"
    assert by_id["insurance-claim"].depends_on == ("safety-assessment",)
    assert by_id["esg-score-impact"].depends_on == ("safety-assessment",)

    assert res.financial.insurance_impact == pytest.approx(37_500)
    assert res.operational.utilization_change == -5
    assert res.esg.esg_score_change == -2


def test_project_delay_penalties(fleet_dict: dict[str, Any], as_of: datetime) -> None:
    change = {"id": "pd", "type": "project_delay", "affectedProjects": ["p1"]}
    res = _analyze(change, fleet_dict, as_of)
    by_id = {i.id: i for i in res.impacts}

    # 50k/day for the default 7 days
    assert by_id["delay-penalties"].quantitative.projected_value == 350_000
    assert by_id["delay-penalties"].severity == "critical"
    assert "cascading-projects" not in by_id
    assert res.financial.estimated_cost_impact == 350_000


def test_new_project_budget_and_resources(fleet_dict: dict[str, Any], as_of: datetime) -> None:
    change = {
        "id": "np",
        "type": "new_project",
        "parameters": {"estimatedCost": 3_000_000, "requiredVesselTypes": ["dredger", "pipe_lay_barge"]},
    }
    res = _analyze(change, fleet_dict, as_of)
    by_id = {i.id: i for i in res.impacts}

    assert _ids(res.upstream) == ["resource-pipe_lay_barge", "budget-overrun"]
    # 1.2M short of a remaining 1.8M
    assert by_id["budget-overrun"].quantitative.percent_change == pytest.approx(200 / 3)
    assert res.financial.estimated_cost_impact == 0


def test_budget_overrun_with_exhausted_budget(fleet_dict: dict[str, Any], as_of: datetime) -> None:
    fleet_dict["financials"]["currentSpend"] = 6_000_000
    change = {"id": "np", "type": "new_project", "parameters": {"estimatedCost": 10}}
    res = _analyze(change, fleet_dict, as_of)
    overrun = next(i for i in res.impacts if i.id == "budget-overrun")
    assert overrun.quantitative.percent_change == 100.0


def test_repeated_projects_and_vessel_types_emit_one_impact_each(fleet_dict: dict[str, Any], as_of: datetime) -> None:
    delayed = _analyze(
        {"id": "dup", "type": "project_delay", "affectedProjects": ["p1", "p1"]}, fleet_dict, as_of
    )
    assert _ids(delayed.impacts).count("delay-penalties") == 1
    assert next(i for i in delayed.impacts if i.id == "delay-penalties").quantitative.projected_value == 350_000

    rescheduled = _analyze(
        {"id": "dup", "type": "schedule_change", "affectedProjects": ["p1", "p1"], "affectedVessels": ["v1", "v1"]},
        fleet_dict,
        as_of,
    )
    assert _ids(rescheduled.impacts).count("timeline-p1") == 1
    assert rescheduled.operational.affected_project_count == 1

    staffed = _analyze(
        {
            "id": "dup",
            "type": "new_project",
            "parameters": {"requiredVesselTypes": ["pipe_lay_barge", "pipe_lay_barge"]},
        },
        fleet_dict,
        as_of,
    )
    assert _ids(staffed.upstream) == ["resource-pipe_lay_barge"]


def test_repeated_ids_are_collapsed_on_parse() -> None:
    change = ProposedChange.from_dict(
        {"id": "c", "type": "vessel_assignment", "affectedVessels": ["v2", "v1", "v2"], "affectedProjects": ["p1", "p1"]}
    )
    assert change.affected_vessels == ("v2", "v1")
    assert change.affected_projects == ("p1",)


@pytest.mark.parametrize(
    "change_type,param",
    [
        ("schedule_change", "delayDays"),
        ("project_delay", "delayDays"),
        ("new_project", "estimatedCost"),
        ("equipment_failure", "estimatedDowntime"),
        ("equipment_failure", "estimatedDamage"),
    ],
)
def test_non_numeric_parameter_is_malformed(
    change_type: str, param: str, fleet_dict: dict[str, Any], as_of: datetime
) -> None:
    change = {
        "id": "bad",
        "type": change_type,
        "affectedVessels": ["v1"],
        "affectedProjects": ["p1"],
        "parameters": {param: "two weeks"},
    }
    with pytest.raises(MalformedRequest, match=param):
        _analyze(change, fleet_dict, as_of)


def test_non_numeric_fleet_field_is_malformed(fleet_dict: dict[str, Any]) -> None:
    fleet_dict["financials"]["monthlyBudget"] = "lots"
    with pytest.raises(InputError, match="invalid value"):
        FleetState.from_dict(fleet_dict)

    fleet_dict["financials"]["monthlyBudget"] = None
    with pytest.raises(MalformedRequest):
        FleetState.from_dict(fleet_dict)


# ----------------------------
# Requests
# ----------------------------

def test_unknown_change_type(fleet_dict: dict[str, Any], as_of: datetime) -> None:
    with pytest.raises(UnknownChangeType):
        analyze_impact({"id": "x", "type": "teleport"}, fleet_dict, as_of=as_of)


def test_parse_impact_request(fleet_dict: dict[str, Any]) -> None:
    change, state = parse_impact_request({"change": demo_change_dict("fuel_switch"), "fleetState": fleet_dict})
    assert change.affected_vessels == ("v1",)
    assert len(state.vessels) == 4
    with pytest.raises(ValueError):
        parse_impact_request({"change": {}})


def test_engine_uses_snapshot_time_when_as_of_missing(fleet_dict: dict[str, Any], as_of: datetime) -> None:
    res = analyze_impact(demo_change_dict("fuel_switch"), fleet_dict)
    assert res.timestamp == as_of
