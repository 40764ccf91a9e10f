from __future__ import annotations

import pytest

from assetiq.core.issues import (
    KnownIssueOverride,
    KnownIssueRegistry,
    match_override,
    names_match,
    normalize_name,
)


def _override(name: str, priority: str = "high", status: str = "warning") -> KnownIssueOverride:
    return KnownIssueOverride.from_dict(
        "T-1",
        {
            "componentName": name,
            "healthScore": 50,
            "status": status,
            "pmPrediction": {"predictedIssue": f"{name} issue", "priority": priority},
        },
    )


def test_normalize_name_collapses_case_and_whitespace() -> None:
    assert normalize_name("  HV   Bushings ") == "hv bushings"


@pytest.mark.parametrize(
    "component, override, expected",
    [
        ("Winding Insulation", "Winding Insulation", True),
        ("winding", "Winding Insulation", True),
        ("Bushing A", "HV Bushings", True),
        ("Cooling Fans", "Cooling System", True),
        ("On-Load Tap Changer", "Winding Insulation", False),
        ("", "Winding Insulation", False),
        ("Winding", "", False),
    ],
)
def test_names_match(component: str, override: str, expected: bool) -> None:
    assert names_match(component, override) is expected


def test_exact_first_word_wins_the_tie() -> None:
    hv = _override("HV Bushings")
    lv = _override("LV Bushings")
    # "bushings" is a substring of both override names
    assert match_override("Bushings", [hv, lv]) is hv
    assert match_override("LV Bushings", [hv, lv]) is lv


def test_first_match_in_catalog_order_otherwise() -> None:
    a = _override("Oil System")
    b = _override("Oil Pump")
    # "oil" occurs in the component name, but "main" is no override's first word
    assert match_override("Main Oil Tank", [a, b]) is a
    assert match_override("Main Oil Tank", [b, a]) is b
    assert match_override("Bushing A", [a, b]) is None


def test_invalid_override_status_and_priority_are_rejected() -> None:
    with pytest.raises(ValueError):
        _override("Winding", status="broken")
    with pytest.raises(ValueError):
        _override("Winding", priority="urgent")


def test_default_registry_contents() -> None:
    reg = KnownIssueRegistry.default()
    assert {"BGE-TF-001", "COMED-TF-004", "PECO-TF-001"} <= set(reg.asset_ids())
    assert "NOPE-1" not in reg
    assert reg.for_asset("NOPE-1") == ()

    hit = reg.match("BGE-TF-001", "Winding Insulation")
    assert hit is not None
    assert hit.health_score == 35
    assert hit.priority == "critical"
    assert reg.match("BGE-TF-001", "Surge Arresters") is None


def test_summarize_worst_case() -> None:
    s = KnownIssueRegistry.default().summarize("COMED-TF-004")
    assert s.issue_count == 3
    assert s.worst_priority == "critical"
    assert s.worst_health == 28
    assert s.has_critical and s.has_high_priority
    assert s.total_customers_at_risk == 65000


def test_summarize_unknown_asset() -> None:
    s = KnownIssueRegistry.default().summarize("NOPE-1")
    assert s.issue_count == 0
    assert s.worst_priority is None
    assert s.worst_health == 100.0
    assert not s.has_critical


def test_registry_from_mapping_keeps_order() -> None:
    reg = KnownIssueRegistry.from_mapping(
        {
            "X": [
                {"componentName": "Oil Pump", "healthScore": 40, "status": "critical",
                 "pmPrediction": {"priority": "critical"}},
                {"componentName": "Oil System", "healthScore": 60, "status": "degraded",
                 "pmPrediction": {"priority": "medium"}},
            ]
        }
    )
    assert [o.component_name for o in reg.for_asset("X")] == ["Oil Pump", "Oil System"]
    assert reg.summarize("X").worst_priority == "critical"
