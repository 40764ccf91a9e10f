from __future__ import annotations

from dataclasses import dataclass
from functools import lru_cache
from types import MappingProxyType
from typing import Any, Iterable, Mapping

from assetiq.core.contract import PRIORITY_ORDER

OVERRIDE_STATUSES = ("critical", "warning", "degraded")


@dataclass(frozen=True)
class KnownIssueOverride:
    """
    Curated finding for one component of one asset.

    When matched, it supersedes the rule-based classification: its priority,
    health score and recommended action are used as-is.
    """
    asset_id: str
    component_name: str
    category: str
    issue: str
    status: str
    health_score: float
    predicted_issue: str
    priority: str
    warning_signals: tuple[str, ...] = ()
    recommended_action: str = ""
    temperature: float | None = None
    moisture: float | None = None
    time_to_failure: str | None = None
    confidence: int | None = None
    customers_at_risk: int | None = None

    @classmethod
    def from_dict(cls, asset_id: str, data: Mapping[str, Any]) -> "KnownIssueOverride":
        pm = data.get("pmPrediction", {}) or {}
        status = str(data.get("status", "degraded"))
        priority = str(pm.get("priority", "medium"))
        if status not in OVERRIDE_STATUSES:
            raise ValueError(f"{asset_id}: invalid override status {status!r}")
        if priority not in PRIORITY_ORDER:
            raise ValueError(f"{asset_id}: invalid override priority {priority!r}")
        return cls(
            asset_id=asset_id,
            component_name=str(data["componentName"]),
            category=str(data.get("category", "")),
            issue=str(data.get("issue", "")),
            status=status,
            health_score=float(data["healthScore"]),
            predicted_issue=str(pm.get("predictedIssue", "")),
            priority=priority,
            warning_signals=tuple(pm.get("warningSignals", [])),
            recommended_action=str(pm.get("recommendedAction", "")),
            temperature=data.get("temperature"),
            moisture=data.get("moisture"),
            time_to_failure=pm.get("timeToFailure"),
            confidence=pm.get("confidence"),
            customers_at_risk=pm.get("customersAtRisk"),
        )


@dataclass(frozen=True)
class IssueSummary:
    issue_count: int
    worst_priority: str | None
    worst_health: float
    has_high_priority: bool
    has_critical: bool
    total_customers_at_risk: int


# ----------------------------
# Matching
# ----------------------------

def normalize_name(name: str) -> str:
    return " ".join(str(name).lower().split())


def first_word(name: str) -> str:
    norm = normalize_name(name)
    return norm.split(" ", 1)[0] if norm else ""


def names_match(component_name: str, override_name: str) -> bool:
    """
    Either name contains the other's first word (case-insensitive).

    Containment is on substrings, not tokens: "Bushing A" matches
    "HV Bushings" because "bushing" occurs inside "hv bushings".
    """
    comp = normalize_name(component_name)
    over = normalize_name(override_name)
    if not comp or not over:
        return False
    return first_word(over) in comp or first_word(comp) in over


def match_override(
    component_name: str,
    candidates: Iterable[KnownIssueOverride],
) -> KnownIssueOverride | None:
    """
    Pick the override for a component.

    Tie-break when several candidates match: an override whose first word
    equals the component's first word wins; otherwise the first match in
    catalog order.
    """
    matches = [c for c in candidates if names_match(component_name, c.component_name)]
    if not matches:
        return None

    head = first_word(component_name)
    for c in matches:
        if first_word(c.component_name) == head:
            return c
    return matches[0]


# ----------------------------
# Registry
# ----------------------------

class KnownIssueRegistry:
    """Read-only map of asset id -> ordered overrides."""

    def __init__(self, overrides: Iterable[KnownIssueOverride] = ()) -> None:
        table: dict[str, list[KnownIssueOverride]] = {}
        for o in overrides:
            table.setdefault(o.asset_id, []).append(o)
        self._by_asset: Mapping[str, tuple[KnownIssueOverride, ...]] = MappingProxyType(
            {k: tuple(v) for k, v in table.items()}
        )

    @classmethod
    def from_mapping(cls, data: Mapping[str, Iterable[Mapping[str, Any]]]) -> "KnownIssueRegistry":
        return cls(KnownIssueOverride.from_dict(asset_id, d) for asset_id, items in data.items() for d in items)

    @classmethod
    def default(cls) -> "KnownIssueRegistry":
        return _default_registry()

    def __contains__(self, asset_id: object) -> bool:
        return asset_id in self._by_asset

    def asset_ids(self) -> list[str]:
        return list(self._by_asset)

    def for_asset(self, asset_id: str) -> tuple[KnownIssueOverride, ...]:
        return self._by_asset.get(asset_id, ())

    def match(self, asset_id: str, component_name: str) -> KnownIssueOverride | None:
        return match_override(component_name, self.for_asset(asset_id))

    def summarize(self, asset_id: str) -> IssueSummary:
        issues = self.for_asset(asset_id)
        if not issues:
            return IssueSummary(0, None, 100.0, False, False, 0)

        worst = min(issues, key=lambda i: PRIORITY_ORDER[i.priority]).priority
        return IssueSummary(
            issue_count=len(issues),
            worst_priority=worst,
            worst_health=min(100.0, min(i.health_score for i in issues)),
            has_high_priority=any(i.priority in ("critical", "high") for i in issues),
            has_critical=any(i.priority == "critical" for i in issues),
            # customers are shared across components of one asset; take the max
            total_customers_at_risk=max(int(i.customers_at_risk or 0) for i in issues),
        )


@lru_cache(maxsize=1)
def _default_registry() -> KnownIssueRegistry:
    from assetiq.core.catalog import KNOWN_ISSUES

    return KnownIssueRegistry.from_mapping(KNOWN_ISSUES)
