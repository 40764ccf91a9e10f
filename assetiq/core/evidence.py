from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import datetime, timedelta
from typing import Any, Callable, Iterable, Mapping, Sequence

from assetiq.core.catalog import FLEET_PATTERNS, WORK_ORDER_ISSUES

logger = logging.getLogger(__name__)

RandomSource = Callable[[], float]
GeneratorFactory = Callable[[int], RandomSource]

# (keywords, component type); first hit wins, so the longer "protect" is
# checked before the bare "ct" it contains
COMPONENT_KEYWORDS: tuple[tuple[tuple[str, ...], str], ...] = (
    (("winding",), "winding"),
    (("bushing",), "bushing"),
    (("tap",), "tap_changer"),
    (("cool", "fan"), "cooling_system"),
    (("oil",), "oil_system"),
    (("surge", "arrester"), "surge_arrester"),
    (("breaker",), "breaker"),
    (("relay",), "relay"),
    (("protect",), "protection_system"),
    (("ct", "current"), "current_transformer"),
)
DEFAULT_COMPONENT_TYPE = "winding"

PM_RESOLUTION = "Completed as scheduled"
CM_RESOLUTION = "Repair completed, equipment returned to service"

INSPECTION_CONDITIONS = ("good", "fair", "poor", "critical")
INSPECTORS = ("James Wilson", "Maria Chen", "David Okafor", "Sarah Mitchell")

# condition -> (always-present findings, extra finding added on a coin flip)
INSPECTION_FINDINGS: dict[str, tuple[tuple[str, ...], str | None]] = {
    "good": (
        ("Equipment in good operating condition", "No visible defects or abnormalities"),
        "Minor cosmetic wear within acceptable limits",
    ),
    "fair": (
        ("Minor oil weeping observed at gasket", "Cooling fan vibration slightly elevated"),
        "Paint deterioration on radiators - no structural impact",
    ),
    "poor": (
        (
            "Significant oil discoloration noted",
            "Bushing porcelain showing surface tracking",
            "Elevated top oil temperature under normal load",
        ),
        "Corrosion on tank base - monitoring recommended",
    ),
    "critical": (
        (
            "Critical DGA readings - immediate follow-up required",
            "Visible oil leak at main gasket",
            "Abnormal noise from tap changer mechanism",
            "Recommend de-loading pending investigation",
        ),
        None,
    ),
}

INSPECTION_ACTIONS = (
    "Schedule maintenance during next planned outage",
    "Order replacement components from OEM",
    "Increase DGA sampling frequency to monthly",
    "Consult transformer specialist for assessment",
    "Coordinate with dispatch for load transfer capability",
)

OIL_LAB = "Weidmann Electrical Technology"
OIL_RECOMMENDATIONS = {
    "critical": "Immediate oil treatment recommended. Schedule DGA follow-up within 30 days per IEEE C57.104.",
    "marginal": "Schedule oil filtration within next quarter. Increase DGA sampling to monthly.",
    "good": "Oil condition acceptable. Continue annual DGA monitoring per IEEE C57.104.",
}


# ----------------------------
# Seeded generation
# ----------------------------

def stable_hash(text: str) -> int:
    """
    31-multiplier string hash, wrapped to signed 32 bits, absolute value.

    Stable across processes (unlike the builtin hash()).
    """
    h = 0
    for ch in text:
        h = ((h << 5) - h + ord(ch)) & 0xFFFFFFFF
    if h & 0x80000000:
        h -= 0x100000000
    return abs(h)


class LinearCongruentialGenerator:
    """Tiny deterministic PRNG; each call returns a float in [0, 1]."""

    MULTIPLIER = 1103515245
    INCREMENT = 12345
    MASK = 0x7FFFFFFF

    def __init__(self, seed: int) -> None:
        self.state = int(seed)

    def __call__(self) -> float:
        self.state = (self.state * self.MULTIPLIER + self.INCREMENT) & self.MASK
        return self.state / self.MASK


def infer_component_type(component_id: str) -> str:
    cid = component_id.lower()
    for keywords, component_type in COMPONENT_KEYWORDS:
        if any(k in cid for k in keywords):
            return component_type
    return DEFAULT_COMPONENT_TYPE


def _serial(prefix: str, year: int, r: RandomSource) -> str:
    return f"{prefix}-{year}-{int(r() * 900) + 100}"


# ----------------------------
# Records
# ----------------------------

@dataclass(frozen=True)
class WorkOrder:
    id: str
    asset_id: str
    component_id: str
    kind: str                 # "preventive" | "corrective"
    issue: str
    resolution: str
    created: datetime
    completed: datetime
    labor_hours: int
    parts_cost: int
    downtime_hours: int

    @property
    def unplanned(self) -> bool:
        return self.kind == "corrective"

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "assetId": self.asset_id,
            "componentId": self.component_id,
            "type": "PM" if self.kind == "preventive" else "CM",
            "issue": self.issue,
            "resolution": self.resolution,
            "dateCreated": self.created.isoformat(),
            "dateCompleted": self.completed.isoformat(),
            "laborHours": self.labor_hours,
            "partsCost": self.parts_cost,
            "downtime": self.downtime_hours,
            "wasUnplanned": self.unplanned,
        }


@dataclass(frozen=True)
class InspectionRecord:
    id: str
    asset_id: str
    component_id: str
    date: datetime
    inspector: str
    condition: str
    findings: tuple[str, ...]
    photos_count: int
    recommended_actions: tuple[str, ...] = ()

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "assetId": self.asset_id,
            "componentId": self.component_id,
            "date": self.date.isoformat(),
            "inspector": self.inspector,
            "condition": self.condition,
            "findings": list(self.findings),
            "photosCount": self.photos_count,
            "recommendedActions": list(self.recommended_actions),
        }


@dataclass(frozen=True)
class OilResult:
    parameter: str
    value: float
    unit: str
    status: str               # "normal" | "warning"
    trend: str                # "stable" | "increasing" | "decreasing"

    def to_dict(self) -> dict[str, Any]:
        return {
            "parameter": self.parameter,
            "value": self.value,
            "unit": self.unit,
            "status": self.status,
            "trend": self.trend,
        }


@dataclass(frozen=True)
class OilAnalysisRecord:
    id: str
    asset_id: str
    component_id: str
    date: datetime
    lab: str
    results: tuple[OilResult, ...]
    overall_condition: str
    recommendation: str

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "assetId": self.asset_id,
            "componentId": self.component_id,
            "date": self.date.isoformat(),
            "lab": self.lab,
            "results": [r.to_dict() for r in self.results],
            "overallCondition": self.overall_condition,
            "recommendation": self.recommendation,
        }


@dataclass(frozen=True)
class FleetPattern:
    component_type: str
    pattern: str
    occurrences: int
    average_failure_point: float
    average_failure_unit: str
    affected_assets: tuple[str, ...] = ()
    recommended_intervention: str = ""

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "FleetPattern":
        point = data.get("averageFailurePoint", {}) or {}
        return cls(
            component_type=str(data["componentType"]),
            pattern=str(data["pattern"]),
            occurrences=int(data.get("occurrences", 0)),
            average_failure_point=float(point.get("value", 0)),
            average_failure_unit=str(point.get("unit", "years")),
            affected_assets=tuple(data.get("affectedAssets", [])),
            recommended_intervention=str(data.get("recommendedIntervention", "")),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "componentType": self.component_type,
            "pattern": self.pattern,
            "occurrences": self.occurrences,
            "averageFailurePoint": {"value": self.average_failure_point, "unit": self.average_failure_unit},
            "affectedAssets": list(self.affected_assets),
            "recommendedIntervention": self.recommended_intervention,
        }


# ----------------------------
# Synthesizer
# ----------------------------

@dataclass(frozen=True)
class EvidenceSynthesizer:
    """
    Deterministic stand-in for maintenance-history sources.

    Every record set is a pure function of (asset_id, component_id, as_of):
    the seed is stable_hash of the ids and the generator comes from
    `generator_factory`, so tests can inject a scripted sequence.
    """
    as_of: datetime | None = None
    generator_factory: GeneratorFactory = LinearCongruentialGenerator
    issues: Mapping[str, tuple[Sequence[str], Sequence[str]]] = field(default_factory=lambda: WORK_ORDER_ISSUES)
    patterns: tuple[FleetPattern, ...] = field(
        default_factory=lambda: tuple(FleetPattern.from_dict(p) for p in FLEET_PATTERNS)
    )

    def _now(self, as_of: datetime | None) -> datetime:
        now = as_of or self.as_of
        if now is None:
            raise ValueError("as_of is required for evidence synthesis")
        return now

    def work_orders(self, asset_id: str, component_id: str, as_of: datetime | None = None) -> list[WorkOrder]:
        now = self._now(as_of)
        r = self.generator_factory(stable_hash(asset_id + component_id))

        component_type = infer_component_type(component_id)
        pm_issues, cm_issues = self.issues.get(component_type) or self.issues[DEFAULT_COMPONENT_TYPE]

        out: list[WorkOrder] = []
        count = int(r() * 8) + 4
        for _ in range(count):
            preventive = r() > 0.35
            phrasings = pm_issues if preventive else cm_issues
            created = now - timedelta(days=int(r() * 180) + 1)
            wo_id = _serial("WO", now.year, r)
            issue = phrasings[int(r() * len(phrasings))]
            completed = created + timedelta(hours=int(r() * 48) + 4)
            labor = int(r() * 16) + 2
            parts_cost = int(r() * 5000) + 500
            downtime = int(r() * 8) + 2 if preventive else int(r() * 24) + 8

            out.append(
                WorkOrder(
                    id=wo_id,
                    asset_id=asset_id,
                    component_id=component_id,
                    kind="preventive" if preventive else "corrective",
                    issue=issue,
                    resolution=PM_RESOLUTION if preventive else CM_RESOLUTION,
                    created=created,
                    completed=completed,
                    labor_hours=labor,
                    parts_cost=parts_cost,
                    downtime_hours=downtime,
                )
            )

        # sorted() is stable, so same-day orders keep generation order
        out = sorted(out, key=lambda w: w.created, reverse=True)
        logger.debug("synthesized %d work orders for %s/%s", len(out), asset_id, component_id)
        return out

    def inspections(self, asset_id: str, component_id: str, as_of: datetime | None = None) -> list[InspectionRecord]:
        now = self._now(as_of)
        r = self.generator_factory(stable_hash(asset_id + component_id + "inspection"))

        out: list[InspectionRecord] = []
        count = int(r() * 4) + 2
        for _ in range(count):
            date = now - timedelta(days=int(r() * 90) + 14)
            cond_idx = min(int(r() * 3), 3)
            condition = INSPECTION_CONDITIONS[cond_idx]
            ins_id = _serial("INS", now.year, r)
            inspector = INSPECTORS[int(r() * len(INSPECTORS))]

            base, extra = INSPECTION_FINDINGS[condition]
            findings = list(base)
            if extra is not None and r() > 0.5:
                findings.append(extra)

            photos = int(r() * 12) + 3
            actions: tuple[str, ...] = ()
            if cond_idx > 0:
                actions = INSPECTION_ACTIONS[: int(r() * 2) + 1]

            out.append(
                InspectionRecord(
                    id=ins_id,
                    asset_id=asset_id,
                    component_id=component_id,
                    date=date,
                    inspector=inspector,
                    condition=condition,
                    findings=tuple(findings),
                    photos_count=photos,
                    recommended_actions=actions,
                )
            )

        return sorted(out, key=lambda i: i.date, reverse=True)

    def oil_analyses(self, asset_id: str, component_id: str, as_of: datetime | None = None) -> list[OilAnalysisRecord]:
        now = self._now(as_of)
        r = self.generator_factory(stable_hash(asset_id + component_id + "oil"))

        out: list[OilAnalysisRecord] = []
        count = int(r() * 3) + 1
        for _ in range(count):
            date = now - timedelta(days=int(r() * 60) + 21)
            if r() > 0.7:
                overall = "marginal"
            elif r() > 0.9:
                overall = "critical"
            else:
                overall = "good"
            oil_id = _serial("OIL", now.year, r)

            results = (
                OilResult(
                    "Hydrogen (H2)",
                    int(r() * 200) + 20,
                    "ppm",
                    "warning" if r() > 0.7 else "normal",
                    "increasing" if r() > 0.5 else "stable",
                ),
                OilResult(
                    "Acetylene (C2H2)",
                    int(r() * 15),
                    "ppm",
                    "warning" if r() > 0.85 else "normal",
                    "stable",
                ),
                OilResult(
                    "Moisture Content",
                    int(r() * 30) + 5,
                    "ppm",
                    "warning" if r() > 0.8 else "normal",
                    "increasing" if r() > 0.6 else "stable",
                ),
                OilResult(
                    "Dielectric Strength",
                    int(r() * 20) + 25,
                    "kV",
                    "warning" if r() > 0.75 else "normal",
                    "decreasing" if r() > 0.5 else "stable",
                ),
                OilResult(
                    "Power Factor",
                    round(r() * 3 + 0.2, 2),
                    "%",
                    "warning" if r() > 0.8 else "normal",
                    "increasing",
                ),
            )

            out.append(
                OilAnalysisRecord(
                    id=oil_id,
                    asset_id=asset_id,
                    component_id=component_id,
                    date=date,
                    lab=OIL_LAB,
                    results=results,
                    overall_condition=overall,
                    recommendation=OIL_RECOMMENDATIONS[overall],
                )
            )

        return sorted(out, key=lambda o: o.date, reverse=True)

    def fleet_patterns(self, component_type: str | None = None) -> list[FleetPattern]:
        if component_type:
            return [p for p in self.patterns if p.component_type == component_type]
        return list(self.patterns)


def corrective_orders(orders: Iterable[WorkOrder]) -> list[WorkOrder]:
    return [w for w in orders if w.kind == "corrective"]
