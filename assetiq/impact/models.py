from __future__ import annotations

from dataclasses import dataclass, field, replace
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Callable, Mapping

from assetiq.core.errors import MalformedRequest, UnknownChangeType

SEVERITIES = ("critical", "high", "medium", "low", "positive")
DIRECTIONS = ("upstream", "downstream", "lateral")
TIMEFRAMES = ("immediate", "short_term", "medium_term", "long_term")
CATEGORIES = (
    "operations",
    "finance",
    "esg",
    "compliance",
    "safety",
    "crew",
    "maintenance",
    "supply_chain",
    "client_relations",
    "regulatory",
)


class ChangeType(str, Enum):
    VESSEL_ASSIGNMENT = "vessel_assignment"
    SCHEDULE_CHANGE = "schedule_change"
    MAINTENANCE_SCHEDULE = "maintenance_schedule"
    ROUTE_CHANGE = "route_change"
    FUEL_SWITCH = "fuel_switch"
    CREW_REASSIGNMENT = "crew_reassignment"
    PROJECT_DELAY = "project_delay"
    WEATHER_EVENT = "weather_event"
    EQUIPMENT_FAILURE = "equipment_failure"
    NEW_PROJECT = "new_project"
    VESSEL_ACQUISITION = "vessel_acquisition"
    VESSEL_DISPOSAL = "vessel_disposal"

    @classmethod
    def parse(cls, value: Any) -> "ChangeType":
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            raise UnknownChangeType(str(value)) from None


# ----------------------------
# Datetime helpers
# ----------------------------

def to_naive_utc(dt: datetime) -> datetime:
    if dt.tzinfo is None:
        return dt
    return dt.astimezone(timezone.utc).replace(tzinfo=None)


def parse_datetime(value: Any) -> datetime:
    if isinstance(value, datetime):
        return to_naive_utc(value)
    s = str(value).strip()
    if s.endswith("Z"):
        s = s[:-1] + "+00:00"
    try:
        return to_naive_utc(datetime.fromisoformat(s))
    except ValueError:
        raise MalformedRequest(f"invalid datetime: {value!r}") from None


def _opt_datetime(value: Any) -> datetime | None:
    return parse_datetime(value) if value not in (None, "") else None


def _iso(dt: datetime | None) -> str | None:
    return dt.isoformat() if dt is not None else None


# ----------------------------
# Change + impact records
# ----------------------------

@dataclass(frozen=True)
class ProposedChange:
    id: str
    type: ChangeType
    title: str = ""
    description: str = ""
    effective_date: datetime | None = None
    affected_vessels: tuple[str, ...] = ()
    affected_projects: tuple[str, ...] = ()
    parameters: Mapping[str, Any] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "ProposedChange":
        if not isinstance(data, Mapping) or "type" not in data:
            raise MalformedRequest("change must be an object with a type")
        return cls(
            id=str(data.get("id", "change")),
            type=ChangeType.parse(data["type"]),
            title=str(data.get("title", "")),
            description=str(data.get("description", "")),
            effective_date=_opt_datetime(data.get("effectiveDate")),
            # repeated ids would emit repeated impacts
            affected_vessels=tuple(dict.fromkeys(str(v) for v in data.get("affectedVessels", []) or [])),
            affected_projects=tuple(dict.fromkeys(str(p) for p in data.get("affectedProjects", []) or [])),
            parameters=dict(data.get("parameters", {}) or {}),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "type": self.type.value,
            "title": self.title,
            "description": self.description,
            "effectiveDate": _iso(self.effective_date),
            "affectedVessels": list(self.affected_vessels),
            "affectedProjects": list(self.affected_projects),
            "parameters": dict(self.parameters),
        }

    def param(self, name: str, default: Any = None) -> Any:
        """Falsy parameter values fall back to the default."""
        return self.parameters.get(name) or default

    def number_param(self, name: str, default: float, cast: Callable[[Any], Any] = float) -> Any:
        value = self.param(name, default)
        try:
            return cast(value)
        except (TypeError, ValueError):
            raise MalformedRequest(f"parameter {name!r} must be a number, got {value!r}") from None


@dataclass(frozen=True)
class QuantitativeImpact:
    metric: str
    current_value: float
    projected_value: float
    unit: str
    percent_change: float

    @property
    def delta(self) -> float:
        return self.projected_value - self.current_value

    def to_dict(self) -> dict[str, Any]:
        return {
            "metric": self.metric,
            "currentValue": self.current_value,
            "projectedValue": self.projected_value,
            "unit": self.unit,
            "percentChange": self.percent_change,
        }


@dataclass(frozen=True)
class AffectedEntities:
    vessels: tuple[str, ...] = ()
    projects: tuple[str, ...] = ()
    crew: tuple[str, ...] = ()
    equipment: tuple[str, ...] = ()
    ports: tuple[str, ...] = ()
    clients: tuple[str, ...] = ()

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {}
        for name in ("vessels", "projects", "crew", "equipment", "ports", "clients"):
            values = getattr(self, name)
            if values:
                out[name] = list(values)
        return out


@dataclass(frozen=True)
class ImpactItem:
    id: str
    category: str
    direction: str
    title: str
    description: str
    severity: str
    timeframe: str
    confidence: float
    quantitative: QuantitativeImpact | None = None
    mitigations: tuple[str, ...] = ()
    depends_on: tuple[str, ...] = ()
    affected: AffectedEntities = field(default_factory=AffectedEntities)

    def __post_init__(self) -> None:
        if self.severity not in SEVERITIES:
            raise ValueError(f"{self.id}: invalid severity {self.severity!r}")
        if self.direction not in DIRECTIONS:
            raise ValueError(f"{self.id}: invalid direction {self.direction!r}")
        if self.timeframe not in TIMEFRAMES:
            raise ValueError(f"{self.id}: invalid timeframe {self.timeframe!r}")
        if not 0.0 <= self.confidence <= 1.0:
            raise ValueError(f"{self.id}: confidence must be within 0..1")

    def with_depends_on(self, ids: tuple[str, ...]) -> "ImpactItem":
        return replace(self, depends_on=tuple(ids))

    def to_dict(self) -> dict[str, Any]:
        d: dict[str, Any] = {
            "id": self.id,
            "category": self.category,
            "direction": self.direction,
            "title": self.title,
            "description": self.description,
            "severity": self.severity,
            "timeframe": self.timeframe,
            "confidence": self.confidence,
            "mitigations": list(self.mitigations),
            "dependsOn": list(self.depends_on),
            "affectedEntities": self.affected.to_dict(),
        }
        if self.quantitative is not None:
            d["quantitativeImpact"] = self.quantitative.to_dict()
        return d


@dataclass(frozen=True)
class ImpactChainNode:
    id: str
    impact: ImpactItem
    children: tuple["ImpactChainNode", ...]
    depth: int

    def walk(self):
        yield self
        for c in self.children:
            yield from c.walk()

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "impact": self.impact.to_dict(),
            "children": [c.to_dict() for c in self.children],
            "depth": self.depth,
        }


# ----------------------------
# Fleet state
# ----------------------------

@dataclass(frozen=True)
class Vessel:
    id: str
    name: str
    type: str
    status: str
    project: str | None = None
    lat: float = 0.0
    lng: float = 0.0
    health_score: float = 100.0
    fuel_level: float = 100.0
    crew_count: int = 0
    next_maintenance: datetime | None = None
    daily_operating_cost: float = 0.0
    daily_revenue: float = 0.0
    emissions_per_day: float = 0.0

    @classmethod
    def from_dict(cls, d: Mapping[str, Any]) -> "Vessel":
        loc = d.get("location", {}) or {}
        return cls(
            id=str(d["id"]),
            name=str(d.get("name", d["id"])),
            type=str(d.get("type", "")),
            status=str(d.get("status", "operational")),
            project=d.get("project"),
            lat=float(loc.get("lat", 0.0)),
            lng=float(loc.get("lng", 0.0)),
            health_score=float(d.get("healthScore", 100)),
            fuel_level=float(d.get("fuelLevel", 100)),
            crew_count=int(d.get("crewCount", 0)),
            next_maintenance=_opt_datetime(d.get("nextMaintenance")),
            daily_operating_cost=float(d.get("dailyOperatingCost", 0)),
            daily_revenue=float(d.get("dailyRevenue", 0)),
            emissions_per_day=float(d.get("emissionsPerDay", 0)),
        )

    def to_dict(self) -> dict[str, Any]:
        d: dict[str, Any] = {
            "id": self.id,
            "name": self.name,
            "type": self.type,
            "status": self.status,
            "location": {"lat": self.lat, "lng": self.lng},
            "healthScore": self.health_score,
            "fuelLevel": self.fuel_level,
            "crewCount": self.crew_count,
            "dailyOperatingCost": self.daily_operating_cost,
            "dailyRevenue": self.daily_revenue,
            "emissionsPerDay": self.emissions_per_day,
        }
        if self.project is not None:
            d["project"] = self.project
        if self.next_maintenance is not None:
            d["nextMaintenance"] = self.next_maintenance.isoformat()
        return d


@dataclass(frozen=True)
class Project:
    id: str
    name: str
    client: str
    status: str
    priority: str
    progress: float
    budget_allocated: float
    budget_spent: float
    deadline: datetime
    assigned_vessels: tuple[str, ...] = ()
    daily_burn_rate: float = 0.0
    penalty_per_day_delay: float = 0.0

    @classmethod
    def from_dict(cls, d: Mapping[str, Any]) -> "Project":
        budget = d.get("budget", {}) or {}
        if "deadline" not in d:
            raise MalformedRequest(f"project {d.get('id')!r} is missing a deadline")
        return cls(
            id=str(d["id"]),
            name=str(d.get("name", d["id"])),
            client=str(d.get("client", "")),
            status=str(d.get("status", "active")),
            priority=str(d.get("priority", "medium")),
            progress=float(d.get("progress", 0)),
            budget_allocated=float(budget.get("allocated", 0)),
            budget_spent=float(budget.get("spent", 0)),
            deadline=parse_datetime(d["deadline"]),
            assigned_vessels=tuple(d.get("assignedVessels", []) or []),
            daily_burn_rate=float(d.get("dailyBurnRate", 0)),
            penalty_per_day_delay=float(d.get("penaltyPerDayDelay", 0)),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "client": self.client,
            "status": self.status,
            "priority": self.priority,
            "progress": self.progress,
            "budget": {"allocated": self.budget_allocated, "spent": self.budget_spent},
            "deadline": self.deadline.isoformat(),
            "assignedVessels": list(self.assigned_vessels),
            "dailyBurnRate": self.daily_burn_rate,
            "penaltyPerDayDelay": self.penalty_per_day_delay,
        }


@dataclass(frozen=True)
class CrewMember:
    id: str
    name: str
    role: str
    availability: str             # available | assigned | leave | training
    vessel_id: str | None = None
    certifications: tuple[str, ...] = ()

    @classmethod
    def from_dict(cls, d: Mapping[str, Any]) -> "CrewMember":
        return cls(
            id=str(d["id"]),
            name=str(d.get("name", d["id"])),
            role=str(d.get("role", "")),
            availability=str(d.get("availability", "available")),
            vessel_id=d.get("vesselId"),
            certifications=tuple(d.get("certifications", []) or []),
        )

    def to_dict(self) -> dict[str, Any]:
        d: dict[str, Any] = {
            "id": self.id,
            "name": self.name,
            "role": self.role,
            "certifications": list(self.certifications),
            "availability": self.availability,
        }
        if self.vessel_id is not None:
            d["vesselId"] = self.vessel_id
        return d


@dataclass(frozen=True)
class MaintenanceItem:
    id: str
    vessel_id: str
    type: str
    scheduled_date: datetime
    estimated_duration: float
    priority: str
    can_defer: bool

    @classmethod
    def from_dict(cls, d: Mapping[str, Any]) -> "MaintenanceItem":
        return cls(
            id=str(d["id"]),
            vessel_id=str(d["vesselId"]),
            type=str(d.get("type", "")),
            scheduled_date=parse_datetime(d["scheduledDate"]),
            estimated_duration=float(d.get("estimatedDuration", 0)),
            priority=str(d.get("priority", "medium")),
            can_defer=bool(d.get("canDefer", True)),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "vesselId": self.vessel_id,
            "type": self.type,
            "scheduledDate": self.scheduled_date.isoformat(),
            "estimatedDuration": self.estimated_duration,
            "priority": self.priority,
            "canDefer": self.can_defer,
        }


@dataclass(frozen=True)
class SparePart:
    id: str
    name: str
    quantity: int
    reorder_point: int
    lead_time_days: int

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "quantity": self.quantity,
            "reorderPoint": self.reorder_point,
            "leadTimeDays": self.lead_time_days,
        }


@dataclass(frozen=True)
class FuelContract:
    id: str
    fuel_type: str
    price_per_unit: float
    min_commitment: float
    expiry_date: datetime | None = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "fuelType": self.fuel_type,
            "pricePerUnit": self.price_per_unit,
            "minCommitment": self.min_commitment,
            "expiryDate": _iso(self.expiry_date),
        }


@dataclass(frozen=True)
class PortContract:
    id: str
    port_name: str
    berth_availability: float
    daily_rate: float

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "portName": self.port_name,
            "berthAvailability": self.berth_availability,
            "dailyRate": self.daily_rate,
        }


@dataclass(frozen=True)
class SupplyChain:
    spare_parts: tuple[SparePart, ...] = ()
    fuel_contracts: tuple[FuelContract, ...] = ()
    port_contracts: tuple[PortContract, ...] = ()

    @classmethod
    def from_dict(cls, d: Mapping[str, Any]) -> "SupplyChain":
        return cls(
            spare_parts=tuple(
                SparePart(
                    id=str(p["id"]),
                    name=str(p.get("name", p["id"])),
                    quantity=int(p.get("quantity", 0)),
                    reorder_point=int(p.get("reorderPoint", 0)),
                    lead_time_days=int(p.get("leadTimeDays", 0)),
                )
                for p in d.get("spareParts", []) or []
            ),
            fuel_contracts=tuple(
                FuelContract(
                    id=str(c["id"]),
                    fuel_type=str(c["fuelType"]),
                    price_per_unit=float(c.get("pricePerUnit", 0)),
                    min_commitment=float(c.get("minCommitment", 0)),
                    expiry_date=_opt_datetime(c.get("expiryDate")),
                )
                for c in d.get("fuelContracts", []) or []
            ),
            port_contracts=tuple(
                PortContract(
                    id=str(c["id"]),
                    port_name=str(c.get("portName", c["id"])),
                    berth_availability=float(c.get("berthAvailability", 1.0)),
                    daily_rate=float(c.get("dailyRate", 0)),
                )
                for c in d.get("portContracts", []) or []
            ),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "spareParts": [p.to_dict() for p in self.spare_parts],
            "fuelContracts": [c.to_dict() for c in self.fuel_contracts],
            "portContracts": [c.to_dict() for c in self.port_contracts],
        }


@dataclass(frozen=True)
class Audit:
    date: datetime
    type: str


@dataclass(frozen=True)
class Certificate:
    name: str
    vessel_id: str
    expiry_date: datetime


@dataclass(frozen=True)
class Compliance:
    imo2030_progress: float = 100.0
    cii_ratings: Mapping[str, str] = field(default_factory=dict)
    upcoming_audits: tuple[Audit, ...] = ()
    certificates: tuple[Certificate, ...] = ()

    @classmethod
    def from_dict(cls, d: Mapping[str, Any]) -> "Compliance":
        return cls(
            imo2030_progress=float(d.get("imo2030Progress", 100)),
            cii_ratings=dict(d.get("ciiRatings", {}) or {}),
            upcoming_audits=tuple(
                Audit(parse_datetime(a["date"]), str(a.get("type", ""))) for a in d.get("upcomingAudits", []) or []
            ),
            certificates=tuple(
                Certificate(str(c["name"]), str(c.get("vesselId", "")), parse_datetime(c["expiryDate"]))
                for c in d.get("certificates", []) or []
            ),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "imo2030Progress": self.imo2030_progress,
            "ciiRatings": dict(self.cii_ratings),
            "upcomingAudits": [{"date": a.date.isoformat(), "type": a.type} for a in self.upcoming_audits],
            "certificates": [
                {"name": c.name, "vesselId": c.vessel_id, "expiryDate": c.expiry_date.isoformat()}
                for c in self.certificates
            ],
        }


@dataclass(frozen=True)
class Financials:
    monthly_budget: float = 0.0
    current_spend: float = 0.0
    carbon_credit_balance: float = 0.0
    carbon_credit_price: float = 0.0
    insurance_premium_base: float = 0.0

    @classmethod
    def from_dict(cls, d: Mapping[str, Any]) -> "Financials":
        return cls(
            monthly_budget=float(d.get("monthlyBudget", 0)),
            current_spend=float(d.get("currentSpend", 0)),
            carbon_credit_balance=float(d.get("carbonCreditBalance", 0)),
            carbon_credit_price=float(d.get("carbonCreditPrice", 0)),
            insurance_premium_base=float(d.get("insurancePremiumBase", 0)),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "monthlyBudget": self.monthly_budget,
            "currentSpend": self.current_spend,
            "carbonCreditBalance": self.carbon_credit_balance,
            "carbonCreditPrice": self.carbon_credit_price,
            "insurancePremiumBase": self.insurance_premium_base,
        }


@dataclass(frozen=True)
class FleetState:
    """
    Read-only snapshot of the fleet.

    `as_of` is the snapshot time every "within N days" rule measures from.
    """
    vessels: tuple[Vessel, ...] = ()
    projects: tuple[Project, ...] = ()
    crew: tuple[CrewMember, ...] = ()
    maintenance: tuple[MaintenanceItem, ...] = ()
    supply_chain: SupplyChain = field(default_factory=SupplyChain)
    compliance: Compliance = field(default_factory=Compliance)
    financials: Financials = field(default_factory=Financials)
    as_of: datetime | None = None

    @classmethod
    def from_dict(cls, d: Mapping[str, Any]) -> "FleetState":
        if not isinstance(d, Mapping):
            raise MalformedRequest("fleetState must be a JSON object")
        try:
            return cls(
                vessels=tuple(Vessel.from_dict(v) for v in d.get("vessels", []) or []),
                projects=tuple(Project.from_dict(p) for p in d.get("projects", []) or []),
                crew=tuple(CrewMember.from_dict(c) for c in d.get("crew", []) or []),
                maintenance=tuple(MaintenanceItem.from_dict(m) for m in d.get("maintenance", []) or []),
                supply_chain=SupplyChain.from_dict(d.get("supplyChain", {}) or {}),
                compliance=Compliance.from_dict(d.get("compliance", {}) or {}),
                financials=Financials.from_dict(d.get("financials", {}) or {}),
                as_of=_opt_datetime(d.get("asOf")),
            )
        except MalformedRequest:
            raise
        except KeyError as e:
            raise MalformedRequest(f"fleetState record is missing {e.args[0]!r}") from None
        except (TypeError, ValueError) as e:
            raise MalformedRequest(f"fleetState has an invalid value: {e}") from None

    def to_dict(self) -> dict[str, Any]:
        return {
            "asOf": _iso(self.as_of),
            "vessels": [v.to_dict() for v in self.vessels],
            "projects": [p.to_dict() for p in self.projects],
            "crew": [c.to_dict() for c in self.crew],
            "maintenance": [m.to_dict() for m in self.maintenance],
            "supplyChain": self.supply_chain.to_dict(),
            "compliance": self.compliance.to_dict(),
            "financials": self.financials.to_dict(),
        }

    def project(self, project_id: str) -> Project | None:
        for p in self.projects:
            if p.id == project_id:
                return p
        return None

    def vessels_by_id(self, ids: tuple[str, ...]) -> list[Vessel]:
        return [v for v in self.vessels if v.id in ids]


# ----------------------------
# Result
# ----------------------------

@dataclass(frozen=True)
class ImpactSummary:
    total: int
    critical: int
    high: int
    medium: int
    low: int
    positive: int

    def to_dict(self) -> dict[str, Any]:
        return {
            "totalImpacts": self.total,
            "criticalCount": self.critical,
            "highCount": self.high,
            "mediumCount": self.medium,
            "lowCount": self.low,
            "positiveCount": self.positive,
        }


@dataclass(frozen=True)
class FinancialSummary:
    estimated_cost_impact: float
    revenue_impact: float
    carbon_credit_impact: float
    insurance_impact: float
    currency: str = "USD"

    @property
    def total(self) -> float:
        return self.estimated_cost_impact + abs(self.revenue_impact) + self.carbon_credit_impact + self.insurance_impact

    def to_dict(self) -> dict[str, Any]:
        return {
            "estimatedCostImpact": self.estimated_cost_impact,
            "revenueImpact": self.revenue_impact,
            "carbonCreditImpact": self.carbon_credit_impact,
            "insuranceImpact": self.insurance_impact,
            "totalFinancialImpact": self.total,
            "currency": self.currency,
        }


@dataclass(frozen=True)
class EsgSummary:
    co2_change: float
    nox_change: float
    compliance_risk_change: float
    esg_score_change: float

    def to_dict(self) -> dict[str, Any]:
        return {
            "co2Change": self.co2_change,
            "noxChange": self.nox_change,
            "complianceRiskChange": self.compliance_risk_change,
            "esgScoreChange": self.esg_score_change,
        }


@dataclass(frozen=True)
class OperationalSummary:
    utilization_change: float
    schedule_delay_days: float
    affected_project_count: int
    maintenance_reschedules: float

    def to_dict(self) -> dict[str, Any]:
        return {
            "utilizationChange": self.utilization_change,
            "scheduleDelayDays": self.schedule_delay_days,
            "affectedProjectCount": self.affected_project_count,
            "maintenanceReschedules": self.maintenance_reschedules,
        }


@dataclass(frozen=True)
class Recommendation:
    priority: str
    action: str
    rationale: str
    expected_benefit: str

    def to_dict(self) -> dict[str, Any]:
        return {
            "priority": self.priority,
            "action": self.action,
            "rationale": self.rationale,
            "expectedBenefit": self.expected_benefit,
        }


@dataclass(frozen=True)
class AlternativeScenario:
    id: str
    name: str
    description: str
    overall_risk: str
    financial_impact: float

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "description": self.description,
            "overallRisk": self.overall_risk,
            "financialImpact": self.financial_impact,
        }


@dataclass(frozen=True)
class ImpactAnalysisResult:
    id: str
    change: ProposedChange
    timestamp: datetime
    overall_risk: str
    overall_confidence: float
    summary: ImpactSummary
    upstream: tuple[ImpactItem, ...]
    downstream: tuple[ImpactItem, ...]
    lateral: tuple[ImpactItem, ...]
    chain: tuple[ImpactChainNode, ...]
    financial: FinancialSummary
    esg: EsgSummary
    operational: OperationalSummary
    recommendations: tuple[Recommendation, ...]
    alternatives: tuple[AlternativeScenario, ...]

    @property
    def impacts(self) -> tuple[ImpactItem, ...]:
        return self.upstream + self.downstream + self.lateral

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "change": self.change.to_dict(),
            "timestamp": self.timestamp.isoformat(),
            "overallRisk": self.overall_risk,
            "overallConfidence": self.overall_confidence,
            "summary": self.summary.to_dict(),
            "upstreamImpacts": [i.to_dict() for i in self.upstream],
            "downstreamImpacts": [i.to_dict() for i in self.downstream],
            "lateralImpacts": [i.to_dict() for i in self.lateral],
            "impactChain": [n.to_dict() for n in self.chain],
            "financialSummary": self.financial.to_dict(),
            "esgImpact": self.esg.to_dict(),
            "operationalImpact": self.operational.to_dict(),
            "recommendations": [r.to_dict() for r in self.recommendations],
            "alternativeScenarios": [a.to_dict() for a in self.alternatives],
        }
