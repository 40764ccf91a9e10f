"""
Impact generators.

Every generator has the signature (change, state, direction, as_of) and
returns a list of ImpactItem. A generator only emits when its triggering
condition holds; an empty list means "no impact", never a placeholder.
"""
from __future__ import annotations

import math
from datetime import datetime, timedelta
from typing import Callable

from assetiq.core.contract import (
    AUDIT_WINDOW_DAYS,
    ESG_BASELINE_SCORE,
    IMO2030_HIGH_RISK_BELOW,
    IMO2030_TARGET_PROGRESS,
    LATERAL_VESSEL_LIMIT,
    LOW_BERTH_AVAILABILITY,
    MAINTENANCE_WINDOW_DAYS,
)
from assetiq.core.evidence import LinearCongruentialGenerator, stable_hash
from assetiq.impact.models import (
    AffectedEntities,
    ChangeType,
    FleetState,
    ImpactItem,
    ProposedChange,
    QuantitativeImpact,
)

Generator = Callable[[ProposedChange, FleetState, str, datetime], list[ImpactItem]]

# daily-emissions multiplier per target fuel
FUEL_EMISSION_FACTORS = {"LNG": 0.75, "MDO": 0.9, "Hybrid": 0.8}
LNG_RETROFIT_COST = 2_500_000
FUEL_CONTRACT_LEAD_DAYS = 30
DEFAULT_DELAY_DAYS = 7
DEFAULT_DAMAGE = 100_000
INSURANCE_PREMIUM_RATE = 0.05


def _k(amount: float) -> str:
    return f"{amount / 1000:.0f}K"


def _unique(values) -> tuple[str, ...]:
    return tuple(dict.fromkeys(values))


def _new_fuel(change: ProposedChange) -> str:
    return str(change.param("newFuelType", ""))


# ----------------------------
# Upstream
# ----------------------------

def spare_parts(change: ProposedChange, state: FleetState, direction: str, as_of: datetime) -> list[ImpactItem]:
    low = [p for p in state.supply_chain.spare_parts if p.quantity <= p.reorder_point]
    if not low:
        return []
    return [
        ImpactItem(
            id="supply-chain-parts-risk",
            category="supply_chain",
            direction=direction,
            title="Spare Parts Availability Risk",
            description=f"{len(low)} critical spare parts below reorder point. Schedule change may accelerate need.",
            severity="high" if len(low) > 2 else "medium",
            quantitative=QuantitativeImpact("Parts at Risk", len(low), len(low) + 1, "items", 100 / len(low)),
            timeframe="short_term",
            confidence=0.75,
            mitigations=(
                "Expedite reorder for critical parts",
                "Identify alternative suppliers",
                "Check inter-vessel parts availability",
            ),
            affected=AffectedEntities(vessels=change.affected_vessels),
        )
    ]


def crew_availability(change: ProposedChange, state: FleetState, direction: str, as_of: datetime) -> list[ImpactItem]:
    crew = [c for c in state.crew if c.vessel_id and c.vessel_id in change.affected_vessels]
    on_leave = sum(1 for c in crew if c.availability == "leave")
    training = sum(1 for c in crew if c.availability == "training")
    if on_leave == 0 and training == 0:
        return []

    unavailable = on_leave + training
    return [
        ImpactItem(
            id="crew-availability",
            category="crew",
            direction=direction,
            title="Crew Availability Constraint",
            description=f"{on_leave} crew on leave, {training} in training. May require reassignment.",
            severity="high" if on_leave > 3 else "medium",
            quantitative=QuantitativeImpact(
                "Crew Unavailable", 0, unavailable, "personnel", unavailable / max(len(crew), 1) * 100
            ),
            timeframe="immediate",
            confidence=0.9,
            mitigations=(
                "Request crew rotation from other vessels",
                "Extend current crew assignments",
                "Engage contract crew if certified",
            ),
            affected=AffectedEntities(vessels=change.affected_vessels, crew=tuple(c.id for c in crew)),
        )
    ]


def maintenance_conflict(change: ProposedChange, state: FleetState, direction: str, as_of: datetime) -> list[ImpactItem]:
    horizon = as_of + timedelta(days=MAINTENANCE_WINDOW_DAYS)
    upcoming = [
        m for m in state.maintenance if m.vessel_id in change.affected_vessels and m.scheduled_date <= horizon
    ]
    if not upcoming:
        return []

    pinned = [m for m in upcoming if m.priority == "critical" or not m.can_defer]
    return [
        ImpactItem(
            id="maintenance-conflict",
            category="maintenance",
            direction=direction,
            title="Scheduled Maintenance Conflict",
            description=(
                f"{len(upcoming)} maintenance tasks scheduled in next {MAINTENANCE_WINDOW_DAYS} days. "
                f"{len(pinned)} cannot be deferred."
            ),
            severity="high" if pinned else "medium",
            quantitative=QuantitativeImpact("Maintenance Tasks Affected", 0, len(upcoming), "tasks", 100),
            timeframe="short_term",
            confidence=0.85,
            mitigations=(
                "Reschedule non-critical maintenance",
                "Coordinate with port for maintenance berth",
                "Pre-position spare parts and crew",
            ),
            affected=AffectedEntities(vessels=_unique(m.vessel_id for m in upcoming)),
        )
    ]


def port_congestion(change: ProposedChange, state: FleetState, direction: str, as_of: datetime) -> list[ImpactItem]:
    ports = [p for p in state.supply_chain.port_contracts if p.berth_availability < LOW_BERTH_AVAILABILITY]
    if not ports:
        return []
    return [
        ImpactItem(
            id="port-congestion",
            category="supply_chain",
            direction=direction,
            title="Port Berth Availability Risk",
            description=f"{len(ports)} ports have limited berth availability. May cause delays.",
            severity="medium",
            timeframe="short_term",
            confidence=0.7,
            mitigations=("Book berths in advance", "Consider alternative ports", "Adjust vessel arrival timing"),
            affected=AffectedEntities(ports=tuple(p.port_name for p in ports), vessels=change.affected_vessels),
        )
    ]


def fuel_supply(change: ProposedChange, state: FleetState, direction: str, as_of: datetime) -> list[ImpactItem]:
    fuel = _new_fuel(change)
    if any(c.fuel_type == fuel for c in state.supply_chain.fuel_contracts):
        return []
    return [
        ImpactItem(
            id="fuel-contract-needed",
            category="supply_chain",
            direction=direction,
            title="New Fuel Supply Contract Required",
            description=f"No existing contracts for {fuel}. Must establish new supply chain.",
            severity="high",
            quantitative=QuantitativeImpact("Lead Time", 0, FUEL_CONTRACT_LEAD_DAYS, "days", 100),
            timeframe="medium_term",
            confidence=0.9,
            mitigations=(
                "Initiate contract negotiations immediately",
                "Identify spot market suppliers",
                "Phase transition with mixed fuel operation",
            ),
            affected=AffectedEntities(vessels=change.affected_vessels),
        )
    ]


def equipment_retrofit(change: ProposedChange, state: FleetState, direction: str, as_of: datetime) -> list[ImpactItem]:
    if _new_fuel(change) != "LNG":
        return []
    return [
        ImpactItem(
            id="equipment-retrofit",
            category="maintenance",
            direction=direction,
            title="Engine Retrofit Required",
            description="LNG conversion requires significant engine modifications and crew training.",
            severity="critical",
            quantitative=QuantitativeImpact("Retrofit Cost", 0, LNG_RETROFIT_COST, "USD", 100),
            timeframe="long_term",
            confidence=0.95,
            mitigations=(
                "Phase conversion during scheduled dry-dock",
                "Explore dual-fuel options",
                "Evaluate lease vs. retrofit economics",
            ),
            affected=AffectedEntities(vessels=change.affected_vessels),
        )
    ]


def resource_availability(change: ProposedChange, state: FleetState, direction: str, as_of: datetime) -> list[ImpactItem]:
    free = [v for v in state.vessels if v.status == "operational" and not v.project]
    out: list[ImpactItem] = []
    for vessel_type in _unique(change.param("requiredVesselTypes", []) or []):
        if any(v.type == vessel_type for v in free):
            continue
        out.append(
            ImpactItem(
                id=f"resource-{vessel_type}",
                category="operations",
                direction=direction,
                title=f"No Available {vessel_type} Vessels",
                description=f"All {vessel_type} vessels currently assigned. Must reallocate or charter.",
                severity="high",
                timeframe="immediate",
                confidence=0.95,
                mitigations=(
                    "Accelerate current project completions",
                    "Charter external vessel",
                    "Evaluate project phasing to free vessels",
                ),
                affected=AffectedEntities(vessels=tuple(v.id for v in state.vessels if v.type == vessel_type)),
            )
        )
    return out


def budget_overrun(change: ProposedChange, state: FleetState, direction: str, as_of: datetime) -> list[ImpactItem]:
    remaining = state.financials.monthly_budget - state.financials.current_spend
    required = change.number_param("estimatedCost", 0)
    if required <= remaining:
        return []

    # an exhausted budget has no meaningful ratio; report the full overrun
    pct = (required - remaining) / remaining * 100 if remaining > 0 else 100.0
    return [
        ImpactItem(
            id="budget-overrun",
            category="finance",
            direction=direction,
            title="Budget Allocation Required",
            description=f"Proposed change requires additional {_k(required - remaining)} beyond current budget.",
            severity="high",
            quantitative=QuantitativeImpact("Additional Budget", remaining, required, "USD", pct),
            timeframe="immediate",
            confidence=0.85,
            mitigations=(
                "Request budget reallocation from contingency",
                "Phase project to spread costs",
                "Negotiate milestone-based payments",
            ),
            affected=AffectedEntities(projects=change.affected_projects),
        )
    ]


# ----------------------------
# Downstream
# ----------------------------

def seeded_delay_days(change_id: str, project_id: str) -> int:
    """3..17 days, stable for a given (change, project) pair."""
    r = LinearCongruentialGenerator(stable_hash(change_id + project_id))
    return math.ceil(r() * 14 + 3)


def project_timeline(change: ProposedChange, state: FleetState, direction: str, as_of: datetime) -> list[ImpactItem]:
    out: list[ImpactItem] = []
    for project_id in change.affected_projects:
        project = state.project(project_id)
        if project is None:
            continue

        delay = change.number_param("delayDays", 0, int) or seeded_delay_days(change.id, project_id)
        days_to_deadline = math.ceil((project.deadline - as_of).total_seconds() / 86400)
        misses = delay > days_to_deadline

        out.append(
            ImpactItem(
                id=f"timeline-{project_id}",
                category="operations",
                direction=direction,
                title=f"{project.name} Timeline Impact",
                description=(
                    f"Project will miss deadline by {delay - days_to_deadline} days"
                    if misses
                    else f"Project delayed by {delay} days but within deadline"
                ),
                severity="critical" if misses else "medium",
                quantitative=QuantitativeImpact(
                    "Schedule Delay", 0, delay, "days", delay / max(days_to_deadline, 1) * 100
                ),
                timeframe="short_term",
                confidence=0.8,
                mitigations=(
                    (
                        "Accelerate work with additional resources",
                        "Negotiate deadline extension with client",
                        "Deploy additional vessel support",
                    )
                    if misses
                    else ("Monitor schedule closely", "Prepare contingency resources")
                ),
                affected=AffectedEntities(projects=(project_id,), clients=(project.client,)),
            )
        )
    return out


def client_communication(change: ProposedChange, state: FleetState, direction: str, as_of: datetime) -> list[ImpactItem]:
    clients = _unique(p.client for p in (state.project(pid) for pid in change.affected_projects) if p is not None)
    if not clients:
        return []
    return [
        ImpactItem(
            id="client-communication",
            category="client_relations",
            direction=direction,
            title="Client Communication Required",
            description=f"{len(clients)} client(s) must be notified of schedule changes",
            severity="medium",
            timeframe="immediate",
            confidence=1.0,
            mitigations=(
                "Prepare impact assessment report for clients",
                "Schedule client meetings within 48 hours",
                "Propose mitigation measures",
            ),
            affected=AffectedEntities(clients=clients, projects=change.affected_projects),
        )
    ]


def revenue_loss(change: ProposedChange, state: FleetState, direction: str, as_of: datetime) -> list[ImpactItem]:
    daily = sum(v.daily_revenue for v in state.vessels_by_id(change.affected_vessels))
    days = change.number_param("delayDays", DEFAULT_DELAY_DAYS, int)
    loss = daily * days
    if loss <= 0:
        return []

    if loss > 500_000:
        severity = "high"
    elif loss > 100_000:
        severity = "medium"
    else:
        severity = "low"
    return [
        ImpactItem(
            id="revenue-impact",
            category="finance",
            direction=direction,
            title="Revenue Impact",
            description=f"Estimated revenue loss of ${_k(loss)} over {days} days",
            severity=severity,
            quantitative=QuantitativeImpact("Revenue Loss", 0, loss, "USD", 100),
            timeframe="short_term",
            confidence=0.75,
            affected=AffectedEntities(vessels=change.affected_vessels),
        )
    ]


def compliance(change: ProposedChange, state: FleetState, direction: str, as_of: datetime) -> list[ImpactItem]:
    out: list[ImpactItem] = []
    horizon = as_of + timedelta(days=AUDIT_WINDOW_DAYS)
    audits = [a for a in state.compliance.upcoming_audits if a.date <= horizon]
    if audits:
        out.append(
            ImpactItem(
                id="compliance-audit-risk",
                category="compliance",
                direction=direction,
                title="Compliance Audit Consideration",
                description=(
                    f"{len(audits)} audits scheduled in next {AUDIT_WINDOW_DAYS} days. "
                    "Changes may affect compliance posture."
                ),
                severity="medium",
                timeframe="medium_term",
                confidence=0.7,
                mitigations=(
                    "Review compliance documentation",
                    "Pre-audit internal assessment",
                    "Document change rationale thoroughly",
                ),
                affected=AffectedEntities(vessels=change.affected_vessels),
            )
        )

    progress = state.compliance.imo2030_progress
    if progress < IMO2030_TARGET_PROGRESS:
        out.append(
            ImpactItem(
                id="imo2030-risk",
                category="compliance",
                direction=direction,
                title="IMO 2030 Target Risk",
                description=(
                    f"Current progress at {progress:g}%. Changes should support, not hinder, decarbonization goals."
                ),
                severity="high" if progress < IMO2030_HIGH_RISK_BELOW else "medium",
                quantitative=QuantitativeImpact("IMO 2030 Progress", progress, progress - 2, "%", -2),
                timeframe="long_term",
                confidence=0.6,
                affected=AffectedEntities(vessels=change.affected_vessels),
            )
        )
    return out


def emissions(change: ProposedChange, state: FleetState, direction: str, as_of: datetime) -> list[ImpactItem]:
    daily = sum(v.emissions_per_day for v in state.vessels_by_id(change.affected_vessels))
    factor = 1.0
    if change.type is ChangeType.FUEL_SWITCH:
        factor = FUEL_EMISSION_FACTORS.get(_new_fuel(change), 1.0)
    reduced = factor < 1.0

    return [
        ImpactItem(
            id="emissions-change",
            category="esg",
            direction=direction,
            title="Emissions Reduction" if reduced else "Emissions Impact",
            description=(
                f"Estimated {(1 - factor) * 100:.0f}% reduction in daily emissions"
                if reduced
                else "No significant emissions change expected"
            ),
            severity="positive" if reduced else "low",
            quantitative=QuantitativeImpact(
                "Annual CO2 Reduction", daily * 365, daily * factor * 365, "tonnes", (factor - 1) * 100
            ),
            timeframe="medium_term",
            confidence=0.85,
            affected=AffectedEntities(vessels=change.affected_vessels),
        )
    ]


def fuel_cost(change: ProposedChange, state: FleetState, direction: str, as_of: datetime) -> list[ImpactItem]:
    contracts = state.supply_chain.fuel_contracts
    fuel = _new_fuel(change)
    current = contracts[0] if contracts else None
    target = next((c for c in contracts if c.fuel_type == fuel), None)
    if current is None or target is None:
        return []

    diff = target.price_per_unit - current.price_per_unit
    annual = diff * current.min_commitment * 12
    if annual > 500_000:
        severity = "high"
    elif annual > 0:
        severity = "medium"
    else:
        severity = "positive"

    return [
        ImpactItem(
            id="fuel-cost-change",
            category="finance",
            direction=direction,
            title="Fuel Cost Increase" if annual > 0 else "Fuel Cost Savings",
            description=f"Annual fuel cost {'increase' if annual > 0 else 'savings'} of ${_k(abs(annual))}",
            severity=severity,
            quantitative=QuantitativeImpact(
                "Annual Fuel Cost",
                current.price_per_unit * current.min_commitment * 12,
                target.price_per_unit * current.min_commitment * 12,
                "USD",
                diff / current.price_per_unit * 100 if current.price_per_unit else 0.0,
            ),
            timeframe="medium_term",
            confidence=0.8,
            affected=AffectedEntities(vessels=change.affected_vessels),
        )
    ]


def vessel_availability(change: ProposedChange, state: FleetState, direction: str, as_of: datetime) -> list[ImpactItem]:
    default_days = 14 if change.type is ChangeType.EQUIPMENT_FAILURE else 7
    downtime = change.number_param("estimatedDowntime", default_days)
    projects = [p for p in state.projects if any(v in change.affected_vessels for v in p.assigned_vessels)]
    n = len(change.affected_vessels)

    return [
        ImpactItem(
            id="vessel-availability",
            category="operations",
            direction=direction,
            title="Vessel Availability Reduction",
            description=f"{n} vessel(s) unavailable for ~{downtime:g} days. {len(projects)} project(s) affected.",
            severity="critical" if any(p.priority == "critical" for p in projects) else "high",
            quantitative=QuantitativeImpact("Vessel Days Lost", 0, downtime * n, "days", 100),
            timeframe="immediate",
            confidence=0.9,
            mitigations=(
                "Identify backup vessels",
                "Prioritize critical project work",
                "Negotiate scope adjustments with clients",
            ),
            affected=AffectedEntities(vessels=change.affected_vessels, projects=tuple(p.id for p in projects)),
        )
    ]


def delay_penalties(change: ProposedChange, state: FleetState, direction: str, as_of: datetime) -> list[ImpactItem]:
    days = change.number_param("delayDays", DEFAULT_DELAY_DAYS, int)
    total = sum(
        p.penalty_per_day_delay * days for p in (state.project(pid) for pid in change.affected_projects) if p is not None
    )
    if total <= 0:
        return []

    if total > 200_000:
        severity = "critical"
    elif total > 50_000:
        severity = "high"
    else:
        severity = "medium"
    return [
        ImpactItem(
            id="delay-penalties",
            category="finance",
            direction=direction,
            title="Contractual Delay Penalties",
            description=f"Potential penalties of ${_k(total)} for {days} day delay",
            severity=severity,
            quantitative=QuantitativeImpact("Penalty Amount", 0, total, "USD", 100),
            timeframe="short_term",
            confidence=0.95,
            mitigations=(
                "Negotiate force majeure provisions",
                "Document cause of delay thoroughly",
                "Propose compensation alternatives",
            ),
            affected=AffectedEntities(projects=change.affected_projects),
        )
    ]


def cascading_projects(change: ProposedChange, state: FleetState, direction: str, as_of: datetime) -> list[ImpactItem]:
    direct = set(change.affected_projects)
    shared = {v for p in state.projects if p.id in direct for v in p.assigned_vessels}
    indirect = [p for p in state.projects if p.id not in direct and any(v in shared for v in p.assigned_vessels)]
    if not indirect:
        return []
    return [
        ImpactItem(
            id="cascading-projects",
            category="operations",
            direction=direction,
            title="Cascading Project Effects",
            description=f"{len(indirect)} additional project(s) may be affected due to shared vessel resources",
            severity="medium",
            timeframe="medium_term",
            confidence=0.65,
            affected=AffectedEntities(
                projects=tuple(p.id for p in indirect),
                vessels=_unique(v for p in indirect for v in p.assigned_vessels),
            ),
        )
    ]


def safety_assessment(change: ProposedChange, state: FleetState, direction: str, as_of: datetime) -> list[ImpactItem]:
    if change.type is not ChangeType.EQUIPMENT_FAILURE:
        return []
    crew = tuple(c.id for c in state.crew if c.vessel_id and c.vessel_id in change.affected_vessels)
    return [
        ImpactItem(
            id="safety-assessment",
            category="safety",
            direction=direction,
            title="Safety Assessment Required",
            description="Equipment failure requires immediate safety review and incident documentation",
            severity="critical" if change.param("severity", "medium") == "critical" else "high",
            timeframe="immediate",
            confidence=1.0,
            mitigations=(
                "Conduct immediate safety stand-down",
                "Complete incident report within 24 hours",
                "Review similar equipment across fleet",
            ),
            affected=AffectedEntities(vessels=change.affected_vessels, crew=crew),
        )
    ]


def insurance_claim(change: ProposedChange, state: FleetState, direction: str, as_of: datetime) -> list[ImpactItem]:
    if change.type is not ChangeType.EQUIPMENT_FAILURE:
        return []
    claim = change.number_param("estimatedDamage", DEFAULT_DAMAGE)
    increase = claim * INSURANCE_PREMIUM_RATE
    base = state.financials.insurance_premium_base
    return [
        ImpactItem(
            id="insurance-claim",
            category="finance",
            direction=direction,
            title="Insurance Claim & Premium Impact",
            description=f"Claim of ~${_k(claim)} may increase annual premium by ~${_k(increase)}",
            severity="high" if claim > 500_000 else "medium",
            quantitative=QuantitativeImpact(
                "Premium Increase", base, base + increase, "USD/year", increase / base * 100 if base else 0.0
            ),
            timeframe="long_term",
            confidence=0.7,
            mitigations=(
                "Document incident thoroughly",
                "Implement corrective actions",
                "Review coverage adequacy",
            ),
            affected=AffectedEntities(vessels=change.affected_vessels),
        )
    ]


def esg_score(change: ProposedChange, state: FleetState, direction: str, as_of: datetime) -> list[ImpactItem]:
    delta, text = 0, ""
    if change.type is ChangeType.FUEL_SWITCH:
        fuel = _new_fuel(change)
        if fuel == "LNG":
            delta, text = 5, "LNG transition improves environmental score"
        elif fuel == "Hybrid":
            delta, text = 3, "Hybrid operation improves environmental score"
    elif change.type is ChangeType.EQUIPMENT_FAILURE:
        delta, text = -2, "Equipment incident negatively impacts governance score"
    elif change.type is ChangeType.PROJECT_DELAY:
        delta, text = -1, "Project delays may affect stakeholder confidence"

    if delta == 0:
        return []

    if delta > 0:
        severity = "positive"
    elif delta < -3:
        severity = "high"
    else:
        severity = "medium"
    return [
        ImpactItem(
            id="esg-score-impact",
            category="esg",
            direction=direction,
            title="ESG Score Impact",
            description=text,
            severity=severity,
            quantitative=QuantitativeImpact(
                "ESG Score Change", ESG_BASELINE_SCORE, ESG_BASELINE_SCORE + delta, "points",
                delta / ESG_BASELINE_SCORE * 100,
            ),
            timeframe="medium_term",
            confidence=0.7,
            affected=AffectedEntities(vessels=change.affected_vessels),
        )
    ]


# ----------------------------
# Lateral
# ----------------------------

def shared_client_vessels(change: ProposedChange, state: FleetState, direction: str, as_of: datetime) -> list[ImpactItem]:
    """
    Other vessels serving the same clients as the affected projects.

    Only the first LATERAL_VESSEL_LIMIT vessels not named in the change are
    considered, which bounds the fan-out.
    """
    clients = {p.client for p in (state.project(pid) for pid in change.affected_projects) if p is not None}
    others = [v for v in state.vessels if v.id not in change.affected_vessels][:LATERAL_VESSEL_LIMIT]

    out: list[ImpactItem] = []
    for vessel in others:
        projects = [p for p in state.projects if vessel.id in p.assigned_vessels and p.client in clients]
        if not projects:
            continue
        out.append(
            ImpactItem(
                id=f"lateral-vessel-{vessel.id}",
                category="operations",
                direction=direction,
                title=f"{vessel.name} May Need Reallocation",
                description="Schedule changes may affect other vessels serving the same client",
                severity="medium",
                timeframe="short_term",
                confidence=0.65,
                affected=AffectedEntities(vessels=(vessel.id,), projects=tuple(p.id for p in projects)),
            )
        )
    return out
