from __future__ import annotations

from typing import Sequence

from assetiq.core.contract import ACTION_TEXT_PROCESS, CURRENCY, HIGH_RECOMMENDATION_LIMIT
from assetiq.impact.models import (
    AlternativeScenario,
    EsgSummary,
    FinancialSummary,
    FleetState,
    ImpactItem,
    ImpactSummary,
    OperationalSummary,
    ProposedChange,
    Recommendation,
)

NOX_PER_CO2 = 0.8
COMPLIANCE_RISK_STEP = 5
UTILIZATION_HIT = -5

ALTERNATIVES = (
    AlternativeScenario("alt-phased", "Phased Implementation", "Implement change gradually over 3 phases", "medium", -15),
    AlternativeScenario(
        "alt-accelerated", "Accelerated Timeline", "Complete change faster with additional resources", "high", 25
    ),
    AlternativeScenario("alt-deferred", "Defer to Next Quarter", "Postpone change to reduce immediate impact", "low", -5),
)


def summarize(impacts: Sequence[ImpactItem]) -> ImpactSummary:
    def count(sev: str) -> int:
        return sum(1 for i in impacts if i.severity == sev)

    return ImpactSummary(
        total=len(impacts),
        critical=count("critical"),
        high=count("high"),
        medium=count("medium"),
        low=count("low"),
        positive=count("positive"),
    )


def overall_risk(summary: ImpactSummary) -> str:
    if summary.critical > 0:
        return "critical"
    if summary.high > 2:
        return "high"
    if summary.high > 0 or summary.medium > 3:
        return "medium"
    if summary.positive > summary.low:
        return "positive"
    return "low"


def overall_confidence(impacts: Sequence[ImpactItem]) -> float:
    if not impacts:
        return 0.0
    return round(sum(i.confidence for i in impacts) / len(impacts), 2)


def financial_summary(impacts: Sequence[ImpactItem], state: FleetState) -> FinancialSummary:
    cost = revenue = insurance = carbon = 0.0

    for impact in impacts:
        q = impact.quantitative
        if impact.category != "finance" or q is None:
            continue
        if "revenue" in impact.id:
            revenue -= q.projected_value
        elif "penalt" in impact.id or "cost" in impact.id:
            cost += q.projected_value
        elif "insurance" in impact.id:
            insurance += q.delta

    # first ESG record carries the CO2 delta when emissions were assessed
    esg = next((i for i in impacts if i.category == "esg"), None)
    if esg is not None and esg.quantitative is not None:
        carbon = esg.quantitative.delta * state.financials.carbon_credit_price

    return FinancialSummary(
        estimated_cost_impact=cost,
        revenue_impact=revenue,
        carbon_credit_impact=carbon,
        insurance_impact=insurance,
        currency=CURRENCY,
    )


def esg_summary(impacts: Sequence[ImpactItem]) -> EsgSummary:
    emissions = next((i for i in impacts if i.id == "emissions-change"), None)
    score = next((i for i in impacts if i.id == "esg-score-impact"), None)
    has_compliance = any(i.category == "compliance" for i in impacts)

    co2 = emissions.quantitative.percent_change if emissions and emissions.quantitative else 0.0
    return EsgSummary(
        co2_change=co2,
        nox_change=co2 * NOX_PER_CO2,
        compliance_risk_change=COMPLIANCE_RISK_STEP if has_compliance else 0,
        esg_score_change=score.quantitative.delta if score and score.quantitative else 0,
    )


def operational_summary(change: ProposedChange, impacts: Sequence[ImpactItem]) -> OperationalSummary:
    delay = sum(i.quantitative.projected_value for i in impacts if i.id.startswith("timeline-") and i.quantitative)
    maintenance = next((i for i in impacts if i.category == "maintenance"), None)
    availability = any(i.id == "vessel-availability" for i in impacts)

    return OperationalSummary(
        utilization_change=UTILIZATION_HIT if availability else 0,
        schedule_delay_days=delay,
        affected_project_count=len(change.affected_projects),
        maintenance_reschedules=(
            maintenance.quantitative.projected_value if maintenance and maintenance.quantitative else 0
        ),
    )


def recommendations(impacts: Sequence[ImpactItem]) -> list[Recommendation]:
    out: list[Recommendation] = []

    for impact in impacts:
        if impact.severity == "critical" and impact.mitigations:
            out.append(Recommendation("critical", impact.mitigations[0], f"Addresses: {impact.title}", "Risk reduction"))

    high = [i for i in impacts if i.severity == "high"][:HIGH_RECOMMENDATION_LIMIT]
    for impact in high:
        if impact.mitigations:
            out.append(Recommendation("high", impact.mitigations[0], f"Addresses: {impact.title}", "Impact mitigation"))

    out.append(
        Recommendation("medium", ACTION_TEXT_PROCESS, "Ensure alignment on change impacts", "Improved coordination")
    )
    return out


def alternatives() -> list[AlternativeScenario]:
    return list(ALTERNATIVES)
