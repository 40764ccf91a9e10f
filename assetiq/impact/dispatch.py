from __future__ import annotations

from fnmatch import fnmatchcase
from types import MappingProxyType
from typing import Mapping, Sequence

from assetiq.impact import generators as g
from assetiq.impact.generators import Generator
from assetiq.impact.models import ChangeType, ImpactItem

CT = ChangeType

_SCHEDULE_UPSTREAM = (g.spare_parts, g.crew_availability, g.maintenance_conflict, g.port_congestion)
_SCHEDULE_DOWNSTREAM = (g.project_timeline, g.client_communication, g.revenue_loss, g.compliance)

# change type -> direction -> ordered generators. Types that are absent
# produce no upstream/downstream impacts of their own.
DISPATCH: Mapping[ChangeType, Mapping[str, tuple[Generator, ...]]] = MappingProxyType({
    CT.VESSEL_ASSIGNMENT: {"upstream": _SCHEDULE_UPSTREAM, "downstream": _SCHEDULE_DOWNSTREAM},
    CT.SCHEDULE_CHANGE: {"upstream": _SCHEDULE_UPSTREAM, "downstream": _SCHEDULE_DOWNSTREAM},
    CT.FUEL_SWITCH: {
        "upstream": (g.fuel_supply, g.equipment_retrofit),
        "downstream": (g.emissions, g.compliance, g.fuel_cost),
    },
    CT.MAINTENANCE_SCHEDULE: {
        "upstream": (g.spare_parts, g.crew_availability),
        "downstream": (g.vessel_availability, g.project_timeline),
    },
    CT.NEW_PROJECT: {"upstream": (g.resource_availability, g.budget_overrun)},
    CT.PROJECT_DELAY: {"downstream": (g.client_communication, g.delay_penalties, g.cascading_projects)},
    CT.EQUIPMENT_FAILURE: {"downstream": (g.safety_assessment, g.vessel_availability, g.insurance_claim)},
})

# appended to every downstream pass
ALWAYS_DOWNSTREAM: tuple[Generator, ...] = (g.esg_score,)

LATERAL: Mapping[ChangeType, tuple[Generator, ...]] = MappingProxyType({
    CT.VESSEL_ASSIGNMENT: (g.shared_client_vessels,),
    CT.SCHEDULE_CHANGE: (g.shared_client_vessels,),
})


def generators_for(change_type: ChangeType, direction: str) -> tuple[Generator, ...]:
    if direction == "lateral":
        return LATERAL.get(change_type, ())
    base = DISPATCH.get(change_type, {}).get(direction, ())
    if direction == "downstream":
        return tuple(base) + ALWAYS_DOWNSTREAM
    return tuple(base)


# ----------------------------
# Causal links
# ----------------------------

# impact id pattern -> predecessor id patterns, in preference order.
# Every edge points from a later stage of the causal story to an earlier one,
# so the table itself is acyclic.
CAUSAL_LINKS: tuple[tuple[str, tuple[str, ...]], ...] = (
    ("timeline-*", ("vessel-availability", "maintenance-conflict", "crew-availability")),
    ("client-communication", ("timeline-*",)),
    ("revenue-impact", ("timeline-*",)),
    ("lateral-vessel-*", ("timeline-*",)),
    ("emissions-change", ("equipment-retrofit",)),
    ("esg-score-impact", ("emissions-change", "safety-assessment")),
    ("insurance-claim", ("safety-assessment",)),
)


def link_impacts(impacts: Sequence[ImpactItem]) -> list[ImpactItem]:
    """
    Fill depends_on from CAUSAL_LINKS.

    Each impact gets at most one predecessor: the first present impact that
    matches its patterns in order. Impacts that already carry depends_on are
    left alone.
    """
    ids = [i.id for i in impacts]
    out: list[ImpactItem] = []
    for impact in impacts:
        if impact.depends_on:
            out.append(impact)
            continue

        parent: str | None = None
        for pattern, predecessors in CAUSAL_LINKS:
            if not fnmatchcase(impact.id, pattern):
                continue
            for pred in predecessors:
                parent = next((i for i in ids if i != impact.id and fnmatchcase(i, pred)), None)
                if parent is not None:
                    break
            break

        out.append(impact.with_depends_on((parent,)) if parent else impact)
    return out
