from __future__ import annotations

import logging
from datetime import datetime
from typing import Any, Callable, Mapping

from assetiq.core.errors import MalformedRequest
from assetiq.impact import aggregate
from assetiq.impact.chain import build_chain
from assetiq.impact.dispatch import generators_for, link_impacts
from assetiq.impact.generators import Generator
from assetiq.impact.models import (
    ChangeType,
    FleetState,
    ImpactAnalysisResult,
    ImpactItem,
    ProposedChange,
    to_naive_utc,
)

logger = logging.getLogger(__name__)

GeneratorLookup = Callable[[ChangeType, str], tuple[Generator, ...]]


class ImpactPropagationEngine:
    """
    Propagates a proposed change across the fleet snapshot.

    Stateless: the generator lookup is the only collaborator and it is
    injectable so tests can plug in a custom dispatch.
    """

    def __init__(self, lookup: GeneratorLookup = generators_for) -> None:
        self.lookup = lookup

    def _run(self, change: ProposedChange, state: FleetState, direction: str, as_of: datetime) -> list[ImpactItem]:
        out: list[ImpactItem] = []
        for gen in self.lookup(change.type, direction):
            items = gen(change, state, direction, as_of)
            logger.debug("%s %s: %s -> %d impacts", change.id, direction, gen.__name__, len(items))
            out.extend(items)
        return out

    def analyze(
        self,
        change: ProposedChange,
        state: FleetState,
        as_of: datetime | None = None,
    ) -> ImpactAnalysisResult:
        now = as_of or state.as_of or datetime.now().replace(microsecond=0)
        now = to_naive_utc(now)

        raw = (
            self._run(change, state, "upstream", now)
            + self._run(change, state, "downstream", now)
            + self._run(change, state, "lateral", now)
        )
        linked = link_impacts(raw)
        chain = build_chain(linked)

        upstream = tuple(i for i in linked if i.direction == "upstream")
        downstream = tuple(i for i in linked if i.direction == "downstream")
        lateral = tuple(i for i in linked if i.direction == "lateral")

        summary = aggregate.summarize(linked)
        risk = aggregate.overall_risk(summary)

        logger.info(
            "impact analysis %s (%s): %d impacts, overall risk %s",
            change.id, change.type.value, summary.total, risk,
        )

        return ImpactAnalysisResult(
            id=f"analysis-{change.id}",
            change=change,
            timestamp=now,
            overall_risk=risk,
            overall_confidence=aggregate.overall_confidence(linked),
            summary=summary,
            upstream=upstream,
            downstream=downstream,
            lateral=lateral,
            chain=tuple(chain),
            financial=aggregate.financial_summary(linked, state),
            esg=aggregate.esg_summary(linked),
            operational=aggregate.operational_summary(change, linked),
            recommendations=tuple(aggregate.recommendations(linked)),
            alternatives=tuple(aggregate.alternatives()),
        )


def parse_impact_request(data: Mapping[str, Any]) -> tuple[ProposedChange, FleetState]:
    if not isinstance(data, Mapping) or "change" not in data or "fleetState" not in data:
        raise MalformedRequest("impact request needs 'change' and 'fleetState'")
    return ProposedChange.from_dict(data["change"]), FleetState.from_dict(data["fleetState"])


def analyze_impact(
    change: ProposedChange | Mapping[str, Any],
    fleet_state: FleetState | Mapping[str, Any],
    as_of: datetime | None = None,
) -> ImpactAnalysisResult:
    if not isinstance(change, ProposedChange):
        change = ProposedChange.from_dict(change)
    if not isinstance(fleet_state, FleetState):
        fleet_state = FleetState.from_dict(fleet_state)
    return ImpactPropagationEngine().analyze(change, fleet_state, as_of=as_of)
