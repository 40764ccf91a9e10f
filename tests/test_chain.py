from __future__ import annotations

from datetime import datetime
from typing import Any

import pytest

from assetiq.core.errors import AssetIQError, ImpactChainError
from assetiq.impact.chain import build_chain, validate_chain
from assetiq.impact.dispatch import link_impacts
from assetiq.impact.engine import ImpactPropagationEngine
from assetiq.impact.models import FleetState, ImpactItem, ProposedChange


def _item(id_: str, *depends_on: str) -> ImpactItem:
    return ImpactItem(
        id=id_,
        category="operations",
        direction="downstream",
        title=id_,
        description="",
        severity="medium",
        timeframe="short_term",
        confidence=0.5,
        depends_on=tuple(depends_on),
    )


def test_forest_depths_and_order() -> None:
    chain = build_chain([_item("a"), _item("b", "a"), _item("c"), _item("d", "b"), _item("e", "a")])

    assert [n.id for n in chain] == ["a", "c"]
    assert [(n.id, n.depth) for n in chain[0].walk()] == [("a", 0), ("b", 1), ("d", 2), ("e", 1)]
    assert chain[1].children == ()


def test_dangling_reference_is_rejected() -> None:
    with pytest.raises(ImpactChainError, match="unknown impact 'ghost'"):
        build_chain([_item("a"), _item("b", "ghost")])


def test_cycle_is_rejected() -> None:
    with pytest.raises(ImpactChainError, match="cyclic"):
        validate_chain([_item("a", "c"), _item("b", "a"), _item("c", "b")])


def test_self_reference_is_a_cycle() -> None:
    with pytest.raises(ImpactChainError):
        validate_chain([_item("a", "a")])


def test_duplicate_ids_are_rejected() -> None:
    with pytest.raises(ImpactChainError, match="duplicate"):
        validate_chain([_item("a"), _item("a")])


def test_chain_error_is_not_an_input_error() -> None:
    err = ImpactChainError("x")
    assert isinstance(err, AssetIQError)
    assert not isinstance(err, ValueError)


def test_long_chain_does_not_recurse_in_validation() -> None:
    items = [_item("n0")] + [_item(f"n{i}", f"n{i - 1}") for i in range(1, 3000)]
    index = validate_chain(items)
    assert len(index) == 3000


def test_link_impacts_keeps_preset_dependencies() -> None:
    linked = link_impacts([_item("equipment-retrofit"), _item("emissions-change", "other"), _item("other")])
    assert linked[1].depends_on == ("other",)


def test_link_impacts_prefers_earlier_predecessors() -> None:
    linked = link_impacts([_item("crew-availability"), _item("maintenance-conflict"), _item("timeline-p1")])
    assert linked[2].depends_on == ("maintenance-conflict",)
    assert linked[0].depends_on == ()


def test_engine_surfaces_a_bad_custom_generator(fleet_dict: dict[str, Any], as_of: datetime) -> None:
    def loop(change, state, direction, at):
        return [_item("x", "y"), _item("y", "x")]

    engine = ImpactPropagationEngine(lookup=lambda change_type, direction: (loop,) if direction == "upstream" else ())
    with pytest.raises(ImpactChainError):
        engine.analyze(
            ProposedChange.from_dict({"id": "c", "type": "route_change"}), FleetState.from_dict(fleet_dict), as_of=as_of
        )
