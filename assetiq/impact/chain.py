from __future__ import annotations

from typing import Sequence

from assetiq.core.errors import ImpactChainError
from assetiq.impact.models import ImpactChainNode, ImpactItem


def index_impacts(impacts: Sequence[ImpactItem]) -> dict[str, ImpactItem]:
    index: dict[str, ImpactItem] = {}
    for impact in impacts:
        if impact.id in index:
            raise ImpactChainError(f"duplicate impact id: {impact.id!r}")
        index[impact.id] = impact
    return index


def validate_chain(impacts: Sequence[ImpactItem]) -> dict[str, ImpactItem]:
    """
    Reject dangling or cyclic depends_on references.

    Returns the id-indexed map so callers do not rebuild it.
    """
    index = index_impacts(impacts)

    for impact in impacts:
        for dep in impact.depends_on:
            if dep not in index:
                raise ImpactChainError(f"{impact.id!r} depends on unknown impact {dep!r}")

    # iterative DFS, colouring nodes white(0) / grey(1) / black(2)
    state: dict[str, int] = {i: 0 for i in index}
    for start in index:
        if state[start]:
            continue
        stack: list[tuple[str, int]] = [(start, 0)]
        state[start] = 1
        while stack:
            node, pos = stack[-1]
            deps = index[node].depends_on
            if pos < len(deps):
                stack[-1] = (node, pos + 1)
                nxt = deps[pos]
                if state[nxt] == 1:
                    path = " -> ".join([n for n, _ in stack] + [nxt])
                    raise ImpactChainError(f"cyclic depends_on: {path}")
                if state[nxt] == 0:
                    state[nxt] = 1
                    stack.append((nxt, 0))
            else:
                state[node] = 2
                stack.pop()

    return index


def build_chain(impacts: Sequence[ImpactItem]) -> list[ImpactChainNode]:
    """
    Roots are impacts with no depends_on; an impact's children are the
    impacts whose depends_on names it, in input order.
    """
    validate_chain(impacts)

    children: dict[str, list[ImpactItem]] = {i.id: [] for i in impacts}
    for impact in impacts:
        for dep in dict.fromkeys(impact.depends_on):
            children[dep].append(impact)

    def build(impact: ImpactItem, depth: int) -> ImpactChainNode:
        return ImpactChainNode(
            id=impact.id,
            impact=impact,
            children=tuple(build(c, depth + 1) for c in children[impact.id]),
            depth=depth,
        )

    return [build(i, 0) for i in impacts if not i.depends_on]
