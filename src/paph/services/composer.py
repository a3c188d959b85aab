"""Composer — compile a Route into one callable."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

from paph.domain.edges import Route
from paph.infrastructure.graph.store import GraphStore


@dataclass(frozen=True)
class Composition:
    """A chain of transitions applied first to last.

    ``Composition(x)`` is ``tN(...t2(t1(x)))`` where ``t1`` is the
    transition of the edge leaving the start node. An empty chain is the
    identity.
    """

    start: str
    end: str
    route: Route
    transitions: tuple[Callable[[Any], Any], ...]

    def __call__(self, value: Any) -> Any:
        for transition in self.transitions:
            value = transition(value)
        return value

    def __repr__(self) -> str:
        return (
            f"Composition({self.start!r} -> {self.end!r}, "
            f"hops={len(self.route)}, weight={self.route.weight})"
        )


def compose(store: GraphStore, route: Route, start: str, end: str) -> Composition:
    """Resolve *route*'s hops against *store* and chain their transitions."""
    transitions = tuple(store.edge(hop.node, hop.index).transition for hop in route.hops)
    return Composition(start=start, end=end, route=route, transitions=transitions)
