"""PathFinder — minimum-weight route search over a GraphStore.

A recursive depth-first search that expands every node reachable from the
start at most once. While it walks, it groups nodes into strongly connected
components (Tarjan's lowlink bookkeeping). A component is resolved as soon
as the walk leaves it, at which point every component it can reach is
already resolved:

- A component without internal cycles is a single node. Its best route is
  the cheapest of its edges plus the resolved route behind each edge.
- A cyclic component is settled by relaxing its edges until nothing
  improves. With non-negative weights this takes at most one round per
  member.

Resolved routes go into the per-search memo, so any later edge into the
node costs a dictionary lookup.

Not Dijkstra: there is no global priority ordering. Ties between equal-cost
routes go to the edge that was added first.
"""

from __future__ import annotations

import logging
import sys
from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import Final

from paph.domain.edges import EMPTY_ROUTE, Route
from paph.domain.errors import RecursionLimitExceededError
from paph.infrastructure.graph.store import GraphStore
from paph.services.telemetry import get_current_span, traced

logger = logging.getLogger(__name__)

DEFAULT_MAX_DEPTH: Final = 500


@dataclass
class SearchMemo:
    """State for one search, bound to a single destination.

    ``order`` and ``low`` hold each expanded node's discovery index and
    lowlink. ``open`` stacks expanded nodes whose component is not resolved
    yet. ``suffixes`` maps every resolved node to its best route to ``end``
    (``None`` when unreachable).
    """

    end: str
    order: dict[str, int] = field(default_factory=dict)
    low: dict[str, int] = field(default_factory=dict)
    open: list[str] = field(default_factory=list)
    suffixes: dict[str, Route | None] = field(default_factory=dict)
    expanded: int = 0
    memo_hits: int = 0
    relaxations: int = 0

    def target(self, node: str, pending: dict[str, Route | None]) -> Route | None:
        """Best known route from *node*, resolved or still being settled."""
        if node == self.end:
            return EMPTY_ROUTE
        if node in self.suffixes:
            return self.suffixes[node]
        return pending.get(node)


class PathFinder:
    """Finds the cheapest route between two nodes of a store.

    Args:
        store: The edge store to search. Read only.
        max_depth: Deepest recursion allowed before failing with
            :class:`RecursionLimitExceededError`. ``None`` disables the cap,
            leaving only the interpreter's recursion limit.
    """

    def __init__(self, store: GraphStore, *, max_depth: int | None = DEFAULT_MAX_DEPTH) -> None:
        self._store = store
        self._max_depth = max_depth

    @traced
    def find(self, start: str, end: str) -> Route | None:
        """Return the minimum-weight route from *start* to *end*, or None."""
        if start == end:
            return EMPTY_ROUTE

        memo = SearchMemo(end=end)
        try:
            self._search(memo, start, start, 0)
        except RecursionError as exc:
            raise RecursionLimitExceededError(start, end, sys.getrecursionlimit()) from exc
        route = memo.suffixes[start]

        span = get_current_span()
        if span:
            span.annotate("expanded", memo.expanded)
            span.annotate("memo_hits", memo.memo_hits)
            span.annotate("relaxations", memo.relaxations)
            span.annotate("found", route is not None)

        logger.debug(
            "Search %s -> %s: %s (expanded=%d, memo_hits=%d)",
            start,
            end,
            "no route" if route is None else f"weight={route.weight} hops={len(route)}",
            memo.expanded,
            memo.memo_hits,
        )
        return route

    def _search(self, memo: SearchMemo, start: str, node: str, depth: int) -> None:
        """Expand *node*, resolving its component once the walk leaves it."""
        if self._max_depth is not None and depth > self._max_depth:
            raise RecursionLimitExceededError(start, memo.end, self._max_depth)

        index = len(memo.order)
        memo.order[node] = index
        memo.low[node] = index
        memo.open.append(node)
        memo.expanded += 1

        for edge in self._store.edges(node):
            nxt = edge.end_name
            if nxt == memo.end:
                continue
            if nxt in memo.suffixes:
                memo.memo_hits += 1
                continue
            if nxt in memo.order:
                # Expanded but unresolved: still open, so part of a cycle.
                memo.low[node] = min(memo.low[node], memo.order[nxt])
                continue
            self._search(memo, start, nxt, depth + 1)
            if nxt not in memo.suffixes:
                memo.low[node] = min(memo.low[node], memo.low[nxt])

        if memo.low[node] == index:
            members: list[str] = []
            while True:
                member = memo.open.pop()
                members.append(member)
                if member == node:
                    break
            self._resolve(memo, members)

    def _resolve(self, memo: SearchMemo, members: Sequence[str]) -> None:
        """Settle the best routes of one strongly connected component.

        Edges leave the component only towards resolved nodes or the
        destination. *members* is in reverse discovery order, which puts
        nodes closer to the exits first.
        """
        pending: dict[str, Route | None] = dict.fromkeys(members)

        for _ in range(len(members)):
            memo.relaxations += 1
            changed = False
            for node in members:
                best = pending[node]
                for index, edge in enumerate(self._store.edges(node)):
                    suffix = memo.target(edge.end_name, pending)
                    if suffix is None:
                        continue
                    # Strictly cheaper only: on ties the earlier edge stays.
                    if best is None or edge.weight + suffix.weight < best.weight:
                        best = suffix.prepend(node, index, edge.weight)
                        changed = True
                pending[node] = best
            if not changed:
                break

        if len(members) > 1:
            self._prefer_earlier_edges(memo, members, pending)
        memo.suffixes.update(pending)

    def _prefer_earlier_edges(
        self,
        memo: SearchMemo,
        members: Sequence[str],
        pending: dict[str, Route | None],
    ) -> None:
        """Re-pick each member's first edge among those reaching its best weight.

        Relaxation can settle on a later edge when an earlier one only
        caught up in a later round. Edges whose route runs back through the
        member are skipped.
        """
        for node in members:
            best = pending[node]
            if best is None:
                continue
            for index, edge in enumerate(self._store.edges(node)):
                suffix = memo.target(edge.end_name, pending)
                if suffix is None or edge.weight + suffix.weight != best.weight:
                    continue
                if any(hop.node == node for hop in suffix.hops):
                    continue
                pending[node] = suffix.prepend(node, index, edge.weight)
                break
