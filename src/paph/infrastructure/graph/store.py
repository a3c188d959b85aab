"""GraphStore — adjacency lists of transition edges keyed by source node.

Nodes are implicit: any name used as an edge endpoint is a node. Edges are
append-only and immutable, so :meth:`GraphStore.clone` only needs to copy
the outer mapping and the per-node lists; the edges themselves are shared.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Mapping, Sequence
from typing import Any, TypeAlias

import networkx as nx

from paph.domain.checks import check_name, check_transition, check_weight
from paph.domain.edges import Edge
from paph.domain.errors import NegativeWeightError

logger = logging.getLogger(__name__)

_Graph: TypeAlias = nx.MultiDiGraph


class GraphStore:
    """Mapping of node name to its ordered outgoing edges.

    Edge order matters: the search prefers the earlier-added edge when two
    routes cost the same.
    """

    def __init__(self, edges: Mapping[str, Sequence[Edge]] | None = None) -> None:
        # Initial contents are taken as-is; callers own their invariants.
        self._edges: dict[str, list[Edge]] = {}
        if edges:
            for node, outgoing in edges.items():
                self._edges[node] = list(outgoing)

    def add(
        self,
        start: str,
        end: str,
        weight: float,
        transition: Callable[[Any], Any],
    ) -> Edge:
        """Append an edge from *start* to *end* and return it."""
        check_name(start, "start")
        check_name(end, "end")
        value = check_weight(weight)
        check_transition(transition)
        if value < 0:
            raise NegativeWeightError(start, end, weight)

        edge = Edge(end_name=end, weight=value, transition=transition)
        self._edges.setdefault(start, []).append(edge)
        logger.debug("Added edge %s -> %s (weight=%s)", start, end, value)
        return edge

    def edges(self, node: str) -> Sequence[Edge]:
        """Outgoing edges of *node* in insertion order (empty if none)."""
        return self._edges.get(node, ())

    def edge(self, node: str, index: int) -> Edge:
        """The *index*-th outgoing edge of *node*."""
        return self._edges[node][index]

    def nodes(self) -> set[str]:
        """Every name that appears as an edge source or destination."""
        names = set(self._edges)
        for outgoing in self._edges.values():
            names.update(e.end_name for e in outgoing)
        return names

    def clone(self) -> GraphStore:
        """Return a copy with independent edge lists and shared edges."""
        return GraphStore(self._edges)

    def to_digraph(self) -> _Graph:
        """Export the store as a NetworkX multigraph.

        Each stored edge becomes one graph edge keyed by its index in the
        source node's list, carrying ``weight`` and ``transition`` attributes.
        """
        g: _Graph = nx.MultiDiGraph()
        for node, outgoing in self._edges.items():
            g.add_node(node)
            for index, e in enumerate(outgoing):
                g.add_edge(node, e.end_name, key=index, weight=e.weight, transition=e.transition)
        return g

    def __contains__(self, node: object) -> bool:
        return node in self.nodes()

    def __len__(self) -> int:
        return sum(len(outgoing) for outgoing in self._edges.values())

    def __repr__(self) -> str:
        return f"GraphStore(sources={len(self._edges)}, edges={len(self)})"
