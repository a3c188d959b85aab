"""Edge and route value types.

An :class:`Edge` is owned by the store entry of its source node, so it only
records where it leads. A :class:`Route` addresses edges by
``(node, index)`` hops rather than holding them, which keeps routes small
and lets a composition resolve the transitions against any store that
shares the same edge lists.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

from pydantic import BaseModel, Field


class Edge(BaseModel):
    """A directed, weighted connection carrying a unary transition."""

    model_config = {"frozen": True}

    end_name: str
    weight: float = Field(default=1.0, ge=0)
    transition: Callable[[Any], Any]


@dataclass(frozen=True)
class Hop:
    """The ``index``-th outgoing edge of ``node``."""

    node: str
    index: int


@dataclass(frozen=True)
class Route:
    """An ordered chain of hops from a start node to an end node.

    ``weight`` is the sum of the traversed edge weights. A route with no
    hops means the start already is the destination.
    """

    hops: tuple[Hop, ...] = ()
    weight: float = 0.0

    def __len__(self) -> int:
        return len(self.hops)

    def prepend(self, node: str, index: int, weight: float) -> Route:
        """Return a new route that first takes edge *index* out of *node*."""
        return Route(hops=(Hop(node, index), *self.hops), weight=weight + self.weight)

    def nodes(self, end: str) -> list[str]:
        """Node names visited along the route, *end* included."""
        return [hop.node for hop in self.hops] + [end]


EMPTY_ROUTE = Route()
