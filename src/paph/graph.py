"""Paph — the public facade over store, search, composition and caching.

A :class:`Paph` is mutable: ``add`` edges, ``query`` compositions, take
snapshots with ``freeze`` (read-only, always memoized) or ``fork``
(independent and still mutable). Snapshots copy the edge lists at the
moment they are taken, so later edges never leak between instances.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Mapping, Sequence
from typing import Any

import networkx as nx

from paph.config.settings import PaphSettings
from paph.domain.edges import Edge, Route
from paph.infrastructure.graph.store import GraphStore
from paph.services.cache import QueryCache
from paph.services.composer import Composition
from paph.services.query import QueryService
from paph.services.telemetry import telemetry_scope

logger = logging.getLogger(__name__)


class FrozenPaph:
    """Read-only snapshot exposing a memoized :meth:`query`."""

    def __init__(self, store: GraphStore, settings: PaphSettings) -> None:
        self._verbose = settings.verbose
        self._service = QueryService(
            store,
            max_depth=settings.search.max_depth,
            cache=QueryCache(),
        )

    def query(self, start: str, end: str) -> Composition:
        """Composition for the cheapest ``start -> end`` route, cached per pair."""
        with telemetry_scope(self._verbose):
            return self._service.query(start, end)

    def __repr__(self) -> str:
        return f"FrozenPaph({self._service.store!r})"


class Paph:
    """A mutable graph of transitions.

    Args:
        store: Initial edges, either a :class:`GraphStore` (used as-is) or a
            mapping of node name to edges (copied). Not validated.
        settings: Configuration; defaults to :meth:`PaphSettings.load`.
    """

    def __init__(
        self,
        store: GraphStore | Mapping[str, Sequence[Edge]] | None = None,
        *,
        settings: PaphSettings | None = None,
    ) -> None:
        if not isinstance(store, GraphStore):
            store = GraphStore(store)
        self._store = store
        self._settings = settings if settings is not None else PaphSettings.load()
        self._service = QueryService(
            store,
            max_depth=self._settings.search.max_depth,
            cache=QueryCache() if self._settings.cache.enabled else None,
        )

    @property
    def settings(self) -> PaphSettings:
        return self._settings

    def add(
        self,
        start: str,
        end: str,
        weight: float = 1.0,
        transition: Callable[[Any], Any] | None = None,
    ) -> None:
        """Register a transition from *start* to *end*.

        Raises:
            InvalidArgumentError: A name, the weight or the transition is invalid.
            NegativeWeightError: *weight* is below zero.
        """
        self._store.add(start, end, weight, transition)  # type: ignore[arg-type]
        self._service.invalidate()

    def query(self, start: str, end: str) -> Composition:
        """Composition for the cheapest ``start -> end`` route.

        Raises:
            InvalidArgumentError: A name is not a non-empty string.
            NoPathError: *end* is unreachable from *start*.
            RecursionLimitExceededError: The route is deeper than ``search.max_depth``.
        """
        with telemetry_scope(self._settings.verbose):
            return self._service.query(start, end)

    def route(self, start: str, end: str) -> Route:
        """The cheapest ``start -> end`` route itself, without composing it."""
        with telemetry_scope(self._settings.verbose):
            return self._service.route(start, end)

    def freeze(self) -> FrozenPaph:
        """Snapshot the current edges into a read-only, memoized instance."""
        logger.debug("Freezing %r", self._store)
        return FrozenPaph(self._store.clone(), self._settings)

    def fork(self) -> Paph:
        """Copy the current edges into an independent mutable instance."""
        logger.debug("Forking %r", self._store)
        return Paph(self._store.clone(), settings=self._settings)

    def to_digraph(self) -> nx.MultiDiGraph:
        """Export the current edges as a NetworkX multigraph."""
        return self._store.to_digraph()

    def __repr__(self) -> str:
        return f"Paph({self._store!r})"


def create(
    initial_store: GraphStore | Mapping[str, Sequence[Edge]] | None = None,
    *,
    settings: PaphSettings | None = None,
) -> Paph:
    """Build a :class:`Paph`, optionally seeded with unvalidated edges.

    With verbose settings, each ``query`` and ``route`` records a span tree
    retrievable through :func:`paph.services.telemetry.get_last_span`.
    """
    return Paph(initial_store, settings=settings)
