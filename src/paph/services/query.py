"""QueryService — validated, optionally cached route queries."""

from __future__ import annotations

import logging

from paph.domain.checks import check_name
from paph.domain.edges import Route
from paph.domain.errors import NoPathError
from paph.infrastructure.graph.store import GraphStore
from paph.services.base import BaseService
from paph.services.cache import QueryCache
from paph.services.composer import Composition, compose
from paph.services.pathfinder import DEFAULT_MAX_DEPTH, PathFinder
from paph.services.telemetry import get_current_span, trace_span, traced

logger = logging.getLogger(__name__)


class QueryService(BaseService):
    """Answers ``start -> end`` queries against one store.

    Args:
        store: The store to search.
        max_depth: Recursion cap handed to :class:`PathFinder`.
        cache: Where to memoize compositions, or None to search every time.
    """

    def __init__(
        self,
        store: GraphStore,
        *,
        max_depth: int | None = DEFAULT_MAX_DEPTH,
        cache: QueryCache | None = None,
    ) -> None:
        super().__init__(store)
        self._finder = PathFinder(store, max_depth=max_depth)
        self._cache = cache

    @property
    def cache(self) -> QueryCache | None:
        return self._cache

    @traced
    def route(self, start: str, end: str) -> Route:
        """Find the cheapest route from *start* to *end*.

        Raises:
            InvalidArgumentError: A name is not a non-empty string.
            NoPathError: No route exists.
            RecursionLimitExceededError: The search went too deep.
        """
        check_name(start, "start")
        check_name(end, "end")
        route = self._finder.find(start, end)
        if route is None:
            raise NoPathError(start, end)
        return route

    @traced
    def query(self, start: str, end: str) -> Composition:
        """Return the composed transition for the cheapest route.

        The composition is built but never called here.
        """
        check_name(start, "start")
        check_name(end, "end")

        span = get_current_span()
        if self._cache is not None:
            cached = self._cache.get(start, end)
            if span:
                span.annotate("cache_hit", cached is not None)
            if cached is not None:
                return cached

        route = self.route(start, end)
        with trace_span("compose") as compose_span:
            composition = compose(self._store, route, start, end)
            if compose_span:
                compose_span.annotate("hops", len(route))

        if self._cache is not None:
            self._cache.put(start, end, composition)
        logger.debug("Composed %s -> %s over %d hops", start, end, len(route))
        return composition

    def invalidate(self) -> None:
        """Drop memoized compositions after the store changed."""
        if self._cache is not None:
            self._cache.clear()
