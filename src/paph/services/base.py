"""BaseService — foundation for services that read a GraphStore.

Every service receives the store it works on at construction time; there
is no global or ambient store.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from paph.infrastructure.graph.store import GraphStore


class BaseService:
    """Base for service-layer classes.

    Usage::

        class QueryService(BaseService):
            def route(self, start: str, end: str) -> Route:
                finder = PathFinder(self._store)
                ...
    """

    def __init__(self, store: GraphStore) -> None:
        self._store = store

    @property
    def store(self) -> GraphStore:
        return self._store
