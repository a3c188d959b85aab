"""QueryCache — two-level ``start -> end -> Composition`` memo.

A cache belongs to exactly one store version. Nothing here notices store
mutation; the owner clears the cache when it mutates its store, and frozen
snapshots never mutate theirs.
"""

from __future__ import annotations

import logging

from paph.services.composer import Composition

logger = logging.getLogger(__name__)


class QueryCache:
    """Compositions keyed by start node, then end node."""

    def __init__(self) -> None:
        self._entries: dict[str, dict[str, Composition]] = {}
        self.hits = 0
        self.misses = 0

    def get(self, start: str, end: str) -> Composition | None:
        composition = self._entries.get(start, {}).get(end)
        if composition is None:
            self.misses += 1
        else:
            self.hits += 1
        return composition

    def put(self, start: str, end: str, composition: Composition) -> None:
        self._entries.setdefault(start, {})[end] = composition

    def clear(self) -> None:
        if self._entries:
            logger.debug("Cleared %d cached queries", len(self))
        self._entries.clear()

    def __contains__(self, key: object) -> bool:
        if not isinstance(key, tuple) or len(key) != 2:
            return False
        start, end = key
        return end in self._entries.get(start, {})

    def __len__(self) -> int:
        return sum(len(ends) for ends in self._entries.values())
