"""paph — discover and compose the cheapest chain of transitions between nodes.

Usage::

    import paph

    p = paph.create()
    p.add("celsius", "kelvin", 1, lambda c: c + 273.15)
    p.add("kelvin", "rankine", 1, lambda k: k * 9 / 5)
    to_rankine = p.query("celsius", "rankine")
    to_rankine(100.0)
"""

from __future__ import annotations

from paph.config.logging import configure_logging
from paph.config.settings import PaphSettings
from paph.domain.edges import Edge, Hop, Route
from paph.domain.errors import (
    InvalidArgumentError,
    InvalidConfigError,
    NegativeWeightError,
    NoPathError,
    PaphError,
    RecursionLimitExceededError,
)
from paph.graph import FrozenPaph, Paph, create
from paph.infrastructure.graph.store import GraphStore
from paph.services.composer import Composition

__version__ = "0.1.0"

__all__ = [
    "Composition",
    "Edge",
    "FrozenPaph",
    "GraphStore",
    "Hop",
    "InvalidArgumentError",
    "InvalidConfigError",
    "NegativeWeightError",
    "NoPathError",
    "Paph",
    "PaphError",
    "PaphSettings",
    "RecursionLimitExceededError",
    "Route",
    "configure_logging",
    "create",
]
