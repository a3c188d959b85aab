"""Pydantic configuration models with code-baked defaults.

Sparse TOML contract: defaults baked here, a ``paph.toml`` only contains
overrides.
"""

from __future__ import annotations

from pydantic import BaseModel, Field


class SearchConfig(BaseModel):
    """[search] section."""

    model_config = {"frozen": True}

    # None disables the cap; the interpreter's own recursion limit still applies.
    max_depth: int | None = Field(default=500, ge=1)


class CacheConfig(BaseModel):
    """[cache] section."""

    model_config = {"frozen": True}

    # Memoize queries on mutable instances. Frozen snapshots always do.
    enabled: bool = True

