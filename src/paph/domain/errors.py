"""Exception hierarchy raised by paph.

Every error is fatal to the call that raised it. Nothing in the library
retries or recovers internally; callers decide what to do next.
"""

from __future__ import annotations


class PaphError(Exception):
    """Base class for all paph errors."""


class InvalidArgumentError(PaphError, ValueError):
    """A node name, weight, or transition failed validation."""


class NegativeWeightError(InvalidArgumentError):
    """An edge was added with a weight below zero."""

    def __init__(self, start: str, end: str, weight: float) -> None:
        self.start = start
        self.end = end
        self.weight = weight
        super().__init__(
            f"negative weights are not allowed (weight of {weight} between {start} and {end})"
        )


class NoPathError(PaphError):
    """No route connects *start* to *end* with the current edges."""

    def __init__(self, start: str, end: str) -> None:
        self.start = start
        self.end = end
        super().__init__(f"no path found for {start} -> {end}")


class RecursionLimitExceededError(PaphError):
    """The search went deeper than the configured ``max_depth``."""

    def __init__(self, start: str, end: str, limit: int) -> None:
        self.start = start
        self.end = end
        self.limit = limit
        super().__init__(f"search for {start} -> {end} exceeded the depth limit of {limit}")


class InvalidConfigError(PaphError):
    """A configuration file could not be read or parsed."""
