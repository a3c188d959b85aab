"""Argument checks shared by ``add``, ``query`` and ``route``.

Each check returns the validated value or raises
:class:`~paph.domain.errors.InvalidArgumentError`.
"""

from __future__ import annotations

import math
from collections.abc import Callable
from numbers import Real
from typing import Any

from paph.domain.errors import InvalidArgumentError


def check_name(name: Any, role: str) -> str:
    """Require *name* to be a non-empty string node identifier."""
    if not isinstance(name, str) or not name:
        msg = f"{role} must be a non-empty string, got {name!r}"
        raise InvalidArgumentError(msg)
    return name


def check_weight(weight: Any) -> float:
    """Require *weight* to be a real, non-NaN number.

    Sign is not checked here; negative weights get their own error.
    Integers too large for a float become infinite.
    """
    if isinstance(weight, bool) or not isinstance(weight, Real):
        msg = f"weight must be a number, got {weight!r}"
        raise InvalidArgumentError(msg)
    try:
        value = float(weight)
    except OverflowError:
        value = math.inf if weight > 0 else -math.inf
    if math.isnan(value):
        msg = f"weight must be a number, got {weight!r}"
        raise InvalidArgumentError(msg)
    return value


def check_transition(transition: Any) -> Callable[[Any], Any]:
    """Require *transition* to be callable."""
    if not callable(transition):
        msg = f"transition must be callable, got {transition!r}"
        raise InvalidArgumentError(msg)
    return transition
