"""Shared pytest fixtures and test helpers for paph tests."""

from __future__ import annotations

from collections.abc import Callable, Generator
from typing import Any

import pytest

from paph.config.settings import PaphSettings
from paph.graph import Paph
from paph.infrastructure.graph.store import GraphStore
from paph.services.telemetry import _current_span, _last_span, disable_telemetry


@pytest.fixture(autouse=True)
def _isolated_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep ambient ``PAPH_*`` variables from leaking into settings."""
    for key in ("PAPH_CONFIG", "PAPH_VERBOSE", "PAPH_LOG_JSON"):
        monkeypatch.delenv(key, raising=False)
    monkeypatch.delenv("PAPH_SEARCH__MAX_DEPTH", raising=False)
    monkeypatch.delenv("PAPH_CACHE__ENABLED", raising=False)


@pytest.fixture(autouse=True)
def _reset_telemetry_state() -> Generator[None]:
    """Telemetry is context-wide; make sure no test leaves it on."""
    yield
    disable_telemetry()
    _current_span.set(None)
    _last_span.set(None)


@pytest.fixture
def settings() -> PaphSettings:
    """Code-default settings, no TOML file."""
    return PaphSettings.load()


@pytest.fixture
def store() -> GraphStore:
    return GraphStore()


@pytest.fixture
def p(settings: PaphSettings) -> Paph:
    """An empty mutable instance with default settings."""
    return Paph(settings=settings)


# ---------------------------------------------------------------------------
# Shared test helpers
# ---------------------------------------------------------------------------


def label(start: str, end: str) -> Callable[[str], str]:
    """Transition that appends `` {start}{end}`` to a string."""
    return lambda s: f"{s} {start}{end}"


def add_label(target: Any, start: str, end: str, weight: float = 1) -> None:
    """Add a labelling edge to a Paph or GraphStore."""
    target.add(start, end, weight, label(start, end))
