"""End-to-end performance regression tests.

Uses the telemetry system to capture search statistics and wall-clock time
for repeated queries. Thresholds are generous to avoid CI flakes while
still catching serious regressions (e.g., a memo that stops being reused
and lets the search go exponential).
"""

from __future__ import annotations

import random
import time
from collections.abc import Generator

import pytest

import paph
from paph.config.settings import PaphSettings
from paph.graph import Paph
from paph.services.telemetry import _current_span, disable_telemetry, enable_telemetry, get_last_span

# ── Thresholds ───────────────────────────────────────────────────────

# One uncached search over the benchmark graph
SINGLE_SEARCH_MS = 500

NODES = 300
QUERIES = 50


# ── Fixtures ─────────────────────────────────────────────────────────


@pytest.fixture
def _telemetry_enabled() -> Generator[None]:
    enable_telemetry()
    yield
    disable_telemetry()
    _current_span.set(None)


def _random_forward_graph(seed: int = 7) -> Paph:
    """Every node links forward 1-4 steps with weight 1-4 (as a DAG)."""
    rng = random.Random(seed)
    p = paph.create(settings=PaphSettings.load(cache={"enabled": False}))
    for i in range(NODES + 1):
        end = min(i + 1 + rng.randrange(4), NODES)
        p.add(str(i), str(end), 1 + rng.randrange(4), lambda x: x)
        if i + 2 <= NODES:
            p.add(str(i), str(i + 2), 1 + rng.randrange(4), lambda x: x)
    return p


def _ladder(rungs: int, *, back_edges: bool = False) -> Paph:
    """n_i -> n_i+1 directly or through m_i; optionally every m_i links back to n0."""
    p = paph.create(settings=PaphSettings.load(cache={"enabled": False}))
    for i in range(rungs):
        p.add(f"n{i}", f"n{i + 1}", 2, lambda x: x)
        p.add(f"n{i}", f"m{i}", 1, lambda x: x)
        if back_edges:
            p.add(f"m{i}", "n0", 1, lambda x: x)
        p.add(f"m{i}", f"n{i + 1}", 1, lambda x: x)
    return p


def _complete(size: int) -> Paph:
    """Zero-weight complete digraph, self-loops included."""
    p = paph.create(settings=PaphSettings.load(cache={"enabled": False}))
    names = [f"v{i}" for i in range(size)]
    for start in names:
        for end in names:
            p.add(start, end, 0, lambda x: x)
    return p


def _last_find_stats() -> dict[str, object]:
    """Annotations and timing of the search under the last ``route`` call."""
    span = get_last_span()
    assert span is not None
    find = span.children[0]
    assert find.name == "PathFinder.find"
    return {**find.annotations, "duration_ms": find.duration_ms}


# ── Tests ────────────────────────────────────────────────────────────


class TestSearchScaling:
    @pytest.mark.usefixtures("_telemetry_enabled")
    def test_each_node_expanded_once_on_a_dag(self) -> None:
        p = _ladder(100)
        p.query("n0", "n100")
        span = get_last_span()
        assert span is not None
        find = span.children[0].children[0]
        assert find.name == "PathFinder.find"
        # n0..n99 and m0..m99; the destination is never expanded.
        assert find.annotations["expanded"] == 200
        assert find.duration_ms < SINGLE_SEARCH_MS

    def test_ladder_finishes_quickly(self) -> None:
        # 2**150 naive routes; only a reused memo makes this tractable.
        p = _ladder(150)
        started = time.perf_counter()
        route = p.route("n0", "n150")
        elapsed_ms = (time.perf_counter() - started) * 1000
        assert route.weight == 300.0
        assert elapsed_ms < SINGLE_SEARCH_MS

    @pytest.mark.usefixtures("_telemetry_enabled")
    def test_each_node_expanded_once_on_a_complete_graph(self) -> None:
        # Every ordering of the nodes is a route; none of them leaves.
        with pytest.raises(paph.NoPathError):
            _complete(12).route("v0", "zz")
        stats = _last_find_stats()
        assert stats["found"] is False
        assert stats["expanded"] == 12
        assert stats["duration_ms"] < SINGLE_SEARCH_MS

    @pytest.mark.usefixtures("_telemetry_enabled")
    def test_each_node_expanded_once_on_a_ladder_with_back_edges(self) -> None:
        _ladder(100, back_edges=True).route("n0", "n100")
        stats = _last_find_stats()
        assert stats["found"] is True
        assert stats["expanded"] == 200
        assert stats["duration_ms"] < SINGLE_SEARCH_MS

    def test_cyclic_ladder_finishes_quickly(self) -> None:
        p = _ladder(150, back_edges=True)
        started = time.perf_counter()
        route = p.route("n0", "n150")
        elapsed_ms = (time.perf_counter() - started) * 1000
        assert route.weight == 300.0
        assert elapsed_ms < SINGLE_SEARCH_MS


class TestFrozenPerformance:
    def test_freezing_should_increase_performance(self) -> None:
        p = _random_forward_graph()

        started = time.perf_counter()
        for _ in range(QUERIES):
            p.query("0", str(NODES))
        regular = time.perf_counter() - started

        q = p.freeze()
        started = time.perf_counter()
        for _ in range(QUERIES):
            q.query("0", str(NODES))
        frozen = time.perf_counter() - started

        assert frozen < regular
