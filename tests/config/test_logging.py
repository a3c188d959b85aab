"""Tests for structlog configuration."""

from __future__ import annotations

import json
import logging
from collections.abc import Generator

import pytest
import structlog

from paph.config.logging import configure_logging
from paph.config.settings import PaphSettings


@pytest.fixture(autouse=True)
def _restore_logging() -> Generator[None]:
    """Restore root logger and structlog state after each test."""
    root = logging.getLogger()
    original_handlers = root.handlers[:]
    original_level = root.level
    paph_logger = logging.getLogger("paph")
    paph_level = paph_logger.level
    yield
    root.handlers = original_handlers
    root.setLevel(original_level)
    paph_logger.setLevel(paph_level)
    structlog.reset_defaults()


class TestConfigureLogging:
    def test_verbose_enables_debug(self) -> None:
        configure_logging(verbose=True, log_json=False)
        assert logging.getLogger("paph").level == logging.DEBUG
        assert logging.getLogger().level == logging.WARNING

    def test_non_verbose_sets_warning(self) -> None:
        configure_logging(verbose=False, log_json=False)
        assert logging.getLogger("paph").level == logging.WARNING

    def test_human_mode_output(self) -> None:
        configure_logging(verbose=True, log_json=False)
        log = structlog.get_logger("paph.test")
        log.warning("hello world", key="val")
        # Smoke test: format depends on terminal

    def test_json_mode_output(self, capfd: pytest.CaptureFixture[str]) -> None:
        configure_logging(verbose=True, log_json=True)
        log = structlog.get_logger("paph.test")
        log.warning("json test", answer=42)
        captured = capfd.readouterr()
        parsed = json.loads(captured.err.strip())
        assert parsed["event"] == "json test"
        assert parsed["answer"] == 42
        assert parsed["level"] == "warning"
        assert parsed["logger"] == "paph.test"
        assert "timestamp" in parsed

    def test_stdlib_paph_logger_gets_structured_fields(
        self, capfd: pytest.CaptureFixture[str]
    ) -> None:
        configure_logging(verbose=True, log_json=True)

        logging.getLogger("paph.services.pathfinder").debug("Search a -> b: no route")

        captured = capfd.readouterr()
        parsed = json.loads(captured.err.strip())
        assert parsed["event"] == "Search a -> b: no route"
        assert parsed["level"] == "debug"
        assert parsed["logger"] == "paph.services.pathfinder"

    def test_debug_suppressed_when_not_verbose(self, capfd: pytest.CaptureFixture[str]) -> None:
        configure_logging(verbose=False, log_json=True)

        logging.getLogger("paph.services.query").debug("noise")

        captured = capfd.readouterr()
        assert captured.err == ""

    def test_settings_select_json_and_level(self, capfd: pytest.CaptureFixture[str]) -> None:
        configure_logging(PaphSettings.load(verbose=True, log_json=True))
        assert logging.getLogger("paph").level == logging.DEBUG

        logging.getLogger("paph.services.cache").debug("cache cleared")

        parsed = json.loads(capfd.readouterr().err.strip())
        assert parsed["event"] == "cache cleared"

    def test_explicit_flags_override_settings(self) -> None:
        configure_logging(PaphSettings.load(verbose=True, log_json=True), verbose=False)
        assert logging.getLogger("paph").level == logging.WARNING

    def test_defaults_come_from_environment(
        self, monkeypatch: pytest.MonkeyPatch, capfd: pytest.CaptureFixture[str]
    ) -> None:
        monkeypatch.setenv("PAPH_VERBOSE", "true")
        monkeypatch.setenv("PAPH_LOG_JSON", "true")
        configure_logging()
        assert logging.getLogger("paph").level == logging.DEBUG

        logging.getLogger("paph.graph").debug("Forking")

        parsed = json.loads(capfd.readouterr().err.strip())
        assert parsed["logger"] == "paph.graph"

    def test_defaults_without_configuration(self) -> None:
        configure_logging()
        assert logging.getLogger("paph").level == logging.WARNING

    def test_idempotent_calls(self) -> None:
        """Multiple configure_logging calls don't stack handlers."""
        configure_logging(verbose=True, log_json=False)
        configure_logging(verbose=True, log_json=True)
        root = logging.getLogger()
        assert len(root.handlers) == 1
