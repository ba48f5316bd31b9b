"""Tests for structlog configuration."""

from __future__ import annotations

import json
import logging

import pytest
import structlog

from namebingo.config.logging import configure_logging


class TestConfigureLogging:
    def test_verbose_enables_debug(self) -> None:
        configure_logging(verbose=True)
        assert logging.getLogger("namebingo").level == logging.DEBUG
        assert logging.getLogger().level == logging.WARNING

    def test_non_verbose_sets_warning(self) -> None:
        configure_logging(verbose=False)
        assert logging.getLogger("namebingo").level == logging.WARNING

    def test_json_mode_output(self, capfd: pytest.CaptureFixture[str]) -> None:
        configure_logging(verbose=True, log_json=True)
        structlog.get_logger("namebingo.test").warning("json test", cells=25)
        captured = capfd.readouterr()
        assert captured.out == ""
        parsed = json.loads(captured.err.strip())
        assert parsed["event"] == "json test"
        assert parsed["cells"] == 25
        assert parsed["level"] == "warning"
        assert parsed["logger"] == "namebingo.test"
        assert "timestamp" in parsed

    def test_stdlib_logger_gets_structured_fields(
        self, capfd: pytest.CaptureFixture[str]
    ) -> None:
        configure_logging(verbose=True, log_json=True)
        logging.getLogger("namebingo.infrastructure.sources").debug("Read 9 names")
        parsed = json.loads(capfd.readouterr().err.strip())
        assert parsed["event"] == "Read 9 names"
        assert parsed["level"] == "debug"

    def test_uvicorn_access_log_suppressed(self, capfd: pytest.CaptureFixture[str]) -> None:
        configure_logging(verbose=True, log_json=True)
        logging.getLogger("uvicorn.access").info("GET / 200")
        assert capfd.readouterr().err == ""

    def test_idempotent_calls(self) -> None:
        configure_logging(verbose=True)
        configure_logging(verbose=True, log_json=True)
        assert len(logging.getLogger().handlers) == 1
