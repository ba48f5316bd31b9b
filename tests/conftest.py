"""Shared pytest fixtures and test helpers for namebingo tests."""

from __future__ import annotations

import logging
import os
import random
from collections.abc import Generator
from pathlib import Path

import pytest
from click.testing import CliRunner

from namebingo.services.telemetry import disable_telemetry

NAMES = ["Alice", "Bob", "Carol", "Dave", "Erin", "Frank", "Grace", "Heidi", "Ivan"]


@pytest.fixture(autouse=True)
def _clean_environment(monkeypatch: pytest.MonkeyPatch) -> Generator[None]:
    """Drop NAMEBINGO_* env vars and restore global logging/telemetry state."""
    for key in list(os.environ):
        if key.startswith("NAMEBINGO_"):
            monkeypatch.delenv(key)
    root = logging.getLogger()
    package = logging.getLogger("namebingo")
    handlers, level, package_level = root.handlers[:], root.level, package.level
    yield
    root.handlers = handlers
    root.setLevel(level)
    package.setLevel(package_level)
    disable_telemetry()


@pytest.fixture
def cli_runner() -> CliRunner:
    """Provide a Click CLI test runner."""
    return CliRunner()


@pytest.fixture
def project(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Empty project directory used as the CWD."""
    monkeypatch.chdir(tmp_path)
    return tmp_path


@pytest.fixture
def names_file(project: Path) -> Path:
    """``names.txt`` in the project with the nine standard names."""
    path = project / "names.txt"
    path.write_text("\n".join(NAMES) + "\n", encoding="utf-8")
    return path


@pytest.fixture
def rng() -> random.Random:
    """Deterministic random source."""
    return random.Random(1234)
