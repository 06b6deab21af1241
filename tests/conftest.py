# tests/conftest.py

"""Shared pytest fixtures for all offer_ledger tests."""

from collections.abc import Generator
from pathlib import Path

import pytest

from src.config.settings import Settings


@pytest.fixture(autouse=True)
def isolated_paths(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch,
) -> Generator[None, None, None]:
    """Point the database and log directory at a per-test temp dir."""
    monkeypatch.setattr(Settings, "DB_PATH", tmp_path / "offers.db")
    monkeypatch.setattr(Settings, "LOGS_DIR", tmp_path / "logs")
    yield
