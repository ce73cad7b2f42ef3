# tests/conftest.py

"""Shared pytest fixtures for all listing_matcher tests."""

from collections.abc import Generator
from pathlib import Path

import pytest

from src.config.settings import Settings


@pytest.fixture(autouse=True)
def isolated_results_dir(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> Generator[Path, None, None]:
    """Point RESULTS_DIR at a temp directory so tests never write results/."""
    results_dir = tmp_path / "results"
    monkeypatch.setattr(Settings, "RESULTS_DIR", results_dir)
    yield results_dir
