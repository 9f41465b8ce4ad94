"""Pytest fixtures for ordo tests."""

import pytest


@pytest.fixture(autouse=True)
def isolated_config(tmp_path, monkeypatch):
    """Point config at an empty dir and clear the cache around each test."""
    from ordo.config import clear_config_cache

    monkeypatch.setenv("ORDO_CONFIG_DIR", str(tmp_path / "ordo-config"))
    for key in ("PAGE_SIZE", "LOOP", "HELP_MODE", "OUTPUT_FORMAT"):
        monkeypatch.delenv(f"ORDO_{key}", raising=False)
    clear_config_cache()

    yield

    clear_config_cache()
