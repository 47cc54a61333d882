"""Root conftest — shared fixtures and markers."""

from __future__ import annotations

import os

import pytest


@pytest.fixture(autouse=True)
def isolated_home(tmp_path, monkeypatch):
    """Keep config and run logs out of the real home directory."""
    monkeypatch.setattr("sbextract.config._CONFIG_FILE", tmp_path / "config.toml")
    monkeypatch.setattr("sbextract.runlog._LOG_ROOT", tmp_path / "logs")
    monkeypatch.delenv("SBEXTRACT_URL", raising=False)
    monkeypatch.delenv("SBEXTRACT_KEY", raising=False)
    return tmp_path


def pytest_configure(config):
    config.addinivalue_line("markers", "postgres: requires a running PostgreSQL server")


def pytest_collection_modifyitems(config, items):
    if os.environ.get("SBEXTRACT_TEST_POSTGRES"):
        return

    skip_pg = pytest.mark.skip(reason="Postgres not available (set SBEXTRACT_TEST_POSTGRES=1)")
    for item in items:
        if "postgres" in item.keywords:
            item.add_marker(skip_pg)
