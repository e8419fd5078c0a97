"""
Root conftest.py for svc-store tests.

Provides marker registration, automatic marking by folder, and a couple of
fixtures shared across the storage and document tests.
"""

from __future__ import annotations

import logging

import pytest


# =============================================================================
# PYTEST CONFIGURATION
# =============================================================================


def pytest_collection_modifyitems(config, items):
    """Mark tests by folder so `-m storage` / `-m nosql` / `-m security` select them."""
    for item in items:
        norm = str(item.fspath).replace("\\", "/")
        if "/tests/unit/storage/" in norm:
            item.add_marker(pytest.mark.storage)
        if "/tests/unit/db/" in norm:
            item.add_marker(pytest.mark.nosql)
        if "/tests/unit/auth/" in norm:
            item.add_marker(pytest.mark.security)


def pytest_configure(config):
    # Ensure custom markers are registered even if pyproject.toml isn't picked up in some contexts
    for name, desc in [
        ("storage", "File ingestion and storage tests"),
        ("nosql", "Document store tests"),
        ("security", "Token and auth tests"),
    ]:
        config.addinivalue_line("markers", f"{name}: {desc}")


# =============================================================================
# SHARED FIXTURES
# =============================================================================


@pytest.fixture
def upload_dir(tmp_path):
    """An empty directory acting as the storage location."""
    d = tmp_path / "uploads"
    d.mkdir()
    return d


@pytest.fixture
def quiet_logging():
    """Silence svc_store loggers for tests that provoke expected warnings."""
    logger = logging.getLogger("svc_store")
    previous = logger.level
    logger.setLevel(logging.CRITICAL)
    yield
    logger.setLevel(previous)
