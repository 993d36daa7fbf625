"""
Smoke-test fixtures.

Provides the ``smoke_base_url`` session-scoped fixture pointing at a
running Tasklist server (``TEST_BASE_URL``).  When nothing answers on
that URL the whole smoke suite is skipped rather than failed, so the
suite can sit alongside the in-process tests.
"""

from __future__ import annotations

import os

import pytest
import requests


@pytest.fixture(scope="session")
def smoke_base_url() -> str:
    """Return the base URL of a live server, or skip the smoke suite."""
    base_url = os.getenv("TEST_BASE_URL", "http://localhost:5000").rstrip("/")
    try:
        requests.get(f"{base_url}/api/health", timeout=2)
    except requests.RequestException:
        pytest.skip(f"No Tasklist server reachable at {base_url}")
    return base_url
