"""
Pytest configuration for test suite

Markers:
- unit: Fast unit tests (no external dependencies)
- integration: Tests against the live Coinbase Exchange API (requires internet)
"""

from unittest.mock import AsyncMock

import pytest

from config.settings import reset_settings
from core.interfaces.transport import BaseHttpTransport


def pytest_configure(config):
    """Register custom markers"""
    config.addinivalue_line("markers", "unit: Fast unit tests (no dependencies)")
    config.addinivalue_line(
        "markers", "integration: Tests using the live Coinbase API (requires internet)"
    )


@pytest.fixture(autouse=True)
def fresh_settings():
    """Re-read settings for every test (env vars may be patched)"""
    reset_settings()
    yield
    reset_settings()


@pytest.fixture
def mock_transport():
    """Transport double; set .get.return_value / .get.side_effect per test"""
    transport = AsyncMock(spec=BaseHttpTransport)
    return transport
