"""Shared pytest fixtures, record models and test markers.

Test tiers
----------
  unit        Fast, fully offline. Payload builders, normalizers and the
              client with a mocked transport.

  integration Full client -> requests stack against requests-mock. No real
              network calls.

  quality     Property-based (Hypothesis) checks of the normalizers.

  live        Real REDCap instance. Skipped unless REDCAP_API_URL and
              REDCAP_API_TOKEN are set. See tests/live/conftest.py.

Run specific tiers:
  pytest tests/unit tests/integration tests/quality   # offline only
  pytest tests/live -m live                           # live only
"""

from __future__ import annotations

from datetime import date, datetime
from unittest.mock import MagicMock

import pytest

from redcap_client.api.client import RedcapClient
from redcap_client.api.transport import RedcapTransport
from redcap_client.config import RedcapConfig
from tests.fixtures.records import Demographics

API_URL = "https://redcap.example.org/api/"
API_TOKEN = "0123456789ABCDEF0123456789ABCDEF"


# ---------------------------------------------------------------------------
# Pytest markers
# ---------------------------------------------------------------------------

def pytest_configure(config):
    config.addinivalue_line("markers", "unit: fast offline unit tests")
    config.addinivalue_line("markers", "integration: mock-based integration tests")
    config.addinivalue_line("markers", "quality: property-based tests")
    config.addinivalue_line("markers", "live: requires a real REDCap instance (skipped by default)")


# ---------------------------------------------------------------------------
# Record fixtures
# ---------------------------------------------------------------------------

@pytest.fixture
def demographics() -> Demographics:
    return Demographics(
        record_id="1",
        firstName="Ada",
        lastName="Lovelace",
        dob=date(1815, 12, 10),
        enrolled_at=datetime(2024, 3, 5, 14, 30),
        consented=True,
        age=36,
    )


# ---------------------------------------------------------------------------
# Config / client fixtures
# ---------------------------------------------------------------------------

@pytest.fixture
def config() -> RedcapConfig:
    return RedcapConfig(api_url=API_URL, api_token=API_TOKEN)


@pytest.fixture
def mock_transport() -> MagicMock:
    transport = MagicMock(spec=RedcapTransport)
    transport.post.return_value = '{"count": 1}'
    return transport


@pytest.fixture
def client(config: RedcapConfig, mock_transport: MagicMock) -> RedcapClient:
    return RedcapClient(config, transport=mock_transport)


@pytest.fixture
def mock_session() -> MagicMock:
    session = MagicMock()
    response = MagicMock()
    response.ok = True
    response.status_code = 200
    response.text = "13.1.27"
    session.post.return_value = response
    return session
