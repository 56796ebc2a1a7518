"""Skip guards for live tests.

Live tests talk to a real REDCap instance and skip silently when
credentials are absent; they never fail due to missing config.

Required environment variables:
  REDCAP_API_URL     API endpoint, e.g. https://redcap.example.org/api/
  REDCAP_API_TOKEN   Project API token (use a development project)

Set them in your shell before running:
  export REDCAP_API_URL=https://redcap.example.org/api/
  export REDCAP_API_TOKEN=your_token_here
  pytest tests/live -v -m live
"""

from __future__ import annotations

import os

import pytest

from redcap_client.config import RedcapConfig

skip_no_redcap = pytest.mark.skipif(
    not (os.environ.get("REDCAP_API_URL") and os.environ.get("REDCAP_API_TOKEN")),
    reason="Set REDCAP_API_URL + REDCAP_API_TOKEN to run live REDCap tests",
)


@pytest.fixture(scope="session")
def live_config() -> RedcapConfig:
    if not (os.environ.get("REDCAP_API_URL") and os.environ.get("REDCAP_API_TOKEN")):
        pytest.skip("REDCAP_API_URL and REDCAP_API_TOKEN not set")
    return RedcapConfig.from_env()
