"""Client configuration: the endpoint and token one client instance talks to."""

from __future__ import annotations

import os

from pydantic import BaseModel, ConfigDict, Field, field_validator


class RedcapConfig(BaseModel):
    """Immutable settings owned by one ``RedcapClient``."""

    model_config = ConfigDict(frozen=True)

    api_url: str = Field(..., description="REDCap API endpoint, e.g. https://redcap.example.org/api/")
    api_token: str = Field(..., repr=False, description="Project API token")
    timeout: float | None = Field(default=None, gt=0, description="Request timeout in seconds")
    verify_ssl: bool = Field(default=True)

    @field_validator("api_url")
    @classmethod
    def _check_url(cls, value: str) -> str:
        value = value.strip()
        if not value.startswith(("http://", "https://")):
            raise ValueError("api_url must be an http(s) URL")
        return value

    @field_validator("api_token")
    @classmethod
    def _check_token(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("api_token must not be empty")
        return value

    @classmethod
    def from_env(cls) -> "RedcapConfig":
        """Load settings from REDCAP_API_URL, REDCAP_API_TOKEN, REDCAP_TIMEOUT, REDCAP_VERIFY_SSL."""
        timeout = os.environ.get("REDCAP_TIMEOUT") or None
        verify = os.environ.get("REDCAP_VERIFY_SSL", "true").strip().lower()
        return cls(
            api_url=os.environ.get("REDCAP_API_URL", ""),
            api_token=os.environ.get("REDCAP_API_TOKEN", ""),
            timeout=float(timeout) if timeout else None,
            verify_ssl=verify not in ("0", "false", "no"),
        )
