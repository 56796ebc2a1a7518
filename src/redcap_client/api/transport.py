"""HTTP transport: POST one form-encoded payload to the REDCap API endpoint."""

from __future__ import annotations

import logging
from collections.abc import Mapping

import requests

from ..config import RedcapConfig

logger = logging.getLogger(__name__)


class RedcapTransport:
    """Sends payloads to the single REDCap API endpoint and returns the body text."""

    def __init__(
        self,
        config: RedcapConfig,
        session: requests.Session | None = None,
    ) -> None:
        self.config = config
        self._session = session

    def post(self, payload: Mapping[str, str]) -> str:
        """POST ``payload`` as ``application/x-www-form-urlencoded``.

        The body is returned verbatim whatever the status code, since REDCap
        reports API errors in the body. Network errors propagate as
        ``requests.RequestException``.
        """
        if self._session is not None:
            return self._send(self._session, payload)
        with requests.Session() as session:
            return self._send(session, payload)

    def _send(self, session: requests.Session, payload: Mapping[str, str]) -> str:
        response = session.post(
            self.config.api_url,
            data=dict(payload),
            headers={"Accept": "*/*"},
            timeout=self.config.timeout,
            verify=self.config.verify_ssl,
        )
        if not response.ok:
            logger.warning(
                "REDCap returned HTTP %s for content=%s: %s",
                response.status_code,
                payload.get("content"),
                response.text[:200],
            )
        return response.text
