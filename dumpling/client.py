# =============================================================================
# dumpling/client.py  —  Request Forwarder for the Dumpling AI API
# =============================================================================
#
# WHAT THIS MODULE DOES:
#   Sends ONE POST request per tool call to the Dumpling API and hands back
#   the parsed JSON.  Every tool goes through DumplingClient.post(); none of
#   them talk HTTP on their own.
#
# THE CONTRACT (in order):
#   1. Resolve the API key               → AuthError if missing (no network)
#   2. POST base_url + path, JSON body   → NetworkError on transport failure
#   3. Non-2xx status                    → UpstreamError(status, body text)
#   4. 2xx but body is not JSON          → UpstreamError
#   5. Otherwise return the decoded JSON
#
# WHAT IT DELIBERATELY DOES NOT DO:
#   No retries, no backoff, no caching.  A fresh httpx.AsyncClient is opened
#   per call and closed when the call ends, so nothing is shared between
#   concurrent tool invocations and a cancelled call closes its connection.
# =============================================================================

import logging
from typing import Any, Optional

import httpx

from dumpling.config import Settings
from dumpling.errors import NetworkError, UpstreamError
from dumpling.models import OutboundRequest


logger = logging.getLogger(__name__)


class DumplingClient:
    """Async forwarder for Dumpling API calls.

    Args:
        settings: Process configuration (base URL, timeout, key variable).
        transport: Optional httpx transport.  Tests pass an
            httpx.MockTransport here to stand in for the real API.
    """

    def __init__(self, settings: Settings, transport: Optional[httpx.AsyncBaseTransport] = None):
        self.settings = settings
        self._transport = transport

    def _headers(self, api_key: str) -> dict[str, str]:
        return {
            "Content-Type": "application/json",
            "Authorization": f"Bearer {api_key}",
        }

    async def post(self, request: OutboundRequest, action: str) -> Any:
        """Forward a request and return the decoded JSON response.

        Args:
            request: Path and body to send.
            action: Short phrase used in error messages, e.g. "perform search"
                → "Failed to perform search: 500 server error".

        Raises:
            AuthError: the API key is not set.
            NetworkError: no HTTP response was received.
            UpstreamError: the response was not a 2xx JSON document.
        """
        api_key = self.settings.resolve_api_key()
        url = f"{self.settings.base_url}{request.path}"
        logger.debug("POST %s (%d body fields)", url, len(request.body))

        try:
            async with httpx.AsyncClient(
                timeout=httpx.Timeout(self.settings.timeout),
                transport=self._transport,
            ) as http:
                response = await http.post(url, json=request.body, headers=self._headers(api_key))
        except httpx.HTTPError as exc:
            raise NetworkError(action, exc) from exc

        if not response.is_success:
            raise UpstreamError(action, response.status_code, response.text)

        try:
            return response.json()
        except ValueError:
            raise UpstreamError(
                action, response.status_code, f"response is not valid JSON: {response.text}"
            ) from None
