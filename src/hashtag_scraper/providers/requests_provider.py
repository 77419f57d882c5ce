"""Scraping service transport using the Python requests library."""

from __future__ import annotations

import asyncio
import logging
from typing import Any
from urllib.parse import urlparse

import requests

from hashtag_scraper.admin.service import get_config
from hashtag_scraper.providers.base import ScrapeTransport, TransportError, TransportResponse

logger = logging.getLogger(__name__)


class RequestsTransport(ScrapeTransport):
    """Transport that POSTs scrape requests with requests, one attempt per call.

    Settings left as None are read from the runtime config on every call, so
    config updates apply to the next submission.
    """

    def __init__(
        self,
        endpoint_url: str | None = None,
        timeout: float | None = None,
        token_header: str | None = None,
        verify_ssl: bool | None = None,
    ) -> None:
        """Initialize the requests transport.

        Args:
            endpoint_url: URL of the scraping endpoint (default: config endpoint_url)
            timeout: Request timeout in seconds, 0 for none (default: config request_timeout)
            token_header: Header carrying the access token (default: config token_header)
            verify_ssl: Verify TLS certificates (default: config verify_ssl)
        """
        self.endpoint_url = endpoint_url
        self.timeout = timeout
        self.token_header = token_header
        self.verify_ssl = verify_ssl

        self.session = requests.Session()

    def supports_url(self, url: str) -> bool:
        """Check if this transport supports the given URL.

        Args:
            url: The URL to check

        Returns:
            True if the URL uses http or https scheme
        """
        try:
            parsed = urlparse(url)
            return parsed.scheme in ("http", "https") and bool(parsed.netloc)
        except ValueError:
            return False

    def _resolve(self, value: Any, key: str) -> Any:
        return value if value is not None else get_config(key)

    async def send(self, payload: dict[str, Any], token: str | None = None) -> TransportResponse:
        """POST the payload to the scraping endpoint.

        Args:
            payload: JSON body of the request
            token: Access token placed in the token header when present

        Returns:
            TransportResponse for any response obtained, whatever its status

        Raises:
            TransportError: On connection errors, timeouts and invalid URLs
        """
        url = self._resolve(self.endpoint_url, "endpoint_url")
        timeout = self._resolve(self.timeout, "request_timeout") or None
        verify = self._resolve(self.verify_ssl, "verify_ssl")
        token_header = self._resolve(self.token_header, "token_header")

        if not self.supports_url(url):
            raise TransportError(f"Unsupported endpoint URL: {url}")

        headers = {"Content-Type": "application/json"}
        if token is not None:
            headers[token_header] = token
        else:
            logger.warning("No access token available, sending request without one")

        try:
            # Run requests in thread pool to avoid blocking
            loop = asyncio.get_event_loop()
            response = await loop.run_in_executor(
                None,
                lambda: self.session.post(
                    url, json=payload, headers=headers, timeout=timeout, verify=verify
                ),
            )
        except requests.RequestException as e:
            logger.warning(f"Request to {url} failed: {type(e).__name__}: {e}")
            raise TransportError(f"{type(e).__name__}: {e}") from e

        logger.debug(f"Scraping service responded with HTTP {response.status_code}")

        return TransportResponse(
            status_code=response.status_code,
            text=response.text,
            elapsed_ms=response.elapsed.total_seconds() * 1000,
        )
