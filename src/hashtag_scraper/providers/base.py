"""Base transport interface for the remote scraping service."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any


class TransportError(Exception):
    """Raised when no response could be obtained from the remote service."""


@dataclass
class TransportResponse:
    """Raw response obtained from the remote scraping service."""

    status_code: int
    text: str
    elapsed_ms: float | None = None

    @property
    def ok(self) -> bool:
        """Whether the status code is in the 2xx range."""
        return 200 <= self.status_code < 300


class ScrapeTransport(ABC):
    """Abstract base class for transports that reach the scraping service."""

    @abstractmethod
    async def send(self, payload: dict[str, Any], token: str | None = None) -> TransportResponse:
        """Send one scrape request to the remote service.

        Args:
            payload: JSON body of the request
            token: Access token to attach, or None to send without one

        Returns:
            TransportResponse for any response obtained, whatever its status

        Raises:
            TransportError: If no response could be obtained
        """
        pass

    @abstractmethod
    def supports_url(self, url: str) -> bool:
        """Check if this transport can reach the given endpoint.

        Args:
            url: The endpoint URL to check

        Returns:
            True if this transport can handle the URL
        """
        pass
