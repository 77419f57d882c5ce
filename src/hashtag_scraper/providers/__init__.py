"""Transports for reaching the remote scraping service."""

from hashtag_scraper.providers.base import ScrapeTransport, TransportError, TransportResponse
from hashtag_scraper.providers.requests_provider import RequestsTransport

__all__ = ["ScrapeTransport", "TransportError", "TransportResponse", "RequestsTransport"]
