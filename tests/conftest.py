"""Pytest configuration and fixtures for hashtag-scraper tests."""

from __future__ import annotations

import asyncio
from typing import Any

import pytest

from hashtag_scraper.admin.service import reset_config
from hashtag_scraper.auth import StaticTokenSource
from hashtag_scraper.models import ScrapeRequest
from hashtag_scraper.providers import ScrapeTransport, TransportResponse


class FakeTransport(ScrapeTransport):
    """Transport returning queued responses, optionally held until released."""

    def __init__(self, *responses: TransportResponse | Exception) -> None:
        self.responses = list(responses)
        self.calls: list[tuple[dict[str, Any], str | None]] = []
        self.gates: list[asyncio.Event] = []
        self.hold = False

    def supports_url(self, url: str) -> bool:
        return True

    async def send(self, payload: dict[str, Any], token: str | None = None) -> TransportResponse:
        self.calls.append((payload, token))
        response = self.responses.pop(0)
        if self.hold:
            gate = asyncio.Event()
            self.gates.append(gate)
            await gate.wait()
        if isinstance(response, Exception):
            raise response
        return response


@pytest.fixture(autouse=True)
def _restore_config():
    """Reset runtime config changes made by a test."""
    yield
    reset_config()


@pytest.fixture
def scrape_request() -> ScrapeRequest:
    """A submission with throwaway credentials."""
    return ScrapeRequest(
        credential_id="user@example.com",
        credential_secret="hunter2",
        search_term="sunset",
    )


@pytest.fixture
def token_source() -> StaticTokenSource:
    """Token source returning a fixed session token."""
    return StaticTokenSource("session-token")


@pytest.fixture
def sample_body() -> str:
    """Successful response body as returned by the scraping service."""
    return """[
        {"Username": "alice", "Caption": "Golden hour, again", "Image URL": "https://cdn.example.com/1.jpg", "Post URL": "https://social.example.com/p/1"},
        {"Username": "bob", "Caption": "", "Image URL": "https://cdn.example.com/2.jpg", "Post URL": "https://social.example.com/p/2"}
    ]"""


@pytest.fixture
def sample_records() -> list[dict[str, Any]]:
    """Records with uneven field sets."""
    return [
        {"Username": "alice", "Caption": "Hello, \"world\"", "Likes": 12},
        {"Username": "bob", "Likes": None, "Location": "Lisbon"},
    ]


def ok(text: str, status_code: int = 200) -> TransportResponse:
    """Build a transport response."""
    return TransportResponse(status_code=status_code, text=text)
