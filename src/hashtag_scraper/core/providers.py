"""Default transport, token source and orchestrator for the server."""

from __future__ import annotations

from hashtag_scraper.auth import TokenSource, token_source_from_env
from hashtag_scraper.orchestrator import RequestOrchestrator
from hashtag_scraper.providers import RequestsTransport, ScrapeTransport

# Initialize default collaborators
# These are shared by the MCP tools and the dashboard routes
default_transport: ScrapeTransport = RequestsTransport()
default_token_source: TokenSource = token_source_from_env()
default_orchestrator = RequestOrchestrator(default_transport, default_token_source)


def get_orchestrator() -> RequestOrchestrator:
    """Get the orchestrator holding the current scrape operation.

    Returns:
        The shared RequestOrchestrator instance
    """
    return default_orchestrator
