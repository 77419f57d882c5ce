"""Core infrastructure shared by the MCP tools and the dashboard.

This module provides the single source of truth for the transport, the
token source and the orchestrator holding the current scrape operation.
"""

from hashtag_scraper.core.providers import (
    default_orchestrator,
    default_token_source,
    default_transport,
    get_orchestrator,
)

__all__ = [
    "default_orchestrator",
    "default_token_source",
    "default_transport",
    "get_orchestrator",
]
