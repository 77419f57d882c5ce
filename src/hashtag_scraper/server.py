"""MCP server for the hashtag scraper client."""

from __future__ import annotations

import os

from mcp.server.fastmcp import FastMCP

from hashtag_scraper.admin.router import (
    api_config_get,
    api_config_update,
    api_stats,
    health_check,
)
from hashtag_scraper.dashboard.router import (
    api_export,
    api_scrape_status,
    api_scrape_submit,
    dashboard,
)
from hashtag_scraper.tools.router import register_scraping_tools

# Create MCP server with stateless mode enabled
# Stateless mode auto-creates sessions for unknown session IDs
mcp = FastMCP(
    "Hashtag Scraper",
    instructions=(
        "Scrapes recent posts for a social media hashtag through a remote scraping "
        "service. Run scrape_hashtag, check scrape_status, and export the posts "
        "of the last successful scrape with export_csv."
    ),
    stateless_http=True,
)

register_scraping_tools(mcp)

mcp.custom_route("/", methods=["GET"])(dashboard)
mcp.custom_route("/api/scrape", methods=["POST"])(api_scrape_submit)
mcp.custom_route("/api/scrape", methods=["GET"])(api_scrape_status)
mcp.custom_route("/api/export", methods=["GET"])(api_export)
mcp.custom_route("/healthz", methods=["GET"])(health_check)
mcp.custom_route("/api/stats", methods=["GET"])(api_stats)
mcp.custom_route("/api/config", methods=["GET"])(api_config_get)
mcp.custom_route("/api/config", methods=["POST"])(api_config_update)


def run_server(transport: str = "streamable-http", host: str = "0.0.0.0", port: int = 8000) -> None:
    """Run the MCP server.

    Args:
        transport: Transport type ('streamable-http', 'sse' or 'stdio')
        host: Host to bind to (default: 0.0.0.0)
        port: Port to bind to (default: 8000)
    """
    # Configure host, port and log level via settings
    mcp.settings.host = host
    mcp.settings.port = port
    mcp.settings.log_level = os.getenv("LOG_LEVEL", "INFO").upper()

    mcp.run(transport=transport)


if __name__ == "__main__":
    run_server()
