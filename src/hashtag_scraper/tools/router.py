"""MCP tool definitions for hashtag scraping."""

from __future__ import annotations

from mcp.server.fastmcp import FastMCP

from hashtag_scraper.export import ColumnPolicy
from hashtag_scraper.models import ExportResponse, ScrapeStatusResponse
from hashtag_scraper.tools.service import (
    current_status,
    export_current_records,
    scrape_and_wait,
)


async def scrape_hashtag(email: str, password: str, hashtag: str) -> ScrapeStatusResponse:
    """Scrape recent posts for a hashtag and wait for the result.

    A new scrape replaces the result of any previous one.

    Args:
        email: Login email of the account used for scraping
        password: Password of that account
        hashtag: Hashtag to scrape, without the leading #

    Returns:
        ScrapeStatusResponse with the outcome and a listing of the posts
    """
    return await scrape_and_wait(email, password, hashtag)


async def scrape_status() -> ScrapeStatusResponse:
    """Get the state of the current scrape operation.

    Returns:
        ScrapeStatusResponse (idle, in_flight, succeeded or failed)
    """
    return current_status()


async def export_csv(
    filename: str | None = None,
    save: bool = False,
    column_policy: ColumnPolicy | None = None,
) -> ExportResponse:
    """Export the posts of the last successful scrape as CSV.

    Args:
        filename: File name for the export (default: scraped_posts.csv)
        save: Also save the file into the server's export directory (default: False)
        column_policy: "first" takes the columns from the first post,
                       "union" from all posts (default: server setting)

    Returns:
        ExportResponse with the CSV text
    """
    return export_current_records(filename, save, column_policy)


def register_scraping_tools(mcp: FastMCP) -> None:
    """Register the scraping tools on the MCP server.

    Args:
        mcp: FastMCP server instance to register tools on
    """
    mcp.tool()(scrape_hashtag)
    mcp.tool()(scrape_status)
    mcp.tool()(export_csv)
