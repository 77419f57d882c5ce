"""MCP scraping tools and business logic.

This module exposes the scrape operation as MCP tools:
- scrape_hashtag: submit a scrape and wait for the outcome
- scrape_status: read the current operation state
- export_csv: export the last successful result as CSV

The tools module follows a router -> service pattern:
- router.py: MCP tool definitions and registration
- service.py: Business logic shared with the dashboard routes
"""

from hashtag_scraper.tools.router import (
    export_csv,
    register_scraping_tools,
    scrape_hashtag,
    scrape_status,
)
from hashtag_scraper.tools.service import (
    build_request,
    current_status,
    export_current_records,
    exportable_records,
    scrape_and_wait,
    status_response,
)

__all__ = [
    # MCP tool functions
    "scrape_hashtag",
    "scrape_status",
    "export_csv",
    # Registration functions
    "register_scraping_tools",
    # Service functions
    "build_request",
    "current_status",
    "export_current_records",
    "exportable_records",
    "scrape_and_wait",
    "status_response",
]
