"""Web page for running scrapes from a browser.

The dashboard is served at the root endpoint (/) and provides:
- A form for the account credentials and the hashtag
- The state of the current scrape and a listing of the scraped posts
- A download button for the CSV export

The page is a single HTML file with embedded CSS and JavaScript from the
templates/ directory. It talks to the JSON routes defined in router.py.
"""

from hashtag_scraper.dashboard.router import (
    api_export,
    api_scrape_status,
    api_scrape_submit,
    dashboard,
)

__all__ = [
    "dashboard",
    "api_scrape_submit",
    "api_scrape_status",
    "api_export",
]
