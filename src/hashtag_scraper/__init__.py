"""Client for a remote hashtag scraping service with CSV export."""

__version__ = "0.1.0"
