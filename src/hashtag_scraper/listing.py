"""On-screen listing of scraped posts."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import Any

from hashtag_scraper.models import PostListing

USERNAME_FIELD = "Username"
CAPTION_FIELD = "Caption"
IMAGE_URL_FIELD = "Image URL"
POST_URL_FIELD = "Post URL"


def _text(value: Any) -> str | None:
    # Empty values fall back to the display defaults
    if value is None or value == "":
        return None
    return str(value)


def build_listing(records: Iterable[Mapping[str, Any]]) -> list[PostListing]:
    """Build display rows from scraped records.

    Missing or empty usernames show as "N/A" and missing captions as
    "No caption". Fields other than the four display fields are ignored.

    Args:
        records: Scraped records in display order

    Returns:
        One PostListing per record
    """
    listing = []
    for record in records:
        row: dict[str, str] = {}
        for key, field_name in (
            ("username", USERNAME_FIELD),
            ("caption", CAPTION_FIELD),
            ("image_url", IMAGE_URL_FIELD),
            ("post_url", POST_URL_FIELD),
        ):
            value = _text(record.get(field_name))
            if value is not None:
                row[key] = value
        listing.append(PostListing(**row))
    return listing
