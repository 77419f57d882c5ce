"""Pydantic models returned by the MCP tools and HTTP routes."""

from __future__ import annotations

from pydantic import BaseModel, Field


class PostListing(BaseModel):
    """Display row for one scraped post."""

    username: str = Field(default="N/A", description="Author of the post")
    caption: str = Field(default="No caption", description="Post caption")
    image_url: str | None = Field(default=None, description="Link to the post image")
    post_url: str | None = Field(default=None, description="Link to the post")


class ScrapeStatusResponse(BaseModel):
    """Response model describing the current scrape operation."""

    status: str = Field(description="idle, in_flight, succeeded or failed")
    search_term: str | None = Field(default=None, description="Hashtag being scraped")
    reason: str | None = Field(default=None, description="Error kind if failed")
    message: str | None = Field(default=None, description="Error message if failed")
    record_count: int = Field(default=0, description="Number of records scraped")
    posts: list[PostListing] = Field(
        default_factory=list, description="Listing of the scraped posts"
    )


class ExportResponse(BaseModel):
    """Response model for CSV export operations."""

    filename: str = Field(description="Name of the exported file")
    media_type: str = Field(description="MIME type of the exported file")
    row_count: int = Field(description="Number of data rows in the export")
    content: str = Field(description="CSV text")
    saved_path: str | None = Field(
        default=None, description="Where the file was saved, if requested"
    )
