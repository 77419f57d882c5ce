"""Pydantic data models for scrape submissions, state and responses.

This module defines the data structures used throughout the client:
- The outbound submission (ScrapeRequest)
- The operation state variants (Idle, InFlight, Succeeded, Failed)
- Tool and route responses (ScrapeStatusResponse, ExportResponse, PostListing)

All models use Pydantic v2 for validation and serialization.
"""

from hashtag_scraper.models.request import ScrapeRequest
from hashtag_scraper.models.responses import (
    ExportResponse,
    PostListing,
    ScrapeStatusResponse,
)
from hashtag_scraper.models.state import (
    ErrorKind,
    Failed,
    Idle,
    InFlight,
    OperationState,
    Record,
    RecordValue,
    Succeeded,
)

__all__ = [
    # Submission
    "ScrapeRequest",
    # State
    "ErrorKind",
    "Idle",
    "InFlight",
    "Succeeded",
    "Failed",
    "OperationState",
    "Record",
    "RecordValue",
    # Responses
    "PostListing",
    "ScrapeStatusResponse",
    "ExportResponse",
]
