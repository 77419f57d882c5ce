"""Business logic shared by the MCP tools and the dashboard routes."""

from __future__ import annotations

import logging
from collections.abc import Mapping

from hashtag_scraper.admin.service import get_config
from hashtag_scraper.core.providers import get_orchestrator
from hashtag_scraper.export import (
    CSV_MEDIA_TYPE,
    ColumnPolicy,
    DirectoryDelivery,
    deliver_as_file,
    to_delimited_text,
)
from hashtag_scraper.listing import build_listing
from hashtag_scraper.models import (
    ExportResponse,
    Failed,
    InFlight,
    OperationState,
    RecordValue,
    ScrapeRequest,
    ScrapeStatusResponse,
    Succeeded,
)

logger = logging.getLogger(__name__)


def build_request(email: str, password: str, hashtag: str) -> ScrapeRequest:
    """Build a submission from raw form values.

    Values are passed through unvalidated; a leading "#" is not stripped.
    """
    return ScrapeRequest(credential_id=email, credential_secret=password, search_term=hashtag)


def status_response(state: OperationState) -> ScrapeStatusResponse:
    """Describe an operation state for tool and route responses.

    Args:
        state: State to describe

    Returns:
        ScrapeStatusResponse with the listing for succeeded states
    """
    if isinstance(state, InFlight):
        return ScrapeStatusResponse(status=state.status, search_term=state.search_term)
    if isinstance(state, Succeeded):
        return ScrapeStatusResponse(
            status=state.status,
            record_count=len(state.records),
            posts=build_listing(state.records),
        )
    if isinstance(state, Failed):
        return ScrapeStatusResponse(
            status=state.status,
            reason=state.reason.value,
            message=state.message,
        )
    return ScrapeStatusResponse(status=state.status)


def exportable_records(state: OperationState) -> tuple[Mapping[str, RecordValue], ...]:
    """Records available for export; empty unless the state succeeded."""
    if isinstance(state, Succeeded):
        return state.records
    return ()


async def scrape_and_wait(email: str, password: str, hashtag: str) -> ScrapeStatusResponse:
    """Submit a scrape and wait for it to resolve.

    Args:
        email: Account login
        password: Account password
        hashtag: Hashtag to scrape

    Returns:
        ScrapeStatusResponse for the state after resolution
    """
    orchestrator = get_orchestrator()
    state = await orchestrator.submit_and_wait(build_request(email, password, hashtag))
    return status_response(state)


def current_status() -> ScrapeStatusResponse:
    """Describe the current scrape operation."""
    return status_response(get_orchestrator().current_state())


def export_current_records(
    filename: str | None = None,
    save: bool = False,
    column_policy: ColumnPolicy | None = None,
) -> ExportResponse:
    """Export the records of the current succeeded operation as CSV.

    Args:
        filename: Export file name (default: config export_filename)
        save: Also save the file into the configured export directory
        column_policy: Column derivation policy (default: config column_policy)

    Returns:
        ExportResponse with the CSV text

    Raises:
        EmptyInputError: If there are no records to export
    """
    records = exportable_records(get_orchestrator().current_state())
    filename = filename or get_config("export_filename")
    text = to_delimited_text(records, column_policy or get_config("column_policy"))

    saved_path = None
    if save:
        delivery = DirectoryDelivery(get_config("export_dir"))
        deliver_as_file(text, filename, delivery)
        if delivery.last_path is not None:
            saved_path = str(delivery.last_path)

    return ExportResponse(
        filename=filename,
        media_type=CSV_MEDIA_TYPE,
        row_count=len(records),
        content=text,
        saved_path=saved_path,
    )
