"""Dashboard routes: the scraper page and the endpoints it calls."""

from __future__ import annotations

import json
import logging
from pathlib import Path

from starlette.requests import Request
from starlette.responses import HTMLResponse, JSONResponse, Response

from hashtag_scraper.admin.service import get_config
from hashtag_scraper.core.providers import get_orchestrator
from hashtag_scraper.export import EmptyInputError, build_artifact, to_delimited_text
from hashtag_scraper.tools.service import build_request, exportable_records, status_response

logger = logging.getLogger(__name__)

# Setup template directory
TEMPLATES_DIR = Path(__file__).parent / "templates"


async def dashboard(request: Request) -> HTMLResponse:
    """Serve the scraper page.

    Returns:
        HTMLResponse with the dashboard UI
    """
    template_path = TEMPLATES_DIR / "dashboard.html"
    html_content = template_path.read_text(encoding="utf-8")
    return HTMLResponse(content=html_content)


async def api_scrape_submit(request: Request) -> JSONResponse:
    """Start a scrape from the form values.

    Missing form fields are submitted as empty strings.

    Returns:
        JSONResponse (202) with the in-flight status
    """
    try:
        body = await request.json()
    except json.JSONDecodeError:
        return JSONResponse(
            {"status": "error", "message": "Request body must be JSON"},
            status_code=400,
        )
    if not isinstance(body, dict):
        return JSONResponse(
            {"status": "error", "message": "Request body must be a JSON object"},
            status_code=400,
        )

    scrape_request = build_request(
        str(body.get("email", "")),
        str(body.get("password", "")),
        str(body.get("hashtag", "")),
    )
    orchestrator = get_orchestrator()
    orchestrator.submit(scrape_request)
    return JSONResponse(
        status_response(orchestrator.current_state()).model_dump(),
        status_code=202,
    )


async def api_scrape_status(request: Request) -> JSONResponse:
    """Get the current scrape state with the post listing.

    Returns:
        JSONResponse with the status payload
    """
    state = get_orchestrator().current_state()
    return JSONResponse(status_response(state).model_dump())


async def api_export(request: Request) -> Response:
    """Download the last successful result as a CSV file.

    Returns:
        CSV attachment, or JSONResponse (409) when there is nothing to export
    """
    records = exportable_records(get_orchestrator().current_state())
    try:
        text = to_delimited_text(records, get_config("column_policy"))
    except EmptyInputError as e:
        return JSONResponse(
            {"status": "error", "reason": e.kind.value, "message": str(e)},
            status_code=409,
        )

    artifact = build_artifact(text, get_config("export_filename"))
    logger.info(f"Serving {artifact.filename} with {len(records)} row(s)")
    return Response(
        content=artifact.content,
        media_type=artifact.media_type,
        headers={"Content-Disposition": artifact.content_disposition},
    )
