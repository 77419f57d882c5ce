"""Operational routes: liveness, submission stats and runtime config."""

import json

from starlette.requests import Request
from starlette.responses import JSONResponse

from hashtag_scraper.admin.service import (
    get_current_config,
    get_stats,
    update_config,
)


def _bad_request(message: str) -> JSONResponse:
    return JSONResponse({"status": "error", "message": message}, status_code=400)


async def health_check(request: Request) -> JSONResponse:
    """Liveness check for container orchestration."""
    return JSONResponse({"status": "healthy"})


async def api_stats(request: Request) -> JSONResponse:
    """Report uptime, submission counters and recent errors.

    Returns:
        JSONResponse with the metrics snapshot
    """
    return JSONResponse(get_stats())


async def api_config_get(request: Request) -> JSONResponse:
    """Report the runtime config next to its env-derived defaults."""
    return JSONResponse(get_current_config())


async def api_config_update(request: Request) -> JSONResponse:
    """Apply runtime config changes.

    Expects a body of the form ``{"config": {"key": value, ...}}``. Unknown
    keys and invalid values are skipped by update_config.

    Returns:
        JSONResponse with the keys that were applied, or 400 for a body that
        is not a JSON object with an object under "config"
    """
    try:
        body = await request.json()
    except json.JSONDecodeError:
        return _bad_request("Request body must be JSON")
    if not isinstance(body, dict):
        return _bad_request("Request body must be a JSON object")

    updates = body.get("config", {})
    if not isinstance(updates, dict):
        return _bad_request('"config" must be a JSON object')

    return JSONResponse(update_config(updates))
