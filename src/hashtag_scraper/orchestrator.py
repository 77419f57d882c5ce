"""Lifecycle of the outstanding scrape operation."""

from __future__ import annotations

import asyncio
import json
import logging
import threading
import time

from pydantic import ValidationError

from hashtag_scraper.auth import TokenSource, TokenUnavailableError
from hashtag_scraper.metrics import record_submission
from hashtag_scraper.models import (
    ErrorKind,
    Failed,
    Idle,
    InFlight,
    OperationState,
    ScrapeRequest,
    Succeeded,
)
from hashtag_scraper.providers import ScrapeTransport, TransportError, TransportResponse

logger = logging.getLogger(__name__)

TRANSPORT_MESSAGE = "Could not reach the scraping service."
TOKEN_MESSAGE = "Could not read the access token."
MALFORMED_MESSAGE = "The scraping service returned an unreadable response."

_UNPARSEABLE = object()


def classify_response(response: TransportResponse) -> Succeeded | Failed:
    """Turn a response from the scraping service into a terminal state.

    An ``error`` field in a JSON object wins over the status code. Otherwise a
    non-2xx status is a rejection, and a 2xx body must be a JSON array of
    objects with scalar values.

    Args:
        response: Response obtained from the transport

    Returns:
        Succeeded with the records in received order, or Failed
    """
    try:
        data = json.loads(response.text)
    except (ValueError, RecursionError):
        data = _UNPARSEABLE

    if isinstance(data, dict) and data.get("error"):
        return Failed(
            reason=ErrorKind.APPLICATION_ERROR,
            message=str(data["error"]),
            status_code=response.status_code,
        )

    if not response.ok:
        return Failed(
            reason=ErrorKind.REMOTE_REJECTED,
            message=f"Scraping service rejected the request (HTTP {response.status_code}).",
            status_code=response.status_code,
        )

    if not isinstance(data, list) or not all(isinstance(item, dict) for item in data):
        return Failed(reason=ErrorKind.MALFORMED_RESPONSE, message=MALFORMED_MESSAGE)

    try:
        return Succeeded(records=tuple(data))
    except ValidationError as e:
        logger.warning(f"Records failed validation: {e.error_count()} error(s)")
        return Failed(reason=ErrorKind.MALFORMED_RESPONSE, message=MALFORMED_MESSAGE)


class RequestOrchestrator:
    """Owns the single OperationState cell and the submissions that write it.

    Every submission bumps a generation counter. A resolution is applied only
    if its generation is still the latest, so a slow superseded response can
    never overwrite a newer state.
    """

    def __init__(self, transport: ScrapeTransport, token_source: TokenSource) -> None:
        self._transport = transport
        self._token_source = token_source
        self._lock = threading.Lock()
        self._state: OperationState = Idle()
        self._generation = 0
        self._tasks: set[asyncio.Task[None]] = set()

    @property
    def generation(self) -> int:
        """Number of submissions made so far."""
        with self._lock:
            return self._generation

    def current_state(self) -> OperationState:
        """Return the latest state; safe to call at any time."""
        with self._lock:
            return self._state

    def submit(self, request: ScrapeRequest) -> asyncio.Task[None]:
        """Start a scrape operation, replacing any previous result.

        The state is InFlight when this returns. The outbound call runs as a
        task on the running event loop; awaiting the returned task is optional.

        Args:
            request: Credentials and search term for this submission

        Returns:
            The task resolving the submission

        Raises:
            RuntimeError: If called without a running event loop
        """
        loop = asyncio.get_running_loop()

        with self._lock:
            self._generation += 1
            generation = self._generation
            self._state = InFlight(search_term=request.search_term)

        logger.info(f"Submitting scrape for #{request.search_term} (generation {generation})")

        task = loop.create_task(self._run(generation, request))
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)
        return task

    async def submit_and_wait(self, request: ScrapeRequest) -> OperationState:
        """Submit and wait for the submission to resolve.

        Returns:
            The current state after resolution, which reflects a newer
            submission if one was made in the meantime
        """
        await self.submit(request)
        return self.current_state()

    async def _run(self, generation: int, request: ScrapeRequest) -> None:
        started = time.perf_counter()
        status_code = None
        response: TransportResponse | None = None

        try:
            token = self._token_source.get_token()
            response = await self._transport.send(request.to_payload(), token)
        except TokenUnavailableError as e:
            logger.error(f"Access token unavailable: {e}")
            outcome: Succeeded | Failed = Failed(reason=ErrorKind.TRANSPORT, message=TOKEN_MESSAGE)
        except TransportError as e:
            logger.error(f"Scrape for #{request.search_term} failed in transport: {e}")
            outcome = Failed(reason=ErrorKind.TRANSPORT, message=TRANSPORT_MESSAGE)
        except Exception:
            logger.exception(f"Unexpected error while scraping #{request.search_term}")
            outcome = Failed(reason=ErrorKind.TRANSPORT, message=TRANSPORT_MESSAGE)
        else:
            status_code = response.status_code
            try:
                outcome = classify_response(response)
            except Exception:
                logger.exception(f"Could not classify the response for #{request.search_term}")
                outcome = Failed(
                    reason=ErrorKind.MALFORMED_RESPONSE,
                    message=MALFORMED_MESSAGE,
                    status_code=status_code,
                )

        if response is not None and response.elapsed_ms is not None:
            elapsed_ms = response.elapsed_ms
        else:
            elapsed_ms = (time.perf_counter() - started) * 1000
        applied = self._resolve(generation, outcome)

        record_submission(
            search_term=request.search_term,
            success=isinstance(outcome, Succeeded),
            status_code=status_code,
            elapsed_ms=round(elapsed_ms, 2),
            record_count=len(outcome.records) if isinstance(outcome, Succeeded) else 0,
            error_kind=outcome.reason.value if isinstance(outcome, Failed) else None,
            superseded=not applied,
        )

    def _resolve(self, generation: int, outcome: Succeeded | Failed) -> bool:
        with self._lock:
            if generation != self._generation:
                stale = True
            else:
                stale = False
                self._state = outcome

        if stale:
            logger.debug(f"Discarding result of superseded submission {generation}")
        elif isinstance(outcome, Succeeded):
            logger.info(f"Scrape succeeded with {len(outcome.records)} record(s)")
        else:
            logger.warning(f"Scrape failed ({outcome.reason.value}): {outcome.message}")
        return not stale
