"""Minimal async client for the fal.ai inference API.

fal.ai exposes each hosted model in two ways:

Synchronous
    ``POST https://fal.run/{endpoint_id}`` blocks until the model finishes
    and returns the result document directly.

Queue
    ``POST https://queue.fal.run/{endpoint_id}`` returns a ``request_id``
    (plus ``status_url`` / ``response_url``).  The caller then polls the
    status URL until it reports ``COMPLETED`` or ``FAILED`` and finally
    fetches the result from the response URL.

:meth:`FalClient.subscribe` implements the queue flow as a bounded poll
loop: a fixed delay before every status check and a fixed number of checks
(1 s x 120 by default, i.e. two minutes).  There is no backoff and no
cancellation of the remote job on timeout.

All requests carry ``Authorization: Key <FAL_KEY>``.
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from typing import Any

import httpx

from dreamizer.core.config import DreamizerConfig
from dreamizer.core.errors import (
    FAL_KEY_MISSING_MESSAGE,
    ConfigurationError,
    FalRequestError,
    GenerationFailedError,
    GenerationTimeoutError,
)

logger = logging.getLogger(__name__)

# Queue status values reported by fal.ai.
STATUS_IN_QUEUE = "IN_QUEUE"
STATUS_IN_PROGRESS = "IN_PROGRESS"
STATUS_COMPLETED = "COMPLETED"
STATUS_FAILED = "FAILED"


@dataclass(frozen=True)
class QueueHandle:
    """A submitted queue job and the URLs used to follow it up."""

    request_id: str
    status_url: str
    response_url: str


def extract_image_url(result: dict[str, Any]) -> str | None:
    """Return the URL of the first image in a fal.ai result document.

    Accepts both the bare result (``{"images": [...]}``) and a result wrapped
    in ``{"data": {...}}``.
    """
    if not isinstance(result, dict):
        return None
    payload = result.get("data") if isinstance(result.get("data"), dict) else result
    images = payload.get("images") or []
    if not images or not isinstance(images[0], dict):
        return None
    return images[0].get("url") or None


class FalClient:
    """Thin wrapper over :class:`httpx.AsyncClient` for fal.ai endpoints.

    The HTTP client is owned by the caller (the FastAPI lifespan in
    production, a ``MockTransport``-backed client in tests).

    Every transport error, rejected request and unreadable reply surfaces as
    :class:`FalRequestError`, so callers only handle :class:`DreamizerError`.
    """

    def __init__(self, config: DreamizerConfig, http_client: httpx.AsyncClient) -> None:
        self.config = config
        self.http = http_client

    # -- helpers ------------------------------------------------------------

    def _headers(self) -> dict[str, str]:
        if not self.config.fal_key:
            raise ConfigurationError(FAL_KEY_MISSING_MESSAGE)
        return {
            "Authorization": f"Key {self.config.fal_key}",
            "Content-Type": "application/json",
        }

    def _queue_url(self, endpoint_id: str) -> str:
        return f"{self.config.fal_queue_url.rstrip('/')}/{endpoint_id.strip('/')}"

    async def _send(
        self,
        method: str,
        url: str,
        failure: str,
        arguments: dict[str, Any] | None = None,
        include_body: bool = False,
    ) -> dict[str, Any]:
        """Send one request and return its JSON object body.

        *failure* prefixes the :class:`FalRequestError` message.  With
        *include_body* the remote error text is appended to it.
        """
        headers = self._headers()
        try:
            response = await self.http.request(method, url, headers=headers, json=arguments)
        except httpx.HTTPError as e:
            logger.warning(f"{method} {url} failed: {e!r}")
            raise FalRequestError(f"{failure}: {str(e) or type(e).__name__}") from e

        if response.is_error:
            logger.warning(f"{method} {url} returned {response.status_code}")
            raise FalRequestError(f"{failure}: {response.text}" if include_body else failure)

        try:
            data = response.json()
        except ValueError as e:
            raise FalRequestError(f"{failure}: invalid JSON response") from e
        if not isinstance(data, dict):
            raise FalRequestError(f"{failure}: unexpected response")
        return data

    # -- synchronous mode -----------------------------------------------------

    async def run(self, endpoint_id: str, arguments: dict[str, Any]) -> dict[str, Any]:
        """Run *endpoint_id* with a single blocking request."""
        url = f"{self.config.fal_sync_url.rstrip('/')}/{endpoint_id.strip('/')}"
        logger.info(f"Running {endpoint_id} synchronously")
        return await self._send(
            "POST", url, "Image generation request failed", arguments, include_body=True
        )

    # -- queue mode -----------------------------------------------------------

    async def submit(self, endpoint_id: str, arguments: dict[str, Any]) -> QueueHandle:
        """Submit a job to the fal.ai queue and return its handle."""
        base = self._queue_url(endpoint_id)
        data = await self._send(
            "POST", base, "Failed to submit request", arguments, include_body=True
        )

        request_id = data.get("request_id")
        if not request_id:
            raise FalRequestError("Failed to submit request: no request_id in response")

        handle = QueueHandle(
            request_id=request_id,
            status_url=data.get("status_url") or f"{base}/requests/{request_id}/status",
            response_url=data.get("response_url") or f"{base}/requests/{request_id}",
        )
        logger.info(f"Submitted {endpoint_id} request {request_id}")
        return handle

    async def status(self, handle: QueueHandle) -> str:
        """Return the current queue status string for *handle*."""
        data = await self._send("GET", handle.status_url, "Failed to check status")
        return data.get("status", "")

    async def result(self, handle: QueueHandle) -> dict[str, Any]:
        """Fetch the result document of a completed job."""
        return await self._send("GET", handle.response_url, "Failed to get result")

    async def subscribe(self, endpoint_id: str, arguments: dict[str, Any]) -> dict[str, Any]:
        """Submit a job and poll until it completes.

        Raises
        ------
        GenerationFailedError
            The job reported ``FAILED``
        GenerationTimeoutError
            ``max_poll_attempts`` status checks passed without completion
        FalRequestError
            A submit, status or result request failed or returned an unreadable body
        """
        handle = await self.submit(endpoint_id, arguments)

        for attempt in range(1, self.config.max_poll_attempts + 1):
            await asyncio.sleep(self.config.poll_interval_seconds)

            status = await self.status(handle)
            if status == STATUS_COMPLETED:
                logger.info(f"Request {handle.request_id} completed after {attempt} checks")
                return await self.result(handle)
            if status == STATUS_FAILED:
                raise GenerationFailedError("Image generation failed")
            if status == STATUS_IN_PROGRESS:
                logger.debug(f"Request {handle.request_id} in progress (check {attempt})")

        logger.warning(
            f"Request {handle.request_id} still pending after "
            f"{self.config.max_poll_attempts} checks"
        )
        raise GenerationTimeoutError("Request timed out")
