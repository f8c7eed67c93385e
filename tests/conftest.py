"""Shared pytest fixtures for Dreamizer tests.

No test touches the network: fal.ai and OpenRouter are replaced by
:class:`FakeRemote`, an ``httpx.MockTransport`` handler that records every
request and answers with canned responses.
"""

from __future__ import annotations

import json
from typing import Generator

import httpx
import pytest
from fastapi.testclient import TestClient

from dreamizer.core.config import DreamizerConfig
from dreamizer.core.fal_client import FalClient
from dreamizer.core.generation import DreamGenerator
from dreamizer.core.prompt_enhancer import PromptEnhancer

RESULT_IMAGE_URL = "https://v3.fal.media/files/dream/result.png"
PORTRAIT_DATA_URL = "data:image/png;base64,iVBORw0KGgoAAAANSUhEUgAAAAEAAAABCAYAAAAfFcSJAAAADUlEQVR42mNk"
REQUEST_ID = "req-123"


class FakeRemote:
    """Stand-in for the fal.ai and OpenRouter HTTP APIs.

    Attributes are plain values so each test can reshape the behaviour
    before making its request.
    """

    def __init__(self) -> None:
        self.requests: list[httpx.Request] = []
        self.statuses: list[str] = ["IN_QUEUE", "IN_PROGRESS", "COMPLETED"]
        self.result: dict | str = {"images": [{"url": RESULT_IMAGE_URL}]}
        self.submit_response: dict | str = {"request_id": REQUEST_ID, "status": "IN_QUEUE"}
        self.submit_status_code = 200
        self.status_status_code = 200
        self.result_status_code = 200
        self.sync_status_code = 200
        self.openrouter_status_code = 200
        self.openrouter_body: dict | list | str = {
            "choices": [{"message": {"content": "  A triumphant medium shot of the character.  "}}]
        }
        self.openrouter_raises: Exception | None = None
        self.fal_raises: Exception | None = None
        self.status_body: dict | list | str | None = None

    # -- inspection helpers -------------------------------------------------

    def requests_to(self, host: str) -> list[httpx.Request]:
        return [r for r in self.requests if r.url.host == host]

    def status_checks(self) -> list[httpx.Request]:
        return [r for r in self.requests_to("queue.fal.run") if r.url.path.endswith("/status")]

    def body_of(self, request: httpx.Request) -> dict:
        return json.loads(request.content)

    # -- transport handler ----------------------------------------------------

    @staticmethod
    def _reply(status_code: int, body: dict | list | str) -> httpx.Response:
        if isinstance(body, str):
            return httpx.Response(status_code, text=body)
        return httpx.Response(status_code, json=body)

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        host = request.url.host

        if host == "openrouter.ai":
            if self.openrouter_raises is not None:
                raise self.openrouter_raises
            return self._reply(self.openrouter_status_code, self.openrouter_body)

        if host in ("fal.run", "queue.fal.run") and self.fal_raises is not None:
            raise self.fal_raises

        if host == "fal.run":
            return self._reply(self.sync_status_code, self.result)

        if host == "queue.fal.run":
            if request.method == "POST":
                return self._reply(self.submit_status_code, self.submit_response)
            if request.url.path.endswith("/status"):
                status = self.statuses.pop(0) if len(self.statuses) > 1 else self.statuses[0]
                body = self.status_body if self.status_body is not None else {"status": status}
                return self._reply(self.status_status_code, body)
            return self._reply(self.result_status_code, self.result)

        return httpx.Response(404, json={"detail": "unexpected host"})


@pytest.fixture
def test_config() -> DreamizerConfig:
    """Configuration with a fake fal.ai key and a fast, short poll loop."""
    return DreamizerConfig(
        fal_key="test-fal-key",
        openrouter_api_key=None,
        poll_interval_seconds=0.0,
        max_poll_attempts=5,
        _env_file=None,
    )


@pytest.fixture
def enhancing_config(test_config: DreamizerConfig) -> DreamizerConfig:
    """Test configuration with prompt enhancement enabled."""
    return test_config.model_copy(update={"openrouter_api_key": "test-openrouter-key"})


@pytest.fixture
def fake_remote() -> FakeRemote:
    return FakeRemote()


@pytest.fixture
def http_client(fake_remote: FakeRemote) -> httpx.AsyncClient:
    """Async HTTP client routed to :class:`FakeRemote`."""
    return httpx.AsyncClient(transport=httpx.MockTransport(fake_remote.handler))


@pytest.fixture
def make_generator(http_client: httpx.AsyncClient):
    """Factory building a :class:`DreamGenerator` for a given configuration."""

    def _make(settings: DreamizerConfig) -> DreamGenerator:
        return DreamGenerator(
            settings,
            FalClient(settings, http_client),
            PromptEnhancer(settings, http_client),
        )

    return _make


@pytest.fixture
def install_config(http_client: httpx.AsyncClient):
    """Swap the settings and generator used by the running app."""
    from dreamizer.api.main import app, build_generator

    def _install(settings: DreamizerConfig) -> None:
        app.state.config = settings
        app.state.generator = build_generator(settings, http_client)

    return _install


@pytest.fixture
def test_client(test_config: DreamizerConfig, install_config) -> Generator[TestClient, None, None]:
    """FastAPI TestClient whose outbound HTTP goes to :class:`FakeRemote`."""
    from dreamizer.api.main import app

    with TestClient(app) as client:
        install_config(test_config)
        yield client
