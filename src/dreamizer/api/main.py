"""Dreamizer — FastAPI Application.

This module is the single entry point for the web service.  It defines the
FastAPI ``app`` instance, the REST API routes, the error mapping and the
``main()`` CLI function that launches the uvicorn server.

Architecture
------------
The application is stateless:

- **Configuration** comes from :data:`~dreamizer.core.config.config`
  (environment variables and ``.env.local``).
- **Outbound HTTP** goes through one shared :class:`httpx.AsyncClient`
  created in the lifespan handler and closed on shutdown.
- **Generation** is delegated to :class:`~dreamizer.core.generation.DreamGenerator`,
  which builds the prompt and drives fal.ai.
- **Errors** of every kind are returned as ``{"error": message}``.

Endpoints
---------
========  =======================  =========================================
Method    Path                     Purpose
========  =======================  =========================================
POST      ``/api/generate``        Generate the dream image
POST      ``/api/prompt/preview``  Show the prompt a request would use
GET       ``/api/config``          Models, prompt templates, default model
GET       ``/api/health``          Liveness and key configuration status
========  =======================  =========================================

Usage
-----
CLI (installed entry point)::

    dreamizer

Direct invocation::

    python -m dreamizer.api.main
"""

from __future__ import annotations

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

import httpx
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from dreamizer import __version__
from dreamizer.api.models import (
    ErrorResponse,
    GenerateRequest,
    GenerateResponse,
    PromptPreviewResponse,
)
from dreamizer.api.prompt_builder import DREAM_PLACEHOLDER, list_templates
from dreamizer.core.config import DreamizerConfig, config
from dreamizer.core.errors import DreamizerError, InvalidRequestError
from dreamizer.core.fal_client import FalClient
from dreamizer.core.generation import DreamGenerator
from dreamizer.core.model_adapters import model_registry
from dreamizer.core.prompt_enhancer import PromptEnhancer

logger = logging.getLogger(__name__)


def build_generator(settings: DreamizerConfig, http_client: httpx.AsyncClient) -> DreamGenerator:
    """Wire a :class:`DreamGenerator` around a shared HTTP client."""
    return DreamGenerator(
        settings,
        FalClient(settings, http_client),
        PromptEnhancer(settings, http_client),
    )


# ---------------------------------------------------------------------------
# Application lifecycle - outbound HTTP client setup and teardown.
# ---------------------------------------------------------------------------


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Manage application startup and shutdown lifecycle.

    On startup:
        Opens the shared :class:`httpx.AsyncClient` and stores the settings
        and the :class:`DreamGenerator` on ``app.state``.

    On shutdown:
        Closes the HTTP client and its connection pool.
    """
    http_client = httpx.AsyncClient(timeout=config.http_timeout_seconds)
    app.state.config = config
    app.state.generator = build_generator(config, http_client)
    if not config.has_fal_key:
        logger.warning("FAL_KEY is not set; /api/generate will fail until it is configured.")
    logger.info("Dreamizer API ready.")

    yield

    await http_client.aclose()
    logger.info("HTTP client closed on shutdown.")


# ---------------------------------------------------------------------------
# FastAPI application instance.
# ---------------------------------------------------------------------------
app = FastAPI(
    title="Dreamizer",
    description="Turns a portrait and a dream into an edited photograph via hosted image-edit models.",
    version=__version__,
    lifespan=lifespan,
)

# The browser UI is served from a different origin during development.
app.add_middleware(
    CORSMiddleware,
    allow_origins=config.cors_allow_origins,
    allow_methods=["GET", "POST", "OPTIONS"],
    allow_headers=["Content-Type"],
)


# ---------------------------------------------------------------------------
# Error mapping.  Every error leaves the API as ``{"error": message}``.
# ---------------------------------------------------------------------------


def _error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content=ErrorResponse(error=message).model_dump())


@app.exception_handler(DreamizerError)
async def dreamizer_error_handler(request: Request, exc: DreamizerError) -> JSONResponse:
    """Map pipeline errors onto their status code."""
    if exc.status_code >= 500:
        logger.error(f"Generation error: {exc}")
    return _error(exc.status_code, str(exc) or "Generation failed")


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Malformed JSON or wrongly typed fields are a 400, like missing fields."""
    errors = exc.errors()
    message = errors[0].get("msg", "Invalid request body") if errors else "Invalid request body"
    return _error(400, f"Invalid request body: {message}")


@app.exception_handler(StarletteHTTPException)
async def http_error_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    """Reshape routing errors (404, 405) into the common error body."""
    messages = {404: "Not found", 405: "Method not allowed"}
    return _error(exc.status_code, messages.get(exc.status_code, str(exc.detail)))


# ---------------------------------------------------------------------------
# Routes.
# ---------------------------------------------------------------------------


@app.post(
    "/api/generate",
    response_model=GenerateResponse,
    responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
)
async def generate(req: GenerateRequest, request: Request) -> GenerateResponse:
    """Generate the dream image.

    Returns:
        ``{"imageUrl", "prompt", "model"}``.

    Errors:
        400 when ``image`` or ``dream`` is empty, 500 when the fal.ai key is
        missing or the remote model fails or times out.
    """
    generator: DreamGenerator = request.app.state.generator
    result = await generator.generate(
        image=req.image,
        dream=req.dream,
        model=req.model,
        prompt_template=req.prompt_template,
    )
    return GenerateResponse(image_url=result.image_url, prompt=result.prompt, model=result.model)


@app.post(
    "/api/prompt/preview",
    response_model=PromptPreviewResponse,
    responses={400: {"model": ErrorResponse}},
)
async def preview_prompt(req: GenerateRequest, request: Request) -> PromptPreviewResponse:
    """Return the prompt a generate request would use, without generating.

    Only ``dream``, ``model`` and ``promptTemplate`` are read.  For models
    that enhance prompts this makes the LLM call.
    """
    if not req.dream or not req.dream.strip():
        raise InvalidRequestError("Dream is required")

    generator: DreamGenerator = request.app.state.generator
    model_key = req.model or generator.config.default_model
    prompt = await generator.build_prompt(req.dream, model_key, req.prompt_template)
    return PromptPreviewResponse(prompt=prompt, model=model_key)


@app.get("/api/config")
async def get_config(request: Request) -> dict:
    """Return the data the browser needs to render its model and template pickers."""
    settings: DreamizerConfig = request.app.state.config
    return {
        "version": __version__,
        "default_model": settings.default_model,
        "models": model_registry.list_models(),
        "prompt_templates": list_templates(),
        "dream_placeholder": DREAM_PLACEHOLDER,
    }


@app.get("/api/health")
async def health(request: Request) -> dict:
    """Liveness probe; also reports which API keys are configured."""
    settings: DreamizerConfig = request.app.state.config
    return {
        "status": "ok",
        "version": __version__,
        "fal_configured": settings.has_fal_key,
        "prompt_enhancement_configured": settings.has_openrouter_key,
        "delivery_mode": settings.delivery_mode,
    }


# ---------------------------------------------------------------------------
# CLI entry point.
# ---------------------------------------------------------------------------


def main() -> None:
    """Launch the uvicorn ASGI server.

    Reads host and port from :data:`~dreamizer.core.config.config`
    (``DREAMIZER_SERVER_HOST`` / ``DREAMIZER_SERVER_PORT``).  Defaults to
    ``0.0.0.0:3001``.

    Registered as the ``dreamizer`` console script in ``pyproject.toml``.
    """
    import uvicorn

    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
    logger.info(f"API server starting at http://{config.server_host}:{config.server_port}")

    uvicorn.run(
        "dreamizer.api.main:app",
        host=config.server_host,
        port=config.server_port,
        reload=False,
    )


if __name__ == "__main__":
    main()
