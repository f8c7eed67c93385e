"""Pydantic request and response models for the Dreamizer API.

The browser speaks camelCase JSON (``promptTemplate``, ``imageUrl``); the
models expose snake_case attributes and map them through aliases.

Models
------
GenerateRequest
    Payload for ``POST /api/generate``.
GenerateResponse
    Successful result of ``POST /api/generate``.
PromptPreviewResponse
    Result of ``POST /api/prompt/preview``.
ErrorResponse
    Body of every error response.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class GenerateRequest(BaseModel):
    """Request body for the ``POST /api/generate`` endpoint.

    ``image`` and ``dream`` are declared optional so that a missing value
    reaches the generation service and is reported with the same message as
    an empty one.

    Attributes:
        image: Portrait as a ``data:`` URL or a hosted image URL.
        dream: Free-text description of the dream.
        model: Model key (e.g. ``"flux-2-edit"``).  ``None`` selects the
            configured default model.
        prompt_template: Template containing ``{{DREAM}}`` (JSON key
            ``promptTemplate``).  Ignored by models that enhance prompts.
    """

    model_config = ConfigDict(populate_by_name=True)

    image: str | None = Field(
        default=None,
        description="Portrait as a data URL or hosted image URL.",
    )
    dream: str | None = Field(
        default=None,
        description="Free-text dream phrase, e.g. 'winning an Olympic medal'.",
    )
    model: str | None = Field(
        default=None,
        description="Model key; defaults to the server's configured model.",
    )
    prompt_template: str | None = Field(
        default=None,
        alias="promptTemplate",
        description="Prompt template containing the {{DREAM}} placeholder.",
    )


class GenerateResponse(BaseModel):
    """Response body of a successful ``POST /api/generate``.

    Attributes:
        image_url: URL of the generated image (JSON key ``imageUrl``).
        prompt: The prompt that was sent to the model.
        model: The model key used.
    """

    model_config = ConfigDict(populate_by_name=True)

    image_url: str = Field(..., alias="imageUrl")
    prompt: str
    model: str


class ErrorResponse(BaseModel):
    """Body of every error response."""

    error: str


class PromptPreviewResponse(BaseModel):
    """Response body of ``POST /api/prompt/preview``.

    Attributes:
        prompt: The prompt a generate request would send.
        model: The model key the prompt was built for.
    """

    prompt: str
    model: str
