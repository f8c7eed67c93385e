"""Dream generation service.

Ties the pieces of one request together:

1. Validate that both the portrait and the dream are present.
2. Check that a fal.ai key is configured.
3. Resolve the model adapter (unknown keys fall back to FLUX.2 edit).
4. Build the prompt: LLM-enhanced for models that want it, otherwise the
   dream substituted into the (optional) browser-supplied template.
5. Call fal.ai, either queued with polling or as one blocking request.
6. Pull the first image URL out of the result.

Nothing is persisted between requests.
"""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass

from dreamizer.api.prompt_builder import craft_prompt
from dreamizer.core.config import DreamizerConfig
from dreamizer.core.errors import (
    FAL_KEY_MISSING_MESSAGE,
    ConfigurationError,
    GenerationFailedError,
    InvalidRequestError,
)
from dreamizer.core.fal_client import FalClient, extract_image_url
from dreamizer.core.model_adapters import ModelRegistry, model_registry
from dreamizer.core.prompt_enhancer import PromptEnhancer

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DreamResult:
    """Outcome of a successful generation."""

    image_url: str
    prompt: str
    model: str


class DreamGenerator:
    """Runs the portrait + dream -> edited image pipeline."""

    def __init__(
        self,
        config: DreamizerConfig,
        fal: FalClient,
        enhancer: PromptEnhancer,
        registry: ModelRegistry = model_registry,
    ) -> None:
        self.config = config
        self.fal = fal
        self.enhancer = enhancer
        self.registry = registry

    async def build_prompt(self, dream: str, model: str | None, template: str | None) -> str:
        """Prompt that would be sent for this dream and model."""
        adapter = self.registry.resolve(model or self.config.default_model)
        if adapter.enhances_prompt:
            logger.info(f"Enhancing prompt with LLM for {adapter.label}")
            return await self.enhancer.enhance(dream)
        return craft_prompt(dream, template)

    async def generate(
        self,
        image: str | None,
        dream: str | None,
        model: str | None = None,
        prompt_template: str | None = None,
    ) -> DreamResult:
        """Generate one edited image of the person in *image* living *dream*.

        Args:
            image: Portrait as a data URL or a hosted image URL.
            dream: Free-text dream phrase.
            model: Model key; ``None`` selects ``config.default_model``.
            prompt_template: Optional template with a ``{{DREAM}}``
                placeholder.  Ignored by models that enhance prompts.

        Returns:
            DreamResult with the image URL, the prompt used and the model key.

        Raises:
            InvalidRequestError: *image* or *dream* is empty.
            ConfigurationError: no fal.ai key is configured.
            DreamizerError: any remote failure, timeout, or missing image.
        """
        if not image or not image.strip() or not dream or not dream.strip():
            raise InvalidRequestError("Image and dream are required")

        if not self.config.has_fal_key:
            raise ConfigurationError(FAL_KEY_MISSING_MESSAGE)

        model_key = model or self.config.default_model
        adapter = self.registry.resolve(model_key)

        prompt = await self.build_prompt(dream, adapter.key, prompt_template)
        arguments = adapter.build_input(prompt, image)

        logger.info(f"Generating image with model: {adapter.endpoint_id}")
        logger.info(f"Sending to fal.ai with prompt: {prompt[:200]}...")

        start = time.monotonic()
        if self.config.delivery_mode == "sync":
            result = await self.fal.run(adapter.endpoint_id, arguments)
        else:
            result = await self.fal.subscribe(adapter.endpoint_id, arguments)

        image_url = extract_image_url(result)
        if not image_url:
            raise GenerationFailedError("Failed to generate image")

        logger.info(f"Image generated successfully in {time.monotonic() - start:.1f}s")
        return DreamResult(image_url=image_url, prompt=prompt, model=model_key)
