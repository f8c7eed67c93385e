"""LLM prompt enhancement through the OpenRouter chat completions API.

Short dreams such as "flying through the clouds" leave the image model to
invent the whole scene.  The enhancer asks an LLM to describe one concrete
peak moment of that dream, framed as a medium shot, and uses the answer as
the edit prompt.

The step is optional.  Without ``OPENROUTER_API_KEY`` no request is made,
and any remote failure (HTTP error, transport error, malformed or empty
answer) is logged and replaced by the basic template prompt, so enhancement
can never fail a generation.
"""

from __future__ import annotations

import logging

import httpx

from dreamizer.api.prompt_builder import basic_prompt
from dreamizer.core.config import DreamizerConfig

logger = logging.getLogger(__name__)

SYSTEM_PROMPT = (
    "You are a creative prompt engineer specializing in image generation. "
    "Focus on peak moments of success and joy. Create vivid, detailed prompts that capture "
    "the essence of achievement and positive energy, while maintaining a medium shot composition."
)

USER_PROMPT_TEMPLATE = (
    'Describe a peak moment of success in this dream: "{dream}". '
    "Focus on a specific situation that symbolizes success the most - a moment that delivers "
    "success and joy, with good vibes and energy. Describe vibrant details about the "
    "character's expression, emotions, and immediate surroundings, but keep it focused on a "
    "medium shot composition. Don't describe the entire environment in detail as that would "
    "create a long shot. Focus on the character and their immediate success moment."
)


def _answer_text(body: object) -> str | None:
    """Text of the first chat completion choice, or ``None`` if absent or blank."""
    if not isinstance(body, dict):
        return None
    choices = body.get("choices")
    if not isinstance(choices, list) or not choices:
        return None
    choice = choices[0]
    if not isinstance(choice, dict):
        return None
    message = choice.get("message")
    if not isinstance(message, dict):
        return None
    content = message.get("content")
    if not isinstance(content, str) or not content.strip():
        return None
    return content


class PromptEnhancer:
    """Expands a dream phrase into a detailed image prompt."""

    def __init__(self, config: DreamizerConfig, http_client: httpx.AsyncClient) -> None:
        self.config = config
        self.http = http_client

    def build_payload(self, dream: str) -> dict:
        """Chat completion request body for *dream*."""
        return {
            "model": self.config.openrouter_model,
            "messages": [
                {"role": "system", "content": SYSTEM_PROMPT},
                {"role": "user", "content": USER_PROMPT_TEMPLATE.format(dream=dream.strip())},
            ],
            "temperature": self.config.enhancer_temperature,
            "max_tokens": self.config.enhancer_max_tokens,
        }

    async def enhance(self, dream: str) -> str:
        """Return an enhanced prompt for *dream*, or the basic prompt on any failure."""
        fallback = basic_prompt(dream)
        if not self.config.openrouter_api_key:
            logger.info("OPENROUTER_API_KEY not set, using basic prompt")
            return fallback

        headers = {
            "Authorization": f"Bearer {self.config.openrouter_api_key}",
            "Content-Type": "application/json",
            "HTTP-Referer": self.config.openrouter_referer,
            "X-Title": self.config.openrouter_title,
        }

        try:
            response = await self.http.post(
                self.config.openrouter_url,
                headers=headers,
                json=self.build_payload(dream),
            )
        except httpx.HTTPError as e:
            logger.warning(f"Prompt enhancement request failed: {e}")
            return fallback

        if response.is_error:
            logger.warning(f"OpenRouter API error ({response.status_code}): {response.text}")
            return fallback

        try:
            body = response.json()
        except ValueError:
            logger.warning("OpenRouter returned a non-JSON body")
            return fallback

        content = _answer_text(body)
        if content is None:
            logger.warning("OpenRouter returned no prompt text")
            return fallback

        enhanced = content.strip()
        logger.info(f"Enhanced prompt: {enhanced[:150]}...")
        return enhanced
