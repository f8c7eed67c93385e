"""Unit tests for dreamizer.core.generation — the request pipeline."""

from __future__ import annotations

import re

import pytest
from conftest import PORTRAIT_DATA_URL, RESULT_IMAGE_URL

from dreamizer.core.errors import (
    FAL_KEY_MISSING_MESSAGE,
    ConfigurationError,
    GenerationFailedError,
    InvalidRequestError,
)
from dreamizer.core.generation import DreamResult

DREAM = "Discovering a new planet"


class TestValidation:
    """Requests without an image or dream never reach fal.ai."""

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "image,dream",
        [(None, DREAM), ("", DREAM), (PORTRAIT_DATA_URL, None), (PORTRAIT_DATA_URL, "  ")],
    )
    async def test_missing_input(self, make_generator, test_config, fake_remote, image, dream):
        generator = make_generator(test_config)

        with pytest.raises(InvalidRequestError, match="Image and dream are required"):
            await generator.generate(image, dream)
        assert fake_remote.requests == []

    @pytest.mark.asyncio
    async def test_missing_fal_key(self, make_generator, test_config, fake_remote):
        generator = make_generator(test_config.model_copy(update={"fal_key": None}))

        with pytest.raises(ConfigurationError, match=re.escape(FAL_KEY_MISSING_MESSAGE)):
            await generator.generate(PORTRAIT_DATA_URL, DREAM)
        assert fake_remote.requests == []


class TestTemplatePrompts:
    """Models without prompt enhancement use the template."""

    @pytest.mark.asyncio
    async def test_default_template(self, make_generator, test_config, fake_remote):
        result = await make_generator(test_config).generate(
            PORTRAIT_DATA_URL, DREAM, model="flux-2-edit"
        )

        assert result == DreamResult(
            image_url=RESULT_IMAGE_URL,
            prompt=f"Medium shot of this character {DREAM}",
            model="flux-2-edit",
        )
        submit = fake_remote.requests[0]
        assert submit.url.path == "/fal-ai/flux-2/edit"
        body = fake_remote.body_of(submit)
        assert body["prompt"] == result.prompt
        assert body["image_urls"] == [PORTRAIT_DATA_URL]

    @pytest.mark.asyncio
    async def test_custom_template(self, make_generator, test_config):
        result = await make_generator(test_config).generate(
            PORTRAIT_DATA_URL,
            DREAM,
            model="nano-banana-pro",
            prompt_template="Portrait of this person {{DREAM}}",
        )
        assert result.prompt == f"Portrait of this person {DREAM}"

    @pytest.mark.asyncio
    async def test_unknown_model_uses_flux_endpoint(self, make_generator, test_config, fake_remote):
        result = await make_generator(test_config).generate(
            PORTRAIT_DATA_URL, DREAM, model="mystery-model"
        )
        assert fake_remote.requests[0].url.path == "/fal-ai/flux-2/edit"
        assert result.model == "mystery-model"


class TestEnhancedPrompts:
    """Seedream runs the dream through the LLM first."""

    @pytest.mark.asyncio
    async def test_default_model_is_enhanced(self, make_generator, enhancing_config, fake_remote):
        result = await make_generator(enhancing_config).generate(PORTRAIT_DATA_URL, DREAM)

        assert result.model == "seedream-v4-edit"
        assert result.prompt == "A triumphant medium shot of the character."
        assert fake_remote.requests[0].url.host == "openrouter.ai"
        submit = fake_remote.requests[1]
        assert submit.url.path == "/fal-ai/bytedance/seedream/v4/edit"
        assert fake_remote.body_of(submit)["enhance_prompt_mode"] == "standard"

    @pytest.mark.asyncio
    async def test_template_ignored_when_enhancing(self, make_generator, enhancing_config):
        result = await make_generator(enhancing_config).generate(
            PORTRAIT_DATA_URL,
            DREAM,
            model="seedream-v4-edit",
            prompt_template="IGNORED {{DREAM}}",
        )
        assert "IGNORED" not in result.prompt

    @pytest.mark.asyncio
    async def test_enhancer_fallback_without_key(self, make_generator, test_config, fake_remote):
        result = await make_generator(test_config).generate(
            PORTRAIT_DATA_URL, DREAM, model="seedream-v4-edit"
        )
        assert result.prompt == f"Medium shot of this character {DREAM}"
        assert fake_remote.requests_to("openrouter.ai") == []


class TestDelivery:
    """Queue vs. sync delivery and result handling."""

    @pytest.mark.asyncio
    async def test_sync_mode_single_call(self, make_generator, test_config, fake_remote):
        settings = test_config.model_copy(update={"delivery_mode": "sync"})
        result = await make_generator(settings).generate(PORTRAIT_DATA_URL, DREAM, model="flux-2-edit")

        assert result.image_url == RESULT_IMAGE_URL
        assert [r.url.host for r in fake_remote.requests] == ["fal.run"]

    @pytest.mark.asyncio
    async def test_result_without_image(self, make_generator, test_config, fake_remote):
        fake_remote.result = {"images": []}
        with pytest.raises(GenerationFailedError, match="Failed to generate image"):
            await make_generator(test_config).generate(PORTRAIT_DATA_URL, DREAM, model="flux-2-edit")


class TestBuildPrompt:
    """Tests for DreamGenerator.build_prompt()."""

    @pytest.mark.asyncio
    async def test_no_fal_call(self, make_generator, test_config, fake_remote):
        prompt = await make_generator(test_config).build_prompt(DREAM, "flux-2-edit", None)
        assert prompt == f"Medium shot of this character {DREAM}"
        assert fake_remote.requests == []
