"""ByteDance Seedream v4 edit adapter.

Seedream follows long, descriptive instructions well, so this is the one
model that runs the dream through the LLM prompt enhancer before the edit.
The endpoint's own ``enhance_prompt_mode`` is left at ``standard``.
"""

from typing import Any

from dreamizer.core.model_adapters import RemoteModelAdapter, model_registry


@model_registry.register
class SeedreamV4EditAdapter(RemoteModelAdapter):
    """Adapter for the Seedream v4 image edit endpoint."""

    key = "seedream-v4-edit"
    label = "Seedream v4 Edit"
    description = "ByteDance Seedream v4 editing with LLM-enhanced prompts"
    endpoint_id = "fal-ai/bytedance/seedream/v4/edit"
    enhances_prompt = True

    def build_input(self, prompt: str, image_url: str) -> dict[str, Any]:
        return {
            "prompt": prompt,
            "image_urls": [image_url],
            "image_size": "portrait_4_3",
            "num_images": 1,
            "enable_safety_checker": True,
            "enhance_prompt_mode": "standard",
        }
