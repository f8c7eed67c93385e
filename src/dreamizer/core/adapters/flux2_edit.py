"""FLUX.2 edit and Nano Banana Pro adapters.

Both models accept the same guided-diffusion argument set, so Nano Banana
Pro reuses the FLUX.2 input builder and only changes the endpoint.

Model Parameters
----------------
- **prompt**: Editing instruction built from the dream template
- **image_urls**: Single-element list holding the portrait
- **guidance_scale**: 2.5 keeps the face close to the source portrait
- **num_inference_steps**: 28
- **image_size**: ``portrait_4_3``
- **acceleration**: ``regular``
- **output_format**: ``png``
"""

from typing import Any

from dreamizer.core.model_adapters import RemoteModelAdapter, model_registry

GUIDANCE_SCALE = 2.5
NUM_INFERENCE_STEPS = 28
IMAGE_SIZE = "portrait_4_3"


@model_registry.register
class Flux2EditAdapter(RemoteModelAdapter):
    """Adapter for the FLUX.2 image edit endpoint."""

    key = "flux-2-edit"
    label = "FLUX.2 Edit"
    description = "Black Forest Labs FLUX.2 instruction-based image editing"
    endpoint_id = "fal-ai/flux-2/edit"

    def build_input(self, prompt: str, image_url: str) -> dict[str, Any]:
        return {
            "prompt": prompt,
            "image_urls": [image_url],
            "guidance_scale": GUIDANCE_SCALE,
            "num_inference_steps": NUM_INFERENCE_STEPS,
            "image_size": IMAGE_SIZE,
            "num_images": 1,
            "acceleration": "regular",
            "enable_safety_checker": True,
            "output_format": "png",
        }


@model_registry.register
class NanoBananaProAdapter(Flux2EditAdapter):
    """Adapter for the Nano Banana Pro edit endpoint."""

    key = "nano-banana-pro"
    label = "Nano Banana Pro"
    description = "Google Nano Banana Pro image editing"
    endpoint_id = "fal-ai/nano-banana-pro/edit"
