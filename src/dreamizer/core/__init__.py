"""Core functionality for dream generation.

- **Configuration**: :class:`DreamizerConfig` and the global ``config``
- **Model adapters**: one adapter per hosted fal.ai model, held in ``model_registry``
- **FalClient**: sync and queue (submit + poll) access to fal.ai
- **PromptEnhancer**: optional LLM rewrite of the dream
- **DreamGenerator**: the request pipeline that ties them together

Usage Example
-------------
    import httpx
    from dreamizer.core import DreamGenerator, FalClient, PromptEnhancer, config

    async with httpx.AsyncClient(timeout=config.http_timeout_seconds) as http:
        generator = DreamGenerator(config, FalClient(config, http), PromptEnhancer(config, http))
        result = await generator.generate(image_url, "winning an Olympic medal")
"""

# Import adapters to ensure they're registered
from dreamizer.core.adapters import (  # noqa: F401
    Flux2EditAdapter,
    NanoBananaProAdapter,
    SeedreamV4EditAdapter,
)
from dreamizer.core.config import DreamizerConfig, config
from dreamizer.core.fal_client import FalClient
from dreamizer.core.generation import DreamGenerator, DreamResult
from dreamizer.core.model_adapters import RemoteModelAdapter, model_registry
from dreamizer.core.prompt_enhancer import PromptEnhancer

__all__ = [
    "DreamGenerator",
    "DreamResult",
    "DreamizerConfig",
    "FalClient",
    "PromptEnhancer",
    "RemoteModelAdapter",
    "config",
    "model_registry",
]
