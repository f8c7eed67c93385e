"""Dreamizer - Turn a portrait and a dream into a single edited photograph."""

__version__ = "0.3.0"

from dreamizer.core.config import DreamizerConfig, config
from dreamizer.core.model_adapters import RemoteModelAdapter, model_registry

# Import adapters to ensure they're registered
from dreamizer.core.adapters import (  # noqa: F401
    Flux2EditAdapter,
    NanoBananaProAdapter,
    SeedreamV4EditAdapter,
)

__all__ = [
    "RemoteModelAdapter",
    "model_registry",
    "DreamizerConfig",
    "config",
    "Flux2EditAdapter",
    "NanoBananaProAdapter",
    "SeedreamV4EditAdapter",
]
