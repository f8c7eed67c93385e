"""Remote model adapter implementations.

Importing this package registers every adapter with
:data:`dreamizer.core.model_adapters.model_registry`.

Available Adapters
------------------
- **Flux2EditAdapter**: ``flux-2-edit`` (fal-ai/flux-2/edit)
- **NanoBananaProAdapter**: ``nano-banana-pro`` (fal-ai/nano-banana-pro/edit)
- **SeedreamV4EditAdapter**: ``seedream-v4-edit`` (fal-ai/bytedance/seedream/v4/edit)
"""

from .flux2_edit import Flux2EditAdapter, NanoBananaProAdapter
from .seedream_v4_edit import SeedreamV4EditAdapter

__all__ = [
    "Flux2EditAdapter",
    "NanoBananaProAdapter",
    "SeedreamV4EditAdapter",
]
