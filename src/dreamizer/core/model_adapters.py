"""Base classes and registry for remote model adapters.

Dreamizer does not run any model locally.  Each supported image-edit model
is hosted on fal.ai and is described by a small adapter that knows:

- the public key the browser uses to select it (``flux-2-edit``)
- the fal.ai endpoint id (``fal-ai/flux-2/edit``)
- how to build the model-specific input arguments
- whether the dream should be expanded by the LLM prompt enhancer first

Model Adapter Pattern
---------------------
The generation service talks to every model through the same interface, so
adding a model is a matter of writing one adapter class and registering it.

Usage Example
-------------
    >>> from dreamizer.core.model_adapters import model_registry
    >>> model_registry.list_available()
    ['flux-2-edit', 'nano-banana-pro', 'seedream-v4-edit']
    >>> adapter = model_registry.resolve("seedream-v4-edit")
    >>> adapter.endpoint_id
    'fal-ai/bytedance/seedream/v4/edit'
    >>> adapter.build_input("Medium shot of this character ...", "https://...")

Unknown Models
--------------
:meth:`ModelRegistry.resolve` falls back to :data:`FALLBACK_MODEL` for an
unknown or missing key instead of raising, so a stale browser build that
sends an old model name still gets an image.
"""

import logging
from abc import ABC, abstractmethod
from typing import Any

logger = logging.getLogger(__name__)

FALLBACK_MODEL = "flux-2-edit"


class RemoteModelAdapter(ABC):
    """Abstract base class for all remote model adapters.

    Attributes
    ----------
    key : str
        Public identifier used in requests (e.g. "seedream-v4-edit")
    label : str
        Human-readable name shown in the browser
    description : str
        Brief description of the model
    endpoint_id : str
        fal.ai application id, appended to the fal.ai base URLs
    enhances_prompt : bool
        If True the dream is expanded by the LLM prompt enhancer and any
        prompt template sent by the browser is ignored
    """

    key: str = "base"
    label: str = "Base Model Adapter"
    description: str = "Base class for remote model adapters"
    endpoint_id: str = ""
    enhances_prompt: bool = False

    @abstractmethod
    def build_input(self, prompt: str, image_url: str) -> dict[str, Any]:
        """Build the fal.ai input arguments for one edit.

        Args:
            prompt: Compiled (or enhanced) prompt text
            image_url: Portrait as a data URL or hosted URL

        Returns
        -------
        dict[str, Any]
            JSON-serialisable arguments for the endpoint
        """

    def get_model_info(self) -> dict[str, Any]:
        """Get information about this model adapter."""
        return {
            "id": self.key,
            "label": self.label,
            "description": self.description,
            "endpoint_id": self.endpoint_id,
            "enhances_prompt": self.enhances_prompt,
        }


class ModelRegistry:
    """Registry of the remote models the API can route to.

    Adapters are stateless, so the registry keeps one shared instance per
    registered class.
    """

    def __init__(self) -> None:
        """Initialize the model registry."""
        self._adapters: dict[str, RemoteModelAdapter] = {}

    def register(self, adapter_class: type[RemoteModelAdapter]) -> type[RemoteModelAdapter]:
        """Register a model adapter class.

        Usable as a class decorator; returns *adapter_class* unchanged.
        """
        key = adapter_class.key

        if key in self._adapters:
            logger.warning(f"Model adapter '{key}' is already registered, overwriting")

        self._adapters[key] = adapter_class()
        logger.debug(f"Registered model adapter: {key}")
        return adapter_class

    def get(self, key: str) -> RemoteModelAdapter | None:
        """Return the adapter registered under *key*, or None."""
        return self._adapters.get(key)

    def resolve(self, key: str | None) -> RemoteModelAdapter:
        """Return the adapter for *key*, falling back to :data:`FALLBACK_MODEL`.

        Raises
        ------
        KeyError
            If neither *key* nor the fallback model is registered
        """
        adapter = self._adapters.get(key) if key else None
        if adapter is not None:
            return adapter

        if key:
            logger.warning(f"Unknown model '{key}', falling back to {FALLBACK_MODEL}")

        if FALLBACK_MODEL not in self._adapters:
            available = ", ".join(self.list_available())
            raise KeyError(
                f"Model adapter '{FALLBACK_MODEL}' not found. Available adapters: {available}"
            )
        return self._adapters[FALLBACK_MODEL]

    def list_available(self) -> list[str]:
        """List all registered model keys, sorted."""
        return sorted(self._adapters)

    def list_models(self) -> list[dict[str, Any]]:
        """Metadata for every registered model, sorted by key."""
        return [self._adapters[key].get_model_info() for key in self.list_available()]


# Global model registry instance
model_registry = ModelRegistry()
