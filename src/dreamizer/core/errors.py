"""Exception hierarchy for Dreamizer.

Every failure that the generation pipeline can report to a caller is a
subclass of :class:`DreamizerError`.  The API layer maps these onto HTTP
status codes and the ``{"error": message}`` response body:

- :class:`InvalidRequestError` -> 400
- :class:`ConfigurationError` -> 500
- any other :class:`DreamizerError` -> 500

The ``str()`` of each exception is the message shown to the browser, so keep
messages short and free of secrets.
"""

from __future__ import annotations

FAL_KEY_MISSING_MESSAGE = "FAL_KEY not configured. Please add your API key to .env.local"


class DreamizerError(Exception):
    """Base class for all errors raised by the generation pipeline."""

    status_code: int = 500


class InvalidRequestError(DreamizerError):
    """The caller supplied an unusable request (e.g. empty image or dream)."""

    status_code = 400


class ConfigurationError(DreamizerError):
    """A required setting, such as the fal.ai API key, is missing."""


class FalRequestError(DreamizerError):
    """A fal.ai request failed, was rejected, or returned an unreadable body."""


class GenerationFailedError(DreamizerError):
    """The remote model reported failure or returned no image."""


class GenerationTimeoutError(DreamizerError):
    """The remote job did not complete within the polling budget."""
