"""Configuration management for Dreamizer.

This module provides centralized configuration management using Pydantic Settings.
Configuration is loaded from environment variables with the DREAMIZER_ prefix,
allowing easy customization without code changes.

Environment Variable Loading
-----------------------------
Configuration values are loaded in the following priority order:
1. Environment variables (DREAMIZER_* prefix)
2. .env.local and .env files in the working directory
3. Default values defined in DreamizerConfig

The two API keys are also read from their conventional, unprefixed names so
that an existing ``.env.local`` keeps working:

- ``FAL_KEY`` / ``FAL_API_KEY`` for the fal.ai image models
- ``OPENROUTER_API_KEY`` for the optional prompt enhancement step

Example .env.local file:
    FAL_KEY=xxxxxxxx:yyyyyyyy
    OPENROUTER_API_KEY=sk-or-...
    DREAMIZER_DELIVERY_MODE=queue
    DREAMIZER_SERVER_PORT=3001

Global Configuration Instance
------------------------------
A global `config` instance is created automatically at module import time.
This ensures a single source of truth for all configuration values across
the application.

Usage Example
-------------
    from dreamizer.core.config import config

    print(config.default_model)
    print(config.has_fal_key)

Delivery Modes
--------------
- ``queue``: submit the job to ``queue.fal.run`` and poll its status every
  ``poll_interval_seconds`` for at most ``max_poll_attempts`` attempts.
- ``sync``: a single blocking ``POST`` to ``fal.run``; the HTTP timeout is the
  only bound on how long the request may take.

See Also
--------
- .env.example: Template with all available configuration options
- DreamizerConfig: Full configuration class documentation
"""

from typing import Literal

from pydantic import AliasChoices, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

# Value shipped in the example env file; treated the same as "not set".
FAL_KEY_PLACEHOLDER = "your_fal_api_key_here"


class DreamizerConfig(BaseSettings):
    """Main configuration for Dreamizer.

    Attributes
    ----------
    API Keys:
        fal_key : str | None
            fal.ai API key (``FAL_KEY``, ``FAL_API_KEY`` or ``DREAMIZER_FAL_KEY``)
        openrouter_api_key : str | None
            OpenRouter API key; prompt enhancement is skipped without it

    fal.ai Settings:
        fal_queue_url : str
            Base URL of the fal.ai queue API
        fal_sync_url : str
            Base URL of the fal.ai synchronous API
        delivery_mode : Literal["queue", "sync"]
            Whether to submit + poll or make one blocking call
        poll_interval_seconds : float
            Delay before each status check
        max_poll_attempts : int
            Number of status checks before giving up
        http_timeout_seconds : float
            Timeout applied to every outbound HTTP request
        default_model : str
            Model key used when a request does not name one

    Prompt Enhancement:
        openrouter_url, openrouter_model, openrouter_referer, openrouter_title,
        enhancer_temperature, enhancer_max_tokens

    Server Settings:
        server_host : str
            Bind address for uvicorn
        server_port : int
            Port for uvicorn (1024-65535)
        cors_allow_origins : list[str]
            Origins allowed by the CORS middleware

    Examples
    --------
    Create a custom configuration:

        >>> custom_config = DreamizerConfig(
        ...     fal_key="test-key",
        ...     delivery_mode="sync",
        ...     _env_file=None,
        ... )
    """

    model_config = SettingsConfigDict(
        env_file=(".env", ".env.local"),
        env_file_encoding="utf-8",
        env_prefix="DREAMIZER_",
        case_sensitive=False,
        populate_by_name=True,
        extra="ignore",
    )

    # API keys
    fal_key: str | None = Field(
        default=None,
        validation_alias=AliasChoices("DREAMIZER_FAL_KEY", "FAL_KEY", "FAL_API_KEY"),
        description="fal.ai API key",
    )
    openrouter_api_key: str | None = Field(
        default=None,
        validation_alias=AliasChoices("DREAMIZER_OPENROUTER_API_KEY", "OPENROUTER_API_KEY"),
        description="OpenRouter API key for prompt enhancement (optional)",
    )

    # fal.ai settings
    fal_queue_url: str = Field(
        default="https://queue.fal.run",
        description="Base URL of the fal.ai queue API",
    )
    fal_sync_url: str = Field(
        default="https://fal.run",
        description="Base URL of the fal.ai synchronous API",
    )
    delivery_mode: Literal["queue", "sync"] = Field(
        default="queue",
        description="'queue' submits and polls, 'sync' makes a single blocking call",
    )
    poll_interval_seconds: float = Field(
        default=1.0,
        description="Seconds to wait before each status check",
        ge=0.0,
    )
    max_poll_attempts: int = Field(
        default=120,
        description="Status checks before the request times out (120 x 1s = 2 minutes)",
        ge=1,
    )
    http_timeout_seconds: float = Field(
        default=120.0,
        description="Timeout for each outbound HTTP request",
        gt=0.0,
    )
    default_model: str = Field(
        default="seedream-v4-edit",
        description="Model key used when a request does not name one",
    )

    # Prompt enhancement (OpenRouter chat completions)
    openrouter_url: str = Field(
        default="https://openrouter.ai/api/v1/chat/completions",
        description="OpenRouter chat completions endpoint",
    )
    openrouter_model: str = Field(
        default="openai/gpt-4o",
        description="LLM used to enhance dream prompts",
    )
    openrouter_referer: str = Field(default="https://dreemz.ai")
    openrouter_title: str = Field(default="Dreemizer")
    enhancer_temperature: float = Field(default=0.8, ge=0.0, le=2.0)
    enhancer_max_tokens: int = Field(default=200, ge=1)

    # Server settings
    server_host: str = Field(
        default="0.0.0.0",
        description="Server bind address (0.0.0.0 for local network)",
    )
    server_port: int = Field(
        default=3001,
        description="Server port",
        ge=1024,
        le=65535,
    )
    cors_allow_origins: list[str] = Field(
        default=["*"],
        description="Origins allowed to call the API from a browser",
    )

    @field_validator("fal_key", "openrouter_api_key")
    @classmethod
    def _blank_key_is_unset(cls, value: str | None) -> str | None:
        """Normalise empty and placeholder keys to ``None``."""
        if value is None:
            return None
        value = value.strip()
        if not value or value == FAL_KEY_PLACEHOLDER:
            return None
        return value

    @property
    def has_fal_key(self) -> bool:
        """Whether a usable fal.ai key is configured."""
        return self.fal_key is not None

    @property
    def has_openrouter_key(self) -> bool:
        """Whether prompt enhancement can call the LLM."""
        return self.openrouter_api_key is not None


# Global configuration instance
# Loads values from environment variables (DREAMIZER_* prefix plus the
# conventional API key names) and the .env / .env.local files.
config = DreamizerConfig()
