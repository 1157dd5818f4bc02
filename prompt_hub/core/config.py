"""
Configuration Settings.

This module defines the prompt-hub configuration using Pydantic's BaseSettings.
It automatically loads all configuration from environment variables and .env file
without explicit dotenv loading.
"""

from typing import Optional

from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_LANGFUSE_BASE_URL = "https://cloud.langfuse.com"

# =====================================================================
# Grouped Configuration Models
# =====================================================================


class LangfuseConfig(BaseModel):
    """Langfuse prompt-management API configuration."""

    public_key: Optional[str] = Field(
        default=None, alias="LANGFUSE_PUBLIC_KEY", description="Langfuse public key used as the basic-auth user"
    )
    secret_key: Optional[str] = Field(
        default=None, alias="LANGFUSE_SECRET_KEY", description="Langfuse secret key used as the basic-auth password"
    )
    base_url: str = Field(
        default=DEFAULT_LANGFUSE_BASE_URL, alias="LANGFUSE_BASE_URL", description="Langfuse API base URL"
    )

    model_config = {"populate_by_name": True}


class PromptCacheConfig(BaseModel):
    """Prompt cache and refresh configuration."""

    http_timeout: float = Field(
        default=10.0,
        alias="PROMPT_HUB_HTTP_TIMEOUT",
        description="Default timeout in seconds for requests to the prompt service",
    )
    refresh_workers: int = Field(
        default=4,
        alias="PROMPT_HUB_REFRESH_WORKERS",
        description="Number of worker threads running background prompt refreshes",
    )

    model_config = {"populate_by_name": True}


# =====================================================================
# Main Settings Class
# =====================================================================


class Settings(BaseSettings):
    """
    prompt-hub settings model.

    All properties are automatically bound from environment variables and .env file.
    Pydantic's BaseSettings handles dotenv loading automatically via model_config.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        case_sensitive=True,
        populate_by_name=True,
    )

    # =====================================================================
    # Langfuse Configuration
    # =====================================================================
    langfuse_public_key: Optional[str] = Field(
        default=None,
        description="Langfuse public key",
        alias="LANGFUSE_PUBLIC_KEY",
    )
    langfuse_secret_key: Optional[str] = Field(
        default=None,
        description="Langfuse secret key",
        alias="LANGFUSE_SECRET_KEY",
    )
    langfuse_base_url: str = Field(
        default=DEFAULT_LANGFUSE_BASE_URL,
        description="Langfuse API base URL",
        alias="LANGFUSE_BASE_URL",
    )

    # =====================================================================
    # Prompt Cache Configuration
    # =====================================================================
    http_timeout: float = Field(
        default=10.0,
        description="Default timeout in seconds for prompt service requests",
        alias="PROMPT_HUB_HTTP_TIMEOUT",
    )
    refresh_workers: int = Field(
        default=4,
        ge=1,
        description="Worker threads used for background prompt refreshes",
        alias="PROMPT_HUB_REFRESH_WORKERS",
    )
    log_level: str = Field(
        default="INFO",
        description="prompt-hub logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)",
        alias="PROMPT_HUB_LOG_LEVEL",
    )

    # =====================================================================
    # Computed Properties (Grouped Configurations)
    # =====================================================================

    @property
    def langfuse(self) -> LangfuseConfig:
        """Get Langfuse configuration from environment variables."""
        return LangfuseConfig.model_validate(self.model_dump(by_alias=True))

    @property
    def prompt_cache(self) -> PromptCacheConfig:
        """Get prompt cache configuration from environment variables."""
        return PromptCacheConfig.model_validate(self.model_dump(by_alias=True))
