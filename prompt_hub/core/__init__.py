"""Core cross-cutting helpers for prompt-hub (configuration and logging)."""

from .config import LangfuseConfig, PromptCacheConfig, Settings
from .logging_config import get_logger, setup_logging

__all__ = [
    "LangfuseConfig",
    "PromptCacheConfig",
    "Settings",
    "get_logger",
    "setup_logging",
]
