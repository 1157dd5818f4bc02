"""Prompt client loader.

This module maps configuration (the ``LANGFUSE_*`` and ``PROMPT_HUB_*``
environment variables, via :class:`~prompt_hub.core.config.Settings`) to a
ready-to-use :class:`PromptClient`.

Unlike lookups, loading is strict: missing credentials raise
:class:`ConfigurationError` at startup rather than degrading later.
"""

from __future__ import annotations

import logging
from typing import Optional

import httpx

from prompt_hub.core.config import Settings

from .client import PromptClient
from .errors import ConfigurationError
from .source import LangfusePromptSource

_LOGGER = logging.getLogger(__name__)


def load_prompt_client(settings: Optional[Settings] = None, *, http_client: Optional[httpx.Client] = None) -> PromptClient:
    """Build a :class:`PromptClient` from settings.

    Resolution algorithm:

    1. Use ``settings`` or read a fresh :class:`Settings` from the environment.
    2. Require both the Langfuse public and secret keys.
    3. Build a :class:`LangfusePromptSource` against the configured base URL
       (``https://cloud.langfuse.com`` by default), reusing ``http_client``
       when given.
    4. Wrap it in a :class:`PromptClient` with the configured number of
       background refresh workers.

    Credentials are never logged; only the base URL is.
    """
    settings = settings or Settings()
    langfuse = settings.langfuse
    if not langfuse.public_key or not langfuse.secret_key:
        raise ConfigurationError("langfuse public key and secret key must be provided")

    cache_config = settings.prompt_cache
    source = LangfusePromptSource(
        langfuse.base_url,
        public_key=langfuse.public_key,
        secret_key=langfuse.secret_key,
        timeout=cache_config.http_timeout,
        client=http_client,
    )
    _LOGGER.info(
        "PromptClientLoader: using base_url=%s refresh_workers=%d", source.base_url, cache_config.refresh_workers
    )
    return PromptClient(source, max_refresh_workers=cache_config.refresh_workers)
