"""Prompt client facade.

:class:`PromptClient` is the single entry point for application code. It
combines the cache, the refresh coordinator and the template compiler:

* ``get`` never raises. A cache hit returns immediately and schedules a
  background refresh; a miss fetches synchronously. When the fetch fails the
  returned compiler is empty and the failure surfaces at compile time as
  :class:`~prompt_hub.prompt.errors.EmptyPromptError`.
* ``invalidate_cache`` re-fetches a batch of prompts concurrently.
* ``create_prompt`` is a pass-through write with no cache interaction.
"""

from __future__ import annotations

import logging
from typing import Any, Iterable, Optional

from .base import RemotePromptSource
from .cache import PromptCache
from .compiler import PromptCompiler
from .errors import PromptFetchError
from .models import PromptRecord, PromptSpec
from .refresh import RefreshCoordinator

logger = logging.getLogger(__name__)


class PromptClient:
    """Stale-while-revalidate prompt client.

    Attributes:
        cache: The process-local prompt cache.
        coordinator: The refresh coordinator sharing that cache.
    """

    def __init__(
        self,
        source: RemotePromptSource,
        *,
        cache: Optional[PromptCache] = None,
        coordinator: Optional[RefreshCoordinator] = None,
        max_refresh_workers: int = 4,
    ) -> None:
        self._source = source
        self.cache = cache or PromptCache()
        self.coordinator = coordinator or RefreshCoordinator(source, self.cache, max_workers=max_refresh_workers)

    def get(self, name: str, *, timeout: Optional[float] = None) -> PromptCompiler:
        """Return a compiler bound to the current body of prompt `name`.

        Args:
            name: Prompt name.
            timeout: Deadline in seconds for the blocking fetch on a cache
                miss. Background refreshes never use it.
        """
        cached = self.cache.lookup(name)
        if cached is not None:
            self.coordinator.refresh(name)
            return PromptCompiler(cached)

        try:
            body = self.coordinator.fetch_and_store(name, timeout=timeout)
        except PromptFetchError as exc:
            logger.warning(
                "Prompt fetch failed on cache miss; returning empty prompt. name=%s status=%s error=%s",
                name,
                exc.status_code,
                type(exc).__name__,
            )
            return PromptCompiler(None)
        return PromptCompiler(body)

    # Alias mirroring the remote API naming.
    get_prompt_by_name = get

    def invalidate_cache(self, names: Iterable[str], *, timeout: Optional[float] = None) -> None:
        """Re-fetch and store all `names`; see :meth:`RefreshCoordinator.invalidate_all`."""
        self.coordinator.invalidate_all(names, timeout=timeout)

    def create_prompt(self, spec: PromptSpec) -> PromptRecord:
        """Create a prompt on the remote service. The cache is not touched."""
        return self._source.create_prompt(spec)

    def close(self) -> None:
        """Stop background refreshes and close the source if it supports it."""
        self.coordinator.close()
        close = getattr(self._source, "close", None)
        if callable(close):
            close()

    def __enter__(self) -> "PromptClient":
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()
