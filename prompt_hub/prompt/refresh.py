"""Fetch-and-refresh coordination between the remote source and the cache.

:class:`RefreshCoordinator` implements the stale-while-revalidate policy used
by :class:`~prompt_hub.prompt.client.PromptClient`:

* ``fetch_and_store`` – blocking fetch for a cache miss; stores on success.
* ``refresh`` – fire-and-forget background revalidation for a cache hit.
  The fetched body replaces the cached one only when it differs
  structurally; failures are logged and the cached body stays in place.
* ``invalidate_all`` – concurrent re-fetch of a batch of prompts.
"""

from __future__ import annotations

import logging
from concurrent.futures import Executor, ThreadPoolExecutor
from typing import Dict, Iterable, Optional, Union

from .base import RemotePromptSource
from .cache import PromptCache
from .errors import InvalidateCacheError, PromptFetchError
from .models import ChatPrompt, TextPrompt, is_same_prompt

logger = logging.getLogger(__name__)


class RefreshCoordinator:
    """Coordinate prompt fetches against a shared :class:`PromptCache`."""

    def __init__(
        self,
        source: RemotePromptSource,
        cache: PromptCache,
        *,
        max_workers: int = 4,
        executor: Optional[Executor] = None,
    ) -> None:
        """
        Initialize the coordinator.

        Args:
            source: Remote prompt source used for every fetch.
            cache: Cache shared with the facade.
            max_workers: Size of the background refresh pool (ignored when
                ``executor`` is given).
            executor: Optional executor for background refreshes. The
                coordinator only shuts down executors it created itself.
        """
        self._source = source
        self._cache = cache
        self._owns_executor = executor is None
        self._executor = executor or ThreadPoolExecutor(max_workers=max_workers, thread_name_prefix="prompt-refresh")

    def fetch_and_store(self, name: str, *, timeout: Optional[float] = None) -> Union[TextPrompt, ChatPrompt]:
        """Fetch `name` from the source and store it unconditionally.

        Raises:
            PromptFetchError: The fetch failed; the cache is left untouched.
        """
        body = self._source.fetch_prompt(name, timeout=timeout)
        entry = self._cache.store(name, body)
        logger.debug("RefreshCoordinator.fetch_and_store: stored name=%s revision=%d", name, entry.revision)
        return body

    def revalidate(self, name: str) -> bool:
        """Re-fetch `name` and store it only if it changed.

        Fetch errors are logged (metadata only) and swallowed.

        Returns:
            True if the cache entry was replaced.
        """
        try:
            fresh = self._source.fetch_prompt(name)
        except PromptFetchError as exc:
            logger.warning(
                "Prompt refresh failed; keeping cached prompt. name=%s status=%s error=%s",
                name,
                exc.status_code,
                type(exc).__name__,
            )
            return False

        if is_same_prompt(self._cache.lookup(name), fresh):
            logger.debug("RefreshCoordinator.revalidate: unchanged name=%s", name)
            return False

        entry = self._cache.store(name, fresh)
        logger.info("Prompt refreshed: name=%s revision=%d", name, entry.revision)
        return True

    def refresh(self, name: str) -> None:
        """Schedule a background :meth:`revalidate` of `name` and return immediately."""
        try:
            self._executor.submit(self._background_revalidate, name)
        except RuntimeError:
            # Executor already shut down; the cached prompt keeps being served.
            logger.debug("RefreshCoordinator.refresh: skipped after close name=%s", name)

    def _background_revalidate(self, name: str) -> None:
        try:
            self.revalidate(name)
        except Exception as exc:  # pragma: no cover - defensive logging
            logger.error("Background prompt refresh crashed: name=%s error=%s", name, type(exc).__name__)

    def invalidate_all(self, names: Iterable[str], *, timeout: Optional[float] = None) -> None:
        """Re-fetch and store every prompt in `names` concurrently.

        Waits for all fetches. Prompts that were fetched successfully stay
        stored even when others fail.

        Raises:
            InvalidateCacheError: At least one fetch failed.
        """
        unique = list(dict.fromkeys(names))
        if not unique:
            return

        failures: Dict[str, PromptFetchError] = {}
        with ThreadPoolExecutor(max_workers=len(unique), thread_name_prefix="prompt-invalidate") as pool:
            futures = {pool.submit(self.fetch_and_store, name, timeout=timeout): name for name in unique}
        for future, name in futures.items():
            exc = future.exception()
            if exc is None:
                continue
            if not isinstance(exc, PromptFetchError):
                raise exc
            failures[name] = exc

        if failures:
            logger.warning("Prompt cache invalidation failed for %d of %d prompts", len(failures), len(unique))
            raise InvalidateCacheError(failures)

    def close(self, wait: bool = True) -> None:
        """Shut down the background refresh pool if this coordinator owns it."""
        if self._owns_executor:
            self._executor.shutdown(wait=wait)
