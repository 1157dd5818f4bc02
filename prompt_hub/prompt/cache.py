"""In-process prompt cache.

This module provides the name-keyed store of last-known-good prompt bodies
shared by the facade and the refresh workers. Entries live for the lifetime
of the process; there is no eviction.
"""

from __future__ import annotations

import threading
from dataclasses import dataclass
from typing import Dict, List, Optional, Union

from .models import ChatPrompt, TextPrompt


@dataclass(frozen=True)
class CacheEntry:
    """A stored prompt body.

    Attributes:
        name: Prompt name the entry is keyed by.
        body: Immutable prompt body.
        revision: Per-name counter, incremented on every store. Two lookups
            returning the same revision observed the same stored entry.
    """

    name: str
    body: Union[TextPrompt, ChatPrompt]
    revision: int


class PromptCache:
    """Thread-safe name -> prompt body store.

    This cache handles:
    - Atomic per-name replacement (entries are swapped whole, never mutated)
    - Concurrent lookups and stores from request and refresh threads
    """

    def __init__(self) -> None:
        self._entries: Dict[str, CacheEntry] = {}
        self._lock = threading.Lock()

    def lookup(self, name: str) -> Optional[Union[TextPrompt, ChatPrompt]]:
        """Return the cached body for `name`, or None on a miss."""
        entry = self.entry(name)
        return entry.body if entry is not None else None

    def entry(self, name: str) -> Optional[CacheEntry]:
        """Return the full cache entry for `name`, or None on a miss."""
        with self._lock:
            return self._entries.get(name)

    def store(self, name: str, body: Union[TextPrompt, ChatPrompt]) -> CacheEntry:
        """Store `body` under `name`, replacing any previous entry.

        Returns:
            The newly stored entry.
        """
        with self._lock:
            previous = self._entries.get(name)
            entry = CacheEntry(name=name, body=body, revision=previous.revision + 1 if previous else 1)
            self._entries[name] = entry
            return entry

    def names(self) -> List[str]:
        """Return the cached prompt names."""
        with self._lock:
            return list(self._entries)

    def __contains__(self, name: object) -> bool:
        with self._lock:
            return name in self._entries

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)
