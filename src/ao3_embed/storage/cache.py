"""Bounded LRU store for extracted work metadata."""

from __future__ import annotations

import threading
from collections import OrderedDict
from typing import Any

from ao3_embed.domain import WorkMetadata


class WorkCache:
    """Thread-safe LRU mapping from work id to ``WorkMetadata``.

    Entries never expire; the least recently used entry is evicted once
    more than ``max_entries`` are held.
    """

    def __init__(self, max_entries: int = 100):
        if max_entries < 1:
            msg = f"max_entries must be at least 1, got {max_entries}"
            raise ValueError(msg)
        self._max_entries = max_entries
        self._entries: OrderedDict[int, WorkMetadata] = OrderedDict()
        self._lock = threading.Lock()
        self._hits = 0
        self._misses = 0
        self._evictions = 0

    @property
    def max_entries(self) -> int:
        return self._max_entries

    def get(self, work_id: int) -> WorkMetadata | None:
        with self._lock:
            work = self._entries.get(work_id)
            if work is None:
                self._misses += 1
                return None
            self._entries.move_to_end(work_id)
            self._hits += 1
            return work

    def put(self, work: WorkMetadata) -> None:
        with self._lock:
            self._entries[work.id] = work
            self._entries.move_to_end(work.id)
            while len(self._entries) > self._max_entries:
                self._entries.popitem(last=False)
                self._evictions += 1

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()

    def __contains__(self, work_id: object) -> bool:
        with self._lock:
            return work_id in self._entries

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    @property
    def stats(self) -> dict[str, Any]:
        """Get cache statistics."""
        with self._lock:
            return {
                "size": len(self._entries),
                "max_entries": self._max_entries,
                "hits": self._hits,
                "misses": self._misses,
                "evictions": self._evictions,
            }
