"""Memoizing cache of Pokémon detail records.

Each name owns a single slot. While a record is being loaded the slot holds the
asyncio task doing the work, so callers arriving before it finishes await the
same task instead of starting another fetch. When the task succeeds the slot is
replaced with the record; when it fails the slot is emptied so the next call
starts over.
"""

import asyncio
import logging
from collections.abc import Awaitable, Callable
from functools import partial
from typing import Any

from pokedex.catalog.models import DetailRecord
from pokedex.utils.cache.backends import CacheBackend, MemoryBackend

logger = logging.getLogger(__name__)


class DetailCache:
    """Name-keyed store of detail records and in-flight loads."""

    def __init__(self, backend: CacheBackend | None = None) -> None:
        """Initialize the cache.

        Args:
            backend: Storage backend, defaults to an in-memory dictionary
        """
        self._backend: CacheBackend = backend or MemoryBackend()
        self._stats = {
            "hits": 0,
            "misses": 0,
            "joins": 0,
            "sets": 0,
            "evictions": 0,
        }

    @staticmethod
    def _key(name: str) -> str:
        return name.casefold()

    def has(self, name: str) -> bool:
        """Return True if a finished record is cached for `name`."""
        return isinstance(self._backend.get(self._key(name)), DetailRecord)

    def is_pending(self, name: str) -> bool:
        """Return True if a load for `name` is in flight."""
        return isinstance(self._backend.get(self._key(name)), asyncio.Future)

    def get(self, name: str) -> DetailRecord | None:
        """Get the cached record for `name`, or None if absent or still loading."""
        value = self._backend.get(self._key(name))
        if isinstance(value, DetailRecord):
            self._stats["hits"] += 1
            logger.debug("Detail cache hit for %s", name)
            return value

        self._stats["misses"] += 1
        return None

    def put(self, name: str, record: DetailRecord) -> None:
        """Store a record for `name`, replacing whatever the slot held."""
        self._backend.set(self._key(name), record)
        self._stats["sets"] += 1
        logger.debug("Cached details for %s", name)

    async def get_or_load(
        self, name: str, loader: Callable[[], Awaitable[DetailRecord]]
    ) -> DetailRecord:
        """Return the record for `name`, loading it at most once.

        Args:
            name: Pokémon name
            loader: Zero-argument coroutine function producing the record

        Returns:
            The cached or freshly loaded record

        Raises:
            Whatever `loader` raises; the slot is left empty in that case
        """
        key = self._key(name)
        slot = self._backend.get(key)

        if isinstance(slot, DetailRecord):
            self._stats["hits"] += 1
            return slot

        if isinstance(slot, asyncio.Future):
            self._stats["joins"] += 1
            logger.debug("Joining in-flight detail load for %s", name)
            task = slot
        else:
            self._stats["misses"] += 1
            task = asyncio.ensure_future(loader())
            self._backend.set(key, task)
            task.add_done_callback(partial(self._settle, key))

        # A cancelled caller must not cancel the load other callers share
        return await asyncio.shield(task)

    def _settle(self, key: str, task: "asyncio.Future[DetailRecord]") -> None:
        """Replace a finished task's slot with its record, or empty it on failure."""
        if self._backend.get(key) is not task:
            return

        if task.cancelled() or task.exception() is not None:
            self._backend.delete(key)
            self._stats["evictions"] += 1
            logger.debug("Dropped failed detail load for %s", key)
            return

        self._backend.set(key, task.result())
        self._stats["sets"] += 1

    def clear(self) -> None:
        """Remove every record and pending load."""
        self._backend.clear()

    def names(self) -> list[str]:
        """Keys of all finished records."""
        return [
            key
            for key in self._backend.keys()
            if isinstance(self._backend.get(key), DetailRecord)
        ]

    def get_stats(self) -> dict[str, Any]:
        """Get cache statistics including hit rate."""
        total_requests = self._stats["hits"] + self._stats["misses"] + self._stats["joins"]
        hit_rate = (
            (self._stats["hits"] + self._stats["joins"]) / total_requests
            if total_requests > 0
            else 0.0
        )
        return {
            **self._stats,
            "hit_rate": round(hit_rate * 100, 2),
            "total_requests": total_requests,
            "entries": len(self.names()),
        }

    def __len__(self) -> int:
        return len(self.names())

    def __repr__(self) -> str:
        stats = self.get_stats()
        return f"<DetailCache entries={stats['entries']} hit_rate={stats['hit_rate']}%>"
