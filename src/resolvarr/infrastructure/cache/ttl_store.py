"""Bounded in-memory key/value store with a per-kind TTL.

Freshness is evaluated lazily on read; nothing sweeps stale entries in
the background.  The only way a store shrinks is the eviction that
happens when a new key is inserted into a full store.
"""

from __future__ import annotations

import threading
import time
from enum import Enum
from typing import Callable, Generic, TypeVar

import structlog

log = structlog.get_logger(__name__)

T = TypeVar("T")

# Hard ceiling on entries per store instance
MAX_ENTRIES = 1000


class CacheKind(Enum):
    """Value kinds with their fixed TTL in seconds."""

    STREAMS = 15 * 60
    META = 30 * 60
    POSTS = 5 * 60
    PROVIDERS = 10 * 60

    @property
    def ttl_seconds(self) -> int:
        return self.value


class CacheEntry(Generic[T]):
    """A value together with the wall-clock time it was stored."""

    __slots__ = ("value", "stored_at")

    def __init__(self, value: T, stored_at: float) -> None:
        self.value = value
        self.stored_at = stored_at

    def is_fresh(self, now: float, ttl: float) -> bool:
        return now - self.stored_at < ttl


class TtlCacheStore(Generic[T]):
    """String-keyed store for one value kind.

    Thread-safe: a single lock guards reads and the evict-then-insert
    step, so concurrent writers never push the store past ``MAX_ENTRIES``.
    """

    def __init__(
        self,
        kind: CacheKind,
        *,
        clock: Callable[[], float] = time.time,
    ) -> None:
        self._kind = kind
        self._clock = clock
        self._entries: dict[str, CacheEntry[T]] = {}
        self._lock = threading.Lock()

    @property
    def kind(self) -> CacheKind:
        return self._kind

    @property
    def ttl_seconds(self) -> int:
        return self._kind.ttl_seconds

    def get(self, key: str) -> T | None:
        """Return the stored value if present and fresh, else None."""
        with self._lock:
            entry = self._entries.get(key)
            if entry is None:
                return None
            if not entry.is_fresh(self._clock(), self.ttl_seconds):
                log.debug("cache_entry_stale", kind=self._kind.name, key=key)
                return None
            return entry.value

    def put(self, key: str, value: T) -> None:
        """Store *value*, evicting the oldest entry if the store is full."""
        with self._lock:
            if key not in self._entries and len(self._entries) >= MAX_ENTRIES:
                self._evict_oldest()
            self._entries[key] = CacheEntry(value, self._clock())

    def _evict_oldest(self) -> None:
        # Caller holds the lock
        oldest_key = min(self._entries, key=lambda k: self._entries[k].stored_at)
        del self._entries[oldest_key]
        log.debug("cache_evict_oldest", kind=self._kind.name, key=oldest_key)

    def __contains__(self, key: object) -> bool:
        with self._lock:
            return key in self._entries

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)
