"""Cache Port - bounded in-process store with per-kind TTL."""

from __future__ import annotations

from typing import Protocol, TypeVar

T = TypeVar("T")


class CacheStorePort(Protocol[T]):
    """Port for a string-keyed store holding values of a single kind.

    Implementations:
      - TtlCacheStore (process memory, lazy expiry, oldest-entry eviction)
    """

    def get(self, key: str) -> T | None:
        """Retrieve a fresh value. None = not found / expired."""
        ...

    def put(self, key: str, value: T) -> None:
        """Store value, stamped with the current time."""
        ...

    def __len__(self) -> int:
        """Number of stored entries, fresh or stale."""
        ...
