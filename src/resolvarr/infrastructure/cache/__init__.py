"""In-process cache stores."""

from __future__ import annotations

from .ttl_store import MAX_ENTRIES, CacheKind, TtlCacheStore

__all__ = ["MAX_ENTRIES", "CacheKind", "TtlCacheStore"]
