"""Remote provider directory (site name -> current base URL).

The directory is a small JSON document maintained upstream because the
catalog sites rotate domains.  It is cached for the PROVIDERS TTL and
replaced by a built-in mapping whenever the fetch fails.
"""

from __future__ import annotations

from typing import Any

import structlog

from resolvarr.domain.entities.streams import ProviderEntry
from resolvarr.domain.ports.cache import CacheStorePort
from resolvarr.domain.ports.fetcher import PageFetcherPort

log = structlog.get_logger(__name__)

DEFAULT_SOURCE_URL = (
    "https://raw.githubusercontent.com/himanshu8443/providers/main/modflix.json"
)

_CACHE_KEY = "providers"

FALLBACK_PROVIDERS: dict[str, ProviderEntry] = {
    "Vega": ProviderEntry(key="Vega", name="vegamovies", url="https://vegamovies.gt"),
    "Moviesmod": ProviderEntry(
        key="Moviesmod", name="Moviesmod", url="https://moviesmod.build"
    ),
}

# Short names callers use for directory keys
_ALIASES = {
    "vega": "Vega",
    "vegamovies": "Vega",
    "mod": "Moviesmod",
    "moviesmod": "Moviesmod",
    "multi": "multi",
    "uhd": "UhdMovies",
}

_DEFAULT_KEY = "Vega"


def parse_directory(data: Any) -> dict[str, ProviderEntry]:
    """Convert the raw JSON mapping, skipping malformed entries."""
    if not isinstance(data, dict):
        return {}
    entries: dict[str, ProviderEntry] = {}
    for key, value in data.items():
        if not isinstance(value, dict):
            continue
        url = value.get("url")
        if not isinstance(url, str) or not url:
            continue
        entries[str(key)] = ProviderEntry(
            key=str(key), name=str(value.get("name") or key), url=url
        )
    return entries


class ProviderDirectory:
    """Looks up provider base URLs from the cached remote directory."""

    def __init__(
        self,
        fetcher: PageFetcherPort,
        cache: CacheStorePort[dict[str, ProviderEntry]],
        source_url: str = DEFAULT_SOURCE_URL,
    ) -> None:
        self._fetcher = fetcher
        self._cache = cache
        self._source_url = source_url

    async def entries(self) -> dict[str, ProviderEntry]:
        cached = self._cache.get(_CACHE_KEY)
        if cached is not None:
            return cached

        entries = parse_directory(await self._fetcher.fetch_json(self._source_url))
        if not entries:
            log.warning("provider_directory_fallback", source=self._source_url)
            return dict(FALLBACK_PROVIDERS)

        self._cache.put(_CACHE_KEY, entries)
        log.info("provider_directory_loaded", count=len(entries))
        return entries

    async def base_url(self, provider: str) -> str:
        """Return the base URL (no trailing slash) for *provider*."""
        entries = await self.entries()
        wanted = provider.lower()

        for key, entry in entries.items():
            if key.lower() == wanted or entry.name.lower() == wanted:
                return entry.url.rstrip("/")

        mapped = _ALIASES.get(wanted)
        if mapped and mapped in entries:
            return entries[mapped].url.rstrip("/")

        default = entries.get(_DEFAULT_KEY) or FALLBACK_PROVIDERS[_DEFAULT_KEY]
        return default.url.rstrip("/")
