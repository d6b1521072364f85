"""Stream resolution use case.

Input link -> cache -> host classification -> extractor (or aggregator
fallback) -> one deep-resolve pass over embed-host candidates -> cache.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Protocol

import structlog

from resolvarr.domain.entities.streams import (
    EMBED_HOSTS,
    HostId,
    StreamCandidate,
    StreamResolution,
)
from resolvarr.domain.ports.cache import CacheStorePort
from resolvarr.domain.ports.extractor import StreamExtractorPort

log = structlog.get_logger(__name__)

# Tried in order for URLs no marker matches; aggregator-A pages are the
# most common shape among unclassified links.
FALLBACK_HOSTS: tuple[HostId, ...] = (HostId.HUBCLOUD, HostId.GDFLIX)


class _Classifier(Protocol):
    """Maps a URL onto a known host type."""

    def classify(self, url: str) -> HostId | None: ...


class StreamResolver:
    """Resolves an opaque embed link into directly playable candidates.

    Owns the stream cache: only non-empty results are written, so a
    host that fails transiently is retried in full on the next call.
    """

    def __init__(
        self,
        *,
        extractors: Mapping[HostId, StreamExtractorPort],
        classifier: _Classifier,
        cache: CacheStorePort[list[StreamCandidate]],
        fallback_hosts: tuple[HostId, ...] = FALLBACK_HOSTS,
    ) -> None:
        self._extractors = dict(extractors)
        self._classifier = classifier
        self._cache = cache
        self._fallback_hosts = fallback_hosts

    @property
    def cache_size(self) -> int:
        return len(self._cache)

    async def resolve_stream(self, link: str) -> StreamResolution:
        """Resolve *link* and report whether the answer came from cache."""
        cached = self._cache.get(link)
        if cached is not None:
            log.debug("stream_cache_hit", url=link)
            return StreamResolution(original=link, streams=list(cached), cached=True)
        streams = await self.resolve(link)
        return StreamResolution(original=link, streams=streams)

    async def resolve(self, url: str) -> list[StreamCandidate]:
        """Return playable candidates for *url* (possibly empty, never raises)."""
        cached = self._cache.get(url)
        if cached is not None:
            log.debug("stream_cache_hit", url=url)
            return list(cached)

        host = self._classifier.classify(url)
        if host is not None:
            log.info("stream_host_classified", host=host.value, url=url)
            streams = await self._run(host, url)
        else:
            log.info("stream_host_unclassified", url=url)
            streams = await self._run_fallbacks(url)

        deep = await self._deep_resolve(streams)
        final = deep or streams

        if final:
            self._cache.put(url, final)
        log.info("stream_resolved", url=url, count=len(final))
        return list(final)

    async def _run_fallbacks(self, url: str) -> list[StreamCandidate]:
        for host in self._fallback_hosts:
            streams = await self._run(host, url)
            if streams:
                return streams
        return []

    async def _deep_resolve(
        self, streams: list[StreamCandidate]
    ) -> list[StreamCandidate]:
        """Re-extract embed-host candidates that are not terminal yet.

        Runs once; results of this pass are never resolved again.
        """
        resolved: list[StreamCandidate] = []
        for stream in streams:
            host = EMBED_HOSTS.get(stream.server)
            extractor = self._extractors.get(host) if host is not None else None
            if extractor is None or extractor.looks_terminal(stream.link):
                resolved.append(stream)
                continue

            descendants = await self._run(host, stream.link)
            if descendants:
                log.debug(
                    "stream_deep_resolved",
                    server=stream.server.value,
                    count=len(descendants),
                )
                resolved.extend(descendants)
            else:
                resolved.append(stream)
        return resolved

    async def _run(self, host: HostId, url: str) -> list[StreamCandidate]:
        """Invoke the extractor for *host*, absorbing any failure."""
        extractor = self._extractors.get(host)
        if extractor is None:
            log.warning("stream_extractor_missing", host=host.value)
            return []
        try:
            return list(await extractor.extract(url))
        except Exception:
            log.exception("stream_extractor_error", host=host.value, url=url)
            return []
