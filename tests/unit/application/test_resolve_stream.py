"""Tests for the StreamResolver use case."""

from __future__ import annotations

from typing import Any
from unittest.mock import AsyncMock, MagicMock

import pytest

from resolvarr.application.use_cases.resolve_stream import StreamResolver
from resolvarr.domain.entities.streams import (
    HostId,
    MediaKind,
    Server,
    StreamCandidate,
)
from resolvarr.infrastructure.cache import CacheKind, TtlCacheStore
from resolvarr.infrastructure.extractors.classifier import HostClassifier


def _candidate(server: Server, link: str, kind: MediaKind = MediaKind.MP4) -> StreamCandidate:
    return StreamCandidate(server=server, link=link, media_kind=kind)


def _extractor(
    host: HostId,
    results: list[StreamCandidate] | None = None,
    *,
    terminal: tuple[str, ...] = (),
    side_effect: Any = None,
) -> MagicMock:
    ex = MagicMock()
    ex.host = host
    ex.extract = AsyncMock(return_value=results or [], side_effect=side_effect)
    ex.looks_terminal = MagicMock(
        side_effect=lambda link: any(m in link for m in terminal)
    )
    return ex


def _resolver(clock, *extractors: MagicMock) -> StreamResolver:
    by_host = {ex.host: ex for ex in extractors}
    for host in HostId:
        by_host.setdefault(host, _extractor(host))
    return StreamResolver(
        extractors=by_host,
        classifier=HostClassifier(),
        cache=TtlCacheStore(CacheKind.STREAMS, clock=clock),
    )


class TestSingleHost:
    @pytest.mark.asyncio
    async def test_embed_link_resolved_directly(self, clock) -> None:
        video = _candidate(Server.STREAMTAPE, "https://streamtape.com/get_video?id=1")
        streamtape = _extractor(HostId.STREAMTAPE, [video], terminal=("get_video",))
        resolver = _resolver(clock, streamtape)

        streams = await resolver.resolve("https://streamtape.com/e/1")

        assert streams == [video]
        streamtape.extract.assert_awaited_once_with("https://streamtape.com/e/1")

    @pytest.mark.asyncio
    async def test_terminal_candidates_not_reextracted(self, clock) -> None:
        manifest = _candidate(
            Server.FILEMOON, "https://cdn.be/hls/master.m3u8", MediaKind.M3U8
        )
        filemoon = _extractor(HostId.FILEMOON, [manifest], terminal=(".m3u8",))
        resolver = _resolver(clock, filemoon)

        await resolver.resolve("https://filemoon.sx/e/1")

        assert filemoon.extract.await_count == 1


class TestFallbacks:
    @pytest.mark.asyncio
    async def test_unclassified_tries_hubcloud_then_gdflix(self, clock) -> None:
        found = _candidate(Server.CF_WORKER, "https://w.workers.dev/f", MediaKind.MKV)
        hubcloud = _extractor(HostId.HUBCLOUD, [])
        gdflix = _extractor(HostId.GDFLIX, [found])
        resolver = _resolver(clock, hubcloud, gdflix)

        streams = await resolver.resolve("https://unknown.example/file/1")

        assert streams == [found]
        hubcloud.extract.assert_awaited_once()
        gdflix.extract.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_first_non_empty_fallback_wins(self, clock) -> None:
        found = _candidate(Server.HUB_CDN, "https://hubcdn.fans/dl/1", MediaKind.MKV)
        hubcloud = _extractor(HostId.HUBCLOUD, [found])
        gdflix = _extractor(HostId.GDFLIX, [])
        resolver = _resolver(clock, hubcloud, gdflix)

        assert await resolver.resolve("https://unknown.example/x") == [found]
        gdflix.extract.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_nothing_found(self, clock) -> None:
        resolver = _resolver(clock)
        assert await resolver.resolve("https://unknown.example/x") == []


class TestDeepResolve:
    @pytest.mark.asyncio
    async def test_embed_candidates_replaced_by_descendants(self, clock) -> None:
        embed = _candidate(Server.STREAMTAPE, "https://streamtape.com/e/st1")
        direct = _candidate(Server.DIRECT, "https://raw.cdn.org/a.mp4")
        video = _candidate(Server.STREAMTAPE, "https://streamtape.com/get_video?id=st1")
        gdflix = _extractor(HostId.GDFLIX, [embed, direct])
        streamtape = _extractor(HostId.STREAMTAPE, [video], terminal=("get_video",))
        resolver = _resolver(clock, gdflix, streamtape)

        streams = await resolver.resolve("https://new.gdflix.dad/file/1")

        assert streams == [video, direct]
        streamtape.extract.assert_awaited_once_with("https://streamtape.com/e/st1")

    @pytest.mark.asyncio
    async def test_empty_descendants_keep_original(self, clock) -> None:
        embed = _candidate(Server.MIXDROP, "https://mixdrop.ag/e/1")
        gdflix = _extractor(HostId.GDFLIX, [embed])
        mixdrop = _extractor(HostId.MIXDROP, [], terminal=("delivery",))
        resolver = _resolver(clock, gdflix, mixdrop)

        assert await resolver.resolve("https://new.gdflix.dad/file/1") == [embed]

    @pytest.mark.asyncio
    async def test_single_pass_only(self, clock) -> None:
        first = _candidate(Server.FILEMOON, "https://filemoon.sx/e/1", MediaKind.M3U8)
        second = _candidate(Server.FILEMOON, "https://filemoon.sx/e/2", MediaKind.M3U8)
        gdflix = _extractor(HostId.GDFLIX, [first])
        filemoon = _extractor(HostId.FILEMOON, [second], terminal=(".m3u8",))
        resolver = _resolver(clock, gdflix, filemoon)

        streams = await resolver.resolve("https://new.gdflix.dad/file/1")

        assert streams == [second]
        assert filemoon.extract.await_count == 1

    @pytest.mark.asyncio
    async def test_non_embed_servers_untouched(self, clock) -> None:
        pd = _candidate(
            Server.PIXELDRAIN, "https://pixeldrain.com/api/file/a?download", MediaKind.MKV
        )
        hubcloud = _extractor(HostId.HUBCLOUD, [pd])
        pixeldrain = _extractor(HostId.PIXELDRAIN, [])
        resolver = _resolver(clock, hubcloud, pixeldrain)

        assert await resolver.resolve("https://hubcloud.one/drive/1") == [pd]
        pixeldrain.extract.assert_not_awaited()


class TestCaching:
    @pytest.mark.asyncio
    async def test_results_cached(self, clock) -> None:
        video = _candidate(Server.MIXDROP, "https://s-delivery.mx/v.mp4")
        mixdrop = _extractor(HostId.MIXDROP, [video], terminal=("delivery",))
        resolver = _resolver(clock, mixdrop)

        await resolver.resolve("https://mixdrop.ag/e/1")
        again = await resolver.resolve("https://mixdrop.ag/e/1")

        assert again == [video]
        assert mixdrop.extract.await_count == 1
        assert resolver.cache_size == 1

    @pytest.mark.asyncio
    async def test_cache_expires(self, clock) -> None:
        video = _candidate(Server.MIXDROP, "https://s-delivery.mx/v.mp4")
        mixdrop = _extractor(HostId.MIXDROP, [video], terminal=("delivery",))
        resolver = _resolver(clock, mixdrop)

        await resolver.resolve("https://mixdrop.ag/e/1")
        clock.advance(CacheKind.STREAMS.ttl_seconds)
        await resolver.resolve("https://mixdrop.ag/e/1")

        assert mixdrop.extract.await_count == 2

    @pytest.mark.asyncio
    async def test_empty_results_not_cached(self, clock) -> None:
        streamtape = _extractor(HostId.STREAMTAPE, [])
        resolver = _resolver(clock, streamtape)

        await resolver.resolve("https://streamtape.com/e/1")
        await resolver.resolve("https://streamtape.com/e/1")

        assert resolver.cache_size == 0
        assert streamtape.extract.await_count == 2

    @pytest.mark.asyncio
    async def test_returned_list_is_a_copy(self, clock) -> None:
        video = _candidate(Server.MIXDROP, "https://s-delivery.mx/v.mp4")
        resolver = _resolver(
            clock, _extractor(HostId.MIXDROP, [video], terminal=("delivery",))
        )

        streams = await resolver.resolve("https://mixdrop.ag/e/1")
        streams.clear()

        assert await resolver.resolve("https://mixdrop.ag/e/1") == [video]


class TestResolveStream:
    @pytest.mark.asyncio
    async def test_cached_flag(self, clock) -> None:
        video = _candidate(Server.MIXDROP, "https://s-delivery.mx/v.mp4")
        resolver = _resolver(
            clock, _extractor(HostId.MIXDROP, [video], terminal=("delivery",))
        )

        first = await resolver.resolve_stream("https://mixdrop.ag/e/1")
        second = await resolver.resolve_stream("https://mixdrop.ag/e/1")

        assert first.cached is False
        assert second.cached is True
        assert second.resolved == video.link
        assert second.original == "https://mixdrop.ag/e/1"

    @pytest.mark.asyncio
    async def test_empty_resolution(self, clock) -> None:
        resolution = await _resolver(clock).resolve_stream("https://unknown.example/x")
        assert resolution.streams == []
        assert resolution.media_kind == "embed"
        assert resolution.cached is False


class TestFailures:
    @pytest.mark.asyncio
    async def test_extractor_exception_becomes_empty(self, clock) -> None:
        streamtape = _extractor(HostId.STREAMTAPE, side_effect=RuntimeError("boom"))
        resolver = _resolver(clock, streamtape)

        assert await resolver.resolve("https://streamtape.com/e/1") == []

    @pytest.mark.asyncio
    async def test_failing_fallback_does_not_stop_next(self, clock) -> None:
        found = _candidate(Server.R2_STORAGE, "https://x.r2.dev/f.mkv", MediaKind.MKV)
        hubcloud = _extractor(HostId.HUBCLOUD, side_effect=RuntimeError("boom"))
        gdflix = _extractor(HostId.GDFLIX, [found])
        resolver = _resolver(clock, hubcloud, gdflix)

        assert await resolver.resolve("https://unknown.example/x") == [found]

    @pytest.mark.asyncio
    async def test_missing_extractor(self, clock) -> None:
        resolver = StreamResolver(
            extractors={},
            classifier=HostClassifier(),
            cache=TtlCacheStore(CacheKind.STREAMS, clock=clock),
        )
        assert await resolver.resolve("https://streamtape.com/e/1") == []
