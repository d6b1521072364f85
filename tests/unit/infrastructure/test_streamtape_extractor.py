"""Tests for StreamtapeExtractor."""

from __future__ import annotations

import pytest
import respx

from resolvarr.domain.entities.streams import HostId, MediaKind, Server
from resolvarr.infrastructure.common.http_fetcher import HttpxPageFetcher
from resolvarr.infrastructure.extractors.streamtape import StreamtapeExtractor

_URL = "https://streamtape.com/e/abc"


class TestStreamtapeExtractor:
    def test_host(self, fetcher: HttpxPageFetcher) -> None:
        assert StreamtapeExtractor(fetcher).host is HostId.STREAMTAPE

    @pytest.mark.asyncio
    @respx.mock
    async def test_robotlink_with_token(self, fetcher: HttpxPageFetcher) -> None:
        html = """
        <div id="robotlink"></div>
        <script>
        document.getElementById('robotlink').innerHTML = '//streamtape.com/get_video?id=abc&expires=1';
        var x = 'token=XYZ';
        </script>
        """
        respx.get(_URL).respond(200, text=html)

        streams = await StreamtapeExtractor(fetcher).extract(_URL)

        assert len(streams) == 1
        assert streams[0].server is Server.STREAMTAPE
        assert streams[0].media_kind is MediaKind.MP4
        assert streams[0].link == (
            "https://streamtape.com/get_video?id=abc&expires=1&token=XYZ"
        )

    @pytest.mark.asyncio
    @respx.mock
    async def test_norobotlink_fallback(self, fetcher: HttpxPageFetcher) -> None:
        html = (
            "<script>document.getElementById('norobotlink').innerHTML = "
            "'//streamtape.com/get_video?id=abc' + ('&expires=2&stream=1');</script>"
        )
        respx.get(_URL).respond(200, text=html)

        streams = await StreamtapeExtractor(fetcher).extract(_URL)

        assert [s.link for s in streams] == [
            "https://streamtape.com/get_video?id=abc&expires=2&stream=1"
        ]

    @pytest.mark.asyncio
    @respx.mock
    async def test_no_link_pattern(self, fetcher: HttpxPageFetcher) -> None:
        respx.get(_URL).respond(200, text="<h1>Video not found</h1>")
        assert await StreamtapeExtractor(fetcher).extract(_URL) == []

    @pytest.mark.asyncio
    @respx.mock
    async def test_fetch_failure(self, fetcher: HttpxPageFetcher) -> None:
        respx.get(_URL).respond(503)
        assert await StreamtapeExtractor(fetcher).extract(_URL) == []

    def test_terminal_heuristic(self, fetcher: HttpxPageFetcher) -> None:
        ex = StreamtapeExtractor(fetcher)
        assert ex.looks_terminal("https://streamtape.com/get_video?id=1")
        assert not ex.looks_terminal(_URL)
