"""Tests for DoodStreamExtractor."""

from __future__ import annotations

import re

import pytest
import respx

from resolvarr.domain.entities.streams import HostId, MediaKind, Server
from resolvarr.infrastructure.common.http_fetcher import HttpxPageFetcher
from resolvarr.infrastructure.extractors.doodstream import (
    DoodStreamExtractor,
    normalize_mirror,
)

_EMBED_PAGE = """
<html><script>
$.get('/pass_md5/123-456/tok789', function(data) { play(data); });
</script></html>
"""


class TestNormalizeMirror:
    @pytest.mark.parametrize("tld", ["wf", "cx", "la", "pm", "so", "ws", "sh", "to", "re", "yt"])
    def test_mirrors(self, tld: str) -> None:
        assert normalize_mirror(f"https://dood.{tld}/e/abc") == "https://dood.li/e/abc"

    def test_other_domains_untouched(self) -> None:
        assert normalize_mirror("https://doodstream.com/e/abc") == "https://doodstream.com/e/abc"


class TestDoodStreamExtractor:
    def test_host(self, fetcher: HttpxPageFetcher) -> None:
        assert DoodStreamExtractor(fetcher).host is HostId.DOODSTREAM

    @pytest.mark.asyncio
    @respx.mock
    async def test_builds_video_url(self, fetcher: HttpxPageFetcher) -> None:
        respx.get("https://dood.li/e/abc").respond(200, text=_EMBED_PAGE)
        pass_route = respx.get("https://dood.li/pass_md5/123-456/tok789").respond(
            200, text="  https://cdn.dood.video/abc~ \n"
        )

        streams = await DoodStreamExtractor(fetcher).extract("https://dood.wf/e/abc")

        assert len(streams) == 1
        s = streams[0]
        assert s.server is Server.DOODSTREAM
        assert s.media_kind is MediaKind.MP4
        assert s.headers == {"Referer": "https://dood.li/"}
        assert re.fullmatch(
            r"https://cdn\.dood\.video/abc~zUEJeL3mUN[a-z0-9]{10}\?token=tok789&expiry=\d+",
            s.link,
        )
        assert pass_route.calls.last.request.headers["Referer"] == "https://dood.li/e/abc"

    @pytest.mark.asyncio
    @respx.mock
    async def test_missing_pass_md5(self, fetcher: HttpxPageFetcher) -> None:
        respx.get("https://dood.li/e/abc").respond(200, text="<html></html>")
        assert await DoodStreamExtractor(fetcher).extract("https://dood.li/e/abc") == []

    @pytest.mark.asyncio
    @respx.mock
    async def test_invalid_video_base(self, fetcher: HttpxPageFetcher) -> None:
        respx.get("https://dood.li/e/abc").respond(200, text=_EMBED_PAGE)
        respx.get("https://dood.li/pass_md5/123-456/tok789").respond(200, text="RELOAD")
        assert await DoodStreamExtractor(fetcher).extract("https://dood.li/e/abc") == []

    @pytest.mark.asyncio
    @respx.mock
    async def test_pass_md5_fetch_failure(self, fetcher: HttpxPageFetcher) -> None:
        respx.get("https://dood.li/e/abc").respond(200, text=_EMBED_PAGE)
        respx.get("https://dood.li/pass_md5/123-456/tok789").respond(403)
        assert await DoodStreamExtractor(fetcher).extract("https://dood.li/e/abc") == []

    def test_terminal_heuristic(self, fetcher: HttpxPageFetcher) -> None:
        ex = DoodStreamExtractor(fetcher)
        assert ex.looks_terminal("https://cdn.dood.video/x?token=t&expiry=1")
        assert ex.looks_terminal("https://dood.li/pass_md5/1/2")
        assert not ex.looks_terminal("https://dood.li/e/abc")
