"""MixDrop extractor: reads the player core's ``MDCore.wurl`` assignment.

The assignment is usually protocol-relative (``//s-delivery…``) and is
sometimes only present inside packed JavaScript.
"""

from __future__ import annotations

import re

import structlog

from resolvarr.domain.entities.streams import (
    HostId,
    MediaKind,
    Server,
    StreamCandidate,
)
from resolvarr.infrastructure.common.packer import has_packed_script, unpack_all
from resolvarr.infrastructure.common.urls import absolutize
from resolvarr.infrastructure.extractors.base import ExtractorBase

log = structlog.get_logger(__name__)

_WURL_RE = re.compile(r"MDCore\.wurl\s*=\s*[\"']([^\"']+)")


def find_wurl(html: str) -> str | None:
    match = _WURL_RE.search(html)
    if match:
        return match.group(1)
    if has_packed_script(html):
        for source in unpack_all(html):
            match = _WURL_RE.search(source)
            if match:
                return match.group(1)
    return None


class MixdropExtractor(ExtractorBase):
    """Resolves MixDrop embed pages to delivery URLs."""

    host = HostId.MIXDROP
    server = Server.MIXDROP
    terminal_markers = ("delivery",)

    async def _extract(self, url: str) -> list[StreamCandidate]:
        html = await self._fetcher.fetch_text(url)
        if not html:
            return []

        wurl = find_wurl(html)
        link = absolutize(wurl, url) if wurl else ""
        if not link:
            log.warning("mixdrop_no_wurl", url=url)
            return []

        return [
            StreamCandidate(
                server=self.server,
                link=link,
                media_kind=MediaKind.MP4,
            )
        ]
