"""Filemoon extractor: finds the HLS manifest in the player config.

The JWPlayer setup is either inline or hidden in Dean Edwards packed
JavaScript; unpacked sources are searched before the raw page.  When no
structured assignment is found, any manifest-shaped URL in the page is
taken instead.
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

_CONFIG_PATTERNS = (
    re.compile(r"file\s*:\s*[\"']([^\"']+\.m3u8[^\"']*)", re.IGNORECASE),
    re.compile(r"sources\s*:\s*\[\{file\s*:\s*[\"']([^\"']+)", re.IGNORECASE),
)
_RAW_M3U8_RE = re.compile(r"https?://[^\s\"'<>]+\.m3u8[^\s\"'<>]*", re.IGNORECASE)


def find_manifest(html: str) -> str | None:
    """Return the manifest URL from the player config or the raw page."""
    sources = unpack_all(html) if has_packed_script(html) else []
    sources.append(html)

    for source in sources:
        for pattern in _CONFIG_PATTERNS:
            match = pattern.search(source)
            if match:
                return match.group(1)

    for source in sources:
        match = _RAW_M3U8_RE.search(source)
        if match:
            return match.group(0)
    return None


class FilemoonExtractor(ExtractorBase):
    """Resolves Filemoon embed pages to HLS manifest URLs."""

    host = HostId.FILEMOON
    server = Server.FILEMOON
    terminal_markers = (".m3u8",)

    async def _extract(self, url: str) -> list[StreamCandidate]:
        html = await self._fetcher.fetch_text(url)
        if not html:
            return []

        manifest = find_manifest(html)
        link = absolutize(manifest, url) if manifest else ""
        if not link:
            log.warning("filemoon_no_manifest", url=url)
            return []

        return [
            StreamCandidate(
                server=self.server,
                link=link,
                media_kind=MediaKind.M3U8,
            )
        ]
