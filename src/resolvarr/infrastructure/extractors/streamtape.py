"""Streamtape extractor: reassembles the obfuscated ``get_video`` URL.

The embed page writes the video URL into ``#robotlink`` from an inline
script, and carries the access token separately elsewhere in the
markup.  Older pages only expose ``#norobotlink`` built from two
concatenated string literals.
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
from resolvarr.infrastructure.extractors.base import ExtractorBase

log = structlog.get_logger(__name__)

_ROBOTLINK_RE = re.compile(
    r"getElementById\('robotlink'\)\.innerHTML\s*=\s*['\"]([^'\"]+)['\"]"
)
_TOKEN_RE = re.compile(r"token=([^&'\"]+)")
_NOROBOTLINK_RE = re.compile(
    r"document\.getElementById\('norobotlink'\)\.innerHTML\s*=\s*"
    r"['\"](//[^'\"]+)['\"]\s*\+\s*\('([^']+)'\)"
)


def _https(path: str) -> str:
    """Turn ``//host/x`` or ``/host/x`` into ``https://host/x``."""
    if path.lower().startswith(("http://", "https://")):
        return path
    return "https://" + path.lstrip("/")


class StreamtapeExtractor(ExtractorBase):
    """Resolves Streamtape embed pages to ``get_video`` URLs."""

    host = HostId.STREAMTAPE
    server = Server.STREAMTAPE
    terminal_markers = ("get_video",)

    async def _extract(self, url: str) -> list[StreamCandidate]:
        html = await self._fetcher.fetch_text(url)
        if not html:
            return []

        link_match = _ROBOTLINK_RE.search(html)
        if link_match:
            video_url = _https(link_match.group(1))
            token_match = _TOKEN_RE.search(html)
            if token_match:
                video_url = f"{video_url}&token={token_match.group(1)}"
            return [self._candidate(video_url)]

        alt_match = _NOROBOTLINK_RE.search(html)
        if alt_match:
            return [self._candidate(_https(alt_match.group(1) + alt_match.group(2)))]

        log.warning("streamtape_no_video_link", url=url)
        return []

    @staticmethod
    def _candidate(video_url: str) -> StreamCandidate:
        return StreamCandidate(
            server=Server.STREAMTAPE,
            link=video_url,
            media_kind=MediaKind.MP4,
        )
