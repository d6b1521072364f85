"""Pixeldrain extractor: builds direct download URLs from the file ID.

Share links look like ``https://pixeldrain.com/u/{id}``; API links like
``https://pixeldrain.com/api/file/{id}``.  The download URL is derived
from the ID alone; the info endpoint is only consulted for the MIME
type, and its failure does not prevent a result.
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

_API_BASE = "https://pixeldrain.com/api/file"

_FILE_ID_PATTERNS = (
    re.compile(r"/u/([a-zA-Z0-9]+)"),
    re.compile(r"/api/file/([a-zA-Z0-9]+)"),
)


def extract_file_id(url: str) -> str | None:
    """Extract the file ID from a pixeldrain URL."""
    for pattern in _FILE_ID_PATTERNS:
        match = pattern.search(url)
        if match:
            return match.group(1)
    return None


class PixeldrainExtractor(ExtractorBase):
    """Resolves pixeldrain share links to ``/api/file/{id}?download``."""

    host = HostId.PIXELDRAIN
    server = Server.PIXELDRAIN

    async def _extract(self, url: str) -> list[StreamCandidate]:
        file_id = extract_file_id(url)
        if not file_id:
            log.info("pixeldrain_no_file_id", url=url)
            return []

        info = await self._fetcher.fetch_json(f"{_API_BASE}/{file_id}/info")
        mime_type = ""
        if isinstance(info, dict):
            mime_type = str(info.get("mime_type") or "")

        media_kind = MediaKind.MP4 if "video" in mime_type else MediaKind.MKV
        return [
            StreamCandidate(
                server=self.server,
                link=f"{_API_BASE}/{file_id}?download",
                media_kind=media_kind,
            )
        ]
