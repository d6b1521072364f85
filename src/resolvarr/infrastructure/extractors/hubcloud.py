"""HubCloud / V-Cloud extractor: scans download buttons by destination.

Every button link is sorted into a small taxonomy by the domain it
points at (Cloudflare worker, object storage, pixeldrain, HubCDN, or a
plain media file).  The page text is then scanned for bare media URLs
the buttons did not cover.
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
from resolvarr.infrastructure.common.html_selectors import iter_hrefs, parse_html
from resolvarr.infrastructure.common.urls import (
    absolutize,
    is_placeholder,
    media_kind_for_url,
    pixeldrain_direct_url,
)
from resolvarr.infrastructure.extractors.aggregator import (
    LOCATION_REPLACE_RE,
    VAR_URL_RE,
    WINDOW_LOCATION_RE,
    AggregatorExtractorBase,
)

log = structlog.get_logger(__name__)

SELECTORS = (
    ".btn-success.btn-lg",
    ".btn-success",
    ".btn-danger",
    ".btn-primary",
    ".btn-secondary",
    'a[href*="pixeldrain"]',
    'a[href*="workers.dev"]',
    'a[href*="hubcdn"]',
    'a[href*="cloudflarestorage"]',
    'a[href*="r2.dev"]',
    'a[href*=".mp4"]',
    'a[href*=".mkv"]',
    'a[href*=".m3u8"]',
)

_MEDIA_EXT_RE = re.compile(r"\.(?:mp4|mkv|m3u8)", re.IGNORECASE)

# Gateway pages that still need a click, not a file
_GATEWAY_MARKER = "/?id="


def classify_link(link: str) -> StreamCandidate | None:
    """Sort a button link into the HubCloud link taxonomy."""
    lowered = link.lower()
    if "cloudflarestorage" in lowered or "r2.dev" in lowered:
        server, target = Server.CF_STORAGE, link
    elif "workers.dev" in lowered or (
        ".dev" in lowered and _GATEWAY_MARKER not in lowered
    ):
        server, target = Server.CF_WORKER, link
    elif "pixeldrain" in lowered:
        server, target = Server.PIXELDRAIN, pixeldrain_direct_url(link)
    elif "hubcdn" in lowered and _GATEWAY_MARKER not in lowered:
        server, target = Server.HUB_CDN, link
    elif _MEDIA_EXT_RE.search(link):
        return StreamCandidate(
            server=Server.DIRECT, link=link, media_kind=media_kind_for_url(link)
        )
    else:
        return None
    return StreamCandidate(server=server, link=target, media_kind=MediaKind.MKV)


class HubCloudExtractor(AggregatorExtractorBase):
    """Resolves HubCloud / V-Cloud pages into download candidates."""

    host = HostId.HUBCLOUD
    redirect_patterns = (VAR_URL_RE, LOCATION_REPLACE_RE, WINDOW_LOCATION_RE)
    decode_redirect_param = True
    direct_scan_excludes = ("example", "sample")

    async def _extract(self, url: str) -> list[StreamCandidate]:
        loaded = await self.load_document(url)
        if loaded is None:
            return []
        html, document_url = loaded

        soup = parse_html(html)
        seen: set[str] = set()
        streams: list[StreamCandidate] = []

        for _tag, href in iter_hrefs(soup, SELECTORS):
            if is_placeholder(href):
                continue
            link = absolutize(href, document_url)
            if not link or link in seen:
                continue
            seen.add(link)
            log.debug("hubcloud_link", link=link[:80])

            candidate = classify_link(link)
            if candidate is not None:
                streams.append(candidate)

        streams.extend(self.scan_direct(html, seen))
        return streams
