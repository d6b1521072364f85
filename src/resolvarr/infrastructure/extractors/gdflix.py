"""GDFlix / NexDrive extractor.

Same redirect-then-scan shape as HubCloud with its own button set.
GDFlix pages frequently link onward to a HubCloud page, whose results
are merged in, and to embed hosts, which are reported by domain only
(their own extractors run later, during deep resolve).
"""

from __future__ import annotations

import structlog

from resolvarr.domain.entities.streams import (
    HostId,
    MediaKind,
    Server,
    StreamCandidate,
)
from resolvarr.domain.ports.extractor import StreamExtractorPort
from resolvarr.domain.ports.fetcher import PageFetcherPort
from resolvarr.infrastructure.common.html_selectors import (
    element_text,
    find_href_by_text,
    find_href_containing,
    iter_hrefs,
    parse_html,
)
from resolvarr.infrastructure.common.urls import (
    absolutize,
    is_placeholder,
    pixeldrain_direct_url,
)
from resolvarr.infrastructure.extractors.aggregator import (
    LOCATION_REPLACE_RE,
    WINDOW_LOCATION_RE,
    AggregatorExtractorBase,
)
from resolvarr.infrastructure.extractors.classifier import HostClassifier

log = structlog.get_logger(__name__)

SELECTORS = (
    ".btn-outline-success",
    ".btn-success",
    ".btn-danger",
    ".btn-primary",
    'a[href*="cloudflarestorage"]',
    'a[href*="r2.dev"]',
    'a[href*="pixeldrain"]',
    'a[href*="workers.dev"]',
    'a[href*="streamtape"]',
    'a[href*="dood"]',
    'a[href*="filemoon"]',
    'a[href*="mixdrop"]',
)

HUBCLOUD_LINK_TEXTS = ("V-Cloud", "HubCloud", "Hub-Cloud")
HUBCLOUD_HREF_FRAGMENTS = ("hubcloud", "vcloud")


def classify_button(link: str, text: str) -> StreamCandidate | None:
    """Sort a GDFlix button into a candidate; None leaves it unclaimed."""
    lowered = link.lower()
    if "cloudflarestorage" in lowered or "r2.dev" in lowered:
        server, target = Server.R2_STORAGE, link
    elif "pixeldrain" in lowered:
        server, target = Server.PIXELDRAIN, pixeldrain_direct_url(link)
    elif "workers.dev" in lowered:
        server, target = Server.CF_WORKER, link
    elif "fast" in text or "gdrive" in text:
        server, target = Server.FAST_DL, link
    else:
        return None
    return StreamCandidate(server=server, link=target, media_kind=MediaKind.MKV)


class GDFlixExtractor(AggregatorExtractorBase):
    """Resolves GDFlix / NexDrive pages into download candidates."""

    host = HostId.GDFLIX
    redirect_patterns = (LOCATION_REPLACE_RE, WINDOW_LOCATION_RE)
    direct_scan_excludes = ("example",)

    def __init__(
        self,
        fetcher: PageFetcherPort,
        hubcloud: StreamExtractorPort,
        classifier: HostClassifier | None = None,
    ) -> None:
        super().__init__(fetcher)
        self._hubcloud = hubcloud
        self._classifier = classifier or HostClassifier()

    async def _extract(self, url: str) -> list[StreamCandidate]:
        loaded = await self.load_document(url)
        if loaded is None:
            return []
        html, document_url = loaded

        soup = parse_html(html)
        seen: set[str] = set()
        streams: list[StreamCandidate] = []

        for tag, href in iter_hrefs(soup, SELECTORS):
            if is_placeholder(href):
                continue
            link = absolutize(href, document_url)
            if not link or link in seen:
                continue
            candidate = classify_button(link, element_text(tag).lower())
            if candidate is None:
                continue
            seen.add(link)
            log.debug("gdflix_link", link=link[:80], server=candidate.server.value)
            streams.append(candidate)

        hub_href = find_href_by_text(soup, HUBCLOUD_LINK_TEXTS) or find_href_containing(
            soup, HUBCLOUD_HREF_FRAGMENTS
        )
        hub_link = absolutize(hub_href, document_url) if hub_href else ""
        if hub_link and hub_link not in seen:
            seen.add(hub_link)
            log.info("gdflix_to_hubcloud", link=hub_link)
            streams.extend(await self._hubcloud.extract(hub_link))

        streams.extend(self._scan_embed_links(soup, seen))
        streams.extend(self.scan_direct(html, seen))
        return streams

    def _scan_embed_links(self, soup, seen: set[str]) -> list[StreamCandidate]:
        """Report absolute links to embed hosts without extracting them."""
        streams: list[StreamCandidate] = []
        for anchor in soup.select("a[href^='http']"):
            link = str(anchor.get("href", "")).strip()
            if not link or link in seen:
                continue
            server = self._classifier.embed_server(link)
            if server is None:
                continue
            seen.add(link)
            media_kind = MediaKind.M3U8 if server is Server.FILEMOON else MediaKind.MP4
            streams.append(
                StreamCandidate(server=server, link=link, media_kind=media_kind)
            )
        return streams
