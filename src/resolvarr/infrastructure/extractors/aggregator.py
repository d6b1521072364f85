"""Shared redirect-then-scan flow for link-aggregator pages.

Aggregators often serve a stub page whose only job is a client-side
redirect to the real download page.  The stub is followed once; the
resulting document is what the subclasses scan for buttons.
"""

from __future__ import annotations

import re
from html import unescape

import structlog

from resolvarr.domain.entities.streams import Server, StreamCandidate
from resolvarr.infrastructure.common.urls import (
    DIRECT_MEDIA_RE,
    absolutize,
    decode_base64,
    media_kind_for_url,
    origin_of,
)
from resolvarr.infrastructure.extractors.base import ExtractorBase

log = structlog.get_logger(__name__)

VAR_URL_RE = re.compile(r"var\s+url\s*=\s*['\"]([^'\"]+)['\"]")
LOCATION_REPLACE_RE = re.compile(r"location\.replace\(['\"]([^'\"]+)['\"]\)")
WINDOW_LOCATION_RE = re.compile(r"window\.location\s*=\s*['\"]([^'\"]+)['\"]")


class AggregatorExtractorBase(ExtractorBase):
    """Loads the (possibly redirected) document and scans raw media URLs."""

    redirect_patterns: tuple[re.Pattern[str], ...] = ()
    # Decode ``r=<base64>`` redirect targets
    decode_redirect_param = False
    # Raw media URLs containing any of these are ignored
    direct_scan_excludes: tuple[str, ...] = ()

    def redirect_target(self, html: str, page_url: str) -> str:
        """Return the absolute client-side redirect target, or ``""``."""
        raw = ""
        for pattern in self.redirect_patterns:
            match = pattern.search(html)
            if match:
                raw = match.group(1)
                break
        if not raw:
            return ""

        if self.decode_redirect_param and "r=" in raw:
            raw = decode_base64(raw.split("r=", 1)[1]) or raw

        origin = origin_of(page_url)
        return absolutize(raw, f"{origin}/" if origin else page_url)

    async def load_document(self, url: str) -> tuple[str, str] | None:
        """Fetch *url*, following one client-side redirect.

        Returns ``(html, document_url)``; the original page is kept when
        the redirect target cannot be fetched.
        """
        html = await self._fetcher.fetch_text(url)
        if not html:
            return None

        target = self.redirect_target(html, url)
        if target:
            log.info("aggregator_redirect", host=self.host.value, target=target)
            redirected = await self._fetcher.fetch_text(target)
            if redirected:
                return redirected, target
        return html, url

    def scan_direct(self, html: str, seen: set[str]) -> list[StreamCandidate]:
        """Collect bare media-file URLs not already captured structurally."""
        streams: list[StreamCandidate] = []
        for match in DIRECT_MEDIA_RE.finditer(html):
            link = unescape(match.group(0))
            if link in seen or any(x in link for x in self.direct_scan_excludes):
                continue
            seen.add(link)
            streams.append(
                StreamCandidate(
                    server=Server.DIRECT,
                    link=link,
                    media_kind=media_kind_for_url(link),
                )
            )
        return streams
