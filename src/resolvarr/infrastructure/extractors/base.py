"""Common base for host extractors.

Subclasses implement ``_extract``; ``extract`` turns any exception into
an empty result so a broken host never takes the caller down with it.
"""

from __future__ import annotations

import structlog

from resolvarr.domain.entities.streams import HostId, Server, StreamCandidate
from resolvarr.domain.ports.fetcher import PageFetcherPort

log = structlog.get_logger(__name__)


class ExtractorBase:
    """Shared wiring: fetcher injection, error absorption, terminal check."""

    host: HostId
    # Producer label of every candidate; None for aggregators, which mix servers
    server: Server | None = None
    # Substrings marking a link that needs no further extraction
    terminal_markers: tuple[str, ...] = ()

    def __init__(self, fetcher: PageFetcherPort) -> None:
        self._fetcher = fetcher

    def looks_terminal(self, link: str) -> bool:
        return any(marker in link for marker in self.terminal_markers)

    async def extract(self, url: str) -> list[StreamCandidate]:
        log.debug("extract_started", host=self.host.value, url=url)
        try:
            streams = await self._extract(url)
        except Exception:
            log.exception("extract_error", host=self.host.value, url=url)
            return []
        log.info("extract_finished", host=self.host.value, count=len(streams))
        return streams

    async def _extract(self, url: str) -> list[StreamCandidate]:
        raise NotImplementedError
