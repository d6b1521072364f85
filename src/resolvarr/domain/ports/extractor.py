"""Port for extracting stream candidates from a host page URL."""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from resolvarr.domain.entities.streams import HostId, StreamCandidate


@runtime_checkable
class StreamExtractorPort(Protocol):
    """Extracts playable links from one known host type.

    Implementations encode site-specific parsing (inline-script patterns,
    redirect pages, button selectors, token endpoints).
    """

    @property
    def host(self) -> HostId:
        """Host type this extractor handles."""
        ...

    async def extract(self, url: str) -> list[StreamCandidate]:
        """Return every candidate found behind *url*.

        Never raises; any failure yields an empty list.
        """
        ...

    def looks_terminal(self, link: str) -> bool:
        """True when *link* is already a final, directly playable URL."""
        ...
