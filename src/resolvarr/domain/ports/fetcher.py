"""Port for best-effort page and JSON fetching."""

from __future__ import annotations

from typing import Any, Mapping, Protocol


class PageFetcherPort(Protocol):
    """Fetches remote documents, returning None instead of raising.

    None covers network errors, timeouts, invalid URLs and non-2xx
    responses alike.
    """

    async def fetch_text(
        self,
        url: str,
        *,
        headers: Mapping[str, str] | None = None,
        timeout: float | None = None,
    ) -> str | None:
        """GET *url* and return the decoded body."""
        ...

    async def fetch_json(
        self,
        url: str,
        *,
        headers: Mapping[str, str] | None = None,
    ) -> Any | None:
        """GET *url* and return the parsed JSON body."""
        ...
