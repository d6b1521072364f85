"""httpx-backed page fetcher that degrades every failure to None."""

from __future__ import annotations

from typing import Any, Mapping

import httpx
import structlog

log = structlog.get_logger(__name__)

DEFAULT_USER_AGENT = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) "
    "AppleWebKit/537.36 Chrome/120.0.0.0 Safari/537.36"
)

DEFAULT_HEADERS: dict[str, str] = {
    "User-Agent": DEFAULT_USER_AGENT,
    "Accept": "text/html,application/xhtml+xml,application/xml;q=0.9,*/*;q=0.8",
    "Accept-Language": "en-US,en;q=0.9",
}

DEFAULT_TIMEOUT = 15.0


class HttpxPageFetcher:
    """Fetches documents through a shared ``httpx.AsyncClient``.

    Network errors, timeouts, malformed URLs and non-2xx statuses all
    yield None; nothing is retried.  With ``follow_redirects=False`` a 3xx
    answer counts as a non-2xx status.
    """

    def __init__(
        self,
        http_client: httpx.AsyncClient,
        *,
        timeout: float = DEFAULT_TIMEOUT,
        user_agent: str | None = None,
        follow_redirects: bool = True,
    ) -> None:
        self._http = http_client
        self._timeout = timeout
        self._follow_redirects = follow_redirects
        self._base_headers = dict(DEFAULT_HEADERS)
        if user_agent:
            self._base_headers["User-Agent"] = user_agent

    def _headers(self, headers: Mapping[str, str] | None) -> dict[str, str]:
        return {**self._base_headers, **(headers or {})}

    async def _get(
        self,
        url: str,
        headers: Mapping[str, str] | None,
        timeout: float | None,
    ) -> httpx.Response | None:
        log.debug("fetch", url=url)
        try:
            resp = await self._http.get(
                url,
                headers=self._headers(headers),
                follow_redirects=self._follow_redirects,
                timeout=timeout if timeout is not None else self._timeout,
            )
        except httpx.TimeoutException:
            log.warning("fetch_timeout", url=url)
            return None
        except httpx.HTTPError as exc:
            log.warning("fetch_failed", url=url, error=str(exc))
            return None
        except httpx.InvalidURL:
            log.warning("fetch_invalid_url", url=url)
            return None

        if not resp.is_success:
            log.warning("fetch_http_error", status=resp.status_code, url=url)
            return None
        return resp

    async def fetch_text(
        self,
        url: str,
        *,
        headers: Mapping[str, str] | None = None,
        timeout: float | None = None,
    ) -> str | None:
        resp = await self._get(url, headers, timeout)
        return resp.text if resp is not None else None

    async def fetch_json(
        self,
        url: str,
        *,
        headers: Mapping[str, str] | None = None,
    ) -> Any | None:
        resp = await self._get(url, headers, None)
        if resp is None:
            return None
        try:
            return resp.json()
        except ValueError:
            log.warning("fetch_invalid_json", url=url)
            return None
