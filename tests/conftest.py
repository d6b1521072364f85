"""Shared test fixtures for the Resolvarr test suite."""

from __future__ import annotations

from collections.abc import AsyncIterator

import httpx
import pytest

from resolvarr.domain.entities.streams import MediaKind, Server, StreamCandidate
from resolvarr.infrastructure.common.http_fetcher import HttpxPageFetcher


class FakeClock:
    """Manually advanced clock for TTL tests."""

    def __init__(self, now: float = 1_000_000.0) -> None:
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture()
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture()
async def http_client() -> AsyncIterator[httpx.AsyncClient]:
    """Real httpx.AsyncClient for use with respx mocking."""
    async with httpx.AsyncClient() as client:
        yield client


@pytest.fixture()
def fetcher(http_client: httpx.AsyncClient) -> HttpxPageFetcher:
    return HttpxPageFetcher(http_client, timeout=5.0)


@pytest.fixture()
def mp4_candidate() -> StreamCandidate:
    return StreamCandidate(
        server=Server.DIRECT,
        link="https://cdn.example.org/movie.mp4",
        media_kind=MediaKind.MP4,
    )
