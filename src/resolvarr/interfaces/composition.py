"""Composition root: dependency injection via FastAPI lifespan."""

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import AsyncIterator, cast

import httpx
import structlog
from fastapi import FastAPI

from resolvarr.application.use_cases import StreamResolver
from resolvarr.domain.entities.streams import ProviderEntry, StreamCandidate
from resolvarr.infrastructure.cache import CacheKind, TtlCacheStore
from resolvarr.infrastructure.common.http_fetcher import HttpxPageFetcher
from resolvarr.infrastructure.config.schema import AppConfig
from resolvarr.infrastructure.extractors import HostClassifier, create_extractors
from resolvarr.infrastructure.providers import ProviderDirectory
from resolvarr.interfaces.app_state import AppState

log = structlog.get_logger(__name__)


def create_http_client(config: AppConfig) -> httpx.AsyncClient:
    return httpx.AsyncClient(
        timeout=httpx.Timeout(config.http_timeout_seconds),
        headers={"User-Agent": config.http_user_agent},
        follow_redirects=config.http_follow_redirects,
    )


def build_page_fetcher(
    config: AppConfig, http_client: httpx.AsyncClient
) -> HttpxPageFetcher:
    return HttpxPageFetcher(
        http_client,
        timeout=config.http_timeout_seconds,
        user_agent=config.http_user_agent,
        follow_redirects=config.http_follow_redirects,
    )


def build_stream_resolver(
    config: AppConfig, http_client: httpx.AsyncClient
) -> StreamResolver:
    """Wire fetcher, extractors, classifier and stream cache together."""
    fetcher = build_page_fetcher(config, http_client)
    classifier = HostClassifier()
    return StreamResolver(
        extractors=create_extractors(fetcher, classifier),
        classifier=classifier,
        cache=TtlCacheStore[list[StreamCandidate]](CacheKind.STREAMS),
    )


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """
    Build shared resources at startup and release them at shutdown.

    Order:
        1. HTTP client (shared by every extractor)
        2. Stream resolver (fetcher, classifier, extractors, stream cache)
        3. Provider directory (own PROVIDERS cache)
    """
    state = cast(AppState, app.state)
    config = state.config

    state.http_client = create_http_client(config)
    log.info(
        "http_client_initialized",
        timeout_seconds=config.http_timeout_seconds,
        follow_redirects=config.http_follow_redirects,
    )

    state.stream_resolver = build_stream_resolver(config, state.http_client)
    log.info("stream_resolver_initialized")

    state.provider_directory = ProviderDirectory(
        build_page_fetcher(config, state.http_client),
        TtlCacheStore[dict[str, ProviderEntry]](CacheKind.PROVIDERS),
        source_url=config.providers_source_url,
    )
    log.info("provider_directory_initialized", source=config.providers_source_url)

    log.info("app_startup_complete")

    try:
        yield
    finally:
        await state.http_client.aclose()
        log.info("http_client_closed")
        log.info("app_shutdown_complete")
