"""Application state container for FastAPI dependency injection."""

from __future__ import annotations

from typing import TYPE_CHECKING

import httpx
from starlette.datastructures import State

from resolvarr.infrastructure.config import AppConfig

if TYPE_CHECKING:
    from resolvarr.application.use_cases import StreamResolver
    from resolvarr.infrastructure.providers import ProviderDirectory


class AppState(State):
    """FastAPI application state.

    Lifecycle managed by composition.py::lifespan().
    """

    config: AppConfig

    http_client: httpx.AsyncClient

    stream_resolver: StreamResolver
    provider_directory: ProviderDirectory
