from __future__ import annotations

import time
from typing import cast

import structlog
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from resolvarr.infrastructure.config import AppConfig
from resolvarr.interfaces.api.resolve.presenter import envelope_response
from resolvarr.interfaces.app_state import AppState
from resolvarr.interfaces.composition import lifespan

log = structlog.get_logger(__name__)


def build_app(config: AppConfig) -> FastAPI:
    """Build the FastAPI app from configuration only.

    Resources (HTTP client, caches, extractors) are created in lifespan().
    """
    app = FastAPI(
        title="Resolvarr",
        description="Resolves embed and aggregator links into playable streams",
        version="0.1.0",
        lifespan=lifespan,
    )

    app.state = AppState()
    app.state.config = config

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["GET", "POST", "OPTIONS"],
        allow_headers=["Content-Type"],
    )

    from resolvarr.interfaces.api.resolve import router as resolve_router

    app.include_router(resolve_router)

    @app.get("/healthz")
    async def healthz(request: Request) -> JSONResponse:
        state = cast(AppState, request.app.state)
        return envelope_response(
            {
                "status": "ok",
                "cacheStats": {"streams": state.stream_resolver.cache_size},
            }
        )

    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        start = time.perf_counter()
        status_code = 500
        try:
            response = await call_next(request)
            status_code = response.status_code
            return response
        finally:
            log.info(
                "http_request",
                method=request.method,
                path=request.url.path,
                status_code=status_code,
                duration_ms=round((time.perf_counter() - start) * 1000.0, 2),
            )

    return app
