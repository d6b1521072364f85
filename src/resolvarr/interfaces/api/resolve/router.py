"""Stream resolution and provider directory endpoints."""

from __future__ import annotations

from typing import Any, cast

import structlog
from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse

from resolvarr.interfaces.api.resolve.presenter import envelope_response, error_response
from resolvarr.interfaces.app_state import AppState

log = structlog.get_logger(__name__)

router = APIRouter(prefix="/api", tags=["resolve"])


async def _link_param(request: Request) -> str | None:
    """Read ``link`` from the query string, or from a JSON body on POST."""
    link = request.query_params.get("link")
    if link or request.method != "POST":
        return link or None

    if not await request.body():
        return None
    try:
        body: Any = await request.json()
    except ValueError:
        log.debug("resolve_body_unparseable")
        return None

    if isinstance(body, dict):
        value = body.get("link")
        if isinstance(value, str) and value:
            return value
    return None


@router.api_route("/resolve", methods=["GET", "POST"])
@router.api_route("/stream", methods=["GET", "POST"])
async def resolve(request: Request) -> JSONResponse:
    """Resolve an embed/aggregator link into playable stream candidates.

    Always answers 200 when a link was given, even if nothing was found
    (``streams`` is then empty and ``type`` is ``"embed"``).
    """
    link = await _link_param(request)
    if not link:
        return error_response("Link parameter required", status_code=400)

    state = cast(AppState, request.app.state)
    log.info("resolve_request", link=link)

    try:
        resolution = await state.stream_resolver.resolve_stream(link)
    except Exception:
        log.exception("resolve_request_failed", link=link)
        return error_response("Internal server error", status_code=500)

    return envelope_response(resolution.to_dict(), cached=resolution.cached)


@router.get("/providers")
@router.get("/urls")
async def providers(request: Request) -> JSONResponse:
    """Return the provider directory as ``{key: {name, url}}``.

    With ``?provider=<key or alias>`` only that provider's base URL is
    returned; unknown names fall back to the default provider.
    """
    state = cast(AppState, request.app.state)
    provider = request.query_params.get("provider")
    if provider:
        url = await state.provider_directory.base_url(provider)
        return envelope_response({"provider": provider, "url": url})

    entries = await state.provider_directory.entries()
    return envelope_response(
        {key: {"name": entry.name, "url": entry.url} for key, entry in entries.items()}
    )
