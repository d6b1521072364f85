"""JSON envelope shared by every API route.

Success: ``{success, data, cached, timestamp}``
Failure: ``{success: false, error, timestamp}``

``timestamp`` is milliseconds since the epoch.
"""

from __future__ import annotations

import time
from typing import Any

from fastapi.responses import JSONResponse


def _now_ms() -> int:
    return int(time.time() * 1000)


def envelope_response(
    data: Any, *, cached: bool = False, status_code: int = 200
) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={
            "success": 200 <= status_code < 300,
            "data": data,
            "cached": cached,
            "timestamp": _now_ms(),
        },
        headers={"Cache-Control": "public, max-age=300" if cached else "no-cache"},
    )


def error_response(message: str, *, status_code: int = 400) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={"success": False, "error": message, "timestamp": _now_ms()},
    )
