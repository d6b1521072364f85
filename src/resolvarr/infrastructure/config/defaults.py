"""Built-in configuration values (lowest precedence layer)."""

from __future__ import annotations

from typing import Any

DEFAULT_CONFIG: dict[str, Any] = {
    "app_name": "resolvarr",
    "environment": "dev",
    "http": {
        "timeout_seconds": 15.0,
        "follow_redirects": True,
        "user_agent": (
            "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
            "(KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36"
        ),
    },
    "logging": {
        "level": "INFO",
        "format": None,  # derived from environment in schema.py
    },
    "providers": {
        "source_url": (
            "https://raw.githubusercontent.com/himanshu8443/providers/main/"
            "modflix.json"
        ),
    },
}
