from __future__ import annotations

import argparse
import asyncio
import json
import os
import sys
from collections.abc import Iterable
from pathlib import Path
from typing import Any

import structlog
import uvicorn

from resolvarr.infrastructure.config import AppConfig, load_config
from resolvarr.infrastructure.logging.setup import configure_logging
from resolvarr.interfaces.composition import build_stream_resolver, create_http_client
from resolvarr.interfaces.main import build_app

log = structlog.get_logger(__name__)


def _parse_args(argv: Iterable[str] | None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(prog="resolvarr")

    parser.add_argument(
        "--host",
        default=None,
        help="Bind host (overrides HOST env).",
    )
    parser.add_argument(
        "--port",
        default=None,
        type=int,
        help="Bind port (overrides PORT env).",
    )
    parser.add_argument(
        "--config",
        default=None,
        help="Path to YAML config file.",
    )
    parser.add_argument(
        "--dotenv",
        default=None,
        help="Path to .env file.",
    )
    parser.add_argument(
        "--log-level",
        default=None,
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Override log level.",
    )
    parser.add_argument(
        "--log-format",
        default=None,
        choices=["json", "console"],
        help="Override log format.",
    )
    parser.add_argument(
        "--resolve",
        default=None,
        metavar="URL",
        help="Resolve a single link, print the result as JSON and exit.",
    )

    return parser.parse_args(argv)


async def resolve_once(config: AppConfig, link: str) -> dict[str, Any]:
    """Resolve *link* with a short-lived client and return the API payload."""
    async with create_http_client(config) as http_client:
        resolver = build_stream_resolver(config, http_client)
        resolution = await resolver.resolve_stream(link)
    return resolution.to_dict()


def start(argv: Iterable[str] | None = None) -> int:
    """Process entrypoint: load config once, then serve or resolve."""
    if argv is None:
        argv = sys.argv[1:]

    args = _parse_args(argv)

    cli_overrides: dict[str, Any] = {}
    if args.log_level:
        cli_overrides["log_level"] = args.log_level
    if args.log_format:
        cli_overrides["log_format"] = args.log_format

    config = load_config(
        config_path=Path(args.config) if args.config else None,
        dotenv_path=Path(args.dotenv) if args.dotenv else None,
        cli_overrides=cli_overrides,
    )

    log_config = configure_logging(config)

    if args.resolve:
        payload = asyncio.run(resolve_once(config, args.resolve))
        print(json.dumps(payload, indent=2))
        return 0 if payload["streams"] else 1

    host = args.host or os.getenv("HOST", "0.0.0.0")
    port = int(args.port or os.getenv("PORT", "7980"))

    uvicorn.run(
        build_app(config),
        host=host,
        port=port,
        log_config=log_config,
    )
    return 0


if __name__ == "__main__":
    raise SystemExit(start())
