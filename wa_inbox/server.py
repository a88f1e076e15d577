#!/usr/bin/env python3
"""Run the inbox API under Uvicorn."""

import argparse
import logging
import os

import uvicorn

from .config import get_settings


def _parse_args(settings) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="WhatsApp customer-service inbox")
    parser.add_argument("--host", default=settings.server_host, help=f"Host to bind (default: {settings.server_host})")
    parser.add_argument("--port", type=int, default=settings.server_port, help=f"Port to bind (default: {settings.server_port})")
    parser.add_argument("--data-dir", help=f"Log, state and media root (default: {settings.data_dir})")
    parser.add_argument("--log-level", default=os.getenv("INBOX_LOG_LEVEL", "info"), help="Logging level (default: info)")
    parser.add_argument("--reload", action="store_true", help="Reload on code changes (development only)")
    return parser.parse_args()


def main() -> None:
    args = _parse_args(get_settings())

    # Settings are read at import time by the app, so overrides go through the environment
    if args.data_dir:
        os.environ["INBOX_DATA_DIR"] = args.data_dir
    os.environ["INBOX_LOG_LEVEL"] = args.log_level
    get_settings.cache_clear()

    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("watchfiles.main").setLevel(logging.WARNING)

    uvicorn.run(
        "wa_inbox.app:app",
        host=args.host,
        port=args.port,
        reload=args.reload,
        log_level=args.log_level.lower(),
        access_log=False,
    )


if __name__ == "__main__":  # pragma: no cover - CLI invocation guard
    main()
