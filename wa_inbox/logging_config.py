from __future__ import annotations

import logging
import os

logger = logging.getLogger("wa_inbox.server")

_LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def _resolve_level(raw: str | None) -> int:
    level = logging.getLevelName((raw or "INFO").strip().upper())
    return level if isinstance(level, int) else logging.INFO


def configure_logging(level: str | None = None) -> None:
    """Configure root logging once; ``INBOX_LOG_LEVEL`` picks the level when *level* is unset."""
    if logger.handlers or logging.getLogger().handlers:
        return

    logging.basicConfig(
        level=_resolve_level(level or os.getenv("INBOX_LOG_LEVEL")),
        format=_LOG_FORMAT,
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    # Graph API request lines would otherwise log every media download
    for noisy in ("httpx", "httpcore"):
        logging.getLogger(noisy).setLevel(logging.WARNING)


__all__ = ["configure_logging", "logger"]
