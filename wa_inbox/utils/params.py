"""Lenient parsing of operator query parameters.

Invalid filter input never turns into a 4xx: limits are clamped into range,
and anything unreadable falls back to the documented default.
"""

from __future__ import annotations

import math
from typing import Any, Optional

# A century; larger windows overflow `timedelta`
MAX_RECENT_HOURS = 24 * 365 * 100.0


def clamp_limit(raw: Any, *, default: int, maximum: int) -> int:
    """Parse *raw* as a positive int, falling back to *default* and capping at *maximum*."""
    try:
        value = int(str(raw).strip())
    except (TypeError, ValueError):
        value = default
    if value <= 0:
        value = default
    return max(1, min(value, maximum))


def parse_flag(raw: Any) -> bool:
    if raw is None:
        return False
    return str(raw).strip().lower() in {"1", "true", "yes", "on"}


def parse_hours(raw: Any) -> Optional[float]:
    """Positive finite hour count, or None to disable the recency filter."""
    if raw is None or str(raw).strip() == "":
        return None
    try:
        value = float(str(raw).strip())
    except ValueError:
        return None
    if not math.isfinite(value) or value <= 0:
        return None
    return min(value, MAX_RECENT_HOURS)


def normalize_text(raw: Any) -> Optional[str]:
    if raw is None:
        return None
    value = str(raw).strip().lower()
    return value or None


__all__ = ["MAX_RECENT_HOURS", "clamp_limit", "normalize_text", "parse_flag", "parse_hours"]
