"""Timestamp helpers shared by the stores and the query layer."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone
from typing import Any, Optional

from dateutil import parser as date_parser

from ..logging_config import logger


UTC = timezone.utc


def utc_now() -> datetime:
    """Return the current time in UTC."""

    return datetime.now(UTC)


def ensure_utc(moment: datetime) -> datetime:
    """Treat naive datetimes as UTC and convert aware ones to UTC."""

    if moment.tzinfo is None:
        return moment.replace(tzinfo=UTC)
    return moment.astimezone(UTC)


def to_storage_timestamp(moment: datetime) -> str:
    """Normalize timestamps before writing them to disk, keeping full precision."""

    return ensure_utc(moment).isoformat().replace("+00:00", "Z")


def parse_timestamp(value: Any) -> Optional[datetime]:
    """Parse a stored timestamp leniently; ``None`` when it cannot be read."""

    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        return ensure_utc(value)
    try:
        return ensure_utc(date_parser.isoparse(str(value)))
    except (ValueError, OverflowError):
        pass
    try:
        return ensure_utc(date_parser.parse(str(value)))
    except (ValueError, OverflowError):
        logger.debug("unparseable timestamp ignored", extra={"value": str(value)})
        return None


def within_last_hours(moment: Optional[datetime], hours: float, *, now: Optional[datetime] = None) -> bool:
    """Return True when *moment* lies no more than *hours* before *now*."""

    if moment is None:
        return False
    reference = ensure_utc(now) if now is not None else utc_now()
    try:
        window = timedelta(hours=hours)
    except OverflowError:
        return True
    return reference - ensure_utc(moment) <= window


__all__ = [
    "UTC",
    "ensure_utc",
    "parse_timestamp",
    "to_storage_timestamp",
    "utc_now",
    "within_last_hours",
]
