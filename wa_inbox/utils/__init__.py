from .filenames import extension_for_mime, safe_file_name
from .params import clamp_limit, normalize_text, parse_flag, parse_hours
from .responses import error_response
from .timestamps import (
    UTC,
    ensure_utc,
    parse_timestamp,
    to_storage_timestamp,
    utc_now,
    within_last_hours,
)

__all__ = [
    "error_response",
    "extension_for_mime",
    "safe_file_name",
    "clamp_limit",
    "normalize_text",
    "parse_flag",
    "parse_hours",
    "UTC",
    "ensure_utc",
    "parse_timestamp",
    "to_storage_timestamp",
    "utc_now",
    "within_last_hours",
]
