"""Filesystem-safe naming for customer ids and media files."""

from __future__ import annotations

import re
from typing import Optional

_UNSAFE_CHARS = re.compile(r'[\\/:*?"<>|]')
_WHITESPACE = re.compile(r"\s+")


def safe_file_name(name: Optional[str]) -> str:
    """Replace path separators and reserved characters so *name* is a plain file name."""
    cleaned = _UNSAFE_CHARS.sub("_", str(name or ""))
    cleaned = _WHITESPACE.sub(" ", cleaned).strip()
    # "." and ".." would still resolve outside the target directory
    if cleaned.strip(".") == "":
        return cleaned.replace(".", "_")
    return cleaned


_MIME_EXTENSIONS = (
    ("image/jpeg", "jpg"),
    ("image/png", "png"),
    ("image/webp", "webp"),
    ("image/gif", "gif"),
    ("video/mp4", "mp4"),
    ("video/quicktime", "mov"),
    ("audio/ogg", "ogg"),
    ("audio/mpeg", "mp3"),
    ("audio/mp4", "m4a"),
    ("application/pdf", "pdf"),
)


def extension_for_mime(mime_type: Optional[str]) -> str:
    normalized = (mime_type or "").lower()
    for prefix, extension in _MIME_EXTENSIONS:
        if prefix in normalized:
            return extension
    return "bin"


__all__ = ["extension_for_mime", "safe_file_name"]
