"""Local storage for media downloaded from WhatsApp."""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from typing import Optional
from urllib.parse import quote

from ...config import get_settings
from ...logging_config import logger
from ...models import MediaRef
from ...utils.filenames import extension_for_mime, safe_file_name
from .client import FetchedMedia


class MediaStore:
    """Files live at ``media/<customer>/<media id>.<ext>`` and are never overwritten."""

    def __init__(self, base_dir: Path, *, url_prefix: str = "/media"):
        self._media_dir = base_dir / "media"
        self._url_prefix = url_prefix.rstrip("/")

    def customer_dir(self, customer_id: str) -> Path:
        return self._media_dir / safe_file_name(customer_id or "unknown")

    def url_for(self, customer_id: str, filename: str) -> str:
        return f"{self._url_prefix}/{quote(safe_file_name(customer_id), safe='')}/{quote(filename, safe='')}"

    def save(self, customer_id: str, media: FetchedMedia) -> MediaRef:
        directory = self.customer_dir(customer_id)
        directory.mkdir(parents=True, exist_ok=True)
        filename = f"{safe_file_name(media.media_id)}.{extension_for_mime(media.mime_type)}"
        path = directory / filename
        if not path.exists():
            path.write_bytes(media.content)
        else:
            logger.debug("media already stored", extra={"media_id": media.media_id, "path": str(path)})
        return MediaRef(
            media_id=media.media_id,
            mime_type=media.mime_type,
            sha256=media.sha256,
            local_path=str(path),
            local_url=self.url_for(customer_id, filename),
        )

    def resolve(self, customer_id: str, filename: str) -> Optional[Path]:
        """Path of a stored file, or ``None`` if it is missing or escapes the customer folder."""
        base = self.customer_dir(customer_id).resolve()
        candidate = (base / safe_file_name(filename)).resolve()
        if base not in candidate.parents:
            return None
        if not candidate.is_file():
            return None
        return candidate


@lru_cache(maxsize=1)
def get_media_store() -> MediaStore:
    return MediaStore(get_settings().data_dir)


__all__ = ["MediaStore", "get_media_store"]
