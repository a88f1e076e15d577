from __future__ import annotations

import mimetypes

from fastapi import APIRouter, Depends, HTTPException, status
from fastapi.responses import FileResponse

from ..services.whatsapp import MediaStore, get_media_store
from .dependencies import require_operator

router = APIRouter(prefix="/media", tags=["media"], dependencies=[Depends(require_operator)])


# Stored media never changes once written, so it is cached aggressively
@router.get("/{customer_id}/{filename}")
def media_file(
    customer_id: str,
    filename: str,
    media_store: MediaStore = Depends(get_media_store),
) -> FileResponse:
    path = media_store.resolve(customer_id, filename)
    if path is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Not found")
    media_type = mimetypes.guess_type(path.name)[0] or "application/octet-stream"
    return FileResponse(
        path,
        media_type=media_type,
        headers={"Cache-Control": "public, max-age=31536000, immutable"},
    )


__all__ = ["router"]
