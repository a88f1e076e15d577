"""Background processing of acknowledged webhook deliveries."""

from __future__ import annotations

from datetime import datetime
from typing import List, Optional

import httpx

from ...logging_config import logger
from ...models import EventRecord, MediaRef
from ...utils.timestamps import utc_now
from ..inbox import InboxService
from .client import WhatsAppAPIError, WhatsAppClient
from .media import MediaStore
from .normalize import PendingInbound


async def _download(
    item: PendingInbound,
    client: Optional[WhatsAppClient],
    media_store: MediaStore,
) -> Optional[MediaRef]:
    if not item.media_id or client is None:
        return None
    try:
        fetched = await client.fetch_media(item.media_id)
        return media_store.save(item.customer_id, fetched)
    except (httpx.HTTPError, WhatsAppAPIError, OSError) as exc:
        logger.error(
            "download media failed",
            extra={"media_id": item.media_id, "customer_id": item.customer_id, "error": str(exc)},
        )
        return None


async def process_inbound(
    pending: List[PendingInbound],
    inbox: InboxService,
    client: Optional[WhatsAppClient],
    media_store: MediaStore,
    *,
    received_at: Optional[datetime] = None,
) -> List[EventRecord]:
    """Fetch media where possible and append one record per pending message.

    Runs after the webhook has been acknowledged, so failures are only logged.
    """
    moment = received_at or utc_now()
    saved: List[EventRecord] = []
    for item in pending:
        try:
            media_ref = await _download(item, client, media_store)
            record = item.to_record(moment, media_ref)
            inbox.ingest_incoming(record)
            saved.append(record)
        except Exception:
            logger.exception(
                "webhook handler error",
                extra={"customer_id": item.customer_id, "message_id": item.message_id},
            )
    return saved


__all__ = ["process_inbound"]
