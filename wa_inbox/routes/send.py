"""Operator replies sent through the Cloud API."""

from typing import Optional

import httpx
from fastapi import APIRouter, Depends, HTTPException, status

from ..logging_config import logger
from ..models import Direction, EventRecord, MessageKind, SendMessageRequest, SendMessageResponse
from ..services.inbox import InboxService, get_inbox_service
from ..services.tagging import classify
from ..services.whatsapp import WhatsAppClient, get_whatsapp_client, sent_message_id
from ..utils.timestamps import utc_now
from .dependencies import require_operator

router = APIRouter(prefix="/send", tags=["send"], dependencies=[Depends(require_operator)])


@router.post("", response_model=SendMessageResponse)
async def send_message(
    payload: SendMessageRequest,
    inbox: InboxService = Depends(get_inbox_service),
    client: Optional[WhatsAppClient] = Depends(get_whatsapp_client),
) -> SendMessageResponse:
    if client is None:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="WhatsApp sending not configured",
        )

    to = payload.to.strip()
    text = payload.text.strip()
    if not to or not text:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Missing 'to' or 'text'")

    try:
        result = await client.send_text_message(to, text)
    except httpx.HTTPError:
        raise HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail="Send failed")

    message_id = sent_message_id(result)
    # The message is already delivered upstream; logging problems must not turn into an error.
    try:
        inbox.ingest_outgoing(
            EventRecord(
                direction=Direction.OUTGOING,
                customer_id=to,
                occurred_at=utc_now(),
                message_kind=MessageKind.TEXT,
                body=text,
                tags=classify(text),
                external_message_id=message_id,
                raw=result,
            )
        )
    except Exception:
        logger.exception("outgoing log error", extra={"to": to})

    return SendMessageResponse(message_id=message_id, provider_response=result)


__all__ = ["router"]
