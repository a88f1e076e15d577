"""WhatsApp Cloud API webhook routes."""

from typing import Optional

from fastapi import APIRouter, BackgroundTasks, Depends, HTTPException, Query, Request, status
from fastapi.responses import JSONResponse, PlainTextResponse
from pydantic import ValidationError

from ..config import Settings, get_settings
from ..logging_config import logger
from ..services.inbox import InboxService, get_inbox_service
from ..services.whatsapp import (
    MediaStore,
    WhatsAppClient,
    WebhookPayload,
    get_media_store,
    get_whatsapp_client,
    normalize_inbound,
    process_inbound,
    verify_meta_signature,
)
from ..utils.timestamps import utc_now

router = APIRouter(prefix="/webhook", tags=["webhook"])


@router.get("", response_class=PlainTextResponse)
def verify_webhook(
    mode: str = Query("", alias="hub.mode"),
    token: str = Query("", alias="hub.verify_token"),
    challenge: str = Query("", alias="hub.challenge"),
    settings: Settings = Depends(get_settings),
) -> PlainTextResponse:
    """Answer Meta's subscription handshake."""
    if settings.verify_token and mode == "subscribe" and token == settings.verify_token:
        logger.info("Webhook verified")
        return PlainTextResponse(challenge, status_code=status.HTTP_200_OK)
    logger.warning("Webhook verify failed", extra={"mode": mode})
    raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Forbidden")


@router.post("", response_class=JSONResponse)
async def receive_webhook(
    request: Request,
    background_tasks: BackgroundTasks,
    settings: Settings = Depends(get_settings),
    inbox: InboxService = Depends(get_inbox_service),
    media_store: MediaStore = Depends(get_media_store),
    client: Optional[WhatsAppClient] = Depends(get_whatsapp_client),
) -> JSONResponse:
    """Handle webhook events from the Cloud API.

    The delivery is acknowledged as soon as it is authenticated and parsed;
    media download and log appends run after the response is sent.
    """
    raw_body = await request.body()

    if settings.app_secret:
        signature_header = request.headers.get("X-Hub-Signature-256", "")
        if not verify_meta_signature(raw_body, signature_header, settings.app_secret):
            logger.warning("Invalid webhook signature")
            raise HTTPException(
                status_code=status.HTTP_401_UNAUTHORIZED,
                detail="Invalid signature",
            )

    try:
        payload = WebhookPayload.model_validate_json(raw_body)
    except ValidationError as exc:
        logger.error("Failed to parse webhook payload", extra={"error": str(exc)})
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Invalid payload",
        )

    pending = normalize_inbound(payload)
    if pending:
        background_tasks.add_task(
            process_inbound,
            pending,
            inbox,
            client,
            media_store,
            received_at=utc_now(),
        )
    else:
        logger.debug("Webhook carried no inbound messages")

    return JSONResponse({"received": True}, status_code=status.HTTP_200_OK)


__all__ = ["router"]
