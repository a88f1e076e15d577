"""Turn Cloud API webhook payloads into Event Records."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Any, Dict, List, Optional

from ...logging_config import logger
from ...models import Direction, EventRecord, MediaRef, MessageKind
from ..tagging import classify
from .models import InboundMessage, MediaContent, WebhookPayload


@dataclass
class PendingInbound:
    """An inbound message parsed from a webhook, before its media is fetched."""

    customer_id: str
    message_kind: MessageKind
    body: Optional[str]
    display_name: Optional[str] = None
    message_id: Optional[str] = None
    media_id: Optional[str] = None
    mime_type: Optional[str] = None
    media_sha256: Optional[str] = None
    raw: Optional[Dict[str, Any]] = None

    def to_record(self, received_at: datetime, media_ref: Optional[MediaRef] = None) -> EventRecord:
        if media_ref is None and self.media_id:
            media_ref = MediaRef(
                media_id=self.media_id,
                mime_type=self.mime_type,
                sha256=self.media_sha256,
            )
        return EventRecord(
            direction=Direction.INCOMING,
            customer_id=self.customer_id,
            occurred_at=received_at,
            message_kind=self.message_kind,
            body=self.body,
            tags=classify(self.body),
            display_name=self.display_name,
            media_ref=media_ref,
            external_message_id=self.message_id,
            raw=self.raw,
        )


def _body_for(message: InboundMessage, media: Optional[MediaContent]) -> Optional[str]:
    if message.type == "text":
        return message.text.body if message.text else None
    if media is None:
        return None
    if message.type == "document":
        return media.caption or media.filename
    return media.caption


def normalize_inbound(payload: WebhookPayload) -> List[PendingInbound]:
    """Collect every inbound message of the payload; status callbacks yield nothing."""
    pending: List[PendingInbound] = []
    for entry in payload.entry:
        for change in entry.changes:
            if change.field != "messages" or change.value is None:
                continue
            value = change.value
            contacts = {contact.wa_id: contact for contact in value.contacts if contact.wa_id}
            fallback_contact = value.contacts[0] if len(value.contacts) == 1 else None
            for message in value.messages:
                contact = contacts.get(message.from_number) or fallback_contact
                customer_id = (contact.wa_id if contact else None) or message.from_number
                if not customer_id:
                    logger.warning(
                        "inbound message without sender ignored",
                        extra={"message_id": message.id},
                    )
                    continue
                media = message.media()
                pending.append(
                    PendingInbound(
                        customer_id=customer_id,
                        message_kind=MessageKind.from_provider(message.type),
                        body=_body_for(message, media),
                        display_name=contact.profile.name if contact and contact.profile else None,
                        message_id=message.id,
                        media_id=media.id if media else None,
                        mime_type=media.mime_type if media else None,
                        media_sha256=media.sha256 if media else None,
                        raw=message.model_dump(by_alias=True, exclude_none=True),
                    )
                )
    return pending


__all__ = ["PendingInbound", "normalize_inbound"]
