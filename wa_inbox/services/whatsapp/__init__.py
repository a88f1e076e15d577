"""WhatsApp Cloud API integration."""

from .client import FetchedMedia, WhatsAppAPIError, WhatsAppClient, get_whatsapp_client, sent_message_id
from .ingest import process_inbound
from .media import MediaStore, get_media_store
from .models import WebhookPayload
from .normalize import PendingInbound, normalize_inbound
from .signature import verify_meta_signature

__all__ = [
    "FetchedMedia",
    "WhatsAppAPIError",
    "WhatsAppClient",
    "get_whatsapp_client",
    "sent_message_id",
    "process_inbound",
    "MediaStore",
    "get_media_store",
    "WebhookPayload",
    "PendingInbound",
    "normalize_inbound",
    "verify_meta_signature",
]
