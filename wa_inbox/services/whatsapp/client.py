"""WhatsApp client for the Meta Graph (Cloud) API."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

import httpx

from ...config import get_settings
from ...logging_config import logger


class WhatsAppAPIError(RuntimeError):
    """Raised when the Graph API answers with an unusable payload."""


@dataclass(frozen=True)
class FetchedMedia:
    media_id: str
    content: bytes
    mime_type: Optional[str] = None
    sha256: Optional[str] = None


class WhatsAppClient:
    """Client for WhatsApp Cloud API."""

    BASE_URL = "https://graph.facebook.com"

    def __init__(
        self,
        access_token: str,
        phone_number_id: str,
        *,
        api_version: str = "v25.0",
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self.access_token = access_token
        self.phone_number_id = phone_number_id
        self.api_version = api_version
        self._transport = transport
        self._client: Optional[httpx.AsyncClient] = None

    async def _get_client(self) -> httpx.AsyncClient:
        """Get or create async HTTP client."""
        if self._client is None or self._client.is_closed:
            self._client = httpx.AsyncClient(
                base_url=f"{self.BASE_URL}/{self.api_version}",
                headers={"Authorization": f"Bearer {self.access_token}"},
                timeout=30.0,
                transport=self._transport,
            )
        return self._client

    async def send_text_message(self, to: str, message: str) -> dict:
        """Send a text message to a WhatsApp user.

        Args:
            to: Recipient wa_id / phone number in international format
            message: Text message content (max 4096 characters)

        Returns:
            Graph API response carrying the sent message id under ``messages[0].id``
        """
        client = await self._get_client()

        payload = {
            "messaging_product": "whatsapp",
            "to": to,
            "type": "text",
            "text": {"body": message[:4096]},
        }

        logger.info(
            "Sending WhatsApp message",
            extra={"to": to, "message_length": len(message)},
        )

        try:
            response = await client.post(f"/{self.phone_number_id}/messages", json=payload)
            response.raise_for_status()
            result = response.json()
        except httpx.HTTPStatusError as exc:
            logger.error(
                "WhatsApp API error",
                extra={
                    "status_code": exc.response.status_code,
                    "response": exc.response.text,
                },
            )
            raise
        except httpx.HTTPError as exc:
            logger.error("Failed to send WhatsApp message", extra={"error": str(exc)})
            raise

        logger.info("WhatsApp message sent", extra={"message_id": sent_message_id(result)})
        return result

    async def fetch_media(self, media_id: str) -> FetchedMedia:
        """Resolve a media id to its download URL, then download the binary."""
        client = await self._get_client()

        try:
            meta_response = await client.get(f"/{media_id}")
            meta_response.raise_for_status()
            meta = meta_response.json()
            url = meta.get("url")
            if not url:
                raise WhatsAppAPIError(f"media {media_id} metadata missing url")
            binary_response = await client.get(url)
            binary_response.raise_for_status()
        except httpx.HTTPStatusError as exc:
            logger.error(
                "WhatsApp media download error",
                extra={
                    "media_id": media_id,
                    "status_code": exc.response.status_code,
                    "response": exc.response.text,
                },
            )
            raise

        return FetchedMedia(
            media_id=media_id,
            content=binary_response.content,
            mime_type=meta.get("mime_type"),
            sha256=meta.get("sha256"),
        )

    async def close(self) -> None:
        """Close the HTTP client."""
        if self._client and not self._client.is_closed:
            await self._client.aclose()
            self._client = None


def sent_message_id(result: dict) -> Optional[str]:
    messages = result.get("messages") if isinstance(result, dict) else None
    if isinstance(messages, list) and messages and isinstance(messages[0], dict):
        return messages[0].get("id")
    return None


_whatsapp_client: Optional[WhatsAppClient] = None


def get_whatsapp_client() -> Optional[WhatsAppClient]:
    """Get the singleton WhatsApp client instance."""
    global _whatsapp_client

    if _whatsapp_client is None:
        settings = get_settings()
        if settings.whatsapp_configured:
            _whatsapp_client = WhatsAppClient(
                access_token=settings.wa_token,
                phone_number_id=settings.phone_number_id,
                api_version=settings.graph_api_version,
            )
        else:
            logger.warning("WhatsApp client not configured: missing WA_TOKEN or PHONE_NUMBER_ID")
            return None

    return _whatsapp_client
