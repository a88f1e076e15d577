"""Pydantic models for WhatsApp Cloud API webhook payloads."""

from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field


class ContactProfile(BaseModel):
    """WhatsApp customer profile."""
    model_config = ConfigDict(extra="allow")
    name: Optional[str] = None


class Contact(BaseModel):
    model_config = ConfigDict(extra="allow")
    wa_id: Optional[str] = None
    profile: Optional[ContactProfile] = None


class TextContent(BaseModel):
    """Text message content."""
    model_config = ConfigDict(extra="allow")
    body: Optional[str] = None


class MediaContent(BaseModel):
    """Image, video, audio or document part; ``filename`` only on documents."""
    model_config = ConfigDict(extra="allow")
    id: Optional[str] = None
    mime_type: Optional[str] = None
    sha256: Optional[str] = None
    caption: Optional[str] = None
    filename: Optional[str] = None


class InboundMessage(BaseModel):
    """Inbound message from a Cloud API webhook."""
    model_config = ConfigDict(extra="allow", populate_by_name=True)
    id: Optional[str] = None
    from_number: Optional[str] = Field(None, alias="from")
    timestamp: Optional[str] = None
    type: str = "unknown"
    text: Optional[TextContent] = None
    image: Optional[MediaContent] = None
    video: Optional[MediaContent] = None
    audio: Optional[MediaContent] = None
    document: Optional[MediaContent] = None

    def media(self) -> Optional[MediaContent]:
        if self.type in {"image", "video", "audio", "document"}:
            return getattr(self, self.type)
        return None


class ValueMetadata(BaseModel):
    model_config = ConfigDict(extra="allow")
    display_phone_number: Optional[str] = None
    phone_number_id: Optional[str] = None


class ChangeValue(BaseModel):
    model_config = ConfigDict(extra="allow")
    messaging_product: Optional[str] = None
    metadata: Optional[ValueMetadata] = None
    contacts: List[Contact] = Field(default_factory=list)
    messages: List[InboundMessage] = Field(default_factory=list)


class Change(BaseModel):
    model_config = ConfigDict(extra="allow")
    field: Optional[str] = None
    value: Optional[ChangeValue] = None


class Entry(BaseModel):
    model_config = ConfigDict(extra="allow")
    id: Optional[str] = None
    changes: List[Change] = Field(default_factory=list)


class WebhookPayload(BaseModel):
    """Cloud API webhook event payload."""
    model_config = ConfigDict(extra="allow")
    object: Optional[str] = None
    entry: List[Entry] = Field(default_factory=list)
