from __future__ import annotations

from datetime import datetime
from enum import Enum
from typing import Any, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from ..utils.timestamps import ensure_utc


class Direction(str, Enum):
    INCOMING = "incoming"
    OUTGOING = "outgoing"


class MessageKind(str, Enum):
    TEXT = "text"
    IMAGE = "image"
    VIDEO = "video"
    AUDIO = "audio"
    DOCUMENT = "document"
    UNKNOWN = "unknown"

    @classmethod
    def from_provider(cls, value: Optional[str]) -> "MessageKind":
        try:
            return cls((value or "").lower())
        except ValueError:
            return cls.UNKNOWN


class MediaRef(BaseModel):
    """Pointer to a binary held by the media store; the core never reads it."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    media_id: str
    mime_type: Optional[str] = None
    sha256: Optional[str] = None
    local_path: Optional[str] = None
    local_url: Optional[str] = None


class EventRecord(BaseModel):
    """One inbound or outbound message as appended to the customer log."""

    model_config = ConfigDict(frozen=True, extra="ignore", use_enum_values=False)

    direction: Direction
    customer_id: str = Field(..., min_length=1)
    occurred_at: datetime
    message_kind: MessageKind = MessageKind.UNKNOWN
    body: Optional[str] = None
    tags: List[str] = Field(default_factory=list)
    display_name: Optional[str] = None
    media_ref: Optional[MediaRef] = None
    external_message_id: Optional[str] = None
    raw: Optional[Any] = None

    @field_validator("occurred_at")
    @classmethod
    def _normalize_timestamp(cls, value: datetime) -> datetime:
        return ensure_utc(value)

    @field_validator("tags", mode="before")
    @classmethod
    def _coerce_tags(cls, value: Any) -> Any:
        if value is None:
            return []
        if isinstance(value, (set, frozenset)):
            return sorted(value)
        return value

    @property
    def is_incoming(self) -> bool:
        return self.direction is Direction.INCOMING

    def search_text(self) -> str:
        """Lower-cased haystack used by per-message search."""
        return f"{self.body or ''} {','.join(self.tags)}".lower()


__all__ = ["Direction", "EventRecord", "MediaRef", "MessageKind"]
