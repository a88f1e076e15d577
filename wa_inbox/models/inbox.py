from __future__ import annotations

from datetime import datetime
from typing import Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field

from .records import EventRecord


class Watermark(BaseModel):
    """How far into a customer's incoming history the operator has read."""

    customer_id: str
    last_seen_incoming_at: Optional[datetime] = None


class CustomerSummary(BaseModel):
    """Display summary folded from the tail of one customer log."""

    customer_id: str
    display_name: Optional[str] = None
    last_record: EventRecord
    tag_counts: Dict[str, int] = Field(default_factory=dict)
    unread_count: int = 0
    last_incoming_at: Optional[datetime] = None

    @property
    def last_activity_at(self) -> datetime:
        return self.last_record.occurred_at

    def search_text(self) -> str:
        return f"{self.customer_id} {self.display_name or ''} {self.last_record.body or ''}".lower()


class CustomerFilters(BaseModel):
    """Conjunctive filters for the customer list; unset fields are ignored."""

    model_config = ConfigDict(extra="ignore")

    search: Optional[str] = None
    unread_only: bool = False
    recent_hours: Optional[float] = None
    tag: Optional[str] = None


class MessageFilters(CustomerFilters):
    """Same filter vocabulary applied to individual records."""


class CustomerListing(BaseModel):
    count: int = 0
    customers: List[CustomerSummary] = Field(default_factory=list)
    available_tags: List[str] = Field(default_factory=list)


class ConversationView(BaseModel):
    customer_id: str
    count: int = 0
    messages: List[EventRecord] = Field(default_factory=list)
    unread_count: int = 0
    last_seen_incoming_at: Optional[datetime] = None
    latest_incoming_at: Optional[datetime] = None
    available_tags: List[str] = Field(default_factory=list)


__all__ = [
    "ConversationView",
    "CustomerFilters",
    "CustomerListing",
    "CustomerSummary",
    "MessageFilters",
    "Watermark",
]
