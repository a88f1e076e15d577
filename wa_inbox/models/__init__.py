from .inbox import (
    ConversationView,
    CustomerFilters,
    CustomerListing,
    CustomerSummary,
    MessageFilters,
    Watermark,
)
from .meta import HealthResponse, SendMessageRequest, SendMessageResponse, VersionResponse
from .records import Direction, EventRecord, MediaRef, MessageKind

__all__ = [
    "ConversationView",
    "CustomerFilters",
    "CustomerListing",
    "CustomerSummary",
    "MessageFilters",
    "Watermark",
    "HealthResponse",
    "SendMessageRequest",
    "SendMessageResponse",
    "VersionResponse",
    "Direction",
    "EventRecord",
    "MediaRef",
    "MessageKind",
]
