"""Entry points used by the webhook handler, the send route and the operator API."""

from __future__ import annotations

from functools import lru_cache
from typing import Any, Optional

from ..config import Settings, get_settings
from ..logging_config import logger
from ..models import (
    ConversationView,
    CustomerFilters,
    CustomerListing,
    Direction,
    EventRecord,
    MessageFilters,
)
from ..utils.params import clamp_limit
from .logs import JsonlLogStore, LogStore
from .query import InboxQuery
from .summarizer import DEFAULT_SUMMARY_WINDOW, Summarizer
from .watermarks import JsonWatermarkStore, WatermarkStore


class InboxService:
    def __init__(
        self,
        log_store: LogStore,
        watermark_store: WatermarkStore,
        *,
        summary_window: int = DEFAULT_SUMMARY_WINDOW,
        message_window_default: int = 300,
        message_window_max: int = 3000,
    ) -> None:
        self.log_store = log_store
        self.watermark_store = watermark_store
        self.summarizer = Summarizer(log_store, watermark_store, window_size=summary_window)
        self.query = InboxQuery(log_store, watermark_store, self.summarizer)
        self._message_window_default = message_window_default
        self._message_window_max = message_window_max

    def ingest_incoming(self, record: EventRecord) -> None:
        self._ingest(record, Direction.INCOMING)

    def ingest_outgoing(self, record: EventRecord) -> None:
        self._ingest(record, Direction.OUTGOING)

    def _ingest(self, record: EventRecord, expected: Direction) -> None:
        if record.direction is not expected:
            raise ValueError(f"expected {expected.value} record, got {record.direction.value}")
        self.log_store.append(record.customer_id, record)
        logger.info(
            "saved %s message",
            expected.value,
            extra={
                "customer_id": record.customer_id,
                "kind": record.message_kind.value,
                "tags": list(record.tags),
                "media_id": record.media_ref.media_id if record.media_ref else None,
            },
        )

    def get_customer_list(self, filters: Optional[CustomerFilters] = None) -> CustomerListing:
        return self.query.list_customers(filters)

    def get_customer_messages(
        self,
        customer_id: str,
        filters: Optional[MessageFilters] = None,
        limit: Any = None,
    ) -> ConversationView:
        """Read a conversation and mark it as viewed.

        The view reports the watermark as it was before this call, so records
        flagged unread here are the ones the operator has just seen.
        """
        window = clamp_limit(
            limit,
            default=self._message_window_default,
            maximum=self._message_window_max,
        )
        view = self.query.list_messages(customer_id, filters, window)
        self.query.advance_watermark_if_newer(customer_id, view.latest_incoming_at)
        return view

    @classmethod
    def from_settings(cls, settings: Settings) -> "InboxService":
        return cls(
            JsonlLogStore(settings.data_dir),
            JsonWatermarkStore(settings.data_dir),
            summary_window=settings.summary_window_size,
            message_window_default=settings.message_window_default,
            message_window_max=settings.message_window_max,
        )


@lru_cache(maxsize=1)
def get_inbox_service() -> InboxService:
    return InboxService.from_settings(get_settings())


__all__ = ["InboxService", "get_inbox_service"]
