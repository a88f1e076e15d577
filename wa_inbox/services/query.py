"""Filtered reads over customer summaries and individual records."""

from __future__ import annotations

from datetime import datetime
from typing import List, Optional

from ..logging_config import logger
from ..models import (
    ConversationView,
    CustomerFilters,
    CustomerListing,
    CustomerSummary,
    EventRecord,
    MessageFilters,
)
from ..utils.params import normalize_text
from ..utils.timestamps import utc_now, within_last_hours
from .logs import LogStore
from .summarizer import Summarizer, count_unread, latest_incoming_at
from .watermarks import WatermarkStore


def summary_matches(
    summary: CustomerSummary, filters: CustomerFilters, *, now: Optional[datetime] = None
) -> bool:
    if filters.unread_only and summary.unread_count <= 0:
        return False
    if filters.recent_hours is not None and not within_last_hours(
        summary.last_activity_at, filters.recent_hours, now=now
    ):
        return False
    search = normalize_text(filters.search)
    if search and search not in summary.search_text():
        return False
    tag = normalize_text(filters.tag)
    if tag and summary.tag_counts.get(tag, 0) <= 0:
        return False
    return True


def record_matches(
    record: EventRecord,
    filters: MessageFilters,
    *,
    last_seen: Optional[datetime],
    now: Optional[datetime] = None,
) -> bool:
    search = normalize_text(filters.search)
    if search and search not in record.search_text():
        return False
    if filters.recent_hours is not None and not within_last_hours(
        record.occurred_at, filters.recent_hours, now=now
    ):
        return False
    tag = normalize_text(filters.tag)
    if tag and tag not in {str(value).lower() for value in record.tags}:
        return False
    if filters.unread_only:
        if not record.is_incoming:
            return False
        if last_seen is not None and record.occurred_at <= last_seen:
            return False
    return True


class InboxQuery:
    def __init__(
        self,
        log_store: LogStore,
        watermark_store: WatermarkStore,
        summarizer: Summarizer,
    ) -> None:
        self._log_store = log_store
        self._watermark_store = watermark_store
        self._summarizer = summarizer

    def list_customers(
        self,
        filters: Optional[CustomerFilters] = None,
        *,
        now: Optional[datetime] = None,
    ) -> CustomerListing:
        """Summaries of every customer with a log, newest activity first."""
        active_filters = filters or CustomerFilters()
        reference = now or utc_now()
        all_tags = set()
        matched: List[CustomerSummary] = []
        for customer_id in self._log_store.customer_ids():
            summary = self._summarizer.summarize(customer_id)
            if summary is None:
                continue
            all_tags.update(tag for tag, count in summary.tag_counts.items() if count > 0)
            if summary_matches(summary, active_filters, now=reference):
                matched.append(summary)

        matched.sort(key=lambda item: item.last_activity_at, reverse=True)
        return CustomerListing(
            count=len(matched),
            customers=matched,
            available_tags=sorted(all_tags),
        )

    def list_messages(
        self,
        customer_id: str,
        filters: Optional[MessageFilters] = None,
        window_size: int = 300,
        *,
        now: Optional[datetime] = None,
    ) -> ConversationView:
        """Filtered records of the window; does not touch the watermark."""
        active_filters = filters or MessageFilters()
        reference = now or utc_now()
        # Stable, so records already in timestamp order keep their append order.
        records = sorted(
            self._log_store.read_tail(customer_id, window_size),
            key=lambda record: record.occurred_at,
        )
        last_seen = self._watermark_store.read(customer_id).last_seen_incoming_at
        messages = [
            record
            for record in records
            if record_matches(record, active_filters, last_seen=last_seen, now=reference)
        ]
        return ConversationView(
            customer_id=customer_id,
            count=len(messages),
            messages=messages,
            unread_count=count_unread(records, last_seen),
            last_seen_incoming_at=last_seen,
            latest_incoming_at=latest_incoming_at(records),
            available_tags=sorted({tag for record in records for tag in record.tags}),
        )

    def advance_watermark_if_newer(
        self, customer_id: str, latest_seen: Optional[datetime]
    ) -> Optional[datetime]:
        """Move the watermark forward to *latest_seen*; never backwards.

        Returns the written value, or ``None`` when nothing changed, which makes
        repeated views of the same window free of writes.
        """
        if latest_seen is None:
            return None
        current = self._watermark_store.read(customer_id).last_seen_incoming_at
        if current is not None and latest_seen <= current:
            return None
        self._watermark_store.write(customer_id, last_seen_incoming_at=latest_seen)
        logger.debug(
            "advanced read watermark",
            extra={"customer_id": customer_id, "last_seen_incoming_at": latest_seen.isoformat()},
        )
        return latest_seen


__all__ = ["InboxQuery", "record_matches", "summary_matches"]
