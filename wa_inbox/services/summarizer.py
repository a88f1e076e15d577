"""Fold the tail of a customer log into a list-view summary."""

from __future__ import annotations

from collections import Counter
from datetime import datetime
from typing import Iterable, Optional

from ..models import CustomerSummary, EventRecord
from .logs import LogStore
from .watermarks import WatermarkStore

DEFAULT_SUMMARY_WINDOW = 400


def count_unread(records: Iterable[EventRecord], last_seen: Optional[datetime]) -> int:
    """Incoming records strictly after *last_seen*; every incoming record when unset."""
    return sum(
        1
        for record in records
        if record.is_incoming and (last_seen is None or record.occurred_at > last_seen)
    )


def latest_incoming_at(records: Iterable[EventRecord]) -> Optional[datetime]:
    """Timestamp of the last incoming record in append order."""
    latest: Optional[datetime] = None
    for record in records:
        if record.is_incoming:
            latest = record.occurred_at
    return latest


class Summarizer:
    """Summaries cover only the last ``window_size`` records of each log.

    Tag counts and unread counts for conversations longer than the window are
    therefore undercounted; this bounds the cost of the customer list.
    """

    def __init__(
        self,
        log_store: LogStore,
        watermark_store: WatermarkStore,
        window_size: int = DEFAULT_SUMMARY_WINDOW,
    ) -> None:
        self._log_store = log_store
        self._watermark_store = watermark_store
        self._window_size = max(1, window_size)

    @property
    def window_size(self) -> int:
        return self._window_size

    def summarize(self, customer_id: str, window_size: Optional[int] = None) -> Optional[CustomerSummary]:
        size = self._window_size if window_size is None else max(1, window_size)
        records = self._log_store.read_tail(customer_id, size)
        if not records:
            return None

        tag_counts: Counter[str] = Counter()
        display_name: Optional[str] = None
        for record in records:
            tag_counts.update(record.tags)
            if record.display_name:
                display_name = record.display_name

        watermark = self._watermark_store.read(customer_id)
        return CustomerSummary(
            customer_id=customer_id,
            display_name=display_name,
            last_record=records[-1],
            tag_counts=dict(tag_counts),
            unread_count=count_unread(records, watermark.last_seen_incoming_at),
            last_incoming_at=latest_incoming_at(records),
        )


__all__ = ["DEFAULT_SUMMARY_WINDOW", "Summarizer", "count_unread", "latest_incoming_at"]
