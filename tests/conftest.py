"""Pytest configuration and fixtures."""

from datetime import datetime, timedelta, timezone
from typing import Callable, Optional

import pytest

from wa_inbox.models import Direction, EventRecord, MessageKind
from wa_inbox.services import InboxService, InMemoryLogStore, InMemoryWatermarkStore
from wa_inbox.services.tagging import classify

NOW = datetime(2026, 3, 1, 12, 0, tzinfo=timezone.utc)


@pytest.fixture
def now() -> datetime:
    return NOW


@pytest.fixture
def make_record() -> Callable[..., EventRecord]:
    """Build records with tags computed from the body, as ingestion does."""

    def _make(
        customer_id: str = "15550001111",
        body: Optional[str] = "hello",
        *,
        at: Optional[datetime] = None,
        minutes_ago: float = 0,
        direction: Direction = Direction.INCOMING,
        display_name: Optional[str] = None,
        kind: MessageKind = MessageKind.TEXT,
    ) -> EventRecord:
        occurred_at = at or (NOW - timedelta(minutes=minutes_ago))
        return EventRecord(
            direction=direction,
            customer_id=customer_id,
            occurred_at=occurred_at,
            message_kind=kind,
            body=body,
            tags=classify(body),
            display_name=display_name,
        )

    return _make


@pytest.fixture
def log_store() -> InMemoryLogStore:
    return InMemoryLogStore()


@pytest.fixture
def watermark_store() -> InMemoryWatermarkStore:
    return InMemoryWatermarkStore()


@pytest.fixture
def inbox(log_store, watermark_store) -> InboxService:
    return InboxService(
        log_store,
        watermark_store,
        summary_window=400,
        message_window_default=300,
        message_window_max=3000,
    )
