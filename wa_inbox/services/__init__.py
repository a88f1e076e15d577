"""Service layer components."""

from .inbox import InboxService, get_inbox_service
from .logs import InMemoryLogStore, JsonlLogStore, LogStore
from .query import InboxQuery
from .summarizer import Summarizer
from .tagging import TAG_RULES, classify
from .watermarks import InMemoryWatermarkStore, JsonWatermarkStore, WatermarkStore


__all__ = [
    "InboxService",
    "get_inbox_service",
    "InMemoryLogStore",
    "JsonlLogStore",
    "LogStore",
    "InboxQuery",
    "Summarizer",
    "TAG_RULES",
    "classify",
    "InMemoryWatermarkStore",
    "JsonWatermarkStore",
    "WatermarkStore",
]
