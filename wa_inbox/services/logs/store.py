"""Append-only message logs sharded per customer, mirrored into per-day files."""

from __future__ import annotations

import threading
from collections import defaultdict
from pathlib import Path
from typing import Dict, Iterable, List, Optional, Protocol

from pydantic import ValidationError

from ...logging_config import logger
from ...models import EventRecord
from ...utils.filenames import safe_file_name


class LogStore(Protocol):
    """Storage seam for customer message logs."""

    def append(self, customer_id: str, record: EventRecord) -> None:
        """Add *record* to the end of the customer's log. Must not raise."""
        ...  # pragma: no cover - typing protocol

    def read_tail(self, customer_id: str, n: int) -> List[EventRecord]:
        """Return up to the last *n* readable records in append order."""
        ...  # pragma: no cover - typing protocol

    def customer_ids(self) -> List[str]:
        """Customers with a log, as their file-safe ids (see `safe_file_name`)."""
        ...  # pragma: no cover - typing protocol


class JsonlLogStore:
    """JSON-lines files: ``by-user/<customer>.jsonl`` and ``by-date/messages-<day>.jsonl``."""

    def __init__(self, base_dir: Path):
        self._base_dir = base_dir
        self._by_user_dir = base_dir / "by-user"
        self._by_date_dir = base_dir / "by-date"
        self._locks: Dict[str, threading.Lock] = {}
        self._global_lock = threading.Lock()
        self._ensure_directories()

    def _ensure_directories(self) -> None:
        for directory in (self._by_user_dir, self._by_date_dir):
            try:
                directory.mkdir(parents=True, exist_ok=True)
            except OSError as exc:
                logger.warning(
                    "log directory creation failed",
                    extra={"error": str(exc), "path": str(directory)},
                )

    def _lock_for(self, key: str) -> threading.Lock:
        with self._global_lock:
            if key not in self._locks:
                self._locks[key] = threading.Lock()
            return self._locks[key]

    def customer_log_path(self, customer_id: str) -> Path:
        return self._by_user_dir / f"{safe_file_name(customer_id)}.jsonl"

    def daily_log_path(self, record: EventRecord) -> Path:
        return self._by_date_dir / f"messages-{record.occurred_at.strftime('%Y-%m-%d')}.jsonl"

    def append(self, customer_id: str, record: EventRecord) -> None:
        line = record.model_dump_json() + "\n"
        daily_path = self.daily_log_path(record)
        customer_path = self.customer_log_path(customer_id)
        # The daily log is an audit trail; a failure there must not skip the customer log.
        for key, path in ((daily_path.name, daily_path), (customer_path.name, customer_path)):
            with self._lock_for(key):
                try:
                    with path.open("a", encoding="utf-8") as handle:
                        handle.write(line)
                except OSError as exc:
                    logger.error(
                        "message log append failed",
                        extra={"error": str(exc), "customer_id": customer_id, "path": str(path)},
                    )

    def read_tail(self, customer_id: str, n: int) -> List[EventRecord]:
        if n <= 0:
            return []
        path = self.customer_log_path(customer_id)
        try:
            # Only "\n" ends a record; bodies may carry U+2028 and similar separators
            lines = path.read_text(encoding="utf-8").split("\n")
        except FileNotFoundError:
            return []
        except (OSError, UnicodeDecodeError) as exc:
            logger.error(
                "message log read failed",
                extra={"error": str(exc), "customer_id": customer_id, "path": str(path)},
            )
            return []
        return _parse_tail(lines, n, customer_id)

    def customer_ids(self) -> List[str]:
        try:
            return sorted(path.stem for path in self._by_user_dir.glob("*.jsonl"))
        except OSError as exc:
            logger.error("failed to list customer logs", extra={"error": str(exc)})
            return []


def _parse_tail(lines: List[str], n: int, customer_id: str) -> List[EventRecord]:
    """Parse from the end until *n* records are found, skipping malformed lines."""
    records: List[EventRecord] = []
    skipped = 0
    for line in reversed(lines):
        if len(records) >= n:
            break
        if not line.strip():
            continue
        try:
            records.append(EventRecord.model_validate_json(line))
        except ValidationError:
            skipped += 1
    if skipped:
        logger.debug(
            "skipped malformed log entries",
            extra={"customer_id": customer_id, "skipped": skipped},
        )
    records.reverse()
    return records


class InMemoryLogStore:
    """Process-local log store for tests and embedding."""

    def __init__(self, records: Optional[Iterable[EventRecord]] = None):
        self._logs: Dict[str, List[EventRecord]] = defaultdict(list)
        self._daily: Dict[str, List[EventRecord]] = defaultdict(list)
        self._lock = threading.Lock()
        for record in records or ():
            self.append(record.customer_id, record)

    def append(self, customer_id: str, record: EventRecord) -> None:
        with self._lock:
            self._logs[customer_id].append(record)
            self._daily[record.occurred_at.strftime("%Y-%m-%d")].append(record)

    def read_tail(self, customer_id: str, n: int) -> List[EventRecord]:
        if n <= 0:
            return []
        with self._lock:
            return list(self._logs.get(customer_id, [])[-n:])

    def customer_ids(self) -> List[str]:
        with self._lock:
            return sorted(key for key, records in self._logs.items() if records)

    def daily(self, day: str) -> List[EventRecord]:
        with self._lock:
            return list(self._daily.get(day, []))


__all__ = ["InMemoryLogStore", "JsonlLogStore", "LogStore"]
