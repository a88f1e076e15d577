"""Per-customer read watermarks.

Both stores perform a blind upsert. Keeping ``last_seen_incoming_at``
monotonic is the caller's obligation: only write a value strictly greater than
the one returned by :meth:`WatermarkStore.read`.
"""

from __future__ import annotations

import json
import threading
from pathlib import Path
from typing import Any, Dict, Protocol

from ...logging_config import logger
from ...models import Watermark
from ...utils.filenames import safe_file_name
from ...utils.timestamps import parse_timestamp, to_storage_timestamp


class WatermarkStore(Protocol):
    def read(self, customer_id: str) -> Watermark:
        """Return the stored watermark or an empty default; never raises for absence."""
        ...  # pragma: no cover - typing protocol

    def write(self, customer_id: str, **fields: Any) -> None:
        """Merge *fields* into the stored state for *customer_id*."""
        ...  # pragma: no cover - typing protocol


def _serialize(value: Any) -> Any:
    if hasattr(value, "isoformat"):
        return to_storage_timestamp(value)
    return value


class JsonWatermarkStore:
    """One small JSON document per customer under ``state/``."""

    def __init__(self, base_dir: Path):
        self._state_dir = base_dir / "state"
        self._lock = threading.Lock()
        try:
            self._state_dir.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            logger.warning(
                "watermark directory creation failed",
                extra={"error": str(exc), "path": str(self._state_dir)},
            )

    def state_path(self, customer_id: str) -> Path:
        return self._state_dir / f"{safe_file_name(customer_id)}.json"

    def _load_raw(self, customer_id: str) -> Dict[str, Any]:
        path = self.state_path(customer_id)
        try:
            data = json.loads(path.read_text(encoding="utf-8"))
        except FileNotFoundError:
            return {}
        except (OSError, ValueError) as exc:
            logger.warning(
                "unreadable watermark state; treating as unseen",
                extra={"customer_id": customer_id, "path": str(path), "error": str(exc)},
            )
            return {}
        if not isinstance(data, dict):
            logger.warning(
                "watermark state payload invalid; expected object",
                extra={"customer_id": customer_id, "path": str(path)},
            )
            return {}
        return data

    def read(self, customer_id: str) -> Watermark:
        with self._lock:
            data = self._load_raw(customer_id)
        return Watermark(
            customer_id=customer_id,
            last_seen_incoming_at=parse_timestamp(data.get("last_seen_incoming_at")),
        )

    def write(self, customer_id: str, **fields: Any) -> None:
        path = self.state_path(customer_id)
        with self._lock:
            merged = self._load_raw(customer_id)
            merged.update({key: _serialize(value) for key, value in fields.items()})
            try:
                path.write_text(json.dumps(merged, indent=2), encoding="utf-8")
            except OSError as exc:
                logger.error(
                    "watermark write failed",
                    extra={"customer_id": customer_id, "path": str(path), "error": str(exc)},
                )


class InMemoryWatermarkStore:
    def __init__(self) -> None:
        self._state: Dict[str, Dict[str, Any]] = {}
        self._lock = threading.Lock()

    def read(self, customer_id: str) -> Watermark:
        with self._lock:
            data = dict(self._state.get(customer_id, {}))
        return Watermark(
            customer_id=customer_id,
            last_seen_incoming_at=parse_timestamp(data.get("last_seen_incoming_at")),
        )

    def write(self, customer_id: str, **fields: Any) -> None:
        with self._lock:
            self._state.setdefault(customer_id, {}).update(fields)

    def raw(self, customer_id: str) -> Dict[str, Any]:
        with self._lock:
            return dict(self._state.get(customer_id, {}))


__all__ = ["InMemoryWatermarkStore", "JsonWatermarkStore", "WatermarkStore"]
