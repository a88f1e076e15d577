"""Tests for per-customer read watermarks."""

import json
from datetime import timedelta

from wa_inbox.services import InMemoryWatermarkStore, JsonWatermarkStore


def test_absent_watermark_reads_as_unseen(tmp_path):
    store = JsonWatermarkStore(tmp_path)
    watermark = store.read("15550001111")
    assert watermark.customer_id == "15550001111"
    assert watermark.last_seen_incoming_at is None


def test_write_then_read(tmp_path, now):
    store = JsonWatermarkStore(tmp_path)
    store.write("15550001111", last_seen_incoming_at=now)
    assert store.read("15550001111").last_seen_incoming_at == now


def test_full_precision_is_kept(tmp_path, now):
    store = JsonWatermarkStore(tmp_path)
    precise = now.replace(microsecond=123456)
    store.write("15550001111", last_seen_incoming_at=precise)
    assert store.read("15550001111").last_seen_incoming_at == precise


def test_write_merges_with_existing_fields(tmp_path, now):
    store = JsonWatermarkStore(tmp_path)
    path = store.state_path("15550001111")
    path.write_text(json.dumps({"assignee": "desk-2"}), encoding="utf-8")

    store.write("15550001111", last_seen_incoming_at=now)

    stored = json.loads(path.read_text(encoding="utf-8"))
    assert stored["assignee"] == "desk-2"
    assert stored["last_seen_incoming_at"].startswith("2026-03-01T12:00:00")


def test_corrupt_state_reads_as_unseen(tmp_path):
    store = JsonWatermarkStore(tmp_path)
    store.state_path("15550001111").write_text("{oops", encoding="utf-8")
    assert store.read("15550001111").last_seen_incoming_at is None


def test_non_object_state_reads_as_unseen(tmp_path):
    store = JsonWatermarkStore(tmp_path)
    store.state_path("15550001111").write_text("[1, 2]", encoding="utf-8")
    assert store.read("15550001111").last_seen_incoming_at is None


def test_store_is_a_blind_upsert(tmp_path, now):
    store = JsonWatermarkStore(tmp_path)
    store.write("15550001111", last_seen_incoming_at=now)
    store.write("15550001111", last_seen_incoming_at=now - timedelta(hours=1))
    assert store.read("15550001111").last_seen_incoming_at == now - timedelta(hours=1)


def test_caller_rule_keeps_watermark_monotonic(now):
    store = InMemoryWatermarkStore()

    def advance(value):
        current = store.read("c").last_seen_incoming_at
        if current is None or value > current:
            store.write("c", last_seen_incoming_at=value)

    advance(now)
    advance(now - timedelta(minutes=5))
    assert store.read("c").last_seen_incoming_at == now


def test_in_memory_write_merges(now):
    store = InMemoryWatermarkStore()
    store.write("c", note="vip")
    store.write("c", last_seen_incoming_at=now)
    assert store.raw("c") == {"note": "vip", "last_seen_incoming_at": now}
    assert store.read("c").last_seen_incoming_at == now
