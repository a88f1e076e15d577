"""Tests for customer summaries."""

from datetime import timedelta

from wa_inbox.models import Direction
from wa_inbox.services import Summarizer


def test_no_records_yields_no_summary(log_store, watermark_store):
    summarizer = Summarizer(log_store, watermark_store)
    assert summarizer.summarize("15550001111") is None


def test_unread_counts_every_incoming_without_watermark(log_store, watermark_store, make_record):
    log_store.append("c", make_record("c", "hi", minutes_ago=30))
    log_store.append("c", make_record("c", "hello?", minutes_ago=20))
    log_store.append("c", make_record("c", "on it", minutes_ago=10, direction=Direction.OUTGOING))

    summary = Summarizer(log_store, watermark_store).summarize("c")

    assert summary.unread_count == 2
    assert summary.last_record.body == "on it"


def test_viewing_through_latest_incoming_clears_unread(log_store, watermark_store, make_record):
    first = make_record("c", "hi", minutes_ago=30)
    latest = make_record("c", "hello?", minutes_ago=20)
    log_store.append("c", first)
    log_store.append("c", latest)

    watermark_store.write("c", last_seen_incoming_at=latest.occurred_at)

    assert Summarizer(log_store, watermark_store).summarize("c").unread_count == 0


def test_tracking_scenario(log_store, watermark_store, make_record, now):
    t1 = now - timedelta(hours=2)
    t2 = now - timedelta(hours=1)
    tracked = make_record("c", "track my order", at=t1)
    assert tracked.tags == ["logistics"]
    log_store.append("c", tracked)
    watermark_store.write("c", last_seen_incoming_at=t1)
    greeting = make_record("c", "hi", at=t2)
    assert greeting.tags == []
    log_store.append("c", greeting)

    summary = Summarizer(log_store, watermark_store).summarize("c")

    assert summary.unread_count == 1
    assert summary.tag_counts == {"logistics": 1}


def test_tag_histogram_covers_whole_window(log_store, watermark_store, make_record):
    log_store.append("c", make_record("c", "where is my delivery", minutes_ago=3))
    log_store.append("c", make_record("c", "tracking number please", minutes_ago=2))
    log_store.append("c", make_record("c", "it is broken", minutes_ago=1))

    summary = Summarizer(log_store, watermark_store).summarize("c")

    assert summary.tag_counts == {"logistics": 2, "after_sales": 1}


def test_last_incoming_is_independent_of_last_record(log_store, watermark_store, make_record):
    incoming = make_record("c", "hi", minutes_ago=10)
    log_store.append("c", incoming)
    log_store.append("c", make_record("c", "reply", minutes_ago=5, direction=Direction.OUTGOING))

    summary = Summarizer(log_store, watermark_store).summarize("c")

    assert summary.last_incoming_at == incoming.occurred_at
    assert summary.last_record.direction is Direction.OUTGOING


def test_display_name_comes_from_latest_record_carrying_one(log_store, watermark_store, make_record):
    log_store.append("c", make_record("c", "a", minutes_ago=4, display_name="Old Name"))
    log_store.append("c", make_record("c", "b", minutes_ago=3, display_name="New Name"))
    log_store.append("c", make_record("c", "c", minutes_ago=2, direction=Direction.OUTGOING))

    assert Summarizer(log_store, watermark_store).summarize("c").display_name == "New Name"


def test_window_bounds_counts(log_store, watermark_store, make_record):
    for index in range(5):
        log_store.append("c", make_record("c", "refund", minutes_ago=10 - index))

    summarizer = Summarizer(log_store, watermark_store, window_size=3)
    summary = summarizer.summarize("c")

    assert summarizer.window_size == 3
    assert summary.unread_count == 3
    assert summary.tag_counts == {"after_sales": 3}
    assert summarizer.summarize("c", window_size=5).unread_count == 5
