"""Tests for customer and message filtering."""

from datetime import timedelta

import pytest

from wa_inbox.models import CustomerFilters, Direction, MessageFilters
from wa_inbox.services import InboxQuery, Summarizer


@pytest.fixture
def query(log_store, watermark_store):
    return InboxQuery(log_store, watermark_store, Summarizer(log_store, watermark_store))


@pytest.fixture
def two_customers(log_store, watermark_store, make_record):
    """A: two unread messages an hour ago. B: fully read, last message two days ago."""
    log_store.append("A", make_record("A", "where is my tracking?", minutes_ago=61, display_name="Alice"))
    log_store.append("A", make_record("A", "hello?", minutes_ago=60, display_name="Alice"))
    old = make_record("B", "price for 20 units", minutes_ago=48 * 60, display_name="Bob")
    log_store.append("B", old)
    watermark_store.write("B", last_seen_incoming_at=old.occurred_at)


def ids(listing):
    return [summary.customer_id for summary in listing.customers]


def test_unread_only(query, two_customers, now):
    assert ids(query.list_customers(CustomerFilters(unread_only=True), now=now)) == ["A"]


def test_recent_hours(query, two_customers, now):
    assert ids(query.list_customers(CustomerFilters(recent_hours=24), now=now)) == ["A"]


def test_sorted_by_latest_activity(query, two_customers, log_store, make_record, now):
    assert ids(query.list_customers(now=now)) == ["A", "B"]
    log_store.append("B", make_record("B", "thanks", minutes_ago=1, direction=Direction.OUTGOING))
    assert ids(query.list_customers(now=now)) == ["B", "A"]


def test_search_matches_id_name_and_last_body(query, two_customers, now):
    assert ids(query.list_customers(CustomerFilters(search="bob"), now=now)) == ["B"]
    assert ids(query.list_customers(CustomerFilters(search="HELLO"), now=now)) == ["A"]
    assert ids(query.list_customers(CustomerFilters(search="A"), now=now)) == ["A"]
    # Only the last body is searched, not older messages.
    assert ids(query.list_customers(CustomerFilters(search="tracking"), now=now)) == []


def test_tag_filter(query, two_customers, now):
    assert ids(query.list_customers(CustomerFilters(tag="logistics"), now=now)) == ["A"]
    assert ids(query.list_customers(CustomerFilters(tag="PRE_SALES"), now=now)) == ["B"]
    assert ids(query.list_customers(CustomerFilters(tag="after_sales"), now=now)) == []


def test_filters_are_conjunctive(query, two_customers, now):
    listing = query.list_customers(CustomerFilters(unread_only=True, tag="pre_sales"), now=now)
    assert listing.count == 0


def test_available_tags_ignore_filters(query, two_customers, now):
    listing = query.list_customers(CustomerFilters(unread_only=True), now=now)
    assert listing.available_tags == ["logistics", "pre_sales"]


def test_customers_without_records_are_skipped(query, log_store, now):
    assert query.list_customers(now=now).count == 0


def test_list_messages_filters(query, log_store, make_record, now):
    log_store.append("c", make_record("c", "my parcel tracking", minutes_ago=30 * 60))
    log_store.append("c", make_record("c", "also a refund", minutes_ago=60))
    log_store.append("c", make_record("c", "sending now", minutes_ago=30, direction=Direction.OUTGOING))

    def bodies(filters):
        return [record.body for record in query.list_messages("c", filters, 100, now=now).messages]

    assert bodies(MessageFilters()) == ["my parcel tracking", "also a refund", "sending now"]
    assert bodies(MessageFilters(recent_hours=24)) == ["also a refund", "sending now"]
    assert bodies(MessageFilters(tag="logistics")) == ["my parcel tracking"]
    # search covers tags as well as bodies
    assert bodies(MessageFilters(search="after_sales")) == ["also a refund"]
    assert bodies(MessageFilters(search="NOW")) == ["sending now"]


def test_list_messages_unread_only(query, log_store, watermark_store, make_record, now):
    seen = make_record("c", "first", minutes_ago=50)
    log_store.append("c", seen)
    log_store.append("c", make_record("c", "reply", minutes_ago=40, direction=Direction.OUTGOING))
    log_store.append("c", make_record("c", "second", minutes_ago=30))
    watermark_store.write("c", last_seen_incoming_at=seen.occurred_at)

    view = query.list_messages("c", MessageFilters(unread_only=True), 100, now=now)

    assert [record.body for record in view.messages] == ["second"]
    assert view.unread_count == 1
    assert view.last_seen_incoming_at == seen.occurred_at


def test_list_messages_sorts_by_timestamp(query, log_store, make_record, now):
    log_store.append("c", make_record("c", "late", minutes_ago=1))
    log_store.append("c", make_record("c", "early", minutes_ago=5))

    view = query.list_messages("c", None, 10, now=now)

    assert [record.body for record in view.messages] == ["early", "late"]


def test_list_messages_does_not_touch_watermark(query, log_store, watermark_store, make_record, now):
    log_store.append("c", make_record("c", "hi"))
    query.list_messages("c", None, 10, now=now)
    assert watermark_store.read("c").last_seen_incoming_at is None


def test_missing_customer_lists_no_messages(query, now):
    view = query.list_messages("ghost", None, 10, now=now)
    assert view.messages == []
    assert view.count == 0
    assert view.latest_incoming_at is None


def test_advance_watermark_only_moves_forward(query, watermark_store, now):
    assert query.advance_watermark_if_newer("c", now) == now
    assert query.advance_watermark_if_newer("c", now) is None
    assert query.advance_watermark_if_newer("c", now - timedelta(minutes=1)) is None
    assert query.advance_watermark_if_newer("c", None) is None
    assert watermark_store.read("c").last_seen_incoming_at == now
    later = now + timedelta(seconds=1)
    assert query.advance_watermark_if_newer("c", later) == later


def test_recent_hours_beyond_timedelta_range_matches_everything(query, two_customers, now):
    listing = query.list_customers(CustomerFilters(recent_hours=1e300), now=now)
    assert ids(listing) == ["A", "B"]

    view = query.list_messages("B", MessageFilters(recent_hours=1e300), 10, now=now)
    assert view.count == 1
