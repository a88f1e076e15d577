"""Tests for keyword tagging."""

import pytest

from wa_inbox.services.tagging import TAG_RULES, classify, known_tags


def test_logistics_question():
    assert "logistics" in classify("Where is my package tracking number?")


def test_after_sales_complaint():
    assert "after_sales" in classify("My item arrived broken, need a refund")


def test_pre_sales_inquiry():
    assert "pre_sales" in classify("What's the price and lead time?")


def test_greeting_has_no_tags():
    assert classify("hello") == set()


@pytest.mark.parametrize("text", [None, ""])
def test_empty_text_has_no_tags(text):
    assert classify(text) == set()


def test_matching_is_case_insensitive():
    assert classify("FEDEX said DELIVERED") == {"logistics"}


def test_chinese_keywords():
    assert classify("我的快递到哪里了") == {"logistics"}
    assert classify("需要退款") == {"after_sales"}
    assert classify("请报价") == {"pre_sales"}


def test_multiple_categories():
    tags = classify("The delivery arrived but it doesn't work, can I get an invoice for the replacement?")
    assert tags == {"logistics", "after_sales", "pre_sales"}


def test_rule_table_order():
    assert known_tags() == ("logistics", "after_sales", "pre_sales")
    assert len(TAG_RULES) == 3
