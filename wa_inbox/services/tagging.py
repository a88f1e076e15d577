"""Keyword-based classification of message text into support categories."""

from __future__ import annotations

import re
from typing import Iterable, Optional, Pattern, Set, Tuple


def _compile(keywords: Iterable[str]) -> Pattern[str]:
    return re.compile("|".join(re.escape(keyword) for keyword in keywords), re.IGNORECASE)


LOGISTICS = "logistics"
AFTER_SALES = "after_sales"
PRE_SALES = "pre_sales"

# Evaluated in this order; the result is a set so order never changes the output.
TAG_RULES: Tuple[Tuple[str, Pattern[str]], ...] = (
    (
        LOGISTICS,
        _compile(
            [
                "track", "tracking", "deliver", "delivery", "ups", "fedex", "dhl", "usps",
                "shipment", "物流", "派送", "签收", "运单", "快递",
            ]
        ),
    ),
    (
        AFTER_SALES,
        _compile(
            [
                "warranty", "broken", "issue", "problem", "fault", "defect", "return",
                "replace", "refund", "not work", "doesn't work", "坏", "故障", "问题",
                "退货", "换货", "退款",
            ]
        ),
    ),
    (
        PRE_SALES,
        _compile(
            [
                "price", "quote", "quotation", "invoice", "pay", "payment", "discount",
                "availability", "lead time", "报价", "价格", "发票", "付款", "折扣",
                "有货", "交期",
            ]
        ),
    ),
)


def classify(text: Optional[str]) -> Set[str]:
    """Return the tags whose keyword pattern occurs anywhere in *text*."""
    if not text:
        return set()
    return {tag for tag, pattern in TAG_RULES if pattern.search(text)}


def known_tags() -> Tuple[str, ...]:
    return tuple(tag for tag, _ in TAG_RULES)


__all__ = ["AFTER_SALES", "LOGISTICS", "PRE_SALES", "TAG_RULES", "classify", "known_tags"]
