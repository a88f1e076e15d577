"""Tests for lenient query parameter parsing."""

import pytest

from wa_inbox.utils.params import MAX_RECENT_HOURS, clamp_limit, parse_flag, parse_hours


@pytest.mark.parametrize(
    "raw, expected",
    [
        (None, None),
        ("", None),
        ("soon", None),
        ("-2", None),
        ("0", None),
        ("nan", None),
        ("inf", None),
        ("12", 12.0),
        ("0.5", 0.5),
        ("1e300", MAX_RECENT_HOURS),
    ],
)
def test_parse_hours(raw, expected):
    assert parse_hours(raw) == expected


@pytest.mark.parametrize("raw", ["1", "true", "YES", " on "])
def test_parse_flag_truthy(raw):
    assert parse_flag(raw) is True


@pytest.mark.parametrize("raw", [None, "", "0", "maybe"])
def test_parse_flag_falsy(raw):
    assert parse_flag(raw) is False


def test_clamp_limit_caps_and_defaults():
    assert clamp_limit("50", default=10, maximum=20) == 20
    assert clamp_limit("x", default=10, maximum=20) == 10
    assert clamp_limit(None, default=10, maximum=20) == 10
