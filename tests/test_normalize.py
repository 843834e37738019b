from __future__ import annotations

import pytest

from bgg_lookup.catalog.normalize import cap_description, clean_text, label_list, parse_count, parse_score


@pytest.mark.parametrize(
    ("raw", "expected"),
    [("4", 4), (" 12 ", 12), (0, 0), (3.0, 3), ("-1", None), ("abc", None), ("", None),
     (None, None), (2.5, None), (True, None), ("7.5", None)],
)
def test_parse_count(raw, expected) -> None:
    assert parse_count(raw) == expected


@pytest.mark.parametrize(
    ("raw", "expected"),
    [("7.25", 7.25), (8, 8.0), ("0", None), ("0.0", None), (0, None), ("-2", None),
     ("n/a", None), ("nan", None), ("inf", None), (None, None)],
)
def test_parse_score(raw, expected) -> None:
    assert parse_score(raw) == expected


def test_clean_text() -> None:
    assert clean_text("  x  ") == "x"
    assert clean_text("   ") is None
    assert clean_text(None) is None


def test_cap_description() -> None:
    assert cap_description("abcdef", limit=3) == "abc"
    assert cap_description("") is None


def test_label_list() -> None:
    assert label_list(["Economic", " ", "Negotiation "]) == ("Economic", "Negotiation")
    assert label_list([]) is None
    assert label_list(None) is None
