"""Unit tests for shared utilities."""

from datetime import datetime
from decimal import Decimal

import pytest

from agencyhub.backend.core.utils import normalize_tags, round_money, slugify, utc_now


def test_utc_now_is_naive():
    now = utc_now()
    assert isinstance(now, datetime)
    assert now.tzinfo is None


@pytest.mark.parametrize(
    ("title", "slug"),
    [
        ("Ten Tips: Grow Your Brand's Reach!", "ten-tips-grow-your-brands-reach"),
        ("  Hello   World  ", "hello-world"),
        ("Q3 2024 -- Results", "q3-2024-results"),
        ("“Quoted” Title", "quoted-title"),
        ("!!!", ""),
    ],
)
def test_slugify(title, slug):
    assert slugify(title) == slug


class TestNormalizeTags:
    def test_comma_string(self):
        assert normalize_tags(" seo, social ,, ads ") == ["seo", "social", "ads"]

    def test_list(self):
        assert normalize_tags(["seo", " ", "ads "]) == ["seo", "ads"]

    def test_none(self):
        assert normalize_tags(None) == []


@pytest.mark.parametrize(
    ("value", "expected"),
    [(10.005, Decimal("10.01")), (Decimal("2.344"), Decimal("2.34")), (7, Decimal("7.00"))],
)
def test_round_money(value, expected):
    assert round_money(value) == expected
