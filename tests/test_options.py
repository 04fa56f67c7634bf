"""
Tests for query option encoding.
"""

from datetime import datetime, timezone
from decimal import Decimal

import pytest

from shopify_admin import (
    CountOptions,
    ListOptions,
    MetafieldOptions,
    ProductListOptions,
    ProductStatus,
    encode_query,
)


def test_none_options_encode_to_empty_dict():
    assert encode_query(None) == {}
    assert encode_query(ListOptions()) == {}


def test_zero_and_empty_values_are_omitted():
    options = {"since_id": 0, "limit": 0, "title": "", "ids": [], "published": False, "vendor": None}

    assert encode_query(options) == {}


def test_values_are_stringified():
    options = ProductListOptions(
        limit=50,
        since_id=1200,
        ids=[1, 2, 3],
        fields=["id", "title"],
        status=ProductStatus.ACTIVE,
        created_at_min=datetime(2024, 1, 2, 3, 4, 5, tzinfo=timezone.utc),
    )

    assert encode_query(options) == {
        "limit": "50",
        "since_id": "1200",
        "ids": "1,2,3",
        "fields": "id,title",
        "status": "active",
        "created_at_min": "2024-01-02T03:04:05+00:00",
    }


def test_extra_keys_pass_through():
    options = MetafieldOptions(namespace="inventory", owner_resource="product", price_min=Decimal("9.50"))

    assert encode_query(options) == {
        "namespace": "inventory",
        "owner_resource": "product",
        "price_min": "9.50",
    }


def test_true_is_encoded():
    assert encode_query({"published": True}) == {"published": "true"}


def test_unsupported_options_type():
    with pytest.raises(TypeError):
        encode_query(["limit", 5])


def test_count_options_date_bounds():
    options = CountOptions(
        updated_at_min=datetime(2024, 3, 1, tzinfo=timezone.utc),
        updated_at_max=None,
    )

    assert encode_query(options) == {"updated_at_min": "2024-03-01T00:00:00+00:00"}
