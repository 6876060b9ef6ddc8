"""
Unit tests for the inventory filters and discount helpers.
"""

from decimal import Decimal

import pytest

from inventory_processor.filters import (
    adjusted_price,
    apply_discount,
    filter_by_name_prefix,
    filter_outdated,
    total_quantity,
)


class TestFilterOutdated:
    def test_only_old_peripherals_selected(self, make_item, now):
        """Test the 95-day-old peripheral is the only match."""
        old_peripheral = make_item(item_id=1, category="Peripherals", age_days=95)
        items = [
            old_peripheral,
            make_item(item_id=2, category="Peripherals", age_days=30),
            make_item(item_id=3, category="Accessories", age_days=200),
        ]

        assert filter_outdated(items, now=now) == [old_peripheral]

    def test_missing_restock_date_never_outdated(self, make_item, now):
        items = [make_item(category="Peripherals", age_days=None)]

        assert filter_outdated(items, now=now) == []

    def test_exactly_threshold_is_not_outdated(self, make_item, now):
        """Test the age must strictly exceed the threshold."""
        items = [make_item(category="Peripherals", age_days=90)]

        assert filter_outdated(items, now=now) == []

    def test_category_is_exact_match(self, make_item, now):
        items = [make_item(category="peripherals", age_days=120)]

        assert filter_outdated(items, now=now) == []

    def test_order_preserved(self, make_item, now):
        items = [
            make_item(item_id=i, category="Peripherals", age_days=100 + i)
            for i in (3, 1, 2)
        ]

        assert [i.item_id for i in filter_outdated(items, now=now)] == [3, 1, 2]

    def test_custom_category_and_threshold(self, make_item, now):
        items = [make_item(category="Displays", age_days=10)]

        assert filter_outdated(items, now=now, category="Displays", threshold_days=7) == items

    def test_sample_batch(self, sample_items, now):
        names = [i.name for i in filter_outdated(sample_items, now=now)]
        assert names == ["Wireless Mouse", "Gaming Headset"]


class TestFilterByNamePrefix:
    def test_prefix_not_substring(self, make_item):
        """Test 'Laptop Adapter' is not matched by an inner 'A'."""
        items = [
            make_item(item_id=1, name="Laptop Adapter"),
            make_item(item_id=2, name="Apple Pencil"),
            make_item(item_id=3, name="Monitor Cable"),
        ]

        result = filter_by_name_prefix(items, "a")

        assert [i.name for i in result] == ["Apple Pencil"]

    @pytest.mark.parametrize("prefix", ["a", "A", "ap", "APPLE"])
    def test_case_insensitive(self, make_item, prefix):
        items = [make_item(name="Apple Pencil")]

        assert filter_by_name_prefix(items, prefix) == items

    def test_order_preserved(self, sample_items):
        names = [i.name for i in filter_by_name_prefix(sample_items, "A")]
        assert names == ["Adjustable Stand", "Apple Pencil"]

    def test_no_matches(self, sample_items):
        assert filter_by_name_prefix(sample_items, "zz") == []


class TestDiscount:
    @pytest.mark.parametrize("factor", ["0", "0.5", "0.95", "1.0", "2"])
    def test_missing_price_is_zero(self, make_item, factor):
        item = make_item(price=None)

        assert adjusted_price(item, Decimal(factor)) == Decimal("0")

    def test_price_multiplied_by_factor(self, make_item):
        item = make_item(price=Decimal("99.00"))

        assert adjusted_price(item, Decimal("0.95")) == Decimal("94.05")

    def test_apply_discount_keeps_original(self, make_item):
        items = [make_item(item_id=7, name="Apple Pencil", price=Decimal("99.00"))]

        (discounted,) = apply_discount(items, Decimal("0.95"))

        assert discounted.item_id == 7
        assert discounted.original_price == Decimal("99.00")
        assert discounted.adjusted_price == Decimal("94.05")
        assert items[0].price == Decimal("99.00")

    def test_total_quantity(self, sample_items):
        assert total_quantity(sample_items) == 590

    def test_total_quantity_empty(self):
        assert total_quantity([]) == 0
