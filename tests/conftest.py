"""
Test configuration and fixtures
"""

import threading
from datetime import datetime, timedelta
from decimal import Decimal

import pytest

from inventory_processor.data_handler import sample_inventory
from inventory_processor.schemas import InventoryItem


@pytest.fixture
def now():
    """Fixed reference time so restock ages are deterministic."""
    return datetime(2026, 10, 18, 12, 0, 0)


@pytest.fixture
def make_item(now):
    """Factory for inventory items; `age_days` sets the restock date relative to `now`."""

    def _make(
        item_id=1,
        name="Widget",
        price=Decimal("10.00"),
        quantity=1,
        category="Accessories",
        age_days=None,
    ):
        return InventoryItem(
            item_id=item_id,
            name=name,
            price=price,
            quantity=quantity,
            category=category,
            last_restock_date=now - timedelta(days=age_days) if age_days is not None else None,
        )

    return _make


@pytest.fixture
def sample_items(now):
    return sample_inventory(now)


@pytest.fixture
def release():
    """
    Event that blocking test operations wait on.
    Set on teardown so abandoned worker threads finish promptly.
    """
    event = threading.Event()
    yield event
    event.set()


class FlakyOperation:
    """Fails (or blocks) for the first `failures` calls, then returns `value`."""

    def __init__(self, value, failures=0, error=None, block_on=None):
        self.value = value
        self.failures = failures
        self.error = error or RuntimeError("upstream unavailable")
        self.block_on = block_on
        self.calls = 0
        self._lock = threading.Lock()

    def __call__(self):
        with self._lock:
            self.calls += 1
            call_number = self.calls
        if call_number <= self.failures:
            if self.block_on is not None:
                self.block_on.wait(timeout=5)
                return self.value
            raise self.error
        return self.value


@pytest.fixture
def flaky():
    return FlakyOperation
