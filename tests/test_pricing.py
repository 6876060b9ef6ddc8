"""
Tests for the discount factor lookup and its default policy.
"""

import logging
from decimal import Decimal

from inventory_processor import pricing, settings
from inventory_processor.resilience import ResiliencePolicy


class TestDiscountLookup:
    def test_get_discount_factor(self, monkeypatch):
        monkeypatch.setattr(settings, "DISCOUNT_LATENCY_SECONDS", 0)

        assert pricing.get_discount_factor() == Decimal("0.95")

    def test_safe_lookup_within_timeout(self):
        """Test the default 50 ms lookup fits in the 100 ms deadline."""
        outcome = pricing.get_discount_factor_safe()

        assert outcome.succeeded
        assert outcome.value == Decimal("0.95")

    def test_default_policy_from_settings(self):
        policy = pricing.default_discount_policy()

        assert policy.timeout == settings.DISCOUNT_TIMEOUT_SECONDS
        assert policy.max_retries == settings.DISCOUNT_MAX_RETRIES
        assert policy.fallback_value == Decimal("1.0")

    def test_failures_are_logged_and_fall_back(self, caplog, flaky):
        """Test each retry and the fallback are reported as warnings."""
        caplog.set_level(logging.WARNING, logger="inventory_processor.pricing")
        operation = flaky(Decimal("0.95"), failures=100, error=ConnectionError("down"))

        outcome = pricing.get_discount_factor_safe(operation)

        assert outcome.value == Decimal("1.0")
        assert outcome.fallback_used
        messages = [r.getMessage() for r in caplog.records]
        assert "Retry 1 due to: down" in messages
        assert "Retry 3 due to: down" in messages
        assert "Fallback activated: returning default discount 1.0" in messages

    def test_custom_policy(self, flaky):
        policy = ResiliencePolicy(fallback_value=Decimal("0.5"), max_retries=0)

        outcome = pricing.get_discount_factor_safe(flaky(Decimal("0.9"), failures=1), policy)

        assert outcome.value == Decimal("0.5")
