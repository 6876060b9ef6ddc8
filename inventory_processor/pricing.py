import logging
import time
from decimal import Decimal
from typing import Callable, Optional

from . import settings
from .resilience import PolicyOutcome, ResiliencePolicy, execute_with_outcome

logger = logging.getLogger(__name__)


def get_discount_factor() -> Decimal:
    """
    Looks up the current discount multiplier.
    Stands in for a slow upstream call; it blocks for the configured latency.
    """
    time.sleep(settings.DISCOUNT_LATENCY_SECONDS)
    return Decimal("0.95")  # 5% discount factor


def _log_retry(attempt: int, cause: BaseException) -> None:
    logger.warning(f"Retry {attempt} due to: {cause}")


def _log_fallback(cause: BaseException) -> None:
    logger.warning(
        f"Fallback activated: returning default discount {settings.DISCOUNT_FALLBACK}"
    )


def default_discount_policy() -> ResiliencePolicy[Decimal]:
    """Builds the discount lookup policy from settings, with logging observers."""
    return ResiliencePolicy(
        fallback_value=settings.DISCOUNT_FALLBACK,
        timeout=settings.DISCOUNT_TIMEOUT_SECONDS,
        max_retries=settings.DISCOUNT_MAX_RETRIES,
        retry_delay=settings.DISCOUNT_RETRY_DELAY_SECONDS,
        on_retry=_log_retry,
        on_fallback=_log_fallback,
    )


def get_discount_factor_safe(
    operation: Callable[[], Decimal] = get_discount_factor,
    policy: Optional[ResiliencePolicy[Decimal]] = None,
) -> PolicyOutcome[Decimal]:
    """
    Fetches the discount factor under timeout, retry and fallback.
    Always returns an outcome; on total failure its value is the neutral factor.
    """
    policy = policy or default_discount_policy()
    outcome = execute_with_outcome(operation, policy)
    if outcome.succeeded:
        logger.info(
            f"Discount factor {outcome.value} obtained after {outcome.attempts} attempt(s)."
        )
    return outcome
