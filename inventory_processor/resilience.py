"""
Timeout, retry and fallback around a single fallible call.

The policies always nest in the same order, outermost first:

    Fallback -> Retry -> Timeout -> operation

- Timeout bounds each individual attempt.
- Retry re-runs a failed or timed-out attempt, up to ``max_retries`` times.
- Fallback swaps in a default value once the retries are exhausted.

``execute`` therefore never raises for a failing operation: it returns either
the operation's result or the configured fallback value. Only ``Exception``
subclasses are absorbed; a ``BaseException`` such as ``KeyboardInterrupt`` or
``SystemExit`` raised by the operation propagates to the caller.

Known limitation: each attempt runs on a daemon thread and the caller stops
waiting at the deadline, but Python cannot kill a blocked thread. A timed-out
operation keeps running in the background until it returns on its own, and its
result is discarded. Because the thread is a daemon it never holds up
interpreter exit; if the process exits first, the abandoned operation is cut
off wherever it is. Only wrap operations that have no side effects beyond
their return value.
"""

import logging
import threading
from concurrent.futures import Future, wait
from dataclasses import dataclass
from typing import Callable, Generic, Optional, TypeVar

from tenacity import (
    RetryCallState,
    RetryError,
    Retrying,
    retry_if_exception_type,
    stop_after_attempt,
    wait_incrementing,
)

logger = logging.getLogger(__name__)

T = TypeVar("T")

RetryObserver = Callable[[int, BaseException], None]
FallbackObserver = Callable[[BaseException], None]


# --- Errors ---
class ResilienceError(Exception):
    """Base class for a failed attempt inside the resilience pipeline."""


class TimedOut(ResilienceError):
    """The attempt did not finish before its deadline."""

    def __init__(self, timeout: float):
        super().__init__(f"The operation did not complete within {timeout:.3f}s")
        self.timeout = timeout


class OperationFailure(ResilienceError):
    """The wrapped operation raised. The original error is kept as ``__cause__``."""

    def __init__(self, error: BaseException):
        super().__init__(str(error) or type(error).__name__)
        self.error = error


# --- Configuration & Outcome ---
@dataclass(frozen=True)
class ResiliencePolicy(Generic[T]):
    """
    Settings for one ``execute`` call.

    Attributes:
        fallback_value: Returned when every attempt fails.
        timeout: Per-attempt deadline in seconds.
        max_retries: Retries after the first attempt (total attempts = max_retries + 1).
        retry_delay: Seconds to wait before the first retry.
        retry_delay_increment: Seconds added to the delay for each further retry.
        on_retry: Called before each retry with the failed attempt number and its cause.
        on_fallback: Called once with the last cause when the fallback is used.
    """

    fallback_value: T
    timeout: float = 0.1
    max_retries: int = 3
    retry_delay: float = 0.0
    retry_delay_increment: float = 0.0
    on_retry: Optional[RetryObserver] = None
    on_fallback: Optional[FallbackObserver] = None

    def __post_init__(self):
        if self.timeout <= 0:
            raise ValueError(f"timeout must be positive, got {self.timeout}")
        if self.max_retries < 0:
            raise ValueError(f"max_retries cannot be negative, got {self.max_retries}")
        if self.retry_delay < 0 or self.retry_delay_increment < 0:
            raise ValueError("retry delays cannot be negative")


@dataclass(frozen=True)
class PolicyOutcome(Generic[T]):
    """
    Result of one pipeline execution.

    ``value`` is always populated: the operation's result on success, the
    fallback value otherwise. ``error`` holds the last failure cause when the
    fallback was used.
    """

    value: T
    error: Optional[BaseException] = None
    attempts: int = 1

    @property
    def succeeded(self) -> bool:
        return self.error is None

    @property
    def fallback_used(self) -> bool:
        return self.error is not None


# --- Helpers ---
def _notify(observer: Optional[Callable], *args) -> None:
    """Runs a diagnostic observer. A failing observer is logged and never changes the flow."""
    if observer is None:
        return
    try:
        observer(*args)
    except Exception:
        logger.exception("Resilience observer %r raised; ignoring.", observer)


def _retry_notifier(observer: Optional[RetryObserver]) -> Callable[[RetryCallState], None]:
    def before_sleep(retry_state: RetryCallState) -> None:
        cause = retry_state.outcome.exception() if retry_state.outcome else None
        logger.debug(f"Attempt {retry_state.attempt_number} failed: {cause!r}")
        _notify(observer, retry_state.attempt_number, cause)

    return before_sleep


def _start_attempt(operation: Callable[[], T]) -> "Future[T]":
    """Starts `operation` on its own daemon thread and returns a future for its result."""
    future: Future = Future()

    def runner():
        if not future.set_running_or_notify_cancel():
            return
        try:
            result = operation()
        except BaseException as e:
            future.set_exception(e)
        else:
            future.set_result(result)

    threading.Thread(target=runner, name="resilience-attempt", daemon=True).start()
    return future


def _run_with_timeout(operation: Callable[[], T], timeout: float) -> T:
    """
    Runs one attempt on a daemon thread and waits at most ``timeout`` seconds.
    On deadline the thread is abandoned and ``TimedOut`` is raised.
    """
    future = _start_attempt(operation)
    done, _ = wait([future], timeout=timeout)
    if not done:
        raise TimedOut(timeout)

    try:
        return future.result()
    except Exception as e:
        raise OperationFailure(e) from e


# --- Public API ---
def execute_with_outcome(
    operation: Callable[[], T], policy: ResiliencePolicy[T]
) -> PolicyOutcome[T]:
    """
    Runs ``operation`` under Fallback -> Retry -> Timeout and reports how it went.

    Attempts are strictly sequential. Nothing is shared between calls: every
    attempt gets its own thread and every execution its own retry state.
    """
    retrying = Retrying(
        stop=stop_after_attempt(policy.max_retries + 1),
        wait=wait_incrementing(
            start=policy.retry_delay, increment=policy.retry_delay_increment
        ),
        retry=retry_if_exception_type(ResilienceError),
        before_sleep=_retry_notifier(policy.on_retry),
        reraise=False,
    )

    attempts = 0
    try:
        for attempt in retrying:
            with attempt:
                attempts = attempt.retry_state.attempt_number
                value = _run_with_timeout(operation, policy.timeout)
        return PolicyOutcome(value=value, attempts=attempts)
    except RetryError as e:
        cause = e.last_attempt.exception()
        attempts = e.last_attempt.attempt_number

    logger.debug(f"All {attempts} attempts failed; using fallback value.")
    _notify(policy.on_fallback, cause)
    return PolicyOutcome(value=policy.fallback_value, error=cause, attempts=attempts)


def execute(operation: Callable[[], T], policy: ResiliencePolicy[T]) -> T:
    """Runs ``operation`` under the policy and returns its result or the fallback value."""
    return execute_with_outcome(operation, policy).value
