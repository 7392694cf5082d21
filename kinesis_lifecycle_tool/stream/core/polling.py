"""
Polling policy and cancellation for eventually-consistent waits.

Stream creation and deletion are asynchronous on the service side, so the
provisioner and decommissioner poll DescribeStreamSummary until the state
they expect is observed. Every wait is bounded by a PollingPolicy and can be
aborted through a CancellationToken.

Note: This code was generated with assistance from AI coding tools
and has been reviewed and tested by a human.
"""

import threading
import time
from collections.abc import Callable
from dataclasses import dataclass
from typing import TypeVar

from ..constants import POLL_BACKOFF_FACTOR, POLL_INTERVAL, POLL_INTERVAL_MAX, POLL_TIMEOUT
from ..exceptions import AWSThrottlingError, WaitCancelledError, WaitTimeoutError
from ..logging_config import get_logger

logger = get_logger(__name__)

T = TypeVar("T")


@dataclass(frozen=True)
class PollingPolicy:
    """
    Bounds for a polling loop.

    Attributes:
        interval: Delay before the second poll, in seconds (0 polls back to back)
        backoff_factor: Multiplier applied to the delay after each poll
        max_interval: Upper bound for the delay
        timeout: Deadline in seconds from the first poll (None for no deadline)
        max_attempts: Maximum number of polls (None for unlimited)
    """

    interval: float = POLL_INTERVAL
    backoff_factor: float = POLL_BACKOFF_FACTOR
    max_interval: float = POLL_INTERVAL_MAX
    timeout: float | None = POLL_TIMEOUT
    max_attempts: int | None = None

    @classmethod
    def from_options(cls, interval: float, timeout: float) -> "PollingPolicy":
        """Build a policy from CLI options, where a timeout of 0 means no deadline."""
        return cls(interval=interval, timeout=timeout or None)

    def delay(self, attempt: int) -> float:
        """Delay after the given zero-based attempt."""
        return min(self.interval * (self.backoff_factor**attempt), self.max_interval)


class CancellationToken:
    """Thread-safe cancellation flag shared by every blocking wait."""

    def __init__(self) -> None:
        self._event = threading.Event()

    def cancel(self) -> None:
        self._event.set()

    @property
    def cancelled(self) -> bool:
        return self._event.is_set()

    def sleep(self, seconds: float) -> bool:
        """
        Sleep unless cancelled.

        Returns:
            True if the token was cancelled during (or before) the sleep
        """
        if seconds <= 0:
            return self._event.is_set()
        return self._event.wait(seconds)

    def raise_if_cancelled(self, what: str) -> None:
        if self._event.is_set():
            raise WaitCancelledError(f"Cancelled while {what}")


def poll_until(
    check: Callable[[], T | None],
    description: str,
    policy: PollingPolicy | None = None,
    token: CancellationToken | None = None,
) -> T:
    """
    Call check until it returns something other than None.

    AWSThrottlingError raised by the check is treated as a transient miss and
    the check is retried at the next poll. Any other exception propagates.

    Args:
        check: Callable returning a result when the awaited state is reached
        description: What is being waited for (used in logs and errors)
        policy: Polling bounds (defaults to PollingPolicy())
        token: Cancellation token (optional)

    Returns:
        The first non-None check result

    Raises:
        WaitTimeoutError: If the deadline or attempt budget is exhausted
        WaitCancelledError: If the token is cancelled
    """
    policy = policy or PollingPolicy()
    token = token or CancellationToken()
    start_time = time.monotonic()
    attempt = 0

    while True:
        token.raise_if_cancelled(f"waiting for {description}")

        try:
            result = check()
        except AWSThrottlingError:
            logger.warning(f"Throttled while waiting for {description}, retrying")
            result = None

        if result is not None:
            logger.debug(f"Observed {description} after {attempt + 1} poll(s)")
            return result

        attempt += 1
        if policy.max_attempts is not None and attempt >= policy.max_attempts:
            raise WaitTimeoutError(f"Gave up waiting for {description} after {attempt} polls")

        delay = policy.delay(attempt - 1)
        if policy.timeout is not None:
            elapsed = time.monotonic() - start_time
            remaining = policy.timeout - elapsed
            if remaining <= 0:
                raise WaitTimeoutError(
                    f"Timed out waiting for {description} after {policy.timeout}s"
                )
            delay = min(delay, remaining)

        logger.debug(f"Waiting {delay:.2f}s for {description} (attempt {attempt})")
        if token.sleep(delay):
            raise WaitCancelledError(f"Cancelled while waiting for {description}")
