"""Tests for polling policy and cancellation."""

from unittest.mock import Mock

import pytest

from kinesis_lifecycle_tool.stream.core.polling import CancellationToken, PollingPolicy, poll_until
from kinesis_lifecycle_tool.stream.exceptions import (
    AWSThrottlingError,
    StreamError,
    WaitCancelledError,
    WaitTimeoutError,
)


def test_delay_backs_off_up_to_max() -> None:
    policy = PollingPolicy(interval=1.0, backoff_factor=2.0, max_interval=5.0)
    assert [policy.delay(n) for n in range(5)] == [1.0, 2.0, 4.0, 5.0, 5.0]


def test_returns_first_non_none_result() -> None:
    check = Mock(side_effect=[None, None, "done"])
    policy = PollingPolicy(interval=0, timeout=None)
    assert poll_until(check, "thing", policy) == "done"
    assert check.call_count == 3


def test_max_attempts_raises_timeout() -> None:
    check = Mock(return_value=None)
    with pytest.raises(WaitTimeoutError):
        poll_until(check, "thing", PollingPolicy(interval=0, timeout=None, max_attempts=3))
    assert check.call_count == 3


def test_deadline_raises_timeout() -> None:
    check = Mock(return_value=None)
    with pytest.raises(WaitTimeoutError):
        poll_until(check, "thing", PollingPolicy(interval=0.01, timeout=0.05))


def test_throttling_is_retried() -> None:
    check = Mock(side_effect=[AWSThrottlingError("slow down"), "ok"])
    assert poll_until(check, "thing", PollingPolicy(interval=0, timeout=None)) == "ok"


def test_other_errors_propagate() -> None:
    check = Mock(side_effect=StreamError("boom"))
    with pytest.raises(StreamError, match="boom"):
        poll_until(check, "thing", PollingPolicy(interval=0, timeout=None))
    assert check.call_count == 1


def test_cancelled_token_stops_before_polling() -> None:
    token = CancellationToken()
    token.cancel()
    check = Mock(return_value="never")
    with pytest.raises(WaitCancelledError):
        poll_until(check, "thing", PollingPolicy(interval=0), token)
    check.assert_not_called()


def test_cancel_during_sleep() -> None:
    token = CancellationToken()

    def check() -> None:
        token.cancel()
        return None

    with pytest.raises(WaitCancelledError):
        poll_until(check, "thing", PollingPolicy(interval=10.0, timeout=None), token)


def test_zero_timeout_option_means_no_deadline() -> None:
    assert PollingPolicy.from_options(interval=0.5, timeout=0).timeout is None
    assert PollingPolicy.from_options(interval=0.5, timeout=30).timeout == 30


def test_zero_timeout_option_keeps_waiting() -> None:
    check = Mock(side_effect=[None] * 20 + ["done"])
    assert poll_until(check, "thing", PollingPolicy.from_options(interval=0, timeout=0)) == "done"
    assert check.call_count == 21
