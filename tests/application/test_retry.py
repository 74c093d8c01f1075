"""Tests for the retry policy."""

import itertools
import time

import pytest
from unittest.mock import Mock

from vault2git.application.retry import RetryPolicy, linear
from vault2git.core.ports.remote_repository import (
    InvalidRequestError,
    RateLimitError,
    TransientError,
)


class TestLinear:
    """Tests for the linear wait generator."""

    def test_grows_by_step(self):
        gen = linear(step=2.0)
        next(gen)
        assert list(itertools.islice(gen, 4)) == [2.0, 4.0, 6.0, 8.0]


class TestRetryPolicy:
    """Tests for RetryPolicy.call."""

    @pytest.fixture
    def policy(self):
        return RetryPolicy(max_attempts=3, delay=0)

    def test_returns_value(self, policy):
        func = Mock(return_value="ok")

        assert policy.call(func, 1, key="v") == "ok"
        func.assert_called_once_with(1, key="v")

    def test_retries_transient(self, policy):
        func = Mock(side_effect=[TransientError("reset"), RateLimitError("429"), "ok"])

        assert policy.call(func) == "ok"
        assert func.call_count == 3

    def test_gives_up_after_max_attempts(self, policy):
        func = Mock(side_effect=TransientError("down"))

        with pytest.raises(TransientError):
            policy.call(func)
        assert func.call_count == 3

    def test_permanent_error_not_retried(self, policy):
        func = Mock(side_effect=InvalidRequestError("bad"))

        with pytest.raises(InvalidRequestError):
            policy.call(func)
        assert func.call_count == 1

    def test_single_attempt(self):
        func = Mock(side_effect=TransientError("down"))

        with pytest.raises(TransientError):
            RetryPolicy(max_attempts=0, delay=0).call(func)
        assert func.call_count == 1


class TestRetryAfter:
    """Rate limits that name a wait are honored."""

    def test_linear_waits_at_least_retry_after(self):
        gen = linear(step=2.0)
        next(gen)

        assert gen.send(RateLimitError("429", retry_after=30.0)) == 30.0
        assert gen.send(RateLimitError("429", retry_after=1.0)) == 4.0
        assert gen.send(TransientError("502")) == 6.0

    def test_policy_sleeps_for_retry_after(self, monkeypatch):
        waits = []
        monkeypatch.setattr(time, "sleep", waits.append)
        func = Mock(side_effect=[RateLimitError("429", retry_after=60.0), "ok"])

        assert RetryPolicy(max_attempts=3, delay=2.0).call(func) == "ok"
        assert waits == [60.0]
