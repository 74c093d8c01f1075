"""
Retry Policy - Bounded linear backoff for transient remote errors.
"""

import logging
from dataclasses import dataclass
from typing import Any, Callable, Generator, Optional, TypeVar

import backoff

from ..core.ports.remote_repository import TransientError


T = TypeVar("T")

logger = logging.getLogger("RetryPolicy")


def linear(step: float = 1.0) -> Generator[Optional[float], Any, None]:
    """
    Wait generator for backoff: step, 2*step, 3*step, ...

    backoff sends the caught exception into the generator; a rate limit
    carrying retry_after waits at least that long.
    """
    # backoff primes the generator with send(None)
    error = yield None
    n = 1
    while True:
        wait = step * n
        retry_after = getattr(error, "retry_after", None)
        if retry_after:
            wait = max(wait, retry_after)
        error = yield wait
        n += 1


def _log_backoff(details: dict) -> None:
    exc = details.get("exception")
    logger.warning(
        f"Backing off {details['wait']:.1f}s after attempt {details['tries']}: {exc}"
    )


def _log_giveup(details: dict) -> None:
    exc = details.get("exception")
    logger.error(f"Giving up after {details['tries']} attempt(s): {exc}")


@dataclass(frozen=True)
class RetryPolicy:
    """
    Retries TransientError up to max_attempts times in total.

    Any other exception propagates on the first attempt.
    """

    max_attempts: int = 3
    delay: float = 2.0

    def call(self, func: Callable[..., T], *args: Any, **kwargs: Any) -> T:
        """Call func, retrying transient failures with linear backoff."""
        retrying = backoff.on_exception(
            linear,
            TransientError,
            max_tries=max(1, self.max_attempts),
            jitter=None,
            on_backoff=_log_backoff,
            on_giveup=_log_giveup,
            logger=None,
            step=self.delay,
        )(func)
        return retrying(*args, **kwargs)
