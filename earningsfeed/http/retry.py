"""Retry of transient failures with jittered exponential backoff."""

import asyncio
import logging
import random
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Awaitable, Callable, Optional, TypeVar

from earningsfeed.core.config import DEFAULT_MAX_RETRIES
from earningsfeed.core.errors import EarningsFeedError, RateLimitError

logger = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass(frozen=True)
class RetryPolicy:
    """Configuration for retry attempts."""

    max_attempts: int = DEFAULT_MAX_RETRIES  # total attempts, first one included
    base_delay: float = 0.5  # seconds before the first retry
    max_delay: float = 8.0  # cap on the exponential term
    max_wait: float = 60.0  # cap on waiting for a rate-limit reset
    jitter: bool = True  # full jitter on the exponential term

    def __post_init__(self) -> None:
        if self.max_attempts < 1:
            raise ValueError("max_attempts must be at least 1")
        if self.base_delay < 0 or self.max_delay < 0 or self.max_wait < 0:
            raise ValueError("delays must not be negative")

    def compute_delay(
        self,
        retry_number: int,
        error: EarningsFeedError,
        now: Optional[datetime] = None,
    ) -> float:
        """
        Seconds to wait before retry number ``retry_number`` (1-based).

        A rate-limit reset in the future is waited out, capped at ``max_wait``;
        a reset in the past means retry immediately.
        """
        if isinstance(error, RateLimitError) and error.reset_at is not None:
            now = now or datetime.now(timezone.utc)
            remaining = (error.reset_at - now).total_seconds()
            return min(max(0.0, remaining), self.max_wait)

        backoff = min(self.max_delay, self.base_delay * (2 ** (retry_number - 1)))
        if self.jitter:
            backoff = random.uniform(0, backoff)
        return backoff


async def _sleep(seconds: float) -> None:
    await asyncio.sleep(seconds)


async def with_retry(
    operation: Callable[[], Awaitable[T]],
    policy: RetryPolicy,
    *,
    description: str = "request",
) -> T:
    """
    Run ``operation`` until it succeeds, fails permanently, or attempts run out.

    Only errors whose ``retryable`` flag is set (rate limit, server error,
    network) are retried. Anything else, including non-client exceptions,
    propagates immediately.

    Args:
        operation: Zero-argument coroutine factory; called once per attempt.
        policy: Attempt budget and backoff settings.
        description: Label used in log messages.

    Returns:
        The value returned by ``operation``.

    Raises:
        EarningsFeedError: The last error, unchanged, once attempts are exhausted.
    """
    attempt = 1
    while True:
        try:
            return await operation()
        except EarningsFeedError as e:
            if not e.retryable or attempt >= policy.max_attempts:
                if e.retryable:
                    logger.warning(
                        f"{description} failed after {attempt} attempt(s): {e}"
                    )
                raise
            delay = policy.compute_delay(attempt, e)
            logger.warning(
                f"{description} failed ({e.kind.value}, attempt {attempt}/{policy.max_attempts}), "
                f"retrying in {delay:.2f}s"
            )
        await _sleep(delay)
        attempt += 1
