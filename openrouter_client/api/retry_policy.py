#!/usr/bin/env python3
import random
from typing import Callable, FrozenSet, Optional, TypeVar

from ..context import CallContext
from ..errors import (
    ApiError,
    CancellationError,
    RetryExhaustedError,
    TransportError,
    UnclassifiedHTTPError,
)
from ..logger import ClientLogger, create_logger
from .request_builder import OutgoingRequest

T = TypeVar('T')

TRANSIENT_MESSAGES = (
    "overloaded",
    "internal server error",
    "provider returned error",
)

# 408 timeout, 429 rate limit, 5xx provider/model trouble
TRANSIENT_STATUSES = frozenset({408, 429, 500, 502, 503, 504})


def is_transient(error: Exception, transient_statuses: FrozenSet[int] = TRANSIENT_STATUSES) -> bool:
    """Decide whether a failed attempt is worth repeating."""
    if isinstance(error, TransportError):
        return True

    if isinstance(error, ApiError):
        message = (error.message or "").lower()
        if any(marker in message for marker in TRANSIENT_MESSAGES):
            return True
        return error.status_code in transient_statuses

    if isinstance(error, UnclassifiedHTTPError):
        return error.status_code in transient_statuses

    return False


class RetryPolicy:
    def __init__(
        self,
        max_retries: int = 3,
        initial_backoff: float = 1.0,
        max_backoff: Optional[float] = None,
        rng: Optional[random.Random] = None,
        should_retry: Callable[[Exception], bool] = is_transient,
        logger: Optional[ClientLogger] = None,
    ):
        if max_retries < 0:
            raise ValueError(f"max_retries must be >= 0, got {max_retries}")
        self.max_retries = max_retries
        self.initial_backoff = initial_backoff
        self.max_backoff = max_backoff
        self.rng = rng or random.Random()
        self.should_retry = should_retry
        self.logger = logger or create_logger("retry")

    @property
    def max_attempts(self) -> int:
        return self.max_retries + 1

    def backoff_delay(self, retry: int) -> float:
        """Delay before retry number `retry` (1-based), jittered into [0.5x, 1.5x)."""
        base = self.initial_backoff * (2 ** (retry - 1))
        if self.max_backoff is not None:
            base = min(base, self.max_backoff)
        return base * (0.5 + self.rng.random())

    def execute_with_retry(
        self,
        fn: Callable[[OutgoingRequest], T],
        request: OutgoingRequest,
        context: Optional[CallContext] = None,
    ) -> T:
        context = context or CallContext()
        last_error: Optional[Exception] = None

        for attempt in range(self.max_attempts):
            if attempt > 0:
                delay = self.backoff_delay(attempt)
                self.logger.debug(
                    f"Backing off {delay:.2f}s before retry {attempt}/{self.max_retries}",
                    url=request.url,
                    attempt=attempt + 1,
                    max_attempts=self.max_attempts,
                    delay_seconds=delay,
                )
                if not context.sleep(delay):
                    raise CancellationError(context.reason()) from last_error

            context.raise_if_done()

            try:
                result = fn(request.clone())
            except CancellationError:
                raise
            except Exception as e:
                if not self.should_retry(e):
                    self.logger.debug(
                        "Error not retryable, raising",
                        url=request.url,
                        attempt=attempt + 1,
                        error=str(e),
                        error_type=type(e).__name__,
                    )
                    raise

                last_error = e
                if attempt < self.max_retries:
                    self.logger.warning(
                        f"Request failed with error: {e}. Retrying attempt {attempt + 1}/{self.max_retries}",
                        url=request.url,
                        attempt=attempt + 1,
                        max_attempts=self.max_attempts,
                        error=str(e),
                        error_type=type(e).__name__,
                    )
                continue

            if attempt > 0:
                self.logger.debug(
                    f"Request succeeded after {attempt + 1} attempts",
                    url=request.url,
                    attempt=attempt + 1,
                )
            return result

        self.logger.error(
            f"All {self.max_attempts} attempts failed",
            url=request.url,
            max_attempts=self.max_attempts,
            error=str(last_error),
            error_type=type(last_error).__name__,
        )
        raise RetryExhaustedError(self.max_attempts, last_error) from last_error
