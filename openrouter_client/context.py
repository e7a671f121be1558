#!/usr/bin/env python3
import time
import threading
from typing import Optional

from .errors import CancellationError


class CallContext:
    """
    Cancellation handle for one logical call.

    Thread-safe: cancel() may be called from any thread while the call is
    blocked in a backoff sleep or waiting on the network.

    Args:
        timeout: Optional overall deadline in seconds, measured from creation
    """

    def __init__(self, timeout: Optional[float] = None):
        self._cancelled = threading.Event()
        self.deadline = time.monotonic() + timeout if timeout is not None else None

    def cancel(self):
        self._cancelled.set()

    @property
    def cancelled(self) -> bool:
        return self._cancelled.is_set()

    @property
    def expired(self) -> bool:
        return self.deadline is not None and time.monotonic() >= self.deadline

    @property
    def done(self) -> bool:
        return self.cancelled or self.expired

    def remaining(self) -> Optional[float]:
        if self.deadline is None:
            return None
        return max(0.0, self.deadline - time.monotonic())

    def reason(self) -> str:
        return "cancelled" if self.cancelled else "deadline exceeded"

    def raise_if_done(self):
        if self.done:
            raise CancellationError(self.reason())

    def wait(self, seconds: float) -> bool:
        """Block up to `seconds` or until cancel(). Returns True if cancelled."""
        return self._cancelled.wait(max(0.0, seconds))

    def sleep(self, seconds: float) -> bool:
        """
        Sleep up to `seconds`, waking early on cancel or deadline.

        Returns True if the full sleep elapsed, False if the context finished.
        """
        remaining = self.remaining()
        if remaining is not None and remaining <= seconds:
            # Deadline falls inside the sleep
            self._cancelled.wait(remaining)
            return False
        self._cancelled.wait(max(0.0, seconds))
        return not self.done
