"""
Cancellation

A cancel token threaded through a verification run so that a caller
(or a signal handler) can abort a confirmation that is stuck waiting.
"""

from __future__ import annotations

import threading
import time
from typing import Optional


class CancelToken:
    """
    Cooperative cancellation with an optional overall deadline.

    `wait()` replaces a plain sleep: it returns early, with True,
    once the token is cancelled or the deadline has passed.
    """

    def __init__(self, *, deadline_s: Optional[float] = None) -> None:
        self._event = threading.Event()
        self._deadline = time.monotonic() + deadline_s if deadline_s is not None else None

    def cancel(self) -> None:
        self._event.set()

    @property
    def expired(self) -> bool:
        return self._deadline is not None and time.monotonic() >= self._deadline

    @property
    def cancelled(self) -> bool:
        return self._event.is_set() or self.expired

    def remaining(self) -> Optional[float]:
        """Seconds left before the deadline, or None when there is none."""
        if self._deadline is None:
            return None
        return max(0.0, self._deadline - time.monotonic())

    def wait(self, seconds: float) -> bool:
        """Sleep up to `seconds`; return True if cancelled in the meantime."""
        remaining = self.remaining()
        if remaining is not None and remaining < seconds:
            self._event.wait(remaining)
            return True
        return self._event.wait(seconds) or self.expired
