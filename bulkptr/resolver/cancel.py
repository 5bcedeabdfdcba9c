"""
Batch cancellation token
"""

import threading
import time
from typing import Optional


class CancelToken:
    """
    Cooperative cancellation shared by all workers of a batch.

    Cancelled either explicitly via cancel() or implicitly once the
    optional deadline (seconds from creation) has passed.
    """

    def __init__(self, deadline: Optional[float] = None):
        self._event = threading.Event()
        self._expires_at = time.monotonic() + deadline if deadline is not None else None

    def cancel(self):
        self._event.set()

    @property
    def cancelled(self) -> bool:
        if self._event.is_set():
            return True
        if self._expires_at is not None and time.monotonic() >= self._expires_at:
            self._event.set()
            return True
        return False

    @property
    def remaining(self) -> Optional[float]:
        """Seconds left before the deadline, None if there is none"""
        if self._expires_at is None:
            return None
        return max(0.0, self._expires_at - time.monotonic())

    def wait(self, seconds: float) -> bool:
        """
        Sleep up to ``seconds``, waking early on cancellation.

        Returns:
            True if the token is cancelled when the wait ends
        """
        remaining = self.remaining
        if remaining is not None:
            seconds = min(seconds, remaining)
        self._event.wait(seconds)
        return self.cancelled
