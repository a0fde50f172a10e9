"""Client-side tracker for the server's rate-limit headers."""

from __future__ import annotations

import asyncio
import logging
import threading
import time
from typing import Callable, Mapping

from vercel_api.models import RateLimitInfo

logger = logging.getLogger(__name__)


class RateLimitTracker:
    """Thread-safe holder of the most recently observed rate-limit state.

    The server stays the source of truth: the tracker only pauses a caller
    when the last response said the quota is used up.  Reads and writes are
    serialized, but distinct requests are not, so two concurrent callers can
    both see ``remaining > 0`` and both be rejected with a 429.  This is a
    best-effort throttle, not admission control.
    """

    def __init__(self, clock: Callable[[], float] = time.time) -> None:
        self._clock = clock
        self._state: RateLimitInfo | None = None
        self._lock = threading.Lock()

    def update(self, headers: Mapping[str, str]) -> RateLimitInfo | None:
        """Replace the stored state from *headers*.

        Responses without a complete, parseable set of headers leave the
        previous state in place.
        """
        info = RateLimitInfo.from_headers(headers)
        if info is None:
            return None
        with self._lock:
            self._state = info
        return info

    def current_state(self) -> RateLimitInfo | None:
        with self._lock:
            return self._state

    def wait_duration(self) -> float:
        """Seconds to pause before the next request (0 when not exhausted)."""
        state = self.current_state()
        if state is None or not state.is_exceeded:
            return 0.0
        return state.seconds_until_reset(self._clock())

    def wait(self) -> None:
        """Block until the reset time if the quota is exhausted."""
        delay = self.wait_duration()
        if delay > 0:
            logger.warning("Rate limit exhausted, sleeping %.2fs until reset", delay)
            time.sleep(delay)

    async def await_availability(self) -> None:
        """Async variant of :meth:`wait`; does not re-check after waking."""
        delay = self.wait_duration()
        if delay > 0:
            logger.warning("Rate limit exhausted, sleeping %.2fs until reset", delay)
            await asyncio.sleep(delay)

    def clear(self) -> None:
        """Forget the stored state (useful in tests)."""
        with self._lock:
            self._state = None
