"""Lightweight models used by the request pipeline."""

from __future__ import annotations

import time
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Mapping

import httpx

LIMIT_HEADER = "x-ratelimit-limit"
REMAINING_HEADER = "x-ratelimit-remaining"
RESET_HEADER = "x-ratelimit-reset"


def parse_reset(raw: str | None) -> datetime | None:
    """Parse an epoch-seconds reset header value, returning *None* if invalid."""
    if raw is None:
        return None
    try:
        return datetime.fromtimestamp(float(raw), tz=timezone.utc)
    except (ValueError, OverflowError, OSError):
        return None


@dataclass(frozen=True)
class RateLimitInfo:
    """Rate-limit metadata parsed from response headers."""

    limit: int
    remaining: int
    reset_at: datetime

    @property
    def is_exceeded(self) -> bool:
        # The server may report negative values, so this is not ``== 0``.
        return self.remaining <= 0

    def seconds_until_reset(self, now: float | None = None) -> float:
        """Seconds from *now* (epoch seconds) until the reset, never negative."""
        if now is None:
            now = time.time()
        return max(0.0, self.reset_at.timestamp() - now)

    @classmethod
    def from_headers(cls, headers: Mapping[str, str]) -> RateLimitInfo | None:
        """Parse ``X-RateLimit-*`` headers, returning *None* if absent or malformed."""
        headers = httpx.Headers(headers)
        raw_limit = headers.get(LIMIT_HEADER)
        raw_remaining = headers.get(REMAINING_HEADER)
        reset_at = parse_reset(headers.get(RESET_HEADER))
        if raw_limit is None or raw_remaining is None or reset_at is None:
            return None
        try:
            limit = int(raw_limit)
            remaining = int(raw_remaining)
        except ValueError:
            return None
        return cls(limit=limit, remaining=remaining, reset_at=reset_at)
