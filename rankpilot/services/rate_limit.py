"""
RankPilot — Per-user request rate limiter.

Fixed one-minute counting window per user, limit chosen by subscription
tier. State lives on the instance; the application context owns exactly one.
"""

import logging
import time
from dataclasses import dataclass
from typing import Callable

logger = logging.getLogger(__name__)

WINDOW_SECS = 60


@dataclass
class RateLimitDecision:
    allowed: bool
    remaining: int
    retry_after: int = 0


class RateLimiter:
    """In-memory counting window keyed by user id."""

    def __init__(
        self,
        limits: dict[str, int],
        default_tier: str = "free",
        clock: Callable[[], float] = time.monotonic,
    ):
        self._limits = dict(limits)
        self._default_tier = default_tier
        self._clock = clock
        self._windows: dict[str, tuple[float, int]] = {}  # user_id → (window_start, count)
        self._last_prune = clock()

    def limit_for(self, tier: str) -> int:
        return self._limits.get(tier, self._limits.get(self._default_tier, 0))

    def check(self, user_id: str, tier: str) -> RateLimitDecision:
        """Count one request for ``user_id`` and say whether it may proceed."""
        limit = self.limit_for(tier)
        now = self._clock()
        self._prune(now)

        start, count = self._windows.get(user_id, (now, 0))
        if now - start >= WINDOW_SECS:
            start, count = now, 0

        if count >= limit:
            retry_after = max(1, int(WINDOW_SECS - (now - start)))
            logger.info("Rate limit hit for %s (tier=%s, limit=%d/min)", user_id, tier, limit)
            return RateLimitDecision(allowed=False, remaining=0, retry_after=retry_after)

        count += 1
        self._windows[user_id] = (start, count)
        return RateLimitDecision(allowed=True, remaining=limit - count)

    def _prune(self, now: float) -> None:
        """Drop expired windows, at most once per window length."""
        if now - self._last_prune < WINDOW_SECS:
            return
        self._last_prune = now
        expired = [uid for uid, (start, _) in self._windows.items() if now - start >= WINDOW_SECS]
        for uid in expired:
            del self._windows[uid]

    def reset(self, user_id: str | None = None) -> None:
        if user_id is None:
            self._windows.clear()
        else:
            self._windows.pop(user_id, None)

    def __len__(self) -> int:
        return len(self._windows)
