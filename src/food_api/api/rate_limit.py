"""Per-client request rate limiting."""

import math
import time
from dataclasses import dataclass, field

from limits import RateLimitItem, parse
from limits.storage import MemoryStorage
from limits.strategies import FixedWindowRateLimiter

RATE_LIMIT_MESSAGE = "Too many requests from this IP, please try again later."


@dataclass(frozen=True)
class RateLimitDecision:
    """Outcome of counting one request against a client's window."""

    allowed: bool
    limit: int
    remaining: int
    reset_after_seconds: int

    def headers(self) -> dict[str, str]:
        """Standard ``RateLimit-*`` response headers."""
        return {
            "RateLimit-Limit": str(self.limit),
            "RateLimit-Remaining": str(self.remaining),
            "RateLimit-Reset": str(self.reset_after_seconds),
        }


@dataclass
class RequestRateLimiter:
    """Fixed-window limiter keyed by client address.

    Counters live in process memory and are shared by every request the
    process serves.
    """

    item: RateLimitItem
    _limiter: FixedWindowRateLimiter = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self._limiter = FixedWindowRateLimiter(MemoryStorage())

    @classmethod
    def from_string(cls, limit: str) -> "RequestRateLimiter":
        """Create a limiter from a string such as ``100 per 15 minutes``."""
        return cls(item=parse(limit))

    @property
    def window_description(self) -> str:
        """Human readable window length, for example ``15 minutes``."""
        multiples = self.item.multiples
        granularity = self.item.GRANULARITY.name
        suffix = "" if multiples == 1 else "s"
        return f"{multiples} {granularity}{suffix}"

    def hit(self, client_key: str) -> RateLimitDecision:
        """Count a request for ``client_key`` and report whether it may proceed."""
        allowed = self._limiter.hit(self.item, client_key)
        stats = self._limiter.get_window_stats(self.item, client_key)
        reset_after = max(0, math.ceil(stats.reset_time - time.time()))
        return RateLimitDecision(
            allowed=allowed,
            limit=self.item.amount,
            remaining=max(0, stats.remaining),
            reset_after_seconds=reset_after,
        )
