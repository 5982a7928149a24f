# -*- coding: utf-8 -*-
"""
Fixed-window rate limiter backed by the Django cache.
- One counter per (scope, caller, window); `cache.add` creates it, `cache.incr` bumps it atomically
- Works across processes when the cache is shared (Redis); LocMem is per process
- A cache outage lets the request through and logs an error
"""
from __future__ import annotations
from dataclasses import dataclass
from typing import Optional
import logging
import math
import time

from django.conf import settings
from django.core.cache import cache

logger = logging.getLogger(__name__)

DEFAULT_SCOPE = "org_stats"


@dataclass(frozen=True)
class RateLimitUsage:
    allowed: bool
    limit: int
    remaining: int
    reset_at: int          # epoch seconds when the current window ends
    retry_after: int = 0   # seconds; >= 1 when denied

    def headers(self) -> dict:
        out = {
            "X-RateLimit-Limit": str(self.limit),
            "X-RateLimit-Remaining": str(self.remaining),
            "X-RateLimit-Reset": str(self.reset_at),
        }
        if not self.allowed:
            out["Retry-After"] = str(self.retry_after)
        return out


def identity_for(*, user_id: Optional[object] = None, ip: Optional[str] = None) -> str:
    if user_id is not None:
        return f"user:{user_id}"
    return f"ip:{ip or 'unknown'}"

def _cache_key(scope: str, identity: str, window_index: int) -> str:
    return f"ratelimit:{scope}:{identity}:{window_index}"

def _bump(key: str, ttl: int) -> int:
    if cache.add(key, 1, timeout=ttl):
        return 1
    try:
        return cache.incr(key)
    except ValueError:
        # expired between add and incr
        cache.add(key, 1, timeout=ttl)
        return 1


def hit(
    identity: str,
    *,
    scope: str = DEFAULT_SCOPE,
    limit: Optional[int] = None,
    window: Optional[int] = None,
    now: Optional[float] = None,
) -> RateLimitUsage:
    """
    Count one request for `identity` and report whether it fits in the current window.
    """
    limit = int(limit if limit is not None else getattr(settings, "ORG_STATS_RATE_LIMIT", 100))
    window = max(int(window if window is not None else getattr(settings, "ORG_STATS_RATE_WINDOW", 60)), 1)
    now = time.time() if now is None else now

    window_index = int(now // window)
    reset_at = (window_index + 1) * window
    key = _cache_key(scope, identity, window_index)

    try:
        count = _bump(key, window + 1)
    except Exception:
        logger.exception("[rate_limit] cache unavailable, letting %s through", identity)
        return RateLimitUsage(allowed=True, limit=limit, remaining=limit, reset_at=reset_at)

    if count > limit:
        retry_after = max(int(math.ceil(reset_at - now)), 1)
        logger.warning("[rate_limit] %s exceeded %s/%ss on %s (retry in %ss)", identity, limit, window, scope, retry_after)
        return RateLimitUsage(allowed=False, limit=limit, remaining=0, reset_at=reset_at, retry_after=retry_after)

    return RateLimitUsage(allowed=True, limit=limit, remaining=max(limit - count, 0), reset_at=reset_at)
