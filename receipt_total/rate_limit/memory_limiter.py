"""Process-local sliding-window rate limiter.

State lives in this process only: limits are per instance, and a restart
forgets every window.
"""

import asyncio
import threading
import time
from collections.abc import Callable

from receipt_total.errors.exceptions import RateLimitError
from receipt_total.logging.logger import Log
from receipt_total.rate_limit.base import BaseRateLimiter

_MINUTE_SECONDS = 60.0
_HOUR_SECONDS = 3600.0


class InMemoryRateLimiter(BaseRateLimiter):
    """Counts requests per (client, endpoint) over rolling minute and hour windows."""

    def __init__(
        self,
        *,
        max_per_minute: int = 60,
        max_per_hour: int = 1000,
        retry_after_seconds: int = 60,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._max_per_minute = max_per_minute
        self._max_per_hour = max_per_hour
        self._retry_after = retry_after_seconds
        self._clock = clock
        self._lock = threading.Lock()
        self._requests: dict[str, list[float]] = {}

    def check(self, client_address: str, endpoint: str) -> None:
        key = f"{client_address}-{endpoint}"
        now = self._clock()
        minute_ago = now - _MINUTE_SECONDS
        hour_ago = now - _HOUR_SECONDS

        with self._lock:
            recent = [ts for ts in self._requests.get(key, []) if ts > hour_ago]
            self._requests[key] = recent

            in_last_minute = sum(1 for ts in recent if ts > minute_ago)
            if in_last_minute >= self._max_per_minute:
                raise RateLimitError(
                    f"Limit of {self._max_per_minute} requests per minute exceeded",
                    retry_after=self._retry_after,
                )
            if len(recent) >= self._max_per_hour:
                raise RateLimitError(
                    f"Limit of {self._max_per_hour} requests per hour exceeded",
                    retry_after=self._retry_after,
                )
            recent.append(now)

    def cleanup(self) -> int:
        hour_ago = self._clock() - _HOUR_SECONDS
        removed = 0
        with self._lock:
            for key in list(self._requests):
                recent = [ts for ts in self._requests[key] if ts > hour_ago]
                if recent:
                    self._requests[key] = recent
                else:
                    del self._requests[key]
                    removed += 1
        return removed


async def run_periodic_cleanup(limiter: BaseRateLimiter, interval_seconds: float) -> None:
    """Sweep the limiter forever, every ``interval_seconds``. Cancel to stop."""
    while True:
        await asyncio.sleep(interval_seconds)
        removed = limiter.cleanup()
        Log.debug(f"Rate limiter sweep removed {removed} expired keys")
