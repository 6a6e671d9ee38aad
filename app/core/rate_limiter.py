# /app/core/rate_limiter.py

import threading
import time
from typing import Callable, Dict, List, Optional

from fastapi import Request


class RateLimiter:
    """
    In-memory per-client limiter. Each key keeps the timestamps of its
    accepted requests; timestamps older than the window are dropped on every
    check, and a request is accepted while fewer than `limit` remain.
    """

    def __init__(self, window_seconds: float, limit: int, clock: Callable[[], float] = time.monotonic):
        self.window_seconds = window_seconds
        self.limit = limit
        self._clock = clock
        self._requests: Dict[str, List[float]] = {}
        self._lock = threading.Lock()

    def allow(self, key: str, now: Optional[float] = None) -> bool:
        if now is None:
            now = self._clock()
        window_start = now - self.window_seconds

        with self._lock:
            recent = [ts for ts in self._requests.get(key, []) if ts > window_start]
            if len(recent) < self.limit:
                recent.append(now)
                self._requests[key] = recent
                return True
            self._requests[key] = recent
            return False


def get_client_ip(request: Request) -> str:
    forwarded_for = request.headers.get("x-forwarded-for")
    if forwarded_for:
        # Take the first IP in case of multiple proxies.
        return forwarded_for.split(",")[0].strip()

    real_ip = request.headers.get("x-real-ip")
    if real_ip:
        return real_ip.strip()

    if request.client:
        return request.client.host
    return "unknown"
