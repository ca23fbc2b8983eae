"""Per-client sliding-window rate limiting."""

from __future__ import annotations

import logging
import threading
import time
from typing import Callable, Dict, List, Optional


DEFAULT_CLIENT_ID = "default"
DEFAULT_MAX_REQUESTS = 100
DEFAULT_WINDOW_MS = 60000
RETENTION_MS = 5 * 60 * 1000
SWEEP_INTERVAL_MS = 5 * 60 * 1000

logger = logging.getLogger("sdd_server.rate_limiter")


def _monotonic_ms() -> float:
    return time.monotonic() * 1000


class RateLimiter:
    """Count requests per client inside a trailing time window.

    Timestamps are milliseconds from ``clock``. Expired entries are dropped
    on every check for the calling client, and every ``sweep_interval_ms``
    a bulk sweep drops stale entries for all clients.
    """

    def __init__(
        self,
        clock: Callable[[], float] = _monotonic_ms,
        retention_ms: int = RETENTION_MS,
        sweep_interval_ms: int = SWEEP_INTERVAL_MS,
    ):
        self._clock = clock
        self.retention_ms = retention_ms
        self.sweep_interval_ms = sweep_interval_ms
        self._requests: Dict[str, List[float]] = {}
        self._lock = threading.Lock()
        self._last_sweep = clock()

    def is_allowed(
        self,
        client_id: str = DEFAULT_CLIENT_ID,
        max_requests: int = DEFAULT_MAX_REQUESTS,
        window_ms: int = DEFAULT_WINDOW_MS,
    ) -> bool:
        """Return whether the client may proceed, recording the attempt if so."""
        with self._lock:
            now = self._clock()
            if now - self._last_sweep >= self.sweep_interval_ms:
                self._sweep(now)

            window_start = now - window_ms
            recent = [stamp for stamp in self._requests.get(client_id, []) if stamp > window_start]

            if len(recent) >= max_requests:
                self._requests[client_id] = recent
                logger.warning(f"Rate limit exceeded for client '{client_id}'")
                return False

            recent.append(now)
            self._requests[client_id] = recent
            return True

    def cleanup(self, now: Optional[float] = None) -> None:
        """Drop timestamps older than the retention window for every client."""
        with self._lock:
            self._sweep(self._clock() if now is None else now)

    def _sweep(self, now: float) -> None:
        cutoff = now - self.retention_ms
        for client_id in list(self._requests):
            recent = [stamp for stamp in self._requests[client_id] if stamp > cutoff]
            if recent:
                self._requests[client_id] = recent
            else:
                del self._requests[client_id]
        self._last_sweep = now
        logger.debug(f"Rate limiter sweep kept {len(self._requests)} clients")

    def tracked_clients(self) -> List[str]:
        with self._lock:
            return sorted(self._requests)

    def request_count(self, client_id: str = DEFAULT_CLIENT_ID) -> int:
        with self._lock:
            return len(self._requests.get(client_id, []))
