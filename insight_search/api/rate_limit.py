"""Fixed-window per-client rate limiting for POST endpoints."""

import time
from typing import Callable, Dict, Tuple

import structlog
from fastapi import Request
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware

logger = structlog.get_logger(__name__)


class RateLimitMiddleware(BaseHTTPMiddleware):
    """Allow ``max_requests`` POSTs per client per ``window_seconds``."""

    def __init__(
        self,
        app,
        max_requests: int = 100,
        window_seconds: int = 15 * 60,
        clock: Callable[[], float] = time.monotonic,
    ):
        super().__init__(app)
        self.max_requests = max_requests
        self.window_seconds = window_seconds
        self.clock = clock
        self._windows: Dict[str, Tuple[float, int]] = {}
        self._last_sweep = clock()

    def _sweep(self, now: float) -> None:
        """Forget clients whose window has expired."""
        expired = [key for key, (started, _) in self._windows.items() if now - started >= self.window_seconds]
        for key in expired:
            del self._windows[key]
        self._last_sweep = now
        if expired:
            logger.debug("Evicted expired rate limit windows", count=len(expired))

    def _client_key(self, request: Request) -> str:
        return request.client.host if request.client else "unknown"

    def hit(self, key: str) -> bool:
        """Count one request for ``key``; False when over the limit."""
        now = self.clock()
        if now - self._last_sweep >= self.window_seconds:
            self._sweep(now)
        started, count = self._windows.get(key, (now, 0))
        if now - started >= self.window_seconds:
            started, count = now, 0
        count += 1
        self._windows[key] = (started, count)
        return count <= self.max_requests

    async def dispatch(self, request: Request, call_next):
        if request.method == "POST" and not self.hit(self._client_key(request)):
            logger.warning("Rate limit exceeded", client=self._client_key(request), path=request.url.path)
            return JSONResponse(
                status_code=429,
                content={"error": "Too many requests, please try again later."},
            )
        return await call_next(request)
