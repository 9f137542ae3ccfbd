"""Rate limiting middleware for the HomeCalc Pro API."""

import logging
import time
from collections import defaultdict
from typing import Callable

from fastapi import Request, Response
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware

logger = logging.getLogger(__name__)

# Routes that call Claude and get the stricter limit
AI_ROUTES = ("/api/ai/", "/api/chatbot")


class RateLimitMiddleware(BaseHTTPMiddleware):
    """Per-client sliding one-minute window, kept in process memory.

    Limits are not shared across workers.
    """

    # Prune stale client keys every 5 minutes
    _CLEANUP_INTERVAL = 300

    def __init__(self, app, requests_per_minute: int = 60, ai_requests_per_minute: int = 10):
        super().__init__(app)
        self.requests_per_minute = requests_per_minute
        self.ai_requests_per_minute = ai_requests_per_minute
        self._requests: dict[str, list[float]] = defaultdict(list)
        self._last_cleanup = time.time()

    def _get_client_id(self, request: Request) -> str:
        forwarded = request.headers.get("x-forwarded-for")
        if forwarded:
            return forwarded.split(",")[0].strip()
        if request.client:
            return request.client.host
        return "unknown"

    def _is_ai_route(self, path: str) -> bool:
        return any(path.startswith(route) for route in AI_ROUTES)

    def _cleanup_stale_keys(self) -> None:
        now = time.time()
        if now - self._last_cleanup < self._CLEANUP_INTERVAL:
            return
        self._last_cleanup = now
        window_start = now - 60
        stale_keys = [
            key for key, timestamps in self._requests.items()
            if not timestamps or timestamps[-1] < window_start
        ]
        for key in stale_keys:
            del self._requests[key]

    def _check_rate(self, client_id: str, limit: int) -> bool:
        """Record a hit for client_id; False when the window is already full."""
        now = time.time()
        window_start = now - 60

        hits = [t for t in self._requests[client_id] if t > window_start]
        if len(hits) >= limit:
            self._requests[client_id] = hits
            return False

        hits.append(now)
        self._requests[client_id] = hits
        return True

    @staticmethod
    def _too_many(detail: str) -> JSONResponse:
        return JSONResponse(status_code=429, content={"detail": detail})

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        path = request.url.path
        if path == "/api/health":
            return await call_next(request)

        self._cleanup_stale_keys()
        client_id = self._get_client_id(request)

        if self._is_ai_route(path):
            if not self._check_rate(f"{client_id}:ai", self.ai_requests_per_minute):
                logger.warning("AI rate limit hit for %s on %s", client_id, path)
                return self._too_many("AI request rate limit exceeded. Please wait before trying again.")

        if not self._check_rate(client_id, self.requests_per_minute):
            logger.warning("Rate limit hit for %s on %s", client_id, path)
            return self._too_many("Rate limit exceeded. Please wait before trying again.")

        return await call_next(request)
