"""
Middleware configuration helpers.
"""

import time
from typing import Callable, Dict, List, Sequence

from fastapi import FastAPI, Request, Response
from fastapi.middleware.cors import CORSMiddleware
from starlette.middleware.base import BaseHTTPMiddleware

from core.config import Settings
from utils.logging import get_logger

logger = get_logger(__name__)


class RequestTimingMiddleware(BaseHTTPMiddleware):
    """Middleware to track request processing time."""

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        start_time = time.perf_counter()

        response = await call_next(request)

        process_time_ms = int((time.perf_counter() - start_time) * 1000)
        response.headers["X-Process-Time-Ms"] = str(process_time_ms)

        # Remote rephrasing dominates slow requests
        if process_time_ms > 1000:
            logger.warning("Slow request", method=request.method, path=request.url.path, duration_ms=process_time_ms)
        elif process_time_ms > 500:
            logger.debug("Request timing", method=request.method, path=request.url.path, duration_ms=process_time_ms)

        return response


class RateLimitingMiddleware(BaseHTTPMiddleware):
    """Per-client sliding one-minute window on endpoints that can reach the remote rephraser."""

    def __init__(self, app, paths: Sequence[str], calls_per_minute: int = 120):
        super().__init__(app)
        self.paths = tuple(paths)
        self.calls_per_minute = calls_per_minute
        self.request_times: Dict[str, List[float]] = {}
        self._last_eviction = 0.0

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        if self.calls_per_minute <= 0 or not request.url.path.startswith(self.paths):
            return await call_next(request)

        client_ip = request.client.host if request.client else "unknown"
        current_time = time.time()
        if current_time - self._last_eviction >= 60:
            self.evict_idle(current_time)

        recent = [timestamp for timestamp in self.request_times.get(client_ip, []) if current_time - timestamp < 60]
        if len(recent) >= self.calls_per_minute:
            self.request_times[client_ip] = recent
            logger.warning("Rate limit exceeded", client_ip=client_ip, path=request.url.path)
            return Response(
                content='{"error": "rate_limit_exceeded", "message": "Too many requests", "status_code": 429}',
                status_code=429,
                headers={"Content-Type": "application/json", "Retry-After": "60"},
            )

        recent.append(current_time)
        self.request_times[client_ip] = recent
        return await call_next(request)

    def evict_idle(self, now: float) -> None:
        """Forget clients with no request inside the current window."""
        idle = [ip for ip, times in self.request_times.items() if not times or now - times[-1] >= 60]
        for ip in idle:
            del self.request_times[ip]
        self._last_eviction = now


def configure_middleware(app: FastAPI, *, settings: Settings) -> None:
    """Configure CORS and other cross-cutting middleware."""
    app.add_middleware(RequestTimingMiddleware)
    app.add_middleware(
        RateLimitingMiddleware,
        paths=[f"{settings.api_prefix}/rephrase", f"{settings.api_prefix}/analyze/page"],
        calls_per_minute=settings.rephrase_rate_limit_per_minute,
    )

    # Extension content scripts call from arbitrary page origins
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=False,
        allow_methods=["*"],
        allow_headers=["*"],
    )
