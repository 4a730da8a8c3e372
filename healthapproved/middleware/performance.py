"""
Request timing middleware.

Logs method, path, status code and duration of every HTTP request and
exposes the duration in an X-Process-Time header.
"""

import time
import logging
from fastapi import Request

logger = logging.getLogger(__name__)


class PerformanceMiddleware:
    """Middleware to log HTTP request timings"""

    SKIP_PATHS = (
        "/docs",
        "/redoc",
        "/openapi.json",
        "/favicon.ico",
        "/health",
    )

    def __init__(self, app, slow_request_ms: float = 1000.0):
        self.app = app
        self.slow_request_ms = slow_request_ms

    async def __call__(self, scope, receive, send):
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        request = Request(scope, receive)
        if self._should_skip_monitoring(request.url.path):
            await self.app(scope, receive, send)
            return

        start_time = time.perf_counter()
        status_code = 500

        async def send_wrapper(message):
            nonlocal status_code
            if message["type"] == "http.response.start":
                status_code = message["status"]
                elapsed_ms = (time.perf_counter() - start_time) * 1000
                headers = list(message.get("headers", []))
                headers.append((b"x-process-time", f"{elapsed_ms:.2f}".encode()))
                message = {**message, "headers": headers}
            await send(message)

        try:
            await self.app(scope, receive, send_wrapper)
        except Exception as e:
            logger.error(f"Request processing error: {e}")
            raise
        finally:
            response_time_ms = (time.perf_counter() - start_time) * 1000
            self._record_request(request, status_code, response_time_ms)

    def _should_skip_monitoring(self, path: str) -> bool:
        """Determine if we should skip monitoring for this path"""
        return any(path.startswith(skip_path) for skip_path in self.SKIP_PATHS)

    def _record_request(self, request: Request, status_code: int, response_time_ms: float):
        msg = f"{request.method} {request.url.path} -> {status_code} in {response_time_ms:.1f}ms"
        if response_time_ms >= self.slow_request_ms:
            logger.warning(f"Slow request: {msg}")
        else:
            logger.info(msg)
