# 📄 File: care_scheduler/api/middleware/logging.py
# 🧭 Purpose (Layman Explanation):
# Writes one log line per web request: what was asked, how it went and how
# long it took.
#
# 🧪 Purpose (Technical Summary):
# Request logging middleware emitting structured http_request records via
# StructuredLogger.log_request, with slow-request warnings and excluded paths.
#
# 🔗 Dependencies:
# - starlette BaseHTTPMiddleware
# - care_scheduler.shared.utils.logging (get_logger)
#
# 🔄 Connected Modules / Calls From:
# - care_scheduler.main (middleware registration, skipped in tests)

import time

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.types import ASGIApp

from care_scheduler.shared.utils.logging import get_logger

logger = get_logger(__name__)

EXCLUDED_PATHS = ("/docs", "/redoc", "/openapi.json", "/favicon.ico")


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Structured per-request logging."""

    def __init__(self, app: ASGIApp, slow_request_threshold_ms: float = 2000.0):
        super().__init__(app)
        self.slow_request_threshold_ms = slow_request_threshold_ms

    async def dispatch(self, request: Request, call_next) -> Response:
        if request.url.path.startswith(EXCLUDED_PATHS):
            return await call_next(request)

        start_time = time.perf_counter()
        response = await call_next(request)
        duration_ms = (time.perf_counter() - start_time) * 1000

        logger.log_request(
            request.method,
            request.url.path,
            response.status_code,
            duration_ms,
            extra={'client_ip': request.client.host if request.client else None},
        )
        if duration_ms > self.slow_request_threshold_ms:
            logger.warning(f"Slow request: {request.method} {request.url.path} took {duration_ms:.0f}ms")

        response.headers["X-Response-Time"] = f"{duration_ms / 1000:.3f}s"
        return response
