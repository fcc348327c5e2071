# 📄 File: care_scheduler/api/middleware/error_handling.py
# 🧭 Purpose (Layman Explanation):
# Catches unexpected crashes during a request and answers with a tidy error
# message instead of a broken connection, and tags every request with an id
# so its log lines can be found later.
#
# 🧪 Purpose (Technical Summary):
# Outermost HTTP middleware: assigns the request id (X-Request-ID), binds it
# to the logging context, converts unhandled exceptions into the standard
# JSON error body and stamps response headers.
#
# 🔗 Dependencies:
# - starlette BaseHTTPMiddleware
# - care_scheduler.shared.utils.logging (log_context)
# - care_scheduler.shared.core.exceptions (PlantCareException)
#
# 🔄 Connected Modules / Calls From:
# - care_scheduler.main (middleware registration)

import logging
import uuid
from datetime import datetime, timezone

from fastapi import Request, Response
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.types import ASGIApp

from care_scheduler.shared.config.settings import get_settings
from care_scheduler.shared.core.exceptions import PlantCareException
from care_scheduler.shared.utils.logging import log_context

logger = logging.getLogger(__name__)

REQUEST_ID_HEADER = "X-Request-ID"


def error_body(
    code: str,
    message: str,
    details: dict = None,
    request_id: str = None
) -> dict:
    """Standard JSON error body shared by middleware and exception handlers."""
    return {
        "error": {
            "code": code,
            "message": message,
            "details": details or {},
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "request_id": request_id,
        }
    }


class ErrorHandlingMiddleware(BaseHTTPMiddleware):
    """
    Global error handling middleware.

    PlantCareException subclasses are normally answered by the application
    exception handler; anything that escapes it ends up here.
    """

    def __init__(self, app: ASGIApp):
        super().__init__(app)
        self.settings = get_settings()

    async def dispatch(self, request: Request, call_next) -> Response:
        request_id = request.headers.get(REQUEST_ID_HEADER) or str(uuid.uuid4())
        request.state.request_id = request_id

        with log_context(request_id=request_id):
            try:
                response = await call_next(request)
            except Exception as exc:
                response = self._handle_exception(request, exc, request_id)

        response.headers[REQUEST_ID_HEADER] = request_id
        return response

    def _handle_exception(self, request: Request, exc: Exception, request_id: str) -> JSONResponse:
        if isinstance(exc, PlantCareException):
            logger.warning(f"{exc.error_code} on {request.method} {request.url.path}: {exc.message}")
            return JSONResponse(
                status_code=exc.status_code,
                content=error_body(exc.error_code, exc.message, exc.details, request_id),
            )

        logger.error(
            f"Unhandled error on {request.method} {request.url.path}: {exc}",
            exc_info=True,
        )
        details = {"error_type": type(exc).__name__} if self.settings.DEBUG else {}
        return JSONResponse(
            status_code=500,
            content=error_body(
                "INTERNAL_SERVER_ERROR",
                "An internal server error occurred",
                details,
                request_id,
            ),
        )
