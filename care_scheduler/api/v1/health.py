# 📄 File: care_scheduler/api/v1/health.py
# 🧭 Purpose (Layman Explanation):
# Lets monitoring tools ask "is the scheduler alive, and can it reach its
# database?".
# 🧪 Purpose (Technical Summary):
# Liveness and readiness endpoints. /health reports the service status plus
# the database check; /health/live never touches the database.
# 🔗 Dependencies:
# FastAPI, care_scheduler.shared.config.settings,
# care_scheduler.shared.infrastructure.database.session (session_manager)
# 🔄 Connected Modules / Calls From:
# care_scheduler.api.v1.router, load balancers, container orchestration

import logging
from datetime import datetime, timezone

from fastapi import APIRouter
from fastapi.responses import JSONResponse

from care_scheduler.shared.config.settings import get_settings
from care_scheduler.shared.infrastructure.database.session import session_manager

logger = logging.getLogger(__name__)

health_router = APIRouter()


@health_router.get(
    "/health",
    summary="Health Check",
    description="Service status including database connectivity",
)
async def health_check() -> JSONResponse:
    """
    Health check for load balancers and monitoring.

    Returns 200 when the database answers, 503 otherwise.
    """
    settings = get_settings()

    if session_manager.is_initialized():
        database = await session_manager.connection.health_check()
    else:
        database = {
            "status": "unhealthy",
            "error": "Database not initialized",
            "timestamp": datetime.now(timezone.utc).isoformat(),
        }

    healthy = database["status"] == "healthy"
    if not healthy:
        logger.warning(f"Health check degraded: {database.get('error')}")

    return JSONResponse(
        status_code=200 if healthy else 503,
        content={
            "status": "healthy" if healthy else "unhealthy",
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "service": settings.APP_NAME,
            "version": settings.APP_VERSION,
            "environment": settings.ENVIRONMENT,
            "components": {"database": database},
        }
    )


@health_router.get("/health/live", summary="Liveness Probe")
async def liveness_probe() -> dict:
    return {"status": "alive", "timestamp": datetime.now(timezone.utc).isoformat()}
