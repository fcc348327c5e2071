# 📄 File: care_scheduler/api/v1/router.py
# 🧭 Purpose (Layman Explanation):
# The traffic director for version 1 of the API: sends health checks, task
# requests and plant requests to the right place.
# 🧪 Purpose (Technical Summary):
# Aggregates the health router and the care management module routers under
# their route prefixes.
# 🔗 Dependencies:
# FastAPI, care_scheduler.api.v1.health, care_management.presentation.api.v1
# 🔄 Connected Modules / Calls From:
# care_scheduler.main (mounted under /api/v1)

import logging

from fastapi import APIRouter

from care_scheduler.modules.care_management.presentation.api.v1 import plants_router, tasks_router

from .health import health_router

logger = logging.getLogger(__name__)

api_v1_router = APIRouter()

api_v1_router.include_router(health_router, tags=["Health Check"])
api_v1_router.include_router(tasks_router, prefix="/tasks", tags=["Care Tasks"])
api_v1_router.include_router(plants_router, prefix="/plants", tags=["Plants"])


@api_v1_router.get("/", summary="API v1 Information", tags=["API Info"])
async def api_v1_info() -> dict:
    return {
        "version": "v1",
        "endpoints": {
            "health_check": "/health",
            "tasks": "/tasks",
            "plants": "/plants",
        },
    }
