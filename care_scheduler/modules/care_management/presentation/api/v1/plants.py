# 📄 File: care_scheduler/modules/care_management/presentation/api/v1/plants.py
# 🧭 Purpose (Layman Explanation):
# Lets the plant page list every care task planned or done for that plant.
# 🧪 Purpose (Technical Summary):
# FastAPI endpoint for the per-plant task list (GetPlantTasks).
# 🔗 Dependencies:
# FastAPI, care_management.application.handlers.query_handlers,
# care_management.presentation.api.schemas.task_schemas
# 🔄 Connected Modules / Calls From:
# care_scheduler.api.v1.router (router inclusion under /plants)

import logging
from typing import Optional

from fastapi import APIRouter, Depends, Path, Query

from care_scheduler.modules.care_management.application.handlers.query_handlers import GetPlantTasksHandler
from care_scheduler.modules.care_management.application.queries.get_task_lists import GetPlantTasksQuery
from care_scheduler.modules.care_management.domain.services.date_normalizer import DateNormalizer
from care_scheduler.modules.care_management.presentation.api.schemas.task_schemas import (
    TaskListResponse,
    TaskResponse,
)
from care_scheduler.modules.care_management.presentation.dependencies import (
    get_normalizer,
    get_plant_tasks_handler,
)

logger = logging.getLogger(__name__)

plants_router = APIRouter()


@plants_router.get(
    "/{plant_id}/tasks",
    response_model=TaskListResponse,
    summary="Tasks of a plant",
    responses={404: {"description": "Plant not found"}},
)
async def get_plant_tasks(
    plant_id: int = Path(..., gt=0),
    completed: Optional[bool] = Query(None, description="Filter on completion state"),
    handler: GetPlantTasksHandler = Depends(get_plant_tasks_handler),
    normalizer: DateNormalizer = Depends(get_normalizer),
) -> TaskListResponse:
    tasks = await handler.handle(GetPlantTasksQuery(plant_id=plant_id, completed=completed))
    return TaskListResponse(tasks=TaskResponse.from_domain_list(tasks, normalizer), total=len(tasks))
