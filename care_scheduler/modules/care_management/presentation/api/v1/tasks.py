# 📄 File: care_scheduler/modules/care_management/presentation/api/v1/tasks.py
# 🧭 Purpose (Layman Explanation):
# The web endpoints behind the care calendar: what is due on a day, which
# days get a dot, adding and ticking off tasks, and booking due waterings.
#
# 🧪 Purpose (Technical Summary):
# FastAPI care task endpoints. Each endpoint builds a command or query,
# delegates to the injected CQRS handler and maps domain entities to response
# schemas. Domain exceptions propagate to the application exception handler.
#
# 🔗 Dependencies:
# - FastAPI router, Path/Query parameters, status codes
# - care_management.application (commands, queries, handlers)
# - care_management.presentation.api.schemas.task_schemas
# - care_management.presentation.dependencies
#
# 🔄 Connected Modules / Calls From:
# - care_scheduler.api.v1.router (router inclusion under /tasks)
# - Calendar and task list screens of the client

"""
Care Tasks API Endpoints

Endpoints:
- GET /day/{day}: Tasks due on a day
- GET /day/{day}/dot: Calendar dot of a day
- GET /calendar/{year}/{month}: Calendar dots of a month
- GET /pending: Unfinished tasks
- GET /types: Presentation of every task type
- POST /: Create a task, optionally with future waterings
- PATCH /{task_id}/complete: Complete a task
- DELETE /{task_id}: Delete a task
- POST /generate-auto-watering: Run the auto-watering sweep
"""

import logging
from typing import List, Literal, Optional

from fastapi import APIRouter, Body, Depends, Path, Query, status

from care_scheduler.modules.care_management.application.commands.complete_task import CompleteTaskCommand
from care_scheduler.modules.care_management.application.commands.create_task import CreateTaskCommand
from care_scheduler.modules.care_management.application.commands.delete_task import DeleteTaskCommand
from care_scheduler.modules.care_management.application.commands.run_auto_watering_sweep import (
    RunAutoWateringSweepCommand,
    SweepTrigger,
)
from care_scheduler.modules.care_management.application.handlers.command_handlers import (
    CompleteTaskHandler,
    CreateTaskWithRecurrenceHandler,
    DeleteTaskHandler,
    RunAutoWateringSweepHandler,
)
from care_scheduler.modules.care_management.application.handlers.query_handlers import (
    GetCalendarMonthHandler,
    GetDotForDayHandler,
    GetPendingTasksHandler,
    GetTasksForDayHandler,
)
from care_scheduler.modules.care_management.application.queries.get_calendar_month import GetCalendarMonthQuery
from care_scheduler.modules.care_management.application.queries.get_task_lists import GetPendingTasksQuery
from care_scheduler.modules.care_management.application.queries.get_tasks_for_day import (
    GetDotForDayQuery,
    GetTasksForDayQuery,
)
from care_scheduler.modules.care_management.domain.models.task import TASK_TYPE_STYLES
from care_scheduler.modules.care_management.domain.services.date_normalizer import DateNormalizer
from care_scheduler.modules.care_management.presentation.api.schemas.task_schemas import (
    CalendarMonthResponse,
    CompleteTaskRequest,
    CompleteTaskResponse,
    CreateTaskRequest,
    CreateTaskResponse,
    DayDotResponse,
    DayTasksResponse,
    DeleteTaskResponse,
    SweepSummaryResponse,
    TaskListResponse,
    TaskResponse,
    TaskTypeStyleResponse,
)
from care_scheduler.modules.care_management.presentation.dependencies import (
    get_calendar_month_handler,
    get_complete_task_handler,
    get_create_task_handler,
    get_delete_task_handler,
    get_dot_for_day_handler,
    get_normalizer,
    get_pending_tasks_handler,
    get_sweep_handler,
    get_tasks_for_day_handler,
)

logger = logging.getLogger(__name__)

tasks_router = APIRouter()


# =========================================================================
# CALENDAR QUERIES
# =========================================================================

@tasks_router.get(
    "/day/{day}",
    response_model=DayTasksResponse,
    summary="Tasks due on a day",
    responses={422: {"description": "Unparsable day"}},
)
async def get_tasks_for_day(
    day: str = Path(..., description="YYYY-MM-DD or ISO 8601 timestamp", examples=["2025-04-06"]),
    plant_id: Optional[int] = Query(None, gt=0, description="Restrict to one plant"),
    order_by: Optional[Literal["due_time"]] = Query(None, description="Sort by due time"),
    handler: GetTasksForDayHandler = Depends(get_tasks_for_day_handler),
    normalizer: DateNormalizer = Depends(get_normalizer),
) -> DayTasksResponse:
    day_key, tasks = await handler.handle(
        GetTasksForDayQuery(day=day, plant_id=plant_id, order_by=order_by)
    )
    return DayTasksResponse(
        day=day_key.isoformat(),
        tasks=TaskResponse.from_domain_list(tasks, normalizer),
        total=len(tasks),
    )


@tasks_router.get(
    "/day/{day}/dot",
    response_model=DayDotResponse,
    summary="Calendar dot of a day",
    responses={422: {"description": "Unparsable day"}},
)
async def get_dot_for_day(
    day: str = Path(..., description="YYYY-MM-DD or ISO 8601 timestamp"),
    handler: GetDotForDayHandler = Depends(get_dot_for_day_handler),
) -> DayDotResponse:
    day_key, dot = await handler.handle(GetDotForDayQuery(day=day))
    return DayDotResponse.from_domain(day_key, dot)


@tasks_router.get(
    "/calendar/{year}/{month}",
    response_model=CalendarMonthResponse,
    summary="Calendar dots of a month",
)
async def get_calendar_month(
    year: int = Path(..., ge=1, le=9999),
    month: int = Path(..., ge=1, le=12),
    handler: GetCalendarMonthHandler = Depends(get_calendar_month_handler),
) -> CalendarMonthResponse:
    dots = await handler.handle(GetCalendarMonthQuery(year=year, month=month))
    return CalendarMonthResponse.from_domain(year, month, dots)


@tasks_router.get(
    "/pending",
    response_model=TaskListResponse,
    summary="Unfinished tasks, earliest due first",
)
async def get_pending_tasks(
    plant_id: Optional[int] = Query(None, gt=0),
    handler: GetPendingTasksHandler = Depends(get_pending_tasks_handler),
    normalizer: DateNormalizer = Depends(get_normalizer),
) -> TaskListResponse:
    tasks = await handler.handle(GetPendingTasksQuery(plant_id=plant_id))
    return TaskListResponse(tasks=TaskResponse.from_domain_list(tasks, normalizer), total=len(tasks))


@tasks_router.get(
    "/types",
    response_model=List[TaskTypeStyleResponse],
    summary="Icon and background of every task type",
)
async def get_task_type_styles() -> List[TaskTypeStyleResponse]:
    return [
        TaskTypeStyleResponse.from_domain(task_type, style)
        for task_type, style in TASK_TYPE_STYLES.items()
    ]


# =========================================================================
# TASK COMMANDS
# =========================================================================

@tasks_router.post(
    "",
    response_model=CreateTaskResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create a task",
    description="Create a care task. Watering tasks with schedule_future also get "
                "the next scheduled waterings at the plant's frequency.",
    responses={
        404: {"description": "Plant not found"},
        422: {"description": "Invalid date or plant has no watering frequency"},
    }
)
async def create_task(
    request: CreateTaskRequest,
    handler: CreateTaskWithRecurrenceHandler = Depends(get_create_task_handler),
    normalizer: DateNormalizer = Depends(get_normalizer),
) -> CreateTaskResponse:
    result = await handler.handle(CreateTaskCommand(**request.model_dump()))
    return CreateTaskResponse(
        created=TaskResponse.from_domain(result.created, normalizer),
        recurrences=TaskResponse.from_domain_list(result.recurrences, normalizer),
    )


@tasks_router.patch(
    "/{task_id}/complete",
    response_model=CompleteTaskResponse,
    summary="Complete a task",
    responses={
        404: {"description": "Task not found"},
        422: {"description": "Plant has no watering frequency"},
    }
)
async def complete_task(
    task_id: int = Path(..., gt=0),
    request: Optional[CompleteTaskRequest] = Body(None),
    handler: CompleteTaskHandler = Depends(get_complete_task_handler),
    normalizer: DateNormalizer = Depends(get_normalizer),
) -> CompleteTaskResponse:
    schedule_future = request.schedule_future if request is not None else False
    result = await handler.handle(CompleteTaskCommand(task_id=task_id, schedule_future=schedule_future))
    return CompleteTaskResponse(
        completed=TaskResponse.from_domain(result.completed, normalizer),
        recurrences=TaskResponse.from_domain_list(result.recurrences, normalizer),
    )


@tasks_router.delete(
    "/{task_id}",
    response_model=DeleteTaskResponse,
    summary="Delete a task",
    responses={404: {"description": "Task not found"}},
)
async def delete_task(
    task_id: int = Path(..., gt=0),
    handler: DeleteTaskHandler = Depends(get_delete_task_handler),
    normalizer: DateNormalizer = Depends(get_normalizer),
) -> DeleteTaskResponse:
    result = await handler.handle(DeleteTaskCommand(task_id=task_id))
    return DeleteTaskResponse(deleted=TaskResponse.from_domain(result.deleted, normalizer))


@tasks_router.post(
    "/generate-auto-watering",
    response_model=SweepSummaryResponse,
    summary="Run the auto-watering sweep",
    description="Create the next due watering task for every plant with auto-watering. "
                "Safe to re-run: plants that already have that watering are skipped.",
)
async def generate_auto_watering(
    handler: RunAutoWateringSweepHandler = Depends(get_sweep_handler),
    normalizer: DateNormalizer = Depends(get_normalizer),
) -> SweepSummaryResponse:
    summary = await handler.handle(RunAutoWateringSweepCommand(triggered_by=SweepTrigger.ADMIN))
    return SweepSummaryResponse.from_domain(summary, normalizer)
