# 📄 File: care_scheduler/modules/care_management/presentation/dependencies.py
# 🧭 Purpose (Layman Explanation):
# Wires the care scheduler together for each web request: which database
# store to use, which timezone decides days, and which handler answers.
# 🧪 Purpose (Technical Summary):
# FastAPI dependency providers for the care management module. Repositories,
# domain services and CQRS handlers are built through Depends chains so tests
# can swap any layer with app.dependency_overrides.
# 🔗 Dependencies:
# FastAPI, care_scheduler.shared.config, care_scheduler.shared.events,
# care_management.application.handlers, care_management.infrastructure.database
# 🔄 Connected Modules / Calls From:
# care_management.presentation.api.v1.tasks, care_management.presentation.api.v1.plants

"""
Care Management Module Dependencies

Provider chain:

- Settings -> DateNormalizer
- DatabaseSessionManager -> SqlAlchemyTaskStore / SqlAlchemyPlantDirectory
- stores + normalizer + EventPublisher -> RecurrenceGenerator
- everything above -> command and query handlers
"""

from fastapi import Depends

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
    GetPlantTasksHandler,
    GetTasksForDayHandler,
)
from care_scheduler.modules.care_management.domain.repositories.plant_directory import PlantDirectory
from care_scheduler.modules.care_management.domain.repositories.task_store import TaskStore
from care_scheduler.modules.care_management.domain.services.date_normalizer import DateNormalizer
from care_scheduler.modules.care_management.domain.services.recurrence_generator import RecurrenceGenerator
from care_scheduler.modules.care_management.infrastructure.database.plant_directory_impl import (
    SqlAlchemyPlantDirectory,
)
from care_scheduler.modules.care_management.infrastructure.database.task_store_impl import SqlAlchemyTaskStore
from care_scheduler.shared.config.settings import Settings, get_settings
from care_scheduler.shared.events.publisher import EventPublisher, get_event_publisher
from care_scheduler.shared.infrastructure.database.session import DatabaseSessionManager, session_manager


# =========================================================================
# INFRASTRUCTURE
# =========================================================================

def get_session_manager() -> DatabaseSessionManager:
    return session_manager


def get_normalizer(settings: Settings = Depends(get_settings)) -> DateNormalizer:
    return DateNormalizer.from_settings(settings)


def get_task_store(
    sessions: DatabaseSessionManager = Depends(get_session_manager),
    normalizer: DateNormalizer = Depends(get_normalizer),
) -> TaskStore:
    return SqlAlchemyTaskStore(sessions, normalizer)


def get_plant_directory(
    sessions: DatabaseSessionManager = Depends(get_session_manager),
) -> PlantDirectory:
    return SqlAlchemyPlantDirectory(sessions)


def get_publisher() -> EventPublisher:
    return get_event_publisher()


def get_recurrence_generator(
    task_store: TaskStore = Depends(get_task_store),
    plant_directory: PlantDirectory = Depends(get_plant_directory),
    normalizer: DateNormalizer = Depends(get_normalizer),
    event_publisher: EventPublisher = Depends(get_publisher),
    settings: Settings = Depends(get_settings),
) -> RecurrenceGenerator:
    return RecurrenceGenerator(
        task_store,
        plant_directory,
        normalizer,
        recurrence_count=settings.RECURRENCE_COUNT,
        sweep_concurrency=settings.SWEEP_CONCURRENCY,
        event_publisher=event_publisher,
    )


# =========================================================================
# COMMAND HANDLERS
# =========================================================================

def get_create_task_handler(
    task_store: TaskStore = Depends(get_task_store),
    plant_directory: PlantDirectory = Depends(get_plant_directory),
    normalizer: DateNormalizer = Depends(get_normalizer),
    recurrence_generator: RecurrenceGenerator = Depends(get_recurrence_generator),
    event_publisher: EventPublisher = Depends(get_publisher),
) -> CreateTaskWithRecurrenceHandler:
    return CreateTaskWithRecurrenceHandler(
        task_store, plant_directory, normalizer, recurrence_generator, event_publisher
    )


def get_complete_task_handler(
    task_store: TaskStore = Depends(get_task_store),
    plant_directory: PlantDirectory = Depends(get_plant_directory),
    recurrence_generator: RecurrenceGenerator = Depends(get_recurrence_generator),
    event_publisher: EventPublisher = Depends(get_publisher),
) -> CompleteTaskHandler:
    return CompleteTaskHandler(task_store, plant_directory, recurrence_generator, event_publisher)


def get_delete_task_handler(task_store: TaskStore = Depends(get_task_store)) -> DeleteTaskHandler:
    return DeleteTaskHandler(task_store)


def get_sweep_handler(
    recurrence_generator: RecurrenceGenerator = Depends(get_recurrence_generator),
) -> RunAutoWateringSweepHandler:
    return RunAutoWateringSweepHandler(recurrence_generator)


# =========================================================================
# QUERY HANDLERS
# =========================================================================

def get_tasks_for_day_handler(
    task_store: TaskStore = Depends(get_task_store),
    normalizer: DateNormalizer = Depends(get_normalizer),
) -> GetTasksForDayHandler:
    return GetTasksForDayHandler(task_store, normalizer)


def get_dot_for_day_handler(
    task_store: TaskStore = Depends(get_task_store),
    normalizer: DateNormalizer = Depends(get_normalizer),
) -> GetDotForDayHandler:
    return GetDotForDayHandler(task_store, normalizer)


def get_calendar_month_handler(
    task_store: TaskStore = Depends(get_task_store),
    normalizer: DateNormalizer = Depends(get_normalizer),
) -> GetCalendarMonthHandler:
    return GetCalendarMonthHandler(task_store, normalizer)


def get_pending_tasks_handler(task_store: TaskStore = Depends(get_task_store)) -> GetPendingTasksHandler:
    return GetPendingTasksHandler(task_store)


def get_plant_tasks_handler(
    task_store: TaskStore = Depends(get_task_store),
    plant_directory: PlantDirectory = Depends(get_plant_directory),
) -> GetPlantTasksHandler:
    return GetPlantTasksHandler(task_store, plant_directory)
