# 📄 File: care_scheduler/background_jobs/tasks/auto_watering.py
#
# 🧭 Purpose (Layman Explanation):
# The scheduled job that books the next due watering for every plant with
# automatic watering turned on.
#
# 🧪 Purpose (Technical Summary):
# Celery task running the auto-watering sweep. Each run gets its own event
# loop, opens the database if the process has not, runs the sweep handler and
# returns the JSON summary. A failure to list plants is retried; per-plant
# failures are part of the summary.
#
# 🔗 Dependencies:
# - celery (task definition via celery_app)
# - care_management application handler and domain RecurrenceGenerator
# - care_management SQLAlchemy repositories
# - care_scheduler.shared.utils.logging (log_context)
#
# 🔄 Connected Modules / Calls From:
# - Celery beat ("auto-watering-sweep" schedule)
# - Manual dispatch: run_auto_watering_sweep.delay()

import asyncio
from contextlib import asynccontextmanager
from datetime import datetime
from typing import Any, AsyncIterator, Dict, Optional

from care_scheduler.background_jobs.celery_app import SWEEP_TASK_NAME, celery_app
from care_scheduler.modules.care_management.application.commands.run_auto_watering_sweep import (
    RunAutoWateringSweepCommand,
    SweepTrigger,
)
from care_scheduler.modules.care_management.application.handlers.command_handlers import (
    RunAutoWateringSweepHandler,
)
from care_scheduler.modules.care_management.domain.models.generation_batch import GenerationBatchSummary
from care_scheduler.modules.care_management.domain.services.date_normalizer import DateNormalizer
from care_scheduler.modules.care_management.domain.services.recurrence_generator import RecurrenceGenerator
from care_scheduler.modules.care_management.infrastructure.database.plant_directory_impl import (
    SqlAlchemyPlantDirectory,
)
from care_scheduler.modules.care_management.infrastructure.database.task_store_impl import SqlAlchemyTaskStore
from care_scheduler.shared.config.settings import Settings, get_settings
from care_scheduler.shared.core.exceptions import DatabaseError, TransactionError
from care_scheduler.shared.events.publisher import get_event_publisher
from care_scheduler.shared.infrastructure.database.session import (
    close_database,
    initialize_database,
    session_manager,
)
from care_scheduler.shared.utils.logging import get_logger, log_context

logger = get_logger(__name__)


@asynccontextmanager
async def recurrence_generator_scope(settings: Settings) -> AsyncIterator[RecurrenceGenerator]:
    """
    RecurrenceGenerator backed by the database, for one sweep run.

    The database is opened and closed here when the worker process has not
    opened it, since each run has its own event loop.
    """
    owns_database = not session_manager.is_initialized()
    if owns_database:
        await initialize_database()

    try:
        normalizer = DateNormalizer.from_settings(settings)
        yield RecurrenceGenerator(
            SqlAlchemyTaskStore(session_manager, normalizer),
            SqlAlchemyPlantDirectory(session_manager),
            normalizer,
            recurrence_count=settings.RECURRENCE_COUNT,
            sweep_concurrency=settings.SWEEP_CONCURRENCY,
            event_publisher=get_event_publisher(),
        )
    finally:
        if owns_database:
            await close_database()


async def sweep_once(triggered_at: Optional[datetime] = None) -> GenerationBatchSummary:
    """Run one scheduled auto-watering sweep."""
    settings = get_settings()
    async with recurrence_generator_scope(settings) as generator:
        handler = RunAutoWateringSweepHandler(generator)
        return await handler.handle(
            RunAutoWateringSweepCommand(triggered_by=SweepTrigger.SCHEDULE, triggered_at=triggered_at)
        )


@celery_app.task(
    name=SWEEP_TASK_NAME,
    bind=True,
    max_retries=3,
    default_retry_delay=300,
)
def run_auto_watering_sweep(self, triggered_at: Optional[str] = None) -> Dict[str, Any]:
    """
    Celery entry point for the auto-watering sweep.

    Args:
        triggered_at: Optional ISO 8601 trigger time, defaults to now

    Returns:
        The sweep summary as a JSON-compatible dict
    """
    with log_context(correlation_id=self.request.id):
        when = datetime.fromisoformat(triggered_at) if triggered_at else None
        logger.info(f"Scheduled auto-watering sweep starting (task {self.request.id})")

        try:
            summary = asyncio.run(sweep_once(when))
        except (DatabaseError, TransactionError) as e:
            logger.error(f"Auto-watering sweep could not run: {e}", exc_info=True)
            raise self.retry(exc=e)

        logger.info(
            f"Scheduled auto-watering sweep finished: {summary.tasks_created} created, "
            f"{summary.tasks_skipped} skipped, {summary.plants_failed} failed"
        )
        return summary.model_dump(mode="json")
