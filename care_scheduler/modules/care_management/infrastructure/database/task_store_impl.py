# 📄 File: care_scheduler/modules/care_management/infrastructure/database/task_store_impl.py
# 🧭 Purpose (Layman Explanation):
# Saves care tasks in the database and reads them back: adding a task,
# finding the tasks of a day or a plant, ticking one off and deleting it.
#
# 🧪 Purpose (Technical Summary):
# SQLAlchemy implementation of the TaskStore interface. Each operation runs in
# its own session from the DatabaseSessionManager, so concurrent sweep units
# never share a session. The normalized due day is written next to the due
# timestamp and day-range filters are evaluated on it. Guarded creation locks
# the plant row (SELECT ... FOR UPDATE) for the whole check-then-insert, which
# serializes sweeps running in different processes.
#
# 🔗 Dependencies:
# - care_management.domain.repositories.task_store (interface)
# - care_management.domain.services.date_normalizer (due day computation)
# - care_management.infrastructure.database.models (CareTaskModel)
# - care_scheduler.shared.infrastructure.database.session (DatabaseSessionManager)
#
# 🔄 Connected Modules / Calls From:
# - care_management.presentation.dependencies (repository construction)
# - background_jobs.tasks.auto_watering (sweep outside requests)

"""
Task Store Implementation

Maps CareTaskModel rows to Task entities. Due datetimes are always handed
back as aware datetimes in the reference timezone; on backends that drop the
offset (SQLite) the stored wall clock is read as reference time, which is how
it was written.
"""

import logging
from datetime import datetime
from typing import List, Optional, Tuple

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from care_scheduler.modules.care_management.domain.models.task import Task, TaskDraft, TaskFilter, TaskType
from care_scheduler.modules.care_management.domain.repositories.task_store import TaskPlan, TaskStore
from care_scheduler.modules.care_management.domain.services.date_normalizer import DateNormalizer
from care_scheduler.modules.care_management.infrastructure.database.models import CareTaskModel, PlantModel
from care_scheduler.shared.core.exceptions import PlantNotFoundError, RepositoryError, TaskNotFoundError
from care_scheduler.shared.infrastructure.database.session import DatabaseSessionManager

logger = logging.getLogger(__name__)


class SqlAlchemyTaskStore(TaskStore):
    """
    SQLAlchemy implementation of the TaskStore interface.
    """

    def __init__(self, sessions: DatabaseSessionManager, normalizer: DateNormalizer):
        """
        Args:
            sessions: Session manager providing one session per operation
            normalizer: Normalizer used for the stored due day
        """
        self._sessions = sessions
        self._normalizer = normalizer

    async def create_task(self, draft: TaskDraft) -> Task:
        async with self._sessions.get_session() as session:
            task_model = await self._insert(session, draft, "create_task")
            logger.debug(f"Created task {task_model.id} for plant {task_model.plant_id}")
            return self._model_to_domain(task_model)

    async def create_task_guarded(self, plant_id: int, plan: TaskPlan) -> Optional[Task]:
        async with self._sessions.get_session() as session:
            # Row lock on the plant; held until the session commits
            plant_stmt = select(PlantModel.id).where(PlantModel.id == plant_id).with_for_update()
            if (await session.execute(plant_stmt)).scalar_one_or_none() is None:
                raise PlantNotFoundError(plant_id)

            tasks_stmt = (
                select(CareTaskModel)
                .where(CareTaskModel.plant_id == plant_id)
                .order_by(CareTaskModel.due_date.is_(None), CareTaskModel.due_date, CareTaskModel.id)
            )
            existing = [self._model_to_domain(model) for model in (await session.execute(tasks_stmt)).scalars()]

            draft = plan(existing)
            if draft is None:
                return None
            if draft.plant_id != plant_id:
                raise ValueError(f"Planned task targets plant {draft.plant_id}, lock held on {plant_id}")

            task_model = await self._insert(session, draft, "create_task_guarded")
            logger.debug(f"Created guarded task {task_model.id} for plant {plant_id}")
            return self._model_to_domain(task_model)

    async def find_tasks(self, task_filter: TaskFilter) -> List[Task]:
        stmt = select(CareTaskModel)

        if task_filter.plant_id is not None:
            stmt = stmt.where(CareTaskModel.plant_id == task_filter.plant_id)
        if task_filter.type is not None:
            stmt = stmt.where(CareTaskModel.type == task_filter.type.value)
        if task_filter.completed is not None:
            stmt = stmt.where(CareTaskModel.completed == task_filter.completed)
        if task_filter.due_date_range is not None:
            day_range = task_filter.due_date_range
            stmt = stmt.where(
                CareTaskModel.due_day >= day_range.start.to_date(),
                CareTaskModel.due_day < day_range.end.to_date(),
            )

        # Tasks without a due date sort last
        stmt = stmt.order_by(
            CareTaskModel.due_date.is_(None),
            CareTaskModel.due_date,
            CareTaskModel.id,
        )

        async with self._sessions.get_read_only_session() as session:
            result = await session.execute(stmt)
            task_models = result.scalars().all()

        logger.debug(f"Found {len(task_models)} tasks for {task_filter!r}")
        return [self._model_to_domain(model) for model in task_models]

    async def get_task(self, task_id: int) -> Task:
        async with self._sessions.get_read_only_session() as session:
            task_model = await session.get(CareTaskModel, task_id)
            if task_model is None:
                raise TaskNotFoundError(task_id)
            return self._model_to_domain(task_model)

    async def complete_task(self, task_id: int) -> Tuple[Task, bool]:
        async with self._sessions.get_session() as session:
            stmt = select(CareTaskModel).where(CareTaskModel.id == task_id).with_for_update()
            task_model = (await session.execute(stmt)).scalar_one_or_none()
            if task_model is None:
                raise TaskNotFoundError(task_id)

            transitioned = not task_model.completed
            if transitioned:
                task_model.completed = True
                task_model.date_completed = datetime.now(self._normalizer.reference_zone)
                await session.flush()
                logger.debug(f"Marked task {task_id} completed")

            return self._model_to_domain(task_model), transitioned

    async def delete_task(self, task_id: int) -> None:
        async with self._sessions.get_session() as session:
            task_model = await session.get(CareTaskModel, task_id)
            if task_model is None:
                raise TaskNotFoundError(task_id)
            await session.delete(task_model)
            logger.debug(f"Deleted task {task_id}")

    # =========================================================================
    # MAPPING
    # =========================================================================

    async def _insert(self, session: AsyncSession, draft: TaskDraft, operation: str) -> CareTaskModel:
        due_date = self._normalizer.to_datetime(draft.due_date)
        now = datetime.now(self._normalizer.reference_zone)
        task_model = CareTaskModel(
            plant_id=draft.plant_id,
            type=draft.type.value,
            description=draft.description,
            due_date=due_date,
            due_day=self._normalizer.normalize(due_date).to_date(),
            completed=draft.completed,
            date_completed=now if draft.completed else None,
            created_at=now,
        )
        try:
            session.add(task_model)
            await session.flush()
        except IntegrityError as e:
            logger.warning(f"Task creation rejected for plant {draft.plant_id}: {e.orig}")
            raise RepositoryError(
                f"Task for plant {draft.plant_id} violates a storage constraint",
                operation=operation,
                entity="care_task",
                constraint=str(e.orig),
            ) from e
        return task_model

    def _aware(self, value: Optional[datetime]) -> Optional[datetime]:
        if value is None:
            return None
        return self._normalizer.to_datetime(value)

    def _model_to_domain(self, task_model: CareTaskModel) -> Task:
        return Task(
            id=task_model.id,
            plant_id=task_model.plant_id,
            type=TaskType(task_model.type),
            description=task_model.description,
            due_date=self._aware(task_model.due_date),
            completed=bool(task_model.completed),
            date_completed=self._aware(task_model.date_completed),
            created_at=self._aware(task_model.created_at),
        )
