# 📄 File: care_scheduler/modules/care_management/infrastructure/database/plant_directory_impl.py
# 🧭 Purpose (Layman Explanation):
# Looks up plants in the database so the scheduler knows how often each one
# needs water and which plants want their waterings booked automatically.
#
# 🧪 Purpose (Technical Summary):
# Read-only SQLAlchemy implementation of the PlantDirectory interface, mapping
# PlantModel rows to the scheduler's Plant projection.
#
# 🔗 Dependencies:
# - care_management.domain.repositories.plant_directory (interface)
# - care_management.infrastructure.database.models (PlantModel)
# - care_scheduler.shared.infrastructure.database.session (DatabaseSessionManager)
#
# 🔄 Connected Modules / Calls From:
# - care_management.presentation.dependencies
# - background_jobs.tasks.auto_watering

import logging
from datetime import time
from typing import List, Optional

from sqlalchemy import select

from care_scheduler.modules.care_management.domain.models.plant import Plant
from care_scheduler.modules.care_management.domain.repositories.plant_directory import PlantDirectory
from care_scheduler.modules.care_management.infrastructure.database.models import PlantModel
from care_scheduler.shared.core.exceptions import PlantNotFoundError
from care_scheduler.shared.infrastructure.database.session import DatabaseSessionManager

logger = logging.getLogger(__name__)


class SqlAlchemyPlantDirectory(PlantDirectory):
    """Plant lookups backed by the plants table."""

    def __init__(self, sessions: DatabaseSessionManager):
        self._sessions = sessions

    async def get_plant(self, plant_id: int) -> Plant:
        async with self._sessions.get_read_only_session() as session:
            plant_model = await session.get(PlantModel, plant_id)
            if plant_model is None:
                raise PlantNotFoundError(plant_id)
            return self._model_to_domain(plant_model)

    async def list_plants_with_auto_watering(self) -> List[Plant]:
        stmt = (
            select(PlantModel)
            .where(
                PlantModel.auto_watering.is_(True),
                PlantModel.watering_frequency_days.is_not(None),
                PlantModel.watering_frequency_days > 0,
            )
            .order_by(PlantModel.id)
        )
        async with self._sessions.get_read_only_session() as session:
            result = await session.execute(stmt)
            plants = [self._model_to_domain(model) for model in result.scalars().all()]

        logger.debug(f"Found {len(plants)} plants with auto-watering enabled")
        return plants

    @staticmethod
    def _parse_reminder_time(value: Optional[str]) -> Optional[time]:
        if not value:
            return None
        try:
            return time.fromisoformat(value)
        except ValueError:
            logger.warning(f"Ignoring malformed reminder time {value!r}")
            return None

    def _model_to_domain(self, plant_model: PlantModel) -> Plant:
        return Plant(
            id=plant_model.id,
            name=plant_model.name,
            watering_frequency_days=plant_model.watering_frequency_days,
            last_watered_date=plant_model.last_watered_date,
            auto_watering=bool(plant_model.auto_watering),
            reminder_time=self._parse_reminder_time(plant_model.reminder_time),
        )
