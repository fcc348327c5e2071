# 📄 File: care_scheduler/modules/care_management/domain/repositories/plant_directory.py
# 🧭 Purpose (Layman Explanation):
# Defines how the scheduler asks about plants (how often to water, when last
# watered) without owning or changing the plant records.
# 🧪 Purpose (Technical Summary):
# Read-only Plant Directory interface consumed by the recurrence generator
# and command handlers.
# 🔗 Dependencies:
# Domain model Plant, typing, abc
# 🔄 Connected Modules / Calls From:
# recurrence_generator.py, command/query handlers, SQLAlchemy plant directory,
# in-memory test fakes

from abc import ABC, abstractmethod
from typing import List

from ..models.plant import Plant


class PlantDirectory(ABC):
    """Read-only access to plant records owned by the plant module."""

    @abstractmethod
    async def get_plant(self, plant_id: int) -> Plant:
        """
        Get a plant by id.

        Raises:
            PlantNotFoundError: If the plant does not exist
        """
        pass

    @abstractmethod
    async def list_plants_with_auto_watering(self) -> List[Plant]:
        """
        List every plant enrolled in automatic watering with a positive
        watering frequency, ordered by id.
        """
        pass
