# 📄 File: care_scheduler/modules/care_management/infrastructure/database/__init__.py
# 🧭 Purpose (Layman Explanation):
# Groups the database pieces of the care scheduler in one place.
# 🧪 Purpose (Technical Summary):
# Exports the ORM models and the SQLAlchemy repository implementations.
# 🔗 Dependencies:
# models.py, task_store_impl.py, plant_directory_impl.py
# 🔄 Connected Modules / Calls From:
# presentation.dependencies, background_jobs, migrations/env.py

from .models import CareTaskModel, PlantModel
from .plant_directory_impl import SqlAlchemyPlantDirectory
from .task_store_impl import SqlAlchemyTaskStore

__all__ = [
    "CareTaskModel",
    "PlantModel",
    "SqlAlchemyPlantDirectory",
    "SqlAlchemyTaskStore",
]
