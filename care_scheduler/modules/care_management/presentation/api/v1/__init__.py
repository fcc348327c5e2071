# 📄 File: care_scheduler/modules/care_management/presentation/api/v1/__init__.py
# 🧭 Purpose (Layman Explanation):
# Version 1 of the care scheduler's web endpoints.
# 🧪 Purpose (Technical Summary):
# Exports the tasks and plants routers.
# 🔗 Dependencies:
# tasks.py, plants.py
# 🔄 Connected Modules / Calls From:
# care_scheduler.api.v1.router

from .plants import plants_router
from .tasks import tasks_router

__all__ = ["plants_router", "tasks_router"]
