# 📄 File: care_scheduler/modules/care_management/presentation/api/__init__.py
# 🧭 Purpose (Layman Explanation):
# Collects the care scheduler's web endpoints.
# 🧪 Purpose (Technical Summary):
# Re-exports the v1 routers of the care management module.
# 🔗 Dependencies:
# presentation.api.v1
# 🔄 Connected Modules / Calls From:
# care_scheduler.api.v1.router

from .v1 import plants_router, tasks_router

__all__ = ["plants_router", "tasks_router"]
