# 📄 File: care_scheduler/api/v1/__init__.py
# 🧭 Purpose (Layman Explanation):
# Version 1 of the scheduler's web API.
# 🧪 Purpose (Technical Summary):
# Exports the aggregated v1 router.
# 🔗 Dependencies:
# router.py, health.py
# 🔄 Connected Modules / Calls From:
# care_scheduler.main

from .router import api_v1_router

__all__ = ["api_v1_router"]
