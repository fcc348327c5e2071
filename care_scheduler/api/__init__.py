# 📄 File: care_scheduler/api/__init__.py
# 🧭 Purpose (Layman Explanation):
# The front door of the scheduler's web API.
# 🧪 Purpose (Technical Summary):
# API package: versioned routers and HTTP middleware.
# 🔗 Dependencies:
# api.v1, api.middleware
# 🔄 Connected Modules / Calls From:
# care_scheduler.main
