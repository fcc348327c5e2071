# 📄 File: care_scheduler/modules/care_management/presentation/__init__.py
# 🧭 Purpose (Layman Explanation):
# The web-facing side of the care scheduler.
# 🧪 Purpose (Technical Summary):
# Presentation layer: FastAPI routers, request/response schemas and
# dependency providers of the care management module.
# 🔗 Dependencies:
# presentation.api, presentation.dependencies
# 🔄 Connected Modules / Calls From:
# care_scheduler.api.v1.router
