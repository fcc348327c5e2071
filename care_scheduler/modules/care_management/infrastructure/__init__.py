# 📄 File: care_scheduler/modules/care_management/infrastructure/__init__.py
# 🧭 Purpose (Layman Explanation):
# The "storage" side of the care scheduler.
# 🧪 Purpose (Technical Summary):
# Infrastructure layer: SQLAlchemy persistence for tasks and plant lookups.
# 🔗 Dependencies:
# infrastructure.database
# 🔄 Connected Modules / Calls From:
# presentation.dependencies, background_jobs
