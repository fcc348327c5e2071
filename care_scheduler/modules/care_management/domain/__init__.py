# 📄 File: care_scheduler/modules/care_management/domain/__init__.py
# 🧭 Purpose (Layman Explanation):
# The heart of the scheduler: the rules about days, tasks and waterings,
# independent of databases and web requests.
# 🧪 Purpose (Technical Summary):
# Domain layer of the care management module: models, repository interfaces,
# domain services and domain events.
# 🔗 Dependencies:
# pydantic, care_scheduler.shared
# 🔄 Connected Modules / Calls From:
# application handlers, infrastructure implementations, presentation layer
