# 📄 File: care_scheduler/shared/__init__.py
#
# 🧭 Purpose (Layman Explanation):
# Holds the building blocks every part of the scheduler shares: settings,
# error types, logging, events and database plumbing.
#
# 🧪 Purpose (Technical Summary):
# Shared kernel package: configuration, exception hierarchy, structured
# logging, domain event base classes and async database session handling.
#
# 🔗 Dependencies:
# - care_scheduler.shared.config, core, events, utils, infrastructure
#
# 🔄 Connected Modules / Calls From:
# - care_scheduler.modules.care_management
# - care_scheduler.main, care_scheduler.background_jobs
