# 📄 File: care_scheduler/__init__.py
#
# 🧭 Purpose (Layman Explanation):
# Marks the 'care_scheduler' folder as the plant care task scheduler and
# records its version and package information.
#
# 🧪 Purpose (Technical Summary):
# Package initialization with version metadata for the care-task scheduling
# and recurrence service (FastAPI API, Celery jobs, SQLAlchemy storage).
#
# 🔗 Dependencies:
# - Python packaging system
#
# 🔄 Connected Modules / Calls From:
# - care_scheduler.main (application entry point)
# - care_scheduler.background_jobs.celery_app

"""
Care Scheduler - Plant Care Task Scheduling and Recurrence Engine

Matches care tasks to calendar days, expands watering tasks into future
recurrences and regenerates due watering tasks across every plant.
"""

__version__ = "1.0.0"
__title__ = "Plant Care Scheduler"
__description__ = "Care-task scheduling and recurrence engine"
__author__ = "Plant Care Team"
