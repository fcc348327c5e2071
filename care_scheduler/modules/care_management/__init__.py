# 📄 File: care_scheduler/modules/care_management/__init__.py
# 🧭 Purpose (Layman Explanation):
# Organizes the care scheduling system: which tasks are due on which day,
# booking future waterings and the sweep that books due waterings for every plant.
# 🧪 Purpose (Technical Summary):
# Care management module implementing domain-driven design with CQRS-style
# command/query handlers over a Task Store and a read-only Plant Directory.
# 🔗 Dependencies:
# FastAPI, SQLAlchemy, pydantic, care_scheduler.shared
# 🔄 Connected Modules / Calls From:
# care_scheduler.main, care_scheduler.api.v1.router, Celery sweep task

"""
Care Management Module

Architecture follows Domain-Driven Design:
- Domain: DayKey/Task/Plant models, date normalizer, task matcher, recurrence generator
- Application: commands, queries and their handlers
- Infrastructure: SQLAlchemy task store and plant directory
- Presentation: API endpoints and request/response schemas
"""

__version__ = "1.0.0"
