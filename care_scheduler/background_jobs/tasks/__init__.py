# 📄 File: care_scheduler/background_jobs/tasks/__init__.py
# 🧭 Purpose (Layman Explanation):
# The individual background jobs.
# 🧪 Purpose (Technical Summary):
# Celery task modules, registered through celery_app's include list.
# 🔗 Dependencies:
# auto_watering.py
# 🔄 Connected Modules / Calls From:
# care_scheduler.background_jobs.celery_app
