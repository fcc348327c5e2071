# 📄 File: care_scheduler/background_jobs/__init__.py
# 🧭 Purpose (Layman Explanation):
# Work the scheduler does on its own, on a timer.
# 🧪 Purpose (Technical Summary):
# Celery application and periodic tasks.
# 🔗 Dependencies:
# celery_app.py, tasks
# 🔄 Connected Modules / Calls From:
# celery worker / beat (-A care_scheduler.background_jobs.celery_app)
