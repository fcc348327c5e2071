# 📄 File: care_scheduler/background_jobs/celery_app.py
#
# 🧭 Purpose (Layman Explanation):
# Configures the background worker that books due waterings on a schedule,
# without anyone having to press a button.
#
# 🧪 Purpose (Technical Summary):
# Celery configuration (broker, serialization, queues, beat schedule) built
# from application settings, environment-specific variants and the Celery
# application instance used by workers and beat.
#
# 🔗 Dependencies:
# - celery, kombu (queues)
# - Redis server (message broker and result backend)
# - care_scheduler.shared.config.settings
#
# 🔄 Connected Modules / Calls From:
# - care_scheduler/background_jobs/tasks/auto_watering.py
# - celery worker / celery beat processes

from datetime import timedelta
from typing import Type

from celery import Celery
from kombu import Queue

from care_scheduler.shared.config.settings import get_settings

settings = get_settings()

SWEEP_TASK_NAME = "care_scheduler.background_jobs.tasks.auto_watering.run_auto_watering_sweep"


# =============================================================================
# CELERY CONFIGURATION CLASS
# =============================================================================

class CeleryConfig:
    """
    Celery configuration for the care scheduler.
    """

    # =========================================================================
    # BROKER AND BACKEND SETTINGS
    # =========================================================================

    broker_url = settings.CELERY_BROKER_URL
    result_backend = settings.CELERY_RESULT_BACKEND

    broker_connection_retry_on_startup = True
    broker_connection_max_retries = 10
    result_expires = timedelta(hours=24)

    # =========================================================================
    # TASK SETTINGS
    # =========================================================================

    task_serializer = "json"
    result_serializer = "json"
    accept_content = ["json"]
    timezone = settings.REFERENCE_TIMEZONE
    enable_utc = True

    task_default_queue = "default"
    task_time_limit = 600
    task_soft_time_limit = 540
    task_acks_late = True
    task_reject_on_worker_lost = True
    worker_prefetch_multiplier = 1

    # =========================================================================
    # QUEUE DEFINITIONS
    # =========================================================================

    task_routes = {
        SWEEP_TASK_NAME: {"queue": "scheduling"},
    }

    task_queues = (
        Queue("scheduling", routing_key="scheduling"),
        Queue("default", routing_key="default"),
    )

    # =========================================================================
    # BEAT SCHEDULER SETTINGS
    # =========================================================================

    beat_schedule = {
        "auto-watering-sweep": {
            "task": SWEEP_TASK_NAME,
            "schedule": timedelta(hours=settings.AUTO_WATERING_SWEEP_INTERVAL_HOURS),
            "options": {"queue": "scheduling"},
        },
    }

    beat_scheduler = "celery.beat:PersistentScheduler"
    beat_schedule_filename = "celerybeat-schedule"

    # =========================================================================
    # MONITORING AND LOGGING
    # =========================================================================

    task_track_started = True
    worker_send_task_events = True
    worker_hijack_root_logger = False


# =============================================================================
# ENVIRONMENT-SPECIFIC CONFIGURATIONS
# =============================================================================

class DevelopmentCeleryConfig(CeleryConfig):
    """Development-specific Celery configuration."""

    worker_log_level = "DEBUG"


class ProductionCeleryConfig(CeleryConfig):
    """Production-specific Celery configuration."""

    worker_log_level = "INFO"
    worker_max_tasks_per_child = 1000


class EagerCeleryConfig(CeleryConfig):
    """Run tasks in-process without a broker."""

    broker_url = "memory://"
    result_backend = "cache+memory://"
    task_always_eager = True
    task_eager_propagates = True


def get_celery_config() -> Type[CeleryConfig]:
    """
    Pick the Celery configuration for the current environment.

    Returns:
        CeleryConfig subclass for settings.ENVIRONMENT
    """
    config_map = {
        "development": DevelopmentCeleryConfig,
        "staging": ProductionCeleryConfig,
        "production": ProductionCeleryConfig,
        "test": EagerCeleryConfig,
    }
    return config_map.get(settings.ENVIRONMENT, DevelopmentCeleryConfig)


# =============================================================================
# CELERY APPLICATION INSTANCE
# =============================================================================

celery_app = Celery(
    "care_scheduler",
    include=["care_scheduler.background_jobs.tasks.auto_watering"],
)
celery_app.config_from_object(get_celery_config())
