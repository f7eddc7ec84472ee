import sys
from celery import Celery
from celery.schedules import crontab
from celery.signals import setup_logging as celery_setup_logging
from worklogix.core.config import settings

# Create Celery app
celery_app = Celery(
    "worklogix",
    broker=settings.CELERY_BROKER_URL,
    backend=settings.CELERY_RESULT_BACKEND,
    include=[
        "worklogix.workers.celery_tasks.attendance_tasks",
    ]
)

# Configure Celery
celery_app.conf.update(
    task_serializer="json",
    accept_content=["json"],
    result_serializer="json",
    timezone=settings.TIMEZONE,
    enable_utc=True,
    result_expires=3600,
)

# Windows-specific configuration
if sys.platform == 'win32':
    celery_app.conf.update(
        worker_pool='threads',
        worker_concurrency=4
    )

celery_app.conf.beat_schedule = {
    "attendance-auto-logout": {
        "task": "worklogix.workers.celery_tasks.attendance_tasks.process_auto_logout",
        "schedule": crontab(minute=5),  # Every hour
    },
    "attendance-daily-processing": {
        "task": "worklogix.workers.celery_tasks.attendance_tasks.process_daily_attendance",
        "schedule": crontab(hour=23, minute=30),
    },
    "attendance-weekly-summary": {
        "task": "worklogix.workers.celery_tasks.attendance_tasks.process_weekly_summary",
        "schedule": crontab(hour=8, minute=0, day_of_week="mon"),
    },
    "attendance-monthly-rewards": {
        "task": "worklogix.workers.celery_tasks.attendance_tasks.process_monthly_rewards",
        "schedule": crontab(hour=0, minute=30, day_of_month=1),
    },
}


@celery_setup_logging.connect
def configure_worker_logging(**kwargs):
    from worklogix.core.logging_config import setup_logging
    setup_logging()
