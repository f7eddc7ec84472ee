"""
Attendance batch jobs, scheduled through the Celery beat schedule
"""
import asyncio
import logging
from datetime import datetime, timedelta, timezone
from typing import Optional
from sqlalchemy.ext.asyncio import create_async_engine, async_sessionmaker, AsyncSession
from sqlalchemy.pool import NullPool
from worklogix.core.celery_app import celery_app
from worklogix.core.config import settings
from worklogix.services.attendance.scoring import local_today

logger = logging.getLogger(__name__)

# Each task runs in a fresh event loop, so connections are not pooled across tasks
async_engine = create_async_engine(
    settings.DATABASE_URL,
    echo=False,
    poolclass=NullPool,
)

async_session_maker = async_sessionmaker(
    bind=async_engine,
    class_=AsyncSession,
    expire_on_commit=False,
)


def run_async_task(coro):
    """Helper function to run async coroutines in Celery tasks"""
    loop = asyncio.new_event_loop()
    try:
        asyncio.set_event_loop(loop)
        return loop.run_until_complete(coro)
    except Exception as e:
        logger.error(f"Error in async task: {e}")
        raise
    finally:
        loop.close()


async def _run_job(job_name: str, **kwargs):
    # Import inside function to avoid circular imports
    from worklogix.services.attendance.automation_service import AttendanceAutomation
    from worklogix.services.communication.email_service import EmailService

    async with async_session_maker() as db:
        automation = AttendanceAutomation(db, EmailService())
        result = await getattr(automation, job_name)(**kwargs)
        logger.info(f"{result['task_name']}: {result['status'].value} - {result['details']}")
        return {**result, "status": result["status"].value}


def previous_month(now: Optional[datetime] = None):
    """(month, year) of the month before the current local month"""
    today = local_today(now or datetime.now(timezone.utc), settings.TIMEZONE)
    last_day = today.replace(day=1) - timedelta(days=1)
    return last_day.month, last_day.year


@celery_app.task
def process_auto_logout():
    """Hourly task closing logs left open past the grace period"""
    return run_async_task(_run_job("process_auto_logout"))


@celery_app.task
def process_daily_attendance():
    """Nightly task marking absences, streaks and points"""
    return run_async_task(_run_job("process_daily_attendance"))


@celery_app.task
def process_weekly_summary():
    """Monday task emailing weekly summaries to company admins"""
    return run_async_task(_run_job("process_weekly_summary"))


@celery_app.task
def process_monthly_rewards(month: int = None, year: int = None):
    """Runs on the 1st; defaults to the month that just ended"""
    if not month or not year:
        month, year = previous_month()
    return run_async_task(_run_job("process_monthly_rewards", month=month, year=year))
