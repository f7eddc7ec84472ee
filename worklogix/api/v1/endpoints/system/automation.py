from fastapi import APIRouter, Depends, Query
from typing import Optional
from sqlalchemy.ext.asyncio import AsyncSession
from worklogix.api.dependencies import get_email_service, require_admin, require_roles
from worklogix.core.database import get_async_session
from worklogix.models.auth.user import User
from worklogix.models.shared.enums import AutoTaskStatus, UserRole
from worklogix.schemas.common.pagination import PaginatedResponse
from worklogix.schemas.system.auto_task_schema import AutoTaskResponse, JobRunResponse
from worklogix.services.attendance.automation_service import AttendanceAutomation
from worklogix.services.attendance.reward_service import RewardService
from worklogix.services.communication.email_service import EmailService
from worklogix.services.system.auto_task_service import AutoTaskService

router = APIRouter()

require_super_admin = require_roles(UserRole.SUPER_ADMIN)


@router.post("/auto-logout", response_model=JobRunResponse)
async def run_auto_logout(
    session: AsyncSession = Depends(get_async_session),
    email_service: EmailService = Depends(get_email_service),
    current_user: User = Depends(require_super_admin)
):
    """Run the auto-logout job now"""
    return await AttendanceAutomation(session, email_service).process_auto_logout()


@router.post("/daily", response_model=JobRunResponse)
async def run_daily_processing(
    session: AsyncSession = Depends(get_async_session),
    email_service: EmailService = Depends(get_email_service),
    current_user: User = Depends(require_super_admin)
):
    return await AttendanceAutomation(session, email_service).process_daily_attendance()


@router.post("/weekly", response_model=JobRunResponse)
async def run_weekly_summary(
    session: AsyncSession = Depends(get_async_session),
    email_service: EmailService = Depends(get_email_service),
    current_user: User = Depends(require_super_admin)
):
    return await AttendanceAutomation(session, email_service).process_weekly_summary()


@router.post("/monthly", response_model=JobRunResponse)
async def run_monthly_rewards(
    month: Optional[int] = Query(None, ge=1, le=12),
    year: Optional[int] = Query(None, ge=2000),
    session: AsyncSession = Depends(get_async_session),
    email_service: EmailService = Depends(get_email_service),
    current_user: User = Depends(require_super_admin)
):
    """Run monthly rewards for a month (current month by default)"""
    return await AttendanceAutomation(session, email_service).process_monthly_rewards(month, year)


@router.post("/initialize-badges")
async def initialize_badges(
    session: AsyncSession = Depends(get_async_session),
    current_user: User = Depends(require_super_admin)
):
    created = await RewardService(session).initialize_badges()
    return {"message": "Badge catalog initialized", "created": created}


@router.get("/tasks", response_model=PaginatedResponse[AutoTaskResponse])
async def get_auto_tasks(
    page_index: int = Query(1, ge=1),
    page_size: int = Query(100, ge=1, le=1000),
    task_name: Optional[str] = Query(None),
    status: Optional[AutoTaskStatus] = Query(None),
    session: AsyncSession = Depends(get_async_session),
    current_user: User = Depends(require_admin)
):
    """Audit trail of job runs"""
    service = AutoTaskService(session)
    return await service.get_auto_tasks(page_index, page_size, task_name, status)
