from datetime import date, datetime, timezone
from typing import List, Optional
from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession
from worklogix.api.dependencies import get_company_id, get_current_active_user, require_admin
from worklogix.core.config import settings
from worklogix.core.database import get_async_session
from worklogix.models.auth.user import User
from worklogix.schemas.attendance.attendance_schema import (
    AttendanceLogResponse,
    AttendanceRewardResponse,
    AttendanceStats,
    BadgeResponse,
    CompanyAttendanceLogResponse,
    EmployeeAttendanceProfile,
    LogoutRequest,
    MonthlyReport,
    TopPerformer,
    WorkReportCreate,
)
from worklogix.services.attendance.attendance_service import AttendanceService
from worklogix.services.attendance.reward_service import RewardService
from worklogix.services.attendance.scoring import local_today

router = APIRouter()


def _today() -> date:
    return local_today(datetime.now(timezone.utc), settings.TIMEZONE)


@router.post("/login", response_model=AttendanceLogResponse)
async def login(
    session: AsyncSession = Depends(get_async_session),
    current_user: User = Depends(get_current_active_user)
):
    """Record today's login"""
    service = AttendanceService(session)
    return await service.record_login(current_user)


@router.post("/logout", response_model=AttendanceLogResponse)
async def logout(
    payload: Optional[LogoutRequest] = None,
    session: AsyncSession = Depends(get_async_session),
    current_user: User = Depends(get_current_active_user)
):
    """Record today's logout; an early logout needs a report or a reason"""
    service = AttendanceService(session)
    reason = payload.early_logout_reason if payload else None
    return await service.record_logout(current_user, early_logout_reason=reason)


@router.post("/report", response_model=AttendanceLogResponse)
async def submit_report(
    report: WorkReportCreate,
    session: AsyncSession = Depends(get_async_session),
    current_user: User = Depends(get_current_active_user)
):
    """Submit today's work report"""
    service = AttendanceService(session)
    return await service.submit_work_report(current_user, report)


@router.get("/today", response_model=Optional[AttendanceLogResponse])
async def get_today(
    session: AsyncSession = Depends(get_async_session),
    current_user: User = Depends(get_current_active_user)
):
    service = AttendanceService(session)
    return await service.get_today_log(current_user)


@router.get("/logs", response_model=List[AttendanceLogResponse])
async def get_logs(
    limit: int = Query(30, ge=1, le=366),
    session: AsyncSession = Depends(get_async_session),
    current_user: User = Depends(get_current_active_user),
    company_id: int = Depends(get_company_id)
):
    """Current user's recent attendance logs"""
    service = AttendanceService(session)
    return await service.get_user_logs(current_user.id, company_id, limit)


@router.get("/rewards", response_model=AttendanceRewardResponse)
async def get_rewards(
    session: AsyncSession = Depends(get_async_session),
    current_user: User = Depends(get_current_active_user),
    company_id: int = Depends(get_company_id)
):
    service = RewardService(session)
    return await service.get_reward_summary(current_user.id, company_id)


@router.get("/monthly-report", response_model=MonthlyReport)
async def get_monthly_report(
    month: Optional[int] = Query(None, ge=1, le=12),
    year: Optional[int] = Query(None, ge=2000),
    session: AsyncSession = Depends(get_async_session),
    current_user: User = Depends(get_current_active_user),
    company_id: int = Depends(get_company_id)
):
    """Monthly report for the current user, defaulting to this month"""
    today = _today()
    service = AttendanceService(session)
    return await service.get_monthly_report(
        current_user.id,
        company_id,
        month or today.month,
        year or today.year
    )


@router.get("/badges", response_model=List[BadgeResponse])
async def get_badges(
    session: AsyncSession = Depends(get_async_session),
    current_user: User = Depends(get_current_active_user)
):
    """Badge catalog"""
    service = RewardService(session)
    return await service.get_badges()


@router.get("/company", response_model=List[CompanyAttendanceLogResponse])
async def get_company_logs(
    day: Optional[date] = Query(None, alias="date"),
    session: AsyncSession = Depends(get_async_session),
    current_user: User = Depends(require_admin),
    company_id: int = Depends(get_company_id)
):
    """Company attendance for a day (today by default)"""
    service = AttendanceService(session)
    return await service.get_company_logs(company_id, day or _today())


@router.get("/stats", response_model=AttendanceStats)
async def get_stats(
    day: Optional[date] = Query(None, alias="date"),
    session: AsyncSession = Depends(get_async_session),
    current_user: User = Depends(require_admin),
    company_id: int = Depends(get_company_id)
):
    service = AttendanceService(session)
    return await service.get_company_stats(company_id, day or _today())


@router.get("/top-performers", response_model=List[TopPerformer])
async def get_top_performers(
    limit: int = Query(5, ge=1, le=50),
    session: AsyncSession = Depends(get_async_session),
    current_user: User = Depends(require_admin),
    company_id: int = Depends(get_company_id)
):
    service = RewardService(session)
    return await service.get_top_performers(company_id, limit)


@router.get("/employee/{user_id}/profile", response_model=EmployeeAttendanceProfile)
async def get_employee_profile(
    user_id: int,
    session: AsyncSession = Depends(get_async_session),
    current_user: User = Depends(require_admin)
):
    """Logs, rewards, monthly report and leaves for one employee"""
    service = AttendanceService(session)
    return await service.get_employee_profile(user_id, current_user)
