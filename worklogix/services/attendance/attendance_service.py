import logging
from calendar import monthrange
from datetime import date, datetime, timezone
from decimal import Decimal
from typing import Any, Dict, List, Optional
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from worklogix.core.config import settings
from worklogix.core.exceptions import NotFoundError, PermissionDeniedError, ValidationError
from worklogix.models.attendance.attendance_log import AttendanceLog
from worklogix.models.auth.user import User
from worklogix.models.organization.company import Company
from worklogix.models.shared.enums import AttendanceStatus, UserRole
from worklogix.schemas.attendance.attendance_schema import WorkReportCreate
from worklogix.services.attendance.reward_service import RewardService
from worklogix.services.attendance.scoring import (
    calculate_daily_points,
    classify_login,
    ensure_utc,
    hours_between,
    is_attended,
    is_late,
    local_datetime,
    local_today,
    overtime_hours,
    standard_hours,
)
from worklogix.services.auth.user_service import UserService
from worklogix.services.hr.leave_service import LeaveService

logger = logging.getLogger(__name__)


def work_start_of(company: Company) -> str:
    return company.work_start_time or settings.DEFAULT_WORK_START_TIME


def work_end_of(company: Company) -> str:
    return company.work_end_time or settings.DEFAULT_WORK_END_TIME


def apply_logout(log: AttendanceLog, company: Company, logout_at: datetime) -> AttendanceLog:
    """
    Record a logout on a log and derive hours, overtime and points.

    Shared by manual logout, auto-logout and approved corrections. Does not
    commit; the caller owns the unit of work.
    """
    log.logout_time = ensure_utc(logout_at)

    if log.login_time:
        total = hours_between(log.login_time, log.logout_time)
    else:
        total = Decimal("0")

    standard = standard_hours(work_start_of(company), work_end_of(company))
    extra = overtime_hours(total, standard)

    log.total_hours = total
    log.overtime_hours = extra
    log.is_overtime = extra > 0
    log.points_earned = calculate_daily_points(log.status, total)
    return log


class AttendanceService:
    def __init__(self, db: AsyncSession, timezone_name: Optional[str] = None):
        self.db = db
        self.timezone_name = timezone_name or settings.TIMEZONE
        self.reward_service = RewardService(db)
        self.user_service = UserService(db)

    # region Helpers
    async def _get_company(self, user: User) -> Company:
        if not user.is_active:
            raise ValidationError("User account is inactive")
        if not user.company_id:
            raise ValidationError("User is not assigned to a company")

        company = await self.db.get(Company, user.company_id)
        if not company or company.is_deleted:
            raise NotFoundError("Company not found")
        return company

    def _today(self, now: datetime) -> date:
        return local_today(now, self.timezone_name)

    async def get_log(self, user_id: int, company_id: int, day: date) -> Optional[AttendanceLog]:
        result = await self.db.execute(
            select(AttendanceLog).where(
                AttendanceLog.user_id == user_id,
                AttendanceLog.company_id == company_id,
                AttendanceLog.date == day
            )
        )
        return result.scalar_one_or_none()

    def ensure_company_access(self, admin: User, company_id: Optional[int]) -> None:
        """Company admins may only look at their own company"""
        if admin.role == UserRole.SUPER_ADMIN:
            return
        if not admin.company_id or admin.company_id != company_id:
            raise PermissionDeniedError("You do not have access to this company")
    # endregion

    # region Recording
    async def record_login(self, user: User, now: Optional[datetime] = None) -> AttendanceLog:
        """Create today's log and classify the login against the company start time"""
        now = ensure_utc(now or datetime.now(timezone.utc))
        company = await self._get_company(user)
        today = self._today(now)

        log = await self.get_log(user.id, company.id, today)
        if log and log.login_time:
            raise ValidationError("Already logged in today")

        work_start = local_datetime(today, work_start_of(company), self.timezone_name)
        status, late_minutes = classify_login(
            now,
            work_start,
            settings.SLIGHTLY_LATE_MINUTES,
            settings.LATE_MINUTES,
        )

        if log is None:
            log = AttendanceLog(user_id=user.id, company_id=company.id, date=today)
            self.db.add(log)

        log.login_time = now
        log.status = status
        log.is_late = is_late(status)
        log.late_type = status.value if log.is_late else None
        log.late_minutes = late_minutes
        log.total_hours = Decimal("0")
        log.points_earned = 0

        await self.db.commit()
        await self.db.refresh(log)

        logger.info(f"User {user.id} logged in at {now.isoformat()} ({status.value})")
        return log

    async def submit_work_report(
        self,
        user: User,
        report: WorkReportCreate,
        now: Optional[datetime] = None
    ) -> AttendanceLog:
        now = ensure_utc(now or datetime.now(timezone.utc))
        company = await self._get_company(user)

        log = await self.get_log(user.id, company.id, self._today(now))
        if not log or not log.login_time:
            raise ValidationError("You must log in before submitting a work report")

        log.report_submitted = True
        log.tasks_completed = report.tasks_completed
        if report.notes is not None:
            log.notes = report.notes

        await self.db.commit()
        await self.db.refresh(log)

        logger.info(f"Work report submitted by user {user.id} for {log.date}")
        return log

    async def record_logout(
        self,
        user: User,
        now: Optional[datetime] = None,
        early_logout_reason: Optional[str] = None
    ) -> AttendanceLog:
        now = ensure_utc(now or datetime.now(timezone.utc))
        company = await self._get_company(user)
        today = self._today(now)

        log = await self.get_log(user.id, company.id, today)
        if not log or not log.login_time:
            raise ValidationError("No login recorded for today")
        if log.logout_time:
            raise ValidationError("Already logged out today")

        work_end = local_datetime(today, work_end_of(company), self.timezone_name)
        reason = early_logout_reason.strip() if early_logout_reason else None
        if now < work_end and not log.report_submitted and not reason:
            raise ValidationError(
                "Submit your work report or provide a reason before logging out early"
            )

        if reason:
            log.early_logout_reason = reason
        apply_logout(log, company, now)

        await self.db.commit()
        await self.db.refresh(log)

        logger.info(f"User {user.id} logged out after {log.total_hours}h, {log.points_earned} points")
        return log

    async def mark_absent(self, user_id: int, company_id: int, day: date) -> AttendanceLog:
        log = AttendanceLog(
            user_id=user_id,
            company_id=company_id,
            date=day,
            status=AttendanceStatus.ABSENT,
            is_late=False,
            late_minutes=0,
            total_hours=Decimal("0"),
            points_earned=0,
        )
        self.db.add(log)
        await self.db.commit()
        return log
    # endregion

    # region Queries
    async def get_today_log(self, user: User, now: Optional[datetime] = None) -> Optional[AttendanceLog]:
        now = ensure_utc(now or datetime.now(timezone.utc))
        if not user.company_id:
            return None
        return await self.get_log(user.id, user.company_id, self._today(now))

    async def get_user_logs(self, user_id: int, company_id: int, limit: int = 30) -> List[AttendanceLog]:
        result = await self.db.execute(
            select(AttendanceLog)
            .where(
                AttendanceLog.user_id == user_id,
                AttendanceLog.company_id == company_id
            )
            .order_by(AttendanceLog.date.desc())
            .limit(limit)
        )
        return list(result.scalars().all())

    async def get_company_logs(self, company_id: int, day: date) -> List[AttendanceLog]:
        result = await self.db.execute(
            select(AttendanceLog)
            .options(selectinload(AttendanceLog.user))
            .where(
                AttendanceLog.company_id == company_id,
                AttendanceLog.date == day
            )
            .order_by(AttendanceLog.login_time)
        )
        return list(result.scalars().all())

    async def get_logs_by_date_range(self, company_id: int, start_date: date, end_date: date) -> List[AttendanceLog]:
        result = await self.db.execute(
            select(AttendanceLog)
            .where(
                AttendanceLog.company_id == company_id,
                AttendanceLog.date >= start_date,
                AttendanceLog.date <= end_date
            )
            .order_by(AttendanceLog.date, AttendanceLog.user_id)
        )
        return list(result.scalars().all())

    async def get_monthly_report(self, user_id: int, company_id: int, month: int, year: int) -> Dict[str, Any]:
        """Aggregate a member's logs for one calendar month"""
        if not 1 <= month <= 12:
            raise ValidationError("Month must be between 1 and 12")

        start_date = date(year, month, 1)
        end_date = date(year, month, monthrange(year, month)[1])

        result = await self.db.execute(
            select(AttendanceLog).where(
                AttendanceLog.user_id == user_id,
                AttendanceLog.company_id == company_id,
                AttendanceLog.date >= start_date,
                AttendanceLog.date <= end_date
            )
        )
        logs = result.scalars().all()

        attended = [log for log in logs if is_attended(log.status)]
        worked_hours = [Decimal(str(log.total_hours)) for log in attended if log.total_hours]
        average_hours = float(round(sum(worked_hours) / len(worked_hours), 2)) if worked_hours else 0.0

        return {
            "month": month,
            "year": year,
            "total_days": len(logs),
            "present_days": len(attended),
            "absent_days": sum(1 for log in logs if log.status == AttendanceStatus.ABSENT),
            "late_days": sum(1 for log in logs if is_late(log.status)),
            "overtime_days": sum(1 for log in logs if log.is_overtime),
            "average_hours": average_hours,
            "total_points": sum(log.points_earned or 0 for log in logs),
        }

    async def get_company_stats(self, company_id: int, day: date) -> Dict[str, Any]:
        total_employees = await self.db.scalar(
            select(func.count(User.id)).where(
                User.company_id == company_id,
                User.role == UserRole.COMPANY_MEMBER,
                User.is_active == True,
                User.is_deleted == False
            )
        ) or 0

        logs = await self.get_company_logs(company_id, day)
        present = [log for log in logs if is_attended(log.status)]
        late_today = sum(1 for log in present if is_late(log.status))
        on_time = sum(1 for log in present if log.status == AttendanceStatus.ON_TIME)

        return {
            "date": day,
            "total_employees": total_employees,
            "present_today": len(present),
            "late_today": late_today,
            "absent_today": max(total_employees - len(present), 0),
            "on_time_percentage": round(on_time / len(present) * 100, 1) if present else 0.0,
        }

    async def get_employee_profile(self, user_id: int, admin: User, now: Optional[datetime] = None) -> Dict[str, Any]:
        """Everything an admin sees on one employee's attendance page"""
        employee = await self.user_service.get_user(user_id)
        if not employee:
            raise NotFoundError(f"User with ID {user_id} not found")
        self.ensure_company_access(admin, employee.company_id)

        today = self._today(ensure_utc(now or datetime.now(timezone.utc)))
        company_id = employee.company_id
        reward = await self.reward_service.get_reward(user_id, company_id)

        return {
            "employee": employee,
            "attendance_logs": await self.get_user_logs(user_id, company_id),
            "rewards": await self.reward_service.get_reward_summary(user_id, company_id) if reward else None,
            "monthly_report": await self.get_monthly_report(user_id, company_id, today.month, today.year),
            "leaves": await LeaveService(self.db).get_leaves(company_id, user_id=user_id),
        }
    # endregion
