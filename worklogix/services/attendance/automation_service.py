"""
Scheduled attendance jobs.

Each job walks the active companies one at a time. A company that fails is
rolled back, logged and recorded as its own failed AutoTask row, and the
remaining companies still run. Every run ends with one summary AutoTask row.
"""
import logging
from datetime import date, datetime, timedelta, timezone
from typing import Any, Awaitable, Callable, Dict, List, Optional, Tuple
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from worklogix.core.config import settings
from worklogix.models.attendance.attendance_log import AttendanceLog
from worklogix.models.auth.user import User
from worklogix.models.organization.company import Company
from worklogix.models.shared.enums import AutoTaskStatus, AutoTaskType
from worklogix.services.attendance.attendance_service import AttendanceService, apply_logout, work_end_of
from worklogix.services.attendance.reward_service import RewardService
from worklogix.services.attendance.scoring import (
    calculate_daily_points,
    ensure_utc,
    is_attended,
    local_datetime,
    local_today,
)
from worklogix.services.auth.user_service import UserService
from worklogix.services.communication.email_service import EmailService
from worklogix.services.hr.holiday_service import HolidayService
from worklogix.services.hr.leave_service import LeaveService
from worklogix.services.system.auto_task_service import AutoTaskService

logger = logging.getLogger(__name__)

AUTO_LOGOUT_TASK = "Auto Logout Processing"
DAILY_TASK = "Daily Attendance Processing"
WEEKLY_TASK = "Weekly Summary"
MONTHLY_TASK = "Monthly Rewards"

AUTO_LOGOUT_REASON = "Auto-logout: User forgot to logout"
PERFECT_MONTH_BONUS = 100
WEEK_DAYS = 7

CompanyHandler = Callable[[Company], Awaitable[int]]


class AttendanceAutomation:
    def __init__(
        self,
        db: AsyncSession,
        email_service: EmailService,
        now: Optional[datetime] = None,
        timezone_name: Optional[str] = None
    ):
        self.db = db
        self.email_service = email_service
        self.now = ensure_utc(now) if now else None
        self.timezone_name = timezone_name or settings.TIMEZONE

        self.attendance_service = AttendanceService(db, self.timezone_name)
        self.reward_service = RewardService(db)
        self.user_service = UserService(db)
        self.holiday_service = HolidayService(db)
        self.leave_service = LeaveService(db)
        self.auto_task_service = AutoTaskService(db)

    def _now(self) -> datetime:
        return self.now or datetime.now(timezone.utc)

    @property
    def today(self) -> date:
        return local_today(self._now(), self.timezone_name)

    async def _active_companies(self) -> List[Tuple[int, str]]:
        result = await self.db.execute(
            select(Company.id, Company.name)
            .where(Company.is_active == True, Company.is_deleted == False)
            .order_by(Company.id)
        )
        return [(row.id, row.name) for row in result.all()]

    async def _run_for_companies(
        self,
        task_name: str,
        task_type: AutoTaskType,
        handler: CompanyHandler,
        details_template: str
    ) -> Dict[str, Any]:
        try:
            companies = await self._active_companies()
            total = 0
            failed = 0

            for company_id, company_name in companies:
                try:
                    company = await self.db.get(Company, company_id)
                    total += await handler(company)
                except Exception as e:
                    failed += 1
                    await self.db.rollback()
                    logger.error(f"[Cron] {task_name} failed for company {company_name}: {str(e)}")
                    await self.auto_task_service.record(
                        task_name,
                        task_type,
                        AutoTaskStatus.FAILED,
                        f"{company_name}: {str(e) or type(e).__name__}",
                        company_id=company_id,
                    )

            details = details_template.format(total=total, companies=len(companies))
            if failed:
                details += f" ({failed} failed)"

            await self.auto_task_service.record(task_name, task_type, AutoTaskStatus.COMPLETED, details)
            logger.info(f"[Cron] {task_name} completed: {details}")
            return {"task_name": task_name, "status": AutoTaskStatus.COMPLETED, "details": details}

        except Exception as e:
            await self.db.rollback()
            logger.error(f"[Cron] {task_name} failed: {str(e)}")
            details = str(e) or "Unknown error"
            await self.auto_task_service.record(task_name, task_type, AutoTaskStatus.FAILED, details)
            return {"task_name": task_name, "status": AutoTaskStatus.FAILED, "details": details}

    # region Auto logout
    async def process_auto_logout(self) -> Dict[str, Any]:
        """Close today's open logs once the company's grace period has passed"""
        return await self._run_for_companies(
            AUTO_LOGOUT_TASK,
            AutoTaskType.DAILY,
            self._auto_logout_company,
            "Auto-logged out {total} users across {companies} companies",
        )

    async def _auto_logout_company(self, company: Company) -> int:
        now = self._now()
        today = self.today
        cutoff = local_datetime(today, work_end_of(company), self.timezone_name) + timedelta(
            hours=settings.AUTO_LOGOUT_GRACE_HOURS
        )
        if now < cutoff:
            return 0

        result = await self.db.execute(
            select(AttendanceLog).where(
                AttendanceLog.company_id == company.id,
                AttendanceLog.date == today,
                AttendanceLog.login_time.isnot(None),
                AttendanceLog.logout_time.is_(None)
            )
        )
        open_logs = result.scalars().all()

        for log in open_logs:
            log.auto_logout = True
            log.early_logout_reason = AUTO_LOGOUT_REASON
            apply_logout(log, company, cutoff)
            await self.db.commit()
            logger.info(f"[Cron] Auto-logged out user {log.user_id} of {company.name} at {cutoff.isoformat()}")

        return len(open_logs)
    # endregion

    # region Daily processing
    async def process_daily_attendance(self) -> Dict[str, Any]:
        """Mark absences, advance streaks and credit the day's points"""
        return await self._run_for_companies(
            DAILY_TASK,
            AutoTaskType.DAILY,
            self._daily_company,
            "Processed attendance for {companies} companies ({total} members)",
        )

    async def _daily_company(self, company: Company) -> int:
        today = self.today
        members = await self.user_service.get_active_members(company.id)

        # 1. absences
        logs = await self.attendance_service.get_company_logs(company.id, today)
        logged_user_ids = {log.user_id for log in logs}
        if await self.holiday_service.is_holiday(company.id, today):
            logger.info(f"[Cron] {today} is a holiday for {company.name}, no absences marked")
        else:
            for member in members:
                if member.id in logged_user_ids:
                    continue
                if await self.leave_service.has_approved_leave(member.id, company.id, today):
                    continue
                await self.attendance_service.mark_absent(member.id, company.id, today)

        # 2. streaks
        for member in members:
            await self.reward_service.update_streak(member.id, company.id, today)

        # 3. points and summaries
        logs = await self.attendance_service.get_company_logs(company.id, today)
        for log in logs:
            if not log.logout_time:
                continue

            points = calculate_daily_points(log.status, log.total_hours)
            log.points_earned = points
            await self.db.commit()
            reward = await self.reward_service.add_points(log.user_id, company.id, points)

            user = await self.db.get(User, log.user_id)
            if user and user.email:
                await self.email_service.send_daily_summary(
                    to_email=user.email,
                    display_name=user.display_name,
                    log={
                        "date": log.date,
                        "status": log.status.value,
                        "login_time": log.login_time,
                        "logout_time": log.logout_time,
                        "total_hours": log.total_hours,
                        "is_overtime": log.is_overtime,
                        "overtime_hours": log.overtime_hours,
                        "points_earned": points,
                    },
                    reward={
                        "current_streak": reward.current_streak,
                        "total_points": reward.total_points,
                    },
                )

        return len(members)
    # endregion

    # region Weekly summary
    async def process_weekly_summary(self) -> Dict[str, Any]:
        """Email each company's admins the last seven days of attendance"""
        return await self._run_for_companies(
            WEEKLY_TASK,
            AutoTaskType.WEEKLY,
            self._weekly_company,
            "Generated weekly summaries for {companies} companies",
        )

    async def _weekly_company(self, company: Company) -> int:
        end_date = self.today
        start_date = end_date - timedelta(days=WEEK_DAYS - 1)

        logs = await self.attendance_service.get_logs_by_date_range(company.id, start_date, end_date)
        members = await self.user_service.get_active_members(company.id)
        top_performers = await self.reward_service.get_top_performers(company.id, settings.WEEKLY_TOP_PERFORMERS)

        attended = sum(1 for log in logs if is_attended(log.status))
        expected = len(members) * WEEK_DAYS
        attendance_rate = round(attended / expected * 100, 1) if expected else 0.0

        for admin in await self.user_service.get_company_admins(company.id):
            await self.email_service.send_weekly_summary(
                to_email=admin.email,
                company_name=company.name,
                start_date=start_date,
                end_date=end_date,
                attendance_rate=attendance_rate,
                total_records=len(logs),
                top_performers=top_performers,
            )

        logger.info(
            f"[Cron] Weekly summary for {company.name}: {len(logs)} attendance records, "
            f"{len(top_performers)} top performers, {attendance_rate}% attendance"
        )
        return 1
    # endregion

    # region Monthly rewards
    async def process_monthly_rewards(self, month: Optional[int] = None, year: Optional[int] = None) -> Dict[str, Any]:
        """Award monthly badges and bonuses, then reset monthly scores"""
        month = month or self.today.month
        year = year or self.today.year

        async def handler(company: Company) -> int:
            return await self._monthly_company(company, month, year)

        return await self._run_for_companies(
            MONTHLY_TASK,
            AutoTaskType.MONTHLY,
            handler,
            f"Processed monthly rewards for {month:02d}/{year}: " + "{companies} companies ({total} members)",
        )

    async def _monthly_company(self, company: Company, month: int, year: int) -> int:
        members = await self.user_service.get_active_members(company.id)
        awarded_on = self.today

        for member in members:
            report = await self.attendance_service.get_monthly_report(member.id, company.id, month, year)
            reward = await self.reward_service.get_or_create_reward(member.id, company.id)
            has_records = report["total_days"] > 0
            badges = []
            bonus_points = 0

            if has_records and report["absent_days"] == 0 and report["present_days"] == report["total_days"]:
                reward.perfect_months += 1
                reward.total_points += PERFECT_MONTH_BONUS
                bonus_points = PERFECT_MONTH_BONUS
                badges.append("Perfect Month")

            if has_records and report["late_days"] == 0 and report["absent_days"] == 0:
                badges.append("Reliable Performer")

            reward.monthly_score = 0
            await self.db.commit()

            for badge_name in badges:
                await self.reward_service.assign_badge(member.id, company.id, badge_name, awarded_on)

            await self.email_service.send_monthly_achievement(
                to_email=member.email,
                display_name=member.display_name,
                report=report,
                badges=badges,
                bonus_points=bonus_points,
            )

        return len(members)
    # endregion
