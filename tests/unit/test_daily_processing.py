from datetime import date, datetime, timezone
from decimal import Decimal

import pytest
from sqlalchemy import select

from worklogix.models import AttendanceLog, Holiday, Leave
from worklogix.models.shared.enums import AttendanceStatus, LeaveStatus, LeaveType
from worklogix.services.attendance.attendance_service import AttendanceService
from worklogix.services.attendance.automation_service import AttendanceAutomation
from worklogix.services.attendance.reward_service import RewardService

DAY = date(2026, 3, 10)
NIGHT = datetime(2026, 3, 10, 23, 30, tzinfo=timezone.utc)


def at(hour, minute=0):
    return datetime(DAY.year, DAY.month, DAY.day, hour, minute, tzinfo=timezone.utc)


async def _todays_log(db, user):
    result = await db.execute(
        select(AttendanceLog).where(AttendanceLog.user_id == user.id, AttendanceLog.date == DAY)
    )
    return result.scalar_one_or_none()


@pytest.fixture
def automation(db, email_service):
    return AttendanceAutomation(db, email_service, now=NIGHT, timezone_name="UTC")


@pytest.mark.usefixtures("badges")
class TestDailyProcessing:
    async def test_missing_member_marked_absent(self, db, automation, member):
        await automation.process_daily_attendance()

        log = await _todays_log(db, member)
        assert log.status == AttendanceStatus.ABSENT
        reward = await RewardService(db).get_reward(member.id, member.company_id)
        assert reward.current_streak == 0
        assert reward.last_attendance_date == DAY

    async def test_login_after_absence_counts_on_rerun(self, db, automation, member):
        await automation.process_daily_attendance()

        await AttendanceService(db, "UTC").record_login(member, now=at(21, 0))
        await automation.process_daily_attendance()

        reward = await RewardService(db).get_reward(member.id, member.company_id)
        assert reward.current_streak == 1
        assert reward.last_attendance_date == DAY

    async def test_admins_are_not_marked_absent(self, db, automation, admin):
        await automation.process_daily_attendance()

        assert await _todays_log(db, admin) is None

    async def test_holiday_skips_absence_marking(self, db, automation, company, member):
        db.add(Holiday(company_id=company.id, name="Independence Day", date=DAY, is_active=True))
        await db.commit()

        await automation.process_daily_attendance()

        assert await _todays_log(db, member) is None

    async def test_recurring_holiday_matches_month_and_day(self, db, automation, company, member):
        db.add(Holiday(company_id=company.id, name="Founders Day", date=date(2020, 3, 10), is_recurring=True, is_active=True))
        await db.commit()

        await automation.process_daily_attendance()

        assert await _todays_log(db, member) is None

    async def test_other_company_holiday_ignored(self, db, automation, make_company, member):
        elsewhere = await make_company(name="Elsewhere")
        db.add(Holiday(company_id=elsewhere.id, name="Local Fair", date=DAY, is_active=True))
        await db.commit()

        await automation.process_daily_attendance()

        assert (await _todays_log(db, member)).status == AttendanceStatus.ABSENT

    @pytest.mark.parametrize("leave_status, expect_absent", [
        (LeaveStatus.APPROVED, False),
        (LeaveStatus.PENDING, True),
        (LeaveStatus.REJECTED, True),
    ])
    async def test_only_approved_leave_excuses(self, db, automation, member, leave_status, expect_absent):
        db.add(Leave(
            user_id=member.id,
            company_id=member.company_id,
            leave_type=LeaveType.ANNUAL,
            start_date=date(2026, 3, 9),
            end_date=date(2026, 3, 11),
            status=leave_status,
        ))
        await db.commit()

        await automation.process_daily_attendance()

        log = await _todays_log(db, member)
        assert (log is not None and log.status == AttendanceStatus.ABSENT) is expect_absent

    async def test_points_credited_and_summary_sent(self, db, automation, email_service, member, make_log):
        await make_log(
            member,
            DAY,
            AttendanceStatus.ON_TIME,
            login_time=at(9, 0),
            logout_time=at(18, 0),
            total_hours=Decimal("9"),
        )

        await automation.process_daily_attendance()

        reward = await RewardService(db).get_reward(member.id, member.company_id)
        assert reward.current_streak == 1
        assert reward.total_points == 15
        assert (await _todays_log(db, member)).points_earned == 15

        daily = email_service.of_kind("daily")
        assert len(daily) == 1
        assert daily[0][1] == member.email
        assert daily[0][2]["log"]["points_earned"] == 15

    async def test_open_log_not_credited(self, db, automation, email_service, member, make_log):
        await make_log(member, DAY, AttendanceStatus.LATE, login_time=at(9, 30))

        await automation.process_daily_attendance()

        reward = await RewardService(db).get_reward(member.id, member.company_id)
        assert reward.current_streak == 1
        assert reward.total_points == 0
        assert email_service.of_kind("daily") == []

    async def test_summary_auto_task(self, db, automation, member):
        result = await automation.process_daily_attendance()

        assert result["task_name"] == "Daily Attendance Processing"
        assert result["details"] == "Processed attendance for 1 companies (1 members)"
