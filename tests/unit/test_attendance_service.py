from datetime import date, datetime, timezone
from decimal import Decimal

import pytest

from worklogix.core.exceptions import PermissionDeniedError, ValidationError
from worklogix.models.shared.enums import AttendanceStatus, LeaveStatus, LeaveType, UserRole
from worklogix.models import Leave
from worklogix.schemas.attendance.attendance_schema import WorkReportCreate
from worklogix.services.attendance.attendance_service import AttendanceService

DAY = date(2026, 3, 10)


def at(hour, minute=0, day=DAY):
    return datetime(day.year, day.month, day.day, hour, minute, tzinfo=timezone.utc)


@pytest.fixture
def service(db):
    return AttendanceService(db, timezone_name="UTC")


class TestRecordLogin:
    async def test_on_time_login(self, service, member):
        log = await service.record_login(member, now=at(8, 55))

        assert log.date == DAY
        assert log.status == AttendanceStatus.ON_TIME
        assert log.is_late is False
        assert log.late_type is None
        assert log.late_minutes == 0

    async def test_late_login_is_classified(self, service, member):
        log = await service.record_login(member, now=at(9, 20))

        assert log.status == AttendanceStatus.LATE
        assert log.is_late is True
        assert log.late_type == "late"
        assert log.late_minutes == 20

    async def test_second_login_same_day_rejected(self, service, member):
        await service.record_login(member, now=at(9, 0))

        with pytest.raises(ValidationError) as exc:
            await service.record_login(member, now=at(10, 0))
        assert exc.value.detail == "Already logged in today"

    async def test_user_without_company_rejected(self, service, make_user):
        drifter = await make_user(None)

        with pytest.raises(ValidationError):
            await service.record_login(drifter, now=at(9, 0))

    async def test_login_converts_absent_log(self, service, member, make_log):
        await make_log(member, DAY, AttendanceStatus.ABSENT)

        log = await service.record_login(member, now=at(9, 5))

        assert log.status == AttendanceStatus.SLIGHTLY_LATE
        assert log.login_time is not None


class TestRecordLogout:
    async def test_full_day_earns_bonus(self, service, member):
        await service.record_login(member, now=at(9, 0))

        log = await service.record_logout(member, now=at(19, 30))

        assert log.total_hours == Decimal("10.50")
        assert log.is_overtime is True
        assert log.overtime_hours == Decimal("1.50")
        assert log.points_earned == 15

    async def test_early_logout_requires_report_or_reason(self, service, member):
        await service.record_login(member, now=at(9, 0))

        with pytest.raises(ValidationError):
            await service.record_logout(member, now=at(15, 0))

    async def test_early_logout_with_reason(self, service, member):
        await service.record_login(member, now=at(9, 0))

        log = await service.record_logout(member, now=at(15, 0), early_logout_reason="Doctor appointment")

        assert log.early_logout_reason == "Doctor appointment"
        assert log.total_hours == Decimal("6.00")
        assert log.points_earned == 10

    async def test_early_logout_after_report(self, service, member):
        await service.record_login(member, now=at(9, 40))
        await service.submit_work_report(
            member,
            WorkReportCreate(tasks_completed="Closed the sprint tickets"),
            now=at(14, 0),
        )

        log = await service.record_logout(member, now=at(14, 10))

        assert log.report_submitted is True
        assert log.points_earned == 5

    async def test_logout_without_login_rejected(self, service, member):
        with pytest.raises(ValidationError):
            await service.record_logout(member, now=at(18, 0))

    async def test_double_logout_rejected(self, service, member):
        await service.record_login(member, now=at(9, 0))
        await service.record_logout(member, now=at(18, 0))

        with pytest.raises(ValidationError):
            await service.record_logout(member, now=at(18, 5))

    async def test_report_requires_login(self, service, member):
        with pytest.raises(ValidationError):
            await service.submit_work_report(member, WorkReportCreate(tasks_completed="Nothing"), now=at(12, 0))


class TestReports:
    async def test_monthly_report(self, service, member, make_log):
        await make_log(member, date(2026, 3, 2), AttendanceStatus.ON_TIME, total_hours=Decimal("9"), points_earned=15, is_overtime=False)
        await make_log(member, date(2026, 3, 3), AttendanceStatus.LATE, total_hours=Decimal("8"), points_earned=5)
        await make_log(member, date(2026, 3, 4), AttendanceStatus.ABSENT, points_earned=0)
        await make_log(member, date(2026, 3, 5), AttendanceStatus.ON_TIME, total_hours=Decimal("10"), points_earned=15, is_overtime=True)
        await make_log(member, date(2026, 4, 1), AttendanceStatus.ON_TIME, total_hours=Decimal("9"), points_earned=15)

        report = await service.get_monthly_report(member.id, member.company_id, 3, 2026)

        assert report["total_days"] == 4
        assert report["present_days"] == 3
        assert report["absent_days"] == 1
        assert report["late_days"] == 1
        assert report["overtime_days"] == 1
        assert report["average_hours"] == 9.0
        assert report["total_points"] == 35

    async def test_empty_month(self, service, member):
        report = await service.get_monthly_report(member.id, member.company_id, 2, 2026)

        assert report["total_days"] == 0
        assert report["average_hours"] == 0.0

    async def test_company_stats(self, service, company, make_user, make_log):
        punctual = await make_user(company)
        tardy = await make_user(company)
        await make_user(company)
        await make_log(punctual, DAY, AttendanceStatus.ON_TIME)
        await make_log(tardy, DAY, AttendanceStatus.VERY_LATE)

        stats = await service.get_company_stats(company.id, DAY)

        assert stats["total_employees"] == 3
        assert stats["present_today"] == 2
        assert stats["late_today"] == 1
        assert stats["absent_today"] == 1
        assert stats["on_time_percentage"] == 50.0

    async def test_employee_profile(self, db, service, member, admin, make_log):
        await make_log(member, DAY, AttendanceStatus.ON_TIME)
        db.add(Leave(
            user_id=member.id,
            company_id=member.company_id,
            leave_type=LeaveType.SICK,
            start_date=date(2026, 3, 12),
            end_date=date(2026, 3, 13),
            status=LeaveStatus.APPROVED,
        ))
        await db.commit()

        profile = await service.get_employee_profile(member.id, admin, now=at(12, 0))

        assert profile["employee"].id == member.id
        assert len(profile["attendance_logs"]) == 1
        assert profile["rewards"] is None
        assert profile["monthly_report"]["total_days"] == 1
        assert len(profile["leaves"]) == 1

    async def test_profile_of_other_company_forbidden(self, service, member, make_company, make_user):
        other_company = await make_company(name="Rival Inc")
        rival_admin = await make_user(other_company, role=UserRole.COMPANY_ADMIN)

        with pytest.raises(PermissionDeniedError):
            await service.get_employee_profile(member.id, rival_admin)
