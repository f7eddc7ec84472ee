from datetime import date, datetime, timedelta, timezone

import pytest
from sqlalchemy import select

from worklogix.models import AutoTask
from worklogix.models.shared.enums import AttendanceStatus, AutoTaskStatus, AutoTaskType, UserRole
from worklogix.services.attendance.automation_service import AttendanceAutomation
from worklogix.services.attendance.reward_service import RewardService

MONDAY = date(2026, 3, 16)
NOW = datetime(2026, 3, 16, 8, 0, tzinfo=timezone.utc)


@pytest.fixture
def automation(db, email_service):
    return AttendanceAutomation(db, email_service, now=NOW, timezone_name="UTC")


class TestWeeklySummary:
    async def test_rate_and_recipients(self, db, automation, email_service, company, admin, make_user, make_log):
        steady = await make_user(company, display_name="Steady")
        patchy = await make_user(company, display_name="Patchy")
        for offset in range(7):
            await make_log(steady, MONDAY - timedelta(days=offset), AttendanceStatus.ON_TIME)
        await make_log(patchy, MONDAY - timedelta(days=1), AttendanceStatus.LATE)
        await make_log(patchy, MONDAY - timedelta(days=2), AttendanceStatus.ABSENT)
        # outside the window
        await make_log(patchy, MONDAY - timedelta(days=7), AttendanceStatus.ON_TIME)
        await RewardService(db).add_points(steady.id, company.id, 70)

        result = await automation.process_weekly_summary()

        assert result["status"] == AutoTaskStatus.COMPLETED
        weekly = email_service.of_kind("weekly")
        assert [entry[1] for entry in weekly] == [admin.email]
        summary = weekly[0][2]
        assert summary["start_date"] == MONDAY - timedelta(days=6)
        assert summary["end_date"] == MONDAY
        assert summary["total_records"] == 9
        assert summary["attendance_rate"] == round(8 / 14 * 100, 1)
        assert summary["top_performers"][0]["display_name"] == "Steady"

    async def test_company_without_members(self, automation, email_service, admin):
        await automation.process_weekly_summary()

        assert email_service.of_kind("weekly")[0][2]["attendance_rate"] == 0.0

    async def test_failing_company_does_not_stop_others(self, db, automation, email_service, make_company, make_user):
        broken = await make_company(name="Broken Co")
        healthy = await make_company(name="Healthy Co")
        await make_user(broken, role=UserRole.COMPANY_ADMIN)
        healthy_admin = await make_user(healthy, role=UserRole.COMPANY_ADMIN)
        broken_id, healthy_email = broken.id, healthy_admin.email
        email_service.fail_for_company = "Broken Co"

        result = await automation.process_weekly_summary()

        assert result["status"] == AutoTaskStatus.COMPLETED
        assert result["details"] == "Generated weekly summaries for 2 companies (1 failed)"
        assert [entry[1] for entry in email_service.of_kind("weekly")] == [healthy_email]

        tasks = (await db.execute(select(AutoTask).order_by(AutoTask.id))).scalars().all()
        assert [(t.status, t.company_id) for t in tasks] == [
            (AutoTaskStatus.FAILED, broken_id),
            (AutoTaskStatus.COMPLETED, None),
        ]
        assert tasks[0].task_type == AutoTaskType.WEEKLY
        assert "SMTP connection refused" in tasks[0].details
