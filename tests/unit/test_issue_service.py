from datetime import date, datetime, timezone
from decimal import Decimal

import pytest
from sqlalchemy import select

from worklogix.core.exceptions import PermissionDeniedError, ValidationError
from worklogix.models import AttendanceLog
from worklogix.models.shared.enums import AttendanceStatus, IssueStatus, IssueType, UserRole
from worklogix.schemas.attendance.attendance_issue_schema import AttendanceIssueCreate, AttendanceIssueReview
from worklogix.services.attendance.issue_service import AttendanceIssueService

DAY = date(2026, 3, 10)


def at(hour, minute=0):
    return datetime(DAY.year, DAY.month, DAY.day, hour, minute, tzinfo=timezone.utc)


async def _log_for(db, user):
    result = await db.execute(
        select(AttendanceLog).where(AttendanceLog.user_id == user.id, AttendanceLog.date == DAY)
    )
    return result.scalar_one_or_none()


class TestAttendanceIssues:
    async def test_login_correction_needs_time(self, db, member):
        with pytest.raises(ValidationError):
            await AttendanceIssueService(db).create_issue(member, AttendanceIssueCreate(
                issue_type=IssueType.LOGIN_CORRECTION,
                date=DAY,
                explanation="Badge reader was down this morning",
            ))

    async def test_approved_correction_creates_log(self, db, member, admin):
        service = AttendanceIssueService(db)
        issue = await service.create_issue(member, AttendanceIssueCreate(
            issue_type=IssueType.LOGIN_CORRECTION,
            date=DAY,
            requested_login_time=at(9, 0),
            requested_logout_time=at(18, 0),
            explanation="Forgot to log in while onsite with a client",
        ))

        reviewed = await service.review_issue(issue.id, admin, AttendanceIssueReview(
            status=IssueStatus.APPROVED,
            admin_remarks="Confirmed with the client",
            apply_correction=True,
        ))

        assert reviewed.status == IssueStatus.APPROVED
        assert reviewed.reviewed_by == admin.id
        log = await _log_for(db, member)
        assert log.status == AttendanceStatus.PRESENT
        assert log.total_hours == Decimal("9.00")
        assert log.points_earned == 15

    async def test_correction_overrides_late_login(self, db, member, admin, make_log):
        await make_log(member, DAY, AttendanceStatus.VERY_LATE, login_time=at(11, 0), is_late=True, late_minutes=120)
        service = AttendanceIssueService(db)
        issue = await service.create_issue(member, AttendanceIssueCreate(
            issue_type=IssueType.LOGIN_CORRECTION,
            date=DAY,
            requested_login_time=at(8, 50),
            explanation="Was in the office but the app crashed",
        ))

        await service.review_issue(issue.id, admin, AttendanceIssueReview(status=IssueStatus.APPROVED, apply_correction=True))

        log = await _log_for(db, member)
        assert log.status == AttendanceStatus.PRESENT
        assert log.is_late is False
        assert log.late_minutes == 0
        assert log.logout_time is None

    async def test_rejected_issue_leaves_log_alone(self, db, member, admin):
        service = AttendanceIssueService(db)
        issue = await service.create_issue(member, AttendanceIssueCreate(
            issue_type=IssueType.LOGOUT_CORRECTION,
            date=DAY,
            requested_logout_time=at(18, 0),
            explanation="Logged out from the wrong device",
        ))

        await service.review_issue(issue.id, admin, AttendanceIssueReview(status=IssueStatus.REJECTED, apply_correction=True))

        assert await _log_for(db, member) is None

    async def test_cannot_review_twice(self, db, member, admin):
        service = AttendanceIssueService(db)
        issue = await service.create_issue(member, AttendanceIssueCreate(
            issue_type=IssueType.LATE_EXPLANATION,
            date=DAY,
            explanation="Train delayed by forty minutes",
        ))
        await service.review_issue(issue.id, admin, AttendanceIssueReview(status=IssueStatus.APPROVED))

        with pytest.raises(ValidationError):
            await service.review_issue(issue.id, admin, AttendanceIssueReview(status=IssueStatus.REJECTED))

    async def test_other_company_admin_cannot_review(self, db, member, make_company, make_user):
        rival = await make_user(await make_company(name="Rival Inc"), role=UserRole.COMPANY_ADMIN)
        service = AttendanceIssueService(db)
        issue = await service.create_issue(member, AttendanceIssueCreate(
            issue_type=IssueType.OTHER,
            date=DAY,
            explanation="Something else entirely happened",
        ))

        with pytest.raises(PermissionDeniedError):
            await service.review_issue(issue.id, rival, AttendanceIssueReview(status=IssueStatus.APPROVED))

    async def test_pending_list(self, db, member, admin):
        service = AttendanceIssueService(db)
        first = await service.create_issue(member, AttendanceIssueCreate(
            issue_type=IssueType.OTHER, date=DAY, explanation="First request for review",
        ))
        await service.create_issue(member, AttendanceIssueCreate(
            issue_type=IssueType.OTHER, date=DAY, explanation="Second request for review",
        ))
        await service.review_issue(first.id, admin, AttendanceIssueReview(status=IssueStatus.REJECTED))

        pending = await service.list_pending(member.company_id)
        assert [issue.explanation for issue in pending] == ["Second request for review"]
        assert len(await service.list_issues(member)) == 2
