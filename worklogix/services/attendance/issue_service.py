import logging
from datetime import datetime, timezone
from typing import List, Optional
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from worklogix.core.exceptions import NotFoundError, PermissionDeniedError, ValidationError
from worklogix.core.logging import log_user_action
from worklogix.models.attendance.attendance_issue import AttendanceIssue
from worklogix.models.attendance.attendance_log import AttendanceLog
from worklogix.models.auth.user import User
from worklogix.models.organization.company import Company
from worklogix.models.shared.enums import AttendanceStatus, IssueStatus, IssueType, UserRole
from worklogix.schemas.attendance.attendance_issue_schema import AttendanceIssueCreate, AttendanceIssueReview
from worklogix.services.attendance.attendance_service import apply_logout
from worklogix.services.attendance.scoring import ensure_utc

logger = logging.getLogger(__name__)


class AttendanceIssueService:
    """Correction requests filed by members and reviewed by admins"""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def create_issue(self, user: User, issue_data: AttendanceIssueCreate) -> AttendanceIssue:
        if not user.company_id:
            raise ValidationError("User is not assigned to a company")
        if issue_data.issue_type == IssueType.LOGIN_CORRECTION and not issue_data.requested_login_time:
            raise ValidationError("Requested login time is required for a login correction")
        if issue_data.issue_type == IssueType.LOGOUT_CORRECTION and not issue_data.requested_logout_time:
            raise ValidationError("Requested logout time is required for a logout correction")

        issue = AttendanceIssue(
            user_id=user.id,
            company_id=user.company_id,
            issue_type=issue_data.issue_type,
            date=issue_data.date,
            requested_login_time=ensure_utc(issue_data.requested_login_time),
            requested_logout_time=ensure_utc(issue_data.requested_logout_time),
            explanation=issue_data.explanation,
            status=IssueStatus.PENDING,
        )
        self.db.add(issue)
        await self.db.commit()
        await self.db.refresh(issue)

        log_user_action(user.id, "create", "attendance_issue", issue.id)
        return issue

    async def list_issues(self, user: User) -> List[AttendanceIssue]:
        result = await self.db.execute(
            select(AttendanceIssue)
            .where(AttendanceIssue.user_id == user.id, AttendanceIssue.is_deleted == False)
            .order_by(AttendanceIssue.created_at.desc(), AttendanceIssue.id.desc())
        )
        return list(result.scalars().all())

    async def list_by_status(self, company_id: int, status: Optional[IssueStatus] = None) -> List[AttendanceIssue]:
        conditions = [AttendanceIssue.company_id == company_id, AttendanceIssue.is_deleted == False]
        if status:
            conditions.append(AttendanceIssue.status == status)

        result = await self.db.execute(
            select(AttendanceIssue)
            .where(*conditions)
            .order_by(AttendanceIssue.created_at.desc(), AttendanceIssue.id.desc())
        )
        return list(result.scalars().all())

    async def list_pending(self, company_id: int) -> List[AttendanceIssue]:
        return await self.list_by_status(company_id, IssueStatus.PENDING)

    async def review_issue(self, issue_id: int, admin: User, review: AttendanceIssueReview) -> AttendanceIssue:
        issue = await self.db.get(AttendanceIssue, issue_id)
        if not issue or issue.is_deleted:
            raise NotFoundError(f"Attendance issue with ID {issue_id} not found")
        if admin.role != UserRole.SUPER_ADMIN and admin.company_id != issue.company_id:
            raise PermissionDeniedError("You cannot review issues from another company")
        if issue.status != IssueStatus.PENDING:
            raise ValidationError("This issue has already been reviewed")

        try:
            issue.status = review.status
            issue.admin_remarks = review.admin_remarks
            issue.reviewed_by = admin.id
            issue.reviewed_at = datetime.now(timezone.utc)

            if review.status == IssueStatus.APPROVED and review.apply_correction:
                await self._apply_correction(issue)

            await self.db.commit()
            await self.db.refresh(issue)
        except Exception as e:
            await self.db.rollback()
            logger.error(f"Error reviewing attendance issue {issue_id}: {str(e)}")
            raise

        log_user_action(admin.id, review.status.value, "attendance_issue", issue.id)
        return issue

    async def _apply_correction(self, issue: AttendanceIssue) -> AttendanceLog:
        """Write the requested times onto the day's log, creating it when missing"""
        if not issue.requested_login_time and not issue.requested_logout_time:
            raise ValidationError("Issue has no requested times to apply")

        company = await self.db.get(Company, issue.company_id)
        result = await self.db.execute(
            select(AttendanceLog).where(
                AttendanceLog.user_id == issue.user_id,
                AttendanceLog.company_id == issue.company_id,
                AttendanceLog.date == issue.date
            )
        )
        log = result.scalar_one_or_none()
        if log is None:
            log = AttendanceLog(user_id=issue.user_id, company_id=issue.company_id, date=issue.date)
            self.db.add(log)

        if issue.requested_login_time:
            log.login_time = ensure_utc(issue.requested_login_time)
            log.status = AttendanceStatus.PRESENT
            log.is_late = False
            log.late_type = None
            log.late_minutes = 0
        elif log.status is None or log.status == AttendanceStatus.ABSENT:
            log.status = AttendanceStatus.PRESENT

        logout_at = issue.requested_logout_time or log.logout_time
        if logout_at:
            apply_logout(log, company, logout_at)

        log.notes = f"Corrected via attendance issue #{issue.id}"
        return log
