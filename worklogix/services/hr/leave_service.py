import logging
from typing import List, Optional
from datetime import date, datetime, timezone
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from worklogix.models.auth.user import User
from worklogix.models.hr.leave import Leave
from worklogix.models.shared.enums import LeaveStatus
from worklogix.schemas.hr.leave_schema import LeaveCreate, LeaveReview
from worklogix.core.exceptions import NotFoundError, ValidationError
from worklogix.core.logging import log_user_action

logger = logging.getLogger(__name__)


class LeaveService:
    def __init__(self, db: AsyncSession):
        self.db = db

    async def create_leave(self, user: User, leave_data: LeaveCreate) -> Leave:
        if not user.company_id:
            raise ValidationError("User is not assigned to a company")

        leave = Leave(user_id=user.id, company_id=user.company_id, **leave_data.model_dump())
        self.db.add(leave)
        await self.db.commit()
        await self.db.refresh(leave)

        logger.info(f"Leave requested by user {user.id}: {leave.start_date} to {leave.end_date}")
        return leave

    async def get_leaves(
        self,
        company_id: int,
        user_id: Optional[int] = None,
        status: Optional[LeaveStatus] = None
    ) -> List[Leave]:
        conditions = [Leave.company_id == company_id, Leave.is_deleted == False]
        if user_id:
            conditions.append(Leave.user_id == user_id)
        if status:
            conditions.append(Leave.status == status)

        result = await self.db.execute(
            select(Leave).where(*conditions).order_by(Leave.start_date.desc())
        )
        return list(result.scalars().all())

    async def review_leave(self, company_id: int, leave_id: int, review: LeaveReview, reviewer_id: int) -> Leave:
        result = await self.db.execute(
            select(Leave).where(Leave.id == leave_id, Leave.company_id == company_id)
        )
        leave = result.scalar_one_or_none()
        if not leave:
            raise NotFoundError(f"Leave with ID {leave_id} not found")
        if leave.status != LeaveStatus.PENDING:
            raise ValidationError("Leave request has already been reviewed")

        leave.status = review.status
        leave.reviewed_by = reviewer_id
        leave.reviewed_at = datetime.now(timezone.utc)
        await self.db.commit()
        await self.db.refresh(leave)

        log_user_action(reviewer_id, review.status.value, "leave", leave.id)
        return leave

    async def has_approved_leave(self, user_id: int, company_id: int, day: date) -> bool:
        """Whether an approved leave spans the given day"""
        result = await self.db.execute(
            select(Leave.id).where(
                Leave.user_id == user_id,
                Leave.company_id == company_id,
                Leave.status == LeaveStatus.APPROVED,
                Leave.is_deleted == False,
                Leave.start_date <= day,
                Leave.end_date >= day
            ).limit(1)
        )
        return result.scalar_one_or_none() is not None
