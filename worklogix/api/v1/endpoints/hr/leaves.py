from fastapi import APIRouter, Depends, Query
from typing import List, Optional
from sqlalchemy.ext.asyncio import AsyncSession
from worklogix.api.dependencies import get_company_id, get_current_active_user, require_admin
from worklogix.core.database import get_async_session
from worklogix.models.auth.user import User
from worklogix.models.shared.enums import LeaveStatus
from worklogix.schemas.hr.leave_schema import LeaveCreate, LeaveResponse, LeaveReview
from worklogix.services.hr.leave_service import LeaveService

router = APIRouter()


@router.post("/", response_model=LeaveResponse)
async def request_leave(
    leave: LeaveCreate,
    session: AsyncSession = Depends(get_async_session),
    current_user: User = Depends(get_current_active_user)
):
    """Request a leave"""
    service = LeaveService(session)
    return await service.create_leave(current_user, leave)


@router.get("/", response_model=List[LeaveResponse])
async def get_leaves(
    status: Optional[LeaveStatus] = Query(None),
    session: AsyncSession = Depends(get_async_session),
    current_user: User = Depends(get_current_active_user),
    company_id: int = Depends(get_company_id)
):
    """Admins see the company's leaves, members their own"""
    service = LeaveService(session)
    user_id = None if current_user.is_admin else current_user.id
    return await service.get_leaves(company_id, user_id=user_id, status=status)


@router.patch("/{leave_id}", response_model=LeaveResponse)
async def review_leave(
    leave_id: int,
    review: LeaveReview,
    session: AsyncSession = Depends(get_async_session),
    current_user: User = Depends(require_admin),
    company_id: int = Depends(get_company_id)
):
    """Approve or reject a leave"""
    service = LeaveService(session)
    return await service.review_leave(company_id, leave_id, review, current_user.id)
