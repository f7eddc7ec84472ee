from typing import List, Optional
from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession
from worklogix.api.dependencies import get_company_id, get_current_active_user, require_admin
from worklogix.core.database import get_async_session
from worklogix.models.auth.user import User
from worklogix.models.shared.enums import IssueStatus
from worklogix.schemas.attendance.attendance_issue_schema import (
    AttendanceIssueCreate,
    AttendanceIssueResponse,
    AttendanceIssueReview,
)
from worklogix.services.attendance.issue_service import AttendanceIssueService

router = APIRouter()


@router.post("/", response_model=AttendanceIssueResponse)
async def create_issue(
    issue: AttendanceIssueCreate,
    session: AsyncSession = Depends(get_async_session),
    current_user: User = Depends(get_current_active_user)
):
    """File an attendance correction request"""
    service = AttendanceIssueService(session)
    return await service.create_issue(current_user, issue)


@router.get("/", response_model=List[AttendanceIssueResponse])
async def get_my_issues(
    session: AsyncSession = Depends(get_async_session),
    current_user: User = Depends(get_current_active_user)
):
    service = AttendanceIssueService(session)
    return await service.list_issues(current_user)


@router.get("/pending", response_model=List[AttendanceIssueResponse])
async def get_pending_issues(
    session: AsyncSession = Depends(get_async_session),
    current_user: User = Depends(require_admin),
    company_id: int = Depends(get_company_id)
):
    service = AttendanceIssueService(session)
    return await service.list_pending(company_id)


@router.get("/company", response_model=List[AttendanceIssueResponse])
async def get_company_issues(
    status: Optional[IssueStatus] = Query(None),
    session: AsyncSession = Depends(get_async_session),
    current_user: User = Depends(require_admin),
    company_id: int = Depends(get_company_id)
):
    """Company issues, optionally filtered by status"""
    service = AttendanceIssueService(session)
    return await service.list_by_status(company_id, status)


@router.patch("/{issue_id}", response_model=AttendanceIssueResponse)
async def review_issue(
    issue_id: int,
    review: AttendanceIssueReview,
    session: AsyncSession = Depends(get_async_session),
    current_user: User = Depends(require_admin)
):
    """Approve or reject an issue, optionally applying the requested times"""
    service = AttendanceIssueService(session)
    return await service.review_issue(issue_id, current_user, review)
