from fastapi import APIRouter, Depends, Query
from typing import Optional
from sqlalchemy.ext.asyncio import AsyncSession
from worklogix.api.dependencies import get_company_id, get_current_active_user, require_admin
from worklogix.core.database import get_async_session
from worklogix.schemas.common.pagination import PaginatedResponse
from worklogix.services.hr.holiday_service import HolidayService
from worklogix.schemas.hr.holiday_schema import HolidayCreate, HolidayUpdate, HolidayResponse
from worklogix.models.auth.user import User

router = APIRouter()


@router.post("/", response_model=HolidayResponse)
async def create_holiday(
    holiday: HolidayCreate,
    session: AsyncSession = Depends(get_async_session),
    current_user: User = Depends(require_admin),
    company_id: int = Depends(get_company_id)
):
    """Create a new holiday"""
    service = HolidayService(session)
    return await service.create_holiday(company_id, holiday, current_user.id)


@router.get("/", response_model=PaginatedResponse[HolidayResponse])
async def get_holidays(
    page_index: int = Query(1, ge=1),
    page_size: int = Query(100, ge=1, le=1000),
    year: Optional[int] = Query(None),
    month: Optional[int] = Query(None, ge=1, le=12),
    is_active: Optional[bool] = Query(None),
    session: AsyncSession = Depends(get_async_session),
    current_user: User = Depends(get_current_active_user),
    company_id: int = Depends(get_company_id)
):
    """Get holidays with filtering and pagination"""
    service = HolidayService(session)
    return await service.get_holidays(
        company_id,
        page_index=page_index,
        page_size=page_size,
        year=year,
        month=month,
        is_active=is_active
    )


@router.get("/{holiday_id}", response_model=HolidayResponse)
async def get_holiday(
    holiday_id: int,
    session: AsyncSession = Depends(get_async_session),
    current_user: User = Depends(get_current_active_user),
    company_id: int = Depends(get_company_id)
):
    """Get a specific holiday by ID"""
    service = HolidayService(session)
    return await service.get_holiday(company_id, holiday_id)


@router.put("/{holiday_id}", response_model=HolidayResponse)
async def update_holiday(
    holiday_id: int,
    holiday: HolidayUpdate,
    session: AsyncSession = Depends(get_async_session),
    current_user: User = Depends(require_admin),
    company_id: int = Depends(get_company_id)
):
    """Update holiday"""
    service = HolidayService(session)
    return await service.update_holiday(company_id, holiday_id, holiday, current_user.id)


@router.delete("/{holiday_id}")
async def delete_holiday(
    holiday_id: int,
    session: AsyncSession = Depends(get_async_session),
    current_user: User = Depends(require_admin),
    company_id: int = Depends(get_company_id)
):
    """Delete holiday"""
    service = HolidayService(session)
    result = await service.delete_holiday(company_id, holiday_id, current_user.id)
    return {"message": "Holiday deleted successfully", "success": result}
