from typing import Any, Dict, Optional
from sqlalchemy import func, or_
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select
from datetime import date, timedelta

from worklogix.models.hr.holiday import Holiday
from worklogix.schemas.hr.holiday_schema import HolidayCreate, HolidayUpdate
from worklogix.core.exceptions import NotFoundError, ValidationError
from worklogix.core.logging import logger


class HolidayService:
    def __init__(self, db: AsyncSession):
        self.db = db

    async def create_holiday(self, company_id: int, holiday_data: HolidayCreate, current_user_id: int) -> Holiday:
        """Create a new holiday"""
        try:
            result = await self.db.execute(
                select(Holiday).where(
                    Holiday.company_id == company_id,
                    Holiday.date == holiday_data.date,
                    Holiday.is_active == True
                )
            )
            existing = result.scalars().first()
            if existing:
                raise ValidationError(f"Holiday already exists for {holiday_data.date}")

            holiday = Holiday(company_id=company_id, **holiday_data.model_dump())
            self.db.add(holiday)
            await self.db.commit()
            await self.db.refresh(holiday)

            logger.info(f"Holiday created: {holiday.name} on {holiday.date} by user {current_user_id}")
            return holiday

        except Exception as e:
            await self.db.rollback()
            logger.error(f"Error creating holiday: {str(e)}")
            raise

    async def get_holidays(
        self,
        company_id: int,
        page_index: int = 1,
        page_size: int = 100,
        year: Optional[int] = None,
        month: Optional[int] = None,
        is_active: Optional[bool] = None
    ) -> Dict[str, Any]:
        """Retrieve holidays with pagination and optional filters"""
        conditions = [Holiday.company_id == company_id]

        if is_active is not None:
            conditions.append(Holiday.is_active == is_active)

        if year and month:
            start_date = date(year, month, 1)
            if month == 12:
                end_date = date(year, 12, 31)
            else:
                end_date = date(year, month + 1, 1) - timedelta(days=1)
            conditions.append(Holiday.date >= start_date)
            conditions.append(Holiday.date <= end_date)
        elif year:
            conditions.append(Holiday.date >= date(year, 1, 1))
            conditions.append(Holiday.date <= date(year, 12, 31))

        total_count = await self.db.scalar(
            select(func.count(Holiday.id)).where(*conditions)
        )

        skip = (page_index - 1) * page_size
        holidays = await self.db.scalars(
            select(Holiday)
            .where(*conditions)
            .order_by(Holiday.date.desc())
            .offset(skip)
            .limit(page_size)
        )

        return {
            "page_index": page_index,
            "page_size": page_size,
            "count": total_count or 0,
            "data": holidays.all()
        }

    async def get_holiday(self, company_id: int, holiday_id: int) -> Holiday:
        result = await self.db.execute(
            select(Holiday).where(
                Holiday.id == holiday_id,
                Holiday.company_id == company_id,
                Holiday.is_deleted == False
            )
        )
        holiday = result.scalars().first()
        if not holiday:
            raise NotFoundError(f"Holiday with ID {holiday_id} not found")
        return holiday

    async def update_holiday(self, company_id: int, holiday_id: int, holiday_data: HolidayUpdate, current_user_id: int) -> Holiday:
        """Update a holiday record"""
        holiday = await self.get_holiday(company_id, holiday_id)

        update_data = holiday_data.model_dump(exclude_unset=True)
        for field, value in update_data.items():
            setattr(holiday, field, value)

        await self.db.commit()
        await self.db.refresh(holiday)

        logger.info(f"Holiday updated: {holiday.name} by user {current_user_id}")
        return holiday

    async def delete_holiday(self, company_id: int, holiday_id: int, current_user_id: int) -> bool:
        """Soft delete a holiday"""
        holiday = await self.get_holiday(company_id, holiday_id)

        holiday.is_active = False
        holiday.is_deleted = True
        await self.db.commit()

        logger.info(f"Holiday deleted: {holiday.name} by user {current_user_id}")
        return True

    async def is_holiday(self, company_id: int, day: date) -> bool:
        """Exact-date holidays, plus recurring ones matched on month and day"""
        result = await self.db.execute(
            select(Holiday).where(
                Holiday.company_id == company_id,
                Holiday.is_active == True,
                Holiday.is_deleted == False,
                or_(Holiday.date == day, Holiday.is_recurring == True)
            )
        )
        for holiday in result.scalars().all():
            if holiday.date == day:
                return True
            if holiday.is_recurring and (holiday.date.month, holiday.date.day) == (day.month, day.day):
                return True
        return False
