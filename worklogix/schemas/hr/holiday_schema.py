from pydantic import BaseModel, ConfigDict, field_validator
from typing import Optional
import datetime as dt


class HolidayBase(BaseModel):
    name: str
    date: dt.date
    description: Optional[str] = None
    is_recurring: bool = False


class HolidayCreate(HolidayBase):
    @field_validator('name')
    @classmethod
    def validate_name(cls, v):
        if not v or len(v.strip()) < 2:
            raise ValueError('Holiday name must be at least 2 characters')
        return v.strip()


class HolidayUpdate(BaseModel):
    name: Optional[str] = None
    date: Optional[dt.date] = None
    description: Optional[str] = None
    is_recurring: Optional[bool] = None
    is_active: Optional[bool] = None


class HolidayResponse(HolidayBase):
    id: int
    company_id: int
    is_active: bool
    created_at: Optional[dt.datetime] = None
    updated_at: Optional[dt.datetime] = None

    model_config = ConfigDict(from_attributes=True)
