from pydantic import BaseModel, ConfigDict, field_validator, model_validator
from typing import Optional
from datetime import date
from worklogix.models.shared.enums import LeaveStatus, LeaveType


class LeaveCreate(BaseModel):
    leave_type: LeaveType = LeaveType.CASUAL
    start_date: date
    end_date: date
    reason: Optional[str] = None

    @model_validator(mode='after')
    def validate_range(self):
        if self.end_date < self.start_date:
            raise ValueError('End date cannot be before start date')
        return self


class LeaveReview(BaseModel):
    status: LeaveStatus

    @field_validator('status')
    @classmethod
    def validate_status(cls, v):
        if v == LeaveStatus.PENDING:
            raise ValueError('Review status must be approved or rejected')
        return v


class LeaveResponse(BaseModel):
    id: int
    user_id: int
    leave_type: LeaveType
    start_date: date
    end_date: date
    status: LeaveStatus
    reason: Optional[str] = None

    model_config = ConfigDict(from_attributes=True)
