from pydantic import BaseModel, ConfigDict, field_validator
from typing import Optional
from datetime import date, datetime
from worklogix.models.shared.enums import IssueType, IssueStatus


class AttendanceIssueCreate(BaseModel):
    issue_type: IssueType
    date: date
    requested_login_time: Optional[datetime] = None
    requested_logout_time: Optional[datetime] = None
    explanation: str

    @field_validator('explanation')
    @classmethod
    def validate_explanation(cls, v):
        if not v or len(v.strip()) < 10:
            raise ValueError('Explanation must be at least 10 characters')
        return v.strip()


class AttendanceIssueReview(BaseModel):
    status: IssueStatus
    admin_remarks: Optional[str] = None
    apply_correction: bool = False

    @field_validator('status')
    @classmethod
    def validate_status(cls, v):
        if v == IssueStatus.PENDING:
            raise ValueError('Review status must be approved or rejected')
        return v


class AttendanceIssueResponse(BaseModel):
    id: int
    user_id: int
    company_id: int
    issue_type: IssueType
    date: date
    requested_login_time: Optional[datetime] = None
    requested_logout_time: Optional[datetime] = None
    explanation: str
    status: IssueStatus
    admin_remarks: Optional[str] = None
    reviewed_by: Optional[int] = None
    reviewed_at: Optional[datetime] = None
    created_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)
