from pydantic import BaseModel, ConfigDict
from typing import List, Optional
from datetime import date, datetime
from decimal import Decimal
from worklogix.models.shared.enums import AttendanceStatus
from worklogix.schemas.hr.leave_schema import LeaveResponse


class LogoutRequest(BaseModel):
    early_logout_reason: Optional[str] = None


class WorkReportCreate(BaseModel):
    tasks_completed: str
    notes: Optional[str] = None


class UserInfo(BaseModel):
    id: int
    display_name: str
    photo_url: Optional[str] = None

    model_config = ConfigDict(from_attributes=True)


class AttendanceLogResponse(BaseModel):
    id: int
    user_id: int
    company_id: int
    date: date
    login_time: Optional[datetime] = None
    logout_time: Optional[datetime] = None
    status: AttendanceStatus
    is_late: Optional[bool] = None
    late_type: Optional[str] = None
    late_minutes: Optional[int] = None
    total_hours: Optional[Decimal] = None
    is_overtime: Optional[bool] = None
    overtime_hours: Optional[Decimal] = None
    points_earned: Optional[int] = None
    report_submitted: Optional[bool] = None
    early_logout_reason: Optional[str] = None
    auto_logout: Optional[bool] = None
    notes: Optional[str] = None

    model_config = ConfigDict(from_attributes=True)


class CompanyAttendanceLogResponse(AttendanceLogResponse):
    user: UserInfo


class AttendanceRewardResponse(BaseModel):
    user_id: int
    company_id: int
    total_points: int
    current_streak: int
    longest_streak: int
    last_attendance_date: Optional[date] = None
    monthly_score: int
    perfect_months: int
    badges_earned: List[str] = []


class MonthlyReport(BaseModel):
    month: int
    year: int
    total_days: int
    present_days: int
    absent_days: int
    late_days: int
    overtime_days: int
    average_hours: float
    total_points: int


class AttendanceStats(BaseModel):
    date: date
    total_employees: int
    present_today: int
    late_today: int
    absent_today: int
    on_time_percentage: float


class TopPerformer(BaseModel):
    user_id: int
    display_name: str
    photo_url: Optional[str] = None
    total_points: int
    current_streak: int
    longest_streak: int
    badges_earned: List[str] = []


class BadgeResponse(BaseModel):
    name: str
    description: str
    icon: Optional[str] = None
    criteria: Optional[str] = None
    badge_type: str

    model_config = ConfigDict(from_attributes=True)


class EmployeeAttendanceProfile(BaseModel):
    employee: UserInfo
    attendance_logs: List[AttendanceLogResponse]
    rewards: Optional[AttendanceRewardResponse] = None
    monthly_report: MonthlyReport
    leaves: List[LeaveResponse]
