from enum import Enum


class UserRole(str, Enum):
    SUPER_ADMIN = "super_admin"
    COMPANY_ADMIN = "company_admin"
    COMPANY_MEMBER = "company_member"

class AttendanceStatus(str, Enum):
    ON_TIME = "on-time"
    PRESENT = "present"
    SLIGHTLY_LATE = "slightly-late"
    LATE = "late"
    VERY_LATE = "very-late"
    ABSENT = "absent"

class BadgeType(str, Enum):
    STREAK = "streak"
    MONTHLY = "monthly"

class LeaveStatus(str, Enum):
    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"

class LeaveType(str, Enum):
    SICK = "sick"
    CASUAL = "casual"
    ANNUAL = "annual"
    UNPAID = "unpaid"

class IssueType(str, Enum):
    LOGIN_CORRECTION = "login_correction"
    LOGOUT_CORRECTION = "logout_correction"
    LATE_EXPLANATION = "late_explanation"
    OTHER = "other"

class IssueStatus(str, Enum):
    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"

class AutoTaskType(str, Enum):
    DAILY = "daily"
    WEEKLY = "weekly"
    MONTHLY = "monthly"

class AutoTaskStatus(str, Enum):
    COMPLETED = "completed"
    FAILED = "failed"
