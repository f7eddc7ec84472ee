from worklogix.models.organization.company import Company
from worklogix.models.auth.user import User
from worklogix.models.attendance.attendance_log import AttendanceLog
from worklogix.models.attendance.attendance_reward import AttendanceReward
from worklogix.models.attendance.badge import Badge, UserBadge
from worklogix.models.attendance.attendance_issue import AttendanceIssue
from worklogix.models.hr.holiday import Holiday
from worklogix.models.hr.leave import Leave
from worklogix.models.system.auto_task import AutoTask


__all__ = [
    "Company",
    "User",
    "AttendanceLog",
    "AttendanceReward",
    "Badge",
    "UserBadge",
    "AttendanceIssue",
    "Holiday",
    "Leave",
    "AutoTask",
]
