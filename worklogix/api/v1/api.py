from fastapi import APIRouter
from worklogix.api.v1.endpoints.attendance import attendance, attendance_issues
from worklogix.api.v1.endpoints.hr import holidays, leaves
from worklogix.api.v1.endpoints.system import automation

api_router = APIRouter()

# Attendance routes
api_router.include_router(attendance.router, prefix="/attendance", tags=["Attendance"])
api_router.include_router(attendance_issues.router, prefix="/attendance-issues", tags=["Attendance"])

# HR routes
api_router.include_router(holidays.router, prefix="/hr/holiday", tags=["Human Resource"])
api_router.include_router(leaves.router, prefix="/hr/leave", tags=["Human Resource"])

# System routes
api_router.include_router(automation.router, prefix="/automation", tags=["Automation"])
