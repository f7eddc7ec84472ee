from sqlalchemy import Column, Integer, String, DateTime, Boolean, Text, Numeric, ForeignKey, Enum as SQLEnum, Date, UniqueConstraint
from sqlalchemy.orm import relationship
from worklogix.db.base import BaseModel
from worklogix.models.shared.enums import AttendanceStatus


class AttendanceLog(BaseModel):
    __tablename__ = 'attendance_logs'
    __table_args__ = (
        UniqueConstraint('user_id', 'company_id', 'date', name='uq_attendance_log_user_company_date'),
    )

    user_id = Column(Integer, ForeignKey('users.id'), nullable=False, index=True)
    company_id = Column(Integer, ForeignKey('companies.id'), nullable=False, index=True)
    date = Column(Date, nullable=False, index=True)
    login_time = Column(DateTime(timezone=True))
    logout_time = Column(DateTime(timezone=True))
    status = Column(SQLEnum(AttendanceStatus), nullable=False)
    is_late = Column(Boolean, default=False)
    late_type = Column(String(20))  # slightly-late, late, very-late
    late_minutes = Column(Integer, default=0)
    total_hours = Column(Numeric(5, 2), default=0)
    is_overtime = Column(Boolean, default=False)
    overtime_hours = Column(Numeric(5, 2), default=0)
    points_earned = Column(Integer, default=0)
    report_submitted = Column(Boolean, default=False)
    tasks_completed = Column(Text)
    early_logout_reason = Column(Text)
    auto_logout = Column(Boolean, default=False)
    notes = Column(Text)

    # Relationships
    user = relationship("User")
    company = relationship("Company")

    def __repr__(self):
        return f"<AttendanceLog user={self.user_id} date={self.date} status={self.status}>"
