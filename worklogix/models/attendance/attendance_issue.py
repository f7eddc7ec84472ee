from sqlalchemy import Column, Integer, DateTime, Text, ForeignKey, Enum as SQLEnum, Date
from sqlalchemy.orm import relationship
from worklogix.db.base import BaseModel
from worklogix.models.shared.enums import IssueType, IssueStatus


class AttendanceIssue(BaseModel):
    __tablename__ = 'attendance_issues'

    user_id = Column(Integer, ForeignKey('users.id'), nullable=False, index=True)
    company_id = Column(Integer, ForeignKey('companies.id'), nullable=False, index=True)
    issue_type = Column(SQLEnum(IssueType), nullable=False)
    date = Column(Date, nullable=False)
    requested_login_time = Column(DateTime(timezone=True))
    requested_logout_time = Column(DateTime(timezone=True))
    explanation = Column(Text, nullable=False)
    status = Column(SQLEnum(IssueStatus), nullable=False, default=IssueStatus.PENDING)
    admin_remarks = Column(Text)
    reviewed_by = Column(Integer, ForeignKey('users.id'))
    reviewed_at = Column(DateTime(timezone=True))

    # Relationships
    user = relationship("User", foreign_keys=[user_id])
    reviewer = relationship("User", foreign_keys=[reviewed_by])
