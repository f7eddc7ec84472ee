from sqlalchemy import Column, Integer, ForeignKey, Date, UniqueConstraint
from sqlalchemy.orm import relationship
from worklogix.db.base import BaseModel


class AttendanceReward(BaseModel):
    __tablename__ = 'attendance_rewards'
    __table_args__ = (
        UniqueConstraint('user_id', 'company_id', name='uq_attendance_reward_user_company'),
    )

    user_id = Column(Integer, ForeignKey('users.id'), nullable=False, index=True)
    company_id = Column(Integer, ForeignKey('companies.id'), nullable=False, index=True)
    total_points = Column(Integer, nullable=False, default=0)
    current_streak = Column(Integer, nullable=False, default=0)
    longest_streak = Column(Integer, nullable=False, default=0)
    last_attendance_date = Column(Date, nullable=True)
    monthly_score = Column(Integer, nullable=False, default=0)
    perfect_months = Column(Integer, nullable=False, default=0)

    # Relationships
    user = relationship("User")
