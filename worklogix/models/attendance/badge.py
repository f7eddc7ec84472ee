from sqlalchemy import Column, Integer, String, Text, ForeignKey, Enum as SQLEnum, Date, UniqueConstraint
from sqlalchemy.orm import relationship
from worklogix.db.base import BaseModel
from worklogix.models.shared.enums import BadgeType


class Badge(BaseModel):
    __tablename__ = 'badges'

    name = Column(String(100), unique=True, nullable=False)
    description = Column(Text, nullable=False)
    icon = Column(String(20))
    criteria = Column(Text)
    badge_type = Column(SQLEnum(BadgeType), nullable=False)

    def __repr__(self):
        return f"<Badge {self.name}>"


class UserBadge(BaseModel):
    __tablename__ = 'user_badges'
    __table_args__ = (
        UniqueConstraint('user_id', 'company_id', 'badge_id', 'awarded_on', name='uq_user_badge_award'),
    )

    user_id = Column(Integer, ForeignKey('users.id'), nullable=False, index=True)
    company_id = Column(Integer, ForeignKey('companies.id'), nullable=False)
    badge_id = Column(Integer, ForeignKey('badges.id'), nullable=False)
    awarded_on = Column(Date, nullable=False)

    # Relationships
    badge = relationship("Badge")
