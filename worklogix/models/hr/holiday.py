from sqlalchemy import Column, Integer, String, Boolean, Text, ForeignKey, Date
from sqlalchemy.orm import relationship
from worklogix.db.base import BaseModel


class Holiday(BaseModel):
    __tablename__ = 'holidays'

    company_id = Column(Integer, ForeignKey('companies.id'), nullable=False, index=True)
    name = Column(String(100), nullable=False)
    date = Column(Date, nullable=False)
    description = Column(Text)
    is_recurring = Column(Boolean, default=False)
    is_active = Column(Boolean, default=True)

    # Relationships
    company = relationship("Company", back_populates="holidays")
