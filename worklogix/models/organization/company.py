from sqlalchemy import Column, String, Boolean
from sqlalchemy.orm import relationship
from worklogix.db.base import BaseModel


class Company(BaseModel):
    __tablename__ = 'companies'

    name = Column(String(255), nullable=False)
    email = Column(String(255), nullable=False, unique=True)
    work_start_time = Column(String(5), nullable=False, default="09:00")  # HH:MM
    work_end_time = Column(String(5), nullable=False, default="18:00")  # HH:MM
    is_active = Column(Boolean, default=True)

    # Relationships
    users = relationship("User", back_populates="company")
    holidays = relationship("Holiday", back_populates="company")

    def __repr__(self):
        return f"<Company {self.name}>"
