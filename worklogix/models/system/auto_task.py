from sqlalchemy import Column, Integer, String, Text, ForeignKey, Enum as SQLEnum
from worklogix.db.base import BaseModel
from worklogix.models.shared.enums import AutoTaskType, AutoTaskStatus


class AutoTask(BaseModel):
    """Audit row for one batch job run (or one company's failure within a run)"""
    __tablename__ = 'auto_tasks'

    task_name = Column(String(100), nullable=False)
    task_type = Column(SQLEnum(AutoTaskType), nullable=False)
    status = Column(SQLEnum(AutoTaskStatus), nullable=False)
    details = Column(Text)
    company_id = Column(Integer, ForeignKey('companies.id'), nullable=True)

    def __repr__(self):
        return f"<AutoTask {self.task_name} {self.status}>"
