from pydantic import BaseModel, ConfigDict
from typing import Optional
from datetime import datetime
from worklogix.models.shared.enums import AutoTaskType, AutoTaskStatus


class AutoTaskResponse(BaseModel):
    id: int
    task_name: str
    task_type: AutoTaskType
    status: AutoTaskStatus
    details: Optional[str] = None
    company_id: Optional[int] = None
    created_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)


class JobRunResponse(BaseModel):
    task_name: str
    status: AutoTaskStatus
    details: str
