import logging
from typing import Any, Dict, Optional
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from worklogix.models.system.auto_task import AutoTask
from worklogix.models.shared.enums import AutoTaskStatus, AutoTaskType

logger = logging.getLogger(__name__)


class AutoTaskService:
    """Audit trail of scheduled job runs"""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def record(
        self,
        task_name: str,
        task_type: AutoTaskType,
        status: AutoTaskStatus,
        details: str,
        company_id: Optional[int] = None
    ) -> AutoTask:
        auto_task = AutoTask(
            task_name=task_name,
            task_type=task_type,
            status=status,
            details=details,
            company_id=company_id,
        )
        self.db.add(auto_task)
        await self.db.commit()
        await self.db.refresh(auto_task)
        return auto_task

    async def get_auto_tasks(
        self,
        page_index: int = 1,
        page_size: int = 100,
        task_name: Optional[str] = None,
        status: Optional[AutoTaskStatus] = None
    ) -> Dict[str, Any]:
        conditions = []
        if task_name:
            conditions.append(AutoTask.task_name == task_name)
        if status:
            conditions.append(AutoTask.status == status)

        total_count = await self.db.scalar(
            select(func.count(AutoTask.id)).where(*conditions)
        )

        skip = (page_index - 1) * page_size
        tasks = await self.db.scalars(
            select(AutoTask)
            .where(*conditions)
            .order_by(AutoTask.id.desc())
            .offset(skip)
            .limit(page_size)
        )

        return {
            "page_index": page_index,
            "page_size": page_size,
            "count": total_count or 0,
            "data": tasks.all()
        }
