import logging
from typing import Optional, List
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select
from worklogix.models.auth.user import User
from worklogix.models.shared.enums import UserRole

logger = logging.getLogger(__name__)


class UserService:
    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_user(self, user_id: int) -> Optional[User]:
        """Get user by ID"""
        try:
            result = await self.session.execute(
                select(User).where(
                    User.id == user_id,
                    User.is_deleted == False
                )
            )
            return result.scalar_one_or_none()
        except Exception as e:
            logger.error(f"Error getting user {user_id}: {str(e)}")
            return None

    async def get_active_members(self, company_id: int) -> List[User]:
        """Active company members, the population attendance is tracked for"""
        result = await self.session.execute(
            select(User).where(
                User.company_id == company_id,
                User.role == UserRole.COMPANY_MEMBER,
                User.is_active == True,
                User.is_deleted == False
            ).order_by(User.id)
        )
        return list(result.scalars().all())

    async def get_company_admins(self, company_id: int) -> List[User]:
        result = await self.session.execute(
            select(User).where(
                User.company_id == company_id,
                User.role == UserRole.COMPANY_ADMIN,
                User.is_active == True,
                User.is_deleted == False
            )
        )
        return list(result.scalars().all())
