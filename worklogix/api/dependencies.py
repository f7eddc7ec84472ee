import logging
from fastapi import Depends, HTTPException, status, Request
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from sqlalchemy.ext.asyncio import AsyncSession
from worklogix.core.database import get_async_session
from worklogix.auth.jwt_handler import decode_access_token
from worklogix.models.auth.user import User
from worklogix.models.shared.enums import UserRole
from worklogix.services.auth.user_service import UserService
from worklogix.services.communication.email_service import EmailService

security = HTTPBearer()
logger = logging.getLogger(__name__)


def _unauthorized(detail: str = "Invalid authentication credentials") -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )


async def get_current_user(
    request: Request,
    credentials: HTTPAuthorizationCredentials = Depends(security),
    session: AsyncSession = Depends(get_async_session)
) -> User:
    """Get current authenticated user"""
    payload = decode_access_token(credentials.credentials)
    if payload is None:
        raise _unauthorized()

    try:
        user_id = int(payload.get("sub"))
    except (TypeError, ValueError):
        raise _unauthorized()

    user_service = UserService(session)
    user = await user_service.get_user(user_id)

    if user is None or not user.is_active:
        raise _unauthorized("User not found or inactive")

    # Add request info to context
    request.state.current_user = user
    return user


async def get_current_active_user(
    current_user: User = Depends(get_current_user)
) -> User:
    """Get current active user"""
    if not current_user.is_active:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Inactive user"
        )
    return current_user


def require_roles(*roles: UserRole):
    """
    Dependency to require one of the given roles for an endpoint

    Examples:
        require_roles(UserRole.COMPANY_ADMIN, UserRole.SUPER_ADMIN)
    """
    async def role_dependency(
        current_user: User = Depends(get_current_active_user)
    ) -> User:
        if current_user.role not in roles:
            logger.warning(f"User {current_user.id} with role {current_user.role.value} denied access")
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail="Not enough permissions"
            )
        return current_user

    return role_dependency


require_admin = require_roles(UserRole.COMPANY_ADMIN, UserRole.SUPER_ADMIN)


def get_email_service() -> EmailService:
    return EmailService()


def get_company_id(current_user: User = Depends(get_current_active_user)) -> int:
    """Company the current user acts within"""
    if not current_user.company_id:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="User is not assigned to a company"
        )
    return current_user.company_id
