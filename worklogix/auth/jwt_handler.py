from typing import Optional
from datetime import datetime, timedelta, timezone
from jose import JWTError, jwt
from worklogix.core.config import settings


def create_access_token(user_id: int, expires_minutes: Optional[int] = None) -> str:
    """Issue a bearer token for a user"""
    expire = datetime.now(timezone.utc) + timedelta(
        minutes=expires_minutes or settings.ACCESS_TOKEN_EXPIRE_MINUTES
    )
    payload = {
        "sub": str(user_id),
        "type": "access",
        "exp": expire,
    }
    return jwt.encode(payload, settings.SECRET_KEY, algorithm=settings.ALGORITHM)


def decode_access_token(token: str) -> Optional[dict]:
    """Decode and validate access token"""
    try:
        payload = jwt.decode(token, settings.SECRET_KEY, algorithms=[settings.ALGORITHM])
    except JWTError:
        return None

    # Check token type
    if payload.get("type") != "access":
        return None

    return payload
