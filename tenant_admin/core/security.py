"""Security utilities for JWT handling."""
from datetime import datetime, timedelta, timezone
from typing import Optional
import uuid

from jose import jwt, JWTError
from pydantic import BaseModel, ValidationError

from tenant_admin.core.config import settings
from tenant_admin.core.logging import get_logger


logger = get_logger(__name__)


class TokenPayload(BaseModel):
    """Claims read from an access token."""
    sub: Optional[str] = None  # actor id
    id: Optional[str] = None  # alternate actor id claim
    role: Optional[str] = None
    exp: Optional[datetime] = None
    iat: Optional[datetime] = None

    class Config:
        extra = "allow"

    @property
    def actor_id(self) -> Optional[str]:
        return self.sub or self.id


def create_access_token(
    subject: str,
    role: str,
    expires_minutes: Optional[int] = None,
) -> str:
    """Create a new access token."""
    now = datetime.now(timezone.utc)
    expire = now + timedelta(minutes=expires_minutes or settings.ACCESS_TOKEN_EXPIRE_MINUTES)

    payload = {
        "sub": subject,
        "role": role,
        "exp": expire,
        "iat": now,
        "jti": str(uuid.uuid4()),
    }

    return jwt.encode(payload, settings.JWT_SECRET_KEY, algorithm=settings.JWT_ALGORITHM)


def decode_token(token: str) -> Optional[TokenPayload]:
    """Decode and validate a token; returns None when it is invalid or expired."""
    try:
        payload = jwt.decode(
            token,
            settings.JWT_SECRET_KEY,
            algorithms=[settings.JWT_ALGORITHM],
            options={"verify_aud": False},
        )
        return TokenPayload(**payload)
    except (JWTError, ValidationError) as e:
        logger.warning(f"Token decode error: {e}")
        return None
