"""Application dependencies for dependency injection."""
from dataclasses import dataclass
from typing import Annotated, Optional

from fastapi import Depends
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from tenant_admin.core.database import get_db, get_session_factory
from tenant_admin.core.enums import UserRole
from tenant_admin.core.exceptions import AuthenticationError, AuthorizationError
from tenant_admin.core.logging import get_logger
from tenant_admin.core.security import decode_token


# Missing or non-Bearer headers are reported by get_current_principal, not FastAPI
security = HTTPBearer(auto_error=False)
logger = get_logger(__name__)

READ_ROLES = (UserRole.ADMIN, UserRole.MANAGER, UserRole.VIEWER)
WRITE_ROLES = (UserRole.ADMIN, UserRole.MANAGER)
ADMIN_ROLES = (UserRole.ADMIN,)


@dataclass(frozen=True)
class Principal:
    """The authenticated caller."""
    id: Optional[str]
    role: Optional[str]


async def get_current_principal(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
) -> Principal:
    """Validate the bearer token from the Authorization header."""
    if credentials is None or not credentials.credentials:
        raise AuthenticationError("Access denied. No token provided.")

    payload = decode_token(credentials.credentials)
    if payload is None:
        raise AuthenticationError("Invalid token.")

    return Principal(id=payload.actor_id, role=payload.role)


def require_role(*roles: UserRole):
    """Dependency factory to require one of ``roles``."""
    allowed = {role.value for role in roles}

    async def role_checker(
        principal: Principal = Depends(get_current_principal),
    ) -> Principal:
        if principal.role not in allowed:
            logger.warning(
                f"Role '{principal.role}' not authorized. Required: {sorted(allowed)}",
                extra={"actor_id": principal.id},
            )
            raise AuthorizationError()
        return principal
    return role_checker


# Type aliases for cleaner dependency injection
DbSession = Annotated[AsyncSession, Depends(get_db)]
SessionFactory = Annotated[async_sessionmaker[AsyncSession], Depends(get_session_factory)]
Reader = Annotated[Principal, Depends(require_role(*READ_ROLES))]
Writer = Annotated[Principal, Depends(require_role(*WRITE_ROLES))]
Admin = Annotated[Principal, Depends(require_role(*ADMIN_ROLES))]
