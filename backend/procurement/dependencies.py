from typing import Annotated, Optional

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncSession

from procurement.auth.models import Role, User
from procurement.auth.utils import decode_token
from procurement.config import Settings
from procurement.core.exceptions import ForbiddenError, UnauthorizedError

ACCESS_TOKEN_COOKIE = "access_token"
REFRESH_TOKEN_COOKIE = "refresh_token"

security_optional = HTTPBearer(auto_error=False)

EDITOR_ROLES = [Role.ADMIN, Role.ACCOUNTANT]


async def get_db(request: Request) -> AsyncSession:
    async with request.app.state.session_factory() as session:
        yield session


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


def _raw_token(
    request: Request, credentials: Optional[HTTPAuthorizationCredentials]
) -> str | None:
    """Bearer header first, then the session cookie set at login."""
    if credentials is not None:
        return credentials.credentials
    return request.cookies.get(ACCESS_TOKEN_COOKIE)


async def get_optional_user(
    request: Request,
    credentials: Annotated[Optional[HTTPAuthorizationCredentials], Depends(security_optional)],
    db: Annotated[AsyncSession, Depends(get_db)],
    settings: Annotated[Settings, Depends(get_settings)],
) -> User | None:
    raw_token = _raw_token(request, credentials)
    if raw_token is None:
        return None

    token_data = decode_token(raw_token, settings)
    if token_data is None or token_data.type != "access":
        return None

    user = await db.get(User, token_data.sub)
    if user is None or not user.is_active:
        return None
    return user


async def get_current_user(
    request: Request,
    credentials: Annotated[Optional[HTTPAuthorizationCredentials], Depends(security_optional)],
    db: Annotated[AsyncSession, Depends(get_db)],
    settings: Annotated[Settings, Depends(get_settings)],
) -> User:
    if _raw_token(request, credentials) is None:
        raise UnauthorizedError("Authentication required")

    user = await get_optional_user(request, credentials, db, settings)
    if user is None:
        raise UnauthorizedError("Invalid or expired token")
    return user


def require_role(allowed_roles: list[Role]):
    """Dependency factory that checks if the current user has one of the allowed roles."""

    async def check_role(
        current_user: Annotated[User, Depends(get_current_user)],
    ) -> User:
        if current_user.role not in allowed_roles:
            raise ForbiddenError("Insufficient permissions")
        return current_user

    return check_role
