import uuid
from typing import Annotated

from fastapi import APIRouter, Depends, Request, Response
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from procurement.auth import service
from procurement.auth.models import Role, User
from procurement.auth.schemas import (
    ForgotPasswordRequest,
    ResetPasswordRequest,
    TokenRefreshRequest,
    TokenResponse,
    UserCreate,
    UserLogin,
    UserResponse,
    UserRoleUpdate,
    UserUpdate,
)
from procurement.auth.utils import hash_password
from procurement.config import Settings
from procurement.core.exceptions import NotFoundError, UnauthorizedError
from procurement.core.responses import success_response
from procurement.dependencies import (
    ACCESS_TOKEN_COOKIE,
    REFRESH_TOKEN_COOKIE,
    get_current_user,
    get_db,
    get_optional_user,
    get_settings,
    require_role,
)

router = APIRouter()


def _set_session_cookies(response: Response, tokens: TokenResponse, settings: Settings) -> None:
    response.set_cookie(
        ACCESS_TOKEN_COOKIE,
        tokens.access_token,
        max_age=settings.access_token_expire_minutes * 60,
        httponly=True,
        secure=settings.auth_cookie_secure,
        samesite="lax",
    )
    response.set_cookie(
        REFRESH_TOKEN_COOKIE,
        tokens.refresh_token,
        max_age=settings.refresh_token_expire_days * 86400,
        httponly=True,
        secure=settings.auth_cookie_secure,
        samesite="lax",
    )


def _clear_session_cookies(response: Response) -> None:
    response.delete_cookie(ACCESS_TOKEN_COOKIE)
    response.delete_cookie(REFRESH_TOKEN_COOKIE)


@router.post("/register", status_code=201)
async def register(
    user_data: UserCreate,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> dict:
    user = await service.register_user(db, user_data)
    return success_response(UserResponse.model_validate(user), "Account created")


@router.post("/login")
async def login(
    credentials: UserLogin,
    response: Response,
    db: Annotated[AsyncSession, Depends(get_db)],
    settings: Annotated[Settings, Depends(get_settings)],
) -> dict:
    tokens = await service.authenticate_user(db, credentials.email, credentials.password, settings)
    _set_session_cookies(response, tokens, settings)
    return success_response(tokens)


@router.post("/refresh")
async def refresh(
    request: Request,
    response: Response,
    db: Annotated[AsyncSession, Depends(get_db)],
    settings: Annotated[Settings, Depends(get_settings)],
    body: TokenRefreshRequest | None = None,
) -> dict:
    refresh_token = (body.refresh_token if body else None) or request.cookies.get(REFRESH_TOKEN_COOKIE)
    if not refresh_token:
        raise UnauthorizedError("Refresh token is required")
    tokens = await service.refresh_tokens(db, refresh_token, settings)
    _set_session_cookies(response, tokens, settings)
    return success_response(tokens)


@router.post("/logout")
async def logout(
    request: Request,
    response: Response,
    db: Annotated[AsyncSession, Depends(get_db)],
    _: Annotated[User, Depends(get_current_user)],
    body: TokenRefreshRequest | None = None,
) -> dict:
    refresh_token = (body.refresh_token if body else None) or request.cookies.get(REFRESH_TOKEN_COOKIE)
    if refresh_token:
        await service.revoke_refresh_token(db, refresh_token)
    _clear_session_cookies(response)
    return success_response(None, "Logged out successfully")


@router.get("/session")
async def get_session(
    user: Annotated[User | None, Depends(get_optional_user)],
) -> dict:
    """Restore the session from the bearer header or cookies; never fails with 401."""
    return success_response({"user": UserResponse.model_validate(user) if user else None})


@router.get("/me")
async def get_me(
    current_user: Annotated[User, Depends(get_current_user)],
) -> dict:
    return success_response(UserResponse.model_validate(current_user))


@router.put("/me")
async def update_me(
    updates: UserUpdate,
    current_user: Annotated[User, Depends(get_current_user)],
    db: Annotated[AsyncSession, Depends(get_db)],
) -> dict:
    if updates.full_name is not None:
        current_user.full_name = updates.full_name
    if updates.password is not None:
        current_user.hashed_password = hash_password(updates.password)
    await db.commit()
    await db.refresh(current_user)
    return success_response(UserResponse.model_validate(current_user), "Profile updated")


@router.post("/forgot-password")
async def forgot_password(
    body: ForgotPasswordRequest,
    db: Annotated[AsyncSession, Depends(get_db)],
    settings: Annotated[Settings, Depends(get_settings)],
) -> dict:
    await service.request_password_reset(db, body.email, settings)
    return success_response(
        None, "If an account exists for that email, a reset link has been sent"
    )


@router.post("/reset-password")
async def reset_password(
    body: ResetPasswordRequest,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> dict:
    await service.reset_password(db, body.token, body.password)
    return success_response(None, "Password has been reset")


@router.get("/users")
async def list_users(
    _: Annotated[User, Depends(require_role([Role.ADMIN]))],
    db: Annotated[AsyncSession, Depends(get_db)],
) -> dict:
    result = await db.execute(select(User).order_by(User.created_at))
    users = result.scalars().all()
    return success_response([UserResponse.model_validate(u) for u in users])


@router.put("/users/{user_id}/role")
async def update_user_role(
    user_id: uuid.UUID,
    body: UserRoleUpdate,
    _: Annotated[User, Depends(require_role([Role.ADMIN]))],
    db: Annotated[AsyncSession, Depends(get_db)],
) -> dict:
    user = await db.get(User, user_id)
    if user is None:
        raise NotFoundError("User", str(user_id))
    user.role = body.role
    await db.commit()
    await db.refresh(user)
    return success_response(UserResponse.model_validate(user), "Role updated")
