from __future__ import annotations

import logging
from datetime import datetime, timedelta, timezone
from email.mime.multipart import MIMEMultipart
from email.mime.text import MIMEText
from pathlib import Path

import aiosmtplib
from jinja2 import Environment, FileSystemLoader
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from procurement.auth.models import PasswordResetToken, RefreshToken, Role, User
from procurement.auth.schemas import TokenResponse, UserCreate
from procurement.auth.utils import (
    as_utc,
    create_access_token,
    create_refresh_token,
    decode_token,
    generate_reset_token,
    hash_password,
    hash_token,
    verify_password,
)
from procurement.config import Settings
from procurement.core.db_errors import commit_or_raise
from procurement.core.exceptions import BadRequestError, UnauthorizedError
from procurement.core.urls import build_absolute_url

logger = logging.getLogger(__name__)

_TEMPLATE_DIR = Path(__file__).parent / "templates"
_jinja_env = Environment(
    loader=FileSystemLoader(str(_TEMPLATE_DIR)),
    autoescape=True,
)


async def register_user(
    db: AsyncSession,
    user_data: UserCreate,
) -> User:
    # First user becomes admin
    user_count = await db.scalar(select(func.count()).select_from(User))
    role = Role.ADMIN if user_count == 0 else Role.VIEWER

    user = User(
        email=user_data.email.lower(),
        hashed_password=hash_password(user_data.password),
        full_name=user_data.full_name,
        role=role,
    )
    db.add(user)
    await commit_or_raise(db, already_exists=f"A user with email {user_data.email} already exists")
    await db.refresh(user)
    logger.info("Registered user %s with role %s", user.email, user.role.value)
    return user


async def _issue_tokens(db: AsyncSession, user: User, settings: Settings) -> TokenResponse:
    access_token = create_access_token(user.id, user.role.value, settings)
    refresh_token = create_refresh_token(user.id, settings)

    db.add(
        RefreshToken(
            user_id=user.id,
            token_hash=hash_token(refresh_token),
            expires_at=datetime.now(timezone.utc) + timedelta(days=settings.refresh_token_expire_days),
        )
    )
    await db.commit()
    return TokenResponse(access_token=access_token, refresh_token=refresh_token)


async def authenticate_user(
    db: AsyncSession,
    email: str,
    password: str,
    settings: Settings,
) -> TokenResponse:
    result = await db.execute(select(User).where(User.email == email.lower()))
    user = result.scalar_one_or_none()

    if user is None or not verify_password(password, user.hashed_password):
        raise UnauthorizedError("Invalid email or password")

    if not user.is_active:
        raise UnauthorizedError("Account is deactivated")

    return await _issue_tokens(db, user, settings)


async def refresh_tokens(
    db: AsyncSession,
    refresh_token: str,
    settings: Settings,
) -> TokenResponse:
    token_data = decode_token(refresh_token, settings)
    if token_data is None or token_data.type != "refresh":
        raise UnauthorizedError("Invalid or expired refresh token")

    result = await db.execute(
        select(RefreshToken).where(
            RefreshToken.token_hash == hash_token(refresh_token),
            RefreshToken.revoked.is_(False),
        )
    )
    stored_token = result.scalar_one_or_none()

    if stored_token is None:
        raise UnauthorizedError("Refresh token not found or already revoked")

    if as_utc(stored_token.expires_at) < datetime.now(timezone.utc):
        raise UnauthorizedError("Refresh token has expired")

    stored_token.revoked = True

    user = await db.get(User, token_data.sub)
    if user is None or not user.is_active:
        raise UnauthorizedError("User not found or inactive")

    return await _issue_tokens(db, user, settings)


async def revoke_refresh_token(db: AsyncSession, refresh_token: str) -> None:
    result = await db.execute(
        select(RefreshToken).where(RefreshToken.token_hash == hash_token(refresh_token))
    )
    stored_token = result.scalar_one_or_none()
    if stored_token:
        stored_token.revoked = True
        await db.commit()


# ---------------------------------------------------------------------------
# Password reset
# ---------------------------------------------------------------------------


def build_reset_link(settings: Settings, token: str) -> str:
    return build_absolute_url(settings.app_base_url, "/reset-password", {"token": token})


async def send_password_reset_email(settings: Settings, user: User, reset_link: str) -> None:
    if not settings.smtp_enabled:
        logger.warning("SMTP is not configured; password reset email for %s not sent", user.email)
        return

    html_body = _jinja_env.get_template("password_reset.html").render(
        full_name=user.full_name,
        reset_link=reset_link,
        expire_minutes=settings.password_reset_expire_minutes,
    )
    msg = MIMEMultipart("alternative")
    msg["From"] = f"{settings.smtp_from_name} <{settings.smtp_from_email}>"
    msg["To"] = user.email
    msg["Subject"] = "Reset your password"
    msg.attach(MIMEText(html_body, "html", "utf-8"))

    await aiosmtplib.send(
        msg,
        hostname=settings.smtp_host,
        port=settings.smtp_port,
        username=settings.smtp_username or None,
        password=settings.smtp_password or None,
        start_tls=settings.smtp_use_tls,
    )


async def request_password_reset(db: AsyncSession, email: str, settings: Settings) -> None:
    """Issue a one-time reset token when the account exists.

    The caller always answers 200 so the endpoint cannot be used to probe
    which addresses are registered.
    """
    result = await db.execute(select(User).where(User.email == email.lower()))
    user = result.scalar_one_or_none()
    if user is None or not user.is_active:
        logger.info("Password reset requested for unknown address")
        return

    token = generate_reset_token()
    db.add(
        PasswordResetToken(
            user_id=user.id,
            token_hash=hash_token(token),
            expires_at=datetime.now(timezone.utc)
            + timedelta(minutes=settings.password_reset_expire_minutes),
        )
    )
    await db.commit()

    try:
        await send_password_reset_email(settings, user, build_reset_link(settings, token))
    except aiosmtplib.SMTPException:
        logger.exception("Failed to send password reset email to %s", user.email)


async def reset_password(db: AsyncSession, token: str, new_password: str) -> User:
    result = await db.execute(
        select(PasswordResetToken).where(PasswordResetToken.token_hash == hash_token(token))
    )
    stored = result.scalar_one_or_none()
    if stored is None or stored.used:
        raise BadRequestError("Reset link is invalid or has already been used")
    if as_utc(stored.expires_at) < datetime.now(timezone.utc):
        raise BadRequestError("Reset link has expired")

    user = await db.get(User, stored.user_id)
    if user is None or not user.is_active:
        raise BadRequestError("Reset link is invalid or has already been used")

    user.hashed_password = hash_password(new_password)
    stored.used = True
    await db.commit()
    await db.refresh(user)
    return user
