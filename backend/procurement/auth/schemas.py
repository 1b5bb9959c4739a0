import uuid
from datetime import datetime
from typing import Annotated, Any

from pydantic import BaseModel, BeforeValidator, EmailStr
from pydantic_core import PydanticCustomError

from procurement.auth.models import Role
from procurement.core.validation import Choice, OptionalText, RequestSchema, RequiredText

PASSWORD_MIN_LENGTH = 8
PASSWORD_MAX_LENGTH = 128


def _email(value: Any) -> Any:
    if value is None or (isinstance(value, str) and not value.strip()):
        raise PydanticCustomError("invalid_field", "Email is required")
    return value.strip() if isinstance(value, str) else value


def _password(label: str, required: bool):
    def check(value: Any) -> str | None:
        if value is None or value == "":
            if required:
                raise PydanticCustomError("invalid_field", f"{label} is required")
            return None
        if not isinstance(value, str):
            raise PydanticCustomError("invalid_field", f"{label} must be a string")
        if not PASSWORD_MIN_LENGTH <= len(value) <= PASSWORD_MAX_LENGTH:
            raise PydanticCustomError(
                "invalid_field",
                f"{label} must be between {PASSWORD_MIN_LENGTH} and {PASSWORD_MAX_LENGTH} characters",
            )
        return value

    return check


Email = Annotated[EmailStr, BeforeValidator(_email)]
NewPassword = Annotated[str, BeforeValidator(_password("Password", True))]


def _login_password(value: Any) -> str:
    if not isinstance(value, str) or not value:
        raise PydanticCustomError("invalid_field", "Password is required")
    return value


class UserCreate(RequestSchema):
    email: Email = None
    password: NewPassword = None
    full_name: RequiredText("Full Name") = None


class UserLogin(RequestSchema):
    email: Email = None
    password: Annotated[str, BeforeValidator(_login_password)] = None


class UserResponse(BaseModel):
    id: uuid.UUID
    email: str
    full_name: str
    role: Role
    is_active: bool
    created_at: datetime

    model_config = {"from_attributes": True}


class UserUpdate(RequestSchema):
    full_name: OptionalText("Full Name", 255) = None
    password: Annotated[str | None, BeforeValidator(_password("Password", False))] = None


class UserRoleUpdate(RequestSchema):
    role: Choice(Role, "Role") = None


class TokenResponse(BaseModel):
    access_token: str
    refresh_token: str
    token_type: str = "bearer"


class TokenRefreshRequest(BaseModel):
    refresh_token: str | None = None


class ForgotPasswordRequest(RequestSchema):
    email: Email = None


class ResetPasswordRequest(RequestSchema):
    token: RequiredText("Token", 512) = None
    password: NewPassword = None
