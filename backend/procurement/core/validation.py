"""Field-level checks shared by every request schema.

Each factory returns a ``BeforeValidator`` callable that either normalises
the raw JSON value or raises ``PydanticCustomError("invalid_field", ...)``
carrying the sentence shown to the user. ``RequestSchema`` validates
defaults, so a field that is absent from the body still reaches its
validator and can report "<Label> is required".
"""

import enum
import math
from decimal import Decimal, InvalidOperation
from typing import Annotated, Any, Callable
from uuid import UUID

from pydantic import BaseModel, BeforeValidator, ConfigDict
from pydantic_core import PydanticCustomError

from procurement.core.exceptions import BadRequestError


class RequestSchema(BaseModel):
    model_config = ConfigDict(validate_default=True, extra="ignore")


def _invalid(message: str) -> PydanticCustomError:
    return PydanticCustomError("invalid_field", message)


def _is_blank(value: Any) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


def _required_text(label: str, max_length: int) -> Callable[[Any], str]:
    def check(value: Any) -> str:
        if _is_blank(value):
            raise _invalid(f"{label} is required")
        if not isinstance(value, str):
            raise _invalid(f"{label} must be a string")
        value = value.strip()
        if len(value) > max_length:
            raise _invalid(f"{label} must be at most {max_length} characters")
        return value

    return check


def _optional_text(label: str, max_length: int | None) -> Callable[[Any], str | None]:
    def check(value: Any) -> str | None:
        if _is_blank(value):
            return None
        if not isinstance(value, str):
            raise _invalid(f"{label} must be a string")
        value = value.strip()
        if max_length is not None and len(value) > max_length:
            raise _invalid(f"{label} must be at most {max_length} characters")
        return value

    return check


def _describe_choices(values: list[str]) -> str:
    if len(values) == 2:
        return f"must be either {values[0]} or {values[1]}"
    return f"must be one of: {', '.join(values)}"


def _choice(enum_cls: type[enum.Enum], label: str, default: enum.Enum | None):
    allowed = [member.value for member in enum_cls]

    def check(value: Any) -> enum.Enum:
        if value is None and default is not None:
            return default
        if _is_blank(value):
            raise _invalid(f"{label} is required")
        if isinstance(value, enum_cls):
            return value
        if value not in allowed:
            raise _invalid(f"{label} {_describe_choices(allowed)}")
        return enum_cls(value)

    return check


def _number(
    label: str, minimum: float, maximum: float | None, default: float | None
) -> Callable[[Any], float]:
    if maximum is None:
        message = f"{label} must be a number greater than or equal to {minimum:g}"
    else:
        message = f"{label} must be a number between {minimum:g} and {maximum:g}"

    def check(value: Any) -> float:
        if _is_blank(value):
            if default is not None:
                return default
            raise _invalid(f"{label} is required")
        if isinstance(value, bool):
            raise _invalid(message)
        if isinstance(value, str):
            try:
                value = Decimal(value.strip())
            except InvalidOperation:
                raise _invalid(message) from None
        if not isinstance(value, (int, float, Decimal)):
            raise _invalid(message)
        try:
            number = float(value)
        except ValueError:
            raise _invalid(message) from None
        if not math.isfinite(number) or number < minimum:
            raise _invalid(message)
        if maximum is not None and number > maximum:
            raise _invalid(message)
        return number

    return check


def _whole_number(label: str, minimum: int, maximum: int, required: bool):
    message = f"{label} must be a whole number between {minimum} and {maximum}"

    def check(value: Any) -> int | None:
        if _is_blank(value):
            if required:
                raise _invalid(f"{label} is required")
            return None
        if isinstance(value, bool):
            raise _invalid(message)
        if isinstance(value, str):
            value = value.strip()
            if "_" in value:
                raise _invalid(message)
            try:
                value = int(value)
            except ValueError:
                raise _invalid(message) from None
        if isinstance(value, float) and value.is_integer():
            value = int(value)
        if not isinstance(value, int) or not minimum <= value <= maximum:
            raise _invalid(message)
        return value

    return check


def _strict_bool(label: str, default: bool | None) -> Callable[[Any], bool]:
    def check(value: Any) -> bool:
        if value is None:
            if default is None:
                raise _invalid(f"{label} is required")
            return default
        if not isinstance(value, bool):
            raise _invalid(f"{label} must be a boolean")
        return value

    return check


def _uuid(label: str, required: bool) -> Callable[[Any], UUID | None]:
    def check(value: Any) -> UUID | None:
        if _is_blank(value):
            if required:
                raise _invalid(f"{label} is required")
            return None
        if isinstance(value, UUID):
            return value
        try:
            return UUID(str(value))
        except ValueError:
            raise _invalid(f"{label} must be a valid UUID") from None

    return check


# ---------------------------------------------------------------------------
# Annotated field types
# ---------------------------------------------------------------------------


def RequiredText(label: str, max_length: int = 255):
    return Annotated[str, BeforeValidator(_required_text(label, max_length))]


def OptionalText(label: str, max_length: int | None = None):
    return Annotated[str | None, BeforeValidator(_optional_text(label, max_length))]


def Choice(enum_cls: type[enum.Enum], label: str, default: enum.Enum | None = None):
    return Annotated[enum_cls, BeforeValidator(_choice(enum_cls, label, default))]


def BoundedNumber(
    label: str, minimum: float, maximum: float | None = None, default: float | None = None
):
    return Annotated[float, BeforeValidator(_number(label, minimum, maximum, default))]


def WholeNumber(label: str, minimum: int, maximum: int, required: bool = True):
    if required:
        return Annotated[int, BeforeValidator(_whole_number(label, minimum, maximum, True))]
    return Annotated[int | None, BeforeValidator(_whole_number(label, minimum, maximum, False))]


def StrictFlag(label: str, default: bool | None = None):
    return Annotated[bool, BeforeValidator(_strict_bool(label, default))]


def RequiredUUID(label: str):
    return Annotated[UUID, BeforeValidator(_uuid(label, True))]


def OptionalUUID(label: str):
    return Annotated[UUID | None, BeforeValidator(_uuid(label, False))]


def parse_uuid_param(value: str | None, label: str) -> UUID:
    """Parse a required UUID query parameter, answering 400 when absent or malformed."""
    if value is None or not value.strip():
        raise BadRequestError(f"{label} is required")
    try:
        return UUID(value.strip())
    except ValueError:
        raise BadRequestError(f"{label} must be a valid UUID") from None
