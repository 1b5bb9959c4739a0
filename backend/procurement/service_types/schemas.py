from datetime import datetime
from uuid import UUID

from pydantic import BaseModel

from procurement.core.validation import (
    OptionalText,
    RequestSchema,
    RequiredText,
    RequiredUUID,
    StrictFlag,
)


class ServiceTypeCreate(RequestSchema):
    corporation_uuid: RequiredUUID("Corporation UUID") = None
    name: RequiredText("Name") = None
    description: OptionalText("Description") = None
    is_active: StrictFlag("Is Active", default=True) = None


class ServiceTypeUpdate(RequestSchema):
    name: RequiredText("Name") = None
    description: OptionalText("Description") = None
    is_active: StrictFlag("Is Active") = None


class ServiceTypeResponse(BaseModel):
    uuid: UUID
    corporation_uuid: UUID
    name: str
    description: str | None
    is_active: bool
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}
