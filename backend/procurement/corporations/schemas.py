from datetime import datetime
from uuid import UUID

from pydantic import BaseModel

from procurement.core.validation import OptionalText, RequestSchema, RequiredText, RequiredUUID, StrictFlag


class CorporationCreate(RequestSchema):
    corporation_name: RequiredText("Corporation Name") = None
    legal_name: OptionalText("Legal Name", 255) = None
    country: OptionalText("Country", 100) = None
    is_active: StrictFlag("Is Active", default=True) = None


class CorporationUpdate(CorporationCreate):
    pass


class MemberAdd(RequestSchema):
    user_id: RequiredUUID("User ID") = None


class CorporationResponse(BaseModel):
    uuid: UUID
    corporation_name: str
    legal_name: str | None
    country: str | None
    is_active: bool
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}
