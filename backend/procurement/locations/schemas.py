from datetime import datetime
from uuid import UUID

from pydantic import BaseModel

from procurement.core.validation import OptionalText, RequestSchema, RequiredText, StrictFlag


class LocationCreate(RequestSchema):
    location_name: RequiredText("Location Name") = None
    address_line1: RequiredText("Address Line 1") = None
    address_line2: OptionalText("Address Line 2", 255) = None
    city: OptionalText("City", 100) = None
    state: OptionalText("State", 100) = None
    zip: OptionalText("Zip", 20) = None
    country: OptionalText("Country", 100) = None
    active: StrictFlag("Active", default=True) = None


class LocationUpdate(LocationCreate):
    active: StrictFlag("Active") = None


class LocationResponse(BaseModel):
    uuid: UUID
    location_name: str
    address_line1: str
    address_line2: str | None
    city: str | None
    state: str | None
    zip: str | None
    country: str | None
    active: bool
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}
