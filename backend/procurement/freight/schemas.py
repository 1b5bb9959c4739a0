from datetime import datetime
from uuid import UUID

from pydantic import BaseModel

from procurement.core.validation import OptionalText, RequestSchema, RequiredText, StrictFlag


class ShipViaCreate(RequestSchema):
    ship_via: RequiredText("Ship Via") = None
    description: OptionalText("Description") = None
    active: StrictFlag("Active", default=True) = None


class ShipViaUpdate(ShipViaCreate):
    active: StrictFlag("Active") = None


class ShipViaResponse(BaseModel):
    uuid: UUID
    ship_via: str
    description: str | None
    active: bool
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}
