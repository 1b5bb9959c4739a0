from datetime import datetime
from uuid import UUID

from pydantic import BaseModel

from procurement.core.enums import RecordStatus
from procurement.core.validation import Choice, RequestSchema, RequiredText, RequiredUUID


class UOMCreate(RequestSchema):
    corporation_uuid: RequiredUUID("Corporation UUID") = None
    uom_name: RequiredText("UOM Name", 100) = None
    short_name: RequiredText("Short Name", 20) = None
    status: Choice(RecordStatus, "Status", default=RecordStatus.ACTIVE) = None


class UOMUpdate(RequestSchema):
    uom_name: RequiredText("UOM Name", 100) = None
    short_name: RequiredText("Short Name", 20) = None
    status: Choice(RecordStatus, "Status") = None


class UOMResponse(BaseModel):
    uuid: UUID
    corporation_uuid: UUID
    uom_name: str
    short_name: str
    status: RecordStatus
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}
