from datetime import datetime
from uuid import UUID

from pydantic import BaseModel

from procurement.charges.models import ChargeType
from procurement.core.enums import RecordStatus
from procurement.core.validation import Choice, OptionalUUID, RequestSchema, RequiredText


class ChargeCreate(RequestSchema):
    corporation_uuid: OptionalUUID("Corporation UUID") = None
    charge_name: RequiredText("Charge Name") = None
    charge_type: Choice(ChargeType, "Charge Type") = None
    status: Choice(RecordStatus, "Status", default=RecordStatus.ACTIVE) = None


class ChargeUpdate(RequestSchema):
    charge_name: RequiredText("Charge Name") = None
    charge_type: Choice(ChargeType, "Charge Type") = None
    status: Choice(RecordStatus, "Status") = None


class ChargeResponse(BaseModel):
    uuid: UUID
    corporation_uuid: UUID | None
    charge_name: str
    charge_type: ChargeType
    status: RecordStatus
    created_at: datetime
    updated_at: datetime
    created_by: UUID | None
    updated_by: UUID | None

    model_config = {"from_attributes": True}
