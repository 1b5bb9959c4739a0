from datetime import datetime
from uuid import UUID

from pydantic import BaseModel

from procurement.core.enums import RecordStatus
from procurement.core.validation import Choice, RequestSchema, RequiredText, RequiredUUID


class POInstructionCreate(RequestSchema):
    corporation_uuid: RequiredUUID("Corporation UUID") = None
    po_instruction_name: RequiredText("PO Instruction Name") = None
    instruction: RequiredText("Instruction", 10000) = None
    status: Choice(RecordStatus, "Status", default=RecordStatus.ACTIVE) = None


class POInstructionUpdate(RequestSchema):
    po_instruction_name: RequiredText("PO Instruction Name") = None
    instruction: RequiredText("Instruction", 10000) = None
    status: Choice(RecordStatus, "Status") = None


class POInstructionResponse(BaseModel):
    uuid: UUID
    corporation_uuid: UUID
    po_instruction_name: str
    instruction: str
    status: RecordStatus
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}
