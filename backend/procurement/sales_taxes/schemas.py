from datetime import datetime
from uuid import UUID

from pydantic import BaseModel

from procurement.core.enums import RecordStatus
from procurement.core.validation import (
    BoundedNumber,
    Choice,
    OptionalUUID,
    RequestSchema,
    RequiredText,
)


class SalesTaxCreate(RequestSchema):
    corporation_uuid: OptionalUUID("Corporation UUID") = None
    tax_name: RequiredText("Tax Name") = None
    tax_percentage: BoundedNumber("Tax Percentage", 0, 100) = None
    status: Choice(RecordStatus, "Status", default=RecordStatus.ACTIVE) = None


class SalesTaxUpdate(RequestSchema):
    tax_name: RequiredText("Tax Name") = None
    tax_percentage: BoundedNumber("Tax Percentage", 0, 100) = None
    status: Choice(RecordStatus, "Status") = None


class SalesTaxResponse(BaseModel):
    uuid: UUID
    corporation_uuid: UUID | None
    tax_name: str
    tax_percentage: float
    status: RecordStatus
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}
