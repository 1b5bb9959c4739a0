from datetime import datetime
from uuid import UUID

from pydantic import BaseModel

from procurement.core.validation import RequestSchema, RequiredText, StrictFlag


class TermsCreate(RequestSchema):
    name: RequiredText("Name") = None
    content: RequiredText("Content", 100_000) = None
    is_active: StrictFlag("Is Active", default=True) = None


class TermsUpdate(TermsCreate):
    is_active: StrictFlag("Is Active") = None


class TermsResponse(BaseModel):
    uuid: UUID
    name: str
    content: str
    is_active: bool
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}
