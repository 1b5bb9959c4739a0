from datetime import datetime
from typing import Any
from uuid import UUID

from pydantic import BaseModel

from procurement.core.validation import OptionalText, RequestSchema, RequiredText, RequiredUUID


class AuditLogCreate(RequestSchema):
    corporation_uuid: RequiredUUID("corporation_uuid") = None
    entity_type: RequiredText("entity_type", 100) = None
    entity_id: RequiredText("entity_id", 100) = None
    action: RequiredText("action", 50) = None
    description: OptionalText("description") = None
    changes: dict[str, Any] | None = None


class AuditLogFilter(BaseModel):
    entity_type: str | None = None
    entity_id: str | None = None
    action: str | None = None


class AuditLogResponse(BaseModel):
    uuid: UUID
    corporation_uuid: UUID
    entity_type: str
    entity_id: str
    action: str
    description: str | None
    changes: dict[str, Any] | None
    performed_by: UUID | None
    created_at: datetime

    model_config = {"from_attributes": True}
