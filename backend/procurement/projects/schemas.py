from datetime import datetime
from uuid import UUID

from pydantic import BaseModel

from procurement.core.validation import (
    OptionalText,
    OptionalUUID,
    RequestSchema,
    RequiredText,
    RequiredUUID,
    StrictFlag,
)


# ---------------------------------------------------------------------------
# Project types
# ---------------------------------------------------------------------------


class ProjectTypeCreate(RequestSchema):
    corporation_uuid: RequiredUUID("Corporation UUID") = None
    name: RequiredText("Name") = None
    short_name: RequiredText("Short Name", 50) = None
    description: OptionalText("Description") = None
    is_active: StrictFlag("Is Active", default=True) = None


class ProjectTypeUpdate(RequestSchema):
    name: RequiredText("Name") = None
    short_name: RequiredText("Short Name", 50) = None
    description: OptionalText("Description") = None
    is_active: StrictFlag("Is Active") = None


class ProjectTypeResponse(BaseModel):
    uuid: UUID
    corporation_uuid: UUID
    name: str
    short_name: str
    description: str | None
    is_active: bool
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}


# ---------------------------------------------------------------------------
# Projects
# ---------------------------------------------------------------------------


class ProjectCreate(RequestSchema):
    corporation_uuid: RequiredUUID("Corporation UUID") = None
    project_name: RequiredText("Project Name") = None
    project_id: RequiredText("Project ID", 100) = None
    project_type_uuid: OptionalUUID("Project Type UUID") = None
    description: OptionalText("Description") = None
    is_active: StrictFlag("Is Active", default=True) = None


class ProjectUpdate(RequestSchema):
    project_name: RequiredText("Project Name") = None
    project_id: RequiredText("Project ID", 100) = None
    project_type_uuid: OptionalUUID("Project Type UUID") = None
    description: OptionalText("Description") = None
    is_active: StrictFlag("Is Active") = None


class ProjectResponse(BaseModel):
    uuid: UUID
    corporation_uuid: UUID
    project_name: str
    project_id: str
    project_type_uuid: UUID | None
    description: str | None
    is_active: bool
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}


# ---------------------------------------------------------------------------
# Item types
# ---------------------------------------------------------------------------


class ItemTypeCreate(RequestSchema):
    corporation_uuid: RequiredUUID("Corporation UUID") = None
    project_uuid: RequiredUUID("Project UUID") = None
    item_type: RequiredText("Item Type") = None
    short_name: RequiredText("Short Name", 50) = None
    description: OptionalText("Description") = None
    is_active: StrictFlag("Is Active", default=True) = None


class ItemTypeUpdate(RequestSchema):
    item_type: RequiredText("Item Type") = None
    short_name: RequiredText("Short Name", 50) = None
    description: OptionalText("Description") = None
    is_active: StrictFlag("Is Active") = None


class ItemTypeUsageCreate(RequestSchema):
    project_uuid: RequiredUUID("Project UUID") = None


class ItemTypeResponse(BaseModel):
    uuid: UUID
    corporation_uuid: UUID
    project_uuid: UUID
    project_name: str | None
    item_type: str
    short_name: str
    description: str | None
    is_active: bool
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}
