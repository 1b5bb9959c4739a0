from datetime import datetime
from uuid import UUID

from pydantic import BaseModel

from procurement.core.validation import (
    BoundedNumber,
    OptionalText,
    OptionalUUID,
    RequestSchema,
    RequiredText,
    RequiredUUID,
    StrictFlag,
    WholeNumber,
)


# ---------------------------------------------------------------------------
# Divisions
# ---------------------------------------------------------------------------


class DivisionCreate(RequestSchema):
    corporation_uuid: RequiredUUID("Corporation UUID") = None
    division_number: RequiredText("Division Number", 50) = None
    division_name: RequiredText("Division Name") = None
    division_order: WholeNumber("Division Order", 1, 100) = None
    description: OptionalText("Description") = None
    is_active: StrictFlag("Is Active", default=True) = None
    exclude_in_estimates_and_reports: StrictFlag(
        "Exclude In Estimates And Reports", default=False
    ) = None


class DivisionUpdate(RequestSchema):
    division_number: RequiredText("Division Number", 50) = None
    division_name: RequiredText("Division Name") = None
    division_order: WholeNumber("Division Order", 1, 100) = None
    description: OptionalText("Description") = None
    is_active: StrictFlag("Is Active") = None
    exclude_in_estimates_and_reports: StrictFlag("Exclude In Estimates And Reports") = None


class DivisionResponse(BaseModel):
    uuid: UUID
    corporation_uuid: UUID
    division_number: str
    division_name: str
    division_order: int
    description: str | None
    is_active: bool
    exclude_in_estimates_and_reports: bool
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}


# ---------------------------------------------------------------------------
# Configurations
# ---------------------------------------------------------------------------


class PreferredItemInput(RequestSchema):
    item_name: RequiredText("Item Name") = None
    unit_price: BoundedNumber("Unit Price", 0, default=0.0) = None
    uom_uuid: OptionalUUID("UOM UUID") = None
    description: OptionalText("Description") = None


class ConfigurationCreate(RequestSchema):
    corporation_uuid: RequiredUUID("Corporation UUID") = None
    division_uuid: OptionalUUID("Division UUID") = None
    parent_cost_code_uuid: OptionalUUID("Parent Cost Code UUID") = None
    cost_code_number: RequiredText("Cost Code Number", 50) = None
    cost_code_name: RequiredText("Cost Code Name") = None
    order: WholeNumber("Order", 1, 200, required=False) = None
    description: OptionalText("Description") = None
    is_active: StrictFlag("Is Active", default=True) = None
    preferred_items: list[PreferredItemInput] | None = None


class ConfigurationUpdate(RequestSchema):
    division_uuid: OptionalUUID("Division UUID") = None
    parent_cost_code_uuid: OptionalUUID("Parent Cost Code UUID") = None
    cost_code_number: RequiredText("Cost Code Number", 50) = None
    cost_code_name: RequiredText("Cost Code Name") = None
    order: WholeNumber("Order", 1, 200, required=False) = None
    description: OptionalText("Description") = None
    is_active: StrictFlag("Is Active") = None
    # None keeps the stored items; a list (even empty) replaces them
    preferred_items: list[PreferredItemInput] | None = None


class PreferredItemResponse(BaseModel):
    uuid: UUID
    item_name: str
    unit_price: float
    uom_uuid: UUID | None
    description: str | None

    model_config = {"from_attributes": True}


class ConfigurationResponse(BaseModel):
    uuid: UUID
    corporation_uuid: UUID
    division_uuid: UUID | None
    parent_cost_code_uuid: UUID | None
    cost_code_number: str
    cost_code_name: str
    order: int | None
    description: str | None
    is_active: bool
    preferred_items: list[PreferredItemResponse]
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}
