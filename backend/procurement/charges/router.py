from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from procurement.auth.models import User
from procurement.charges import service
from procurement.charges.schemas import ChargeCreate, ChargeResponse, ChargeUpdate
from procurement.core.responses import success_response
from procurement.core.validation import parse_uuid_param
from procurement.dependencies import EDITOR_ROLES, get_current_user, get_db, require_role

router = APIRouter()


@router.get("")
async def list_charges(
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(get_current_user)],
    corporation_uuid: str | None = Query(None),
) -> dict:
    scope = parse_uuid_param(corporation_uuid, "Corporation UUID") if corporation_uuid else None
    charges = await service.list_charges(db, current_user, scope)
    return success_response([ChargeResponse.model_validate(c) for c in charges])


@router.post("")
async def create_charge(
    data: ChargeCreate,
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(require_role(EDITOR_ROLES))],
) -> dict:
    charge = await service.create_charge(db, current_user, data)
    return success_response(ChargeResponse.model_validate(charge), "Charge created successfully")


@router.get("/{charge_uuid}")
async def get_charge(
    charge_uuid: UUID,
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(get_current_user)],
) -> dict:
    charge = await service.get_charge(db, current_user, charge_uuid)
    return success_response(ChargeResponse.model_validate(charge))


@router.put("/{charge_uuid}")
async def update_charge(
    charge_uuid: UUID,
    data: ChargeUpdate,
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(require_role(EDITOR_ROLES))],
) -> dict:
    charge = await service.update_charge(db, current_user, charge_uuid, data)
    return success_response(ChargeResponse.model_validate(charge), "Charge updated successfully")


@router.delete("/{charge_uuid}")
async def delete_charge(
    charge_uuid: UUID,
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(require_role(EDITOR_ROLES))],
) -> dict:
    await service.delete_charge(db, current_user, charge_uuid)
    return success_response(None, "Charge deleted successfully")
