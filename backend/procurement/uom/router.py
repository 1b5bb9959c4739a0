from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from procurement.auth.models import User
from procurement.core.responses import success_response
from procurement.core.validation import parse_uuid_param
from procurement.dependencies import EDITOR_ROLES, get_current_user, get_db, require_role
from procurement.uom import service
from procurement.uom.schemas import UOMCreate, UOMResponse, UOMUpdate

router = APIRouter()


@router.get("")
async def list_uoms(
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(get_current_user)],
    corporation_uuid: str | None = Query(None),
) -> dict:
    scope = parse_uuid_param(corporation_uuid, "Corporation UUID")
    uoms = await service.list_uoms(db, current_user, scope)
    return success_response([UOMResponse.model_validate(u) for u in uoms])


@router.post("")
async def create_uom(
    data: UOMCreate,
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(require_role(EDITOR_ROLES))],
) -> dict:
    uom = await service.create_uom(db, current_user, data)
    return success_response(UOMResponse.model_validate(uom), "UOM created successfully")


@router.get("/{uom_uuid}")
async def get_uom(
    uom_uuid: UUID,
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(get_current_user)],
) -> dict:
    uom = await service.get_uom(db, current_user, uom_uuid)
    return success_response(UOMResponse.model_validate(uom))


@router.put("/{uom_uuid}")
async def update_uom(
    uom_uuid: UUID,
    data: UOMUpdate,
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(require_role(EDITOR_ROLES))],
) -> dict:
    uom = await service.update_uom(db, current_user, uom_uuid, data)
    return success_response(UOMResponse.model_validate(uom), "UOM updated successfully")


@router.delete("/{uom_uuid}")
async def delete_uom(
    uom_uuid: UUID,
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(require_role(EDITOR_ROLES))],
) -> dict:
    await service.delete_uom(db, current_user, uom_uuid)
    return success_response(None, "UOM deleted successfully")
