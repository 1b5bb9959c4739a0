from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from procurement.auth.models import User
from procurement.core.responses import success_response
from procurement.dependencies import EDITOR_ROLES, get_current_user, get_db, require_role
from procurement.freight import service
from procurement.freight.schemas import ShipViaCreate, ShipViaResponse, ShipViaUpdate

router = APIRouter()


@router.get("")
async def list_ship_via(
    db: Annotated[AsyncSession, Depends(get_db)],
    _: Annotated[User, Depends(get_current_user)],
) -> dict:
    records = await service.list_ship_via(db)
    return success_response([ShipViaResponse.model_validate(r) for r in records])


@router.post("")
async def create_ship_via(
    data: ShipViaCreate,
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(require_role(EDITOR_ROLES))],
) -> dict:
    record = await service.create_ship_via(db, current_user, data)
    return success_response(ShipViaResponse.model_validate(record), "Ship via created successfully")


@router.get("/{ship_via_uuid}")
async def get_ship_via(
    ship_via_uuid: UUID,
    db: Annotated[AsyncSession, Depends(get_db)],
    _: Annotated[User, Depends(get_current_user)],
) -> dict:
    record = await service.get_ship_via(db, ship_via_uuid)
    return success_response(ShipViaResponse.model_validate(record))


@router.put("/{ship_via_uuid}")
async def update_ship_via(
    ship_via_uuid: UUID,
    data: ShipViaUpdate,
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(require_role(EDITOR_ROLES))],
) -> dict:
    record = await service.update_ship_via(db, current_user, ship_via_uuid, data)
    return success_response(ShipViaResponse.model_validate(record), "Ship via updated successfully")


@router.delete("/{ship_via_uuid}")
async def delete_ship_via(
    ship_via_uuid: UUID,
    db: Annotated[AsyncSession, Depends(get_db)],
    _: Annotated[User, Depends(require_role(EDITOR_ROLES))],
) -> dict:
    record = await service.delete_ship_via(db, ship_via_uuid)
    return success_response(None, f'Ship via "{record.ship_via}" deleted successfully')
