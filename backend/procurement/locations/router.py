from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from procurement.auth.models import User
from procurement.core.responses import success_response
from procurement.dependencies import EDITOR_ROLES, get_current_user, get_db, require_role
from procurement.locations import service
from procurement.locations.schemas import LocationCreate, LocationResponse, LocationUpdate

router = APIRouter()


@router.get("")
async def list_locations(
    db: Annotated[AsyncSession, Depends(get_db)],
    _: Annotated[User, Depends(get_current_user)],
) -> dict:
    locations = await service.list_locations(db)
    return success_response([LocationResponse.model_validate(loc) for loc in locations])


@router.post("")
async def create_location(
    data: LocationCreate,
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(require_role(EDITOR_ROLES))],
) -> dict:
    location = await service.create_location(db, current_user, data)
    return success_response(LocationResponse.model_validate(location), "Location created successfully")


@router.get("/{location_uuid}")
async def get_location(
    location_uuid: UUID,
    db: Annotated[AsyncSession, Depends(get_db)],
    _: Annotated[User, Depends(get_current_user)],
) -> dict:
    location = await service.get_location(db, location_uuid)
    return success_response(LocationResponse.model_validate(location))


@router.put("/{location_uuid}")
async def update_location(
    location_uuid: UUID,
    data: LocationUpdate,
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(require_role(EDITOR_ROLES))],
) -> dict:
    location = await service.update_location(db, current_user, location_uuid, data)
    return success_response(LocationResponse.model_validate(location), "Location updated successfully")


@router.delete("/{location_uuid}")
async def delete_location(
    location_uuid: UUID,
    db: Annotated[AsyncSession, Depends(get_db)],
    _: Annotated[User, Depends(require_role(EDITOR_ROLES))],
) -> dict:
    await service.delete_location(db, location_uuid)
    return success_response(None, "Location deleted successfully")
