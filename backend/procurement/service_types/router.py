from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from procurement.auth.models import User
from procurement.core.responses import success_response
from procurement.core.validation import parse_uuid_param
from procurement.dependencies import EDITOR_ROLES, get_current_user, get_db, require_role
from procurement.service_types import service
from procurement.service_types.schemas import (
    ServiceTypeCreate,
    ServiceTypeResponse,
    ServiceTypeUpdate,
)

router = APIRouter()


@router.get("")
async def list_service_types(
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(get_current_user)],
    corporation_uuid: str | None = Query(None),
) -> dict:
    scope = parse_uuid_param(corporation_uuid, "Corporation UUID")
    service_types = await service.list_service_types(db, current_user, scope)
    return success_response([ServiceTypeResponse.model_validate(s) for s in service_types])


@router.post("")
async def create_service_type(
    data: ServiceTypeCreate,
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(require_role(EDITOR_ROLES))],
) -> dict:
    service_type = await service.create_service_type(db, current_user, data)
    return success_response(
        ServiceTypeResponse.model_validate(service_type), "Service type created successfully"
    )


@router.get("/{service_type_uuid}")
async def get_service_type(
    service_type_uuid: UUID,
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(get_current_user)],
) -> dict:
    service_type = await service.get_service_type(db, current_user, service_type_uuid)
    return success_response(ServiceTypeResponse.model_validate(service_type))


@router.put("/{service_type_uuid}")
async def update_service_type(
    service_type_uuid: UUID,
    data: ServiceTypeUpdate,
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(require_role(EDITOR_ROLES))],
) -> dict:
    service_type = await service.update_service_type(db, current_user, service_type_uuid, data)
    return success_response(
        ServiceTypeResponse.model_validate(service_type), "Service type updated successfully"
    )


@router.delete("/{service_type_uuid}")
async def delete_service_type(
    service_type_uuid: UUID,
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(require_role(EDITOR_ROLES))],
) -> dict:
    await service.delete_service_type(db, current_user, service_type_uuid)
    return success_response(None, "Service type deleted successfully")
