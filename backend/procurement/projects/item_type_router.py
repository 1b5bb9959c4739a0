from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from procurement.auth.models import User
from procurement.core.responses import success_response
from procurement.core.validation import parse_uuid_param
from procurement.dependencies import EDITOR_ROLES, get_current_user, get_db, require_role
from procurement.projects import item_type_service
from procurement.projects.schemas import (
    ItemTypeCreate,
    ItemTypeResponse,
    ItemTypeUpdate,
    ItemTypeUsageCreate,
)

router = APIRouter()


@router.get("")
async def list_item_types(
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(get_current_user)],
    corporation_uuid: str | None = Query(None),
    project_uuid: str | None = Query(None),
) -> dict:
    scope = parse_uuid_param(corporation_uuid, "Corporation UUID")
    project = parse_uuid_param(project_uuid, "Project UUID") if project_uuid else None
    item_types = await item_type_service.list_item_types(db, current_user, scope, project)
    return success_response([ItemTypeResponse.model_validate(i) for i in item_types])


@router.post("")
async def create_item_type(
    data: ItemTypeCreate,
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(require_role(EDITOR_ROLES))],
) -> dict:
    item_type = await item_type_service.create_item_type(db, current_user, data)
    return success_response(
        ItemTypeResponse.model_validate(item_type), "Item type created successfully"
    )


@router.get("/{item_type_uuid}")
async def get_item_type(
    item_type_uuid: UUID,
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(get_current_user)],
) -> dict:
    item_type = await item_type_service.get_item_type(db, current_user, item_type_uuid)
    return success_response(ItemTypeResponse.model_validate(item_type))


@router.put("/{item_type_uuid}")
async def update_item_type(
    item_type_uuid: UUID,
    data: ItemTypeUpdate,
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(require_role(EDITOR_ROLES))],
) -> dict:
    item_type = await item_type_service.update_item_type(db, current_user, item_type_uuid, data)
    return success_response(
        ItemTypeResponse.model_validate(item_type), "Item type updated successfully"
    )


@router.post("/{item_type_uuid}/usage")
async def record_item_type_usage(
    item_type_uuid: UUID,
    body: ItemTypeUsageCreate,
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(require_role(EDITOR_ROLES))],
) -> dict:
    item_type = await item_type_service.record_usage(
        db, current_user, item_type_uuid, body.project_uuid
    )
    return success_response(ItemTypeResponse.model_validate(item_type), "Item type usage recorded")


@router.delete("/{item_type_uuid}")
async def delete_item_type(
    item_type_uuid: UUID,
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(require_role(EDITOR_ROLES))],
) -> dict:
    item_type = await item_type_service.delete_item_type(db, current_user, item_type_uuid)
    return success_response(
        None,
        f'Item type "{item_type.item_type}" ({item_type.short_name}) has been deleted successfully',
    )
