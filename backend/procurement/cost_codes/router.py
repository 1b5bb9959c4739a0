from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from procurement.auth.models import User
from procurement.core.responses import success_response
from procurement.core.validation import parse_uuid_param
from procurement.cost_codes import service
from procurement.cost_codes.schemas import (
    ConfigurationCreate,
    ConfigurationResponse,
    ConfigurationUpdate,
)
from procurement.dependencies import EDITOR_ROLES, get_current_user, get_db, require_role

router = APIRouter()


@router.get("")
async def list_configurations(
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(get_current_user)],
    corporation_uuid: str | None = Query(None),
) -> dict:
    scope = parse_uuid_param(corporation_uuid, "Corporation UUID")
    configs = await service.list_configurations(db, current_user, scope)
    return success_response([ConfigurationResponse.model_validate(c) for c in configs])


@router.post("")
async def create_configuration(
    data: ConfigurationCreate,
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(require_role(EDITOR_ROLES))],
) -> dict:
    config = await service.create_configuration(db, current_user, data)
    return success_response(
        ConfigurationResponse.model_validate(config), "Cost code configuration created successfully"
    )


@router.get("/{config_uuid}")
async def get_configuration(
    config_uuid: UUID,
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(get_current_user)],
) -> dict:
    config = await service.get_configuration(db, current_user, config_uuid)
    return success_response(ConfigurationResponse.model_validate(config))


@router.put("/{config_uuid}")
async def update_configuration(
    config_uuid: UUID,
    data: ConfigurationUpdate,
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(require_role(EDITOR_ROLES))],
) -> dict:
    config = await service.update_configuration(db, current_user, config_uuid, data)
    return success_response(
        ConfigurationResponse.model_validate(config), "Cost code configuration updated successfully"
    )


@router.delete("/{config_uuid}")
async def delete_configuration(
    config_uuid: UUID,
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(require_role(EDITOR_ROLES))],
) -> dict:
    config = await service.delete_configuration(db, current_user, config_uuid)
    return success_response(
        None, f'Cost code "{config.cost_code_number}" deleted successfully'
    )
