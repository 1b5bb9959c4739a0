from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from procurement.auth.models import User
from procurement.core.responses import success_response
from procurement.core.validation import parse_uuid_param
from procurement.dependencies import EDITOR_ROLES, get_current_user, get_db, require_role
from procurement.projects import type_service
from procurement.projects.schemas import (
    ProjectTypeCreate,
    ProjectTypeResponse,
    ProjectTypeUpdate,
)

router = APIRouter()


@router.get("")
async def list_project_types(
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(get_current_user)],
    corporation_uuid: str | None = Query(None),
) -> dict:
    scope = parse_uuid_param(corporation_uuid, "Corporation UUID")
    project_types = await type_service.list_project_types(db, current_user, scope)
    return success_response([ProjectTypeResponse.model_validate(t) for t in project_types])


@router.post("")
async def create_project_type(
    data: ProjectTypeCreate,
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(require_role(EDITOR_ROLES))],
) -> dict:
    project_type = await type_service.create_project_type(db, current_user, data)
    return success_response(
        ProjectTypeResponse.model_validate(project_type), "Project type created successfully"
    )


@router.get("/{project_type_uuid}")
async def get_project_type(
    project_type_uuid: UUID,
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(get_current_user)],
) -> dict:
    project_type = await type_service.get_project_type(db, current_user, project_type_uuid)
    return success_response(ProjectTypeResponse.model_validate(project_type))


@router.put("/{project_type_uuid}")
async def update_project_type(
    project_type_uuid: UUID,
    data: ProjectTypeUpdate,
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(require_role(EDITOR_ROLES))],
) -> dict:
    project_type = await type_service.update_project_type(db, current_user, project_type_uuid, data)
    return success_response(
        ProjectTypeResponse.model_validate(project_type), "Project type updated successfully"
    )


@router.delete("/{project_type_uuid}")
async def delete_project_type(
    project_type_uuid: UUID,
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(require_role(EDITOR_ROLES))],
) -> dict:
    project_type = await type_service.delete_project_type(db, current_user, project_type_uuid)
    return success_response(None, f'Project type "{project_type.name}" deleted successfully')
