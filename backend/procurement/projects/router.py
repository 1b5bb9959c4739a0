from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from procurement.auth.models import User
from procurement.core.responses import success_response
from procurement.core.validation import parse_uuid_param
from procurement.dependencies import EDITOR_ROLES, get_current_user, get_db, require_role
from procurement.projects import service
from procurement.projects.schemas import ProjectCreate, ProjectResponse, ProjectUpdate

router = APIRouter()


@router.get("")
async def list_projects(
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(get_current_user)],
    corporation_uuid: str | None = Query(None),
) -> dict:
    scope = parse_uuid_param(corporation_uuid, "Corporation UUID")
    projects = await service.list_projects(db, current_user, scope)
    return success_response([ProjectResponse.model_validate(p) for p in projects])


@router.post("")
async def create_project(
    data: ProjectCreate,
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(require_role(EDITOR_ROLES))],
) -> dict:
    project = await service.create_project(db, current_user, data)
    return success_response(ProjectResponse.model_validate(project), "Project created successfully")


@router.get("/{project_uuid}")
async def get_project(
    project_uuid: UUID,
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(get_current_user)],
) -> dict:
    project = await service.get_project(db, current_user, project_uuid)
    return success_response(ProjectResponse.model_validate(project))


@router.put("/{project_uuid}")
async def update_project(
    project_uuid: UUID,
    data: ProjectUpdate,
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(require_role(EDITOR_ROLES))],
) -> dict:
    project = await service.update_project(db, current_user, project_uuid, data)
    return success_response(ProjectResponse.model_validate(project), "Project updated successfully")


@router.delete("/{project_uuid}")
async def delete_project(
    project_uuid: UUID,
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(require_role(EDITOR_ROLES))],
) -> dict:
    project = await service.delete_project(db, current_user, project_uuid)
    return success_response(None, f'Project "{project.project_name}" deleted successfully')
