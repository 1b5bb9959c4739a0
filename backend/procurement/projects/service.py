from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from procurement.auth.models import User
from procurement.core.db_errors import commit_or_raise
from procurement.core.exceptions import BadRequestError, NotFoundError
from procurement.corporations.service import ensure_corporation_access
from procurement.projects.models import Project, ProjectType
from procurement.projects.schemas import ProjectCreate, ProjectUpdate

_DUPLICATE = "A project with this project ID already exists"


async def _check_project_type(
    db: AsyncSession, corporation_uuid: UUID, project_type_uuid: UUID | None
) -> None:
    if project_type_uuid is None:
        return
    project_type = await db.get(ProjectType, project_type_uuid)
    if project_type is None or project_type.corporation_uuid != corporation_uuid:
        raise BadRequestError(
            "Project type not found or does not belong to the specified corporation"
        )


async def list_projects(db: AsyncSession, user: User, corporation_uuid: UUID) -> list[Project]:
    await ensure_corporation_access(db, user, corporation_uuid)
    result = await db.execute(
        select(Project)
        .where(Project.corporation_uuid == corporation_uuid)
        .order_by(Project.created_at.desc())
    )
    return list(result.scalars().all())


async def get_project(db: AsyncSession, user: User, project_uuid: UUID) -> Project:
    project = await db.get(Project, project_uuid)
    if project is None:
        raise NotFoundError("Project", str(project_uuid))
    await ensure_corporation_access(db, user, project.corporation_uuid)
    return project


async def create_project(db: AsyncSession, user: User, data: ProjectCreate) -> Project:
    await ensure_corporation_access(db, user, data.corporation_uuid)
    await _check_project_type(db, data.corporation_uuid, data.project_type_uuid)
    project = Project(**data.model_dump(), created_by=user.id, updated_by=user.id)
    db.add(project)
    await commit_or_raise(db, already_exists=_DUPLICATE)
    await db.refresh(project)
    return project


async def update_project(
    db: AsyncSession, user: User, project_uuid: UUID, data: ProjectUpdate
) -> Project:
    project = await get_project(db, user, project_uuid)
    await _check_project_type(db, project.corporation_uuid, data.project_type_uuid)
    for key, value in data.model_dump().items():
        setattr(project, key, value)
    project.updated_by = user.id
    await commit_or_raise(db, already_exists=_DUPLICATE)
    await db.refresh(project)
    return project


async def delete_project(db: AsyncSession, user: User, project_uuid: UUID) -> Project:
    project = await get_project(db, user, project_uuid)
    await db.delete(project)
    await db.commit()
    return project
