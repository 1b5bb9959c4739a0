from uuid import UUID

from sqlalchemy import delete, exists, select
from sqlalchemy.ext.asyncio import AsyncSession

from procurement.auth.models import User
from procurement.core.db_errors import commit_or_raise
from procurement.core.exceptions import ConflictError, NotFoundError
from procurement.corporations.service import ensure_corporation_access
from procurement.projects.models import Project, ProjectType
from procurement.projects.schemas import ProjectTypeCreate, ProjectTypeUpdate

_DUPLICATE = "A project type with this name already exists"


async def list_project_types(
    db: AsyncSession, user: User, corporation_uuid: UUID
) -> list[ProjectType]:
    await ensure_corporation_access(db, user, corporation_uuid)
    result = await db.execute(
        select(ProjectType)
        .where(ProjectType.corporation_uuid == corporation_uuid)
        .order_by(ProjectType.name)
    )
    return list(result.scalars().all())


async def get_project_type(db: AsyncSession, user: User, project_type_uuid: UUID) -> ProjectType:
    project_type = await db.get(ProjectType, project_type_uuid)
    if project_type is None:
        raise NotFoundError("Project type", str(project_type_uuid))
    await ensure_corporation_access(db, user, project_type.corporation_uuid)
    return project_type


async def create_project_type(
    db: AsyncSession, user: User, data: ProjectTypeCreate
) -> ProjectType:
    await ensure_corporation_access(db, user, data.corporation_uuid)
    project_type = ProjectType(**data.model_dump(), created_by=user.id, updated_by=user.id)
    db.add(project_type)
    await commit_or_raise(db, already_exists=_DUPLICATE)
    await db.refresh(project_type)
    return project_type


async def update_project_type(
    db: AsyncSession, user: User, project_type_uuid: UUID, data: ProjectTypeUpdate
) -> ProjectType:
    project_type = await get_project_type(db, user, project_type_uuid)
    for key, value in data.model_dump().items():
        setattr(project_type, key, value)
    project_type.updated_by = user.id
    await commit_or_raise(db, already_exists=_DUPLICATE)
    await db.refresh(project_type)
    return project_type


async def delete_project_type(
    db: AsyncSession, user: User, project_type_uuid: UUID
) -> ProjectType:
    """Delete a project type unless an active project still references it.

    The usage check and the delete run as a single statement.
    """
    project_type = await get_project_type(db, user, project_type_uuid)
    in_use = exists().where(
        Project.project_type_uuid == project_type.uuid,
        Project.is_active.is_(True),
    )
    result = await db.execute(
        delete(ProjectType)
        .where(ProjectType.uuid == project_type.uuid, ~in_use)
        .execution_options(synchronize_session=False)
    )
    if result.rowcount == 0:
        still_there = await db.scalar(
            select(ProjectType.uuid).where(ProjectType.uuid == project_type.uuid)
        )
        if still_there is None:
            raise NotFoundError("Project type", str(project_type_uuid))
        raise ConflictError(
            "Cannot delete project type. It is currently being used by active projects."
        )
    await db.commit()
    db.expunge(project_type)
    return project_type
