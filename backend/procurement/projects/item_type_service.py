import logging
from uuid import UUID

from sqlalchemy import delete, exists, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import joinedload

from procurement.auth.models import User
from procurement.core.db_errors import commit_or_raise, is_unique_violation
from procurement.core.exceptions import BadRequestError, ConflictError, NotFoundError
from procurement.corporations.service import ensure_corporation_access
from procurement.projects.models import ItemType, ItemTypeUsage, Project
from procurement.projects.schemas import ItemTypeCreate, ItemTypeUpdate

logger = logging.getLogger(__name__)

_DUPLICATE = "An item type with this name or short name already exists for this project"


async def _project_in_corporation(
    db: AsyncSession, corporation_uuid: UUID, project_uuid: UUID
) -> Project:
    project = await db.get(Project, project_uuid)
    if project is None or project.corporation_uuid != corporation_uuid:
        raise BadRequestError("Project not found or does not belong to the specified corporation")
    return project


async def _load_item_type(db: AsyncSession, item_type_uuid: UUID) -> ItemType | None:
    result = await db.execute(
        select(ItemType)
        .options(joinedload(ItemType.project))
        .where(ItemType.uuid == item_type_uuid)
        .execution_options(populate_existing=True)
    )
    return result.scalar_one_or_none()


async def list_item_types(
    db: AsyncSession,
    user: User,
    corporation_uuid: UUID,
    project_uuid: UUID | None = None,
) -> list[ItemType]:
    await ensure_corporation_access(db, user, corporation_uuid)
    query = (
        select(ItemType)
        .options(joinedload(ItemType.project))
        .where(ItemType.corporation_uuid == corporation_uuid)
        .order_by(ItemType.item_type)
    )
    if project_uuid is not None:
        query = query.where(ItemType.project_uuid == project_uuid)
    result = await db.execute(query)
    return list(result.scalars().all())


async def get_item_type(db: AsyncSession, user: User, item_type_uuid: UUID) -> ItemType:
    item_type = await _load_item_type(db, item_type_uuid)
    if item_type is None:
        raise NotFoundError("Item type", str(item_type_uuid))
    await ensure_corporation_access(db, user, item_type.corporation_uuid)
    return item_type


async def create_item_type(db: AsyncSession, user: User, data: ItemTypeCreate) -> ItemType:
    """Create an item type and record that its own project uses it."""
    await ensure_corporation_access(db, user, data.corporation_uuid)
    await _project_in_corporation(db, data.corporation_uuid, data.project_uuid)

    item_type = ItemType(
        **data.model_dump(),
        usages=[ItemTypeUsage(project_uuid=data.project_uuid)],
        created_by=user.id,
        updated_by=user.id,
    )
    db.add(item_type)
    await commit_or_raise(db, already_exists=_DUPLICATE)
    return await _load_item_type(db, item_type.uuid)


async def update_item_type(
    db: AsyncSession, user: User, item_type_uuid: UUID, data: ItemTypeUpdate
) -> ItemType:
    item_type = await get_item_type(db, user, item_type_uuid)
    for key, value in data.model_dump().items():
        setattr(item_type, key, value)
    item_type.updated_by = user.id
    await commit_or_raise(db, already_exists=_DUPLICATE)
    return await _load_item_type(db, item_type_uuid)


async def record_usage(
    db: AsyncSession, user: User, item_type_uuid: UUID, project_uuid: UUID
) -> ItemType:
    """Mark ``project_uuid`` as a user of the item type. Repeating the call is a no-op."""
    item_type = await get_item_type(db, user, item_type_uuid)
    await _project_in_corporation(db, item_type.corporation_uuid, project_uuid)

    if await db.get(ItemTypeUsage, (item_type_uuid, project_uuid)) is not None:
        return item_type

    db.add(ItemTypeUsage(item_type_uuid=item_type_uuid, project_uuid=project_uuid))
    try:
        await db.commit()
    except IntegrityError as exc:
        await db.rollback()
        if not is_unique_violation(exc):
            raise
        logger.info("Usage of item type %s by %s already recorded", item_type_uuid, project_uuid)
    return await _load_item_type(db, item_type_uuid)


async def delete_item_type(db: AsyncSession, user: User, item_type_uuid: UUID) -> ItemType:
    """Delete an item type unless a project other than its own uses it.

    The usage check and the delete run as a single statement.
    """
    item_type = await get_item_type(db, user, item_type_uuid)
    used_elsewhere = exists().where(
        ItemTypeUsage.item_type_uuid == item_type.uuid,
        ItemTypeUsage.project_uuid != item_type.project_uuid,
    )
    result = await db.execute(
        delete(ItemType)
        .where(ItemType.uuid == item_type.uuid, ~used_elsewhere)
        .execution_options(synchronize_session=False)
    )
    if result.rowcount == 0:
        still_there = await db.scalar(select(ItemType.uuid).where(ItemType.uuid == item_type.uuid))
        if still_there is None:
            raise NotFoundError("Item type", str(item_type_uuid))
        raise ConflictError(
            "Cannot delete item type. It is currently being used by other projects."
        )
    await db.commit()
    db.expunge(item_type)
    logger.info("Deleted item type %s (%s)", item_type.item_type, item_type.short_name)
    return item_type
