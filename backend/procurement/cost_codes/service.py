from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from procurement.auth.models import User
from procurement.core.db_errors import commit_or_raise
from procurement.core.exceptions import BadRequestError, NotFoundError
from procurement.corporations.service import ensure_corporation_access
from procurement.cost_codes.models import CostCodeConfiguration, CostCodeDivision, PreferredItem
from procurement.cost_codes.schemas import (
    ConfigurationCreate,
    ConfigurationUpdate,
    PreferredItemInput,
)
from procurement.uom.models import UnitOfMeasure

_DUPLICATE = "A cost code with this number already exists"


async def _check_references(
    db: AsyncSession,
    corporation_uuid: UUID,
    division_uuid: UUID | None,
    parent_uuid: UUID | None,
    items: list[PreferredItemInput] | None,
    own_uuid: UUID | None = None,
) -> None:
    """Referenced rows must exist and belong to the same corporation."""
    if division_uuid is not None:
        division = await db.get(CostCodeDivision, division_uuid)
        if division is None or division.corporation_uuid != corporation_uuid:
            raise BadRequestError(
                "Cost code division not found or does not belong to the specified corporation"
            )
    if parent_uuid is not None:
        if parent_uuid == own_uuid:
            raise BadRequestError("A cost code cannot be its own parent")
        parent = await db.get(CostCodeConfiguration, parent_uuid)
        if parent is None or parent.corporation_uuid != corporation_uuid:
            raise BadRequestError(
                "Parent cost code not found or does not belong to the specified corporation"
            )
    for item in items or []:
        if item.uom_uuid is None:
            continue
        uom = await db.get(UnitOfMeasure, item.uom_uuid)
        if uom is None or uom.corporation_uuid != corporation_uuid:
            raise BadRequestError("UOM not found or does not belong to the specified corporation")


def _build_items(items: list[PreferredItemInput]) -> list[PreferredItem]:
    return [PreferredItem(**item.model_dump(), position=index) for index, item in enumerate(items)]


async def _load_configuration(db: AsyncSession, config_uuid: UUID) -> CostCodeConfiguration | None:
    result = await db.execute(
        select(CostCodeConfiguration)
        .options(selectinload(CostCodeConfiguration.preferred_items))
        .where(CostCodeConfiguration.uuid == config_uuid)
        .execution_options(populate_existing=True)
    )
    return result.scalar_one_or_none()


async def list_configurations(
    db: AsyncSession, user: User, corporation_uuid: UUID
) -> list[CostCodeConfiguration]:
    await ensure_corporation_access(db, user, corporation_uuid)
    result = await db.execute(
        select(CostCodeConfiguration)
        .options(selectinload(CostCodeConfiguration.preferred_items))
        .where(CostCodeConfiguration.corporation_uuid == corporation_uuid)
        .order_by(
            CostCodeConfiguration.order.asc().nulls_last(),
            CostCodeConfiguration.cost_code_number,
        )
    )
    return list(result.scalars().all())


async def get_configuration(
    db: AsyncSession, user: User, config_uuid: UUID
) -> CostCodeConfiguration:
    config = await _load_configuration(db, config_uuid)
    if config is None:
        raise NotFoundError("Cost code configuration", str(config_uuid))
    await ensure_corporation_access(db, user, config.corporation_uuid)
    return config


async def create_configuration(
    db: AsyncSession, user: User, data: ConfigurationCreate
) -> CostCodeConfiguration:
    await ensure_corporation_access(db, user, data.corporation_uuid)
    await _check_references(
        db, data.corporation_uuid, data.division_uuid, data.parent_cost_code_uuid, data.preferred_items
    )
    fields = data.model_dump(exclude={"preferred_items"})
    config = CostCodeConfiguration(
        **fields,
        preferred_items=_build_items(data.preferred_items or []),
        created_by=user.id,
        updated_by=user.id,
    )
    db.add(config)
    await commit_or_raise(db, already_exists=_DUPLICATE)
    return await _load_configuration(db, config.uuid)


async def update_configuration(
    db: AsyncSession, user: User, config_uuid: UUID, data: ConfigurationUpdate
) -> CostCodeConfiguration:
    config = await get_configuration(db, user, config_uuid)
    await _check_references(
        db,
        config.corporation_uuid,
        data.division_uuid,
        data.parent_cost_code_uuid,
        data.preferred_items,
        own_uuid=config.uuid,
    )
    for key, value in data.model_dump(exclude={"preferred_items"}).items():
        setattr(config, key, value)
    if data.preferred_items is not None:
        config.preferred_items = _build_items(data.preferred_items)
    config.updated_by = user.id
    await commit_or_raise(db, already_exists=_DUPLICATE)
    return await _load_configuration(db, config_uuid)


async def delete_configuration(
    db: AsyncSession, user: User, config_uuid: UUID
) -> CostCodeConfiguration:
    """Delete a configuration together with its preferred items."""
    config = await get_configuration(db, user, config_uuid)
    await db.delete(config)
    await db.commit()
    return config
