from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from procurement.auth.models import User
from procurement.core.db_errors import commit_or_raise
from procurement.core.exceptions import NotFoundError
from procurement.corporations.service import ensure_corporation_access
from procurement.uom.models import UnitOfMeasure
from procurement.uom.schemas import UOMCreate, UOMUpdate

_DUPLICATE = "A UOM with this name or short name already exists"


async def list_uoms(db: AsyncSession, user: User, corporation_uuid: UUID) -> list[UnitOfMeasure]:
    await ensure_corporation_access(db, user, corporation_uuid)
    result = await db.execute(
        select(UnitOfMeasure)
        .where(UnitOfMeasure.corporation_uuid == corporation_uuid)
        .order_by(UnitOfMeasure.created_at.desc())
    )
    return list(result.scalars().all())


async def get_uom(db: AsyncSession, user: User, uom_uuid: UUID) -> UnitOfMeasure:
    uom = await db.get(UnitOfMeasure, uom_uuid)
    if uom is None:
        raise NotFoundError("UOM", str(uom_uuid))
    await ensure_corporation_access(db, user, uom.corporation_uuid)
    return uom


async def create_uom(db: AsyncSession, user: User, data: UOMCreate) -> UnitOfMeasure:
    await ensure_corporation_access(db, user, data.corporation_uuid)
    uom = UnitOfMeasure(**data.model_dump(), created_by=user.id, updated_by=user.id)
    db.add(uom)
    await commit_or_raise(db, already_exists=_DUPLICATE)
    await db.refresh(uom)
    return uom


async def update_uom(db: AsyncSession, user: User, uom_uuid: UUID, data: UOMUpdate) -> UnitOfMeasure:
    uom = await get_uom(db, user, uom_uuid)
    for key, value in data.model_dump().items():
        setattr(uom, key, value)
    uom.updated_by = user.id
    await commit_or_raise(db, already_exists=_DUPLICATE)
    await db.refresh(uom)
    return uom


async def delete_uom(db: AsyncSession, user: User, uom_uuid: UUID) -> None:
    uom = await get_uom(db, user, uom_uuid)
    await db.delete(uom)
    await db.commit()
