from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from procurement.auth.models import User
from procurement.core.db_errors import commit_or_raise
from procurement.core.exceptions import NotFoundError
from procurement.freight.models import ShipVia
from procurement.freight.schemas import ShipViaCreate, ShipViaUpdate


def _duplicate(name: str) -> str:
    return f'Ship via "{name}" already exists'


async def list_ship_via(db: AsyncSession) -> list[ShipVia]:
    result = await db.execute(select(ShipVia).order_by(ShipVia.created_at.desc()))
    return list(result.scalars().all())


async def get_ship_via(db: AsyncSession, ship_via_uuid: UUID) -> ShipVia:
    record = await db.get(ShipVia, ship_via_uuid)
    if record is None:
        raise NotFoundError("Ship via", str(ship_via_uuid))
    return record


async def create_ship_via(db: AsyncSession, user: User, data: ShipViaCreate) -> ShipVia:
    record = ShipVia(**data.model_dump(), created_by=user.id, updated_by=user.id)
    db.add(record)
    await commit_or_raise(db, already_exists=_duplicate(data.ship_via))
    await db.refresh(record)
    return record


async def update_ship_via(
    db: AsyncSession, user: User, ship_via_uuid: UUID, data: ShipViaUpdate
) -> ShipVia:
    record = await get_ship_via(db, ship_via_uuid)
    for key, value in data.model_dump().items():
        setattr(record, key, value)
    record.updated_by = user.id
    await commit_or_raise(db, already_exists=_duplicate(data.ship_via))
    await db.refresh(record)
    return record


async def delete_ship_via(db: AsyncSession, ship_via_uuid: UUID) -> ShipVia:
    record = await get_ship_via(db, ship_via_uuid)
    await db.delete(record)
    await db.commit()
    return record
