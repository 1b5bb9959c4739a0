from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from procurement.auth.models import User
from procurement.core.db_errors import commit_or_raise
from procurement.core.exceptions import NotFoundError
from procurement.locations.models import Location
from procurement.locations.schemas import LocationCreate, LocationUpdate

_DUPLICATE = "A location with this name already exists"


async def list_locations(db: AsyncSession) -> list[Location]:
    result = await db.execute(select(Location).order_by(Location.location_name))
    return list(result.scalars().all())


async def get_location(db: AsyncSession, location_uuid: UUID) -> Location:
    location = await db.get(Location, location_uuid)
    if location is None:
        raise NotFoundError("Location", str(location_uuid))
    return location


async def create_location(db: AsyncSession, user: User, data: LocationCreate) -> Location:
    location = Location(**data.model_dump(), created_by=user.id, updated_by=user.id)
    db.add(location)
    await commit_or_raise(db, already_exists=_DUPLICATE)
    await db.refresh(location)
    return location


async def update_location(
    db: AsyncSession, user: User, location_uuid: UUID, data: LocationUpdate
) -> Location:
    location = await get_location(db, location_uuid)
    for key, value in data.model_dump().items():
        setattr(location, key, value)
    location.updated_by = user.id
    await commit_or_raise(db, already_exists=_DUPLICATE)
    await db.refresh(location)
    return location


async def delete_location(db: AsyncSession, location_uuid: UUID) -> None:
    location = await get_location(db, location_uuid)
    await db.delete(location)
    await db.commit()
