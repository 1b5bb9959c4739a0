from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from procurement.auth.models import User
from procurement.core.db_errors import commit_or_raise
from procurement.core.exceptions import NotFoundError
from procurement.corporations.service import ensure_corporation_access
from procurement.service_types.models import ServiceType
from procurement.service_types.schemas import ServiceTypeCreate, ServiceTypeUpdate

_DUPLICATE = "A service type with this name already exists"


async def list_service_types(
    db: AsyncSession, user: User, corporation_uuid: UUID
) -> list[ServiceType]:
    await ensure_corporation_access(db, user, corporation_uuid)
    result = await db.execute(
        select(ServiceType)
        .where(ServiceType.corporation_uuid == corporation_uuid)
        .order_by(ServiceType.name)
    )
    return list(result.scalars().all())


async def get_service_type(db: AsyncSession, user: User, service_type_uuid: UUID) -> ServiceType:
    service_type = await db.get(ServiceType, service_type_uuid)
    if service_type is None:
        raise NotFoundError("Service type", str(service_type_uuid))
    await ensure_corporation_access(db, user, service_type.corporation_uuid)
    return service_type


async def create_service_type(
    db: AsyncSession, user: User, data: ServiceTypeCreate
) -> ServiceType:
    await ensure_corporation_access(db, user, data.corporation_uuid)
    service_type = ServiceType(**data.model_dump(), created_by=user.id, updated_by=user.id)
    db.add(service_type)
    await commit_or_raise(db, already_exists=_DUPLICATE)
    await db.refresh(service_type)
    return service_type


async def update_service_type(
    db: AsyncSession, user: User, service_type_uuid: UUID, data: ServiceTypeUpdate
) -> ServiceType:
    service_type = await get_service_type(db, user, service_type_uuid)
    for key, value in data.model_dump().items():
        setattr(service_type, key, value)
    service_type.updated_by = user.id
    await commit_or_raise(db, already_exists=_DUPLICATE)
    await db.refresh(service_type)
    return service_type


async def delete_service_type(db: AsyncSession, user: User, service_type_uuid: UUID) -> None:
    service_type = await get_service_type(db, user, service_type_uuid)
    await db.delete(service_type)
    await db.commit()
