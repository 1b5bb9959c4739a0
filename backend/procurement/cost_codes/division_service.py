from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from procurement.auth.models import User
from procurement.core.db_errors import commit_or_raise
from procurement.core.exceptions import NotFoundError
from procurement.corporations.service import ensure_corporation_access
from procurement.cost_codes.models import CostCodeDivision
from procurement.cost_codes.schemas import DivisionCreate, DivisionUpdate

_DUPLICATE = "A cost code division with this number already exists"


async def list_divisions(
    db: AsyncSession, user: User, corporation_uuid: UUID
) -> list[CostCodeDivision]:
    await ensure_corporation_access(db, user, corporation_uuid)
    result = await db.execute(
        select(CostCodeDivision)
        .where(CostCodeDivision.corporation_uuid == corporation_uuid)
        .order_by(CostCodeDivision.division_order, CostCodeDivision.division_number)
    )
    return list(result.scalars().all())


async def get_division(db: AsyncSession, user: User, division_uuid: UUID) -> CostCodeDivision:
    division = await db.get(CostCodeDivision, division_uuid)
    if division is None:
        raise NotFoundError("Cost code division", str(division_uuid))
    await ensure_corporation_access(db, user, division.corporation_uuid)
    return division


async def create_division(db: AsyncSession, user: User, data: DivisionCreate) -> CostCodeDivision:
    await ensure_corporation_access(db, user, data.corporation_uuid)
    division = CostCodeDivision(**data.model_dump(), created_by=user.id, updated_by=user.id)
    db.add(division)
    await commit_or_raise(db, already_exists=_DUPLICATE)
    await db.refresh(division)
    return division


async def update_division(
    db: AsyncSession, user: User, division_uuid: UUID, data: DivisionUpdate
) -> CostCodeDivision:
    division = await get_division(db, user, division_uuid)
    for key, value in data.model_dump().items():
        setattr(division, key, value)
    division.updated_by = user.id
    await commit_or_raise(db, already_exists=_DUPLICATE)
    await db.refresh(division)
    return division


async def delete_division(db: AsyncSession, user: User, division_uuid: UUID) -> CostCodeDivision:
    division = await get_division(db, user, division_uuid)
    await db.delete(division)
    await commit_or_raise(
        db,
        already_exists=_DUPLICATE,
        in_use="Cannot delete cost code division. It is used by cost code configurations.",
    )
    return division
