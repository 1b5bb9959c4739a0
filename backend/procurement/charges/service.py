from uuid import UUID

from sqlalchemy import or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from procurement.auth.models import User
from procurement.charges.models import Charge
from procurement.charges.schemas import ChargeCreate, ChargeUpdate
from procurement.core.db_errors import commit_or_raise
from procurement.core.exceptions import NotFoundError
from procurement.corporations.service import ensure_scope_access

_DUPLICATE = "A charge with this name and type already exists"


async def list_charges(
    db: AsyncSession, user: User, corporation_uuid: UUID | None
) -> list[Charge]:
    """Global charges, plus the given corporation's own when one is passed."""
    query = select(Charge).order_by(Charge.created_at.desc())
    if corporation_uuid is None:
        query = query.where(Charge.corporation_uuid.is_(None))
    else:
        await ensure_scope_access(db, user, corporation_uuid)
        query = query.where(
            or_(Charge.corporation_uuid.is_(None), Charge.corporation_uuid == corporation_uuid)
        )
    result = await db.execute(query)
    return list(result.scalars().all())


async def get_charge(db: AsyncSession, user: User, charge_uuid: UUID) -> Charge:
    charge = await db.get(Charge, charge_uuid)
    if charge is None:
        raise NotFoundError("Charge", str(charge_uuid))
    await ensure_scope_access(db, user, charge.corporation_uuid)
    return charge


async def create_charge(db: AsyncSession, user: User, data: ChargeCreate) -> Charge:
    await ensure_scope_access(db, user, data.corporation_uuid)
    charge = Charge(**data.model_dump(), created_by=user.id, updated_by=user.id)
    db.add(charge)
    await commit_or_raise(db, already_exists=_DUPLICATE)
    await db.refresh(charge)
    return charge


async def update_charge(
    db: AsyncSession, user: User, charge_uuid: UUID, data: ChargeUpdate
) -> Charge:
    charge = await get_charge(db, user, charge_uuid)
    for key, value in data.model_dump().items():
        setattr(charge, key, value)
    charge.updated_by = user.id
    await commit_or_raise(db, already_exists=_DUPLICATE)
    await db.refresh(charge)
    return charge


async def delete_charge(db: AsyncSession, user: User, charge_uuid: UUID) -> Charge:
    charge = await get_charge(db, user, charge_uuid)
    await db.delete(charge)
    await db.commit()
    return charge
