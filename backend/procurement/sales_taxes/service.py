from uuid import UUID

from sqlalchemy import or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from procurement.auth.models import User
from procurement.core.db_errors import commit_or_raise
from procurement.core.exceptions import NotFoundError
from procurement.corporations.service import ensure_scope_access
from procurement.sales_taxes.models import SalesTax
from procurement.sales_taxes.schemas import SalesTaxCreate, SalesTaxUpdate

_DUPLICATE = "A sales tax with this name already exists"


async def list_sales_taxes(
    db: AsyncSession, user: User, corporation_uuid: UUID | None
) -> list[SalesTax]:
    query = select(SalesTax).order_by(SalesTax.created_at.desc())
    if corporation_uuid is None:
        query = query.where(SalesTax.corporation_uuid.is_(None))
    else:
        await ensure_scope_access(db, user, corporation_uuid)
        query = query.where(
            or_(
                SalesTax.corporation_uuid.is_(None),
                SalesTax.corporation_uuid == corporation_uuid,
            )
        )
    result = await db.execute(query)
    return list(result.scalars().all())


async def get_sales_tax(db: AsyncSession, user: User, tax_uuid: UUID) -> SalesTax:
    tax = await db.get(SalesTax, tax_uuid)
    if tax is None:
        raise NotFoundError("Sales tax", str(tax_uuid))
    await ensure_scope_access(db, user, tax.corporation_uuid)
    return tax


async def create_sales_tax(db: AsyncSession, user: User, data: SalesTaxCreate) -> SalesTax:
    await ensure_scope_access(db, user, data.corporation_uuid)
    tax = SalesTax(**data.model_dump(), created_by=user.id, updated_by=user.id)
    db.add(tax)
    await commit_or_raise(db, already_exists=_DUPLICATE)
    await db.refresh(tax)
    return tax


async def update_sales_tax(
    db: AsyncSession, user: User, tax_uuid: UUID, data: SalesTaxUpdate
) -> SalesTax:
    tax = await get_sales_tax(db, user, tax_uuid)
    for key, value in data.model_dump().items():
        setattr(tax, key, value)
    tax.updated_by = user.id
    await commit_or_raise(db, already_exists=_DUPLICATE)
    await db.refresh(tax)
    return tax


async def delete_sales_tax(db: AsyncSession, user: User, tax_uuid: UUID) -> None:
    tax = await get_sales_tax(db, user, tax_uuid)
    await db.delete(tax)
    await db.commit()
