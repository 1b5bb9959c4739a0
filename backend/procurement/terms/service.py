from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from procurement.auth.models import User
from procurement.core.db_errors import commit_or_raise
from procurement.core.exceptions import NotFoundError
from procurement.terms.models import TermsAndConditions
from procurement.terms.schemas import TermsCreate, TermsUpdate

_DUPLICATE = "Terms and conditions with this name already exist"


async def list_terms(db: AsyncSession) -> list[TermsAndConditions]:
    result = await db.execute(select(TermsAndConditions).order_by(TermsAndConditions.name))
    return list(result.scalars().all())


async def get_terms(db: AsyncSession, terms_uuid: UUID) -> TermsAndConditions:
    terms = await db.get(TermsAndConditions, terms_uuid)
    if terms is None:
        raise NotFoundError("Terms and conditions", str(terms_uuid))
    return terms


async def create_terms(db: AsyncSession, user: User, data: TermsCreate) -> TermsAndConditions:
    terms = TermsAndConditions(**data.model_dump(), created_by=user.id, updated_by=user.id)
    db.add(terms)
    await commit_or_raise(db, already_exists=_DUPLICATE)
    await db.refresh(terms)
    return terms


async def update_terms(
    db: AsyncSession, user: User, terms_uuid: UUID, data: TermsUpdate
) -> TermsAndConditions:
    terms = await get_terms(db, terms_uuid)
    for key, value in data.model_dump().items():
        setattr(terms, key, value)
    terms.updated_by = user.id
    await commit_or_raise(db, already_exists=_DUPLICATE)
    await db.refresh(terms)
    return terms


async def delete_terms(db: AsyncSession, terms_uuid: UUID) -> None:
    terms = await get_terms(db, terms_uuid)
    await db.delete(terms)
    await db.commit()
