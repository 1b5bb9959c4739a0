from uuid import UUID

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from procurement.auth.models import Role, User
from procurement.core.db_errors import commit_or_raise
from procurement.core.exceptions import ForbiddenError, NotFoundError
from procurement.corporations.models import Corporation, CorporationMember
from procurement.corporations.schemas import CorporationCreate, CorporationUpdate


async def get_corporation(db: AsyncSession, corporation_uuid: UUID) -> Corporation:
    corporation = await db.get(Corporation, corporation_uuid)
    if corporation is None:
        raise NotFoundError("Corporation")
    return corporation


async def is_member(db: AsyncSession, user: User, corporation_uuid: UUID) -> bool:
    membership = await db.get(CorporationMember, (corporation_uuid, user.id))
    return membership is not None


async def ensure_corporation_access(
    db: AsyncSession, user: User, corporation_uuid: UUID
) -> Corporation:
    """Resolve the scope of a request: 404 for an unknown corporation, 403 without access."""
    corporation = await get_corporation(db, corporation_uuid)
    if user.role != Role.ADMIN and not await is_member(db, user, corporation_uuid):
        raise ForbiddenError("You do not have access to this corporation")
    return corporation


async def list_corporations(db: AsyncSession, user: User) -> list[Corporation]:
    query = select(Corporation).order_by(Corporation.corporation_name)
    if user.role != Role.ADMIN:
        query = query.join(
            CorporationMember, CorporationMember.corporation_uuid == Corporation.uuid
        ).where(CorporationMember.user_id == user.id)
    result = await db.execute(query)
    return list(result.scalars().all())


async def create_corporation(
    db: AsyncSession, data: CorporationCreate, user: User
) -> Corporation:
    corporation = Corporation(**data.model_dump(), created_by=user.id)
    db.add(corporation)
    await commit_or_raise(db, already_exists="Corporation with this name already exists")

    db.add(CorporationMember(corporation_uuid=corporation.uuid, user_id=user.id))
    await db.commit()
    await db.refresh(corporation)
    return corporation


async def update_corporation(
    db: AsyncSession, corporation_uuid: UUID, data: CorporationUpdate
) -> Corporation:
    corporation = await get_corporation(db, corporation_uuid)
    for key, value in data.model_dump().items():
        setattr(corporation, key, value)
    await commit_or_raise(db, already_exists="Corporation with this name already exists")
    await db.refresh(corporation)
    return corporation


async def delete_corporation(db: AsyncSession, corporation_uuid: UUID) -> Corporation:
    corporation = await get_corporation(db, corporation_uuid)
    await db.delete(corporation)
    await db.commit()
    return corporation


async def add_member(db: AsyncSession, corporation_uuid: UUID, user_id: UUID) -> None:
    await get_corporation(db, corporation_uuid)
    if await db.get(User, user_id) is None:
        raise NotFoundError("User", str(user_id))
    if await db.get(CorporationMember, (corporation_uuid, user_id)) is None:
        db.add(CorporationMember(corporation_uuid=corporation_uuid, user_id=user_id))
        await db.commit()


async def remove_member(db: AsyncSession, corporation_uuid: UUID, user_id: UUID) -> None:
    await get_corporation(db, corporation_uuid)
    await db.execute(
        delete(CorporationMember).where(
            CorporationMember.corporation_uuid == corporation_uuid,
            CorporationMember.user_id == user_id,
        )
    )
    await db.commit()


async def ensure_scope_access(
    db: AsyncSession, user: User, corporation_uuid: UUID | None
) -> None:
    """Like ``ensure_corporation_access`` but lets global (unscoped) rows through."""
    if corporation_uuid is not None:
        await ensure_corporation_access(db, user, corporation_uuid)
