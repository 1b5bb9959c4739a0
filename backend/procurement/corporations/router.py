from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from procurement.auth.models import Role, User
from procurement.core.responses import success_response
from procurement.corporations import service
from procurement.corporations.schemas import (
    CorporationCreate,
    CorporationResponse,
    CorporationUpdate,
    MemberAdd,
)
from procurement.dependencies import get_current_user, get_db, require_role

router = APIRouter()


@router.get("")
async def list_corporations(
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(get_current_user)],
) -> dict:
    corporations = await service.list_corporations(db, current_user)
    return success_response([CorporationResponse.model_validate(c) for c in corporations])


@router.post("")
async def create_corporation(
    data: CorporationCreate,
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(require_role([Role.ADMIN]))],
) -> dict:
    corporation = await service.create_corporation(db, data, current_user)
    return success_response(
        CorporationResponse.model_validate(corporation), "Corporation created successfully"
    )


@router.get("/{corporation_uuid}")
async def get_corporation(
    corporation_uuid: UUID,
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(get_current_user)],
) -> dict:
    corporation = await service.ensure_corporation_access(db, current_user, corporation_uuid)
    return success_response(CorporationResponse.model_validate(corporation))


@router.put("/{corporation_uuid}")
async def update_corporation(
    corporation_uuid: UUID,
    data: CorporationUpdate,
    db: Annotated[AsyncSession, Depends(get_db)],
    _: Annotated[User, Depends(require_role([Role.ADMIN]))],
) -> dict:
    corporation = await service.update_corporation(db, corporation_uuid, data)
    return success_response(
        CorporationResponse.model_validate(corporation), "Corporation updated successfully"
    )


@router.delete("/{corporation_uuid}")
async def delete_corporation(
    corporation_uuid: UUID,
    db: Annotated[AsyncSession, Depends(get_db)],
    _: Annotated[User, Depends(require_role([Role.ADMIN]))],
) -> dict:
    corporation = await service.delete_corporation(db, corporation_uuid)
    return success_response(
        None, f'Corporation "{corporation.corporation_name}" deleted successfully'
    )


@router.post("/{corporation_uuid}/members")
async def add_member(
    corporation_uuid: UUID,
    body: MemberAdd,
    db: Annotated[AsyncSession, Depends(get_db)],
    _: Annotated[User, Depends(require_role([Role.ADMIN]))],
) -> dict:
    await service.add_member(db, corporation_uuid, body.user_id)
    return success_response(
        {"corporation_uuid": corporation_uuid, "user_id": body.user_id}, "Member added"
    )


@router.delete("/{corporation_uuid}/members/{user_id}")
async def remove_member(
    corporation_uuid: UUID,
    user_id: UUID,
    db: Annotated[AsyncSession, Depends(get_db)],
    _: Annotated[User, Depends(require_role([Role.ADMIN]))],
) -> dict:
    await service.remove_member(db, corporation_uuid, user_id)
    return success_response(None, "Member removed")
