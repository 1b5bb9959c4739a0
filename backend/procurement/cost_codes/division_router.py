from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from procurement.auth.models import User
from procurement.core.responses import success_response
from procurement.core.validation import parse_uuid_param
from procurement.cost_codes import division_service
from procurement.cost_codes.schemas import DivisionCreate, DivisionResponse, DivisionUpdate
from procurement.dependencies import EDITOR_ROLES, get_current_user, get_db, require_role

router = APIRouter()


@router.get("")
async def list_divisions(
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(get_current_user)],
    corporation_uuid: str | None = Query(None),
) -> dict:
    scope = parse_uuid_param(corporation_uuid, "Corporation UUID")
    divisions = await division_service.list_divisions(db, current_user, scope)
    return success_response([DivisionResponse.model_validate(d) for d in divisions])


@router.post("")
async def create_division(
    data: DivisionCreate,
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(require_role(EDITOR_ROLES))],
) -> dict:
    division = await division_service.create_division(db, current_user, data)
    return success_response(
        DivisionResponse.model_validate(division), "Cost code division created successfully"
    )


@router.get("/{division_uuid}")
async def get_division(
    division_uuid: UUID,
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(get_current_user)],
) -> dict:
    division = await division_service.get_division(db, current_user, division_uuid)
    return success_response(DivisionResponse.model_validate(division))


@router.put("/{division_uuid}")
async def update_division(
    division_uuid: UUID,
    data: DivisionUpdate,
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(require_role(EDITOR_ROLES))],
) -> dict:
    division = await division_service.update_division(db, current_user, division_uuid, data)
    return success_response(
        DivisionResponse.model_validate(division), "Cost code division updated successfully"
    )


@router.delete("/{division_uuid}")
async def delete_division(
    division_uuid: UUID,
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(require_role(EDITOR_ROLES))],
) -> dict:
    await division_service.delete_division(db, current_user, division_uuid)
    return success_response(None, "Cost code division deleted successfully")
