from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from procurement.auth.models import User
from procurement.core.responses import success_response
from procurement.dependencies import EDITOR_ROLES, get_current_user, get_db, require_role
from procurement.terms import service
from procurement.terms.schemas import TermsCreate, TermsResponse, TermsUpdate

router = APIRouter()


@router.get("")
async def list_terms(
    db: Annotated[AsyncSession, Depends(get_db)],
    _: Annotated[User, Depends(get_current_user)],
) -> dict:
    terms = await service.list_terms(db)
    return success_response([TermsResponse.model_validate(t) for t in terms])


@router.post("")
async def create_terms(
    data: TermsCreate,
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(require_role(EDITOR_ROLES))],
) -> dict:
    terms = await service.create_terms(db, current_user, data)
    return success_response(
        TermsResponse.model_validate(terms), "Terms and conditions created successfully"
    )


@router.get("/{terms_uuid}")
async def get_terms(
    terms_uuid: UUID,
    db: Annotated[AsyncSession, Depends(get_db)],
    _: Annotated[User, Depends(get_current_user)],
) -> dict:
    terms = await service.get_terms(db, terms_uuid)
    return success_response(TermsResponse.model_validate(terms))


@router.put("/{terms_uuid}")
async def update_terms(
    terms_uuid: UUID,
    data: TermsUpdate,
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(require_role(EDITOR_ROLES))],
) -> dict:
    terms = await service.update_terms(db, current_user, terms_uuid, data)
    return success_response(
        TermsResponse.model_validate(terms), "Terms and conditions updated successfully"
    )


@router.delete("/{terms_uuid}")
async def delete_terms(
    terms_uuid: UUID,
    db: Annotated[AsyncSession, Depends(get_db)],
    _: Annotated[User, Depends(require_role(EDITOR_ROLES))],
) -> dict:
    await service.delete_terms(db, terms_uuid)
    return success_response(None, "Terms and conditions deleted successfully")
