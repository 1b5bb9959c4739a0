from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from procurement.auth.models import User
from procurement.core.responses import success_response
from procurement.core.validation import parse_uuid_param
from procurement.dependencies import EDITOR_ROLES, get_current_user, get_db, require_role
from procurement.sales_taxes import service
from procurement.sales_taxes.schemas import SalesTaxCreate, SalesTaxResponse, SalesTaxUpdate

router = APIRouter()


@router.get("")
async def list_sales_taxes(
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(get_current_user)],
    corporation_uuid: str | None = Query(None),
) -> dict:
    scope = parse_uuid_param(corporation_uuid, "Corporation UUID") if corporation_uuid else None
    taxes = await service.list_sales_taxes(db, current_user, scope)
    return success_response([SalesTaxResponse.model_validate(t) for t in taxes])


@router.post("")
async def create_sales_tax(
    data: SalesTaxCreate,
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(require_role(EDITOR_ROLES))],
) -> dict:
    tax = await service.create_sales_tax(db, current_user, data)
    return success_response(SalesTaxResponse.model_validate(tax), "Sales tax created successfully")


@router.get("/{tax_uuid}")
async def get_sales_tax(
    tax_uuid: UUID,
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(get_current_user)],
) -> dict:
    tax = await service.get_sales_tax(db, current_user, tax_uuid)
    return success_response(SalesTaxResponse.model_validate(tax))


@router.put("/{tax_uuid}")
async def update_sales_tax(
    tax_uuid: UUID,
    data: SalesTaxUpdate,
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(require_role(EDITOR_ROLES))],
) -> dict:
    tax = await service.update_sales_tax(db, current_user, tax_uuid, data)
    return success_response(SalesTaxResponse.model_validate(tax), "Sales tax updated successfully")


@router.delete("/{tax_uuid}")
async def delete_sales_tax(
    tax_uuid: UUID,
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(require_role(EDITOR_ROLES))],
) -> dict:
    await service.delete_sales_tax(db, current_user, tax_uuid)
    return success_response(None, "Sales tax deleted successfully")
