from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from procurement.auth.models import User
from procurement.core.responses import success_response
from procurement.core.validation import parse_uuid_param
from procurement.dependencies import EDITOR_ROLES, get_current_user, get_db, require_role
from procurement.po_instructions import service
from procurement.po_instructions.schemas import (
    POInstructionCreate,
    POInstructionResponse,
    POInstructionUpdate,
)

router = APIRouter()


@router.get("")
async def list_po_instructions(
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(get_current_user)],
    corporation_uuid: str | None = Query(None),
) -> dict:
    scope = parse_uuid_param(corporation_uuid, "Corporation UUID")
    instructions = await service.list_po_instructions(db, current_user, scope)
    return success_response([POInstructionResponse.model_validate(i) for i in instructions])


@router.post("")
async def create_po_instruction(
    data: POInstructionCreate,
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(require_role(EDITOR_ROLES))],
) -> dict:
    instruction = await service.create_po_instruction(db, current_user, data)
    return success_response(
        POInstructionResponse.model_validate(instruction), "PO instruction created successfully"
    )


@router.get("/{instruction_uuid}")
async def get_po_instruction(
    instruction_uuid: UUID,
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(get_current_user)],
) -> dict:
    instruction = await service.get_po_instruction(db, current_user, instruction_uuid)
    return success_response(POInstructionResponse.model_validate(instruction))


@router.put("/{instruction_uuid}")
async def update_po_instruction(
    instruction_uuid: UUID,
    data: POInstructionUpdate,
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(require_role(EDITOR_ROLES))],
) -> dict:
    instruction = await service.update_po_instruction(db, current_user, instruction_uuid, data)
    return success_response(
        POInstructionResponse.model_validate(instruction), "PO instruction updated successfully"
    )


@router.delete("/{instruction_uuid}")
async def delete_po_instruction(
    instruction_uuid: UUID,
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(require_role(EDITOR_ROLES))],
) -> dict:
    await service.delete_po_instruction(db, current_user, instruction_uuid)
    return success_response(None, "PO instruction deleted successfully")
