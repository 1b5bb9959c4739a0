from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from procurement.auth.models import User
from procurement.core.db_errors import commit_or_raise
from procurement.core.exceptions import NotFoundError
from procurement.corporations.service import ensure_corporation_access
from procurement.po_instructions.models import POInstruction
from procurement.po_instructions.schemas import POInstructionCreate, POInstructionUpdate

_DUPLICATE = "A PO instruction with this name already exists"


async def list_po_instructions(
    db: AsyncSession, user: User, corporation_uuid: UUID
) -> list[POInstruction]:
    await ensure_corporation_access(db, user, corporation_uuid)
    result = await db.execute(
        select(POInstruction)
        .where(POInstruction.corporation_uuid == corporation_uuid)
        .order_by(POInstruction.created_at.desc())
    )
    return list(result.scalars().all())


async def get_po_instruction(db: AsyncSession, user: User, instruction_uuid: UUID) -> POInstruction:
    instruction = await db.get(POInstruction, instruction_uuid)
    if instruction is None:
        raise NotFoundError("PO instruction", str(instruction_uuid))
    await ensure_corporation_access(db, user, instruction.corporation_uuid)
    return instruction


async def create_po_instruction(
    db: AsyncSession, user: User, data: POInstructionCreate
) -> POInstruction:
    await ensure_corporation_access(db, user, data.corporation_uuid)
    instruction = POInstruction(**data.model_dump(), created_by=user.id, updated_by=user.id)
    db.add(instruction)
    await commit_or_raise(db, already_exists=_DUPLICATE)
    await db.refresh(instruction)
    return instruction


async def update_po_instruction(
    db: AsyncSession, user: User, instruction_uuid: UUID, data: POInstructionUpdate
) -> POInstruction:
    instruction = await get_po_instruction(db, user, instruction_uuid)
    for key, value in data.model_dump().items():
        setattr(instruction, key, value)
    instruction.updated_by = user.id
    await commit_or_raise(db, already_exists=_DUPLICATE)
    await db.refresh(instruction)
    return instruction


async def delete_po_instruction(db: AsyncSession, user: User, instruction_uuid: UUID) -> None:
    instruction = await get_po_instruction(db, user, instruction_uuid)
    await db.delete(instruction)
    await db.commit()
