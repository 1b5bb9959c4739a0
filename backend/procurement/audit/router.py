from typing import Annotated

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from procurement.audit import service
from procurement.audit.schemas import AuditLogCreate, AuditLogFilter, AuditLogResponse
from procurement.auth.models import User
from procurement.core.pagination import PaginationParams, get_pagination
from procurement.core.responses import success_response
from procurement.core.validation import parse_uuid_param
from procurement.dependencies import EDITOR_ROLES, get_current_user, get_db, require_role

router = APIRouter()


@router.get("")
async def list_audit_logs(
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(get_current_user)],
    pagination: Annotated[PaginationParams, Depends(get_pagination)],
    corporation_uuid: str | None = Query(None),
    entity_type: str | None = Query(None),
    entity_id: str | None = Query(None),
    action: str | None = Query(None),
) -> dict:
    scope = parse_uuid_param(corporation_uuid, "corporation_uuid")
    filters = AuditLogFilter(entity_type=entity_type, entity_id=entity_id, action=action)
    logs, meta = await service.list_audit_logs(db, current_user, scope, filters, pagination)
    return success_response([AuditLogResponse.model_validate(log) for log in logs], pagination=meta)


@router.post("")
async def create_audit_log(
    data: AuditLogCreate,
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(require_role(EDITOR_ROLES))],
) -> dict:
    entry = await service.record_audit_log(db, current_user, data)
    return success_response(AuditLogResponse.model_validate(entry), "Audit log recorded")
