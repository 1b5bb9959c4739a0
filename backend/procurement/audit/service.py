import logging
from uuid import UUID

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from procurement.audit.models import AuditLog
from procurement.audit.schemas import AuditLogCreate, AuditLogFilter
from procurement.auth.models import User
from procurement.core.pagination import PaginationParams, build_pagination_meta
from procurement.corporations.service import ensure_corporation_access

logger = logging.getLogger(__name__)


async def list_audit_logs(
    db: AsyncSession,
    user: User,
    corporation_uuid: UUID,
    filters: AuditLogFilter,
    pagination: PaginationParams,
) -> tuple[list[AuditLog], dict]:
    await ensure_corporation_access(db, user, corporation_uuid)
    query = select(AuditLog).where(AuditLog.corporation_uuid == corporation_uuid)

    if filters.entity_type:
        query = query.where(AuditLog.entity_type == filters.entity_type)
    if filters.entity_id:
        query = query.where(AuditLog.entity_id == filters.entity_id)
    if filters.action:
        query = query.where(AuditLog.action == filters.action)

    # Count
    count_query = select(func.count()).select_from(query.subquery())
    total = (await db.execute(count_query)).scalar() or 0

    # Fetch
    query = (
        query.order_by(AuditLog.created_at.desc())
        .offset(pagination.offset)
        .limit(pagination.limit)
    )
    result = await db.execute(query)
    logs = list(result.scalars().all())

    return logs, build_pagination_meta(total, pagination)


async def record_audit_log(db: AsyncSession, user: User, data: AuditLogCreate) -> AuditLog:
    await ensure_corporation_access(db, user, data.corporation_uuid)
    entry = AuditLog(**data.model_dump(), performed_by=user.id)
    db.add(entry)
    await db.commit()
    logger.info(
        "Audit %s on %s %s by %s", entry.action, entry.entity_type, entry.entity_id, user.email
    )
    return entry
