"""Translate database constraint failures into API errors."""

import logging

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from procurement.core.exceptions import AlreadyExistsError, ConflictError

logger = logging.getLogger(__name__)

UNIQUE_VIOLATION = "23505"
FOREIGN_KEY_VIOLATION = "23503"
RESTRICT_VIOLATION = "23001"


def _sqlstate(exc: IntegrityError) -> str | None:
    orig = exc.orig
    code = getattr(orig, "sqlstate", None) or getattr(orig, "pgcode", None)
    if code:
        return str(code)
    # SQLite reports constraint failures by message only
    text = str(orig)
    if "UNIQUE constraint failed" in text:
        return UNIQUE_VIOLATION
    if "FOREIGN KEY constraint failed" in text:
        return FOREIGN_KEY_VIOLATION
    return None


def is_unique_violation(exc: IntegrityError) -> bool:
    return _sqlstate(exc) == UNIQUE_VIOLATION


def is_foreign_key_violation(exc: IntegrityError) -> bool:
    return _sqlstate(exc) in (FOREIGN_KEY_VIOLATION, RESTRICT_VIOLATION)


async def commit_or_raise(
    db: AsyncSession,
    already_exists: str,
    in_use: str = "Record is referenced by other records",
) -> None:
    """Commit the session, mapping constraint violations to 400/409.

    Any other integrity failure is re-raised and ends up as a 500.
    """
    try:
        await db.commit()
    except IntegrityError as exc:
        await db.rollback()
        if is_unique_violation(exc):
            raise AlreadyExistsError(already_exists) from exc
        if is_foreign_key_violation(exc):
            raise ConflictError(in_use) from exc
        logger.exception("Unexpected integrity error")
        raise
