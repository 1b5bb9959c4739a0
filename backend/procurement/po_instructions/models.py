from sqlalchemy import Enum, String, Text, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from procurement.core.enums import RecordStatus
from procurement.database import (
    AuthorStampMixin,
    Base,
    CorporationScopedMixin,
    TimestampMixin,
    UUIDPrimaryKeyMixin,
)


class POInstruction(
    UUIDPrimaryKeyMixin, CorporationScopedMixin, TimestampMixin, AuthorStampMixin, Base
):
    """Standing text printed on a corporation's purchase orders."""

    __tablename__ = "po_instructions"
    __table_args__ = (UniqueConstraint("corporation_uuid", "po_instruction_name"),)

    po_instruction_name: Mapped[str] = mapped_column(String(255), nullable=False)
    instruction: Mapped[str] = mapped_column(Text, nullable=False)
    status: Mapped[RecordStatus] = mapped_column(
        Enum(RecordStatus), default=RecordStatus.ACTIVE, nullable=False
    )
