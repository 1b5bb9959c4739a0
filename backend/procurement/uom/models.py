from sqlalchemy import Enum, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from procurement.core.enums import RecordStatus
from procurement.database import (
    AuthorStampMixin,
    Base,
    CorporationScopedMixin,
    TimestampMixin,
    UUIDPrimaryKeyMixin,
)


class UnitOfMeasure(
    UUIDPrimaryKeyMixin, CorporationScopedMixin, TimestampMixin, AuthorStampMixin, Base
):
    __tablename__ = "units_of_measure"
    __table_args__ = (
        UniqueConstraint("corporation_uuid", "uom_name"),
        UniqueConstraint("corporation_uuid", "short_name"),
    )

    uom_name: Mapped[str] = mapped_column(String(100), nullable=False)
    short_name: Mapped[str] = mapped_column(String(20), nullable=False)
    status: Mapped[RecordStatus] = mapped_column(
        Enum(RecordStatus), default=RecordStatus.ACTIVE, nullable=False
    )
