import enum
from uuid import UUID

from sqlalchemy import Enum, ForeignKey, Index, String, UniqueConstraint, text
from sqlalchemy.orm import Mapped, mapped_column

from procurement.core.enums import RecordStatus
from procurement.database import AuthorStampMixin, Base, TimestampMixin, UUIDPrimaryKeyMixin


class ChargeType(str, enum.Enum):
    FREIGHT = "FREIGHT"
    PACKING = "PACKING"
    CUSTOM_DUTIES = "CUSTOM_DUTIES"
    OTHER = "OTHER"


class Charge(UUIDPrimaryKeyMixin, TimestampMixin, AuthorStampMixin, Base):
    """An extra charge line (freight, packing, duties) that can be added to a purchase order.

    Rows without a corporation are global and visible to every corporation.
    """

    __tablename__ = "charges"
    __table_args__ = (
        UniqueConstraint("corporation_uuid", "charge_name", "charge_type"),
        # NULL corporations never collide in a plain unique constraint
        Index(
            "uq_charges_global_name_type",
            "charge_name",
            "charge_type",
            unique=True,
            sqlite_where=text("corporation_uuid IS NULL"),
            postgresql_where=text("corporation_uuid IS NULL"),
        ),
    )

    corporation_uuid: Mapped[UUID | None] = mapped_column(
        ForeignKey("corporations.uuid", ondelete="CASCADE"), nullable=True, index=True
    )
    charge_name: Mapped[str] = mapped_column(String(255), nullable=False)
    charge_type: Mapped[ChargeType] = mapped_column(Enum(ChargeType), nullable=False)
    status: Mapped[RecordStatus] = mapped_column(
        Enum(RecordStatus), default=RecordStatus.ACTIVE, nullable=False
    )
