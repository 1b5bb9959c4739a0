from uuid import UUID

from sqlalchemy import Enum, Float, ForeignKey, Index, String, UniqueConstraint, text
from sqlalchemy.orm import Mapped, mapped_column

from procurement.core.enums import RecordStatus
from procurement.database import AuthorStampMixin, Base, TimestampMixin, UUIDPrimaryKeyMixin


class SalesTax(UUIDPrimaryKeyMixin, TimestampMixin, AuthorStampMixin, Base):
    __tablename__ = "sales_taxes"
    __table_args__ = (
        UniqueConstraint("corporation_uuid", "tax_name"),
        Index(
            "uq_sales_taxes_global_name",
            "tax_name",
            unique=True,
            sqlite_where=text("corporation_uuid IS NULL"),
            postgresql_where=text("corporation_uuid IS NULL"),
        ),
    )

    corporation_uuid: Mapped[UUID | None] = mapped_column(
        ForeignKey("corporations.uuid", ondelete="CASCADE"), nullable=True, index=True
    )
    tax_name: Mapped[str] = mapped_column(String(255), nullable=False)
    tax_percentage: Mapped[float] = mapped_column(Float, nullable=False)
    status: Mapped[RecordStatus] = mapped_column(
        Enum(RecordStatus), default=RecordStatus.ACTIVE, nullable=False
    )
