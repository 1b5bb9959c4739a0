from datetime import datetime
from uuid import UUID

from sqlalchemy import Boolean, DateTime, Float, ForeignKey, Integer, String, Text, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from procurement.database import (
    AuthorStampMixin,
    Base,
    CorporationScopedMixin,
    TimestampMixin,
    UUIDPrimaryKeyMixin,
    utcnow,
)


class CostCodeDivision(
    UUIDPrimaryKeyMixin, CorporationScopedMixin, TimestampMixin, AuthorStampMixin, Base
):
    __tablename__ = "cost_code_divisions"
    __table_args__ = (UniqueConstraint("corporation_uuid", "division_number"),)

    division_number: Mapped[str] = mapped_column(String(50), nullable=False)
    division_name: Mapped[str] = mapped_column(String(255), nullable=False)
    division_order: Mapped[int] = mapped_column(Integer, nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    is_active: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)
    exclude_in_estimates_and_reports: Mapped[bool] = mapped_column(
        Boolean, default=False, nullable=False
    )


class CostCodeConfiguration(
    UUIDPrimaryKeyMixin, CorporationScopedMixin, TimestampMixin, AuthorStampMixin, Base
):
    __tablename__ = "cost_code_configurations"
    __table_args__ = (UniqueConstraint("corporation_uuid", "cost_code_number"),)

    division_uuid: Mapped[UUID | None] = mapped_column(
        ForeignKey("cost_code_divisions.uuid"), nullable=True, index=True
    )
    parent_cost_code_uuid: Mapped[UUID | None] = mapped_column(
        ForeignKey("cost_code_configurations.uuid", ondelete="SET NULL"), nullable=True
    )
    cost_code_number: Mapped[str] = mapped_column(String(50), nullable=False)
    cost_code_name: Mapped[str] = mapped_column(String(255), nullable=False)
    order: Mapped[int | None] = mapped_column(Integer, nullable=True)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    is_active: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)

    preferred_items: Mapped[list["PreferredItem"]] = relationship(
        back_populates="configuration",
        cascade="all, delete-orphan",
        passive_deletes=True,
        order_by="PreferredItem.position",
        lazy="raise",
    )


class PreferredItem(UUIDPrimaryKeyMixin, Base):
    """An item suggested whenever the parent cost code is picked."""

    __tablename__ = "cost_code_preferred_items"

    cost_code_configuration_uuid: Mapped[UUID] = mapped_column(
        ForeignKey("cost_code_configurations.uuid", ondelete="CASCADE"), nullable=False, index=True
    )
    item_name: Mapped[str] = mapped_column(String(255), nullable=False)
    unit_price: Mapped[float] = mapped_column(Float, default=0, nullable=False)
    uom_uuid: Mapped[UUID | None] = mapped_column(
        ForeignKey("units_of_measure.uuid", ondelete="SET NULL"), nullable=True
    )
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    position: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow)

    configuration: Mapped[CostCodeConfiguration] = relationship(back_populates="preferred_items")
