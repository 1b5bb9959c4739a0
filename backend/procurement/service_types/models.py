from sqlalchemy import Boolean, String, Text, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from procurement.database import (
    AuthorStampMixin,
    Base,
    CorporationScopedMixin,
    TimestampMixin,
    UUIDPrimaryKeyMixin,
)


class ServiceType(
    UUIDPrimaryKeyMixin, CorporationScopedMixin, TimestampMixin, AuthorStampMixin, Base
):
    __tablename__ = "service_types"
    __table_args__ = (UniqueConstraint("corporation_uuid", "name"),)

    name: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    is_active: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)
