from uuid import UUID

from sqlalchemy import Boolean, ForeignKey, String
from sqlalchemy.orm import Mapped, mapped_column

from procurement.database import Base, TimestampMixin, UUIDPrimaryKeyMixin


class Corporation(UUIDPrimaryKeyMixin, TimestampMixin, Base):
    __tablename__ = "corporations"

    corporation_name: Mapped[str] = mapped_column(String(255), unique=True, nullable=False)
    legal_name: Mapped[str | None] = mapped_column(String(255), nullable=True)
    country: Mapped[str | None] = mapped_column(String(100), nullable=True)
    is_active: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)
    created_by: Mapped[UUID | None] = mapped_column(
        ForeignKey("users.id", ondelete="SET NULL"), nullable=True
    )


class CorporationMember(Base):
    """Grants a non-admin user access to one corporation's data."""

    __tablename__ = "corporation_members"

    corporation_uuid: Mapped[UUID] = mapped_column(
        ForeignKey("corporations.uuid", ondelete="CASCADE"), primary_key=True
    )
    user_id: Mapped[UUID] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"), primary_key=True
    )
