from datetime import datetime
from uuid import UUID

from sqlalchemy import Boolean, DateTime, ForeignKey, String, Text, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from procurement.database import (
    AuthorStampMixin,
    Base,
    CorporationScopedMixin,
    TimestampMixin,
    UUIDPrimaryKeyMixin,
    utcnow,
)


class ProjectType(
    UUIDPrimaryKeyMixin, CorporationScopedMixin, TimestampMixin, AuthorStampMixin, Base
):
    __tablename__ = "project_types"
    __table_args__ = (UniqueConstraint("corporation_uuid", "name"),)

    name: Mapped[str] = mapped_column(String(255), nullable=False)
    short_name: Mapped[str] = mapped_column(String(50), nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    is_active: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)


class Project(UUIDPrimaryKeyMixin, CorporationScopedMixin, TimestampMixin, AuthorStampMixin, Base):
    __tablename__ = "projects"
    __table_args__ = (UniqueConstraint("corporation_uuid", "project_id"),)

    project_name: Mapped[str] = mapped_column(String(255), nullable=False)
    project_id: Mapped[str] = mapped_column(String(100), nullable=False)
    project_type_uuid: Mapped[UUID | None] = mapped_column(
        ForeignKey("project_types.uuid", ondelete="SET NULL"), nullable=True
    )
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    is_active: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)


class ItemType(UUIDPrimaryKeyMixin, CorporationScopedMixin, TimestampMixin, AuthorStampMixin, Base):
    """A project-specific item category used on purchase order lines."""

    __tablename__ = "item_types"
    __table_args__ = (
        UniqueConstraint("corporation_uuid", "project_uuid", "item_type"),
        UniqueConstraint("corporation_uuid", "project_uuid", "short_name"),
    )

    project_uuid: Mapped[UUID] = mapped_column(
        ForeignKey("projects.uuid", ondelete="CASCADE"), nullable=False, index=True
    )
    item_type: Mapped[str] = mapped_column(String(255), nullable=False)
    short_name: Mapped[str] = mapped_column(String(50), nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    is_active: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)

    project: Mapped[Project] = relationship(lazy="raise")
    usages: Mapped[list["ItemTypeUsage"]] = relationship(
        cascade="all, delete-orphan", passive_deletes=True, lazy="raise"
    )

    @property
    def project_name(self) -> str | None:
        return self.project.project_name if self.project is not None else None


class ItemTypeUsage(Base):
    """Records that a project uses an item type; blocks deletion while other projects do."""

    __tablename__ = "item_type_usages"

    item_type_uuid: Mapped[UUID] = mapped_column(
        ForeignKey("item_types.uuid", ondelete="CASCADE"), primary_key=True
    )
    project_uuid: Mapped[UUID] = mapped_column(
        ForeignKey("projects.uuid", ondelete="CASCADE"), primary_key=True
    )
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow)
