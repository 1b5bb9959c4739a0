from sqlalchemy import Boolean, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from procurement.database import AuthorStampMixin, Base, TimestampMixin, UUIDPrimaryKeyMixin


class ShipVia(UUIDPrimaryKeyMixin, TimestampMixin, AuthorStampMixin, Base):
    """A freight carrier or shipping method, shared by all corporations."""

    __tablename__ = "ship_via"

    ship_via: Mapped[str] = mapped_column(String(255), unique=True, nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    active: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)
