from sqlalchemy import Boolean, String
from sqlalchemy.orm import Mapped, mapped_column

from procurement.database import AuthorStampMixin, Base, TimestampMixin, UUIDPrimaryKeyMixin


class Location(UUIDPrimaryKeyMixin, TimestampMixin, AuthorStampMixin, Base):
    """A ship-to or pick-up address."""

    __tablename__ = "locations"

    location_name: Mapped[str] = mapped_column(String(255), unique=True, nullable=False)
    address_line1: Mapped[str] = mapped_column(String(255), nullable=False)
    address_line2: Mapped[str | None] = mapped_column(String(255), nullable=True)
    city: Mapped[str | None] = mapped_column(String(100), nullable=True)
    state: Mapped[str | None] = mapped_column(String(100), nullable=True)
    zip: Mapped[str | None] = mapped_column(String(20), nullable=True)
    country: Mapped[str | None] = mapped_column(String(100), nullable=True)
    active: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)
