from sqlalchemy import Boolean, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from procurement.database import AuthorStampMixin, Base, TimestampMixin, UUIDPrimaryKeyMixin


class TermsAndConditions(UUIDPrimaryKeyMixin, TimestampMixin, AuthorStampMixin, Base):
    __tablename__ = "terms_and_conditions"

    name: Mapped[str] = mapped_column(String(255), unique=True, nullable=False)
    content: Mapped[str] = mapped_column(Text, nullable=False)
    is_active: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)
