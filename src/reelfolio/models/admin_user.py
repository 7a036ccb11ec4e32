"""Admin accounts allowed into the CMS."""

from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column

from reelfolio.models.base import Base, TimestampMixin, new_id


class AdminUser(Base, TimestampMixin):
    __tablename__ = "admin_users"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=new_id)
    email: Mapped[str] = mapped_column(String(320), nullable=False, unique=True, index=True)
    name: Mapped[str | None] = mapped_column(String(200), nullable=True)
    password_hash: Mapped[str] = mapped_column(String(200), nullable=False)

    def __repr__(self) -> str:
        return f"<AdminUser(id={self.id!r}, email={self.email!r})>"

    def __str__(self) -> str:
        return self.email
