from datetime import date
from enum import Enum as PyEnum
from typing import TYPE_CHECKING

from sqlalchemy import String, Integer, ForeignKey, Enum, Date
from sqlalchemy.orm import Mapped, mapped_column, relationship

from society.models.base import Base, TimestampMixin
from society.models.role import Role

if TYPE_CHECKING:
    from society.models.site import Site


class ResidencyType(str, PyEnum):
    OWNER = "owner"
    TENANT = "tenant"


class User(Base, TimestampMixin):
    """
    Identity record for every principal that can log in.

    Email is unique across all sites. ``site_id`` is the tenant the user is
    bound to; it is NULL only for super-admins. Users are never hard-deleted.
    """

    __tablename__ = "users"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    email: Mapped[str] = mapped_column(String(255), unique=True, nullable=False, index=True)
    password_hash: Mapped[str] = mapped_column(String(255), nullable=False)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    role: Mapped[Role] = mapped_column(
        Enum(Role, native_enum=False, values_callable=lambda x: [e.value for e in x]),
        nullable=False,
    )
    flat_number: Mapped[str | None] = mapped_column(String(50), nullable=True, index=True)
    phone: Mapped[str | None] = mapped_column(String(50), nullable=True)
    residency_type: Mapped[ResidencyType | None] = mapped_column(
        Enum(ResidencyType, native_enum=False, values_callable=lambda x: [e.value for e in x]),
        nullable=True,
    )
    date_of_birth: Mapped[date | None] = mapped_column(Date, nullable=True)
    avatar: Mapped[str | None] = mapped_column(String(500), nullable=True)
    site_id: Mapped[int | None] = mapped_column(
        Integer, ForeignKey("sites.id"), nullable=True, index=True
    )

    # Relationships
    site: Mapped["Site | None"] = relationship("Site", back_populates="users")

    def __repr__(self) -> str:
        return f"<User(id={self.id}, email='{self.email}', role={self.role.value})>"
