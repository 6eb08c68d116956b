"""Site model: one managed residential society, the unit of data isolation."""

from datetime import datetime
from enum import Enum as PyEnum
from typing import TYPE_CHECKING

from sqlalchemy import String, Integer, Numeric, Enum, DateTime
from sqlalchemy.orm import Mapped, mapped_column, relationship

from society.models.base import Base, TimestampMixin

if TYPE_CHECKING:
    from society.models.user import User


class SubscriptionTier(str, PyEnum):
    TRIAL = "trial"
    ACTIVE = "active"
    EXPIRED = "expired"


class Site(Base, TimestampMixin):
    """
    A residential society managed on the platform.

    Created by a super-admin together with its first admin user. The admin
    email is unique per site; a site cannot be deleted while users or domain
    records still reference it unless the deletion is forced.
    """

    __tablename__ = "sites"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    address: Mapped[str] = mapped_column(String(500), nullable=False)
    total_blocks: Mapped[int] = mapped_column(Integer, nullable=False)
    floors_per_block: Mapped[int] = mapped_column(Integer, nullable=False)
    units_per_floor: Mapped[int] = mapped_column(Integer, nullable=False)
    admin_name: Mapped[str] = mapped_column(String(255), nullable=False)
    admin_email: Mapped[str] = mapped_column(String(255), unique=True, nullable=False)

    # Subscription
    subscription_tier: Mapped[SubscriptionTier] = mapped_column(
        Enum(SubscriptionTier, native_enum=False, values_callable=lambda x: [e.value for e in x]),
        nullable=False,
    )
    subscription_start: Mapped[datetime] = mapped_column(DateTime, nullable=False)
    subscription_end: Mapped[datetime] = mapped_column(DateTime, nullable=False)
    subscription_fee: Mapped[float] = mapped_column(
        Numeric(precision=12, scale=2, asdecimal=False), nullable=False, default=0.0
    )

    # Relationships
    users: Mapped[list["User"]] = relationship("User", back_populates="site")

    @property
    def total_units(self) -> int:
        return self.total_blocks * self.floors_per_block * self.units_per_floor

    def __repr__(self) -> str:
        return f"<Site(id={self.id}, name='{self.name}')>"
